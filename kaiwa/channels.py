# -*- coding: utf-8 -*-
# cython: language_level=3
# BSD 3-Clause License
#
# Copyright (c) 2021, Faster Speeding
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of the copyright holder nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Channel entities and their permission overwrites."""
from __future__ import annotations

__all__: list[str] = ["Channel", "ChannelType", "OverwriteType", "PermissionOverwrite", "PrivacyLevel", "StageInstance"]

import dataclasses
import enum
import typing

from . import config
from . import overwrites
from . import permissions

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from . import cache
    from . import guilds
    from . import messages
    from . import snowflakes
    from .api import store as store_api


class ChannelType(enum.IntEnum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_NEWS = 5
    GUILD_STORE = 6
    GUILD_NEWS_THREAD = 10
    GUILD_PUBLIC_THREAD = 11
    GUILD_PRIVATE_THREAD = 12
    GUILD_STAGE_VOICE = 13
    GUILD_DIRECTORY = 14
    GUILD_FORUM = 15


class OverwriteType(enum.IntEnum):
    """What kind of subject a permission overwrite targets."""

    ROLE = 0
    MEMBER = 1


class PrivacyLevel(enum.IntEnum):
    PUBLIC = 1
    GUILD_ONLY = 2


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class PermissionOverwrite:
    """Channel-level grants and denials for a single role or member."""

    id: snowflakes.Snowflake
    """ID of the role or member this overwrite targets."""

    type: OverwriteType
    allow: permissions.BitmaskSet = dataclasses.field(default_factory=permissions.BitmaskSet)
    deny: permissions.BitmaskSet = dataclasses.field(default_factory=permissions.BitmaskSet)

    def apply(self, current: permissions.BitmaskSet, /) -> permissions.BitmaskSet:
        """Apply this overwrite to a mask: ``(current AND NOT deny) OR allow``."""
        return current.difference(self.deny).union(self.allow)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class StageInstance:
    id: snowflakes.Snowflake
    guild_id: snowflakes.Snowflake
    channel_id: snowflakes.Snowflake
    topic: str
    privacy_level: PrivacyLevel
    discoverable_disabled: bool = False


def _new_message_cache() -> cache.SweepingCache[snowflakes.Snowflake, messages.Message]:
    return config.CacheConfig().build_message_cache()


@dataclasses.dataclass(slots=True, kw_only=True, eq=False)
class Channel:
    """A channel.

    The guild and parent category are only held by ID; look them up through
    an entity store with :meth:`get_guild` and :meth:`get_parent`.
    """

    id: snowflakes.Snowflake
    type: ChannelType
    guild_id: snowflakes.Snowflake | None = None
    """ID of the guild this channel is in, or :data:`None` for DM channels."""

    name: str = ""
    topic: str = ""
    position: int | None = None
    parent_id: snowflakes.Snowflake | None = None
    """ID of the parent category, if any."""

    nsfw: bool = False
    bitrate: int | None = None
    user_limit: int | None = None
    rate_limit_per_user: int | None = None
    member_count: int = 0
    """Thread member count. This stops counting at 50."""

    last_message_id: snowflakes.Snowflake | None = None
    permission_overwrites: dict[snowflakes.Snowflake, PermissionOverwrite] = dataclasses.field(default_factory=dict)
    """This channel's overwrites keyed by the ID of the role or member they target."""

    messages: cache.SweepingCache[snowflakes.Snowflake, messages.Message] = dataclasses.field(
        default_factory=_new_message_cache, repr=False
    )
    """Messages cached for this channel."""

    @property
    def default_role_overwrite(self) -> PermissionOverwrite | None:
        """The overwrite for the guild's default role, if set."""
        if self.guild_id is None:
            return None

        return self.permission_overwrites.get(self.guild_id)

    def get_overwrite(self, subject_id: int, /) -> PermissionOverwrite | None:
        return self.permission_overwrites.get(subject_id)  # type: ignore[call-overload]

    def set_overwrite(self, overwrite: PermissionOverwrite, /) -> None:
        """Add an overwrite, replacing any existing overwrite for the same ID."""
        self.permission_overwrites[overwrite.id] = overwrite

    def set_overwrites(self, overwrites_: collections.Iterable[PermissionOverwrite], /) -> None:
        """Replace all of this channel's overwrites.

        When the same ID appears more than once the last overwrite for it wins.
        """
        self.permission_overwrites = {overwrite.id: overwrite for overwrite in overwrites_}

    def remove_overwrite(self, subject_id: int, /) -> bool:
        return self.permission_overwrites.pop(subject_id, None) is not None  # type: ignore[call-overload]

    def overwrite_has_permission(
        self, subject_id: int, required: permissions.FlagIsh | collections.Iterable[permissions.FlagIsh], /
    ) -> bool:
        """Check a single overwrite for permissions.

        See :func:`kaiwa.overwrites.channel_overwrite_has_permission`; this
        doesn't resolve role or member precedence.
        """
        return overwrites.channel_overwrite_has_permission(self, subject_id, required)

    def get_guild(self, store: store_api.EntityStore, /) -> guilds.Guild | None:
        if self.guild_id is None:
            return None

        return store.get_guild(self.guild_id)

    def get_parent(self, store: store_api.EntityStore, /) -> Channel | None:
        if self.parent_id is None:
            return None

        return store.get_channel(self.parent_id)

    def is_synced(self, store: store_api.EntityStore, /) -> bool:
        """Whether this channel's overwrites match its parent category's.

        Every overwrite on this channel needs an overwrite with the same ID
        and the same allow and deny masks on the parent. Channels without a
        cached parent are never synced.
        """
        parent = self.get_parent(store)
        if parent is None:
            return False

        for overwrite in self.permission_overwrites.values():
            parent_overwrite = parent.permission_overwrites.get(overwrite.id)
            if parent_overwrite is None:
                return False

            if parent_overwrite.allow != overwrite.allow or parent_overwrite.deny != overwrite.deny:
                return False

        return True
