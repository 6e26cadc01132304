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
from __future__ import annotations

__all__: list[str] = ["RestClient"]

import typing

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from .. import channels
    from .. import guilds
    from .. import messages
    from .. import permissions
    from .. import snowflakes
    from .. import webhooks
    from . import marshaller as marshaller_api


@typing.runtime_checkable
class RestClient(typing.Protocol):
    __slots__ = ()

    @property
    def is_running(self) -> bool:
        """Whether the client is running."""
        raise NotImplementedError

    async def request(
        self,
        method: str,
        route: str,
        /,
        json: marshaller_api.TopLevelJsonIsh | None = None,
        *,
        query: collections.Mapping[str, str] | None = None,
        reason: str | None = None,
        use_auth: bool = True,
    ) -> marshaller_api.TopLevelJsonIsh | None:
        """Execute a single request and return its decoded JSON body, if any.

        Failed responses raise :class:`kaiwa.errors.HTTPResponseError`; this
        never retries.
        """
        raise NotImplementedError

    # Channels

    async def fetch_channel(self, channel_id: snowflakes.SnowflakeIsh, /) -> channels.Channel:
        raise NotImplementedError

    async def delete_channel(self, channel_id: snowflakes.SnowflakeIsh, /, *, reason: str | None = None) -> None:
        raise NotImplementedError

    async def create_guild_channel(
        self, guild_id: snowflakes.SnowflakeIsh, /, name: str, **kwargs: typing.Any
    ) -> channels.Channel:
        raise NotImplementedError

    async def clone_channel(self, channel: channels.Channel, /, *, reason: str | None = None) -> channels.Channel:
        raise NotImplementedError

    async def trigger_typing(self, channel_id: snowflakes.SnowflakeIsh, /) -> None:
        raise NotImplementedError

    async def follow_channel(
        self, channel_id: snowflakes.SnowflakeIsh, target_channel_id: snowflakes.SnowflakeIsh, /
    ) -> snowflakes.Snowflake:
        raise NotImplementedError

    # Permission overwrites

    async def edit_channel_overwrite(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        overwrite_id: snowflakes.SnowflakeIsh,
        /,
        *,
        type: channels.OverwriteType,  # noqa: A002
        allow: permissions.FlagIsh = ...,
        deny: permissions.FlagIsh = ...,
        reason: str | None = None,
    ) -> None:
        raise NotImplementedError

    async def delete_channel_overwrite(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        overwrite_id: snowflakes.SnowflakeIsh,
        /,
        *,
        reason: str | None = None,
    ) -> None:
        raise NotImplementedError

    # Messages

    async def fetch_message(
        self, channel_id: snowflakes.SnowflakeIsh, message_id: snowflakes.SnowflakeIsh, /
    ) -> messages.Message:
        raise NotImplementedError

    async def create_message(self, channel_id: snowflakes.SnowflakeIsh, /, content: str) -> messages.Message:
        raise NotImplementedError

    async def edit_message(
        self, channel_id: snowflakes.SnowflakeIsh, message_id: snowflakes.SnowflakeIsh, /, content: str
    ) -> messages.Message:
        raise NotImplementedError

    async def delete_message(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        message_id: snowflakes.SnowflakeIsh,
        /,
        *,
        reason: str | None = None,
    ) -> None:
        raise NotImplementedError

    async def fetch_pins(self, channel_id: snowflakes.SnowflakeIsh, /) -> list[messages.Message]:
        raise NotImplementedError

    # Stage instances

    async def create_stage_instance(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        /,
        topic: str,
        *,
        privacy_level: channels.PrivacyLevel = ...,
        reason: str | None = None,
    ) -> channels.StageInstance:
        raise NotImplementedError

    async def fetch_stage_instance(self, channel_id: snowflakes.SnowflakeIsh, /) -> channels.StageInstance:
        raise NotImplementedError

    async def edit_stage_instance(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        /,
        *,
        topic: str = ...,
        privacy_level: channels.PrivacyLevel = ...,
        reason: str | None = None,
    ) -> channels.StageInstance:
        raise NotImplementedError

    async def delete_stage_instance(
        self, channel_id: snowflakes.SnowflakeIsh, /, *, reason: str | None = None
    ) -> None:
        raise NotImplementedError

    # Webhooks

    async def fetch_channel_webhooks(
        self, channel_id: snowflakes.SnowflakeIsh, /
    ) -> dict[snowflakes.Snowflake, webhooks.Webhook]:
        raise NotImplementedError

    # Guilds

    async def fetch_guild(self, guild_id: snowflakes.SnowflakeIsh, /) -> guilds.Guild:
        raise NotImplementedError

    async def fetch_guild_prune_count(
        self,
        guild_id: snowflakes.SnowflakeIsh,
        /,
        *,
        days: int = ...,
        include_roles: collections.Iterable[snowflakes.SnowflakeIsh] = (),
    ) -> int:
        raise NotImplementedError
