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

__all__: list[str] = ["Marshaller"]

import typing

import ciso8601

from .. import channels
from .. import config
from .. import guilds
from .. import messages
from .. import permissions
from .. import snowflakes
from .. import webhooks

if typing.TYPE_CHECKING:
    import datetime

    from .. import cache
    from ..api import marshaller as marshaller_api

_OVERWRITE_TYPE_NAMES: typing.Final[dict[str, channels.OverwriteType]] = {
    "role": channels.OverwriteType.ROLE,
    "member": channels.OverwriteType.MEMBER,
}


def _get_snowflake(data: marshaller_api.JsonObjectT, key: str, /) -> snowflakes.Snowflake | None:
    if (raw := data.get(key)) is not None:
        return snowflakes.parse_snowflake(raw)

    return None


def _get_timestamp(data: marshaller_api.JsonObjectT, key: str, /) -> datetime.datetime | None:
    if raw := data.get(key):
        return ciso8601.parse_datetime(raw)

    return None


def _parse_overwrite_type(raw: int | str, /) -> channels.OverwriteType:
    if isinstance(raw, str):
        return _OVERWRITE_TYPE_NAMES[raw]

    return channels.OverwriteType(raw)


class Marshaller:
    __slots__: tuple[str, ...] = ("_cache_config",)

    def __init__(self, *, cache_config: config.CacheConfig | None = None) -> None:
        self._cache_config = cache_config or config.CacheConfig()

    # channels

    def unmarshall_channel(
        self,
        data: marshaller_api.JsonObjectT,
        /,
        *,
        messages: cache.SweepingCache[snowflakes.Snowflake, messages.Message] | None = None,
    ) -> channels.Channel:
        channel = channels.Channel(
            id=snowflakes.parse_snowflake(data["id"]),
            type=channels.ChannelType(data["type"]),
            guild_id=_get_snowflake(data, "guild_id"),
            name=data.get("name") or "",
            topic=data.get("topic") or "",
            position=data.get("position"),
            parent_id=_get_snowflake(data, "parent_id"),
            nsfw=bool(data.get("nsfw")),
            bitrate=data.get("bitrate"),
            user_limit=data.get("user_limit"),
            rate_limit_per_user=data.get("rate_limit_per_user"),
            member_count=data.get("member_count") or 0,
            last_message_id=_get_snowflake(data, "last_message_id"),
            messages=messages if messages is not None else self._cache_config.build_message_cache(),
        )
        channel.set_overwrites(map(self.unmarshall_overwrite, data.get("permission_overwrites") or ()))
        return channel

    def unmarshall_overwrite(self, data: marshaller_api.JsonObjectT, /) -> channels.PermissionOverwrite:
        return channels.PermissionOverwrite(
            id=snowflakes.parse_snowflake(data["id"]),
            type=_parse_overwrite_type(data["type"]),
            allow=permissions.BitmaskSet.parse(data.get("allow") or "0"),
            deny=permissions.BitmaskSet.parse(data.get("deny") or "0"),
        )

    def marshall_overwrite(self, overwrite: channels.PermissionOverwrite, /) -> marshaller_api.JsonObjectT:
        return {
            "id": snowflakes.format_snowflake(overwrite.id),
            "type": int(overwrite.type),
            "allow": str(overwrite.allow),
            "deny": str(overwrite.deny),
        }

    def unmarshall_stage_instance(self, data: marshaller_api.JsonObjectT, /) -> channels.StageInstance:
        return channels.StageInstance(
            id=snowflakes.parse_snowflake(data["id"]),
            guild_id=snowflakes.parse_snowflake(data["guild_id"]),
            channel_id=snowflakes.parse_snowflake(data["channel_id"]),
            topic=data["topic"],
            privacy_level=channels.PrivacyLevel(data["privacy_level"]),
            discoverable_disabled=bool(data.get("discoverable_disabled")),
        )

    # guilds

    def unmarshall_guild(self, data: marshaller_api.JsonObjectT, /) -> guilds.Guild:
        roles = (self.unmarshall_role(role) for role in data.get("roles") or ())
        return guilds.Guild(
            id=snowflakes.parse_snowflake(data["id"]),
            name=data["name"],
            owner_id=snowflakes.parse_snowflake(data["owner_id"]),
            roles={role.id: role for role in roles},
        )

    def unmarshall_role(self, data: marshaller_api.JsonObjectT, /) -> guilds.Role:
        return guilds.Role(
            id=snowflakes.parse_snowflake(data["id"]),
            name=data["name"],
            permissions=permissions.BitmaskSet.parse(data.get("permissions") or "0"),
            position=data.get("position", 0),
            color=data.get("color", 0),
            hoist=bool(data.get("hoist")),
            managed=bool(data.get("managed")),
            mentionable=bool(data.get("mentionable")),
        )

    # messages

    def unmarshall_message(self, data: marshaller_api.JsonObjectT, /) -> messages.Message:
        return messages.Message(
            id=snowflakes.parse_snowflake(data["id"]),
            channel_id=snowflakes.parse_snowflake(data["channel_id"]),
            guild_id=_get_snowflake(data, "guild_id"),
            author_id=snowflakes.parse_snowflake(data["author"]["id"]),
            content=data.get("content", ""),
            timestamp=ciso8601.parse_datetime(data["timestamp"]),
            edited_timestamp=_get_timestamp(data, "edited_timestamp"),
            pinned=bool(data.get("pinned")),
        )

    # webhooks

    def unmarshall_webhook(self, data: marshaller_api.JsonObjectT, /) -> webhooks.Webhook:
        return webhooks.Webhook(
            id=snowflakes.parse_snowflake(data["id"]),
            type=webhooks.WebhookType(data["type"]),
            channel_id=_get_snowflake(data, "channel_id"),
            guild_id=_get_snowflake(data, "guild_id"),
            name=data.get("name"),
            avatar=data.get("avatar"),
            token=data.get("token"),
            application_id=_get_snowflake(data, "application_id"),
        )
