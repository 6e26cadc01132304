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

__all__: list[str] = ["EntityStore"]

import logging
import typing

import anyio

from .. import config
from .. import snowflakes

if typing.TYPE_CHECKING:
    import anyio.abc as anyio_abc

    from .. import cache
    from .. import channels
    from .. import guilds
    from .. import messages
    from ..api import marshaller as marshaller_api

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("kaiwa.store")


class EntityStore:
    """Entities cached for a single client.

    Guilds and channels are kept until they're deleted. Messages are kept in
    their channel's :class:`kaiwa.cache.SweepingCache` and are evicted once
    they're older than :attr:`kaiwa.config.CacheConfig.message_retention`.

    The message caches only sweep while :meth:`run` is active.
    """

    __slots__: tuple[str, ...] = ("_cache_config", "_channels", "_guilds", "_marshaller", "_task_group")

    def __init__(
        self, marshaller: marshaller_api.Marshaller, /, *, cache_config: config.CacheConfig | None = None
    ) -> None:
        self._cache_config = cache_config or config.CacheConfig()
        self._channels: dict[snowflakes.Snowflake, channels.Channel] = {}
        self._guilds: dict[snowflakes.Snowflake, guilds.Guild] = {}
        self._marshaller = marshaller
        self._task_group: anyio_abc.TaskGroup | None = None

    @property
    def cache_config(self) -> config.CacheConfig:
        return self._cache_config

    @property
    def is_running(self) -> bool:
        return self._task_group is not None

    def _start_sweeper(self, message_cache: cache.SweepingCache[typing.Any, typing.Any], /) -> None:
        if self._task_group and not message_cache.is_running:
            self._task_group.start_soon(message_cache.run)

    async def run(self) -> None:
        """Sweep every channel's message cache until :meth:`close` is called."""
        if self._task_group:
            raise RuntimeError("Already running")

        try:
            async with anyio.create_task_group() as task_group:
                self._task_group = task_group
                for channel in self._channels.values():
                    self._start_sweeper(channel.messages)

                await anyio.sleep_forever()

        finally:
            self._task_group = None

    def close(self) -> None:
        """Stop the running store and with it every message cache's sweeper.

        The caches aren't stopped for good; they start sweeping again on the
        next call to :meth:`run`.
        """
        if self._task_group:
            self._task_group.cancel_scope.cancel()

    def stop_all(self) -> None:
        """Permanently stop every cached channel's message cache."""
        for channel in self._channels.values():
            channel.messages.stop()

    # guilds

    def get_guild(self, guild_id: int, /) -> guilds.Guild | None:
        return self._guilds.get(guild_id)  # type: ignore[call-overload]

    def get_guilds(self) -> list[guilds.Guild]:
        return list(self._guilds.values())

    def insert_guild(self, payload: marshaller_api.JsonObjectT, /) -> guilds.Guild:
        """Build a guild from its payload and cache it.

        Channels included in the payload are cached too.
        """
        guild = self._marshaller.unmarshall_guild(payload)
        self._guilds[guild.id] = guild
        for channel_payload in payload.get("channels") or ():
            self.insert_channel({**channel_payload, "guild_id": channel_payload.get("guild_id") or payload["id"]})

        return guild

    def delete_guild(self, guild_id: int, /) -> guilds.Guild | None:
        """Remove a guild and every channel cached for it."""
        for channel in self.get_guild_channels(guild_id):
            self.delete_channel(channel.id)

        return self._guilds.pop(guild_id, None)  # type: ignore[call-overload]

    # channels

    def get_channel(self, channel_id: int, /) -> channels.Channel | None:
        return self._channels.get(channel_id)  # type: ignore[call-overload]

    def get_guild_channels(self, guild_id: int, /) -> list[channels.Channel]:
        return [channel for channel in self._channels.values() if channel.guild_id == guild_id]

    def insert_channel(self, payload: marshaller_api.JsonObjectT, /) -> channels.Channel:
        """Build a channel from its payload and cache it.

        A channel which is already cached keeps its message cache.
        """
        existing = self._channels.get(snowflakes.parse_snowflake(payload["id"]))
        if existing:
            message_cache = existing.messages

        else:
            message_cache = self._cache_config.build_message_cache()

        channel = self._marshaller.unmarshall_channel(payload, messages=message_cache)
        self._channels[channel.id] = channel
        if not existing:
            self._start_sweeper(message_cache)

        return channel

    def delete_channel(self, channel_id: int, /) -> channels.Channel | None:
        """Remove a channel and stop its message cache's sweeper."""
        channel = self._channels.pop(channel_id, None)  # type: ignore[call-overload]
        if channel:
            channel.messages.stop()

        return channel

    # messages

    def get_message(self, channel_id: int, message_id: int, /) -> messages.Message | None:
        if channel := self._channels.get(channel_id):  # type: ignore[call-overload]
            return channel.messages.get(message_id)

        return None

    def insert_message(self, payload: marshaller_api.JsonObjectT, /) -> messages.Message:
        """Build a message from its payload and cache it in its channel.

        Messages for channels which aren't cached are returned without being
        cached.
        """
        message = self._marshaller.unmarshall_message(payload)
        if channel := self._channels.get(message.channel_id):
            channel.messages.insert(message.id, message)
            channel.last_message_id = message.id

        else:
            _LOGGER.debug("Not caching message %s for unknown channel %s", message.id, message.channel_id)

        return message

    def delete_message(self, channel_id: int, message_id: int, /) -> bool:
        if channel := self._channels.get(channel_id):  # type: ignore[call-overload]
            return channel.messages.delete(message_id)

        return False
