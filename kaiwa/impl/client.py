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

__all__: list[str] = ["Client"]

import typing

import anyio
import httpx

from .. import overwrites
from .. import routes
from ..api import client as client_api
from ..impl import marshaller as marshaller_impl
from ..impl import rest as rest_impl
from ..impl import store as store_impl

if typing.TYPE_CHECKING:
    import ssl

    from anyio import abc as anyio_abc

    from .. import channels
    from .. import config
    from .. import guilds
    from .. import messages
    from .. import snowflakes
    from ..api import marshaller as marshaller_api


class Client(client_api.Client):
    """A REST client context which owns its own caches.

    Parameters
    ----------
    token
        The bot token, or :data:`None` for a token-less client.

    Other Parameters
    ----------------
    base_url
        Base URL of the REST API.
    cache_config
        Settings for the entity store's caches.
    """

    __slots__: tuple[str, ...] = (
        "_close_scope",
        "_join_event",
        "_marshaller",
        "_permissions",
        "_rest",
        "_store",
    )

    def __init__(
        self,
        token: str | None,
        /,
        *,
        base_url: str | None = None,
        cache_config: config.CacheConfig | None = None,
    ) -> None:
        self._close_scope: anyio_abc.CancelScope | None = None
        self._join_event: anyio.Event | None = None
        self._marshaller = marshaller_impl.Marshaller(cache_config=cache_config)
        self._permissions = overwrites.OverwriteResolver()
        self._rest = rest_impl.RestClient(token, marshaller=self._marshaller, base_url=base_url)
        self._store = store_impl.EntityStore(self._marshaller, cache_config=cache_config)

    @property
    def is_running(self) -> bool:
        return self._close_scope is not None

    @property
    def marshaller(self) -> marshaller_api.Marshaller:
        return self._marshaller

    @property
    def permissions(self) -> overwrites.OverwriteResolver:
        return self._permissions

    @property
    def rest(self) -> rest_impl.RestClient:
        return self._rest

    @property
    def store(self) -> store_impl.EntityStore:
        return self._store

    async def join(self) -> None:
        if self._join_event:
            await self._join_event.wait()
            return

        raise RuntimeError("Client is not running")

    async def close(self) -> None:
        join_event = self._join_event
        if self._close_scope and join_event:
            self._store.close()
            self._close_scope.cancel()
            await join_event.wait()
            return

        raise RuntimeError("Client is not running")

    async def run(
        self,
        *,
        verify: str | bool | ssl.SSLContext = True,
        http1: bool = True,
        http2: bool = True,
        timeout: float | httpx.Timeout = httpx.Timeout(timeout=10.0),
        limits: httpx.Limits = httpx.Limits(max_connections=100, max_keepalive_connections=20),
        max_redirects: int = 20,
        trust_env: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if self._close_scope:
            raise RuntimeError("Client is already running")

        join_event = self._join_event = anyio.Event()
        self._rest.start(
            verify=verify,
            http1=http1,
            http2=http2,
            timeout=timeout,
            limits=limits,
            max_redirects=max_redirects,
            trust_env=trust_env,
            transport=transport,
        )
        try:
            async with anyio.create_task_group() as task_group:
                self._close_scope = task_group.cancel_scope
                task_group.start_soon(self._store.run)

        finally:
            self._close_scope = None
            with anyio.CancelScope(shield=True):
                await self._rest.close()

            self._join_event = None
            join_event.set()

    def run_blocking(self, *, backend: str = "asyncio") -> None:
        anyio.run(self.run, backend=backend)

    # Fetch and cache

    async def fetch_guild(self, guild_id: snowflakes.SnowflakeIsh, /) -> guilds.Guild:
        """Fetch a guild over REST and cache it."""
        payload = await self._rest.get(routes.guild(guild_id))
        assert isinstance(payload, dict)
        return self._store.insert_guild(payload)

    async def fetch_channel(self, channel_id: snowflakes.SnowflakeIsh, /) -> channels.Channel:
        """Fetch a channel over REST and cache it."""
        payload = await self._rest.get(routes.channel(channel_id))
        assert isinstance(payload, dict)
        return self._store.insert_channel(payload)

    async def fetch_message(
        self, channel_id: snowflakes.SnowflakeIsh, message_id: snowflakes.SnowflakeIsh, /
    ) -> messages.Message:
        """Fetch a message over REST and cache it if its channel is cached."""
        payload = await self._rest.get(routes.channel_message(channel_id, message_id))
        assert isinstance(payload, dict)
        return self._store.insert_message(payload)
