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
"""Interface of a REST client context."""
from __future__ import annotations

__all__: list[str] = ["Client"]

import typing

if typing.TYPE_CHECKING:
    from .. import channels
    from .. import guilds
    from .. import messages
    from .. import overwrites
    from .. import snowflakes
    from . import marshaller as marshaller_api
    from . import rest as rest_api
    from . import store as store_api


@typing.runtime_checkable
class Client(typing.Protocol):
    """Interface of a client context.

    A client owns everything one session needs: the REST client, the
    marshaller and the entity store. Nothing is shared between clients.
    """

    __slots__ = ()

    @property
    def is_running(self) -> bool:
        """Whether the client is running.

        Returns
        -------
        bool
            Whether the client is running.
        """
        raise NotImplementedError

    @property
    def marshaller(self) -> marshaller_api.Marshaller:
        """The marshaller instance used by this client.

        Returns
        -------
        kaiwa.api.marshaller.Marshaller
            The marshaller used by this client.
        """
        raise NotImplementedError

    @property
    def permissions(self) -> overwrites.OverwriteResolver:
        """The permission resolver used by this client.

        Returns
        -------
        kaiwa.overwrites.OverwriteResolver
            The permission resolver used by this client.
        """
        raise NotImplementedError

    @property
    def rest(self) -> rest_api.RestClient:
        """The REST client instance used by this client.

        Returns
        -------
        kaiwa.api.rest.RestClient
            The REST client used by this client.
        """
        raise NotImplementedError

    @property
    def store(self) -> store_api.EntityStore:
        """The entity store used by this client.

        Returns
        -------
        kaiwa.api.store.EntityStore
            The entity store used by this client.
        """
        raise NotImplementedError

    async def join(self) -> None:
        """Wait until the client stops running.

        Raises
        ------
        RuntimeError
            If the client isn't running.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Stop the client and wait for it to finish closing.

        Raises
        ------
        RuntimeError
            If the client isn't running.
        """
        raise NotImplementedError

    async def run(self) -> None:
        """Start the client and run until :meth:`close` is called."""
        raise NotImplementedError

    async def fetch_guild(self, guild_id: snowflakes.SnowflakeIsh, /) -> guilds.Guild:
        raise NotImplementedError

    async def fetch_channel(self, channel_id: snowflakes.SnowflakeIsh, /) -> channels.Channel:
        raise NotImplementedError

    async def fetch_message(
        self, channel_id: snowflakes.SnowflakeIsh, message_id: snowflakes.SnowflakeIsh, /
    ) -> messages.Message:
        raise NotImplementedError
