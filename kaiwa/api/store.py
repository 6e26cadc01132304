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
"""Interface of the entity store a client keeps its cached entities in."""
from __future__ import annotations

__all__: list[str] = ["EntityStore"]

import typing

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from .. import channels
    from .. import guilds
    from .. import messages


@typing.runtime_checkable
class EntityStore(typing.Protocol):
    __slots__ = ()

    def get_guild(self, guild_id: int, /) -> guilds.Guild | None:
        """Get a cached guild.

        Returns
        -------
        kaiwa.guilds.Guild | None
            The guild, or :data:`None` if it isn't cached.
        """
        raise NotImplementedError

    def get_channel(self, channel_id: int, /) -> channels.Channel | None:
        """Get a cached channel.

        Returns
        -------
        kaiwa.channels.Channel | None
            The channel, or :data:`None` if it isn't cached.
        """
        raise NotImplementedError

    def get_guild_channels(self, guild_id: int, /) -> collections.Sequence[channels.Channel]:
        raise NotImplementedError

    def get_message(self, channel_id: int, message_id: int, /) -> messages.Message | None:
        """Get a cached message.

        Returns
        -------
        kaiwa.messages.Message | None
            The message, or :data:`None` if it or its channel isn't cached.
        """
        raise NotImplementedError
