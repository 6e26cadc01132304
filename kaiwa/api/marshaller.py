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
"""Interface of the payload marshaller."""
from __future__ import annotations

__all__: list[str] = ["JsonArrayT", "JsonIsh", "JsonObjectT", "Marshaller", "TopLevelJsonIsh"]

import typing

if typing.TYPE_CHECKING:
    from .. import cache
    from .. import channels
    from .. import guilds
    from .. import messages
    from .. import snowflakes
    from .. import webhooks

JsonIsh: typing.TypeAlias = "str | int | float | bool | None | list[typing.Any] | dict[str, typing.Any]"
JsonObjectT: typing.TypeAlias = "dict[str, typing.Any]"
JsonArrayT: typing.TypeAlias = "list[typing.Any]"
TopLevelJsonIsh: typing.TypeAlias = "JsonObjectT | JsonArrayT"


@typing.runtime_checkable
class Marshaller(typing.Protocol):
    """Converts between REST payloads and entity objects."""

    __slots__ = ()

    # channels

    def unmarshall_channel(
        self,
        data: JsonObjectT,
        /,
        *,
        messages: cache.SweepingCache[snowflakes.Snowflake, messages.Message] | None = None,
    ) -> channels.Channel:
        """Build a channel from its payload.

        Parameters
        ----------
        data
            The channel payload.

        Other Parameters
        ----------------
        messages
            Message cache to attach to the channel. A new unstarted cache is
            created if this isn't passed.
        """
        raise NotImplementedError

    def unmarshall_overwrite(self, data: JsonObjectT, /) -> channels.PermissionOverwrite:
        raise NotImplementedError

    def marshall_overwrite(self, overwrite: channels.PermissionOverwrite, /) -> JsonObjectT:
        raise NotImplementedError

    def unmarshall_stage_instance(self, data: JsonObjectT, /) -> channels.StageInstance:
        raise NotImplementedError

    # guilds

    def unmarshall_guild(self, data: JsonObjectT, /) -> guilds.Guild:
        raise NotImplementedError

    def unmarshall_role(self, data: JsonObjectT, /) -> guilds.Role:
        raise NotImplementedError

    # messages

    def unmarshall_message(self, data: JsonObjectT, /) -> messages.Message:
        raise NotImplementedError

    # webhooks

    def unmarshall_webhook(self, data: JsonObjectT, /) -> webhooks.Webhook:
        raise NotImplementedError
