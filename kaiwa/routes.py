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
"""REST endpoint path builders."""
from __future__ import annotations

__all__: list[str] = [
    "channel",
    "channel_follow",
    "channel_message",
    "channel_messages",
    "channel_overwrite",
    "channel_pins",
    "channel_typing",
    "channel_webhooks",
    "guild",
    "guild_channels",
    "guild_prune",
    "stage_instance",
    "stage_instances",
]

import typing

from . import snowflakes

STAGE_INSTANCES: typing.Final[str] = "/stage-instances"


def _id(value: snowflakes.SnowflakeIsh, /) -> str:
    return snowflakes.format_snowflake(snowflakes.to_snowflake(value))


# Channels


def channel(channel_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"/channels/{_id(channel_id)}"


def channel_follow(channel_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{channel(channel_id)}/followers"


def channel_messages(channel_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{channel(channel_id)}/messages"


def channel_message(channel_id: snowflakes.SnowflakeIsh, message_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{channel_messages(channel_id)}/{_id(message_id)}"


def channel_overwrite(channel_id: snowflakes.SnowflakeIsh, overwrite_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{channel(channel_id)}/permissions/{_id(overwrite_id)}"


def channel_pins(channel_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{channel(channel_id)}/pins"


def channel_typing(channel_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{channel(channel_id)}/typing"


def channel_webhooks(channel_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{channel(channel_id)}/webhooks"


# Guilds


def guild(guild_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"/guilds/{_id(guild_id)}"


def guild_channels(guild_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{guild(guild_id)}/channels"


def guild_prune(guild_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{guild(guild_id)}/prune"


# Stage instances


def stage_instances() -> str:
    return STAGE_INSTANCES


def stage_instance(channel_id: snowflakes.SnowflakeIsh, /) -> str:
    return f"{STAGE_INSTANCES}/{_id(channel_id)}"
