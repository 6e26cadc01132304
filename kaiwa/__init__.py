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
"""An asynchronous REST client for Discord-style chat platforms.

Remote guilds, channels and messages are modelled as local objects. Messages
are cached per channel with periodic age-based eviction, and channel
permission overwrites can be resolved into effective permissions.
"""
from __future__ import annotations

__all__: list[str] = [
    "BitmaskSet",
    "CacheConfig",
    "CacheEntry",
    "Channel",
    "ChannelType",
    "Client",
    "EntityStore",
    "Guild",
    "HTTPResponseError",
    "KaiwaError",
    "Message",
    "OverwriteResolver",
    "OverwriteType",
    "ParseError",
    "Permission",
    "PermissionOverwrite",
    "RestClient",
    "Role",
    "Snowflake",
    "SweepingCache",
    "TransportError",
    "channel_overwrite_has_permission",
    "compute_base_permissions",
    "format_snowflake",
    "parse_snowflake",
    "resolve_permissions",
]

__version__: str = "0.1.0"

from .cache import CacheEntry
from .cache import SweepingCache
from .channels import Channel
from .channels import ChannelType
from .channels import OverwriteType
from .channels import PermissionOverwrite
from .config import CacheConfig
from .errors import HTTPResponseError
from .errors import KaiwaError
from .errors import ParseError
from .errors import TransportError
from .guilds import Guild
from .guilds import Role
from .impl.client import Client
from .impl.rest import RestClient
from .impl.store import EntityStore
from .messages import Message
from .overwrites import OverwriteResolver
from .overwrites import channel_overwrite_has_permission
from .overwrites import compute_base_permissions
from .overwrites import resolve_permissions
from .permissions import BitmaskSet
from .permissions import Permission
from .snowflakes import Snowflake
from .snowflakes import format_snowflake
from .snowflakes import parse_snowflake
