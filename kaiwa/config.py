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
"""Configuration for the entity caches."""
from __future__ import annotations

__all__: list[str] = ["DEFAULT_MESSAGE_RETENTION", "DEFAULT_SWEEP_INTERVAL", "CacheConfig"]

import dataclasses
import time
import typing

from . import cache

if typing.TYPE_CHECKING:
    from . import messages
    from . import snowflakes

DEFAULT_MESSAGE_RETENTION: typing.Final[float] = 300.0
"""How long, in seconds, a message stays cached by default."""

DEFAULT_SWEEP_INTERVAL: typing.Final[float] = 300.0
"""Seconds between message cache sweeps by default."""


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class CacheConfig:
    """Settings for the caches owned by an entity store."""

    message_retention: float = DEFAULT_MESSAGE_RETENTION
    """Messages older than this many seconds are removed on the next sweep."""

    sweep_interval: float = DEFAULT_SWEEP_INTERVAL
    """Seconds between sweeps of each channel's message cache."""

    clock: cache.ClockSig = time.monotonic
    """Clock used to stamp and age cache entries."""

    def __post_init__(self) -> None:
        if self.message_retention < 0:
            raise ValueError("message_retention can't be negative")

        if self.sweep_interval <= 0:
            raise ValueError("sweep_interval must be greater than 0")

    def build_message_cache(self) -> cache.SweepingCache[snowflakes.Snowflake, messages.Message]:
        """Create an unstarted message cache which evicts by age."""
        return cache.SweepingCache(
            filter=cache.max_age(self.message_retention, clock=self.clock),
            interval=self.sweep_interval,
            clock=self.clock,
        )
