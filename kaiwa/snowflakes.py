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
"""Snowflake identifiers.

Snowflakes are unsigned 64-bit integers which the API sends as decimal strings.
They're held as :class:`Snowflake` (an :class:`int` subclass) and only turned back
into strings at the serialization boundary.
"""
from __future__ import annotations

__all__: list[str] = [
    "DISCORD_EPOCH",
    "MAX_SNOWFLAKE",
    "Snowflake",
    "SnowflakeIsh",
    "format_snowflake",
    "parse_snowflake",
    "to_snowflake",
]

import datetime
import re
import typing

from . import errors

DISCORD_EPOCH: typing.Final[int] = 1_420_070_400_000
"""The platform epoch in milliseconds since the Unix epoch."""

MAX_SNOWFLAKE: typing.Final[int] = (1 << 64) - 1

_SNOWFLAKE_PATTERN: typing.Final[re.Pattern[str]] = re.compile(r"0|[1-9][0-9]*")
_EPOCH_DATETIME: typing.Final[datetime.datetime] = datetime.datetime.fromtimestamp(
    DISCORD_EPOCH // 1_000, tz=datetime.timezone.utc
)
_MILLISECOND: typing.Final[datetime.timedelta] = datetime.timedelta(milliseconds=1)


class Snowflake(int):
    """A unique identifier for an entity."""

    __slots__: tuple[str, ...] = ()

    @property
    def created_at(self) -> datetime.datetime:
        """When the entity this snowflake identifies was created."""
        return _EPOCH_DATETIME + (self >> 22) * _MILLISECOND

    @classmethod
    def from_datetime(cls, timestamp: datetime.datetime, /) -> Snowflake:
        """Get the smallest snowflake which could have been created at a point in time.

        Useful as a bound when paginating by time.
        """
        milliseconds = (timestamp - _EPOCH_DATETIME) // _MILLISECOND
        if milliseconds < 0:
            raise errors.ParseError("Timestamp is before the platform epoch", timestamp)

        return cls(milliseconds << 22)

    def __repr__(self) -> str:
        return f"Snowflake({int(self)})"

    def __str__(self) -> str:
        return format_snowflake(self)


SnowflakeIsh: typing.TypeAlias = Snowflake | int | str
"""A snowflake or something which can be converted to one."""


def parse_snowflake(value: str, /) -> Snowflake:
    """Parse the decimal wire form of a snowflake.

    Only canonical decimal strings are accepted (no signs, whitespace,
    underscores or leading zeros) so that formatting the result gives back
    the exact input.

    Raises
    ------
    kaiwa.errors.ParseError
        If `value` isn't a canonical decimal string in the unsigned 64-bit range.
    """
    if not isinstance(value, str) or not _SNOWFLAKE_PATTERN.fullmatch(value):
        raise errors.ParseError(f"Invalid snowflake {value!r}", value)

    result = int(value)
    if result > MAX_SNOWFLAKE:
        raise errors.ParseError(f"Snowflake {value!r} is larger than 64 bits", value)

    return Snowflake(result)


def format_snowflake(value: int, /) -> str:
    """Format a snowflake for the wire.

    Raises
    ------
    kaiwa.errors.ParseError
        If `value` isn't in the unsigned 64-bit range.
    """
    if value < 0 or value > MAX_SNOWFLAKE:
        raise errors.ParseError(f"{int(value)} is outside the snowflake range", value)

    return str(int(value))


def to_snowflake(value: SnowflakeIsh, /) -> Snowflake:
    """Convert a snowflake-ish value to a :class:`Snowflake`."""
    if isinstance(value, Snowflake):
        return value

    if isinstance(value, str):
        return parse_snowflake(value)

    format_snowflake(value)  # range check
    return Snowflake(value)
