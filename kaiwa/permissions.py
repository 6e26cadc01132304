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
"""Permission flags and the arbitrary-precision mask they're combined into."""
from __future__ import annotations

__all__: list[str] = ["BitmaskSet", "FlagIsh", "Permission"]

import dataclasses
import enum
import functools
import operator
import typing

from . import errors

if typing.TYPE_CHECKING:
    from collections import abc as collections


class Permission(enum.IntFlag):
    """Named permission bits.

    The flag set keeps growing so masks built from these are never assumed to
    fit into 64 bits.
    """

    NONE = 0
    CREATE_INSTANT_INVITE = 1 << 0
    KICK_MEMBERS = 1 << 1
    BAN_MEMBERS = 1 << 2
    ADMINISTRATOR = 1 << 3
    MANAGE_CHANNELS = 1 << 4
    MANAGE_GUILD = 1 << 5
    ADD_REACTIONS = 1 << 6
    VIEW_AUDIT_LOG = 1 << 7
    PRIORITY_SPEAKER = 1 << 8
    STREAM = 1 << 9
    VIEW_CHANNEL = 1 << 10
    SEND_MESSAGES = 1 << 11
    SEND_TTS_MESSAGES = 1 << 12
    MANAGE_MESSAGES = 1 << 13
    EMBED_LINKS = 1 << 14
    ATTACH_FILES = 1 << 15
    READ_MESSAGE_HISTORY = 1 << 16
    MENTION_EVERYONE = 1 << 17
    USE_EXTERNAL_EMOJIS = 1 << 18
    VIEW_GUILD_INSIGHTS = 1 << 19
    CONNECT = 1 << 20
    SPEAK = 1 << 21
    MUTE_MEMBERS = 1 << 22
    DEAFEN_MEMBERS = 1 << 23
    MOVE_MEMBERS = 1 << 24
    USE_VAD = 1 << 25
    CHANGE_NICKNAME = 1 << 26
    MANAGE_NICKNAMES = 1 << 27
    MANAGE_ROLES = 1 << 28
    MANAGE_WEBHOOKS = 1 << 29
    MANAGE_EMOJIS = 1 << 30
    USE_SLASH_COMMANDS = 1 << 31
    REQUEST_TO_SPEAK = 1 << 32
    MANAGE_EVENTS = 1 << 33
    MANAGE_THREADS = 1 << 34
    CREATE_PUBLIC_THREADS = 1 << 35
    CREATE_PRIVATE_THREADS = 1 << 36
    USE_EXTERNAL_STICKERS = 1 << 37
    SEND_MESSAGES_IN_THREADS = 1 << 38
    USE_EMBEDDED_ACTIVITIES = 1 << 39
    MODERATE_MEMBERS = 1 << 40
    VIEW_CREATOR_MONETIZATION_ANALYTICS = 1 << 41
    USE_SOUNDBOARD = 1 << 42
    CREATE_GUILD_EXPRESSIONS = 1 << 43
    CREATE_EVENTS = 1 << 44
    USE_EXTERNAL_SOUNDS = 1 << 45
    SEND_VOICE_MESSAGES = 1 << 46
    SEND_POLLS = 1 << 49
    USE_EXTERNAL_APPS = 1 << 50

    @classmethod
    def all(cls) -> Permission:
        """Every known permission flag."""
        return functools.reduce(operator.or_, cls.__members__.values(), cls.NONE)


FlagIsh: typing.TypeAlias = "BitmaskSet | Permission | int | str"
"""A mask, a named flag, a raw integer or a flag name such as ``"SEND_MESSAGES"``."""


def _flag_value(flag: FlagIsh, /) -> int:
    if isinstance(flag, BitmaskSet):
        return flag.value

    if isinstance(flag, str):
        try:
            return Permission[flag.upper()].value

        except KeyError:
            raise errors.ParseError(f"Unknown permission {flag!r}", flag) from None

    if flag < 0:
        raise errors.ParseError("Permission masks can't be negative", flag)

    return int(flag)


@dataclasses.dataclass(frozen=True, slots=True)
class BitmaskSet:
    """An immutable set of permission bits of arbitrary width.

    This is backed by a Python :class:`int` so flags past bit 63 are never
    truncated. :func:`str` gives the decimal wire form which
    :meth:`BitmaskSet.parse` reads back exactly.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise errors.ParseError(
                f"Expected an int, got {type(self.value).__name__}; use BitmaskSet.parse for strings", self.value
            )

        if self.value < 0:
            raise errors.ParseError("Permission masks can't be negative", self.value)

        if type(self.value) is not int:
            object.__setattr__(self, "value", int(self.value))

    @classmethod
    def parse(cls, raw: str, /) -> BitmaskSet:
        """Parse a decimal or ``0x`` prefixed hexadecimal mask string.

        Raises
        ------
        kaiwa.errors.ParseError
            If the string isn't a valid non-negative integer.
        """
        if not isinstance(raw, str):
            raise errors.ParseError(f"Expected a string, got {type(raw).__name__}", raw)

        text = raw.strip()
        base = 10
        if text[:2].lower() == "0x":
            text = text[2:]
            base = 16

        # int() also accepts signs and underscores which aren't valid on the wire.
        if not text or not text.isascii() or not text.isalnum():
            raise errors.ParseError(f"Invalid permission mask {raw!r}", raw)

        try:
            return cls(int(text, base))

        except ValueError:
            raise errors.ParseError(f"Invalid permission mask {raw!r}", raw) from None

    @classmethod
    def from_flags(cls, *flags: FlagIsh) -> BitmaskSet:
        """Build a mask from named flags, raw integers or other masks."""
        value = 0
        for flag in flags:
            value |= _flag_value(flag)

        return cls(value)

    @classmethod
    def all(cls) -> BitmaskSet:
        return cls(Permission.all().value)

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __contains__(self, flag: FlagIsh) -> bool:
        return self.has_all(flag)

    def __or__(self, other: FlagIsh) -> BitmaskSet:
        return self.union(other)

    def __and__(self, other: FlagIsh) -> BitmaskSet:
        return self.intersect(other)

    def __sub__(self, other: FlagIsh) -> BitmaskSet:
        return self.difference(other)

    def union(self, *others: FlagIsh) -> BitmaskSet:
        """Bitwise OR of this mask with others."""
        value = self.value
        for other in others:
            value |= _flag_value(other)

        return BitmaskSet(value)

    def intersect(self, other: FlagIsh, /) -> BitmaskSet:
        """Bitwise AND of this mask with another."""
        return BitmaskSet(self.value & _flag_value(other))

    def difference(self, other: FlagIsh, /) -> BitmaskSet:
        """This mask with every bit set in `other` cleared (``self AND NOT other``)."""
        return BitmaskSet(self.value & ~_flag_value(other))

    def has_all(self, flags: FlagIsh, /) -> bool:
        """Whether every bit set in `flags` is also set in this mask."""
        value = _flag_value(flags)
        return self.value & value == value

    def has_any(self, flags: FlagIsh, /) -> bool:
        """Whether any bit set in `flags` is also set in this mask."""
        return self.value & _flag_value(flags) != 0

    def iter_flags(self) -> collections.Iterator[Permission]:
        """Iterate over the known named flags which are set in this mask."""
        for flag in Permission:
            if flag.value and self.value & flag.value == flag.value:
                yield flag
