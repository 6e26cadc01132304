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
"""Keyed cache with periodic predicate-driven eviction."""
from __future__ import annotations

__all__: list[str] = ["CacheEntry", "ClockSig", "SweepFilterSig", "SweepingCache", "max_age"]

import dataclasses
import logging
import time
import typing

import anyio

if typing.TYPE_CHECKING:
    from collections import abc as collections

_KeyT = typing.TypeVar("_KeyT")
_ValueT = typing.TypeVar("_ValueT")
_DefaultT = typing.TypeVar("_DefaultT")

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("kaiwa.cache")

ClockSig: typing.TypeAlias = "collections.Callable[[], float]"


@dataclasses.dataclass(frozen=True, slots=True)
class CacheEntry(typing.Generic[_KeyT, _ValueT]):
    """A value stored in a :class:`SweepingCache`.

    Entries are replaced, not mutated, when the same key is inserted again.
    """

    key: _KeyT
    value: _ValueT
    inserted_at: float
    """Clock reading from when the value was inserted."""


SweepFilterSig: typing.TypeAlias = "collections.Callable[[CacheEntry[typing.Any, typing.Any]], bool]"
"""Predicate which returns :data:`True` for entries a sweep should remove."""


def max_age(retention: float, /, *, clock: ClockSig = time.monotonic) -> SweepFilterSig:
    """Build a sweep filter which removes entries older than `retention` seconds.

    `clock` must be the same clock the cache stamps entries with.
    """

    def is_expired(entry: CacheEntry[typing.Any, typing.Any], /) -> bool:
        return clock() - entry.inserted_at > retention

    return is_expired


class SweepingCache(typing.Generic[_KeyT, _ValueT]):
    """A keyed container which periodically drops entries matching a filter.

    The cache doesn't decide what "stale" means: every `interval` seconds
    :meth:`run` passes each entry to `filter` and removes those it returns
    :data:`True` for. Reads and writes are synchronous and never wait on a
    sweep.

    Parameters
    ----------
    filter
        Called with each :class:`CacheEntry` during a sweep.
    interval
        Seconds between sweeps.

    Other Parameters
    ----------------
    clock
        Returns the current time in seconds; used to stamp entries.
        Defaults to :func:`time.monotonic`.
    """

    __slots__: tuple[str, ...] = ("_cancel_scope", "_clock", "_entries", "_filter", "_interval", "_is_stopped")

    def __init__(
        self,
        *,
        filter: SweepFilterSig,  # noqa: A002
        interval: float,
        clock: ClockSig = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError("Sweep interval must be greater than 0")

        self._cancel_scope: anyio.CancelScope | None = None
        self._clock = clock
        self._entries: dict[_KeyT, CacheEntry[_KeyT, _ValueT]] = {}
        self._filter = filter
        self._interval = interval
        self._is_stopped = False

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> collections.Iterator[_KeyT]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SweepingCache(entries={len(self._entries)}, interval={self._interval}, is_running={self.is_running})"

    @property
    def interval(self) -> float:
        """Seconds between sweeps."""
        return self._interval

    @property
    def is_running(self) -> bool:
        """Whether the background sweep task is active."""
        return self._cancel_scope is not None

    @property
    def is_stopped(self) -> bool:
        """Whether :meth:`stop` has been called."""
        return self._is_stopped

    def insert(self, key: _KeyT, value: _ValueT, /) -> None:
        """Insert or replace the value stored under `key`.

        This resets the entry's insertion time.
        """
        self._entries[key] = CacheEntry(key, value, self._clock())

    @typing.overload
    def get(self, key: _KeyT, /) -> _ValueT | None:
        ...

    @typing.overload
    def get(self, key: _KeyT, /, default: _DefaultT) -> _ValueT | _DefaultT:
        ...

    def get(self, key: _KeyT, /, default: _DefaultT | None = None) -> _ValueT | _DefaultT | None:
        """Get the value stored under `key`, or `default` if there's none."""
        if (entry := self._entries.get(key)) is not None:
            return entry.value

        return default

    def get_entry(self, key: _KeyT, /) -> CacheEntry[_KeyT, _ValueT] | None:
        return self._entries.get(key)

    def delete(self, key: _KeyT, /) -> bool:
        """Remove the entry stored under `key`.

        Returns
        -------
        bool
            Whether there was an entry to remove.
        """
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[CacheEntry[_KeyT, _ValueT]]:
        return list(self._entries.values())

    def values(self) -> list[_ValueT]:
        return [entry.value for entry in self._entries.values()]

    def sweep(self) -> int:
        """Run a single sweep pass.

        The filter sees each entry as it is when the pass reaches it. If the
        filter raises, that entry is kept and the pass carries on.

        Returns
        -------
        int
            How many entries were removed.
        """
        removed = 0
        for key in list(self._entries):
            entry = self._entries.get(key)
            if entry is None:
                continue

            try:
                should_remove = self._filter(entry)

            except Exception:
                _LOGGER.exception("Sweep filter raised for key %r, keeping entry", key)
                continue

            # The filter may have replaced or removed this key itself.
            if should_remove and self._entries.get(key) is entry:
                del self._entries[key]
                removed += 1

        _LOGGER.debug("Sweep removed %s entries, %s remaining", removed, len(self._entries))
        return removed

    async def run(self) -> None:
        """Sweep every interval until :meth:`stop` is called.

        This is meant to be started in a task group. It returns straight away
        if the cache has already been stopped.

        Raises
        ------
        RuntimeError
            If the sweeper is already running.
        """
        if self._cancel_scope is not None:
            raise RuntimeError("Sweeper is already running")

        if self._is_stopped:
            return

        with anyio.CancelScope() as cancel_scope:
            self._cancel_scope = cancel_scope
            try:
                while True:
                    await anyio.sleep(self._interval)
                    if self._is_stopped:
                        break

                    self.sweep()

            finally:
                self._cancel_scope = None

    def stop(self) -> None:
        """Stop automatic sweeping.

        No sweep fires after this returns. Calling it more than once does
        nothing. Reads and writes keep working.
        """
        self._is_stopped = True
        if cancel_scope := self._cancel_scope:
            self._cancel_scope = None
            cancel_scope.cancel()
