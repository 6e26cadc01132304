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
"""Exceptions raised by kaiwa."""
from __future__ import annotations

__all__: list[str] = ["HTTPResponseError", "KaiwaError", "ParseError", "TransportError"]

import typing

if typing.TYPE_CHECKING:
    from .api import marshaller as marshaller_api


class KaiwaError(Exception):
    """Base class for all errors raised by kaiwa."""

    __slots__: tuple[str, ...] = ()


class ParseError(KaiwaError, ValueError):
    """Raised when a wire value (snowflake or bitmask string) is malformed.

    This is only fatal to the single conversion which raised it.
    """

    __slots__: tuple[str, ...] = ("value",)

    def __init__(self, message: str, value: object, /) -> None:
        super().__init__(message)
        self.value = value


class TransportError(KaiwaError):
    """Base class for errors raised while executing a REST request."""

    __slots__: tuple[str, ...] = ()


class HTTPResponseError(TransportError):
    """Raised when the REST API responds with an unexpected status code."""

    __slots__: tuple[str, ...] = ("body", "method", "route", "status")

    def __init__(
        self,
        method: str,
        route: str,
        status: int,
        body: marshaller_api.TopLevelJsonIsh | str | None,
        /,
    ) -> None:
        super().__init__(f"{method} {route} failed with status {status}")
        self.body = body
        self.method = method
        self.route = route
        self.status = status
