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
"""Guild and role entities."""
from __future__ import annotations

__all__: list[str] = ["Guild", "Role"]

import dataclasses
import typing

from . import permissions

if typing.TYPE_CHECKING:
    from . import snowflakes


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class Role:
    id: snowflakes.Snowflake
    name: str
    permissions: permissions.BitmaskSet = dataclasses.field(default_factory=permissions.BitmaskSet)
    position: int = 0
    color: int = 0
    hoist: bool = False
    managed: bool = False
    mentionable: bool = False


@dataclasses.dataclass(slots=True, kw_only=True, eq=False)
class Guild:
    id: snowflakes.Snowflake
    name: str
    owner_id: snowflakes.Snowflake
    roles: dict[snowflakes.Snowflake, Role] = dataclasses.field(default_factory=dict)

    @property
    def default_role(self) -> Role | None:
        """The role every member has. It shares the guild's ID."""
        return self.roles.get(self.id)

    def get_role(self, role_id: int, /) -> Role | None:
        return self.roles.get(role_id)  # type: ignore[call-overload]
