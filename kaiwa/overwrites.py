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
"""Effective permission calculation from channel permission overwrites.

Overwrites are applied in tiers, lowest first:

1. the guild's base permissions for the subject;
2. the overwrite for the guild's default role;
3. the overwrites for every role the subject holds, combined;
4. the overwrite for the member themself.

Each tier clears its denied bits then sets its allowed bits, so a higher tier
always wins over a lower one and bits a tier doesn't mention are inherited.

Within a tier allow wins over deny: a bit both allowed and denied by one
overwrite ends up allowed. The role tier ORs the allow and deny masks of
every held role first, so a bit allowed by any one role is allowed even if
another role denies it.
"""
from __future__ import annotations

__all__: list[str] = [
    "OverwriteResolver",
    "channel_overwrite_has_permission",
    "compute_base_permissions",
    "resolve_permissions",
]

import typing

from . import permissions

if typing.TYPE_CHECKING:
    from collections import abc as collections

    from . import channels
    from . import guilds


def compute_base_permissions(
    guild: guilds.Guild, member_id: int, role_ids: collections.Iterable[int], /
) -> permissions.BitmaskSet:
    """Compute a member's guild-level permissions before channel overwrites.

    The owner and administrators get every permission.
    """
    if member_id == guild.owner_id:
        return permissions.BitmaskSet.all()

    base = default_role.permissions if (default_role := guild.default_role) else permissions.BitmaskSet()
    for role_id in role_ids:
        if role := guild.get_role(role_id):
            base = base.union(role.permissions)

    if permissions.Permission.ADMINISTRATOR in base:
        return permissions.BitmaskSet.all()

    return base


def resolve_permissions(
    base: permissions.BitmaskSet,
    subject_id: int,
    role_ids: collections.Iterable[int],
    channel: channels.Channel,
    /,
) -> permissions.BitmaskSet:
    """Resolve a subject's effective permissions in a channel.

    Parameters
    ----------
    base
        The subject's guild-level permissions.
    subject_id
        ID of the member (or role) being checked.
    role_ids
        IDs of the roles the subject holds. The guild's default role is
        handled separately and is ignored here.
    channel
        The channel to resolve permissions in.
    """
    result = base
    if (everyone := channel.default_role_overwrite) is not None:
        result = everyone.apply(result)

    allow = permissions.BitmaskSet()
    deny = permissions.BitmaskSet()
    for role_id in set(role_ids):
        if role_id == channel.guild_id:
            continue

        if overwrite := channel.get_overwrite(role_id):
            allow = allow.union(overwrite.allow)
            deny = deny.union(overwrite.deny)

    result = result.difference(deny).union(allow)

    if subject_id != channel.guild_id and (member := channel.get_overwrite(subject_id)):
        result = member.apply(result)

    return result


def channel_overwrite_has_permission(
    channel: channels.Channel,
    subject_id: int,
    required: permissions.FlagIsh | collections.Iterable[permissions.FlagIsh],
    /,
) -> bool:
    """Check whether a single overwrite grants every required permission.

    This is a narrow query, not a permission resolution. It only looks at the
    overwrite for `subject_id`, falling back to the overwrite for the guild's
    default role, and doesn't combine role and member tiers the way
    :func:`resolve_permissions` does.

    `required` may be a single flag (a mask, a flag or a flag name) or an
    iterable of them.

    Returns
    -------
    bool
        :data:`False` if neither overwrite exists. Otherwise whether none of
        the required permissions are denied and all are allowed.
    """
    overwrite = channel.get_overwrite(subject_id) or channel.default_role_overwrite
    if overwrite is None:
        return False

    if isinstance(required, (str, int, permissions.BitmaskSet)):
        required = (required,)

    for flag in required:
        if overwrite.deny.has_any(flag):
            return False

        if not overwrite.allow.has_all(flag):
            return False

    return True


class OverwriteResolver:
    """Permission queries over cached guilds and channels.

    This holds no state; it groups the module level functions for callers
    which want a single object to pass around.
    """

    __slots__: tuple[str, ...] = ()

    def resolve(
        self,
        base: permissions.BitmaskSet,
        subject_id: int,
        role_ids: collections.Iterable[int],
        channel: channels.Channel,
        /,
    ) -> permissions.BitmaskSet:
        return resolve_permissions(base, subject_id, role_ids, channel)

    def resolve_member(
        self,
        guild: guilds.Guild,
        member_id: int,
        role_ids: collections.Iterable[int],
        channel: channels.Channel,
        /,
    ) -> permissions.BitmaskSet:
        """Compute base permissions then resolve them against a channel.

        Administrators and the guild owner skip overwrites entirely.
        """
        role_ids = list(role_ids)
        base = compute_base_permissions(guild, member_id, role_ids)
        if permissions.Permission.ADMINISTRATOR in base:
            return base

        return resolve_permissions(base, member_id, role_ids, channel)

    def channel_overwrite_has_permission(
        self,
        channel: channels.Channel,
        subject_id: int,
        required: permissions.FlagIsh | collections.Iterable[permissions.FlagIsh],
        /,
    ) -> bool:
        return channel_overwrite_has_permission(channel, subject_id, required)
