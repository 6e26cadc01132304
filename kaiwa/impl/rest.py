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
from __future__ import annotations

__all__: list[str] = ["RestClient", "STANDARD_URL", "UndefinedOr", "UndefinedNoneOr"]

import logging
import types
import typing
import urllib.parse

import httpx

from .. import channels
from .. import errors
from .. import permissions
from .. import routes
from .. import snowflakes

if typing.TYPE_CHECKING:
    import ssl
    from collections import abc as collections

    from .. import guilds
    from .. import messages
    from .. import webhooks
    from ..api import marshaller as marshaller_api

    _JsonObjectT_inv = typing.TypeVar("_JsonObjectT_inv", bound=marshaller_api.JsonObjectT)

_ValueT = typing.TypeVar("_ValueT")

UndefinedOr: typing.TypeAlias = types.EllipsisType | _ValueT
UndefinedNoneOr: typing.TypeAlias = types.EllipsisType | None | _ValueT


def _put_undefined(
    json: _JsonObjectT_inv, name: str, value: UndefinedOr[marshaller_api.JsonIsh], /
) -> _JsonObjectT_inv:
    if value is not ...:
        json[name] = value

    return json


def _put_snowflake(
    json: _JsonObjectT_inv, name: str, value: UndefinedNoneOr[snowflakes.SnowflakeIsh], /
) -> _JsonObjectT_inv:
    if value is None:
        json[name] = None

    elif value is not ...:
        json[name] = snowflakes.format_snowflake(snowflakes.to_snowflake(value))

    return json


STANDARD_URL: typing.Final[str] = "https://discord.com/api/v10"

_LOGGER: typing.Final[logging.Logger] = logging.getLogger("kaiwa.rest")
_AUDIT_LOG_REASON_KEY: typing.Final[str] = "X-Audit-Log-Reason"
_AUTHORIZATION_HEADER_KEY: typing.Final[str] = "Authorization"
_CONTENT_TYPE_KEY: typing.Final[str] = "Content-Type"
_JSON_CONTENT_TYPE: typing.Final[str] = "application/json"

_DELETE: typing.Final[str] = "DELETE"
_GET: typing.Final[str] = "GET"
_PATCH: typing.Final[str] = "PATCH"
_POST: typing.Final[str] = "POST"
_PUT: typing.Final[str] = "PUT"


class RestClient:
    __slots__: tuple[str, ...] = ("_base_url", "_client", "_marshaller", "_token")

    def __init__(
        self,
        token: str | None,
        /,
        marshaller: marshaller_api.Marshaller,
        *,
        base_url: str | None = None,
    ) -> None:
        self._base_url = base_url or STANDARD_URL
        self._client: httpx.AsyncClient | None = None
        self._marshaller = marshaller
        self._token = f"Bot {token}" if token else None

    async def __aenter__(self) -> RestClient:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: types.TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def is_running(self) -> bool:
        return self._client is not None

    @property
    def marshaller(self) -> marshaller_api.Marshaller:
        return self._marshaller

    @classmethod
    def spawn(
        cls,
        token: str | None,
        /,
        *,
        marshaller: marshaller_api.Marshaller | None = None,
        base_url: str = STANDARD_URL,
    ) -> RestClient:
        if marshaller is None:
            from ..impl import marshaller as marshaller_impl

            marshaller = marshaller_impl.Marshaller()

        return cls(token, marshaller=marshaller, base_url=base_url)

    def start(
        self,
        verify: str | bool | ssl.SSLContext = True,
        http1: bool = True,
        http2: bool = True,
        timeout: float | httpx.Timeout = httpx.Timeout(timeout=10.0),
        limits: httpx.Limits = httpx.Limits(max_connections=100, max_keepalive_connections=20),
        max_redirects: int = 20,
        trust_env: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if self._client:
            raise RuntimeError("Client is already running")

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            verify=verify,
            http1=http1,
            http2=http2,
            timeout=timeout,
            limits=limits,
            max_redirects=max_redirects,
            trust_env=trust_env,
            transport=transport,
        )

    async def close(self) -> None:
        if self._client is None:
            raise RuntimeError("Cannot close RESTClient while it's inactive")

        client = self._client
        self._client = None
        await client.aclose()

    async def request(
        self,
        method: str,
        route: str,
        /,
        json: marshaller_api.TopLevelJsonIsh | None = None,
        *,
        query: collections.Mapping[str, str] | None = None,
        reason: str | None = None,
        use_auth: bool = True,
    ) -> marshaller_api.TopLevelJsonIsh | None:
        """Execute a single request.

        Returns
        -------
        kaiwa.api.marshaller.TopLevelJsonIsh | None
            The decoded JSON body, or :data:`None` if the response had no body.

        Raises
        ------
        kaiwa.errors.HTTPResponseError
            If the response status isn't 2xx.
        httpx.HTTPError
            If the request couldn't be sent.
        """
        if self._client is None:
            raise RuntimeError("Cannot use an inactive client")

        headers: dict[str, str] = {}
        if use_auth:
            if not self._token:
                raise RuntimeError("Cannot make this request with a token-less client")

            headers[_AUTHORIZATION_HEADER_KEY] = self._token

        if reason:
            headers[_AUDIT_LOG_REASON_KEY] = urllib.parse.quote(reason, safe=" ")

        _LOGGER.debug("%s %s", method, route)
        response = await self._client.request(method, route, headers=headers, json=json, params=query)
        content_type: str = response.headers.get(_CONTENT_TYPE_KEY) or ""
        is_json = content_type.startswith(_JSON_CONTENT_TYPE)

        match response.status_code:
            case 204:
                return None
            case 200 | 201 | 202 | 203 | 206 if is_json:
                return response.json()
            case status if 200 <= status < 300:
                return None
            case status:
                body = response.json() if is_json else response.text
                _LOGGER.debug("%s %s failed with status %s", method, route, status)
                raise errors.HTTPResponseError(method, route, status, body)

    async def delete(self, route: str, /, *, reason: str | None = None, use_auth: bool = True) -> None:
        await self.request(_DELETE, route, reason=reason, use_auth=use_auth)

    async def get(
        self, route: str, /, *, query: collections.Mapping[str, str] | None = None, use_auth: bool = True
    ) -> marshaller_api.TopLevelJsonIsh:
        response = await self.request(_GET, route, query=query, use_auth=use_auth)
        assert response is not None, "GET shouldn't ever return no body"
        return response

    async def patch(
        self,
        route: str,
        /,
        json: marshaller_api.TopLevelJsonIsh,
        *,
        reason: str | None = None,
        use_auth: bool = True,
    ) -> marshaller_api.TopLevelJsonIsh | None:
        return await self.request(_PATCH, route, json=json, reason=reason, use_auth=use_auth)

    async def post(
        self,
        route: str,
        /,
        json: marshaller_api.TopLevelJsonIsh | None = None,
        *,
        reason: str | None = None,
        use_auth: bool = True,
    ) -> marshaller_api.TopLevelJsonIsh | None:
        return await self.request(_POST, route, json=json, reason=reason, use_auth=use_auth)

    async def put(
        self,
        route: str,
        /,
        json: marshaller_api.TopLevelJsonIsh | None = None,
        *,
        reason: str | None = None,
        use_auth: bool = True,
    ) -> marshaller_api.TopLevelJsonIsh | None:
        return await self.request(_PUT, route, json=json, reason=reason, use_auth=use_auth)

    # Channels

    async def fetch_channel(self, channel_id: snowflakes.SnowflakeIsh, /) -> channels.Channel:
        response = await self.get(routes.channel(channel_id))
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_channel(response)

    async def delete_channel(self, channel_id: snowflakes.SnowflakeIsh, /, *, reason: str | None = None) -> None:
        await self.delete(routes.channel(channel_id), reason=reason)

    async def create_guild_channel(
        self,
        guild_id: snowflakes.SnowflakeIsh,
        /,
        name: str,
        *,
        type: UndefinedOr[channels.ChannelType] = ...,  # noqa: A002
        topic: UndefinedOr[str] = ...,
        bitrate: UndefinedOr[int] = ...,
        user_limit: UndefinedOr[int] = ...,
        rate_limit_per_user: UndefinedOr[int] = ...,
        position: UndefinedOr[int] = ...,
        parent_id: UndefinedNoneOr[snowflakes.SnowflakeIsh] = ...,
        nsfw: UndefinedOr[bool] = ...,
        permission_overwrites: UndefinedOr[collections.Iterable[channels.PermissionOverwrite]] = ...,
        reason: str | None = None,
    ) -> channels.Channel:
        payload: marshaller_api.JsonObjectT = {"name": name}
        _put_undefined(payload, "type", type if type is ... else int(type))
        _put_undefined(payload, "topic", topic)
        _put_undefined(payload, "bitrate", bitrate)
        _put_undefined(payload, "user_limit", user_limit)
        _put_undefined(payload, "rate_limit_per_user", rate_limit_per_user)
        _put_undefined(payload, "position", position)
        _put_snowflake(payload, "parent_id", parent_id)
        _put_undefined(payload, "nsfw", nsfw)
        if permission_overwrites is not ...:
            payload["permission_overwrites"] = [
                self._marshaller.marshall_overwrite(overwrite) for overwrite in permission_overwrites
            ]

        response = await self.post(routes.guild_channels(guild_id), json=payload, reason=reason)
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_channel(response)

    async def clone_channel(self, channel: channels.Channel, /, *, reason: str | None = None) -> channels.Channel:
        """Create a copy of a guild channel, including its permission overwrites."""
        if channel.guild_id is None:
            raise ValueError("Only guild channels can be cloned")

        def _or_undefined(value: _ValueT | None, /) -> UndefinedOr[_ValueT]:
            return ... if value is None else value

        return await self.create_guild_channel(
            channel.guild_id,
            channel.name,
            type=channel.type,
            topic=channel.topic,
            bitrate=_or_undefined(channel.bitrate),
            user_limit=_or_undefined(channel.user_limit),
            rate_limit_per_user=_or_undefined(channel.rate_limit_per_user),
            position=_or_undefined(channel.position),
            parent_id=channel.parent_id,
            nsfw=channel.nsfw,
            permission_overwrites=list(channel.permission_overwrites.values()),
            reason=reason,
        )

    async def trigger_typing(self, channel_id: snowflakes.SnowflakeIsh, /) -> None:
        await self.post(routes.channel_typing(channel_id))

    async def follow_channel(
        self, channel_id: snowflakes.SnowflakeIsh, target_channel_id: snowflakes.SnowflakeIsh, /
    ) -> snowflakes.Snowflake:
        """Follow a news channel into a target channel.

        Returns
        -------
        kaiwa.snowflakes.Snowflake
            ID of the webhook created in the target channel.
        """
        payload = _put_snowflake({}, "webhook_channel_id", target_channel_id)
        response = await self.post(routes.channel_follow(channel_id), json=payload)
        assert isinstance(response, dict)
        return snowflakes.parse_snowflake(response["webhook_id"])

    # Permission overwrites

    async def edit_channel_overwrite(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        overwrite_id: snowflakes.SnowflakeIsh,
        /,
        *,
        type: channels.OverwriteType,  # noqa: A002
        allow: permissions.FlagIsh = permissions.BitmaskSet(),
        deny: permissions.FlagIsh = permissions.BitmaskSet(),
        reason: str | None = None,
    ) -> None:
        payload: marshaller_api.JsonObjectT = {
            "type": int(type),
            "allow": str(permissions.BitmaskSet.from_flags(allow)),
            "deny": str(permissions.BitmaskSet.from_flags(deny)),
        }
        await self.put(routes.channel_overwrite(channel_id, overwrite_id), json=payload, reason=reason)

    async def delete_channel_overwrite(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        overwrite_id: snowflakes.SnowflakeIsh,
        /,
        *,
        reason: str | None = None,
    ) -> None:
        await self.delete(routes.channel_overwrite(channel_id, overwrite_id), reason=reason)

    # Messages

    async def fetch_message(
        self, channel_id: snowflakes.SnowflakeIsh, message_id: snowflakes.SnowflakeIsh, /
    ) -> messages.Message:
        response = await self.get(routes.channel_message(channel_id, message_id))
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_message(response)

    async def create_message(self, channel_id: snowflakes.SnowflakeIsh, /, content: str) -> messages.Message:
        response = await self.post(routes.channel_messages(channel_id), json={"content": content})
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_message(response)

    async def edit_message(
        self, channel_id: snowflakes.SnowflakeIsh, message_id: snowflakes.SnowflakeIsh, /, content: str
    ) -> messages.Message:
        response = await self.patch(routes.channel_message(channel_id, message_id), json={"content": content})
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_message(response)

    async def delete_message(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        message_id: snowflakes.SnowflakeIsh,
        /,
        *,
        reason: str | None = None,
    ) -> None:
        await self.delete(routes.channel_message(channel_id, message_id), reason=reason)

    async def fetch_pins(self, channel_id: snowflakes.SnowflakeIsh, /) -> list[messages.Message]:
        response = await self.get(routes.channel_pins(channel_id))
        assert isinstance(response, list)
        return [self._marshaller.unmarshall_message(message) for message in response]

    # Stage instances

    async def create_stage_instance(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        /,
        topic: str,
        *,
        privacy_level: UndefinedOr[channels.PrivacyLevel] = ...,
        reason: str | None = None,
    ) -> channels.StageInstance:
        payload = _put_snowflake({"topic": topic}, "channel_id", channel_id)
        _put_undefined(payload, "privacy_level", privacy_level if privacy_level is ... else int(privacy_level))
        response = await self.post(routes.stage_instances(), json=payload, reason=reason)
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_stage_instance(response)

    async def fetch_stage_instance(self, channel_id: snowflakes.SnowflakeIsh, /) -> channels.StageInstance:
        response = await self.get(routes.stage_instance(channel_id))
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_stage_instance(response)

    async def edit_stage_instance(
        self,
        channel_id: snowflakes.SnowflakeIsh,
        /,
        *,
        topic: UndefinedOr[str] = ...,
        privacy_level: UndefinedOr[channels.PrivacyLevel] = ...,
        reason: str | None = None,
    ) -> channels.StageInstance:
        payload: marshaller_api.JsonObjectT = {}
        _put_undefined(payload, "topic", topic)
        _put_undefined(payload, "privacy_level", privacy_level if privacy_level is ... else int(privacy_level))
        response = await self.patch(routes.stage_instance(channel_id), json=payload, reason=reason)
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_stage_instance(response)

    async def delete_stage_instance(
        self, channel_id: snowflakes.SnowflakeIsh, /, *, reason: str | None = None
    ) -> None:
        await self.delete(routes.stage_instance(channel_id), reason=reason)

    # Webhooks

    async def fetch_channel_webhooks(
        self, channel_id: snowflakes.SnowflakeIsh, /
    ) -> dict[snowflakes.Snowflake, webhooks.Webhook]:
        response = await self.get(routes.channel_webhooks(channel_id))
        assert isinstance(response, list)
        results = (self._marshaller.unmarshall_webhook(webhook) for webhook in response)
        return {webhook.id: webhook for webhook in results}

    # Guilds

    async def fetch_guild(self, guild_id: snowflakes.SnowflakeIsh, /) -> guilds.Guild:
        response = await self.get(routes.guild(guild_id))
        assert isinstance(response, dict)
        return self._marshaller.unmarshall_guild(response)

    async def fetch_guild_prune_count(
        self,
        guild_id: snowflakes.SnowflakeIsh,
        /,
        *,
        days: UndefinedOr[int] = ...,
        include_roles: collections.Iterable[snowflakes.SnowflakeIsh] = (),
    ) -> int:
        """Count how many members a prune would kick.

        Parameters
        ----------
        guild_id
            The guild to check.

        Other Parameters
        ----------------
        days
            Count members inactive for this many days (1 or more). The API
            defaults to 7.
        include_roles
            Also count members with these roles. By default members with any
            role are skipped.
        """
        query: dict[str, str] = {}
        if days is not ...:
            if days < 1:
                raise ValueError("days must be 1 or more")

            query["days"] = str(days)

        if role_ids := ",".join(str(snowflakes.to_snowflake(role_id)) for role_id in include_roles):
            query["include_roles"] = role_ids

        response = await self.get(routes.guild_prune(guild_id), query=query)
        assert isinstance(response, dict)
        result = response["pruned"]
        assert isinstance(result, int)
        return result
