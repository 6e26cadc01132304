from __future__ import annotations

import collections.abc
import json
import typing

import httpx
import pytest

from conftest import CHANNEL_ID
from conftest import GUILD_ID
from conftest import MEMBER_ID
from conftest import PARENT_ID
from conftest import ROLE_A_ID
from conftest import ROLE_B_ID
from conftest import channel_payload
from conftest import message_payload
from kaiwa import channels
from kaiwa import errors
from kaiwa import snowflakes
from kaiwa.impl import marshaller as marshaller_impl
from kaiwa.impl import rest as rest_impl
from kaiwa.permissions import BitmaskSet
from kaiwa.permissions import Permission

HandlerSig = collections.abc.Callable[[httpx.Request], httpx.Response]


class _Recorder:
    def __init__(self, handler: HandlerSig) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> typing.Any:
        return json.loads(self.last.content)


@pytest.fixture
def make_rest() -> collections.abc.Callable[..., tuple[rest_impl.RestClient, _Recorder]]:
    def make(handler: HandlerSig, *, token: str | None = "token") -> tuple[rest_impl.RestClient, _Recorder]:
        recorder = _Recorder(handler)
        client = rest_impl.RestClient(token, marshaller=marshaller_impl.Marshaller(), base_url="https://api.test/v10")
        client.start(http2=False, transport=httpx.MockTransport(recorder))
        return client, recorder

    return make


def _json(body: typing.Any, status: int = 200) -> HandlerSig:
    return lambda _: httpx.Response(status, json=body)


@pytest.mark.anyio
async def test_fetch_channel(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json(channel_payload()))

    channel = await rest.fetch_channel(CHANNEL_ID)

    assert recorder.last.method == "GET"
    assert recorder.last.url == httpx.URL(f"https://api.test/v10/channels/{CHANNEL_ID}")
    assert recorder.last.headers["Authorization"] == "Bot token"
    assert channel.id == CHANNEL_ID
    await rest.close()


@pytest.mark.anyio
async def test_request_accepts_string_ids(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json(channel_payload()))

    await rest.fetch_channel(str(CHANNEL_ID))

    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}"
    await rest.close()


@pytest.mark.anyio
async def test_request_rejects_bad_ids_before_sending(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json(channel_payload()))

    with pytest.raises(errors.ParseError):
        await rest.fetch_channel("not-an-id")

    assert recorder.requests == []
    await rest.close()


@pytest.mark.anyio
async def test_request_raises_for_error_status(make_rest: typing.Any) -> None:
    rest, _ = make_rest(_json({"message": "Unknown Channel", "code": 10003}, status=404))

    with pytest.raises(errors.HTTPResponseError) as exc_info:
        await rest.fetch_channel(CHANNEL_ID)

    assert exc_info.value.status == 404
    assert exc_info.value.method == "GET"
    assert exc_info.value.body == {"message": "Unknown Channel", "code": 10003}
    assert isinstance(exc_info.value, errors.TransportError)
    await rest.close()


@pytest.mark.anyio
async def test_request_error_with_text_body(make_rest: typing.Any) -> None:
    rest, _ = make_rest(lambda _: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(errors.HTTPResponseError) as exc_info:
        await rest.delete_channel(CHANNEL_ID)

    assert exc_info.value.status == 502
    assert exc_info.value.body == "Bad Gateway"
    await rest.close()


@pytest.mark.anyio
async def test_delete_channel_with_reason(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(lambda _: httpx.Response(204))

    result = await rest.delete_channel(CHANNEL_ID, reason="cleaning up ✓")

    assert result is None
    assert recorder.last.method == "DELETE"
    assert recorder.last.headers["X-Audit-Log-Reason"] == "cleaning up %E2%9C%93"
    await rest.close()


@pytest.mark.anyio
async def test_request_without_token(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json(channel_payload()), token=None)

    with pytest.raises(RuntimeError):
        await rest.fetch_channel(CHANNEL_ID)

    await rest.request("GET", f"/channels/{CHANNEL_ID}", use_auth=False)
    assert "Authorization" not in recorder.last.headers
    await rest.close()


@pytest.mark.anyio
async def test_request_when_not_started() -> None:
    rest = rest_impl.RestClient("token", marshaller=marshaller_impl.Marshaller())

    with pytest.raises(RuntimeError):
        await rest.fetch_channel(CHANNEL_ID)

    with pytest.raises(RuntimeError):
        await rest.close()


@pytest.mark.anyio
async def test_start_twice(make_rest: typing.Any) -> None:
    rest, _ = make_rest(_json({}))

    with pytest.raises(RuntimeError):
        rest.start(http2=False)

    await rest.close()
    assert not rest.is_running


@pytest.mark.anyio
async def test_create_guild_channel_only_sends_given_fields(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json(channel_payload()))

    await rest.create_guild_channel(GUILD_ID, "general", type=channels.ChannelType.GUILD_TEXT, parent_id=None)

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == f"/v10/guilds/{GUILD_ID}/channels"
    assert recorder.last_json() == {"name": "general", "type": 0, "parent_id": None}
    await rest.close()


@pytest.mark.anyio
async def test_clone_channel(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json(channel_payload(123)))
    channel = marshaller_impl.Marshaller().unmarshall_channel(
        channel_payload(
            parent_id=PARENT_ID,
            overwrites=[{"id": str(ROLE_A_ID), "type": 0, "allow": "2048", "deny": "1024"}],
        )
    )

    clone = await rest.clone_channel(channel, reason="copy")

    assert clone.id == 123
    assert recorder.last.url.path == f"/v10/guilds/{GUILD_ID}/channels"
    assert recorder.last.headers["X-Audit-Log-Reason"] == "copy"
    assert recorder.last_json() == {
        "name": "general",
        "type": 0,
        "topic": "chit chat",
        "rate_limit_per_user": 2,
        "position": 3,
        "parent_id": str(PARENT_ID),
        "nsfw": False,
        "permission_overwrites": [{"id": str(ROLE_A_ID), "type": 0, "allow": "2048", "deny": "1024"}],
    }
    await rest.close()


@pytest.mark.anyio
async def test_clone_channel_requires_guild(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json({}))
    channel = channels.Channel(id=CHANNEL_ID, type=channels.ChannelType.DM)

    with pytest.raises(ValueError, match="guild"):
        await rest.clone_channel(channel)

    assert recorder.requests == []
    await rest.close()


@pytest.mark.anyio
async def test_edit_channel_overwrite(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(lambda _: httpx.Response(204))

    await rest.edit_channel_overwrite(
        CHANNEL_ID,
        MEMBER_ID,
        type=channels.OverwriteType.MEMBER,
        allow=Permission.SEND_MESSAGES,
        deny="view_channel",
    )

    assert recorder.last.method == "PUT"
    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/permissions/{MEMBER_ID}"
    assert recorder.last_json() == {"type": 1, "allow": "2048", "deny": "1024"}
    await rest.close()


@pytest.mark.anyio
async def test_edit_channel_overwrite_with_wide_mask(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(lambda _: httpx.Response(204))

    await rest.edit_channel_overwrite(
        CHANNEL_ID, ROLE_B_ID, type=channels.OverwriteType.ROLE, allow=BitmaskSet(1 << 100)
    )

    assert recorder.last_json() == {"type": 0, "allow": str(1 << 100), "deny": "0"}
    await rest.close()


@pytest.mark.anyio
async def test_delete_channel_overwrite(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(lambda _: httpx.Response(204))

    await rest.delete_channel_overwrite(CHANNEL_ID, ROLE_A_ID)

    assert recorder.last.method == "DELETE"
    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/permissions/{ROLE_A_ID}"
    await rest.close()


@pytest.mark.anyio
async def test_trigger_typing(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(lambda _: httpx.Response(204))

    await rest.trigger_typing(CHANNEL_ID)

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/typing"
    await rest.close()


@pytest.mark.anyio
async def test_follow_channel(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json({"channel_id": str(CHANNEL_ID), "webhook_id": "223704706495545344"}))

    webhook_id = await rest.follow_channel(CHANNEL_ID, PARENT_ID)

    assert webhook_id == snowflakes.Snowflake(223704706495545344)
    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/followers"
    assert recorder.last_json() == {"webhook_channel_id": str(PARENT_ID)}
    await rest.close()


@pytest.mark.anyio
async def test_messages(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json(message_payload(77, content="edited")))

    message = await rest.edit_message(CHANNEL_ID, 77, "edited")

    assert recorder.last.method == "PATCH"
    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/messages/77"
    assert recorder.last_json() == {"content": "edited"}
    assert message.content == "edited"

    await rest.create_message(CHANNEL_ID, "edited")
    assert recorder.last.method == "POST"
    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/messages"
    await rest.close()


@pytest.mark.anyio
async def test_fetch_pins(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json([message_payload(1), message_payload(2)]))

    pins = await rest.fetch_pins(CHANNEL_ID)

    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/pins"
    assert [message.id for message in pins] == [1, 2]
    await rest.close()


@pytest.mark.anyio
async def test_stage_instances(make_rest: typing.Any) -> None:
    payload = {
        "id": "840647391636226060",
        "guild_id": str(GUILD_ID),
        "channel_id": str(CHANNEL_ID),
        "topic": "Testing",
        "privacy_level": 2,
    }
    rest, recorder = make_rest(_json(payload))

    stage = await rest.create_stage_instance(CHANNEL_ID, "Testing", privacy_level=channels.PrivacyLevel.GUILD_ONLY)
    assert recorder.last.url.path == "/v10/stage-instances"
    assert recorder.last_json() == {"topic": "Testing", "channel_id": str(CHANNEL_ID), "privacy_level": 2}
    assert stage.channel_id == CHANNEL_ID

    await rest.edit_stage_instance(CHANNEL_ID, topic="New topic")
    assert recorder.last.method == "PATCH"
    assert recorder.last.url.path == f"/v10/stage-instances/{CHANNEL_ID}"
    assert recorder.last_json() == {"topic": "New topic"}

    await rest.fetch_stage_instance(CHANNEL_ID)
    assert recorder.last.method == "GET"

    await rest.delete_stage_instance(CHANNEL_ID)
    assert recorder.last.method == "DELETE"
    await rest.close()


@pytest.mark.anyio
async def test_fetch_channel_webhooks(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(
        _json([{"id": "1", "type": 1, "channel_id": str(CHANNEL_ID)}, {"id": "2", "type": 2}])
    )

    result = await rest.fetch_channel_webhooks(CHANNEL_ID)

    assert recorder.last.url.path == f"/v10/channels/{CHANNEL_ID}/webhooks"
    assert sorted(result) == [1, 2]
    assert result[snowflakes.Snowflake(2)].channel_id is None
    await rest.close()


@pytest.mark.anyio
async def test_fetch_guild_prune_count(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json({"pruned": 12}))

    result = await rest.fetch_guild_prune_count(GUILD_ID, days=14, include_roles=[ROLE_A_ID, str(ROLE_B_ID)])

    assert result == 12
    assert recorder.last.url.path == f"/v10/guilds/{GUILD_ID}/prune"
    assert recorder.last.url.params["days"] == "14"
    assert recorder.last.url.params["include_roles"] == f"{ROLE_A_ID},{ROLE_B_ID}"
    await rest.close()


@pytest.mark.anyio
async def test_fetch_guild_prune_count_defaults(make_rest: typing.Any) -> None:
    rest, recorder = make_rest(_json({"pruned": 0}))

    assert await rest.fetch_guild_prune_count(GUILD_ID) == 0
    assert not recorder.last.url.params

    with pytest.raises(ValueError, match="days"):
        await rest.fetch_guild_prune_count(GUILD_ID, days=0)

    await rest.close()
