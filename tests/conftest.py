from __future__ import annotations

import typing

import pytest

from kaiwa import snowflakes

GUILD_ID: typing.Final[snowflakes.Snowflake] = snowflakes.Snowflake(81384788765712384)
CHANNEL_ID: typing.Final[snowflakes.Snowflake] = snowflakes.Snowflake(381870553235193857)
PARENT_ID: typing.Final[snowflakes.Snowflake] = snowflakes.Snowflake(381870553235193800)
ROLE_A_ID: typing.Final[snowflakes.Snowflake] = snowflakes.Snowflake(41771983423143936)
ROLE_B_ID: typing.Final[snowflakes.Snowflake] = snowflakes.Snowflake(41771983423143937)
MEMBER_ID: typing.Final[snowflakes.Snowflake] = snowflakes.Snowflake(80351110224678912)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def message_payload(message_id: int, *, channel_id: int = CHANNEL_ID, content: str = "hello") -> dict[str, typing.Any]:
    return {
        "id": str(message_id),
        "channel_id": str(channel_id),
        "author": {"id": str(MEMBER_ID), "username": "someone"},
        "content": content,
        "timestamp": "2021-06-01T12:30:45.123000+00:00",
        "edited_timestamp": None,
        "pinned": False,
    }


def channel_payload(
    channel_id: int = CHANNEL_ID,
    *,
    parent_id: int | None = None,
    overwrites: list[dict[str, typing.Any]] | None = None,
) -> dict[str, typing.Any]:
    return {
        "id": str(channel_id),
        "type": 0,
        "guild_id": str(GUILD_ID),
        "name": "general",
        "topic": "chit chat",
        "position": 3,
        "parent_id": str(parent_id) if parent_id is not None else None,
        "nsfw": False,
        "rate_limit_per_user": 2,
        "last_message_id": None,
        "permission_overwrites": overwrites or [],
    }


def guild_payload() -> dict[str, typing.Any]:
    return {
        "id": str(GUILD_ID),
        "name": "Test guild",
        "owner_id": "1",
        "roles": [
            {"id": str(GUILD_ID), "name": "@everyone", "permissions": "1024", "position": 0},
            {"id": str(ROLE_A_ID), "name": "A", "permissions": "2048", "position": 1},
        ],
    }
