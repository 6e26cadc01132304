from __future__ import annotations

import anyio
import pytest

from conftest import CHANNEL_ID
from conftest import GUILD_ID
from conftest import PARENT_ID
from conftest import FakeClock
from conftest import channel_payload
from conftest import guild_payload
from conftest import message_payload
from kaiwa import config
from kaiwa.impl import marshaller as marshaller_impl
from kaiwa.impl import store as store_impl


def _store(cache_config: config.CacheConfig | None = None) -> store_impl.EntityStore:
    return store_impl.EntityStore(marshaller_impl.Marshaller(cache_config=cache_config), cache_config=cache_config)


def test_insert_channel() -> None:
    store = _store()

    channel = store.insert_channel(channel_payload())

    assert store.get_channel(CHANNEL_ID) is channel
    assert store.get_guild_channels(GUILD_ID) == [channel]
    assert store.get_guild_channels(PARENT_ID) == []


def test_insert_channel_keeps_message_cache() -> None:
    store = _store()
    original = store.insert_channel(channel_payload())
    store.insert_message(message_payload(1))

    updated = store.insert_channel({**channel_payload(), "name": "renamed"})

    assert updated is not original
    assert updated.name == "renamed"
    assert updated.messages is original.messages
    assert store.get_message(CHANNEL_ID, 1) is not None


def test_delete_channel_stops_its_cache() -> None:
    store = _store()
    channel = store.insert_channel(channel_payload())

    assert store.delete_channel(CHANNEL_ID) is channel
    assert channel.messages.is_stopped
    assert store.get_channel(CHANNEL_ID) is None
    assert store.delete_channel(CHANNEL_ID) is None


def test_insert_guild_caches_its_channels() -> None:
    store = _store()
    channel = {**channel_payload(PARENT_ID), "type": 4}
    del channel["guild_id"]

    guild = store.insert_guild({**guild_payload(), "channels": [channel]})

    assert store.get_guild(GUILD_ID) is guild
    assert store.get_guilds() == [guild]
    [cached] = store.get_guild_channels(GUILD_ID)
    assert cached.id == PARENT_ID
    assert cached.guild_id == GUILD_ID


def test_delete_guild_removes_its_channels() -> None:
    store = _store()
    guild = store.insert_guild(guild_payload())
    channel = store.insert_channel(channel_payload())

    assert store.delete_guild(GUILD_ID) is guild
    assert store.get_channel(CHANNEL_ID) is None
    assert channel.messages.is_stopped
    assert store.delete_guild(GUILD_ID) is None


def test_insert_message() -> None:
    store = _store()
    channel = store.insert_channel(channel_payload())

    message = store.insert_message(message_payload(10))

    assert store.get_message(CHANNEL_ID, 10) is message
    assert channel.last_message_id == 10
    assert store.delete_message(CHANNEL_ID, 10) is True
    assert store.delete_message(CHANNEL_ID, 10) is False
    assert store.get_message(CHANNEL_ID, 10) is None


def test_insert_message_for_unknown_channel() -> None:
    store = _store()

    message = store.insert_message(message_payload(10))

    assert message.id == 10
    assert store.get_message(CHANNEL_ID, 10) is None
    assert store.delete_message(CHANNEL_ID, 10) is False


@pytest.mark.anyio
async def test_run_sweeps_old_messages(clock: FakeClock) -> None:
    store = _store(config.CacheConfig(message_retention=10, sweep_interval=0.01, clock=clock))
    existing = store.insert_channel(channel_payload(PARENT_ID))
    store.insert_message(message_payload(1, channel_id=PARENT_ID))

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(store.run)
        with anyio.fail_after(1):
            while not (store.is_running and existing.messages.is_running):
                await anyio.sleep(0)

        added = store.insert_channel(channel_payload())
        store.insert_message(message_payload(2))
        await anyio.sleep(0.05)

        assert store.get_message(PARENT_ID, 1) is not None
        assert store.get_message(CHANNEL_ID, 2) is not None
        assert added.messages.is_running

        clock.now = 11
        with anyio.fail_after(1):
            while store.get_message(PARENT_ID, 1) or store.get_message(CHANNEL_ID, 2):
                await anyio.sleep(0.01)

        store.close()

    assert not store.is_running
    assert not existing.messages.is_running
    assert not added.messages.is_running
    assert not added.messages.is_stopped


@pytest.mark.anyio
async def test_run_twice() -> None:
    store = _store()

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(store.run)
        with anyio.fail_after(1):
            while not store.is_running:
                await anyio.sleep(0)

        with pytest.raises(RuntimeError):
            await store.run()

        store.close()


@pytest.mark.anyio
async def test_run_again_after_close_resumes_sweeping(clock: FakeClock) -> None:
    store = _store(config.CacheConfig(message_retention=10, sweep_interval=0.01, clock=clock))
    channel = store.insert_channel(channel_payload())
    store.insert_message(message_payload(1))

    for _ in range(2):
        async with anyio.create_task_group() as task_group:
            task_group.start_soon(store.run)
            with anyio.fail_after(1):
                while not channel.messages.is_running:
                    await anyio.sleep(0)

            store.close()

        assert not channel.messages.is_running

    store.insert_message(message_payload(2))
    async with anyio.create_task_group() as task_group:
        task_group.start_soon(store.run)
        clock.now = 11
        with anyio.fail_after(1):
            while store.get_message(CHANNEL_ID, 1) or store.get_message(CHANNEL_ID, 2):
                await anyio.sleep(0.01)

        store.close()

    assert not channel.messages.is_stopped


@pytest.mark.anyio
async def test_stop_all_stops_caches_for_good(clock: FakeClock) -> None:
    store = _store(config.CacheConfig(message_retention=10, sweep_interval=0.01, clock=clock))
    channel = store.insert_channel(channel_payload())
    store.insert_message(message_payload(1))

    store.stop_all()

    async with anyio.create_task_group() as task_group:
        task_group.start_soon(store.run)
        clock.now = 11
        await anyio.sleep(0.05)

        assert not channel.messages.is_running
        assert store.get_message(CHANNEL_ID, 1) is not None
        store.close()

    assert channel.messages.is_stopped
