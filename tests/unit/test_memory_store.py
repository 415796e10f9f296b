from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from stagegate.adapters.memory_store import InMemoryContentStore
from stagegate.domain.errors import ContentNotFoundError, DuplicateTopicError


@pytest.mark.asyncio
async def test_insert_stamps_timestamps(store, clock, make_content):
    stored = await store.insert(make_content(topic="first"))

    assert stored.created_at == clock.now()
    assert stored.updated_at == clock.now()
    assert await store.get_by_id(stored.id) == stored


@pytest.mark.asyncio
async def test_insert_rejects_duplicates(store, make_content):
    item = await store.insert(make_content(topic="first"))

    with pytest.raises(DuplicateTopicError):
        await store.insert(make_content(topic="first"))
    with pytest.raises(ValueError, match="already exists"):
        await store.insert(item)


@pytest.mark.asyncio
async def test_snapshots_are_copies(store, make_content):
    stored = await store.insert(make_content(topic="first"))
    stored.morals.append("leaked")

    fetched = await store.get_by_topic("first")
    assert fetched is not None
    assert fetched.morals == []


@pytest.mark.asyncio
async def test_get_all_newest_first(store, clock, make_content):
    await store.insert(make_content(topic="old"))
    clock.advance(timedelta(minutes=5))
    await store.insert(make_content(topic="new"))

    assert [c.topic for c in await store.get_all()] == ["new", "old"]


@pytest.mark.asyncio
async def test_lookups_miss(store):
    assert await store.get_by_id(uuid4()) is None
    assert await store.get_by_topic("nothing") is None


@pytest.mark.asyncio
async def test_update_fields(store, clock, make_content):
    item = await store.insert(make_content(topic="first"))
    clock.advance(timedelta(hours=1))

    updated = await store.update_fields(item.id, {"title": "Now titled", "morals": ["be kind"]})

    assert updated.title == "Now titled"
    assert updated.morals == ["be kind"]
    assert updated.created_at == item.created_at
    assert updated.updated_at == clock.now()


@pytest.mark.asyncio
async def test_update_fields_guards(store, make_content):
    item = await store.insert(make_content(topic="first"))
    await store.insert(make_content(topic="second"))

    with pytest.raises(ValueError, match="current_stage"):
        await store.update_fields(item.id, {"current_stage": 3})
    with pytest.raises(DuplicateTopicError):
        await store.update_fields(item.id, {"topic": "second"})
    with pytest.raises(ContentNotFoundError):
        await store.update_fields(uuid4(), {"title": "x"})

    # Renaming to its own topic is fine
    same = await store.update_fields(item.id, {"topic": "first"})
    assert same.topic == "first"


@pytest.mark.asyncio
async def test_update_stage(store, make_content):
    item = await store.insert(make_content(topic="first"))

    moved = await store.update_stage(item.id, 1)
    assert moved.current_stage == 1

    with pytest.raises(ValidationError):
        await store.update_stage(item.id, 12)
    with pytest.raises(ContentNotFoundError):
        await store.update_stage(uuid4(), 1)


@pytest.mark.asyncio
async def test_load_keeps_snapshot(store, make_content):
    seeded = make_content(topic="seeded", current_stage=7)
    store.load([seeded])

    fetched = await store.get_by_id(seeded.id)
    assert fetched == seeded

    with pytest.raises(DuplicateTopicError):
        store.load([make_content(topic="seeded")])
    with pytest.raises(ValueError, match="already exists"):
        store.load([seeded])


@pytest.mark.asyncio
async def test_default_clock_is_utc(make_content):
    stored = await InMemoryContentStore().insert(make_content(topic="first"))
    assert stored.created_at.utcoffset() == timedelta(0)
