import pytest
from sqlalchemy import func, select

from waitlist.errors import InvalidTransitionError, NotFoundError, ValidationError
from waitlist.models import EntryStatus, QueueEntry


async def test_join_returns_waiting_entry_with_increasing_ids(service):
    ids = []
    for name in ["Alice", "Bob", "Carol", "Dave"]:
        outcome = await service.join(name)
        assert outcome.value.status == EntryStatus.WAITING.value
        assert outcome.value.created_at is not None
        ids.append(outcome.value.id)

    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


async def test_join_emits_change_event(service):
    outcome = await service.join("Alice", "0912-000-001")

    assert outcome.event.action == "join"
    assert outcome.event.entry_id == outcome.value.id
    assert outcome.value.phone == "0912-000-001"


@pytest.mark.parametrize("name", [None, "", "   "])
async def test_join_without_name_creates_nothing(service, session, name):
    with pytest.raises(ValidationError):
        await service.join(name)

    count = await session.scalar(select(func.count()).select_from(QueueEntry))
    assert count == 0


async def test_blank_phone_is_stored_as_none(service):
    outcome = await service.join("Alice", "  ")
    assert outcome.value.phone is None


async def test_list_active_is_fifo_and_skips_cancelled(service):
    alice = (await service.join("Alice")).value
    bob = (await service.join("Bob")).value
    carol = (await service.join("Carol")).value

    await service.call(alice.id)
    await service.cancel(bob.id)

    entries = await service.list_active()
    assert [e.id for e in entries] == [alice.id, carol.id]
    assert [e.status for e in entries] == ["called", "waiting"]


async def test_position_counts_earlier_waiting_entries(service):
    alice = (await service.join("Alice")).value
    bob = (await service.join("Bob")).value
    assert await service.position_of(alice.id) == 1
    assert await service.position_of(bob.id) == 2

    await service.call(alice.id)
    carol = (await service.join("Carol")).value

    assert await service.position_of(bob.id) == 1
    assert await service.position_of(carol.id) == 2
    assert await service.position_of(alice.id) is None


async def test_position_of_unknown_entry(service):
    with pytest.raises(NotFoundError):
        await service.position_of(999)


async def test_call_changes_only_that_entry(service):
    alice = (await service.join("Alice")).value
    bob = (await service.join("Bob")).value

    outcome = await service.call(alice.id)
    assert outcome.event.action == "call"
    assert outcome.event.entry_id == alice.id

    statuses = {e.id: e.status for e in await service.list_active()}
    assert statuses == {alice.id: "called", bob.id: "waiting"}


async def test_call_twice_is_allowed(service):
    alice = (await service.join("Alice")).value

    await service.call(alice.id)
    await service.call(alice.id)

    assert (await service.get(alice.id)).status == "called"


async def test_cancel_keeps_row(service, session):
    alice = (await service.join("Alice")).value

    await service.cancel(alice.id)

    assert await service.list_active() == []
    status = await session.scalar(select(QueueEntry.status).where(QueueEntry.id == alice.id))
    assert status == "cancelled"


async def test_cancel_called_entry(service):
    alice = (await service.join("Alice")).value
    await service.call(alice.id)

    await service.cancel(alice.id)

    assert await service.list_active() == []


async def test_cancelled_entry_cannot_be_called(service):
    alice = (await service.join("Alice")).value
    await service.cancel(alice.id)

    with pytest.raises(InvalidTransitionError):
        await service.call(alice.id)

    assert (await service.get(alice.id)).status == "cancelled"


@pytest.mark.parametrize("operation", ["call", "cancel"])
async def test_unknown_id_raises_not_found(service, operation):
    await service.join("Alice")

    with pytest.raises(NotFoundError):
        await getattr(service, operation)(12345)


async def test_clear_removes_every_entry(service, session):
    alice = (await service.join("Alice")).value
    bob = (await service.join("Bob")).value
    await service.cancel(bob.id)
    await service.call(alice.id)

    outcome = await service.clear()

    assert outcome.value == 2
    assert outcome.event.action == "clear"
    assert await service.list_active() == []
    count = await session.scalar(select(func.count()).select_from(QueueEntry))
    assert count == 0


async def test_ids_are_not_reused_after_clear(service):
    last = (await service.join("Alice")).value.id
    await service.clear()

    fresh = (await service.join("Bob")).value.id

    assert fresh > last


async def test_name_is_stored_as_given(service):
    outcome = await service.join("  Alice ")
    assert outcome.value.name == "  Alice "


@pytest.mark.parametrize("entry_id", [0, -1, 2**63, 2**70])
async def test_ids_outside_store_range_are_not_found(service, entry_id):
    await service.join("Alice")

    for operation in (service.get, service.position_of, service.call, service.cancel):
        with pytest.raises(NotFoundError):
            await operation(entry_id)

    assert [e.status for e in await service.list_active()] == ["waiting"]


async def test_position_for_loaded_entry(service):
    await service.join("Alice")
    bob = (await service.join("Bob")).value

    assert await service.position_for(bob) == 2
