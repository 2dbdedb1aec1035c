"""Tests for the asynchronous notification store."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from luxurystay.domain.entities import (
    NotificationDraft,
    NotificationPriority,
    NotificationType,
    RecipientType,
)
from luxurystay.domain.exceptions import NotificationValidationError, PersistenceError
from luxurystay.infrastructure.notifications import NotificationStore

pytestmark = pytest.mark.anyio


def _draft(recipient_id: str = "U1", title: str = "Check-in", **overrides) -> NotificationDraft:
    fields = {
        "recipient_id": recipient_id,
        "recipient_type": RecipientType.GUEST,
        "title": title,
        "message": "Your room is ready",
        "type": NotificationType.CHECK_IN,
        "priority": NotificationPriority.MEDIUM,
    }
    fields.update(overrides)
    return NotificationDraft(**fields)


async def test_create_assigns_id_and_defaults(session_factory):
    store = NotificationStore(session_factory)

    saved = await store.create(_draft(action_url="/reservations/1"))

    assert saved.id is not None
    assert saved.is_read is False
    assert saved.read_date is None
    assert saved.created_at is not None
    assert saved.recipient_type is RecipientType.GUEST
    assert await store.get(saved.id) == saved


async def test_create_rejects_invalid_payload_without_writing(session_factory):
    store = NotificationStore(session_factory)

    with pytest.raises(NotificationValidationError):
        await store.create(_draft(title=""))

    assert await store.count_unread("U1") == 0


async def test_get_unknown_returns_none(session_factory):
    store = NotificationStore(session_factory)

    assert await store.get(999) is None
    assert await store.mark_read(999) is None


async def test_mark_read_is_idempotent(session_factory):
    store = NotificationStore(session_factory)
    saved = await store.create(_draft())

    first = await store.mark_read(saved.id)
    second, transitioned = await store.mark_read_detailed(saved.id)

    assert first.is_read is True
    assert first.read_date is not None
    assert second.is_read is True
    assert second.read_date == first.read_date
    assert transitioned is False


async def test_bulk_mark_read_counts_only_transitions(session_factory):
    store = NotificationStore(session_factory)
    a = await store.create(_draft(title="a"))
    b = await store.create(_draft(title="b"))
    c = await store.create(_draft(title="c"))
    await store.mark_read(a.id)

    updated = await store.mark_read_bulk([a.id, b.id, c.id, b.id, 12345])

    assert updated == 2
    assert await store.count_unread("U1") == 0


async def test_bulk_mark_read_skips_other_recipients(session_factory):
    store = NotificationStore(session_factory)
    mine = await store.create(_draft("U1"))
    theirs = await store.create(_draft("U2"))

    transitioned = await store.mark_read_bulk_detailed(
        [mine.id, theirs.id], recipient_id="U1"
    )

    assert [n.id for n in transitioned] == [mine.id]
    assert (await store.get(theirs.id)).is_read is False


async def test_bulk_mark_read_with_no_ids(session_factory):
    store = NotificationStore(session_factory)

    assert await store.mark_read_bulk([]) == 0


async def test_list_for_recipient_is_newest_first_and_paginated(session_factory):
    store = NotificationStore(session_factory)
    created = [await store.create(_draft(title=f"n{i}")) for i in range(5)]
    await store.create(_draft("U2"))

    first_page = await store.list_for_recipient("U1", limit=2)
    second_page = await store.list_for_recipient("U1", limit=2, offset=2)
    everything = await store.list_for_recipient("U1", limit=10)

    newest_first = [n.id for n in reversed(created)]
    assert [n.id for n in first_page] == newest_first[:2]
    assert [n.id for n in second_page] == newest_first[2:4]
    assert [n.id for n in everything] == newest_first


async def test_list_for_recipient_validates_window(session_factory):
    store = NotificationStore(session_factory)

    with pytest.raises(NotificationValidationError):
        await store.list_for_recipient("U1", limit=0)
    with pytest.raises(NotificationValidationError):
        await store.list_for_recipient("U1", limit=5, offset=-1)


async def test_unread_listing_and_count(session_factory):
    store = NotificationStore(session_factory)
    read = await store.create(_draft(title="read"))
    unread = await store.create(_draft(title="unread"))
    await store.mark_read(read.id)

    pending = await store.list_unread_for_recipient("U1")

    assert [n.id for n in pending] == [unread.id]
    assert await store.count_unread("U1") == 1
    assert await store.count_unread("nobody") == 0


async def test_database_errors_become_persistence_errors():
    def broken_factory():
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    store = NotificationStore(broken_factory)

    with pytest.raises(PersistenceError):
        await store.count_unread("U1")
