"""Tests for room-addressed websocket messaging."""

from __future__ import annotations

import pytest

from luxurystay.domain.exceptions import TransportError
from luxurystay.infrastructure.notifications import WebSocketTransport

pytestmark = pytest.mark.anyio


async def test_send_wraps_connection_errors(make_connection):
    transport = WebSocketTransport()

    with pytest.raises(TransportError):
        await transport.send(make_connection(fail=True), {"type": "notification"})


async def test_broadcast_skips_excluded_and_counts_failures(make_connection):
    transport = WebSocketTransport()
    sender, peer = make_connection("sender"), make_connection("peer")
    broken = make_connection("broken", fail=True)
    for handle in (sender, peer, broken):
        transport.attach(handle)
        transport.join(handle, "lobby")

    failed = await transport.broadcast("lobby", {"type": "typing-start"}, exclude=sender)

    assert failed == 1
    assert sender.sent == []
    assert peer.sent == [{"type": "typing-start"}]


async def test_broadcast_all_reaches_every_attached_connection(make_connection):
    transport = WebSocketTransport()
    first, second = make_connection("1"), make_connection("2")
    transport.attach(first)
    transport.attach(second)

    assert await transport.broadcast_all({"type": "system-update", "data": {}}) == 0
    assert len(first.sent) == len(second.sent) == 1


def test_detach_leaves_every_room(make_connection):
    transport = WebSocketTransport()
    handle = make_connection()
    transport.attach(handle)
    transport.join(handle, "user:U1")
    transport.join(handle, "floor-1")

    transport.detach(handle)

    assert transport.rooms_of(handle) == set()
    assert transport.members("user:U1") == []
    assert transport.members("floor-1") == []
    assert transport.attached() == []
