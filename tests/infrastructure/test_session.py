"""Tests for the websocket session handshake."""

from __future__ import annotations

import pytest

from luxurystay.infrastructure.notifications import (
    ConnectionDirectory,
    NotificationSession,
    SessionState,
    WebSocketTransport,
    parse_authentication,
)

pytestmark = pytest.mark.anyio


def _session(handle, *, on_ack=None):
    directory = ConnectionDirectory()
    transport = WebSocketTransport()
    session = NotificationSession(
        handle, directory=directory, transport=transport, on_ack=on_ack
    )
    return session, directory, transport


async def test_authentication_registers_and_joins_rooms(make_connection):
    handle = make_connection()
    session, directory, transport = _session(handle)

    assert await session.authenticate(
        {"identity_id": "U1", "role": "receptionist", "display_name": "Ana"}
    )

    assert session.state is SessionState.CONNECTED_AUTHENTICATED
    assert directory.connections_for("U1") == [handle]
    assert transport.rooms_of(handle) == {"user:U1", "role:receptionist"}
    assert session.connection is handle
    (reply,) = handle.of_type("authenticated")
    assert reply["data"]["identity_id"] == "U1"
    assert reply["data"]["role"] == "receptionist"


@pytest.mark.parametrize(
    "payload",
    [None, {}, {"identity_id": "U1"}, {"role": "guest"}, {"identity_id": "  ", "role": "guest"}],
)
async def test_malformed_authentication_keeps_session_open(make_connection, payload):
    handle = make_connection()
    session, directory, _ = _session(handle)

    assert await session.authenticate(payload) is False

    assert session.state is SessionState.CONNECTED_UNAUTHENTICATED
    assert directory.connection_count() == 0
    assert len(handle.of_type("authentication_error")) == 1


async def test_authenticator_can_refuse_a_well_formed_payload(make_connection):
    handle = make_connection()
    directory = ConnectionDirectory()
    session = NotificationSession(
        handle,
        directory=directory,
        transport=WebSocketTransport(),
        authenticator=lambda payload: None,
    )

    await session.handle(
        {"type": "authenticate", "data": {"identity_id": "U1", "role": "guest"}}
    )

    assert session.state is SessionState.CONNECTED_UNAUTHENTICATED
    assert not directory.is_reachable("U1")
    assert len(handle.of_type("authentication_error")) == 1


async def test_client_can_retry_after_a_failed_authentication(make_connection):
    handle = make_connection()
    session, directory, _ = _session(handle)

    await session.handle({"type": "authenticate", "data": {"role": "guest"}})
    await session.handle({"type": "authenticate", "identity_id": "G1", "role": "guest"})

    assert session.is_authenticated
    assert directory.is_reachable("G1")


async def test_reauthentication_moves_the_connection(make_connection):
    handle = make_connection()
    session, directory, transport = _session(handle)
    await session.authenticate({"identity_id": "U1", "role": "guest"})

    await session.authenticate({"identity_id": "U2", "role": "manager"})

    assert not directory.is_reachable("U1")
    assert directory.is_reachable("U2")
    assert transport.rooms_of(handle) == {"user:U2", "role:manager"}


async def test_ping_is_answered_before_authentication(make_connection):
    handle = make_connection()
    session, _, _ = _session(handle)

    await session.handle({"type": "ping"})

    assert handle.sent == [{"type": "pong", "data": None}]


async def test_unauthenticated_messages_are_ignored(make_connection):
    acked = []

    async def on_ack(identity_id, ids):
        acked.append((identity_id, ids))

    handle = make_connection()
    session, _, transport = _session(handle, on_ack=on_ack)

    await session.handle({"type": "ack", "ids": [1]})
    await session.handle({"type": "join-room", "room": "lobby"})

    assert acked == []
    assert transport.rooms_of(handle) == set()


async def test_ack_forwards_integer_ids(make_connection):
    acked = []

    async def on_ack(identity_id, ids):
        acked.append((identity_id, ids))

    session, _, _ = _session(make_connection(), on_ack=on_ack)
    await session.authenticate({"identity_id": "U1", "role": "guest"})

    await session.handle({"type": "ack", "ids": [3, "4", True, 5]})
    await session.handle({"type": "ack", "ids": []})

    assert acked == [("U1", [3, 5])]


async def test_public_rooms_can_be_joined_but_reserved_rooms_cannot(make_connection):
    handle = make_connection()
    session, _, transport = _session(handle)
    await session.authenticate({"identity_id": "U1", "role": "guest"})

    await session.handle({"type": "join-room", "room": "floor-2"})
    await session.handle({"type": "join-room", "room": "user:U9"})
    await session.handle({"type": "join-room", "room": "role:admin"})

    assert transport.rooms_of(handle) == {"user:U1", "role:guest", "floor-2"}

    await session.handle({"type": "leave-room", "room": "floor-2"})
    assert "floor-2" not in transport.rooms_of(handle)


async def test_typing_events_are_relayed_to_other_room_members(make_connection):
    directory = ConnectionDirectory()
    transport = WebSocketTransport()
    alice_handle, bob_handle = make_connection("alice"), make_connection("bob")
    alice = NotificationSession(alice_handle, directory=directory, transport=transport)
    bob = NotificationSession(bob_handle, directory=directory, transport=transport)
    await alice.authenticate({"identity_id": "A", "role": "receptionist"})
    await bob.authenticate({"identity_id": "B", "role": "receptionist"})
    await alice.handle({"type": "join-room", "room": "front-desk"})
    await bob.handle({"type": "join-room", "room": "front-desk"})

    await alice.handle({"type": "typing-start", "room": "front-desk"})

    assert bob_handle.of_type("typing-start") == [
        {"type": "typing-start", "data": {"room": "front-desk", "identity_id": "A"}}
    ]
    assert alice_handle.of_type("typing-start") == []


async def test_disconnect_is_idempotent(make_connection):
    handle = make_connection()
    session, directory, transport = _session(handle)
    await session.authenticate({"identity_id": "U1", "role": "guest"})

    session.disconnect()
    session.disconnect()

    assert session.state is SessionState.DISCONNECTED
    assert not directory.is_reachable("U1")
    assert transport.attached() == []
    assert transport.members("user:U1") == []
    assert await session.authenticate({"identity_id": "U1", "role": "guest"}) is False


async def test_failed_reply_does_not_break_authentication(make_connection):
    handle = make_connection(fail=True)
    session, directory, _ = _session(handle)

    assert await session.authenticate({"identity_id": "U1", "role": "guest"})
    assert directory.is_reachable("U1")


def test_parse_authentication_trims_values():
    identity = parse_authentication(
        {"identity_id": " U1 ", "role": " guest ", "display_name": " Bea "}
    )

    assert identity.identity_id == "U1"
    assert identity.role == "guest"
    assert identity.display_name == "Bea"
