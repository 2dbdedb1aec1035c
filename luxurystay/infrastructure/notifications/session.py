"""Per-connection handshake binding a websocket to an authenticated identity."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from luxurystay.domain.exceptions import TransportError

from .directory import ConnectionDirectory
from .transport import WebSocketTransport, identity_room, role_room

logger = logging.getLogger(__name__)

AckHandler = Callable[[str, list[int]], Awaitable[Any]]
Authenticator = Callable[[Any], "SessionIdentity | None"]

_RESERVED_ROOM_PREFIXES = ("user:", "role:")
_TYPING_EVENTS = ("typing-start", "typing-stop")


class SessionState(str, Enum):
    CONNECTED_UNAUTHENTICATED = "connected_unauthenticated"
    CONNECTED_AUTHENTICATED = "connected_authenticated"
    DISCONNECTED = "disconnected"


@dataclass(frozen=True)
class SessionIdentity:
    identity_id: str
    role: str
    display_name: str


def parse_authentication(payload: Any) -> SessionIdentity | None:
    """Return the identity described by ``payload`` or ``None`` when malformed."""

    if not isinstance(payload, dict):
        return None
    identity_id = payload.get("identity_id")
    role = payload.get("role")
    display_name = payload.get("display_name") or ""
    if not isinstance(identity_id, str) or not identity_id.strip():
        return None
    if not isinstance(role, str) or not role.strip():
        return None
    if not isinstance(display_name, str):
        return None
    return SessionIdentity(
        identity_id=identity_id.strip(),
        role=role.strip(),
        display_name=display_name.strip(),
    )


class NotificationSession:
    """Drive one connection through connect, authenticate and disconnect.

    Until it authenticates a connection only answers pings and receives
    transport-wide broadcasts. Once authenticated it is registered in the
    directory and joined to its identity and role rooms, so notifications
    addressed to either reach it.
    """

    def __init__(
        self,
        handle: Any,
        *,
        directory: ConnectionDirectory,
        transport: WebSocketTransport,
        on_ack: AckHandler | None = None,
        authenticator: Authenticator = parse_authentication,
    ) -> None:
        self.connection = handle
        self._directory = directory
        self._transport = transport
        self._on_ack = on_ack
        self._authenticator = authenticator
        self._state = SessionState.CONNECTED_UNAUTHENTICATED
        self._identity: SessionIdentity | None = None
        transport.attach(handle)
        logger.info("Client connected to notification service")

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def identity(self) -> SessionIdentity | None:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.CONNECTED_AUTHENTICATED

    async def authenticate(self, payload: Any) -> bool:
        """Bind the connection to the identity in ``payload``.

        A malformed or rejected payload leaves the session unauthenticated
        so the client can retry.
        """

        if self._state is SessionState.DISCONNECTED:
            return False

        identity = self._authenticator(payload)
        if identity is None:
            logger.warning("Rejected websocket authentication payload")
            await self._reply(
                "authentication_error",
                {"message": "A valid identity_id and role are required"},
            )
            return False

        if self._identity is not None:
            self._release_identity()

        self._directory.register(
            identity.identity_id,
            identity.role,
            self.connection,
            display_name=identity.display_name,
        )
        self._transport.join(self.connection, identity_room(identity.identity_id))
        self._transport.join(self.connection, role_room(identity.role))
        self._identity = identity
        self._state = SessionState.CONNECTED_AUTHENTICATED

        logger.info(
            "Identity %s authenticated on websocket with role %s",
            identity.identity_id,
            identity.role,
        )
        await self._reply(
            "authenticated",
            {
                "message": "Successfully connected to notification service",
                "identity_id": identity.identity_id,
                "role": identity.role,
            },
        )
        return True

    async def handle(self, message: Any) -> None:
        """Process one inbound client message."""

        if self._state is SessionState.DISCONNECTED or not isinstance(message, dict):
            return

        message_type = message.get("type")
        data = message.get("data")

        if message_type == "authenticate":
            await self.authenticate(data if isinstance(data, dict) else message)
            return

        if message_type == "ping":
            await self._reply("pong", None)
            return

        if not self.is_authenticated or self._identity is None:
            logger.debug("Ignoring %r from unauthenticated connection", message_type)
            return

        if message_type == "ack":
            ids = message.get("ids", [])
            if isinstance(ids, list) and ids and self._on_ack is not None:
                valid_ids = [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]
                if valid_ids:
                    await self._on_ack(self._identity.identity_id, valid_ids)
            return

        room = message.get("room")
        if message_type == "join-room" and self._is_public_room(room):
            self._transport.join(self.connection, room)
            logger.info("Identity %s joined room %s", self._identity.identity_id, room)
        elif message_type == "leave-room" and self._is_public_room(room):
            self._transport.leave(self.connection, room)
            logger.info("Identity %s left room %s", self._identity.identity_id, room)
        elif message_type in _TYPING_EVENTS and self._is_public_room(room):
            if room in self._transport.rooms_of(self.connection):
                await self._transport.broadcast(
                    room,
                    {
                        "type": message_type,
                        "data": {"room": room, "identity_id": self._identity.identity_id},
                    },
                    exclude=self.connection,
                )
        else:
            logger.debug("Ignoring unsupported message %r", message_type)

    def disconnect(self) -> None:
        """Tear the session down; safe to call more than once."""

        if self._state is SessionState.DISCONNECTED:
            return
        if self._identity is not None:
            logger.info("Identity %s disconnected from websocket", self._identity.identity_id)
        else:
            logger.info("Unauthenticated client disconnected")
        self._directory.unregister(self.connection)
        self._transport.detach(self.connection)
        self._state = SessionState.DISCONNECTED

    def _release_identity(self) -> None:
        identity = self._identity
        if identity is None:
            return
        self._directory.unregister(self.connection)
        self._transport.leave(self.connection, identity_room(identity.identity_id))
        self._transport.leave(self.connection, role_room(identity.role))
        self._identity = None

    @staticmethod
    def _is_public_room(room: Any) -> bool:
        return (
            isinstance(room, str)
            and bool(room.strip())
            and not room.startswith(_RESERVED_ROOM_PREFIXES)
        )

    async def _reply(self, event_type: str, data: Any) -> None:
        try:
            await self._transport.send(self.connection, {"type": event_type, "data": data})
        except TransportError as exc:
            logger.warning("Could not reply %r to client: %s", event_type, exc.__cause__ or exc)


__all__ = [
    "AckHandler",
    "Authenticator",
    "NotificationSession",
    "SessionIdentity",
    "SessionState",
    "parse_authentication",
]
