"""Realtime notification infrastructure."""

from .directory import ConnectionDirectory
from .dispatcher import DeliveryDispatcher
from .serializers import (
    NOTIFICATION_EVENT,
    READ_STATE_EVENT,
    notification_event,
    read_state_event,
    serialize_notification,
)
from .session import (
    Authenticator,
    NotificationSession,
    SessionIdentity,
    SessionState,
    parse_authentication,
)
from .store import NotificationStore
from .transport import WebSocketTransport, identity_room, role_room

__all__ = [
    "Authenticator",
    "ConnectionDirectory",
    "DeliveryDispatcher",
    "NOTIFICATION_EVENT",
    "NotificationSession",
    "NotificationStore",
    "READ_STATE_EVENT",
    "SessionIdentity",
    "SessionState",
    "WebSocketTransport",
    "identity_room",
    "notification_event",
    "parse_authentication",
    "read_state_event",
    "role_room",
    "serialize_notification",
]
