"""Composition of the notification components shared by one process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from luxurystay.infrastructure.notifications import (
    Authenticator,
    ConnectionDirectory,
    DeliveryDispatcher,
    NotificationSession,
    NotificationStore,
    WebSocketTransport,
    parse_authentication,
)

from .service import NotificationService


@dataclass
class NotificationRuntime:
    """Directory, transport, store, dispatcher and facade wired together."""

    directory: ConnectionDirectory
    transport: WebSocketTransport
    store: NotificationStore
    dispatcher: DeliveryDispatcher
    service: NotificationService

    def open_session(
        self, handle, *, authenticator: Authenticator | None = None
    ) -> NotificationSession:
        """Start the handshake for a freshly accepted connection."""

        return NotificationSession(
            handle,
            directory=self.directory,
            transport=self.transport,
            on_ack=self._acknowledge,
            authenticator=authenticator or parse_authentication,
        )

    async def _acknowledge(self, identity_id: str, ids: list[int]) -> int:
        return await self.service.mark_read_bulk(ids, recipient_id=identity_id)


def build_notification_runtime(session_factory: Callable[[], Session]) -> NotificationRuntime:
    directory = ConnectionDirectory()
    transport = WebSocketTransport()
    store = NotificationStore(session_factory)
    dispatcher = DeliveryDispatcher(store, directory, transport)
    return NotificationRuntime(
        directory=directory,
        transport=transport,
        store=store,
        dispatcher=dispatcher,
        service=NotificationService(dispatcher, store),
    )


__all__ = ["NotificationRuntime", "build_notification_runtime"]
