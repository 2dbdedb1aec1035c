"""Fan-out of notifications to the store and to live connections."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable

from luxurystay.domain.entities import (
    STAGE_PERSIST,
    STAGE_PUSH,
    DeliveryFailure,
    DeliveryResult,
    Notification,
    NotificationContent,
    TargetSelector,
    ToAll,
    ToIdentities,
    ToIdentity,
    ToRole,
    ToRoom,
    broadcast_kind,
)
from luxurystay.domain.exceptions import (
    NotificationValidationError,
    PersistenceError,
    TransportError,
)
from luxurystay.domain.validators import ensure_valid_content, ensure_valid_identity_id

from .directory import ConnectionDirectory
from .serializers import notification_event, read_state_event
from .store import NotificationStore
from .transport import WebSocketTransport

logger = logging.getLogger(__name__)


class DeliveryDispatcher:
    """Persist a notification for every target, then push it to live connections.

    Persistence always happens before any push. A failed push never undoes a
    stored record and never fails the dispatch; a recipient who missed the
    push finds the notification on the next poll or reconnect.
    """

    def __init__(
        self,
        store: NotificationStore,
        directory: ConnectionDirectory,
        transport: WebSocketTransport,
    ) -> None:
        self._store = store
        self._directory = directory
        self._transport = transport

    def resolve_targets(self, selector: TargetSelector) -> list[str]:
        """Return the identities addressed by ``selector`` right now.

        Raises ``NotificationValidationError`` when an explicit identity id
        is blank or too long.
        """

        if isinstance(selector, ToIdentity):
            return [ensure_valid_identity_id(selector.identity_id)]
        if isinstance(selector, ToIdentities):
            identity_ids = [ensure_valid_identity_id(i) for i in selector.identity_ids]
            return list(dict.fromkeys(identity_ids))
        if isinstance(selector, ToRole):
            return self._directory.all_by_role(selector.role)
        if isinstance(selector, ToAll):
            return self._directory.identities()
        if isinstance(selector, ToRoom):
            identities: dict[str, None] = {}
            for handle in self._transport.members(selector.room):
                entry = self._directory.entry_for(handle)
                if entry is not None:
                    identities.setdefault(entry.identity_id, None)
            return list(identities)
        raise TypeError(f"Unsupported target selector: {selector!r}")

    async def dispatch(
        self, selector: TargetSelector, content: NotificationContent
    ) -> DeliveryResult:
        """Deliver ``content`` to every identity matched by ``selector``.

        Raises ``NotificationValidationError`` when ``content`` or an explicit
        target is malformed and ``PersistenceError`` when no target could be
        persisted.
        """

        template = ensure_valid_content(content)
        # Snapshot before the first await: later connections are not included.
        targets = self.resolve_targets(selector)
        result = DeliveryResult(targets=targets)
        if not targets:
            logger.info("No recipients matched %s; nothing dispatched", selector)
            return result

        for identity_id in targets:
            try:
                saved = await self._store.create(template.for_recipient(identity_id))
            except (NotificationValidationError, PersistenceError) as exc:
                logger.error(
                    "Failed to persist notification for %s: %s", identity_id, exc
                )
                result.failures.append(
                    DeliveryFailure(identity_id=identity_id, stage=STAGE_PERSIST, error=str(exc))
                )
                continue
            result.persisted.append(saved)

        if not result.persisted:
            msg = f"Notification could not be persisted for any of {len(targets)} target(s)"
            raise PersistenceError(msg)

        context = _broadcast_context(selector)
        for saved in result.persisted:
            await self._push(saved, self._handles_for(selector, saved.recipient_id), result, context)

        logger.info(
            "Dispatched %s notification to %s: persisted=%s pushes=%s push_failures=%s",
            template.type.value,
            selector,
            result.persisted_count,
            result.push_attempted,
            result.push_failed,
        )
        return result

    async def publish_read_state(
        self, recipient_id: str, ids: Iterable[int], read_date: datetime | None
    ) -> int:
        """Tell every device of ``recipient_id`` that ``ids`` are now read.

        Returns the number of connections that could not be reached.
        """

        message = read_state_event(ids, read_date)
        failed = 0
        for handle in self._directory.connections_for(recipient_id):
            try:
                await self._transport.send(handle, dict(message))
            except TransportError as exc:
                failed += 1
                logger.warning("Read state push to %s failed: %s", recipient_id, exc)
        return failed

    async def emit_to_all(self, event_type: str, data: Any) -> int:
        """Send a raw event to every attached connection."""

        return await self._transport.broadcast_all({"type": event_type, "data": data})

    def _handles_for(self, selector: TargetSelector, identity_id: str) -> list[Any]:
        """Return the live handles a push for ``identity_id`` should reach.

        Room dispatches only reach the connections joined to that room.
        """

        if isinstance(selector, ToRoom):
            handles = []
            for handle in self._transport.members(selector.room):
                entry = self._directory.entry_for(handle)
                if entry is not None and entry.identity_id == identity_id:
                    handles.append(handle)
            return handles
        return self._directory.connections_for(identity_id)

    async def _push(
        self,
        notification: Notification,
        handles: list[Any],
        result: DeliveryResult,
        context: dict[str, Any],
    ) -> None:
        if not handles:
            logger.info(
                "Recipient %s not connected; notification %s saved for later",
                notification.recipient_id,
                notification.id,
            )
            return

        message = notification_event(notification, **context)
        for handle in handles:
            result.push_attempted += 1
            try:
                await self._transport.send(handle, dict(message))
            except TransportError as exc:
                result.push_failed += 1
                result.failures.append(
                    DeliveryFailure(
                        identity_id=notification.recipient_id,
                        stage=STAGE_PUSH,
                        error=str(exc),
                    )
                )
                logger.warning(
                    "Realtime push of notification %s to %s failed: %s",
                    notification.id,
                    notification.recipient_id,
                    exc.__cause__ or exc,
                )


def _broadcast_context(selector: TargetSelector) -> dict[str, Any]:
    kind = broadcast_kind(selector)
    if kind is None:
        return {}
    context: dict[str, Any] = {"kind": kind}
    if isinstance(selector, ToRole):
        context["role"] = selector.role
    elif isinstance(selector, ToRoom):
        context["room"] = selector.room
    return context


__all__ = ["DeliveryDispatcher"]
