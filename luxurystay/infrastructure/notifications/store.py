"""Asynchronous access to persisted notifications."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, TypeVar

from anyio import to_thread
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from luxurystay.domain.entities import Notification, NotificationDraft
from luxurystay.domain.exceptions import PersistenceError
from luxurystay.domain.validators import ensure_page_window, ensure_valid_draft
from luxurystay.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class NotificationStore:
    """Durable CRUD for notifications, safe to await from the event loop.

    Every call opens its own session from ``session_factory`` and runs the
    repository work in a worker thread so the loop keeps serving
    connections while the database responds.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    async def create(self, draft: NotificationDraft) -> Notification:
        """Validate and persist ``draft``.

        Raises ``NotificationValidationError`` before touching the database
        and ``PersistenceError`` when the write fails.
        """

        validated = ensure_valid_draft(draft)
        return await self._run("create", lambda repository: repository.create(validated))

    async def get(self, notification_id: int) -> Notification | None:
        return await self._run("get", lambda repository: repository.get(notification_id))

    async def list_for_recipient(
        self, recipient_id: str, limit: int = 10, offset: int = 0
    ) -> list[Notification]:
        """Return one page of ``recipient_id``'s notifications, newest first."""

        ensure_page_window(limit, offset)
        return await self._run(
            "list",
            lambda repository: list(
                repository.list_for_recipient(recipient_id, limit=limit, offset=offset)
            ),
        )

    async def list_unread_for_recipient(
        self, recipient_id: str, limit: int = 50
    ) -> list[Notification]:
        ensure_page_window(limit, 0)
        return await self._run(
            "list_unread",
            lambda repository: list(
                repository.list_unread_for_recipient(recipient_id, limit=limit)
            ),
        )

    async def count_unread(self, recipient_id: str) -> int:
        return await self._run(
            "count_unread", lambda repository: repository.count_unread(recipient_id)
        )

    async def mark_read(self, notification_id: int) -> Notification | None:
        """Mark a notification as read; already-read records are returned unchanged."""

        notification, _ = await self.mark_read_detailed(notification_id)
        return notification

    async def mark_read_detailed(
        self, notification_id: int
    ) -> tuple[Notification | None, bool]:
        """Like :meth:`mark_read` but also report whether this call changed it."""

        return await self._run(
            "mark_read", lambda repository: repository.mark_as_read(notification_id)
        )

    async def mark_read_bulk(
        self, notification_ids: Iterable[int], *, recipient_id: str | None = None
    ) -> int:
        """Return how many of ``notification_ids`` went from unread to read."""

        transitioned = await self.mark_read_bulk_detailed(
            notification_ids, recipient_id=recipient_id
        )
        return len(transitioned)

    async def mark_read_bulk_detailed(
        self, notification_ids: Iterable[int], *, recipient_id: str | None = None
    ) -> list[Notification]:
        ids = list(notification_ids)
        return await self._run(
            "mark_read_bulk",
            lambda repository: repository.mark_many_as_read(ids, recipient_id=recipient_id),
        )

    async def _run(
        self, operation: str, work: Callable[[NotificationRepository], _T]
    ) -> _T:
        def call() -> _T:
            with self._session_factory() as session:
                return work(NotificationRepository(session))

        try:
            return await to_thread.run_sync(call)
        except SQLAlchemyError as exc:
            logger.exception("Notification store operation '%s' failed", operation)
            raise PersistenceError(f"Notification store operation '{operation}' failed") from exc


__all__ = ["NotificationStore"]
