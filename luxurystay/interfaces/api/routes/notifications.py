"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.websockets import WebSocketState

from luxurystay.application.use_cases.notifications import (
    NotificationRuntime,
    NotificationService,
)
from luxurystay.config import get_settings
from luxurystay.domain.entities import Notification
from luxurystay.domain.exceptions import (
    NotificationValidationError,
    PersistenceError,
    TransportError,
)
from luxurystay.infrastructure.notifications import (
    NotificationSession,
    NotificationStore,
    serialize_notification,
)
from luxurystay.interfaces.api.dependencies import (
    AuthenticatedIdentity,
    decode_identity,
    get_current_identity,
    get_notification_service,
    get_notification_store,
    require_broadcast_role,
    token_authenticator,
)
from luxurystay.interfaces.api.schemas import (
    DeliveryResultRead,
    MarkReadResult,
    NotificationBroadcastRequest,
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)

INIT_EVENT = "init"


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(serialize_notification(notification))


def _store_unavailable(exc: PersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )


@router.get("/", response_model=list[NotificationRead])
async def list_notifications(
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NotificationStore = Depends(get_notification_store),
) -> list[NotificationRead]:
    """Return one page of the caller's notifications, newest first."""

    settings = get_settings()
    page_size = limit or settings.notification_page_size
    if page_size > settings.notification_page_max:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"limit cannot exceed {settings.notification_page_max}",
        )

    try:
        notifications = await store.list_for_recipient(identity.identity_id, page_size, offset)
    except NotificationValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    except PersistenceError as exc:
        raise _store_unavailable(exc) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
async def unread_count(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NotificationStore = Depends(get_notification_store),
) -> UnreadCountRead:
    try:
        count = await store.count_unread(identity.identity_id)
    except PersistenceError as exc:
        raise _store_unavailable(exc) from exc
    return UnreadCountRead(count=count)


@router.post("/read", response_model=MarkReadResult)
async def mark_notifications_as_read(
    payload: NotificationMarkReadRequest,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NotificationStore = Depends(get_notification_store),
    service: NotificationService = Depends(get_notification_service),
) -> MarkReadResult:
    """Mark the caller's notifications in ``payload`` as read.

    Identifiers owned by other recipients are ignored.
    """

    try:
        transitioned = await store.mark_read_bulk_detailed(
            payload.unique_ids(), recipient_id=identity.identity_id
        )
    except PersistenceError as exc:
        raise _store_unavailable(exc) from exc

    if transitioned:
        await service.publish_read_state(transitioned)
    return MarkReadResult(updated=len(transitioned))


@router.post("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_as_read(
    notification_id: int,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    store: NotificationStore = Depends(get_notification_store),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationRead:
    try:
        existing = await store.get(notification_id)
    except PersistenceError as exc:
        raise _store_unavailable(exc) from exc
    if existing is None or existing.recipient_id != identity.identity_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )

    try:
        notification, transitioned = await store.mark_read_detailed(notification_id)
    except PersistenceError as exc:
        raise _store_unavailable(exc) from exc
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    if transitioned:
        await service.publish_read_state([notification])
    return _notification_to_schema(notification)


@router.post("/broadcast", response_model=DeliveryResultRead)
async def broadcast_notification(
    payload: NotificationBroadcastRequest,
    identity: AuthenticatedIdentity = Depends(require_broadcast_role),
    service: NotificationService = Depends(get_notification_service),
) -> DeliveryResultRead:
    """Send a notification to a role, a room, explicit users or everyone online."""

    try:
        result = await service.deliver(payload.selector(), payload.content())
    except NotificationValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    except PersistenceError as exc:
        raise _store_unavailable(exc) from exc

    logger.info(
        "Broadcast by %s to %s: persisted=%s",
        identity.identity_id,
        payload.target,
        result.persisted_count,
    )
    return DeliveryResultRead.from_result(result)


async def _send_init(runtime: NotificationRuntime, session: NotificationSession) -> None:
    identity = session.identity
    if identity is None:
        return
    pending = await runtime.service.list_unread(identity.identity_id)
    unread = await runtime.service.get_unread_count(identity.identity_id)
    try:
        await runtime.transport.send(
            session.connection,
            {
                "type": INIT_EVENT,
                "data": {
                    "notifications": [serialize_notification(n) for n in pending],
                    "unread_count": unread,
                },
            },
        )
    except TransportError as exc:
        logger.warning("Could not send pending notifications: %s", exc.__cause__ or exc)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated identity.

    A ``token`` query parameter authenticates the connection as soon as the
    client sends ``authenticate``; without it the message must carry the
    token itself.
    """

    token = websocket.query_params.get("token")
    if token is not None:
        try:
            decode_identity(token)
        except ValueError:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

    runtime: NotificationRuntime = websocket.app.state.notifications
    await websocket.accept()
    session = runtime.open_session(websocket, authenticator=token_authenticator(token))
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except Exception:
                if websocket.application_state is not WebSocketState.CONNECTED:
                    break
                continue

            previous = session.identity
            await session.handle(message)
            if session.identity is not None and session.identity is not previous:
                await _send_init(runtime, session)
    except WebSocketDisconnect:
        logger.debug("Websocket closed by client")
    finally:
        session.disconnect()
