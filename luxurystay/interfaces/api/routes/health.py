from fastapi import APIRouter, Depends

from luxurystay.application.use_cases.notifications import NotificationRuntime
from luxurystay.interfaces.api.dependencies import get_notification_runtime

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    runtime: NotificationRuntime = Depends(get_notification_runtime),
) -> dict[str, object]:
    return {
        "status": "ok",
        "connections": runtime.directory.connection_count(),
        "identities": len(runtime.directory.identities()),
    }
