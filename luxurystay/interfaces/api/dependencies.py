"""FastAPI dependency utilities."""

from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from luxurystay.application.use_cases.notifications import (
    NotificationRuntime,
    NotificationService,
)
from luxurystay.domain.entities import BROADCAST_ROLES
from luxurystay.infrastructure.notifications import (
    Authenticator,
    NotificationStore,
    SessionIdentity,
)
from luxurystay.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer()


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Caller described by the claims of a verified bearer token."""

    identity_id: str
    role: str
    display_name: str = ""


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_identity(token: str) -> AuthenticatedIdentity:
    """Return the identity carried by ``token`` or raise ``ValueError``."""

    payload = decode_access_token(token)
    identity_id = payload.get("sub")
    role = payload.get("role")
    if not isinstance(identity_id, str) or not identity_id:
        raise ValueError("Token has no subject")
    if not isinstance(role, str) or not role:
        raise ValueError("Token has no role")
    name = payload.get("name")
    return AuthenticatedIdentity(
        identity_id=identity_id,
        role=role,
        display_name=name if isinstance(name, str) else "",
    )


def resolve_identity(token: str) -> AuthenticatedIdentity:
    try:
        return decode_identity(token)
    except ValueError as exc:
        raise _invalid_credentials() from exc


def token_authenticator(default_token: str | None = None) -> Authenticator:
    """Build a websocket authenticator backed by signed bearer tokens.

    The token comes from the authentication message or, failing that, from
    ``default_token``. Identity fields sent alongside it must match the
    token claims.
    """

    def authenticate(payload: Any) -> SessionIdentity | None:
        if not isinstance(payload, dict):
            return None
        token = payload.get("token") or default_token
        if not isinstance(token, str) or not token:
            return None
        try:
            identity = decode_identity(token)
        except ValueError:
            return None

        for field, claimed in (("identity_id", identity.identity_id), ("role", identity.role)):
            sent = payload.get(field)
            if sent is not None and (not isinstance(sent, str) or sent.strip() != claimed):
                return None
        return SessionIdentity(
            identity_id=identity.identity_id,
            role=identity.role,
            display_name=identity.display_name,
        )

    return authenticate


def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> AuthenticatedIdentity:
    return resolve_identity(credentials.credentials)


def require_broadcast_role(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
) -> AuthenticatedIdentity:
    """Ensure the caller may broadcast to groups of users."""

    if identity.role not in BROADCAST_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return identity


def get_notification_runtime(request: Request) -> NotificationRuntime:
    return request.app.state.notifications


def get_notification_service(
    runtime: NotificationRuntime = Depends(get_notification_runtime),
) -> NotificationService:
    return runtime.service


def get_notification_store(
    runtime: NotificationRuntime = Depends(get_notification_runtime),
) -> NotificationStore:
    return runtime.store
