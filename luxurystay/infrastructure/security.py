"""Bearer token helpers for the REST API."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from luxurystay.config import get_settings

ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def create_identity_token(
    identity_id: str,
    role: str,
    display_name: str = "",
    expires_delta: timedelta | None = None,
) -> str:
    """Return a token carrying the ``sub``, ``role`` and ``name`` claims."""

    return create_access_token(
        {"sub": identity_id, "role": role, "name": display_name}, expires_delta
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = ["create_access_token", "create_identity_token", "decode_access_token"]
