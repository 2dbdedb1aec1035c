"""Shared fixtures for the notification core tests."""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "UTC"

import pytest

from luxurystay.infrastructure import database


class FakeConnection:
    """Websocket stand-in recording the JSON messages pushed to it."""

    def __init__(self, name: str = "conn", *, fail: bool = False) -> None:
        self.name = name
        self.fail = fail
        self.sent: list[dict] = []

    async def send_json(self, message: dict) -> None:
        if self.fail:
            raise ConnectionResetError(f"{self.name} is gone")
        self.sent.append(message)

    def of_type(self, event_type: str) -> list[dict]:
        return [message for message in self.sent if message.get("type") == event_type]

    def __repr__(self) -> str:
        return f"FakeConnection({self.name!r})"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def session_factory():
    """Return a session factory bound to a freshly created schema."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database(database.engine)
    yield database.SessionLocal
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)


@pytest.fixture
def make_connection():
    def factory(name: str = "conn", *, fail: bool = False) -> FakeConnection:
        return FakeConnection(name, fail=fail)

    return factory
