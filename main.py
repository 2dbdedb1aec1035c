import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from luxurystay.application.use_cases.notifications import build_notification_runtime
from luxurystay.config import get_settings
from luxurystay.infrastructure.database import SessionLocal, engine, initialize_database
from luxurystay.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release database resources on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app(session_factory: Callable[[], Session] | None = None) -> FastAPI:
    """Create and configure the notification service application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="LuxuryStay Notifications", lifespan=lifespan)
    app.state.notifications = build_notification_runtime(session_factory or SessionLocal)

    # The dashboard talks to the API from its own origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
