"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from signon.api import api_router
from signon.core.config import Settings, get_settings
from signon.core.logging import setup_logging
from signon.core.security import Hasher, PasswordHasher
from signon.db.session import Database

logger = logging.getLogger(__name__)

_DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent.parent / "static"


def create_app(
    settings: Settings | None = None,
    *,
    database: Database | None = None,
    password_hasher: Hasher | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    database = database or Database(settings.database_url, echo=settings.database_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.initialize()
        logger.info("%s started", settings.app_name)
        try:
            yield
        finally:
            await database.dispose()
            logger.info("%s stopped", settings.app_name)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.database = database
    app.state.password_hasher = password_hasher or PasswordHasher(settings.password_schemes)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # Serve the built client if present; API routes are registered first and take precedence
    static_dir = settings.static_dir or _DEFAULT_STATIC_DIR
    if static_dir.exists() and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()
