"""
Main entrypoint for the School Activities API.

This module assembles the FastAPI application, sets up logging, CORS
and error handling, and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn activity_booking_api.app.main:app --reload

The routes are served both under ``/api/v1`` and at the root, where
existing front ends expect them.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.db import Database, resolve_database_path
from .core.exception_handlers import register_exception_handlers
from .core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the store before serving and close it on shutdown."""
    # Creates the database file if needed and applies migrations.
    app.state.database.open()
    try:
        yield
    finally:
        app.state.database.close()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``
        (tests pass their own database path and retry delays).

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  Its store handle is
        opened on startup and closed on shutdown.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = Database(
        resolve_database_path(app_settings.database_url),
        timeout=app_settings.db_timeout,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )
    register_exception_handlers(app)

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(v1_router, include_in_schema=False)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {"message": "School Activities API is running"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
