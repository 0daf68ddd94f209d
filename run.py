"""Entry point for the School Activities API.

Starts the FastAPI application under Uvicorn.  Host, port, database
path and the other settings are read from environment variables (see
``activity_booking_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from activity_booking_api.app.core.config import settings
from activity_booking_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    # Logging is already configured by create_app; Uvicorn only sets levels.
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
