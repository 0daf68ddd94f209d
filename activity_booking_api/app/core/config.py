"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can start against a local SQLite file without any setup.  In
a production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "School Activities API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Path to the SQLite database file.  A relative path is resolved
    # against the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "after_school_activities.db")
    # Seconds a connection waits on a locked database before failing.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "5"))

    # Store calls are retried with exponential backoff: the first retry
    # waits ``retry_delay_ms`` and every following one doubles it.
    retry_attempts: int = int(os.getenv("RETRY_ATTEMPTS", "3"))
    retry_delay_ms: int = int(os.getenv("RETRY_DELAY_MS", "1000"))

    # Upper bound on ``limit`` for paginated listings.
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(
            os.getenv("CORS_ORIGINS", "https://yourfrontend.com,http://localhost:5173")
        )
    )

    @property
    def retry_delay(self) -> float:
        """Initial retry delay in seconds."""
        return self.retry_delay_ms / 1000


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
