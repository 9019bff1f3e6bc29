"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Wedding Planner API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # Level of uvicorn's per-request access log; WARNING silences it.
    access_log_level: str = os.getenv("ACCESS_LOG_LEVEL", "INFO")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Origin allowed by CORS.  The web client is served separately.
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:8080")

    # Path to the SQLite database file.  If a relative path is
    # provided, it will be resolved relative to the project root by the
    # ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "wedding_planner.db")

    # Seconds a connection waits on a locked database before failing.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "10"))

    # Redraws allowed when a freshly drawn invite code is already taken.
    invite_code_max_attempts: int = int(os.getenv("INVITE_CODE_MAX_ATTEMPTS", "10"))

    # Attempts for a nested-list mutation before giving up on version
    # conflicts.  Clamped to 1..5 by ``MutationPolicy``.
    mutation_max_attempts: int = int(os.getenv("MUTATION_MAX_ATTEMPTS", "3"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
