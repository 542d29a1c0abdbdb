"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables when it is instantiated.  Defaults are provided
for all fields.  Business logic never reads the module level
``settings`` object: ``create_app`` receives a ``Settings`` value and
hands it to the services and the persistence layer, so tests can build
their own instance with a temporary database and a known secret.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Employee Directory API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: _env("LOG_FILE", ""))

    # Secret used to sign login tokens.  Loaded once at startup; always
    # override the default outside of development.
    secret_key: str = field(default_factory=lambda: _env("SECRET_KEY", "change_me"))
    algorithm: str = field(default_factory=lambda: _env("ALGORITHM", "HS256"))

    # PBKDF2 iteration count.  Stored alongside each hash, so raising it
    # later does not invalidate existing accounts.
    password_hash_iterations: int = field(
        default_factory=lambda: int(_env("PASSWORD_HASH_ITERATIONS", "100000"))
    )

    # Path to the SQLite file backing the document store.  A relative
    # path is resolved against the project root by ``core.db``.
    database_url: str = field(default_factory=lambda: _env("DATABASE_URL", "employee_directory.db"))

    # Comma-separated list of allowed CORS origins.  ``*`` allows any.
    cors_origins: str = field(default_factory=lambda: _env("CORS_ORIGINS", "*"))

    # When enabled, employee routes require a valid bearer token issued
    # by the login endpoint.  The original API is open, hence the default.
    employee_auth_required: bool = field(default_factory=lambda: _env_bool("EMPLOYEE_AUTH_REQUIRED"))

    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "5000")))

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once for the process bootstrap (``run.py`` and
# the module level ``app``).  Environment variables must be set before
# this module is imported for them to take effect here.
settings = Settings()
