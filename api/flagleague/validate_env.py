"""Fail-fast environment validation for the league API.

Runs before ``Settings`` is read and covers the database URL, CORS and the
session, password and rate-limit knobs.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from urllib.parse import urlparse


ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}

# Registration never accepts shorter passwords, whatever the environment says.
PASSWORD_MIN_LENGTH_FLOOR = 6
PASSWORD_MIN_LENGTH_CEILING = 128

_COOKIE_NAME_RE = re.compile(r"[A-Za-z0-9_\-]+")


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        raise RuntimeError(f"{name} is required and must be set before startup.")
    return value.strip()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {value!r}.") from None


def _validate_environment_value(environment: str) -> None:
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def _validate_database_url(value: str, *, production: bool) -> None:
    parsed = urlparse(value)
    if not parsed.scheme.startswith("postgresql"):
        raise RuntimeError("DATABASE_URL must be a postgresql URL.")
    if not parsed.hostname:
        raise RuntimeError("DATABASE_URL must be a valid URL (missing hostname).")
    if production and parsed.username == "postgres" and parsed.password == "postgres":
        raise RuntimeError("DATABASE_URL must not use default postgres credentials in production.")


def _validate_auth_settings() -> None:
    max_age = _optional_int("SESSION_MAX_AGE_SECONDS")
    if max_age is not None and max_age <= 0:
        raise RuntimeError("SESSION_MAX_AGE_SECONDS must be a positive number of seconds.")

    min_length = _optional_int("PASSWORD_MIN_LENGTH")
    if min_length is not None and not (
        PASSWORD_MIN_LENGTH_FLOOR <= min_length <= PASSWORD_MIN_LENGTH_CEILING
    ):
        raise RuntimeError(
            f"PASSWORD_MIN_LENGTH must be between {PASSWORD_MIN_LENGTH_FLOOR} "
            f"and {PASSWORD_MIN_LENGTH_CEILING}."
        )

    for name in ("AUTH_RATE_LIMIT_REQUESTS", "AUTH_RATE_LIMIT_WINDOW_SECONDS"):
        value = _optional_int(name)
        if value is not None and value <= 0:
            raise RuntimeError(f"{name} must be positive.")

    cookie_name = os.getenv("SESSION_COOKIE_NAME")
    if cookie_name is not None and not _COOKIE_NAME_RE.fullmatch(cookie_name.strip()):
        raise RuntimeError("SESSION_COOKIE_NAME may only contain letters, digits, '_' and '-'.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate required environment variables before the API starts."""
    environment = _require_env("ENVIRONMENT")
    _validate_environment_value(environment)
    production = environment == "production"

    _validate_database_url(_require_env("DATABASE_URL"), production=production)
    _validate_auth_settings()

    if production:
        allowed_cors = _require_env("ALLOWED_CORS_ORIGINS")
        if "localhost" in allowed_cors or "127.0.0.1" in allowed_cors:
            raise RuntimeError("ALLOWED_CORS_ORIGINS must not include localhost in production.")
