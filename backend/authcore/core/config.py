"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

PLACEHOLDER_SECRETS: Final[frozenset[str]] = frozenset({"CHANGE_ME", "CHANGE_ME_JWT"})
REVOCATION_BACKENDS: Final[frozenset[str]] = frozenset({"sqlalchemy", "redis", "memory"})

# Load .env during development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


def env_seconds(name: str, default: timedelta) -> timedelta:
    """Read a lifetime expressed in seconds as a :class:`~datetime.timedelta`."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return timedelta(seconds=int(val))


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    SECRET_KEY: str
        Flask secret. Defaults to a development placeholder.
    JWT_SECRET_KEY: str
        HMAC key used by ``flask-jwt-extended`` to sign both token kinds.
    JWT_ALGORITHM: str
        Signing algorithm (``HS256``).
    JWT_ACCESS_TOKEN_EXPIRES / JWT_REFRESH_TOKEN_EXPIRES: timedelta
        Token lifetimes (1 hour / 7 days).
    JWT_ENCODE_ISSUER / JWT_DECODE_ISSUER: str
        ``iss`` claim written on issue and required on decode.
    JWT_ENCODE_AUDIENCE / JWT_DECODE_AUDIENCE: str
        ``aud`` claim written on issue and required on decode.
    BCRYPT_ROUNDS: int
        bcrypt cost factor.
    HASHING_POOL_SIZE: int
        Upper bound on concurrent hash/verify calls.
    REVOCATION_BACKEND: str
        ``sqlalchemy`` | ``redis`` | ``memory``.
    REVOCATION_PURGE_ON_WRITE: bool
        Drop expired revocations whenever a new one is stored (SQL backend).
    REDIS_URL: str | None
        Connection URL, required for the ``redis`` backend.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = env_seconds("JWT_ACCESS_TOKEN_EXPIRES", timedelta(hours=1))
    JWT_REFRESH_TOKEN_EXPIRES = env_seconds("JWT_REFRESH_TOKEN_EXPIRES", timedelta(days=7))
    JWT_ENCODE_ISSUER = os.getenv("JWT_ISSUER", "authcore")
    JWT_DECODE_ISSUER = JWT_ENCODE_ISSUER
    JWT_ENCODE_AUDIENCE = os.getenv("JWT_AUDIENCE", "authcore-client")
    JWT_DECODE_AUDIENCE = JWT_ENCODE_AUDIENCE

    # Password hashing
    BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 12)
    HASHING_POOL_SIZE = env_int("HASHING_POOL_SIZE", os.cpu_count() or 4)

    # Revocation storage
    REVOCATION_BACKEND = os.getenv("REVOCATION_BACKEND", "sqlalchemy").strip().lower()
    REVOCATION_PURGE_ON_WRITE = env_bool("REVOCATION_PURGE_ON_WRITE", True)
    REDIS_URL = os.getenv("REDIS_URL") or None

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Lowers the bcrypt cost so the suite stays fast.
    - Keeps revocations in the database; Redis tests use ``fakeredis``.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "test-secret-key-with-at-least-32-bytes!"
    BCRYPT_ROUNDS = 4
    HASHING_POOL_SIZE = 4
    REVOCATION_BACKEND = "sqlalchemy"
    REDIS_URL = None
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    :func:`validate_secrets` refuses to boot with placeholder keys.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def validate_secrets(config: Mapping[str, Any]) -> None:
    """Reject unusable settings before extensions are bound.

    Raises
    ------
    RuntimeError
        When a production app still carries placeholder secrets, the
        revocation backend is unknown, or ``redis`` is selected without
        ``REDIS_URL``.
    """
    backend = config.get("REVOCATION_BACKEND", "sqlalchemy")
    if backend not in REVOCATION_BACKENDS:
        raise RuntimeError(f"Unknown REVOCATION_BACKEND {backend!r}")
    if backend == "redis" and not config.get("REDIS_URL"):
        raise RuntimeError("REVOCATION_BACKEND=redis requires REDIS_URL")

    if config.get("DEBUG") or config.get("TESTING"):
        return
    for key in ("SECRET_KEY", "JWT_SECRET_KEY"):
        if not config.get(key) or config.get(key) in PLACEHOLDER_SECRETS:
            raise RuntimeError(f"{key} must be set to a real secret in production")
