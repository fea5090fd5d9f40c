"""Pytest fixtures for the authentication core.

Each test gets a fresh schema in an in-memory SQLite database (Flask-SQLAlchemy
shares a single connection through ``StaticPool``), an active app context, and
adapters built the same way :func:`authcore.create_app` builds them.
"""

from __future__ import annotations

import os
from datetime import timedelta

import pytest
from authcore.core.config import TestingConfig
from authcore.core.extensions import db as _db  # Flask-SQLAlchemy instance
from authcore.factory import create_app  # application factory under test
from authcore.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from authcore.infra.security.bcrypt_hasher import BcryptPasswordHasher
from authcore.services._shared.ports import InMemoryAccountStore, InMemoryRevocationStore
from authcore.services.auth.dto import AuthTokenConfig
from authcore.services.auth.service import AuthService
from authcore.services.auth.token_codec import TokenCodec

from tests.factories.account import DEFAULT_PASSWORD as TEST_PASSWORD


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    for var in ("DATABASE_URL", "REDIS_URL", "REVOCATION_BACKEND"):
        os.environ.pop(var, None)
    app = create_app(TestingConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def app_ctx(app):
    """Push an application context for the duration of a test."""
    with app.app_context():
        yield app


@pytest.fixture()
def db(app_ctx):
    """Create every table before the test and drop them afterwards.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    _db.create_all()
    try:
        yield _db
    finally:
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session the store adapters also use."""
    return db.session


@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when a test uses the database."""
    if "db" not in request.fixturenames:
        yield
        return
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(request.getfixturevalue("db").session)
    yield
    SQLAlchemySession.set(None)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# ------------------------- In-memory service wiring --------------------------


@pytest.fixture(scope="session")
def hasher() -> BcryptPasswordHasher:
    """Cheap bcrypt hasher (minimum cost)."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture()
def token_provider(app) -> JWTTokenProvider:
    """JWT adapter that pushes its own app context when needed."""
    return JWTTokenProvider(app)


@pytest.fixture()
def accounts() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture()
def revocations() -> InMemoryRevocationStore:
    return InMemoryRevocationStore()


@pytest.fixture()
def token_cfg() -> AuthTokenConfig:
    return AuthTokenConfig(access_expires=timedelta(hours=1), refresh_expires=timedelta(days=7))


@pytest.fixture()
def codec(token_provider, revocations, token_cfg) -> TokenCodec:
    return TokenCodec(token_provider=token_provider, revocations=revocations, token_cfg=token_cfg)


@pytest.fixture()
def service(accounts, hasher, codec) -> AuthService:
    """Build an AuthService wired to in-memory stores and real crypto."""
    return AuthService(accounts=accounts, hasher=hasher, codec=codec)


@pytest.fixture()
def registered(service):
    """Register an active account with :data:`TEST_PASSWORD`."""
    return service.register("Alice@Example.com", "alice", TEST_PASSWORD)
