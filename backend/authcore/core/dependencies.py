"""Assemble the authentication core from the Flask configuration.

Nothing here is a process-wide singleton: callers build one
:class:`AuthDependencies` bundle per application and hand it to
:func:`build_auth_service`.
"""

from __future__ import annotations

import atexit
import secrets
from dataclasses import dataclass

from flask import Flask

from authcore.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from authcore.infra.security.bcrypt_hasher import BcryptPasswordHasher, PooledPasswordHasher
from authcore.infra.sqlalchemy.account_store import SqlAlchemyAccountStore
from authcore.infra.sqlalchemy.revocation_store import SqlAlchemyRevocationStore
from authcore.services._shared.base import ServiceContext
from authcore.services._shared.ports import (
    AccountStore,
    InMemoryRevocationStore,
    PasswordHasher,
    RevocationStore,
    TokenProvider,
)
from authcore.services.auth.dto import AuthTokenConfig
from authcore.services.auth.service import AuthService
from authcore.services.auth.token_codec import TokenCodec


@dataclass(slots=True)
class AuthDependencies:
    """Adapters and settings the auth services run on.

    ``dummy_hash`` is a hash of a random secret, verified on logins for
    unknown emails so they cost the same bcrypt work as a wrong password.
    """

    accounts: AccountStore
    revocations: RevocationStore
    hasher: PasswordHasher
    token_provider: TokenProvider
    token_cfg: AuthTokenConfig
    dummy_hash: str | None = None


def build_revocation_store(app: Flask) -> RevocationStore:
    """
    Select the revocation backend named by ``REVOCATION_BACKEND``.

    :raises RuntimeError: If ``redis`` is selected but no client was initialized.
    """
    backend = app.config.get("REVOCATION_BACKEND", "sqlalchemy")
    if backend == "memory":
        return InMemoryRevocationStore()
    if backend == "redis":
        from authcore.core.extensions import get_redis
        from authcore.infra.redis.redis_revocation_store import RedisRevocationStore

        return RedisRevocationStore(get_redis())
    return SqlAlchemyRevocationStore(
        app,
        purge_on_write=bool(app.config.get("REVOCATION_PURGE_ON_WRITE", True)),
    )


def build_dependencies(app: Flask) -> AuthDependencies:
    """
    Build production adapters bound to ``app``.

    The hashing pool lives as long as the process; its threads are joined
    at interpreter exit.
    """
    cfg = app.config
    hasher = PooledPasswordHasher(
        BcryptPasswordHasher(rounds=int(cfg.get("BCRYPT_ROUNDS", 12))),
        max_workers=int(cfg.get("HASHING_POOL_SIZE", 4)),
    )
    atexit.register(hasher.close)
    return AuthDependencies(
        accounts=SqlAlchemyAccountStore(app),
        revocations=build_revocation_store(app),
        hasher=hasher,
        token_provider=JWTTokenProvider(app),
        token_cfg=AuthTokenConfig(
            access_expires=cfg["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_expires=cfg["JWT_REFRESH_TOKEN_EXPIRES"],
        ),
        dummy_hash=hasher.hash(secrets.token_urlsafe(32)),
    )


def build_token_codec(deps: AuthDependencies, *, ctx: ServiceContext | None = None) -> TokenCodec:
    return TokenCodec(
        token_provider=deps.token_provider,
        revocations=deps.revocations,
        token_cfg=deps.token_cfg,
        ctx=ctx,
    )


def build_auth_service(deps: AuthDependencies, *, ctx: ServiceContext | None = None) -> AuthService:
    """
    Wire an :class:`AuthService` over ``deps``.

    Services are cheap; build one per call when ``ctx`` carries a request id.
    """
    return AuthService(
        accounts=deps.accounts,
        hasher=deps.hasher,
        codec=build_token_codec(deps, ctx=ctx),
        dummy_hash=deps.dummy_hash,
        ctx=ctx,
    )
