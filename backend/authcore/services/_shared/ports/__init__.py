"""
authcore.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts of
the authentication core's infrastructure.

These ports decouple the service layer from concrete implementations of
token signing, revocation storage, account persistence and password hashing.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: abstraction for JWT creation and decoding.

- :mod:`revocation_store`:
    Defines :class:`~.RevocationStore`: interface for revoked ``jti`` storage,
    plus :class:`~.InMemoryRevocationStore`.

- :mod:`account_store`:
    Defines :class:`~.AccountStore`: account persistence,
    plus :class:`~.InMemoryAccountStore` and :func:`~.normalize_email`.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: one-way password hashing.

Design Notes
------------
All these ports follow *Dependency Inversion Principle (DIP)* to keep
the service layer independent from implementation details.
Concrete adapters (bcrypt, Flask-JWT-Extended, SQLAlchemy, Redis) live
under ``authcore.infra``.
"""

from __future__ import annotations

from .account_store import AccountStore, InMemoryAccountStore, normalize_email
from .password_hasher import PasswordHasher
from .revocation_store import InMemoryRevocationStore, RevocationStore
from .token_provider import TokenProvider

__all__ = [
    "AccountStore",
    "InMemoryAccountStore",
    "normalize_email",
    "PasswordHasher",
    "RevocationStore",
    "InMemoryRevocationStore",
    "TokenProvider",
]
