"""Service layer public API.

This package exposes the authentication core so that callers can import from
:mod:`authcore.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``authcore.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Authentication (from ``authcore.services.auth``)
    * :class:`AuthService`: login / register / refresh / logout / validation
    * :class:`TokenCodec`: token issuance, classification and revocation
    * DTOs: :class:`Account`, :class:`Credentials`, :class:`TokenPair`,
      :class:`RevocationRecord`, :class:`AuthTokenConfig`, :class:`TokenKind`
"""

from __future__ import annotations

from authcore.services._shared.base import BaseService, ServiceContext
from authcore.services.auth.dto import (
    Account,
    AuthTokenConfig,
    Credentials,
    RevocationRecord,
    TokenKind,
    TokenPair,
)
from authcore.services.auth.service import AuthService
from authcore.services.auth.token_codec import TokenCodec

__all__ = [
    "BaseService",
    "ServiceContext",
    "Account",
    "AuthTokenConfig",
    "Credentials",
    "RevocationRecord",
    "TokenKind",
    "TokenPair",
    "AuthService",
    "TokenCodec",
]
