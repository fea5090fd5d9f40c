from authcore.repositories.account import AccountRepository
from authcore.repositories.base import BaseRepository
from authcore.repositories.revoked_token import RevokedTokenRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "RevokedTokenRepository",
]
