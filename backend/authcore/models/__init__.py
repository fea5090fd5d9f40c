from authcore.models.account import AccountModel
from authcore.models.revoked_token import RevokedTokenModel

__all__ = [
    "AccountModel",
    "RevokedTokenModel",
]
