from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """
    Port for one-way password hashing.

    ``hash`` salts on every call, so hashing the same password twice yields
    different strings. ``verify`` reads salt and work factor from the stored
    hash and compares in constant time.
    """

    def hash(self, password: str) -> str: ...
    def verify(self, password: str, password_hash: str) -> bool: ...
