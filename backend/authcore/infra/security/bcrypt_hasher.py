# authcore/infra/security/bcrypt_hasher.py
"""Password hashing adapters built on ``bcrypt``."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import bcrypt

from authcore.services._shared.errors import HashingFailureError
from authcore.services._shared.ports import PasswordHasher

# bcrypt only reads the first 72 bytes of its input; newer releases raise
# instead of truncating, so the cut is done here.
BCRYPT_MAX_BYTES = 72
DEFAULT_ROUNDS = 12


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


@dataclass(frozen=True, slots=True)
class BcryptPasswordHasher(PasswordHasher):
    """
    bcrypt adapter with a configurable work factor.

    :param rounds: Log2 cost factor (4..31). 12 is the production default.
    """

    rounds: int = DEFAULT_ROUNDS

    def __post_init__(self) -> None:
        if not 4 <= self.rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31.")

    def hash(self, password: str) -> str:
        try:
            hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds))
        except (ValueError, TypeError) as exc:
            raise HashingFailureError() from exc
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as exc:
            raise HashingFailureError("Stored password hash is malformed") from exc


class PooledPasswordHasher(PasswordHasher):
    """
    Run a wrapped hasher on a bounded thread pool.

    bcrypt releases the GIL while hashing, so the pool size caps how many
    CPU-bound hashes run at once, independent of request concurrency.

    :param inner: Hasher doing the actual work.
    :param max_workers: Pool size.
    """

    def __init__(self, inner: PasswordHasher, *, max_workers: int = 4) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1.")
        self.inner = inner
        self.max_workers = max_workers
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="pwhash")

    def hash(self, password: str) -> str:
        return self._pool.submit(self.inner.hash, password).result()

    def verify(self, password: str, password_hash: str) -> bool:
        return self._pool.submit(self.inner.verify, password, password_hash).result()

    def close(self) -> None:
        """Wait for in-flight work and release the worker threads."""
        self._pool.shutdown(wait=True)

    def __enter__(self) -> PooledPasswordHasher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
