# tests/unit/infra/test_bcrypt_hasher.py
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from authcore.infra.security.bcrypt_hasher import BcryptPasswordHasher, PooledPasswordHasher
from authcore.services._shared.errors import HashingFailureError

from tests.helpers.utils import not_raises


def test_hash_is_salted_and_verifiable(hasher):
    h1 = hasher.hash("Passw0rd!")
    h2 = hasher.hash("Passw0rd!")

    assert h1 != h2
    assert h1.startswith("$2b$04$")
    assert hasher.verify("Passw0rd!", h1)
    assert not hasher.verify("passw0rd!", h1)


def test_rounds_are_validated():
    with pytest.raises(ValueError):
        BcryptPasswordHasher(rounds=3)
    with pytest.raises(ValueError):
        BcryptPasswordHasher(rounds=32)


def test_default_cost_is_twelve():
    assert BcryptPasswordHasher().rounds == 12


def test_long_passwords_do_not_raise(hasher):
    long_pw = "A1" + "x" * 200
    with not_raises(Exception):
        digest = hasher.hash(long_pw)
    assert hasher.verify(long_pw, digest)


def test_malformed_stored_hash_is_a_hashing_failure(hasher):
    with pytest.raises(HashingFailureError):
        hasher.verify("Passw0rd!", "not-a-bcrypt-hash")


class _CountingHasher:
    """Record the peak number of concurrent calls."""

    def __init__(self) -> None:
        self.active = 0
        self.peak = 0
        self._lock = threading.Lock()
        self._gate = threading.Event()

    def _enter(self) -> None:
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
        self._gate.wait(0.05)
        with self._lock:
            self.active -= 1

    def hash(self, password: str) -> str:
        self._enter()
        return f"h:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        self._enter()
        return password_hash == f"h:{password}"


def test_pool_bounds_concurrency():
    inner = _CountingHasher()
    with PooledPasswordHasher(inner, max_workers=2) as pooled:
        with ThreadPoolExecutor(max_workers=8) as callers:
            hashes = list(callers.map(pooled.hash, [f"pw{i}" for i in range(8)]))

    assert hashes == [f"h:pw{i}" for i in range(8)]
    assert inner.peak <= 2


def test_pool_propagates_errors(hasher):
    with PooledPasswordHasher(hasher, max_workers=1) as pooled:
        assert pooled.verify("Passw0rd!", pooled.hash("Passw0rd!"))
        with pytest.raises(HashingFailureError):
            pooled.verify("x", "garbage")


def test_pool_requires_a_worker(hasher):
    with pytest.raises(ValueError):
        PooledPasswordHasher(hasher, max_workers=0)
