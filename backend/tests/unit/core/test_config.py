# tests/unit/core/test_config.py
from __future__ import annotations

from datetime import timedelta

import pytest
from authcore.core import config as config_module
from authcore.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    env_seconds,
    get_config,
    validate_secrets,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("nope", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("AUTHCORE_FLAG", raw)
    assert env_bool("AUTHCORE_FLAG") is expected


def test_env_helpers_fall_back_to_defaults(monkeypatch):
    monkeypatch.delenv("AUTHCORE_MISSING", raising=False)
    assert env_bool("AUTHCORE_MISSING", True) is True
    assert env_int("AUTHCORE_MISSING", 7) == 7
    assert env_seconds("AUTHCORE_MISSING", timedelta(minutes=1)) == timedelta(minutes=1)


def test_env_seconds_parses_integers(monkeypatch):
    monkeypatch.setenv("AUTHCORE_TTL", "90")
    assert env_seconds("AUTHCORE_TTL", timedelta(0)) == timedelta(seconds=90)


@pytest.mark.parametrize(
    ("name", "cls"),
    [("development", DevelopmentConfig), ("testing", TestingConfig), ("PRODUCTION", ProductionConfig)],
)
def test_get_config_by_env(monkeypatch, name, cls):
    monkeypatch.setenv(config_module.ENV_VAR, name)
    assert get_config() is cls


def test_get_config_defaults_to_development(monkeypatch):
    monkeypatch.setenv(config_module.ENV_VAR, "staging")
    assert get_config() is DevelopmentConfig


def test_token_defaults():
    assert TestingConfig.JWT_ALGORITHM == "HS256"
    assert TestingConfig.BCRYPT_ROUNDS == 4
    assert TestingConfig.REVOCATION_BACKEND == "sqlalchemy"


def _prod(**overrides):
    cfg = {
        "DEBUG": False,
        "TESTING": False,
        "SECRET_KEY": "a-real-secret",
        "JWT_SECRET_KEY": "another-real-secret",
        "REVOCATION_BACKEND": "sqlalchemy",
    }
    cfg.update(overrides)
    return cfg


def test_validate_secrets_accepts_real_production_settings():
    validate_secrets(_prod())


@pytest.mark.parametrize("key", ["SECRET_KEY", "JWT_SECRET_KEY"])
def test_validate_secrets_rejects_placeholders_in_production(key):
    with pytest.raises(RuntimeError, match=key):
        validate_secrets(_prod(**{key: "CHANGE_ME_JWT" if key == "JWT_SECRET_KEY" else "CHANGE_ME"}))


def test_validate_secrets_allows_placeholders_when_debugging():
    validate_secrets(_prod(DEBUG=True, SECRET_KEY="CHANGE_ME", JWT_SECRET_KEY="CHANGE_ME_JWT"))


def test_validate_secrets_checks_revocation_backend():
    with pytest.raises(RuntimeError, match="REVOCATION_BACKEND"):
        validate_secrets(_prod(REVOCATION_BACKEND="cassandra"))
    with pytest.raises(RuntimeError, match="REDIS_URL"):
        validate_secrets(_prod(REVOCATION_BACKEND="redis", REDIS_URL=None))
