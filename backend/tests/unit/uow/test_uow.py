# tests/unit/uow/test_uow.py
from __future__ import annotations

import pytest
from authcore.models.account import AccountModel
from authcore.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

from tests.factories.account import AccountFactory


def _new_account(email: str) -> AccountModel:
    return AccountModel(email=email, username="u", password_hash="h")


def test_writer_commits_on_success(session):
    with SQLAlchemyUnitOfWork() as uow:
        uow.accounts.add(_new_account("commit@example.com"))

    session.rollback()
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert uow.accounts.exists_by_email("commit@example.com")


def test_writer_rolls_back_on_error(session):
    with pytest.raises(RuntimeError):
        with SQLAlchemyUnitOfWork() as uow:
            uow.accounts.add(_new_account("rollback@example.com"))
            raise RuntimeError("boom")

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert not uow.accounts.exists_by_email("rollback@example.com")


def test_repositories_share_the_session(session):
    with SQLAlchemyUnitOfWork() as uow:
        assert uow.accounts.session is uow.revoked_tokens.session is uow.session


def test_readonly_blocks_flush(session):
    with pytest.raises(RuntimeError, match="Read-only UnitOfWork"):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.session.add(_new_account("blocked@example.com"))
            uow.session.flush()


def test_readonly_disallows_commit(session):
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        with pytest.raises(RuntimeError):
            uow.commit()


def test_readonly_guard_is_removed_on_exit(session):
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        uow.accounts.exists_by_email("x@example.com")

    # Writes are allowed again once the read-only scope has ended
    with SQLAlchemyUnitOfWork() as uow:
        uow.accounts.add(_new_account("after@example.com"))


def test_readonly_reads_committed_rows(session):
    AccountFactory(email="seen@example.com")
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert uow.accounts.get_by_email("seen@example.com") is not None
