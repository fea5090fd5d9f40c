"""Helpers for adapters that may run outside a Flask app context."""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from typing import Any

from flask import Flask, has_app_context


def ensure_app_context(app: Flask | None) -> AbstractContextManager[Any]:
    """Return a no-op when a context is active, else push one for ``app``.

    :raises RuntimeError: If there is no active context and no ``app``.
    """
    if has_app_context():
        return nullcontext()
    if app is None:
        raise RuntimeError("No Flask app context is active and no app was provided.")
    return app.app_context()
