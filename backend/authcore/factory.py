"""Application factory wiring Flask extensions and the auth core."""

from __future__ import annotations

from flask import Flask

from authcore.core.config import BaseConfig, get_config, validate_secrets
from authcore.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    The returned app exposes the wired adapters as
    ``app.extensions["authcore"]`` (an :class:`~authcore.core.dependencies.AuthDependencies`).
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    validate_secrets(app.config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from authcore.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from authcore.core.dependencies import build_dependencies

    app.extensions["authcore"] = build_dependencies(app)

    from authcore import cli as app_cli

    app_cli.init_app(app)

    return app
