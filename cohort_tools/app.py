# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from cohort_tools.infrastructure.container import Container
from cohort_tools.infrastructure.db import init_db
from cohort_tools.shared.config import load_config
from cohort_tools.shared.logging import logger, setup_logging
from cohort_tools.shared.middleware.error_handler import configure_error_handling
from cohort_tools.shared.middleware.request_logger import configure_request_logging

_config = load_config()


def create_app(container: Container | None = None) -> Flask:
    """Build the Flask application.

    Each app owns its container, so rate-limit windows never leak between
    two app instances (for example across tests).
    """
    setup_logging(debug_mode=_config.debug_logging)
    init_db()

    container = container or Container(_config)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    app.extensions["container"] = container
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())

    logger.info(
        f"Flask app initialized (env={_config.app_env}, "
        f"rate_limit={'on' if _config.rate_limit.enabled else 'off'}, "
        f"password_scheme={_config.auth.password_scheme})"
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=_config.port, debug=True)
