"""
Flask Application Factory.

Creates and configures the Flask application.
"""

import signal
import sys
from typing import Optional

from flask import Flask
from flask_cors import CORS

from birthday_mailer.api import api_bp
from birthday_mailer.api.security import apply_security_headers
from birthday_mailer.config import settings
from birthday_mailer.infrastructure.logging import log_request_context, logger


def _handle_sigterm(signum: int, frame) -> None:
    """
    Handle SIGTERM for graceful shutdown.

    Cloud Run and most process managers send SIGTERM before stopping.
    """
    logger.info(
        "Received SIGTERM, shutting down gracefully",
        extra={"extra_fields": {"signal": signum}}
    )
    sys.exit(0)


signal.signal(signal.SIGTERM, _handle_sigterm)


def create_app(config: Optional[dict] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Optional configuration overrides. Recognized keys besides
            Flask's own: API_TOKEN, UNIFORM_ERROR_STATUS, CORS_ORIGINS.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    app.config.update(
        API_TOKEN=settings.auth.api_token,
        UNIFORM_ERROR_STATUS=settings.api.uniform_error_status,
        CORS_ORIGINS=settings.api.cors_origins,
    )
    app.json.sort_keys = False

    if config:
        app.config.update(config)

    log_request_context(app)
    apply_security_headers(app)
    CORS(app, origins=app.config["CORS_ORIGINS"])

    app.register_blueprint(api_bp)

    logger.info(
        "Application initialized",
        extra={"extra_fields": {
            "bearer_configured": bool(app.config["API_TOKEN"]),
            "uniform_error_status": app.config["UNIFORM_ERROR_STATUS"],
        }}
    )

    return app


app = create_app()


if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=settings.port,
        debug=settings.debug,
    )
