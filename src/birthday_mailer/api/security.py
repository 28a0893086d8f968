"""
Request Security.

Bearer token authentication and hardened response headers.
"""

import hmac
from typing import Dict, Optional

from flask import Flask, Response, current_app, jsonify, request

from birthday_mailer.core.exceptions import AuthenticationError
from birthday_mailer.infrastructure.logging import get_logger


logger = get_logger(__name__)


# Endpoints reachable without a token
PUBLIC_ENDPOINTS = frozenset(["api.health_check"])

SECURITY_HEADERS: Dict[str, str] = {
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def _bearer_token() -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _unauthorized(error: AuthenticationError) -> Response:
    response = jsonify({
        "message": "Error occurred",
        "error": {"type": type(error).__name__, "detail": error.message},
        "ok": False,
    })
    response.status_code = error.status_code
    response.headers["WWW-Authenticate"] = 'Bearer realm="birthday-mailer"'
    return response


def enforce_bearer_token() -> Optional[Response]:
    """
    before_request hook rejecting requests without the shared token.

    The expected token is read from the app config (API_TOKEN). An unset
    token rejects every request.
    """
    if request.method == "OPTIONS" or request.endpoint in PUBLIC_ENDPOINTS:
        return None

    expected = current_app.config.get("API_TOKEN") or ""
    provided = _bearer_token()

    if not expected:
        logger.warning("API_TOKEN is not configured, rejecting request")
        return _unauthorized(AuthenticationError())

    if provided is None:
        return _unauthorized(AuthenticationError("Missing bearer token"))

    if not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning(
            "Invalid bearer token",
            extra={"extra_fields": {"path": request.path}}
        )
        return _unauthorized(AuthenticationError("Invalid bearer token"))

    return None


def apply_security_headers(app: Flask) -> None:
    """Register an after_request hook adding the hardened headers."""
    @app.after_request
    def add_security_headers(response: Response) -> Response:
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
