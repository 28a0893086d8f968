"""
Flask API Routes.

Defines the HTTP endpoints of the birthday mailer.
"""

from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, current_app, g, request
from werkzeug.exceptions import HTTPException

from birthday_mailer import __version__
from birthday_mailer.api.security import enforce_bearer_token
from birthday_mailer.api.validation import parse_reminder_request
from birthday_mailer.core.exceptions import (
    BirthdayMailerError,
    BusinessError,
    MalformedRequestError,
)
from birthday_mailer.infrastructure.logging import get_logger
from birthday_mailer.services import ReminderService


logger = get_logger(__name__)


api_bp = Blueprint("api", __name__)
api_bp.before_request(enforce_bearer_token)


def _error_response(
    error: Exception,
    status_code: int,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized error response."""
    if isinstance(error, BirthdayMailerError):
        detail = {"type": type(error).__name__, "detail": error.message, **error.details}
    else:
        detail = {"type": "InternalError", "detail": "An unexpected error occurred"}

    if current_app.config.get("UNIFORM_ERROR_STATUS"):
        status_code = 200

    return {
        "message": "Error occurred",
        "error": detail,
        "ok": False,
    }, status_code


def _success_response(
    message: str,
    data: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized success response."""
    return {
        "message": message,
        "ok": True,
        **(data or {}),
    }, status_code


# ============================================================================
# Health Check
# ============================================================================

@api_bp.route("/health", methods=["GET"])
def health_check() -> Tuple[Dict[str, Any], int]:
    """Liveness probe. Does not require a token."""
    return _success_response("healthy", {
        "status": "healthy",
        "service": "birthday-mailer",
        "version": __version__,
    })


# ============================================================================
# Reminder Endpoint
# ============================================================================

@api_bp.route("/sendemail", methods=["POST"])
def send_email() -> Tuple[Dict[str, Any], int]:
    """
    Send a birthday reminder email.

    Request Body:
        BirthdayReminderRequest as JSON (camelCase keys).

    Returns:
        {"message": "Message sent", "ok": true} on success.
    """
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise MalformedRequestError("body", "request body must be valid JSON")

    reminder = parse_reminder_request(data)
    g.user_id = reminder.user_id

    service = ReminderService()
    service.send_reminder(reminder)

    return _success_response("Message sent")


# ============================================================================
# Error Handlers
# ============================================================================

@api_bp.errorhandler(BusinessError)
def handle_business_error(error: BusinessError) -> Tuple[Dict[str, Any], int]:
    """Handle business errors (4xx)."""
    logger.warning(
        f"Business error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(error, error.status_code)


@api_bp.errorhandler(BirthdayMailerError)
def handle_infrastructure_error(error: BirthdayMailerError) -> Tuple[Dict[str, Any], int]:
    """Handle store, provider and configuration errors (5xx)."""
    logger.error(
        f"Infrastructure error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(error, error.status_code)


@api_bp.errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    """Handle unexpected errors (500)."""
    if isinstance(error, HTTPException):
        return error
    logger.exception(
        f"Unexpected error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(error, 500)
