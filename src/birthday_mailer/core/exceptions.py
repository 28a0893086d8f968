"""
Custom exceptions for the birthday mailer.

Provides a hierarchy of business and infrastructure exceptions
for proper error handling and HTTP status code mapping.
"""

from typing import Any, Dict, Optional


class BirthdayMailerError(Exception):
    """Base exception for all birthday mailer errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Business Errors (4xx)
# =============================================================================

class BusinessError(BirthdayMailerError):
    """Base exception for business logic errors (typically 4xx)."""

    status_code = 400


class MalformedRequestError(BusinessError):
    """Raised when the request body does not have the expected shape."""

    def __init__(self, field: str, message: str):
        super().__init__(
            f"Malformed request on '{field}': {message}",
            {"field": field}
        )
        self.field = field


class UserNotFoundError(BusinessError):
    """Raised when no user row, or no email on the row, matches the id."""

    status_code = 404

    def __init__(self, user_id: str, reason: str = "no matching user"):
        super().__init__(
            f"User not found: {user_id} ({reason})",
            {"user_id": user_id, "reason": reason}
        )
        self.user_id = user_id
        self.reason = reason


class AuthenticationError(BusinessError):
    """Raised when the bearer token is missing or wrong."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


# =============================================================================
# Infrastructure Errors (5xx)
# =============================================================================

class InfrastructureError(BirthdayMailerError):
    """Base exception for infrastructure errors (typically 5xx)."""
    pass


class ConfigurationError(InfrastructureError):
    """Raised when a required configuration is missing."""

    def __init__(self, config_name: str, message: Optional[str] = None):
        msg = message or f"Configuration missing: {config_name}"
        super().__init__(msg, {"config_name": config_name})
        self.config_name = config_name


class UserStoreError(InfrastructureError):
    """Raised when the identity store query fails or times out."""

    status_code = 503

    def __init__(self, message: str, duration_ms: Optional[int] = None):
        super().__init__(
            f"User store error: {message}",
            {"duration_ms": duration_ms}
        )
        self.duration_ms = duration_ms


class ExternalServiceError(InfrastructureError):
    """Raised when an external service call fails."""

    status_code = 502

    def __init__(
        self,
        service_name: str,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__(
            f"{service_name} error: {message}",
            {
                "service_name": service_name,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }
        )
        self.service_name = service_name
        self.upstream_status = status_code
        self.duration_ms = duration_ms


class DispatchError(ExternalServiceError):
    """Raised when the MailChannels send call fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__("MailChannels", message, status_code, duration_ms)
