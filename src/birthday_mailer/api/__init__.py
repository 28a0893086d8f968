"""
API Layer.

Flask HTTP endpoints, authentication and error handling.
"""

# api_bp is imported lazily: routes pull in the services layer,
# which itself imports api.validation.

__all__ = ["api_bp"]


def __getattr__(name: str):
    """Lazy import to avoid circular dependencies."""
    if name == "api_bp":
        from birthday_mailer.api.routes import api_bp
        return api_bp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
