"""Core error classes for listauth.

GraphQL-facing errors (access denial, rejected credentials) live in
``listauth.presentation.graphql.errors``; the classes here cover failures
that happen while a schema is being assembled or settings are loaded.
"""

import logging
from typing import Any

SENSITIVE_KEYS = frozenset(
    {"password", "token", "secret", "credential", "authorization"}
)


class ListAuthError(Exception):
    """
    Base exception for all listauth errors.

    Carries a machine readable code and a details mapping, and logs itself
    with sanitized structured data when raised.
    """

    default_code: str = "ERROR"

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = kwargs.get("code") or self.default_code
        self.details = kwargs.get("details") or {}
        self.user_message = kwargs.get("user_message") or message
        self.__cause__ = kwargs.get("cause")

        self._log_error()

    def _log_error(self) -> None:
        """Log error with structured data."""
        logger = logging.getLogger(f"listauth.errors.{self.__class__.__name__}")
        logger.warning(
            "listauth error raised",
            extra={
                "code": self.code,
                "error_message": self.message,
                "details": self._sanitize_details(self.details),
                "error_class": self.__class__.__name__,
            },
        )

    def _sanitize_details(self, details: dict) -> dict:
        """Sanitize error details to remove sensitive information."""
        if not details:
            return {}

        sanitized = {}
        for key, value in details.items():
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_details(value)
            else:
                sanitized[key] = value

        return sanitized

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """Serialize error for API responses or logs."""
        data = {
            "error": self.code,
            "message": self.user_message,
        }

        if include_details and self.details:
            data["details"] = self._sanitize_details(self.details)

        return data

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ConfigurationError(ListAuthError):
    """Invalid settings, or a list/strategy that cannot be bound."""

    default_code = "CONFIGURATION_ERROR"

    def __init__(
        self, message: str, config_key: str | None = None, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        if config_key:
            self.details["config_key"] = config_key


__all__ = ["ConfigurationError", "ListAuthError"]
