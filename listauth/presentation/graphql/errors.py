"""
GraphQL errors raised by auth resolvers.

Only ``extensions`` reach the client. Anything kept for server-side
diagnosis lives on plain attributes, which graphql-core never formats.
"""

from typing import Any

from graphql import GraphQLError


class AccessDeniedError(GraphQLError):
    """The list's access control denied the ``auth`` operation."""

    def __init__(
        self,
        data: dict[str, Any],
        internal_data: dict[str, Any] | None = None,
        message: str = "You do not have access to this resource",
    ):
        super().__init__(
            message,
            extensions={
                "code": "FORBIDDEN",
                "data": dict(data),
            },
        )
        self.data = dict(data)
        self.internal_data = dict(internal_data or {})


class ValidationFailedError(GraphQLError):
    """The authentication strategy rejected the supplied credentials."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "Authentication failed",
            extensions={"code": "AUTHENTICATION_FAILED"},
        )


__all__ = ["AccessDeniedError", "ValidationFailedError"]
