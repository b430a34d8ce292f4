from .protocols import (
    AccessDecision,
    AuthedSession,
    AuthStrategy,
    AuthStrategyBase,
    ListDescriptor,
    ListGqlNames,
    RequestContext,
    ValidationResult,
)

__all__ = [
    "AccessDecision",
    "AuthStrategy",
    "AuthStrategyBase",
    "AuthedSession",
    "ListDescriptor",
    "ListGqlNames",
    "RequestContext",
    "ValidationResult",
]
