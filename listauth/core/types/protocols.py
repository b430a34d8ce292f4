"""
Collaborator Protocols

Interfaces the host application supplies to a ListAuthProvider: the list
being authenticated against, the authentication strategy and the
per-request context. listauth never implements these itself.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# A falsy decision denies access; ``True`` grants it outright and a mapping
# grants it restricted to the items matching that where-clause.
AccessDecision = bool | Mapping[str, Any] | None


@runtime_checkable
class ListGqlNames(Protocol):
    """GraphQL naming scheme of a list."""

    @property
    def item_query_name(self) -> str:
        """Singular item name, e.g. ``User``."""
        ...

    @property
    def output_type_name(self) -> str:
        """Name of the list's GraphQL output type."""
        ...


@runtime_checkable
class ListDescriptor(Protocol):
    """A content type the host has registered."""

    @property
    def key(self) -> str:
        """Stable list key."""
        ...

    @property
    def gql_names(self) -> ListGqlNames:
        ...

    async def item_query(
        self, query_args: Mapping[str, Any], context: Any, query_name: str
    ) -> Any | None:
        """Fetch a single item matching ``query_args["where"]``."""
        ...


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of an authentication strategy's credential check."""

    success: bool
    item: Any = None
    message: str | None = None

    @classmethod
    def coerce(cls, value: "ValidationResult | Mapping[str, Any]") -> "ValidationResult":
        """Accept either a ValidationResult or a mapping with the same keys."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                success=bool(value.get("success")),
                item=value.get("item"),
                message=value.get("message"),
            )
        raise TypeError(
            f"Authentication strategy returned {type(value).__name__}, "
            "expected ValidationResult or mapping"
        )


@runtime_checkable
class AuthStrategy(Protocol):
    """Pluggable credential verification mechanism."""

    @property
    def auth_type(self) -> str:
        """Short identifier used in generated mutation names, e.g. ``password``."""
        ...

    def get_input_fragment(self) -> str:
        """SDL argument list for the authenticate mutation."""
        ...

    async def validate(
        self, args: Mapping[str, Any]
    ) -> ValidationResult | Mapping[str, Any]:
        ...


class AuthStrategyBase(ABC):
    """Convenience base class for host authentication strategies."""

    auth_type: str = ""

    def __init__(self, list_key: str, config: Mapping[str, Any] | None = None):
        self.list_key = list_key
        self.config = dict(config or {})

    @abstractmethod
    def get_input_fragment(self) -> str:
        """SDL argument list for the authenticate mutation."""

    @abstractmethod
    async def validate(self, args: Mapping[str, Any]) -> ValidationResult:
        """
        Verify the supplied credentials.

        User input errors are reported through ``ValidationResult(success=False,
        message=...)`` rather than raised.
        """


@dataclass(frozen=True)
class AuthedSession:
    """The principal a new session is started for."""

    item: Any
    list: Any


@runtime_checkable
class RequestContext(Protocol):
    """Per-request context carrying the current principal and session hooks."""

    authed_item: Any
    authed_list_key: str | None

    def get_list_access_control_for_user(
        self,
        list_key: str,
        user_input: Any,
        operation: str,
        *,
        gql_name: str,
    ) -> AccessDecision | Awaitable[AccessDecision]:
        ...

    async def start_authed_session(
        self, session: AuthedSession, audiences: list[str]
    ) -> str:
        """Start a session and return its token."""
        ...

    async def end_authed_session(self) -> None:
        """End the current session; a missing session is not an error."""
        ...


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
