"""
Per-request cache hints.

Resolvers narrow the cacheability of a response; whatever serves the
response reads the final hint. Once a response is private it stays private.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CacheScope(Enum):
    """Who may share a cached response."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


@dataclass(frozen=True)
class CacheHint:
    """Resolved cache policy for a response."""

    scope: CacheScope = CacheScope.PUBLIC
    max_age: int | None = None


class CacheControl:
    """Collects cache hints set by resolvers during one request."""

    def __init__(self) -> None:
        self._hint = CacheHint()

    @property
    def hint(self) -> CacheHint:
        return self._hint

    def set_cache_hint(
        self, scope: CacheScope | None = None, max_age: int | None = None
    ) -> CacheHint:
        """
        Merge a hint into the current one.

        The scope only moves from PUBLIC to PRIVATE and ``max_age`` only
        shrinks.
        """
        new_scope = self._hint.scope
        if scope == CacheScope.PRIVATE:
            new_scope = CacheScope.PRIVATE

        new_max_age = self._hint.max_age
        if max_age is not None:
            new_max_age = max_age if new_max_age is None else min(new_max_age, max_age)

        self._hint = CacheHint(scope=new_scope, max_age=new_max_age)
        return self._hint


def _find_cache_control(info: Any) -> CacheControl | None:
    cache_control = getattr(info, "cache_control", None)
    if cache_control is None:
        cache_control = getattr(getattr(info, "context", None), "cache_control", None)
    return cache_control


def set_private_cache_hint(info: Any) -> bool:
    """
    Mark the response as private, if the request collects cache hints.

    Looks on ``info`` first and then on ``info.context``.

    Returns:
        True when a hint was recorded
    """
    if info is None:
        return False

    cache_control = _find_cache_control(info)
    if cache_control is None:
        return False

    cache_control.set_cache_hint(scope=CacheScope.PRIVATE)
    return True


__all__ = ["CacheControl", "CacheHint", "CacheScope", "set_private_cache_hint"]
