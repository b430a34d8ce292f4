"""Helpers for building list item queries."""

from collections.abc import Mapping
from typing import Any


def upcase(value: str) -> str:
    """Upper-case the first character only: ``password`` -> ``Password``."""
    return value[:1].upper() + value[1:]


def merge_where_clause(
    query_args: Mapping[str, Any], where_clause: Any
) -> dict[str, Any]:
    """
    Restrict ``query_args["where"]`` by an additional where-clause.

    Anything that is not a non-empty mapping (``True``, ``None``, ``{}``)
    leaves the query arguments untouched. When both clauses are present
    they are combined with ``AND``.

    Args:
        query_args: Query arguments, optionally holding a ``where`` mapping
        where_clause: Clause to merge in, usually an access decision

    Returns:
        A new query arguments mapping; the input is never mutated
    """
    if not isinstance(where_clause, Mapping) or not where_clause:
        return dict(query_args)

    where = query_args.get("where")
    if where:
        return {**query_args, "where": {"AND": [where, dict(where_clause)]}}
    return {**query_args, "where": dict(where_clause)}


def get_item_id(item: Any) -> Any:
    """Read ``id`` from a mapping or an object item."""
    if item is None:
        return None
    if isinstance(item, Mapping):
        return item.get("id")
    return getattr(item, "id", None)


__all__ = ["get_item_id", "merge_where_clause", "upcase"]
