"""
Tests for query helpers.
"""

from types import SimpleNamespace

import pytest

from listauth.utils.query import get_item_id, merge_where_clause, upcase


class TestUpcase:
    """Test first-character upper-casing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("password", "Password"), ("magicLink", "MagicLink"), ("X", "X"), ("", "")],
    )
    def test_upcase(self, value, expected):
        assert upcase(value) == expected


class TestMergeWhereClause:
    """Test where-clause merging."""

    @pytest.mark.parametrize("clause", [True, None, {}, "ignored"])
    def test_non_filter_decisions_leave_args_untouched(self, clause):
        args = {"where": {"id": "1"}}

        assert merge_where_clause(args, clause) == {"where": {"id": "1"}}

    def test_clauses_are_and_combined(self):
        merged = merge_where_clause({"where": {"id": "1"}}, {"isAdmin": True})

        assert merged == {"where": {"AND": [{"id": "1"}, {"isAdmin": True}]}}

    def test_empty_where_is_replaced(self):
        merged = merge_where_clause({"where": {}, "first": 1}, {"isAdmin": True})

        assert merged == {"where": {"isAdmin": True}, "first": 1}

    def test_input_is_not_mutated(self):
        args = {"where": {"id": "1"}}

        merge_where_clause(args, {"isAdmin": True})

        assert args == {"where": {"id": "1"}}


class TestGetItemId:
    """Test id extraction."""

    def test_mapping(self):
        assert get_item_id({"id": "1"}) == "1"

    def test_object(self):
        assert get_item_id(SimpleNamespace(id=42)) == 42

    def test_none(self):
        assert get_item_id(None) is None
