"""
Tests for generated GraphQL names.
"""

import dataclasses

import pytest

from listauth.presentation.graphql.names import GeneratedNames, derive_names


class TestDeriveNames:
    """Test name derivation."""

    def test_wire_names(self):
        names = derive_names("User", "User", "password")

        assert names == GeneratedNames(
            output_type_name="User",
            authenticate_output_name="authenticateUserOutput",
            unauthenticate_output_name="unauthenticateUserOutput",
            authenticated_query_name="authenticatedUser",
            authenticate_mutation_name="authenticateUserWithPassword",
            unauthenticate_mutation_name="unauthenticateUser",
        )

    def test_only_first_character_is_upcased(self):
        names = derive_names("Author", "Author", "magicLink")

        assert names.authenticate_mutation_name == "authenticateAuthorWithMagicLink"

    def test_deterministic(self):
        assert derive_names("User", "User", "password") == derive_names(
            "User", "User", "password"
        )

    def test_strategies_on_one_list_differ_only_in_authenticate(self):
        password = derive_names("User", "User", "password")
        token = derive_names("User", "User", "token")

        assert password.authenticate_mutation_name != token.authenticate_mutation_name
        assert dataclasses.replace(
            password, authenticate_mutation_name=token.authenticate_mutation_name
        ) == token

    def test_names_are_frozen(self):
        names = derive_names("User", "User", "password")

        with pytest.raises(dataclasses.FrozenInstanceError):
            names.authenticated_query_name = "me"


class TestOperationType:
    """Test mapping from generated field to operation type."""

    @pytest.fixture
    def names(self):
        return derive_names("User", "User", "password")

    def test_query(self, names):
        assert names.operation_type("authenticatedUser") == "query"

    @pytest.mark.parametrize(
        "gql_name", ["authenticateUserWithPassword", "unauthenticateUser"]
    )
    def test_mutations(self, names, gql_name):
        assert names.operation_type(gql_name) == "mutation"

    def test_unknown_field(self, names):
        with pytest.raises(KeyError):
            names.operation_type("allUsers")
