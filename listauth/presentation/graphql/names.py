"""GraphQL names generated for a (list, authentication strategy) pair."""

from dataclasses import dataclass

from listauth.utils.query import upcase


@dataclass(frozen=True)
class GeneratedNames:
    """Wire-visible names of the auth types, query and mutations of one list."""

    output_type_name: str
    authenticate_output_name: str
    unauthenticate_output_name: str
    authenticated_query_name: str
    authenticate_mutation_name: str
    unauthenticate_mutation_name: str

    def operation_type(self, gql_name: str) -> str:
        """Return ``query`` or ``mutation`` for a generated field name."""
        if gql_name == self.authenticated_query_name:
            return "query"
        if gql_name in (
            self.authenticate_mutation_name,
            self.unauthenticate_mutation_name,
        ):
            return "mutation"
        raise KeyError(f"{gql_name!r} is not a generated auth field")


def derive_names(
    item_query_name: str, output_type_name: str, auth_type: str
) -> GeneratedNames:
    """
    Derive the auth field and type names for a list.

    Strategies with different ``auth_type`` values on the same list only
    differ in ``authenticate_mutation_name``.
    """
    return GeneratedNames(
        output_type_name=output_type_name,
        authenticate_output_name=f"authenticate{item_query_name}Output",
        unauthenticate_output_name=f"unauthenticate{item_query_name}Output",
        authenticated_query_name=f"authenticated{item_query_name}",
        authenticate_mutation_name=(
            f"authenticate{item_query_name}With{upcase(auth_type)}"
        ),
        unauthenticate_mutation_name=f"unauthenticate{item_query_name}",
    )


__all__ = ["GeneratedNames", "derive_names"]
