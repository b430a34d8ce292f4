"""
Auth Schema Assembly

Combines the SDL fragments and resolvers of one or more ListAuthProviders
with the host's own type definitions into an executable graphql-core schema.
Several strategies may be bound to the same list: their shared output types
and ``authenticated<Item>`` query are emitted once.
"""

from collections.abc import Iterable
from typing import Any

from graphql import GraphQLObjectType, GraphQLSchema, build_schema

from listauth.core.errors import ConfigurationError
from listauth.core.logging import get_logger
from listauth.presentation.graphql.provider import ListAuthProvider

logger = get_logger(__name__)


def _unique(fragments: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for fragment in fragments:
        seen.setdefault(fragment.strip(), None)
    return list(seen)


class AuthSchemaAssembler:
    """
    Collects providers and builds the schema.

    Usage Example:
        assembler = AuthSchemaAssembler(type_defs="type User { id: ID name: String }")
        assembler.add_provider(ListAuthProvider(list=users, auth_strategy=password))
        schema = assembler.build()
    """

    def __init__(self, type_defs: str | Iterable[str] = ()):
        if isinstance(type_defs, str):
            type_defs = [type_defs]
        self.type_defs = [type_def for type_def in type_defs if type_def.strip()]
        self.providers: list[ListAuthProvider] = []

    def add_provider(self, provider: ListAuthProvider) -> "AuthSchemaAssembler":
        self.providers.append(provider)
        return self

    def get_type_defs(self) -> list[str]:
        return _unique(
            fragment for provider in self.providers for fragment in provider.get_types()
        )

    def get_queries(self) -> list[str]:
        return _unique(
            fragment for provider in self.providers for fragment in provider.get_queries()
        )

    def get_mutations(self) -> list[str]:
        return _unique(
            fragment
            for provider in self.providers
            for fragment in provider.get_mutations()
        )

    def get_query_resolvers(self) -> dict[str, Any]:
        resolvers: dict[str, Any] = {}
        for provider in self.providers:
            for name, resolver in provider.get_query_resolvers().items():
                if name not in resolvers:
                    resolvers[name] = resolver
                # Same list, same principal lookup: the first binding wins.
                elif resolvers[name].provider.list is not provider.list:
                    raise ConfigurationError(
                        f"Query {name!r} is generated for more than one list",
                        config_key=name,
                    )
        return resolvers

    def get_mutation_resolvers(self) -> dict[str, Any]:
        resolvers: dict[str, Any] = {}
        for provider in self.providers:
            for name, resolver in provider.get_mutation_resolvers().items():
                if name not in resolvers:
                    resolvers[name] = resolver
                elif not _is_shared_field(name, provider, resolvers[name].provider):
                    raise ConfigurationError(
                        f"Mutation {name!r} is generated by more than one provider",
                        config_key=name,
                    )
        return resolvers

    def get_sdl(self) -> str:
        """Render the complete SDL document."""
        parts = [*self.type_defs, *self.get_type_defs()]

        queries = self.get_queries()
        if queries:
            parts.append("type Query {\n  " + "\n  ".join(queries) + "\n}")

        mutations = self.get_mutations()
        if mutations:
            parts.append("type Mutation {\n  " + "\n  ".join(mutations) + "\n}")

        return "\n\n".join(parts)

    def build(self) -> GraphQLSchema:
        """
        Build an executable schema.

        Raises:
            ConfigurationError: On conflicting mutations or resolvers without
                a matching field
        """
        query_resolvers = self.get_query_resolvers()
        mutation_resolvers = self.get_mutation_resolvers()

        schema = build_schema(self.get_sdl())
        _attach_resolvers(schema.query_type, query_resolvers, "Query")
        _attach_resolvers(schema.mutation_type, mutation_resolvers, "Mutation")

        logger.info(
            "Auth schema assembled",
            providers=len(self.providers),
            queries=sorted(query_resolvers),
            mutations=sorted(mutation_resolvers),
        )
        return schema


def _is_shared_field(
    name: str, provider: ListAuthProvider, other: ListAuthProvider
) -> bool:
    # ``unauthenticate<Item>`` is emitted by every strategy of a list.
    return (
        provider.list is other.list
        and name == provider.gql_names.unauthenticate_mutation_name
    )


def _attach_resolvers(
    object_type: GraphQLObjectType | None, resolvers: dict[str, Any], type_name: str
) -> None:
    if not resolvers:
        return

    fields = object_type.fields if object_type is not None else {}
    for name, resolver in resolvers.items():
        if name not in fields:
            raise ConfigurationError(
                f"Resolver {name!r} has no matching {type_name} field",
                config_key=name,
            )
        fields[name].resolve = resolver


def build_auth_schema(
    type_defs: str | Iterable[str], providers: Iterable[ListAuthProvider]
) -> GraphQLSchema:
    """Build an executable schema from host type definitions and providers."""
    assembler = AuthSchemaAssembler(type_defs)
    for provider in providers:
        assembler.add_provider(provider)
    return assembler.build()


__all__ = ["AuthSchemaAssembler", "build_auth_schema"]
