"""
Auth field resolvers.

Each resolver holds an explicit reference to the provider it dispatches to
and uses the graphql-core resolver signature ``(root, info, **args)``; the
request context is ``info.context``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from graphql import GraphQLResolveInfo

    from listauth.presentation.graphql.provider import ListAuthProvider


class AuthResolver:
    """Base class binding a resolver to one provider and field."""

    def __init__(self, provider: ListAuthProvider, field_name: str):
        self.provider = provider
        self.field_name = field_name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field_name!r})"


class AuthenticatedQueryResolver(AuthResolver):
    """Resolves ``authenticated<Item>``."""

    async def __call__(self, root: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        return await self.provider.authenticated_query(info.context, info)


class AuthenticateMutationResolver(AuthResolver):
    """Resolves ``authenticate<Item>With<AuthType>``; args go to the strategy as-is."""

    async def __call__(
        self, root: Any, info: GraphQLResolveInfo, **args: Any
    ) -> dict[str, Any]:
        return await self.provider.authenticate_mutation(args, info.context)


class UnauthenticateMutationResolver(AuthResolver):
    """Resolves ``unauthenticate<Item>``."""

    async def __call__(
        self, root: Any, info: GraphQLResolveInfo, **args: Any
    ) -> dict[str, bool]:
        return await self.provider.unauthenticate_mutation(info.context)


__all__ = [
    "AuthResolver",
    "AuthenticateMutationResolver",
    "AuthenticatedQueryResolver",
    "UnauthenticateMutationResolver",
]
