"""
List Authentication Provider

Binds one authentication strategy to one list: emits the SDL for the
``authenticated<Item>`` query and the ``authenticate<Item>With<AuthType>`` /
``unauthenticate<Item>`` mutations, and the resolvers backing them.

Credential checks, sessions and access-control policy are delegated to the
strategy and the request context; every field is access-checked under the
``auth`` operation kind before any of them is called.
"""

import inspect
from collections.abc import Iterable, Mapping
from typing import Any

from listauth.core.config import get_settings
from listauth.core.errors import ConfigurationError
from listauth.core.logging import get_logger
from listauth.core.types.protocols import (
    AccessDecision,
    AuthedSession,
    AuthStrategy,
    ListDescriptor,
    RequestContext,
    ValidationResult,
)
from listauth.presentation.graphql.cache_control import set_private_cache_hint
from listauth.presentation.graphql.errors import (
    AccessDeniedError,
    ValidationFailedError,
)
from listauth.presentation.graphql.names import GeneratedNames, derive_names
from listauth.presentation.graphql.resolvers import (
    AuthenticatedQueryResolver,
    AuthenticateMutationResolver,
    UnauthenticateMutationResolver,
)
from listauth.utils.query import get_item_id, merge_where_clause, upcase

logger = get_logger("listauth.graphql")

AUTH_OPERATION = "auth"


class ListAuthProvider:
    """
    Authentication schema and resolvers for a single list.

    Immutable after construction; one instance is shared by every request.

    Usage Example:
        provider = ListAuthProvider(list=user_list, auth_strategy=password_strategy)
        assembler.add_provider(provider)
    """

    def __init__(
        self,
        list: ListDescriptor,  # noqa: A002
        auth_strategy: AuthStrategy,
        audiences: Iterable[str] | None = None,
    ):
        """
        Args:
            list: The list principals authenticate as
            auth_strategy: Credential verification mechanism
            audiences: Audiences new sessions are scoped to; defaults to
                ``Settings.session_audiences``

        Raises:
            ConfigurationError: If the list has no usable GraphQL names or the
                strategy has no ``auth_type``
        """
        self.list = list
        self.auth_strategy = auth_strategy

        gql_names = getattr(list, "gql_names", None)
        item_query_name = getattr(gql_names, "item_query_name", None)
        output_type_name = getattr(gql_names, "output_type_name", None)
        if not item_query_name or not output_type_name:
            raise ConfigurationError(
                f"List {getattr(list, 'key', list)!r} must define "
                "gql_names.item_query_name and gql_names.output_type_name",
                config_key="gql_names",
            )

        auth_type = getattr(auth_strategy, "auth_type", None)
        if not auth_type:
            raise ConfigurationError(
                "Authentication strategy must define a non-empty auth_type",
                config_key="auth_type",
            )

        if audiences is None:
            audiences = get_settings().session_audiences
        self.audiences = tuple(audiences)
        if not self.audiences:
            raise ConfigurationError(
                "At least one session audience is required", config_key="audiences"
            )

        self.gql_names: GeneratedNames = derive_names(
            item_query_name, output_type_name, auth_type
        )

    def __repr__(self) -> str:
        return (
            f"ListAuthProvider(list={self.list.key!r}, "
            f"auth_type={self.auth_strategy.auth_type!r})"
        )

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def get_types(self, **options: Any) -> list[str]:
        names = self.gql_names
        return [
            f'''
    type {names.unauthenticate_output_name} {{
      """
      `true` when unauthentication succeeds.
      NOTE: unauthentication always succeeds when the request has an invalid or missing authentication token.
      """
      success: Boolean
    }}
  ''',
            f'''
    type {names.authenticate_output_name} {{
      """ Used to make subsequent authenticated requests by setting this token in a header: 'Authorization: Bearer <token>'. """
      token: String
      """ Retrieve information on the newly authenticated {names.output_type_name} here. """
      item: {names.output_type_name}
    }}
  ''',
        ]

    def get_queries(self, **options: Any) -> list[str]:
        names = self.gql_names
        return [f"{names.authenticated_query_name}: {names.output_type_name}"]

    def get_mutations(self, **options: Any) -> list[str]:
        names = self.gql_names
        auth_type_title_case = upcase(self.auth_strategy.auth_type)
        fragment = (self.auth_strategy.get_input_fragment() or "").strip()
        arguments = f"({fragment})" if fragment else ""
        return [
            f'""" Authenticate and generate a token for a {names.output_type_name} '
            f'with the {auth_type_title_case} Authentication Strategy. """\n'
            f"      {names.authenticate_mutation_name}"
            f"{arguments}: "
            f"{names.authenticate_output_name}",
            f"{names.unauthenticate_mutation_name}: {names.unauthenticate_output_name}",
        ]

    def get_type_resolvers(self, **options: Any) -> dict[str, Any]:
        return {}

    def get_query_resolvers(self, **options: Any) -> dict[str, Any]:
        name = self.gql_names.authenticated_query_name
        return {name: AuthenticatedQueryResolver(self, name)}

    def get_mutation_resolvers(self, **options: Any) -> dict[str, Any]:
        authenticate = self.gql_names.authenticate_mutation_name
        unauthenticate = self.gql_names.unauthenticate_mutation_name
        return {
            authenticate: AuthenticateMutationResolver(self, authenticate),
            unauthenticate: UnauthenticateMutationResolver(self, unauthenticate),
        }

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def authenticated_query(
        self, context: RequestContext, info: Any = None
    ) -> Any | None:
        """
        Return the item the request is authenticated as.

        ``None`` when the request is anonymous or authenticated as an item of
        a different list.
        """
        # The result depends on who is asking.
        set_private_cache_hint(info)

        authed_item = getattr(context, "authed_item", None)
        if not authed_item or getattr(context, "authed_list_key", None) != self.list.key:
            return None

        gql_name = self.gql_names.authenticated_query_name
        access = await self.check_list_access(context, gql_name=gql_name)
        return await self.list.item_query(
            merge_where_clause({"where": {"id": get_item_id(authed_item)}}, access),
            context,
            gql_name,
        )

    async def authenticate_mutation(
        self, args: dict[str, Any], context: RequestContext
    ) -> dict[str, Any]:
        """
        Validate credentials and start a session.

        Raises:
            AccessDeniedError: Before the strategy is consulted
            ValidationFailedError: With the strategy's message
        """
        gql_name = self.gql_names.authenticate_mutation_name
        await self.check_list_access(context, gql_name=gql_name)

        result = ValidationResult.coerce(await self.auth_strategy.validate(args))
        if not result.success:
            raise ValidationFailedError(result.message)

        token = await context.start_authed_session(
            AuthedSession(item=result.item, list=self.list), list(self.audiences)
        )
        return {"token": token, "item": result.item}

    async def unauthenticate_mutation(self, context: RequestContext) -> dict[str, bool]:
        """End the current session. Succeeds even if there was none."""
        gql_name = self.gql_names.unauthenticate_mutation_name
        await self.check_list_access(context, gql_name=gql_name)

        await context.end_authed_session()
        return {"success": True}

    async def check_list_access(
        self, context: RequestContext, *, gql_name: str
    ) -> AccessDecision:
        """
        Evaluate the list's access control for the ``auth`` operation.

        Returns:
            The access decision, possibly a where-clause restricting items

        Raises:
            AccessDeniedError: If the decision is missing, false, zero or empty
                text. Any mapping, including an empty one, grants access.
        """
        operation = AUTH_OPERATION
        access = context.get_list_access_control_for_user(
            self.list.key, None, operation, gql_name=gql_name
        )
        if inspect.isawaitable(access):
            access = await access

        if _is_denied(access):
            logger.debug(
                "Access statically or implicitly denied",
                operation=operation,
                access=access,
                gql_name=gql_name,
            )
            logger.info("Access Denied", operation=operation, gql_name=gql_name)
            # Clients still receive data for the fields they may access.
            self._raise_access_denied(context, gql_name)

        return access

    def _raise_access_denied(self, context: RequestContext, target: str) -> None:
        authed_item = getattr(context, "authed_item", None)
        raise AccessDeniedError(
            data={"type": self.gql_names.operation_type(target), "target": target},
            internal_data={
                "authed_id": get_item_id(authed_item),
                "authed_list_key": getattr(context, "authed_list_key", None),
            },
        )


def _is_denied(access: AccessDecision) -> bool:
    if isinstance(access, Mapping):
        return False
    return not access


__all__ = ["AUTH_OPERATION", "ListAuthProvider"]
