"""
GraphQL presentation layer

Generates the authentication fields of a list and assembles them into an
executable schema.
"""

from .cache_control import CacheControl, CacheHint, CacheScope
from .errors import AccessDeniedError, ValidationFailedError
from .names import GeneratedNames, derive_names
from .provider import ListAuthProvider
from .schema import AuthSchemaAssembler, build_auth_schema

__all__ = [
    "AccessDeniedError",
    "AuthSchemaAssembler",
    "CacheControl",
    "CacheHint",
    "CacheScope",
    "GeneratedNames",
    "ListAuthProvider",
    "ValidationFailedError",
    "build_auth_schema",
    "derive_names",
]
