"""Authentication schema and resolvers for GraphQL content lists."""

__version__ = "0.1.0"
