"""Cross-cutting infrastructure: configuration, errors, logging and protocols."""

from .config import Settings, get_settings
from .errors import ConfigurationError, ListAuthError

__all__ = ["ConfigurationError", "ListAuthError", "Settings", "get_settings"]
