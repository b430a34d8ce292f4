"""Environment-driven settings for listauth.

Settings are read from ``LISTAUTH_*`` environment variables. A ``.env`` file
may supply the ones the environment lacks; only its ``LISTAUTH_*`` entries
are read and ``os.environ`` is never modified.

Usage Example:
    settings = get_settings()
    provider = ListAuthProvider(
        list=user_list,
        auth_strategy=password_strategy,
        audiences=settings.session_audiences,
    )
"""

import os
from enum import Enum
from functools import lru_cache
from typing import Any

from listauth.core.enums import Environment, LogFormat, LogLevel
from listauth.core.errors import ConfigurationError

ENV_PREFIX = "LISTAUTH_"

# Only the administrative audience is currently supported by the session
# store; hosts may widen this through LISTAUTH_SESSION_AUDIENCES.
DEFAULT_SESSION_AUDIENCES = ("admin",)


class EnvironmentLoader:
    """Typed access to prefixed variables from the environment or a ``.env`` file."""

    def __init__(self, env_file: str = ".env", prefix: str = ENV_PREFIX):
        self.env_file = env_file
        self.prefix = prefix
        self.file_values = self._read_env_file()

    def _read_env_file(self) -> dict[str, str]:
        """Prefixed ``KEY=value`` pairs from the env file, if there is one."""
        values: dict[str, str] = {}
        if not os.path.exists(self.env_file):
            return values

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()

                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()

                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    if key.startswith(self.prefix):
                        values[key] = value

        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

        return values

    def _raw(self, key: str) -> str | None:
        name = f"{self.prefix}{key}"
        return os.environ.get(name, self.file_values.get(name))

    def get_enum(self, key: str, enum_class: type[Enum], default: Enum) -> Any:
        """Get enum value from environment, matching on the member value."""
        value = self._raw(key)
        if value is None or not value.strip():
            return default

        value = value.strip().lower()
        for member in enum_class:
            if str(member.value).lower() == value:
                return member

        raise ConfigurationError(
            f"Invalid value {value!r} for {self.prefix}{key}",
            config_key=f"{self.prefix}{key}",
        )

    def get_log_level(self, key: str, default: LogLevel) -> LogLevel:
        """Get a LogLevel from its name (``DEBUG``, ``info``...)."""
        value = self._raw(key)
        if value is None or not value.strip():
            return default

        try:
            return LogLevel.from_string(value.strip())
        except ValueError as e:
            raise ConfigurationError(
                str(e), config_key=f"{self.prefix}{key}"
            ) from e

    def get_list(self, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
        """Get a comma separated list, dropping blank entries."""
        value = self._raw(key)
        if value is None:
            return default

        items = tuple(item.strip() for item in value.split(",") if item.strip())
        if not items:
            raise ConfigurationError(
                f"{self.prefix}{key} must contain at least one value",
                config_key=f"{self.prefix}{key}",
            )
        return items


class Settings:
    """
    listauth settings.

    Attributes:
        environment: Deployment environment, drives logging defaults
        log_level: Minimum level emitted by ``listauth`` loggers
        log_format: Renderer used by structlog
        session_audiences: Audiences a freshly authenticated session is
            scoped to
    """

    def __init__(self, env_file: str = ".env"):
        self.env_loader = EnvironmentLoader(env_file)

        self.environment = self.env_loader.get_enum(
            "ENVIRONMENT", Environment, Environment.DEVELOPMENT
        )
        self.log_level = self.env_loader.get_log_level("LOG_LEVEL", LogLevel.INFO)
        self.log_format = self.env_loader.get_enum(
            "LOG_FORMAT", LogFormat, LogFormat.JSON
        )
        self.session_audiences = self.env_loader.get_list(
            "SESSION_AUDIENCES", DEFAULT_SESSION_AUDIENCES
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            "environment": self.environment.value,
            "log_level": self.log_level.level_name,
            "log_format": self.log_format.value,
            "session_audiences": list(self.session_audiences),
        }


@lru_cache
def get_settings(env_file: str = ".env") -> Settings:
    """
    Get cached settings instance.

    Args:
        env_file: Environment file to load

    Returns:
        Settings: listauth settings
    """
    return Settings(env_file)


__all__ = [
    "DEFAULT_SESSION_AUDIENCES",
    "EnvironmentLoader",
    "Settings",
    "get_settings",
]
