# ruff: noqa: A005
"""Structured logging.

listauth logs through structlog. Importing a module that owns a logger
configures nothing: ``get_logger`` hands out loggers that resolve the
process-wide configuration when they emit their first record. Hosts that
call ``configure_logging`` themselves, or configure structlog before the
first listauth record, keep their own setup.

Pieces:
- LogConfig: output settings, with per-environment defaults
- SensitiveDataFilter / MessageLengthFilter: applied to every record
- StructuredLogger: level gate plus filters in front of a structlog logger
- LoggerFactory: installs the structlog processor chain
"""

import logging
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars

from listauth.core.enums import Environment, LogFormat, LogLevel
from listauth.core.errors import ConfigurationError

MIN_MESSAGE_LENGTH = 1000


@dataclass
class LogConfig:
    """
    Logging output settings.

    The environment overrides ``format`` (and caller info) after validation:
    development renders to the console with call sites, tests render plain
    key/value pairs and production renders JSON.

    Usage Example:
        configure_logging(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    environment: Environment = Environment.DEVELOPMENT

    enable_timestamps: bool = True
    enable_caller_info: bool = False
    enable_exception_info: bool = True

    enable_sensitive_data_filtering: bool = True
    truncate_long_messages: bool = True
    max_message_length: int = 10000

    def __post_init__(self):
        self.validate()
        self.apply_environment_defaults()

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If ``max_message_length`` is too small to be useful
        """
        if self.max_message_length < MIN_MESSAGE_LENGTH:
            raise ConfigurationError(
                f"max_message_length must be at least {MIN_MESSAGE_LENGTH}",
                config_key="max_message_length",
            )

    def apply_environment_defaults(self) -> None:
        if self.environment == Environment.DEVELOPMENT:
            self.format = LogFormat.CONSOLE
            self.enable_caller_info = True
        elif self.environment == Environment.TESTING:
            self.format = LogFormat.PLAIN
        elif self.environment == Environment.PRODUCTION:
            self.format = LogFormat.JSON
            self.enable_caller_info = False
            self.enable_sensitive_data_filtering = True


# -------------------------------------------------------------------------------------
# Record filters
# -------------------------------------------------------------------------------------


class LogFilter(ABC):
    """Transforms a record before it reaches structlog."""

    @abstractmethod
    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """Return the record to emit; the input is not mutated."""


class SensitiveDataFilter(LogFilter):
    """
    Masks values whose key looks like a credential.

    Keys are matched case-insensitively anywhere in the name, so
    ``access_token`` and ``X-Api-Key`` are both masked. Nested mappings and
    mappings inside lists are walked as well.
    """

    SENSITIVE_KEY = re.compile(
        r"password|token|secret|credential|authorization|api.?key", re.IGNORECASE
    )

    def __init__(self, mask_char: str = "*", preserve_length: bool = False):
        self.mask_char = mask_char
        self.preserve_length = preserve_length

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        return {key: self._filter_value(key, value) for key, value in record.items()}

    def _filter_value(self, key: str, value: Any) -> Any:
        if self.SENSITIVE_KEY.search(key):
            return self._mask(value)
        if isinstance(value, dict):
            return self.filter(value)
        if isinstance(value, list):
            return [self.filter(item) if isinstance(item, dict) else item for item in value]
        return value

    def _mask(self, value: Any) -> str | None:
        if value is None:
            return None
        if self.preserve_length:
            return self.mask_char * len(str(value))
        return f"{self.mask_char * 3}[MASKED]"


class MessageLengthFilter(LogFilter):
    """Cuts ``message`` down to ``max_length`` characters, suffix included."""

    def __init__(self, max_length: int = 10000, truncation_suffix: str = "... [TRUNCATED]"):
        self.max_length = max_length
        self.truncation_suffix = truncation_suffix

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        message = record.get("message")
        if not isinstance(message, str) or len(message) <= self.max_length:
            return dict(record)

        keep = self.max_length - len(self.truncation_suffix)
        return {
            **record,
            "message": message[:keep] + self.truncation_suffix,
            "message_truncated": True,
        }


def build_filters(config: LogConfig) -> list[LogFilter]:
    filters: list[LogFilter] = []
    if config.enable_sensitive_data_filtering:
        filters.append(SensitiveDataFilter())
    if config.truncate_long_messages:
        filters.append(MessageLengthFilter(config.max_message_length))
    return filters


# -------------------------------------------------------------------------------------
# Loggers
# -------------------------------------------------------------------------------------


class StructuredLogger:
    """
    Level gate and record filters in front of a structlog logger.

    Without an explicit ``config`` the logger follows the process-wide
    configuration, which is set up on the first record that passes through
    any such logger.
    """

    def __init__(self, name: str, config: LogConfig | None = None):
        self.name = name
        self._config = config
        self._filters = build_filters(config) if config is not None else None
        self._logger = structlog.get_logger(name)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def _resolve(self) -> tuple[LogConfig, list[LogFilter]]:
        if self._config is not None:
            return self._config, self._filters
        factory = _get_factory()
        return factory.config, factory.filters

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        config, filters = self._resolve()
        if level.priority < config.level.priority:
            return

        record = {"message": message, **kwargs}
        for log_filter in filters:
            record = log_filter.filter(record)

        getattr(self._logger, level.level_name.lower())(record.pop("message"), **record)


class LoggerFactory:
    """Holds the active ``LogConfig`` and installs the structlog pipeline for it."""

    def __init__(self, config: LogConfig):
        self.config = config
        self.filters = build_filters(config)

    def build_processors(self) -> list[Any]:
        processors: list[Any] = [
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
        ]

        if self.config.enable_timestamps:
            processors.append(structlog.processors.TimeStamper(fmt="iso"))

        if self.config.enable_caller_info:
            # Report the line that called StructuredLogger, not its internals.
            processors.append(
                structlog.processors.CallsiteParameterAdder(
                    parameters=[
                        structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO,
                        structlog.processors.CallsiteParameter.FUNC_NAME,
                    ],
                    additional_ignores=[__name__],
                )
            )

        if self.config.enable_exception_info:
            processors += [
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
            ]

        processors.append(structlog.processors.UnicodeDecoder())

        if self.config.format == LogFormat.JSON:
            processors.append(structlog.processors.JSONRenderer())
        elif self.config.format == LogFormat.CONSOLE:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))
        else:
            processors.append(structlog.processors.KeyValueRenderer())
        return processors

    def configure_logging(self) -> None:
        structlog.configure(
            processors=self.build_processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        # No-op when the host already attached handlers to the root logger.
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=self.config.level.to_logging_level(),
        )


# -------------------------------------------------------------------------------------
# Process-wide entry points
# -------------------------------------------------------------------------------------

_logger_factory: LoggerFactory | None = None
_loggers: dict[str, StructuredLogger] = {}


def _config_from_settings() -> LogConfig:
    from listauth.core.config import get_settings

    settings = get_settings()
    return LogConfig(
        level=settings.log_level,
        format=settings.log_format,
        environment=settings.environment,
    )


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Install listauth's structlog pipeline.

    Args:
        config: Output settings; read from ``LISTAUTH_*`` settings when omitted
    """
    global _logger_factory  # noqa: PLW0603

    _logger_factory = LoggerFactory(config or _config_from_settings())
    _logger_factory.configure_logging()


def _get_factory() -> LoggerFactory:
    """Active factory, created on first use without overriding a host's structlog setup."""
    global _logger_factory  # noqa: PLW0603

    if _logger_factory is None:
        _logger_factory = LoggerFactory(_config_from_settings())
        if not structlog.is_configured():
            _logger_factory.configure_logging()
    return _logger_factory


def get_logger(name: str) -> StructuredLogger:
    """
    Get the shared logger called ``name``.

    Safe to call at import time: no configuration happens until the logger
    emits a record.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


__all__ = [
    "LogConfig",
    "LogFilter",
    "LoggerFactory",
    "MessageLengthFilter",
    "SensitiveDataFilter",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]
