"""
Tests for environment-driven settings.
"""

import os

import pytest

from listauth.core.config import Settings, get_settings
from listauth.core.enums import Environment, LogFormat, LogLevel
from listauth.core.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No LISTAUTH_* variables and no .env file in the working directory."""
    for key in (
        "LISTAUTH_ENVIRONMENT",
        "LISTAUTH_LOG_LEVEL",
        "LISTAUTH_LOG_FORMAT",
        "LISTAUTH_SESSION_AUDIENCES",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestSettings:
    """Test settings loading."""

    def test_defaults(self, clean_env):
        settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == LogLevel.INFO
        assert settings.log_format == LogFormat.JSON
        assert settings.session_audiences == ("admin",)

    def test_from_environment(self, clean_env):
        clean_env.setenv("LISTAUTH_ENVIRONMENT", "prod")
        clean_env.setenv("LISTAUTH_LOG_LEVEL", "debug")
        clean_env.setenv("LISTAUTH_LOG_FORMAT", "console")
        clean_env.setenv("LISTAUTH_SESSION_AUDIENCES", "admin,,public ")

        settings = Settings()

        assert settings.environment == Environment.PRODUCTION
        assert settings.log_level == LogLevel.DEBUG
        assert settings.log_format == LogFormat.CONSOLE
        assert settings.session_audiences == ("admin", "public")

    def test_env_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text(
            "# local overrides\nLISTAUTH_SESSION_AUDIENCES='admin,editor'\n",
            encoding="utf-8",
        )

        settings = Settings(str(tmp_path / ".env"))

        assert settings.session_audiences == ("admin", "editor")

    def test_env_file_does_not_override_environment(self, clean_env, tmp_path):
        clean_env.setenv("LISTAUTH_LOG_LEVEL", "WARNING")
        (tmp_path / ".env").write_text("LISTAUTH_LOG_LEVEL=DEBUG\n", encoding="utf-8")

        settings = Settings(str(tmp_path / ".env"))

        assert settings.log_level == LogLevel.WARNING

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("LISTAUTH_ENVIRONMENT", "moon"),
            ("LISTAUTH_LOG_LEVEL", "LOUD"),
            ("LISTAUTH_SESSION_AUDIENCES", " , "),
        ],
    )
    def test_invalid_values(self, clean_env, key, value):
        clean_env.setenv(key, value)

        with pytest.raises(ConfigurationError) as exc_info:
            Settings()

        assert exc_info.value.details["config_key"] == key

    def test_get_settings_is_cached(self, clean_env):
        assert get_settings() is get_settings()

    def test_to_dict(self, clean_env):
        assert Settings().to_dict() == {
            "environment": "dev",
            "log_level": "INFO",
            "log_format": "json",
            "session_audiences": ["admin"],
        }

    def test_env_file_leaves_process_environment_alone(self, clean_env, tmp_path):
        clean_env.delenv("UNRELATED_HOST_SECRET", raising=False)
        (tmp_path / ".env").write_text(
            "UNRELATED_HOST_SECRET=leaked\nLISTAUTH_LOG_LEVEL=debug\n",
            encoding="utf-8",
        )
        before = dict(os.environ)

        settings = Settings()

        assert settings.log_level == LogLevel.DEBUG
        assert dict(os.environ) == before
        assert settings.env_loader.file_values == {"LISTAUTH_LOG_LEVEL": "debug"}
