"""Tests for Settings.from_env."""

import pytest
from pydantic import ValidationError

from seo_inspector.config import DEFAULT_USER_AGENT, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.host == "0.0.0.0"
        assert settings.port == 8000
        assert settings.fetch_timeout_ms == 10000
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.recent_limit == 5
        assert settings.log_level == "INFO"

    def test_reads_prefixed_variables(self):
        settings = Settings.from_env(
            {
                "SEO_INSPECTOR_PORT": "9000",
                "SEO_INSPECTOR_FETCH_TIMEOUT_MS": "2500",
                "SEO_INSPECTOR_USER_AGENT": "MyBot/1.0",
                "SEO_INSPECTOR_LOG_LEVEL": " debug ",
                "PORT": "1234",
            }
        )
        assert settings.port == 9000
        assert settings.fetch_timeout_ms == 2500
        assert settings.user_agent == "MyBot/1.0"
        assert settings.log_level == "DEBUG"

    def test_empty_values_fall_back_to_defaults(self):
        assert Settings.from_env({"SEO_INSPECTOR_PORT": ""}).port == 8000

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("SEO_INSPECTOR_RECENT_LIMIT", "3")
        assert Settings.from_env().recent_limit == 3

    @pytest.mark.parametrize(
        "env",
        [
            {"SEO_INSPECTOR_PORT": "abc"},
            {"SEO_INSPECTOR_PORT": "70000"},
            {"SEO_INSPECTOR_FETCH_TIMEOUT_MS": "0"},
            {"SEO_INSPECTOR_RECENT_LIMIT": "-1"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ValidationError):
            Settings.from_env(env)
