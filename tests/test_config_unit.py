import logging

import pytest

from datematch.core.config import Settings, get_settings
from datematch.core.logging import LOG_FORMAT, setup_logging


class TestSettings:

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.api_base_url == "http://localhost:3001"
        assert settings.get_match_statuses() == ["active", "confirmed", "date_passed"]

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("API_BASE_URL", "https://api.example.com/")
        monkeypatch.setenv("MATCH_STATUSES", "active, confirmed ,")
        monkeypatch.setenv("MESSAGES_PAGE_SIZE", "20")

        settings = Settings()

        assert settings.api_base_url == "https://api.example.com"
        assert settings.get_match_statuses() == ["active", "confirmed"]
        assert settings.messages_page_size == 20

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_invalid_environment_name(self, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "qa")

        with pytest.raises(ValueError):
            Settings()


class TestSetupLogging:

    @pytest.fixture
    def basic_config_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        return calls

    def test_uses_configured_level(self, basic_config_calls) -> None:
        setup_logging(Settings(log_level="warning"))

        assert basic_config_calls == [{"level": logging.WARNING, "format": LOG_FORMAT}]
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_debug_flag_wins(self, basic_config_calls) -> None:
        setup_logging(Settings(debug=True, log_level="ERROR"))

        assert basic_config_calls[0]["level"] == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, basic_config_calls) -> None:
        setup_logging(Settings(log_level="chatty"))

        assert basic_config_calls[0]["level"] == logging.INFO
