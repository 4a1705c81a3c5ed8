"""Tests for Settings loaded from RAKE_ environment variables."""

import pytest


class TestSettings:
    """Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        from rake_service.core.config import get_settings

        monkeypatch.delenv("RAKE_DEFAULT_LANGUAGE", raising=False)
        monkeypatch.delenv("RAKE_STOPWORDS_PATH", raising=False)
        settings = get_settings()

        assert settings.service_name == "rake-service"
        assert settings.default_language == "en"
        assert settings.stopwords_path is None
        assert settings.default_top_k == 10

    def test_env_prefix_overrides(self, monkeypatch):
        from rake_service.core.config import get_settings

        monkeypatch.setenv("RAKE_DEFAULT_LANGUAGE", "id")
        monkeypatch.setenv("RAKE_LOG_JSON", "false")
        monkeypatch.setenv("RAKE_DEFAULT_TOP_K", "3")
        settings = get_settings()

        assert settings.default_language == "id"
        assert settings.log_json is False
        assert settings.default_top_k == 3

    def test_get_settings_returns_fresh_instance(self):
        from rake_service.core.config import get_settings

        assert get_settings() is not get_settings()

    def test_negative_top_k_rejected(self, monkeypatch):
        from rake_service.core.config import get_settings
        from rake_service.core.exceptions import ConfigurationError

        monkeypatch.setenv("RAKE_DEFAULT_TOP_K", "-5")
        with pytest.raises(ConfigurationError):
            get_settings()
