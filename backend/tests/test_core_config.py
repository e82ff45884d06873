"""
Tests for gadgetsinc/core/config.py - Configuration and settings validation.
"""
import importlib

import pytest

from gadgetsinc.core.config import DEFAULT_CHAT_SYSTEM_PROMPT, Settings
from gadgetsinc.core.exceptions import ConfigurationError
from gadgetsinc.services.ai.llm_config import build_completion_service


def _settings(**overrides):
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None, **overrides)


class TestSettingsDefaults:
    """Test default configuration values."""

    def test_defaults(self, monkeypatch):
        for name in ("CHAT_BACKEND", "MOCK_CHUNK_DELAY_MS", "MOCK_RESPONSE_DELAY_MS", "DEBUG"):
            monkeypatch.delenv(name, raising=False)

        settings = _settings()

        assert settings.CHAT_BACKEND == "mock"
        assert settings.ALLOWED_ORIGINS == ["*"]
        assert settings.MOCK_CHUNK_DELAY_MS == 50
        assert settings.MOCK_RESPONSE_DELAY_MS == 500
        assert settings.LLM_MAX_TOOL_ROUNDS == 5
        assert settings.CHAT_SYSTEM_PROMPT == DEFAULT_CHAT_SYSTEM_PROMPT
        assert "1-800-GADGETS" in settings.CHAT_SYSTEM_PROMPT

    def test_use_mock_chat_overrides_backend(self):
        settings = _settings(CHAT_BACKEND="ollama", USE_MOCK_CHAT=True)

        assert settings.effective_chat_backend == "mock"

    def test_allowed_origins_comma_separated(self):
        settings = _settings(ALLOWED_ORIGINS="http://a.example, http://b.example,")

        assert settings.ALLOWED_ORIGINS == ["http://a.example", "http://b.example"]


class TestSettingsFromEnvironment:
    """Test environment variable handling."""

    def test_ollama_connection_string_alias(self, monkeypatch):
        monkeypatch.setenv("CHAT_BACKEND", "ollama")
        monkeypatch.setenv("ConnectionStrings__ollama", "http://ollama:11434")

        settings = _settings()

        assert settings.effective_chat_backend == "ollama"
        assert settings.OLLAMA_BASE_URL == "http://ollama:11434"

    def test_module_settings_reload(self, monkeypatch):
        """Module-level settings pick up the environment on reload."""
        monkeypatch.setenv("MOCK_CHUNK_DELAY_MS", "5")

        from gadgetsinc.core import config
        importlib.reload(config)

        assert config.settings.MOCK_CHUNK_DELAY_MS == 5


class TestSettingsValidation:
    """Test configuration validation logic."""

    def test_azure_missing_connection_is_configuration_error(self):
        settings = _settings(CHAT_BACKEND="azure_openai")

        with pytest.raises(ConfigurationError) as exc_info:
            build_completion_service(settings)

        assert str(exc_info.value) == (
            "AZURE_OPENAI_API_KEY and AZURE_OPENAI_ENDPOINT required for the azure_openai backend"
        )

    def test_azure_missing_endpoint_only(self):
        settings = _settings(CHAT_BACKEND="azure_openai", AZURE_OPENAI_API_KEY="key")

        with pytest.raises(ConfigurationError, match="^AZURE_OPENAI_ENDPOINT required"):
            build_completion_service(settings)

    def test_ollama_missing_base_url_is_configuration_error(self):
        settings = _settings(CHAT_BACKEND="ollama", OLLAMA_BASE_URL="")

        with pytest.raises(ConfigurationError, match="OLLAMA_BASE_URL is required"):
            build_completion_service(settings)

    def test_azure_configured(self):
        settings = _settings(
            CHAT_BACKEND="azure_openai",
            AZURE_OPENAI_API_KEY="key",
            AZURE_OPENAI_ENDPOINT="https://gadgetsinc.openai.azure.com",
        )

        assert settings.effective_chat_backend == "azure_openai"

    def test_production_rejects_debug(self):
        with pytest.raises(ValueError) as exc_info:
            _settings(ENVIRONMENT="production", DEBUG=True)

        assert "DEBUG must be False in production" in str(exc_info.value)

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            _settings(LOG_LEVEL="chatty")

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            _settings(CHAT_BACKEND="gemini")

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            _settings(MOCK_CHUNK_DELAY_MS=-1)
