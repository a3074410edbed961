"""Tests for settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from agent_swarm.config import Settings, get_settings
from agent_swarm.logging import LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for var in (
        "ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GOOGLE_API_KEY", "GEMINI_API_KEY",
        "LLM_PROVIDER", "LLM_MODEL", "AGENT_SWARM_LOG_LEVEL", "MCP_ENABLED",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.mcp_enabled is False
        assert settings.mcp_servers_config == "mcp_servers.json"
        assert settings.mcp_tool_prefix == "mcp_"
        assert settings.mcp_connection_timeout == 30.0
        assert settings.memory_max_messages == 10
        assert settings.log_level == "WARNING"

    def test_env_vars(self, clean_env, monkeypatch):
        monkeypatch.setenv("MCP_ENABLED", "true")
        monkeypatch.setenv("LLM_PROVIDER", "dummy")
        monkeypatch.setenv("AGENT_SWARM_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.mcp_enabled is True
        assert settings.llm_provider == "dummy"
        assert settings.log_level == "DEBUG"

    def test_detect_provider(self, clean_env):
        assert Settings(_env_file=None).detect_provider() is None
        assert Settings(_env_file=None, openai_api_key="k").detect_provider() == "openai"
        assert Settings(_env_file=None, gemini_api_key="g").detect_provider() == "google"
        assert Settings(_env_file=None, gemini_api_key="g").get_api_key_for_provider("google") == "g"

    def test_timeouts_must_be_positive(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, mcp_call_timeout=0)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestLogging:
    def test_setup_logging_level(self):
        logger = setup_logging("debug")
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        setup_logging("WARNING")

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("AGENT_SWARM_LOG_LEVEL", "ERROR")
        assert setup_logging().level == logging.ERROR
        setup_logging("WARNING")

    def test_invalid_level_falls_back(self):
        assert setup_logging("LOUD").level == logging.WARNING

    def test_get_logger_uses_module_name(self):
        assert get_logger("agent_swarm.swarm.router").name == "agent_swarm.swarm.router"

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging("INFO")
        logger = setup_logging("ERROR")
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.ERROR
        setup_logging("WARNING")
