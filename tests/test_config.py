"""Tests for environment-driven configuration."""
from __future__ import annotations

import pydantic
import pytest

from quartzy_mcp.config import DEFAULT_BASE_URL, QuartzyConfig, ServerSettings


def test_defaults_from_empty_environment():
    config = QuartzyConfig.from_env({})

    assert config.access_token == ""
    assert config.has_access_token is False
    assert config.base_url == DEFAULT_BASE_URL
    assert config.request_timeout is None


def test_values_from_environment():
    config = QuartzyConfig.from_env(
        {
            "QUARTZY_ACCESS_TOKEN": " secret ",
            "QUARTZY_BASE_URL": "https://sandbox.quartzy.test/",
            "QUARTZY_REQUEST_TIMEOUT": "2.5",
        }
    )

    assert config.access_token == "secret"
    assert config.has_access_token is True
    assert config.base_url == "https://sandbox.quartzy.test"
    assert config.request_timeout == 2.5


def test_blank_base_url_falls_back_to_default():
    assert QuartzyConfig.from_env({"QUARTZY_BASE_URL": "  "}).base_url == DEFAULT_BASE_URL


def test_config_is_immutable():
    config = QuartzyConfig(access_token="secret")

    with pytest.raises(pydantic.ValidationError):
        config.access_token = "other"


def test_non_positive_timeout_rejected():
    with pytest.raises(pydantic.ValidationError):
        QuartzyConfig(request_timeout=0)


def test_server_settings_defaults():
    settings = ServerSettings.from_env({})

    assert settings.transport == "stdio"
    assert settings.host == "127.0.0.1"
    assert settings.port == 9100
    assert settings.log_file is None


def test_server_settings_from_environment():
    settings = ServerSettings.from_env(
        {
            "MCP_TRANSPORT": "streamable-http",
            "MCP_HOST": "0.0.0.0",
            "MCP_PORT": "8080",
            "QUARTZY_LOG_FILE": "/tmp/quartzy.log",
        }
    )

    assert settings.transport == "streamable-http"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.log_file == "/tmp/quartzy.log"


def test_unknown_transport_rejected():
    with pytest.raises(pydantic.ValidationError):
        ServerSettings.from_env({"MCP_TRANSPORT": "carrier-pigeon"})
