"""
Configuration for the Quartzy MCP server.

Values come from the process environment; a .env file in the working
directory is loaded first (python-dotenv) without overriding real variables.

Environment:
  QUARTZY_ACCESS_TOKEN     access token sent as the Access-Token header
  QUARTZY_BASE_URL         (default: https://api.quartzy.com)
  QUARTZY_REQUEST_TIMEOUT  request timeout in seconds (default: httpx default)
  MCP_TRANSPORT            stdio | streamable-http | sse (default: stdio)
  MCP_HOST / MCP_PORT      bind address for the HTTP transports
  QUARTZY_LOG_FILE         optional rotating log file
"""

import os
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_BASE_URL = "https://api.quartzy.com"
DEFAULT_MCP_HOST = "127.0.0.1"
DEFAULT_MCP_PORT = 9100

ACCESS_TOKEN_ENV = "QUARTZY_ACCESS_TOKEN"


def _env(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


class QuartzyConfig(BaseModel):
    """Read-only settings shared by every request to the Quartzy API."""

    model_config = ConfigDict(frozen=True)

    access_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: Optional[float] = None

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        return value or DEFAULT_BASE_URL

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("request_timeout must be greater than 0")
        return value

    @property
    def has_access_token(self) -> bool:
        return bool(self.access_token)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "QuartzyConfig":
        environ = os.environ if environ is None else environ
        timeout = _env(environ, "QUARTZY_REQUEST_TIMEOUT")
        return cls(
            access_token=_env(environ, ACCESS_TOKEN_ENV) or "",
            base_url=_env(environ, "QUARTZY_BASE_URL") or DEFAULT_BASE_URL,
            request_timeout=float(timeout) if timeout else None,
        )


class ServerSettings(BaseModel):
    """How the MCP server is exposed to its host."""

    model_config = ConfigDict(frozen=True)

    transport: Literal["stdio", "streamable-http", "sse"] = "stdio"
    host: str = DEFAULT_MCP_HOST
    port: int = DEFAULT_MCP_PORT
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerSettings":
        environ = os.environ if environ is None else environ
        port = _env(environ, "MCP_PORT")
        return cls(
            transport=_env(environ, "MCP_TRANSPORT") or "stdio",
            host=_env(environ, "MCP_HOST") or DEFAULT_MCP_HOST,
            port=int(port) if port else DEFAULT_MCP_PORT,
            log_file=_env(environ, "QUARTZY_LOG_FILE"),
        )


def load_config() -> QuartzyConfig:
    """Load .env (if present) and build the API configuration."""
    load_dotenv()
    return QuartzyConfig.from_env()


def load_server_settings() -> ServerSettings:
    load_dotenv()
    return ServerSettings.from_env()
