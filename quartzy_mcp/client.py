"""
HTTP client for the Quartzy REST API.

One call to execute() is one HTTP exchange: no retries, no caching. Non-2xx
responses and transport failures surface immediately as UpstreamError.
"""

from typing import Any, Dict, Optional

import httpx

from .config import ACCESS_TOKEN_ENV, QuartzyConfig
from .errors import ConfigurationError, UpstreamError
from .logging_config import get_logger

logger = get_logger("client")

# Methods whose body is sent upstream
_BODY_METHODS = frozenset({"POST", "PUT"})


class QuartzyClient:
    """Executes authenticated requests against the configured Quartzy base URL."""

    def __init__(
        self,
        config: QuartzyConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Access-Token": self.config.access_token,
            "Content-Type": "application/json",
        }

    def _http_client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        if self.config.request_timeout is not None:
            kwargs["timeout"] = self.config.request_timeout
        return httpx.AsyncClient(**kwargs)

    async def execute(self, path: str, method: str = "GET", body: Any = None) -> Any:
        """
        Send one request and return the decoded JSON payload.

        Returns None for 204 responses and empty bodies. Raises
        ConfigurationError when no access token is configured and
        UpstreamError for non-2xx responses or network failures.
        """
        if not self.config.has_access_token:
            raise ConfigurationError(ACCESS_TOKEN_ENV)

        method = method.upper()
        url = self._url(path)
        request_kwargs: Dict[str, Any] = {"headers": self._headers()}
        if body is not None and method in _BODY_METHODS:
            request_kwargs["json"] = body

        logger.info("HTTP %s %s", method, path)
        try:
            async with self._http_client() as http:
                response = await http.request(method, url, **request_kwargs)
        except httpx.RequestError as e:
            logger.error("HTTP %s unexpected error url=%s error=%s", method, url, e)
            raise UpstreamError(None, str(e) or e.__class__.__name__, url=url) from e

        if not response.is_success:
            logger.error(
                "HTTP %s failed path=%s status=%s",
                method,
                path,
                response.status_code,
            )
            raise UpstreamError(response.status_code, response.text, url=url)

        logger.info("HTTP %s %s -> %s", method, path, response.status_code)

        # Handle empty responses (e.g. 204 No Content)
        if (
            response.status_code == 204
            or response.headers.get("content-length") == "0"
            or not response.content
        ):
            return None

        return response.json()
