from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

import httpx

from .errors import RateLimitedError, TransportError
from .request import COOKIE_HEADER, RequestConfig
from .types import JsonValue

logger = logging.getLogger(__name__)


def _join_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


@dataclass
class AsyncHttpClient:
    """
    Async HTTP transport for the fantasy API hosts.

    - Uses a single underlying httpx.AsyncClient for connection pooling.
    - `path` may carry its own query string; it is appended to the base URL as-is.
    - Raises TransportError (including RateLimitedError) on transport issues / non-2xx.
    - Never retries.
    """

    base_url: str
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _request_headers(self, config: RequestConfig | None) -> dict[str, str]:
        if config is None:
            return {}
        headers = dict(config.headers)
        if not config.with_credentials:
            headers.pop(COOKIE_HEADER, None)
        return headers

    async def get_json_value(self, path: str, config: RequestConfig | None = None) -> JsonValue:
        """
        GET `path` and return parsed JSON (object or array).
        """
        base_url = config.base_url if config is not None and config.base_url else self.base_url
        url = _join_url(base_url, path)
        headers = self._request_headers(config)

        logger.debug(
            "GET %s (credentialed=%s)", url, bool(config is not None and config.with_credentials)
        )

        try:
            resp = await self._client.get(url, headers=headers)
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            raise TransportError(str(e), url=url) from e

        if resp.status_code == 429:
            raise RateLimitedError(
                "Upstream rate limited the request (HTTP 429).",
                status_code=resp.status_code,
                body=resp.text,
                url=url,
            )

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"HTTP {resp.status_code} for GET {resp.request.url}",
                status_code=resp.status_code,
                body=resp.text,
                url=url,
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError(
                "Response was not valid JSON.", status_code=resp.status_code, url=url
            ) from e

        if not isinstance(data, (dict, list)):
            raise TransportError(
                f"Expected JSON object or array, got {type(data)}",
                status_code=resp.status_code,
                url=url,
            )

        return data
