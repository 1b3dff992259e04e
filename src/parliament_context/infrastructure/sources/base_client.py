"""
Base API Client - Common HTTP request pattern with rate limiting and circuit breaker.

Shared by the Parliament data client and the Cohere reranker:
- httpx.AsyncClient management (injectable transport for tests)
- Optional minimum interval between requests
- Circuit breaker for fault tolerance
- Failures mapped onto the project's exception hierarchy

Live-query calls are never retried; the caller degrades instead. A 404 is
"not found" and returns ``None``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx
from typing_extensions import Self

from parliament_context.shared.async_utils import CircuitBreaker
from parliament_context.shared.exceptions import (
    ErrorContext,
    NetworkError,
    ParseError,
    RateLimitError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


class BaseAPIClient:
    """
    Base class for external API clients.

    Subclasses set ``_service_name`` and may override
    ``_handle_expected_status()`` for service-specific status codes.

    Example:
        class MyClient(BaseAPIClient):
            _service_name = "MyAPI"

            def __init__(self):
                super().__init__(base_url="https://api.example.com")

            async def get_item(self, item_id: str) -> dict | None:
                return await self._make_request(f"/items/{item_id}")
    """

    _service_name: str = "API"

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        min_interval: float = 0.0,
        headers: dict[str, str] | None = None,
        circuit_breaker: CircuitBreaker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize base client.

        Args:
            base_url: Base URL for the API (optional, can pass full URLs)
            timeout: Request timeout in seconds
            min_interval: Minimum seconds between requests (rate limiting)
            headers: Default headers for all requests
            circuit_breaker: Optional circuit breaker for fault tolerance.
                             If None, a default one is created (threshold=10, recovery=60s).
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._min_interval = min_interval
        self._last_request_time = 0.0
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers=headers or {},
            transport=transport,
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30.0,
            ),
        )
        self._circuit_breaker = circuit_breaker or CircuitBreaker(failure_threshold=10, recovery_timeout=60.0)

    async def _rate_limit(self) -> None:
        """Enforce minimum interval between requests."""
        if self._min_interval <= 0:
            return
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_interval:
            await asyncio.sleep(self._min_interval - elapsed)
        self._last_request_time = time.time()

    def _build_url(self, url: str) -> str:
        """Build full URL from path or full URL."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self._base_url}{url}"

    async def _make_request(
        self,
        url: str,
        *,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any | None:
        """
        Make an HTTP request under circuit breaker protection.

        Args:
            url: Full URL or path (appended to base_url)
            method: HTTP method (GET or POST)
            params: Query string parameters; ``None`` values are dropped
            data: JSON body for POST requests
            headers: Additional headers for this request

        Returns:
            Parsed JSON body, or None when the resource does not exist

        Raises:
            RateLimitError: 429 from the service, or circuit breaker open
            ServiceUnavailableError: other non-success status codes
            NetworkError: connection or timeout failures
            ParseError: body is not valid JSON
        """
        full_url = self._build_url(url)
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        await self._rate_limit()

        try:
            async with self._circuit_breaker:
                response = await self._execute_request(
                    full_url, method=method, params=clean_params, data=data, headers=headers
                )
                if self._handle_expected_status(response):
                    return None
                if response.status_code == 429:
                    raise RateLimitError(
                        f"{self._service_name}: rate limited",
                        retry_after=self._get_retry_after(response),
                    )
                response.raise_for_status()
        except RateLimitError:
            logger.warning("%s: rate limited or circuit open, skipping request", self._service_name)
            raise
        except httpx.HTTPStatusError as e:
            logger.warning(
                "%s HTTP error %d: %s", self._service_name, e.response.status_code, e.response.reason_phrase
            )
            raise ServiceUnavailableError(
                f"HTTP {e.response.status_code}",
                service=self._service_name,
                context=ErrorContext(operation=f"{method} {full_url}"),
            ) from e
        except httpx.RequestError as e:
            logger.warning("%s request failed: %s", self._service_name, e)
            raise NetworkError(
                f"{self._service_name}: {e}",
                context=ErrorContext(operation=f"{method} {full_url}"),
            ) from e

        return self._parse_response(response)

    async def _execute_request(
        self,
        url: str,
        *,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute the actual HTTP request. Override for custom behavior."""
        if method == "POST":
            return await self._client.post(url, params=params, json=data or {}, headers=headers or {})
        return await self._client.get(url, params=params, headers=headers or {})

    def _handle_expected_status(self, response: httpx.Response) -> bool:
        """True when the status means "nothing here" rather than an error."""
        return response.status_code == 404

    def _parse_response(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(str(e), source=self._service_name) from e

    @staticmethod
    def _get_retry_after(response: httpx.Response) -> float:
        """Extract Retry-After from response headers."""
        try:
            return float(response.headers.get("Retry-After", 1.0))
        except (ValueError, TypeError):
            return 1.0

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

