"""Base API client over a persistent httpx.AsyncClient.

This module provides BaseAPIClient, which owns a single lazily-created
AsyncClient reused across requests, applies a request-level timeout and
maps transport failures onto NetworkError.
"""

from typing import Any

import httpx
import structlog

from soltools.core.exceptions import NetworkError

log = structlog.get_logger(__name__)


class BaseAPIClient:
    """Base API client with a persistent connection pool.

    Provides HTTP requests with:
    - Lazy client initialization (created on first request)
    - A single client reused for every request
    - Request-level timeout
    - Proper resource cleanup

    The client is bound to the event loop it was first used on; callers
    must keep using it from that loop (see soltools.workers.runtime).

    Attributes:
        base_url: Base URL for all requests.
        timeout: Request timeout in seconds.
        headers: Default headers for all requests.

    Example:
        client = BaseAPIClient(base_url="https://api.example.com")
        response = await client.get("/endpoint")
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize BaseAPIClient.

        Args:
            base_url: Base URL for all requests.
            timeout: Request timeout in seconds (default: 30).
            headers: Default headers for all requests.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization).

        Returns:
            The httpx AsyncClient instance.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
            )
            log.debug("httpx_client_created", base_url=self.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("httpx_client_closed", base_url=self.base_url)

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST).
            path: Request path (appended to base_url).
            **kwargs: Additional arguments passed to httpx.request.

        Returns:
            httpx.Response on success.

        Raises:
            NetworkError: On timeout, connection failure or non-2xx status.
        """
        client = await self._get_client()
        log.debug("request_started", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            log.warning(
                "request_status_error",
                method=method,
                path=path,
                status_code=status_code,
            )
            raise NetworkError(
                service=self.base_url,
                message=f"HTTP {status_code}",
                status_code=status_code,
            ) from e

        except (httpx.TimeoutException, httpx.RequestError) as e:
            log.warning(
                "request_connection_error",
                method=method,
                path=path,
                error=type(e).__name__,
            )
            raise NetworkError(
                service=self.base_url,
                message=f"{type(e).__name__}: {e}",
            ) from e

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request.

        Args:
            path: Request path.
            **kwargs: Additional arguments passed to httpx.

        Returns:
            httpx.Response on success.
        """
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request.

        Args:
            path: Request path.
            **kwargs: Additional arguments passed to httpx.

        Returns:
            httpx.Response on success.
        """
        return await self._request("POST", path, **kwargs)
