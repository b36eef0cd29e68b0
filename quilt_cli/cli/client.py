"""
HTTP Client for the Quilt API.

Async wrapper around httpx that attaches credentials, logs each round-trip
and turns failures into client exceptions.

Every status code >= 400 is a failure, whatever the body looks like.
"""

from typing import Any

import httpx

from quilt_cli.core.config import Settings
from quilt_cli.core.config_schema import ClientSchema
from quilt_cli.core.exceptions import (
    APIError,
    AuthenticationError,
    ResponseFormatError,
    TransportError,
)
from quilt_cli.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


def response_object(response: httpx.Response) -> dict[str, Any]:
    """
    Decode a response body that must be a JSON object.

    Raises:
        ResponseFormatError: If the body is not JSON or not an object.
    """
    try:
        data = response.json()
    except ValueError as e:
        raise ResponseFormatError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResponseFormatError("Response is not a JSON object")
    return data


def build_auth_headers(settings: Settings) -> dict[str, str]:
    """
    Select the authentication header.

    A bearer token wins over an API key; the key is never sent alongside it.

    Raises:
        AuthenticationError: If neither credential is configured.
    """
    if settings.token:
        return {"Authorization": f"Bearer {settings.token}"}
    if settings.api_key:
        return {"X-Api-Key": settings.api_key}
    raise AuthenticationError()


class APIClient:
    """
    HTTP client for Quilt API communication.

    Features:
    - Base URL and credentials from an explicit Settings object
    - Bearer token or X-Api-Key authentication, checked before any I/O
    - Connect timeout only; reads are unbounded
    - Structured logging of requests/responses
    - APIError for status >= 400, TransportError when the call itself fails

    Usage:
        async with APIClient(settings) as client:
            response = await client.get("/api/containers")
            response = await client.post("/api/volumes", json={"name": "data"})
    """

    def __init__(
        self,
        settings: Settings,
        config: ClientSchema | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            settings: Endpoint and credentials.
            config: Timeouts. Defaults apply if None.
            transport: Custom httpx transport, used by tests to mock the server.
        """
        config = config or ClientSchema()
        self.settings = settings
        self.base_url = settings.api_url.rstrip("/")
        self.timeout = httpx.Timeout(None, connect=config.connect_timeout)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        authenticated: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., /health, /api/containers)
            authenticated: Attach credentials. Only /health is public.
            **kwargs: Additional arguments for httpx (json, params)

        Returns:
            httpx.Response with status < 400

        Raises:
            AuthenticationError: No credentials configured (nothing was sent)
            TransportError: The request could not be completed
            APIError: The API answered with status >= 400
        """
        headers = build_auth_headers(self.settings) if authenticated else {}
        client = await self._get_client()

        log_with_source(
            logger,
            "api",
            "debug",
            "API request",
            method=method,
            path=path,
        )

        try:
            response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise TransportError(method, f"{self.base_url}{path}", str(e) or type(e).__name__) from e

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if response.status_code >= 400:
            raise APIError(response.status_code, method, path, response.text)

        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)
