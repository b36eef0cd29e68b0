"""Unit tests for the Quilt HTTP client."""

import json

import httpx
import pytest

from quilt_cli.cli.client import APIClient, build_auth_headers, response_object
from quilt_cli.core.config import Settings
from quilt_cli.core.config_schema import ClientSchema
from quilt_cli.core.exceptions import (
    APIError,
    AuthenticationError,
    ResponseFormatError,
    TransportError,
)

TEST_API_URL = "http://quilt.test"


class TestBuildAuthHeaders:
    """Tests for credential selection."""

    def test_token_uses_bearer(self) -> None:
        settings = Settings(token="abc", api_key="")
        assert build_auth_headers(settings) == {"Authorization": "Bearer abc"}

    def test_api_key_used_without_token(self) -> None:
        settings = Settings(token="", api_key="key-1")
        assert build_auth_headers(settings) == {"X-Api-Key": "key-1"}

    def test_token_wins_over_api_key(self) -> None:
        """The API key is never sent alongside a token."""
        settings = Settings(token="abc", api_key="key-1")
        headers = build_auth_headers(settings)
        assert headers == {"Authorization": "Bearer abc"}
        assert "X-Api-Key" not in headers

    def test_no_credentials_raises(self) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            build_auth_headers(Settings(token="", api_key=""))
        assert exc_info.value.code == "AUTH_NOT_CONFIGURED"


class TestResponseObject:
    """Tests for response_object()."""

    def test_returns_dict(self) -> None:
        response = httpx.Response(200, json={"id": "c1"})
        assert response_object(response) == {"id": "c1"}

    def test_non_json_raises(self) -> None:
        response = httpx.Response(200, text="plain text")
        with pytest.raises(ResponseFormatError):
            response_object(response)

    def test_json_array_raises(self) -> None:
        response = httpx.Response(200, json=[1, 2])
        with pytest.raises(ResponseFormatError, match="not a JSON object"):
            response_object(response)


class TestAPIClient:
    """Tests for APIClient class."""

    @pytest.fixture(autouse=True)
    def routes(self, fake_api) -> None:
        fake_api.route("GET", "/health", json={"status": "ok"})
        fake_api.route("GET", "/api/containers", json={"containers": []})

    def _client(self, fake_api, **settings) -> APIClient:
        settings.setdefault("token", "test-token")
        return APIClient(
            Settings(api_url=TEST_API_URL, **settings),
            transport=fake_api.transport,
        )

    def test_client_strips_trailing_slash(self) -> None:
        client = APIClient(Settings(api_url="http://quilt.test/"))
        assert client.base_url == "http://quilt.test"

    def test_connect_timeout_from_config(self) -> None:
        client = APIClient(Settings(), ClientSchema(connect_timeout=3.5))
        assert client.timeout.connect == 3.5
        assert client.timeout.read is None

    def test_empty_api_url_falls_back_to_default(self) -> None:
        client = APIClient(Settings(api_url=""))
        assert client.base_url == "https://backend.quilt.sh"

    @pytest.mark.asyncio
    async def test_get_request_sends_bearer(self, fake_api) -> None:
        async with self._client(fake_api) as client:
            response = await client.get("/api/containers")

        assert response.status_code == 200
        request = fake_api.requests[0]
        assert request.headers["Authorization"] == "Bearer test-token"
        assert "X-Api-Key" not in request.headers
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_api_key_header(self, fake_api) -> None:
        async with self._client(fake_api, token="", api_key="key-1") as client:
            await client.get("/api/containers")

        request = fake_api.requests[0]
        assert request.headers["X-Api-Key"] == "key-1"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_missing_credentials_sends_nothing(self, fake_api) -> None:
        async with self._client(fake_api, token="", api_key="") as client:
            with pytest.raises(AuthenticationError):
                await client.get("/api/containers")

        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_unauthenticated_request_without_credentials(self, fake_api) -> None:
        async with self._client(fake_api, token="", api_key="") as client:
            response = await client.get("/health", authenticated=False)

        assert response.json() == {"status": "ok"}
        assert "Authorization" not in fake_api.requests[0].headers

    @pytest.mark.asyncio
    async def test_error_status_raises_api_error(self, fake_api) -> None:
        async with self._client(fake_api) as client:
            with pytest.raises(APIError) as exc_info:
                await client.get("/api/containers/missing")

        error = exc_info.value
        assert error.status_code == 404
        assert error.method == "GET"
        assert error.path == "/api/containers/missing"
        assert json.loads(error.body) == {"error": "not found"}

    @pytest.mark.asyncio
    async def test_error_status_with_non_json_body(self, fake_api) -> None:
        fake_api.route("POST", "/api/containers", status_code=500, text="boom")

        async with self._client(fake_api) as client:
            with pytest.raises(APIError) as exc_info:
                await client.post("/api/containers", json={"name": "web"})

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "boom"

    @pytest.mark.asyncio
    async def test_transport_failure_raises_transport_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = APIClient(
            Settings(api_url=TEST_API_URL, token="t"),
            transport=httpx.MockTransport(refuse),
        )
        async with client:
            with pytest.raises(TransportError) as exc_info:
                await client.get("/api/containers")

        error = exc_info.value
        assert error.code == "NET_TRANSPORT_ERROR"
        assert error.url == f"{TEST_API_URL}/api/containers"
        assert "connection refused" in error.message

    @pytest.mark.asyncio
    async def test_close_client(self, fake_api) -> None:
        client = self._client(fake_api)
        await client._get_client()
        assert client._client is not None

        await client.close()
        assert client._client is None
