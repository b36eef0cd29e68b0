"""
Unit Test Fixtures.

Fixtures for unit tests - the Quilt API is replaced by an in-process fake
served through httpx.MockTransport. Unit tests never touch the network.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from quilt_cli.cli.context import CliState
from quilt_cli.core.config import Settings
from quilt_cli.core.config_schema import ClientConfig, ClientSchema

TEST_API_URL = "http://quilt.test"

Handler = Callable[[httpx.Request], httpx.Response]


# =============================================================================
# Fake API
# =============================================================================


class FakeQuiltAPI:
    """
    Recording stand-in for the Quilt API.

    Routes are keyed by (method, path). A route is either a fixed response
    or a callable taking the request. Unrouted requests get a 404 with
    {"error": "not found"}.

    Usage:
        fake_api.route("GET", "/api/containers", json={"containers": []})
        ... run a command ...
        assert fake_api.calls == [("GET", "/api/containers")]
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Handler] = {}

    def route(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
        handler: Handler | None = None,
    ) -> None:
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                if text is not None:
                    return httpx.Response(status_code, text=text)
                return httpx.Response(status_code, json=json if json is not None else {})
        self._routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def body(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded request."""
        return json.loads(self.requests[index].content)


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def fake_api() -> FakeQuiltAPI:
    return FakeQuiltAPI()


@pytest.fixture
def make_state(fake_api: FakeQuiltAPI) -> Callable[..., CliState]:
    """
    Factory for a CliState wired to the fake API.

    Restart delay is zero so restart tests do not sleep.

    Usage:
        state = make_state(token="", api_key="key-123")
        runner.invoke(app, ["list"], obj=state)
    """

    def _make(
        token: str = "test-token",
        api_key: str = "",
        config: ClientConfig | None = None,
    ) -> CliState:
        return CliState(
            settings=Settings(api_url=TEST_API_URL, token=token, api_key=api_key),
            config=config or ClientConfig(client=ClientSchema(restart_delay=0)),
            transport=fake_api.transport,
        )

    return _make


@pytest.fixture
def state(make_state: Callable[..., CliState]) -> CliState:
    """CliState authenticated with a bearer token."""
    return make_state()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
