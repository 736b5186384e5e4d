"""Tests for collect_sdk.api_client module."""

import io
import socket
from collections.abc import AsyncGenerator

import pytest
from aiohttp import ClientError, ClientSession, test_utils, web
from loguru import logger

from collect_sdk.api_client import APIClient, APIResponse, _join_url
from collect_sdk.config import LogConfiguration, LogLevel
from collect_sdk.logger import CollectLogger
from collect_sdk.request_logger import RequestTraceLogger


async def _echo(request: web.Request) -> web.Response:
    data = await request.json()
    return web.json_response({"received": data}, headers={"X-Request-Id": "req-1"})


async def _reject(request: web.Request) -> web.Response:
    return web.Response(status=422, text="card number is invalid")


async def _cookies(request: web.Request) -> web.Response:
    response = web.json_response({"ok": True})
    response.headers.add("Set-Cookie", "session=a1")
    response.headers.add("Set-Cookie", "theme=dark")
    return response


@pytest.fixture
async def server() -> AsyncGenerator[test_utils.TestServer, None]:
    """Local HTTP endpoint with success, failure and repeated-header routes."""
    app = web.Application()
    app.router.add_post("/post", _echo)
    app.router.add_post("/reject", _reject)
    app.router.add_post("/cookies", _cookies)
    test_server = test_utils.TestServer(app)
    await test_server.start_server()
    try:
        yield test_server
    finally:
        await test_server.close()


@pytest.fixture
def client_factory(trace_logger: RequestTraceLogger):
    """Build clients that trace into the in-memory sink."""

    def factory(base_url: str, **kwargs) -> APIClient:
        return APIClient(base_url, trace_logger=trace_logger, **kwargs)

    return factory


def _unused_port() -> int:
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


class TestJoinUrl:
    """Tests for _join_url function."""

    def test_empty_path(self):
        assert _join_url("https://example.com/api", "") == "https://example.com/api"

    def test_slashes_collapsed(self):
        assert _join_url("https://example.com/api/", "/post") == "https://example.com/api/post"
        assert _join_url("https://example.com/api", "post") == "https://example.com/api/post"


class TestAPIResponse:
    """Tests for APIResponse dataclass."""

    def test_ok_range(self):
        assert APIResponse(status_code=200).ok
        assert APIResponse(status_code=299).ok
        assert not APIResponse(status_code=300).ok
        assert not APIResponse(status_code=500).ok

    def test_error_is_not_ok(self):
        assert not APIResponse(status_code=200, error=ClientError("reset")).ok


class TestAPIClient:
    """Tests for APIClient class."""

    async def test_success_traces_request_and_response(self, server: test_utils.TestServer, client_factory, sink: io.StringIO):
        """Test that a 2xx response logs the request and a success trace."""
        base_url = str(server.make_url("/post"))
        client = client_factory(base_url)

        response = await client.send_request(payload={"name": "Jane"}, headers={"X-Tenant": "t1"})

        assert response.ok
        assert response.status_code == 200
        assert response.headers["X-Request-Id"] == "req-1"

        lines = sink.getvalue().splitlines()
        assert f"⬆️ Send TestSDK request url: {base_url}" in lines
        assert "  X-Tenant : t1" in [line.rstrip() for line in lines]
        assert "⬆️ Send TestSDK request payload:" in lines
        assert "✅ Success ⬇️ TestSDK response code: 200" in lines
        assert "✅ Success ⬇️ TestSDK response JSON:" in lines
        assert '    "name": "Jane"' in lines
        assert lines.count("-" * 36) == 2

    async def test_http_error_traces_failure(self, server: test_utils.TestServer, client_factory, sink: io.StringIO):
        """Test that a 4xx response logs a failure trace with the body."""
        client = client_factory(str(server.make_url("/")))

        response = await client.send_request("/reject", payload={"card": "1234"})

        assert not response.ok
        assert response.status_code == 422
        assert response.body == b"card number is invalid"

        lines = sink.getvalue().splitlines()
        assert "❗Failed ⬇️ TestSDK response status code: 422" in lines
        assert "card number is invalid" in lines
        assert "❗Failed ⬇️ TestSDK response error message: " in lines
        assert not any(line.startswith("✅") for line in lines)

    async def test_connection_error(self, client_factory, sink: io.StringIO):
        """Test that a refused connection is returned and traced, not raised."""
        url = f"http://127.0.0.1:{_unused_port()}/post"
        client = client_factory(url, timeout=5.0)

        response = await client.send_request(payload={"a": 1})

        assert not response.ok
        assert response.status_code == 0
        assert isinstance(response.error, ClientError)

        lines = sink.getvalue().splitlines()
        assert f"❗Failed ⬇️ TestSDK request url: {url}" in lines
        assert "❗Failed ⬇️ TestSDK response status code: 0" in lines

    async def test_failures_logged_as_warnings(self, server: test_utils.TestServer, client_factory, shared_logger: CollectLogger):
        """Test that failed submissions are reported through the SDK event log."""
        shared_logger.configuration.level = LogLevel.WARNING
        captured: list[str] = []
        handler_id = logger.add(lambda m: captured.append(str(m)), format="{level} {message}")
        try:
            await client_factory(str(server.make_url("/reject"))).send_request()
        finally:
            logger.remove(handler_id)

        assert len(captured) == 1
        assert captured[0].startswith("WARNING CollectSDK request to")
        assert "returned status 422" in captured[0]

    async def test_response_headers_case_insensitive(self, server: test_utils.TestServer, client_factory):
        """Test that response headers keep case-insensitive lookup."""
        response = await client_factory(str(server.make_url("/post"))).send_request(payload={"a": 1})

        assert response.headers["x-request-id"] == "req-1"
        assert response.headers["X-REQUEST-ID"] == "req-1"
        assert response.headers["content-type"].startswith("application/json")

    async def test_repeated_headers_kept(self, server: test_utils.TestServer, client_factory, sink: io.StringIO):
        """Test that repeated headers are returned and traced individually."""
        response = await client_factory(str(server.make_url("/cookies"))).send_request()

        assert response.headers.getall("Set-Cookie") == ["session=a1", "theme=dark"]
        lines = [line.rstrip() for line in sink.getvalue().splitlines()]
        assert "  Set-Cookie : session=a1" in lines
        assert "  Set-Cookie : theme=dark" in lines

    async def test_injected_session_left_open(self, server: test_utils.TestServer, client_factory):
        """Test that a caller-provided session is reused and not closed."""
        async with ClientSession() as session:
            client = client_factory(str(server.make_url("/post")), session=session)
            first = await client.send_request(payload={"n": 1})
            second = await client.send_request(payload={"n": 2})
            assert not session.closed

        assert first.ok and second.ok

    async def test_tracing_disabled(self, server: test_utils.TestServer, sink: io.StringIO):
        """Test that no trace is printed when network debug is off."""
        quiet_logger = RequestTraceLogger(LogConfiguration(), sink=sink)
        client = APIClient(str(server.make_url("/post")), trace_logger=quiet_logger)

        response = await client.send_request(payload={"a": 1})

        assert response.ok
        assert sink.getvalue() == ""

    def test_default_trace_logger_uses_shared_configuration(self, shared_logger: CollectLogger):
        client = APIClient("https://example.com")
        assert client.trace_logger.configuration is shared_logger.configuration
