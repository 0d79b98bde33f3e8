"""
Shared fixtures for content_client tests.
"""
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, List

import httpx
import pytest

from content_client.config import ClientConfig, resolve_config
from content_client.default_client import reset_default_client


class EchoHandler(BaseHTTPRequestHandler):
    """Echoes the request body and headers back.

    - body: the request body, with the request Content-Type (or text/plain)
    - headers: every request header value as X-Echo-<name>, in order
    - /status/<code>: responds with that status
    - /cookie: sets a session cookie
    - /redirect: 302 to /
    """

    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):
        pass

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""

        status = 200
        extra: List[tuple] = []
        if self.path.startswith("/status/"):
            status = int(self.path.rsplit("/", 1)[1])
        elif self.path == "/cookie":
            extra.append(("Set-Cookie", "session=abc123; Path=/"))
        elif self.path == "/redirect":
            status = 302
            extra.append(("Location", "/"))

        self.send_response(status)
        self.send_header(
            "Content-Type", self.headers.get("Content-Type") or "text/plain; charset=utf-8"
        )
        seen = set()
        for name in self.headers.keys():
            lowered = name.lower()
            if lowered in seen:
                continue
            seen.add(lowered)
            for value in self.headers.get_all(name) or []:
                self.send_header(f"X-Echo-{name}", value)
        self.send_header("X-Echo-Method", self.command)
        for name, value in extra:
            self.send_header(name, value)
        payload = b"" if status == 302 else body
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        if self.command != "HEAD" and payload:
            self.wfile.write(payload)

    do_GET = _handle
    do_HEAD = _handle
    do_POST = _handle
    do_PUT = _handle
    do_DELETE = _handle
    do_TRACE = _handle
    do_OPTIONS = _handle
    do_PATCH = _handle


@pytest.fixture(scope="session")
def echo_server():
    """Threaded echo server; yields its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def sample_config():
    """Resolved config for a JSON client."""
    return resolve_config(ClientConfig(base_url="https://api.example.com"))


@pytest.fixture
def recorded_requests():
    """List that mock_httpx_client appends every request to."""
    return []


@pytest.fixture
def echo_handler(recorded_requests) -> Callable[[httpx.Request], httpx.Response]:
    """httpx.MockTransport handler echoing body and Content-Type."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        headers = [("content-type", request.headers.get("content-type", "text/plain"))]
        return httpx.Response(200, headers=headers, content=request.content)

    return handler


@pytest.fixture
def mock_httpx_client(echo_handler):
    """httpx.Client wired to an in-memory echo transport."""
    client = httpx.Client(transport=httpx.MockTransport(echo_handler))
    yield client
    client.close()


@pytest.fixture
def mock_httpx_async_client(echo_handler):
    """httpx.AsyncClient wired to an in-memory echo transport."""
    return httpx.AsyncClient(transport=httpx.MockTransport(echo_handler))


@pytest.fixture(autouse=True)
def _reset_default_client():
    yield
    reset_default_client()
