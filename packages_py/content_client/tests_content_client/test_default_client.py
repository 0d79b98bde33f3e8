"""
Tests for default_client.py
Logic testing: State Transition, Concurrency, Path coverage
"""
import threading

import pytest

import content_client
from content_client import default_client
from content_client.core.base_client import SyncContentClient
from content_client.default_client import get_default_client, reset_default_client

VERBS = ["get", "head", "post", "put", "delete", "trace", "options", "patch"]


class TestGetDefaultClient:
    """Tests for get_default_client function."""

    # Path: lazily created, JSON by default
    def test_created_on_first_use(self):
        reset_default_client()
        assert default_client._default_client is None

        client = get_default_client()

        assert isinstance(client, SyncContentClient)
        assert client.content_type == "application/json"
        assert client.base_url == ""
        assert client.use_cookies is True

    # Path: same instance for the rest of the process
    def test_singleton(self):
        assert get_default_client() is get_default_client()

    # Concurrency: first use from many threads builds one client
    def test_concurrent_first_use(self):
        reset_default_client()
        barrier = threading.Barrier(16)
        results = []

        def worker():
            barrier.wait()
            results.append(get_default_client())

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 16
        assert len({id(client) for client in results}) == 1

    # State Transition: reset closes the old client
    def test_reset(self):
        first = get_default_client()
        reset_default_client()

        assert first.closed is True
        assert get_default_client() is not first

    # Boundary: reset without a client is a no-op
    def test_reset_empty(self):
        reset_default_client()
        reset_default_client()
        assert default_client._default_client is None


class TestModuleFunctions:
    """Tests for module-level verb functions against a live echo server."""

    # Path: each verb goes through the default client
    @pytest.mark.parametrize("verb", VERBS)
    def test_verbs(self, echo_server, verb):
        response = getattr(content_client, verb)(f"{echo_server}/", {"key": "value"})

        assert response.status_code == 200
        assert response.header("X-Echo-Method") == verb.upper()
        assert response.header("X-Echo-Content-Type") == "application/json"
        if verb != "head":
            assert response.decoded() == {"key": "value"}

    # Path: no body, no Content-Type
    def test_get_no_body(self, echo_server):
        response = content_client.get(f"{echo_server}/")

        assert response.status_code == 200
        assert response.header("X-Echo-Content-Type") is None
        assert response.body == b""

    # Decision: per-call content type
    def test_explicit_content_type(self, echo_server):
        response = content_client.post(f"{echo_server}/", {"a": [1, 2]}, "application/yaml")

        assert response.content_type == "application/yaml"
        assert response.decoded() == {"a": [1, 2]}

    # Path: per-call headers
    def test_call_headers(self, echo_server):
        response = content_client.get(f"{echo_server}/", headers={"X-Call": ["1", "2"]})
        assert response.header_list("X-Echo-X-Call") == ["1", "2"]

    # Path: default client keeps cookies across calls
    def test_cookies_persist(self, echo_server):
        content_client.get(f"{echo_server}/cookie")
        response = content_client.get(f"{echo_server}/")

        assert response.header("X-Echo-Cookie") == "session=abc123"
        assert get_default_client().cookies == {"session": "abc123"}
