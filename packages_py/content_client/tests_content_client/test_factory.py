"""
Tests for factory.py
Logic testing: Decision/Branch, Error Path coverage
"""
import httpx
import pytest

from content_client.config import AuthMode, TimeoutConfig
from content_client.core.base_client import AsyncContentClient, SyncContentClient
from content_client.errors import ConfigurationError
from content_client.factory import create_async_client, create_client, create_sync_client


class TestCreateClient:
    """Tests for create_client function."""

    # Decision: sync by default
    def test_sync_default(self):
        client = create_client("http://localhost:8080")
        assert isinstance(client, SyncContentClient)
        client.close()

    # Decision: async flag
    @pytest.mark.asyncio
    async def test_async_flag(self):
        client = create_client("http://localhost:8080", async_client=True)
        assert isinstance(client, AsyncContentClient)
        await client.aclose()

    # Decision: httpx client type decides
    @pytest.mark.asyncio
    async def test_async_from_httpx_client(self):
        http = httpx.AsyncClient()
        client = create_client(httpx_client=http)
        assert isinstance(client, AsyncContentClient)
        await client.aclose()

    def test_sync_from_httpx_client(self):
        client = create_client(httpx_client=httpx.Client(), async_client=True)
        assert isinstance(client, SyncContentClient)
        client.close()

    # Path: all parameters reach the config
    def test_parameters(self):
        client = create_client(
            "http://localhost:8080",
            "application/yaml",
            use_cookies=False,
            headers={"header1": ["val1", "val2"]},
            user="user",
            password="password",
            follow_redirects=False,
            timeout=TimeoutConfig(connect=1.0),
        )

        assert client.base_url == "http://localhost:8080"
        assert client.content_type == "application/yaml"
        assert client.use_cookies is False
        assert client.follow_redirects is False
        assert client.headers == {"header1": ["val1", "val2"]}
        assert client.auth.mode is AuthMode.BASIC
        client.close()

    # Decision: explicit authorization
    def test_authorization(self):
        client = create_client(authorization="Bearer token")
        assert client.auth.mode is AuthMode.EXPLICIT
        client.close()

    # Error Path: conflicting auth
    def test_conflicting_auth(self):
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            create_client(user="user", password="password", authorization="Bearer token")

    # Error Path: partial credentials
    def test_partial_credentials(self):
        with pytest.raises(ConfigurationError):
            create_client(user="user")

    # Error Path: invalid base URL
    def test_invalid_base_url(self):
        with pytest.raises(ConfigurationError, match="Invalid base_url"):
            create_client("localhost:8080")


class TestTypedFactories:
    """Tests for create_sync_client and create_async_client."""

    def test_sync(self):
        client = create_sync_client("http://localhost", user="u", password="p")
        assert isinstance(client, SyncContentClient)
        assert client.auth.user == "u"
        client.close()

    @pytest.mark.asyncio
    async def test_async(self):
        client = create_async_client("http://localhost", headers={"Accept": "text/plain"})
        assert isinstance(client, AsyncContentClient)
        assert client.headers == {"Accept": ["text/plain"]}
        await client.aclose()
