"""
Factory functions for creating content clients.
"""
from typing import Optional, Union

import httpx

from .config import (
    DEFAULT_CONTENT_TYPE,
    ClientConfig,
    TimeoutConfig,
    auth_from_credentials,
)
from .core.base_client import AsyncContentClient, SyncContentClient
from .serialization import CodecRegistry
from .types import HeadersInput


def _build_config(
    base_url: str,
    content_type: str,
    use_cookies: bool,
    headers: Optional[HeadersInput],
    user: Optional[str],
    password: Optional[str],
    follow_redirects: bool,
    authorization: Optional[str],
    timeout: Optional[Union[float, TimeoutConfig]],
    trace: Optional[bool],
) -> ClientConfig:
    return ClientConfig(
        base_url=base_url,
        content_type=content_type,
        use_cookies=use_cookies,
        headers=headers or {},
        auth=auth_from_credentials(user, password, authorization),
        follow_redirects=follow_redirects,
        timeout=timeout,
        trace=trace,
    )


def create_client(
    base_url: str = "",
    content_type: str = DEFAULT_CONTENT_TYPE,
    use_cookies: bool = True,
    headers: Optional[HeadersInput] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
    follow_redirects: bool = True,
    authorization: Optional[str] = None,
    timeout: Optional[Union[float, TimeoutConfig]] = None,
    trace: Optional[bool] = None,
    transport=None,
    httpx_client: Optional[Union[httpx.AsyncClient, httpx.Client]] = None,
    async_client: bool = False,
    registry: Optional[CodecRegistry] = None,
) -> Union[SyncContentClient, AsyncContentClient]:
    """
    Create a content client with the given configuration.

    Args:
        base_url: Prefix for every request path. Empty means full URLs are passed.
        content_type: Default content type for structured bodies.
        use_cookies: Keep a cookie jar for this client.
        headers: Default headers, each a string or a list of values.
        user: Basic auth user (requires password).
        password: Basic auth password (requires user).
        follow_redirects: Follow 3xx redirects.
        authorization: Explicit Authorization header value. Excludes user/password.
        timeout: Request timeout (seconds or TimeoutConfig).
        trace: Print exchanges to the console. None reads CONTENT_CLIENT_TRACE.
        transport: Custom transport (sync or async, matching the client type).
        httpx_client: Pre-configured httpx client (AsyncClient or Client).
        async_client: Create an async client when no httpx_client decides it.
        registry: Codec registry; defaults to the shared registry.

    Returns:
        AsyncContentClient if httpx_client is an AsyncClient or async_client
        is set, SyncContentClient otherwise.

    Raises:
        ConfigurationError: on invalid base_url or conflicting auth settings.

    Example:
        client = create_client(
            "http://localhost:8080",
            headers={"Accept": ["application/json", "text/plain"]},
            user="user",
            password="password",
        )
        response = client.post("/items", {"name": "value"})
        assert response.decoded() == {"name": "value"}
    """
    config = _build_config(
        base_url, content_type, use_cookies, headers, user, password,
        follow_redirects, authorization, timeout, trace,
    )

    # Determine client type based on httpx client type
    if isinstance(httpx_client, httpx.AsyncClient) or (httpx_client is None and async_client):
        return AsyncContentClient(
            config, transport=transport, httpx_client=httpx_client, registry=registry
        )
    return SyncContentClient(
        config, transport=transport, httpx_client=httpx_client, registry=registry
    )


def create_sync_client(
    base_url: str = "",
    content_type: str = DEFAULT_CONTENT_TYPE,
    use_cookies: bool = True,
    headers: Optional[HeadersInput] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
    follow_redirects: bool = True,
    authorization: Optional[str] = None,
    timeout: Optional[Union[float, TimeoutConfig]] = None,
    trace: Optional[bool] = None,
    transport=None,
    httpx_client: Optional[httpx.Client] = None,
    registry: Optional[CodecRegistry] = None,
) -> SyncContentClient:
    """
    Create a sync content client.

    Arguments are the same as for create_client.
    """
    config = _build_config(
        base_url, content_type, use_cookies, headers, user, password,
        follow_redirects, authorization, timeout, trace,
    )
    return SyncContentClient(
        config, transport=transport, httpx_client=httpx_client, registry=registry
    )


def create_async_client(
    base_url: str = "",
    content_type: str = DEFAULT_CONTENT_TYPE,
    use_cookies: bool = True,
    headers: Optional[HeadersInput] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
    follow_redirects: bool = True,
    authorization: Optional[str] = None,
    timeout: Optional[Union[float, TimeoutConfig]] = None,
    trace: Optional[bool] = None,
    transport=None,
    httpx_client: Optional[httpx.AsyncClient] = None,
    registry: Optional[CodecRegistry] = None,
) -> AsyncContentClient:
    """
    Create an async content client.

    Arguments are the same as for create_client.
    """
    config = _build_config(
        base_url, content_type, use_cookies, headers, user, password,
        follow_redirects, authorization, timeout, trace,
    )
    return AsyncContentClient(
        config, transport=transport, httpx_client=httpx_client, registry=registry
    )
