"""
Content-negotiating HTTP clients.
"""
import logging
from typing import Dict, Optional, Union

import httpx

from ..auth.auth_handler import create_auth_handler
from ..config import AuthConfig, ClientConfig, ResolvedConfig, resolve_config
from ..headers import find_header, from_pairs
from ..response import Response
from ..serialization import CodecRegistry, default_registry
from ..tracing import print_request, print_response
from ..transport import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
    TransportResponse,
)
from ..types import BodyInput, HeadersInput, HttpMethod, MultiHeaders
from .request_builder import PreparedRequest, prepare_request

logger = logging.getLogger("content_client.base_client")


class _ClientState:
    """Configuration shared by the sync and async clients."""

    def __init__(self, config: ClientConfig, registry: Optional[CodecRegistry] = None):
        self._config: ResolvedConfig = resolve_config(config)
        self._auth_handler = create_auth_handler(self._config.auth)
        self._registry = registry or default_registry
        self._closed = False

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def content_type(self) -> str:
        return self._config.content_type

    @property
    def use_cookies(self) -> bool:
        return self._config.use_cookies

    @property
    def follow_redirects(self) -> bool:
        return self._config.follow_redirects

    @property
    def headers(self) -> MultiHeaders:
        """Default headers, as name -> list of values (copy)."""
        return {name: list(values) for name, values in self._config.headers.items()}

    @property
    def auth(self) -> AuthConfig:
        return self._config.auth

    @property
    def closed(self) -> bool:
        return self._closed

    def _prepare(
        self,
        method: HttpMethod,
        path: str,
        body: BodyInput,
        content_type: Optional[str],
        headers: Optional[HeadersInput],
    ) -> PreparedRequest:
        if self._closed:
            raise RuntimeError("Client has been closed")
        return prepare_request(
            self._config,
            method,
            path,
            body=body,
            content_type=content_type,
            headers=headers,
            auth_handler=self._auth_handler,
            registry=self._registry,
        )

    def _wrap(self, prepared: PreparedRequest, raw: TransportResponse) -> Response:
        logger.debug(
            f"{type(self).__name__}: {prepared.method} {prepared.url} -> {raw.status_code}"
        )
        response = Response(
            status_code=raw.status_code,
            headers=raw.headers,
            body=raw.body,
            url=prepared.url,
            method=prepared.method,
            reason_phrase=raw.reason_phrase,
            registry=self._registry,
        )
        if self._config.trace:
            print_response(
                prepared.url,
                response.status_code,
                response.reason_phrase,
                from_pairs(response.headers.multi_items()),
                response.body,
                response.content_type,
            )
        return response

    def _trace_request(self, prepared: PreparedRequest) -> None:
        if self._config.trace:
            name = find_header(prepared.headers, "Content-Type")
            content_type = prepared.headers[name][0] if name else None
            print_request(
                prepared.method, prepared.url, prepared.headers, prepared.body, content_type
            )


class AsyncContentClient(_ClientState):
    """Asynchronous content-negotiating client."""

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[AsyncTransport] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
        registry: Optional[CodecRegistry] = None,
    ):
        super().__init__(config, registry)
        if transport is not None:
            self._transport = transport
        else:
            self._transport = AsyncHttpxTransport(
                httpx_client=httpx_client,
                use_cookies=self._config.use_cookies,
                follow_redirects=self._config.follow_redirects,
                timeout=self._config.timeout,
            )

    @property
    def cookies(self) -> Dict[str, str]:
        return dict(getattr(self._transport, "cookies", {}))

    async def request(
        self,
        method: HttpMethod = "GET",
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """Make a request. Assembly is synchronous; only dispatch awaits."""
        prepared = self._prepare(method, path, body, content_type, headers)
        self._trace_request(prepared)
        raw = await self._transport.execute(
            prepared.method, prepared.url, prepared.headers, prepared.body
        )
        return self._wrap(prepared, raw)

    async def get(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """GET request."""
        return await self.request("GET", path, body, content_type, headers)

    async def head(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """HEAD request."""
        return await self.request("HEAD", path, body, content_type, headers)

    async def post(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """POST request."""
        return await self.request("POST", path, body, content_type, headers)

    async def put(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """PUT request."""
        return await self.request("PUT", path, body, content_type, headers)

    async def delete(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """DELETE request."""
        return await self.request("DELETE", path, body, content_type, headers)

    async def trace(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """TRACE request."""
        return await self.request("TRACE", path, body, content_type, headers)

    async def options(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """OPTIONS request."""
        return await self.request("OPTIONS", path, body, content_type, headers)

    async def patch(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """PATCH request."""
        return await self.request("PATCH", path, body, content_type, headers)

    async def aclose(self) -> None:
        """Close the client."""
        self._closed = True
        await self._transport.aclose()

    async def __aenter__(self) -> "AsyncContentClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.aclose()


class SyncContentClient(_ClientState):
    """Synchronous content-negotiating client."""

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[Transport] = None,
        httpx_client: Optional[httpx.Client] = None,
        registry: Optional[CodecRegistry] = None,
    ):
        super().__init__(config, registry)
        if transport is not None:
            self._transport = transport
        else:
            self._transport = HttpxTransport(
                httpx_client=httpx_client,
                use_cookies=self._config.use_cookies,
                follow_redirects=self._config.follow_redirects,
                timeout=self._config.timeout,
            )

    @property
    def cookies(self) -> Dict[str, str]:
        return dict(getattr(self._transport, "cookies", {}))

    def request(
        self,
        method: HttpMethod = "GET",
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """Make a request. Blocks only inside the transport."""
        prepared = self._prepare(method, path, body, content_type, headers)
        self._trace_request(prepared)
        raw = self._transport.execute(
            prepared.method, prepared.url, prepared.headers, prepared.body
        )
        return self._wrap(prepared, raw)

    def get(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """GET request."""
        return self.request("GET", path, body, content_type, headers)

    def head(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """HEAD request."""
        return self.request("HEAD", path, body, content_type, headers)

    def post(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """POST request."""
        return self.request("POST", path, body, content_type, headers)

    def put(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """PUT request."""
        return self.request("PUT", path, body, content_type, headers)

    def delete(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """DELETE request."""
        return self.request("DELETE", path, body, content_type, headers)

    def trace(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """TRACE request."""
        return self.request("TRACE", path, body, content_type, headers)

    def options(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """OPTIONS request."""
        return self.request("OPTIONS", path, body, content_type, headers)

    def patch(
        self,
        path: str = "",
        body: BodyInput = None,
        content_type: Optional[str] = None,
        headers: Optional[HeadersInput] = None,
    ) -> Response:
        """PATCH request."""
        return self.request("PATCH", path, body, content_type, headers)

    def close(self) -> None:
        """Close the client."""
        self._closed = True
        self._transport.close()

    def __enter__(self) -> "SyncContentClient":
        """Enter sync context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit sync context manager."""
        self.close()


ContentClient = Union[SyncContentClient, AsyncContentClient]
