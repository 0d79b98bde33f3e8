"""
Transports for content_client.

A transport executes one fully assembled request and returns the raw
status, headers and body. The shipped transports wrap httpx; anything with
the same ``execute`` signature can be injected instead.
"""
import logging
from dataclasses import dataclass
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Dict, Optional, Protocol

import httpx

from .config import DEFAULT_TIMEOUT, TimeoutConfig, is_ssl_verify_disabled_by_env
from .errors import TransportError
from .headers import to_header_list
from .types import MultiHeaders

logger = logging.getLogger("content_client.transport")


@dataclass(frozen=True)
class TransportResponse:
    """Raw result of one exchange."""

    status_code: int
    headers: httpx.Headers
    body: bytes
    reason_phrase: str = ""


class Transport(Protocol):
    """Synchronous transport interface."""

    def execute(
        self,
        method: str,
        url: str,
        headers: MultiHeaders,
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Execute a request."""
        ...

    def close(self) -> None:
        """Release transport resources."""
        ...


class AsyncTransport(Protocol):
    """Asynchronous transport interface."""

    async def execute(
        self,
        method: str,
        url: str,
        headers: MultiHeaders,
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Execute a request."""
        ...

    async def aclose(self) -> None:
        """Release transport resources."""
        ...


def build_cookie_jar(use_cookies: bool) -> CookieJar:
    """Create a cookie jar for one client.

    With cookies disabled the jar's policy allows no domain, so nothing is
    stored from responses and no Cookie header is ever produced.
    """
    if use_cookies:
        return CookieJar()
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


def _httpx_timeout(timeout: TimeoutConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=timeout.connect,
        read=timeout.read,
        write=timeout.write,
        pool=timeout.connect,
    )


def _to_response(response: httpx.Response) -> TransportResponse:
    return TransportResponse(
        status_code=response.status_code,
        headers=httpx.Headers(response.headers),
        body=response.content,
        reason_phrase=response.reason_phrase or "",
    )


class HttpxTransport:
    """Synchronous transport over ``httpx.Client``."""

    def __init__(
        self,
        httpx_client: Optional[httpx.Client] = None,
        use_cookies: bool = True,
        follow_redirects: bool = True,
        timeout: Optional[TimeoutConfig] = None,
    ):
        self._follow_redirects = follow_redirects
        self._jar = build_cookie_jar(use_cookies)
        if httpx_client is not None:
            self._client = httpx_client
            self._client.cookies = self._jar
        else:
            # NODE_TLS_REJECT_UNAUTHORIZED=0 or SSL_CERT_VERIFY=0 will disable SSL verification
            verify_ssl = not is_ssl_verify_disabled_by_env()
            self._client = httpx.Client(
                timeout=_httpx_timeout(timeout or DEFAULT_TIMEOUT),
                verify=verify_ssl,
                cookies=self._jar,
            )

    @property
    def cookies(self) -> Dict[str, str]:
        return {cookie.name: cookie.value or "" for cookie in self._jar}

    def execute(
        self,
        method: str,
        url: str,
        headers: MultiHeaders,
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        logger.debug(f"HttpxTransport.execute: {method} {url}")
        try:
            response = self._client.request(
                method=method,
                url=url,
                headers=to_header_list(headers),
                content=body,
                follow_redirects=self._follow_redirects,
            )
        except httpx.RequestError as e:
            logger.debug(f"HttpxTransport.execute: {method} {url} failed: {e!r}")
            raise TransportError(e, method, url) from e
        return _to_response(response)

    def close(self) -> None:
        self._client.close()


class AsyncHttpxTransport:
    """Asynchronous transport over ``httpx.AsyncClient``."""

    def __init__(
        self,
        httpx_client: Optional[httpx.AsyncClient] = None,
        use_cookies: bool = True,
        follow_redirects: bool = True,
        timeout: Optional[TimeoutConfig] = None,
    ):
        self._follow_redirects = follow_redirects
        self._jar = build_cookie_jar(use_cookies)
        if httpx_client is not None:
            self._client = httpx_client
            self._client.cookies = self._jar
        else:
            verify_ssl = not is_ssl_verify_disabled_by_env()
            self._client = httpx.AsyncClient(
                timeout=_httpx_timeout(timeout or DEFAULT_TIMEOUT),
                verify=verify_ssl,
                cookies=self._jar,
            )

    @property
    def cookies(self) -> Dict[str, str]:
        return {cookie.name: cookie.value or "" for cookie in self._jar}

    async def execute(
        self,
        method: str,
        url: str,
        headers: MultiHeaders,
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        logger.debug(f"AsyncHttpxTransport.execute: {method} {url}")
        try:
            response = await self._client.request(
                method=method,
                url=url,
                headers=to_header_list(headers),
                content=body,
                follow_redirects=self._follow_redirects,
            )
        except httpx.RequestError as e:
            logger.debug(f"AsyncHttpxTransport.execute: {method} {url} failed: {e!r}")
            raise TransportError(e, method, url) from e
        return _to_response(response)

    async def aclose(self) -> None:
        await self._client.aclose()
