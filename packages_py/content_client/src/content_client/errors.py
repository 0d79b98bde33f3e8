"""
Exceptions raised by content_client.

HTTP error statuses are not exceptions here: a 4xx or 5xx answer is a
normal Response.
"""
from typing import Optional

import httpx


class ContentClientError(Exception):
    """Base class for content_client errors."""
    pass


class ConfigurationError(ContentClientError):
    """Raised when a client configuration is invalid or contradictory."""
    pass


class UnsupportedContentType(ContentClientError):
    """Raised when no codec is registered for a content type."""

    def __init__(self, content_type: Optional[str]):
        self.content_type = content_type
        super().__init__(f"No codec registered for content type: {content_type!r}")


class DecodeError(ContentClientError):
    """Raised when a body is malformed for its declared content type."""

    def __init__(self, content_type: str, message: str):
        self.content_type = content_type
        super().__init__(f"Cannot decode {content_type} body: {message}")


class TransportError(ContentClientError):
    """Raised when the transport fails to complete an exchange.

    The original exception is kept in ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, cause: BaseException, method: str = "", url: str = ""):
        self.cause = cause
        self.method = method
        self.url = url
        self.kind = categorize_exception(cause)
        target = f" {method} {url}".rstrip() if method or url else ""
        super().__init__(f"Transport failure ({self.kind}){target}: {cause}")


def categorize_exception(exc: BaseException) -> str:
    """Map transport exceptions to a coarse failure kind."""
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.ProxyError):
        return "proxy"
    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError)):
        return "connect"
    if isinstance(exc, (httpx.ProtocolError, httpx.UnsupportedProtocol)):
        return "protocol"
    if isinstance(exc, httpx.TooManyRedirects):
        return "redirect"
    if isinstance(exc, (ConnectionError, OSError)):
        return "connect"
    return "unknown"
