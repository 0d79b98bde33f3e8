"""
Process-wide default client.

The module-level verb functions take a full URL and delegate to a single
SyncContentClient that is created on first use and lives for the rest of
the process.
"""
import logging
import threading
from typing import Optional

from .config import DEFAULT_CONTENT_TYPE, ClientConfig
from .core.base_client import SyncContentClient
from .response import Response
from .types import BodyInput, HeadersInput

logger = logging.getLogger("content_client.default_client")

_default_client: Optional[SyncContentClient] = None
_lock = threading.Lock()


def get_default_client() -> SyncContentClient:
    """Return the default client, creating it on first call.

    Double-checked locking: concurrent first callers construct exactly one
    client.
    """
    global _default_client
    client = _default_client
    if client is None:
        with _lock:
            client = _default_client
            if client is None:
                client = SyncContentClient(ClientConfig(content_type=DEFAULT_CONTENT_TYPE))
                _default_client = client
                logger.debug("get_default_client: created default client")
    return client


def reset_default_client() -> None:
    """Close and forget the default client. The next call creates a new one."""
    global _default_client
    with _lock:
        client, _default_client = _default_client, None
    if client is not None:
        client.close()


def get(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """GET request with the default client."""
    return get_default_client().get(url, body, content_type, headers)


def head(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """HEAD request with the default client."""
    return get_default_client().head(url, body, content_type, headers)


def post(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """POST request with the default client."""
    return get_default_client().post(url, body, content_type, headers)


def put(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """PUT request with the default client."""
    return get_default_client().put(url, body, content_type, headers)


def delete(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """DELETE request with the default client."""
    return get_default_client().delete(url, body, content_type, headers)


def trace(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """TRACE request with the default client."""
    return get_default_client().trace(url, body, content_type, headers)


def options(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """OPTIONS request with the default client."""
    return get_default_client().options(url, body, content_type, headers)


def patch(
    url: str,
    body: BodyInput = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
) -> Response:
    """PATCH request with the default client."""
    return get_default_client().patch(url, body, content_type, headers)
