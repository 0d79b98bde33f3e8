"""
Request builder utilities for content_client.

Assembly order for one request: resolve the body variant and encode it,
then build headers by merging defaults with call headers, setting the
Content-Type and finally attaching auth.
"""
import base64
import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..auth.auth_handler import AuthHandler
from ..config import ResolvedConfig
from ..headers import has_header, mask_headers, merge_headers, set_header
from ..serialization import CodecRegistry, default_registry, encode
from ..types import (
    FileBody,
    HeadersInput,
    HttpMethod,
    MultiHeaders,
    RequestBody,
    RequestContext,
    StructuredBody,
    TextBody,
    as_request_body,
)

logger = logging.getLogger("content_client.request_builder")

CONTENT_TYPE = "Content-Type"
AUTHORIZATION = "Authorization"


@dataclass(frozen=True)
class EncodedBody:
    """Wire form of a request body."""

    content: Optional[bytes]
    content_type: Optional[str] = None


@dataclass(frozen=True)
class PreparedRequest:
    """Fully assembled request, ready for a transport."""

    method: HttpMethod
    url: str
    headers: MultiHeaders
    body: Optional[bytes]


def build_url(base_url: str, path: str) -> str:
    """Build the request URL: base_url followed by path, unmodified."""
    return f"{base_url}{path}"


def build_body(
    body: Optional[RequestBody],
    content_type: Optional[str],
    default_content_type: str,
    registry: CodecRegistry = default_registry,
) -> EncodedBody:
    """Encode a body variant.

    Only structured bodies force a Content-Type: the one they were encoded
    with. Text and file bodies carry the caller's content type, if any.

    Raises:
        UnsupportedContentType: structured body with no codec for its type.
    """
    if body is None:
        return EncodedBody(content=None)

    if isinstance(body, StructuredBody):
        effective = content_type or default_content_type
        return EncodedBody(
            content=encode(body.data, effective, registry),
            content_type=effective,
        )

    if isinstance(body, TextBody):
        return EncodedBody(content=body.text.encode("utf-8"), content_type=content_type)

    if isinstance(body, FileBody):
        # Files travel as base64 text, never as raw binary or multipart.
        return EncodedBody(
            content=base64.b64encode(body.read()),
            content_type=content_type,
        )

    raise TypeError(f"Unsupported body variant: {type(body).__name__}")


def build_headers(
    config: ResolvedConfig,
    headers: Optional[HeadersInput] = None,
    encoded: Optional[EncodedBody] = None,
    context: Optional[RequestContext] = None,
    auth_handler: Optional[AuthHandler] = None,
) -> MultiHeaders:
    """Build request headers.

    Call headers replace default headers of the same name. A structured
    body's content type replaces any Content-Type from either source. The
    auth header is added only when no Authorization header is present.
    """
    result = merge_headers(config.headers, headers)
    apply_content_type(result, encoded)
    if context is not None:
        apply_auth(result, context, auth_handler)
    return result


def apply_content_type(headers: MultiHeaders, encoded: Optional[EncodedBody]) -> None:
    if encoded is not None and encoded.content_type:
        set_header(headers, CONTENT_TYPE, [encoded.content_type])


def apply_auth(
    headers: MultiHeaders,
    context: RequestContext,
    auth_handler: Optional[AuthHandler],
) -> None:
    """Attach the auth header unless an Authorization header is present."""
    if auth_handler is None:
        return
    if has_header(headers, AUTHORIZATION):
        logger.debug("apply_auth: Authorization supplied by caller, skipping auth handler")
        return
    auth_header = auth_handler.get_header(context)
    if auth_header:
        for name, value in auth_header.items():
            set_header(headers, name, [value])


def prepare_request(
    config: ResolvedConfig,
    method: HttpMethod,
    path: str,
    body: Any = None,
    content_type: Optional[str] = None,
    headers: Optional[HeadersInput] = None,
    auth_handler: Optional[AuthHandler] = None,
    registry: CodecRegistry = default_registry,
) -> PreparedRequest:
    """Assemble a request from call arguments and client configuration."""
    variant = as_request_body(body)
    url = build_url(config.base_url, path)

    encoded = build_body(variant, content_type, config.content_type, registry)
    context = create_request_context(method, url, headers, variant)
    request_headers = build_headers(config, headers, encoded, context, auth_handler)

    logger.debug(
        f"prepare_request: {method} {url} body={type(variant).__name__ if variant else None} "
        f"headers={mask_headers(request_headers)}"
    )
    return PreparedRequest(
        method=method,
        url=url,
        headers=request_headers,
        body=encoded.content,
    )


def create_request_context(
    method: HttpMethod,
    url: str,
    headers: Optional[HeadersInput] = None,
    body: Optional[RequestBody] = None,
) -> RequestContext:
    """Create request context from options."""
    return RequestContext(
        method=method,
        url=url,
        headers=merge_headers(headers) if headers else None,
        body=body,
    )
