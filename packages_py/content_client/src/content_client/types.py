"""
Type definitions for content_client.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import (
    Any,
    Dict,
    List,
    Literal,
    Mapping,
    Optional,
    Sequence,
    Union,
)


# HTTP methods
HttpMethod = Literal[
    "GET", "HEAD", "POST", "PUT", "DELETE", "TRACE", "OPTIONS", "PATCH"
]

HTTP_METHODS = ("GET", "HEAD", "POST", "PUT", "DELETE", "TRACE", "OPTIONS", "PATCH")

# Header name -> ordered values. A single string is accepted on input and
# normalized to a one-element list.
HeaderValues = Union[str, int, float, Sequence[str]]
HeadersInput = Mapping[str, HeaderValues]
MultiHeaders = Dict[str, List[str]]


# Request body variants
#
# A call argument is resolved to exactly one of these once, before any
# header or body assembly happens:
# - StructuredBody: mapping encoded through the serialization bridge
# - TextBody: string sent verbatim as UTF-8
# - FileBody: file read fully and sent as base64 text


@dataclass(frozen=True)
class StructuredBody:
    """Key-value body encoded with the negotiated content type."""

    data: Mapping[str, Any]


@dataclass(frozen=True)
class TextBody:
    """Raw string body."""

    text: str


@dataclass(frozen=True)
class FileBody:
    """File body, carried on the wire as a base64 text blob."""

    path: Path

    def read(self) -> bytes:
        return self.path.read_bytes()


RequestBody = Union[StructuredBody, TextBody, FileBody]

BodyInput = Union[RequestBody, Mapping[str, Any], str, "os.PathLike[str]", None]


def as_request_body(body: Any) -> Optional[RequestBody]:
    """Resolve a call argument to its body variant.

    Raises:
        TypeError: if the value is not a mapping, string, path or body variant.
    """
    if body is None:
        return None
    if isinstance(body, (StructuredBody, TextBody, FileBody)):
        return body
    if isinstance(body, Mapping):
        return StructuredBody(body)
    if isinstance(body, str):
        return TextBody(body)
    if isinstance(body, os.PathLike):
        return FileBody(Path(body))
    raise TypeError(
        f"Unsupported body type: {type(body).__name__}. "
        f"Expected a mapping, str, path or request body variant."
    )


@dataclass(frozen=True)
class RequestContext:
    """Request context passed to auth handlers."""

    method: HttpMethod
    url: str
    headers: Optional[MultiHeaders] = None
    body: Optional[RequestBody] = None
