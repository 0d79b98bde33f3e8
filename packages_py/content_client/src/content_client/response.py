"""
Response wrapper for content_client.
"""
import codecs
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx

from .errors import DecodeError
from .serialization import CodecRegistry, decode, default_registry, media_type


def _charset(content_type: Optional[str]) -> str:
    if content_type:
        for param in content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                charset = value.strip().strip('"')
                try:
                    return codecs.lookup(charset).name
                except LookupError:
                    break
    return "utf-8"


@dataclass(frozen=True)
class Response:
    """Read-only result of one request.

    The body is kept as raw bytes; decoding happens only when asked for,
    so a malformed body never fails the request itself.
    """

    status_code: int
    headers: httpx.Headers
    body: bytes
    url: str = ""
    method: str = ""
    reason_phrase: str = ""
    registry: CodecRegistry = field(default=default_registry, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("content-type")

    @property
    def text(self) -> str:
        return self.body.decode(_charset(self.content_type), errors="replace")

    def header(self, name: str) -> Optional[str]:
        """First value of a header, or None."""
        values = self.headers.get_list(name)
        return values[0] if values else None

    def header_list(self, name: str) -> List[str]:
        """Every value of a header, in received order."""
        return self.headers.get_list(name)

    def decoded(self, content_type: Optional[str] = None) -> Any:
        """Decode the body according to its content type.

        Uses ``content_type`` when given, else the response Content-Type.
        Structured types are decoded with the registered codec; anything else
        is returned as text. An empty body decodes to None.

        Raises:
            DecodeError: if the body is malformed for a structured type.
        """
        declared = content_type or self.content_type
        if not self.body:
            return None
        if not self.registry.find(declared):
            return self.text
        has_charset = "charset=" in (content_type or "").lower()
        charset = _charset(declared if has_charset else self.content_type)
        raw = self.body
        if charset != "utf-8":
            # Codecs read UTF-8; transcode from the declared charset first.
            try:
                raw = raw.decode(charset).encode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(media_type(declared), str(e)) from e
        return decode(raw, declared, self.registry)

    def json(self) -> Any:
        """Decode the body as JSON regardless of Content-Type."""
        return self.decoded("application/json")

    def __repr__(self) -> str:
        return (
            f"Response(status_code={self.status_code}, method={self.method!r}, "
            f"url={self.url!r}, content_type={media_type(self.content_type)!r}, "
            f"body=<{len(self.body)} bytes>)"
        )
