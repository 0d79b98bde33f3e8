"""
Serialization bridge for content_client.

Maps content types to codecs and converts structured values to and from
wire bytes. Media type parameters (``;charset=utf-8``) are ignored when
looking up a codec, and ``+json`` / ``+yaml`` structured-syntax suffixes
fall back to the JSON and YAML codecs.
"""
import json
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Protocol
from urllib.parse import parse_qsl, urlencode

import yaml

from .errors import DecodeError, UnsupportedContentType

logger = logging.getLogger("content_client.serialization")

JSON_CONTENT_TYPE = "application/json"
YAML_CONTENT_TYPE = "application/yaml"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Codec(Protocol):
    """Codec protocol for a single structured format."""

    def serialize(self, data: Any) -> bytes:
        """Serialize data to bytes."""
        ...

    def deserialize(self, raw: bytes) -> Any:
        """Deserialize bytes to data."""
        ...


class JsonCodec:
    """JSON codec, pretty printed and UTF-8 encoded."""

    def serialize(self, data: Any) -> bytes:
        return json.dumps(_plain(data), indent=2, ensure_ascii=False).encode("utf-8")

    def deserialize(self, raw: bytes) -> Any:
        return json.loads(raw.decode("utf-8"))


class YamlCodec:
    """YAML codec backed by PyYAML safe dump/load."""

    def serialize(self, data: Any) -> bytes:
        text = yaml.safe_dump(
            _plain(data), allow_unicode=True, default_flow_style=False, sort_keys=False
        )
        return text.encode("utf-8")

    def deserialize(self, raw: bytes) -> Any:
        return yaml.safe_load(raw.decode("utf-8"))


class FormCodec:
    """URL-encoded form codec for flat mappings."""

    def serialize(self, data: Any) -> bytes:
        if not isinstance(data, Mapping):
            raise TypeError(f"Form bodies must be mappings, got {type(data).__name__}")
        for key, value in data.items():
            if isinstance(value, (Mapping, list, tuple)):
                raise TypeError(f"Form field {key!r} must be a scalar value")
        return urlencode({k: _form_value(v) for k, v in data.items()}).encode("ascii")

    def deserialize(self, raw: bytes) -> Any:
        return dict(
            parse_qsl(raw.decode("ascii"), keep_blank_values=True, strict_parsing=bool(raw))
        )


def _form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _plain(data: Any) -> Any:
    """Convert any Mapping to a dict and any sequence to a list, recursively."""
    if isinstance(data, Mapping):
        return {k: _plain(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [_plain(v) for v in data]
    return data


def media_type(content_type: Optional[str]) -> str:
    """Return the lowercased media type without parameters."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class CodecRegistry:
    """Thread-safe content type to codec registry."""

    def __init__(self) -> None:
        self._codecs: Dict[str, Codec] = {}
        self._lock = threading.Lock()

    def register(self, content_type: str, codec: Codec) -> None:
        """Register (or replace) the codec for a content type."""
        key = media_type(content_type)
        if not key:
            raise ValueError("content_type is required")
        with self._lock:
            self._codecs[key] = codec
        logger.debug(f"CodecRegistry.register: {key} -> {type(codec).__name__}")

    def find(self, content_type: Optional[str]) -> Optional[Codec]:
        """Find the codec for a content type, or None."""
        key = media_type(content_type)
        if not key:
            return None
        with self._lock:
            codec = self._codecs.get(key)
            if codec is None and "+" in key:
                suffix = key.rsplit("+", 1)[1]
                codec = self._codecs.get(f"application/{suffix}")
        return codec

    def get(self, content_type: Optional[str]) -> Codec:
        """Get the codec for a content type.

        Raises:
            UnsupportedContentType: if no codec is registered.
        """
        codec = self.find(content_type)
        if codec is None:
            raise UnsupportedContentType(content_type)
        return codec

    def content_types(self) -> list:
        with self._lock:
            return sorted(self._codecs)


def _build_default_registry() -> CodecRegistry:
    registry = CodecRegistry()
    json_codec = JsonCodec()
    yaml_codec = YamlCodec()
    registry.register(JSON_CONTENT_TYPE, json_codec)
    registry.register("text/json", json_codec)
    registry.register(YAML_CONTENT_TYPE, yaml_codec)
    registry.register("application/x-yaml", yaml_codec)
    registry.register("text/yaml", yaml_codec)
    registry.register(FORM_CONTENT_TYPE, FormCodec())
    return registry


default_registry = _build_default_registry()


def register_codec(content_type: str, codec: Codec) -> None:
    """Register a codec on the default registry."""
    default_registry.register(content_type, codec)


def is_structured(content_type: Optional[str], registry: Optional[CodecRegistry] = None) -> bool:
    """Return True if a codec is registered for the content type."""
    return (registry or default_registry).find(content_type) is not None


def encode(
    value: Any, content_type: Optional[str], registry: Optional[CodecRegistry] = None
) -> bytes:
    """Encode a structured value for the given content type.

    Raises:
        UnsupportedContentType: if no codec is registered for ``content_type``.
    """
    codec = (registry or default_registry).get(content_type)
    return codec.serialize(value)


def decode(
    raw: bytes, content_type: Optional[str], registry: Optional[CodecRegistry] = None
) -> Any:
    """Decode bytes for the given content type.

    Raises:
        UnsupportedContentType: if no codec is registered for ``content_type``.
        DecodeError: if ``raw`` is malformed for ``content_type``.
    """
    codec = (registry or default_registry).get(content_type)
    try:
        return codec.deserialize(raw)
    except (ValueError, yaml.YAMLError) as e:
        raise DecodeError(media_type(content_type), str(e)) from e
