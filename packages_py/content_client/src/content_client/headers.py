"""
Multi-valued header helpers.

Header names are matched case-insensitively. Every name maps to an ordered
list of values; the order is kept when the headers are put on the wire.
"""
from typing import Iterable, List, Optional, Tuple

from .types import HeaderValues, HeadersInput, MultiHeaders

SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}
)


def _values(value: HeaderValues) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, bytes):
        return [value.decode("latin-1")]
    return [str(value)]


def normalize_headers(headers: Optional[HeadersInput]) -> MultiHeaders:
    """Copy headers into the name -> list-of-values form."""
    result: MultiHeaders = {}
    if not headers:
        return result
    for name, value in headers.items():
        set_header(result, name, _values(value))
    return result


def find_header(headers: MultiHeaders, name: str) -> Optional[str]:
    """Return the stored spelling of ``name``, or None."""
    lowered = name.lower()
    for key in headers:
        if key.lower() == lowered:
            return key
    return None


def has_header(headers: MultiHeaders, name: str) -> bool:
    return find_header(headers, name) is not None


def set_header(headers: MultiHeaders, name: str, values: HeaderValues) -> None:
    """Replace every value of ``name`` (any casing) with ``values``."""
    existing = find_header(headers, name)
    if existing is not None:
        del headers[existing]
    headers[name] = _values(values)


def merge_headers(
    defaults: Optional[HeadersInput],
    overrides: Optional[HeadersInput] = None,
) -> MultiHeaders:
    """Overlay ``overrides`` on ``defaults``.

    A name present in ``overrides`` replaces all of its default values.
    """
    result = normalize_headers(defaults)
    for name, values in normalize_headers(overrides).items():
        set_header(result, name, values)
    return result


def to_header_list(headers: MultiHeaders) -> List[Tuple[str, str]]:
    """Flatten headers into (name, value) pairs, keeping value order."""
    return [(name, value) for name, values in headers.items() for value in values]


def mask_header_value(value: Optional[str], visible_chars: int = 10) -> str:
    """Mask sensitive value for safe logging."""
    if value is None:
        return "<None>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def mask_headers(headers: MultiHeaders) -> MultiHeaders:
    """Copy of headers with credential values masked."""
    masked: MultiHeaders = {}
    for name, values in headers.items():
        if name.lower() in SENSITIVE_HEADERS:
            masked[name] = [mask_header_value(v) for v in values]
        else:
            masked[name] = list(values)
    return masked


def from_pairs(pairs: Iterable[Tuple[str, str]]) -> MultiHeaders:
    """Group (name, value) pairs by name, case-insensitively."""
    result: MultiHeaders = {}
    for name, value in pairs:
        existing = find_header(result, name)
        if existing is None:
            result[name] = [value]
        else:
            result[existing].append(value)
    return result
