"""
Core modules for content_client.
"""
from .base_client import AsyncContentClient, SyncContentClient
from .request_builder import (
    build_url,
    build_headers,
    build_body,
    prepare_request,
    create_request_context,
)

__all__ = [
    "AsyncContentClient",
    "SyncContentClient",
    "build_url",
    "build_headers",
    "build_body",
    "prepare_request",
    "create_request_context",
]
