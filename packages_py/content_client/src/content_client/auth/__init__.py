"""
Auth handlers for content_client.
"""
from .auth_handler import (
    AuthHandler,
    BasicAuthHandler,
    ExplicitAuthHandler,
    create_auth_handler,
    encode_basic,
)

__all__ = [
    "AuthHandler",
    "BasicAuthHandler",
    "ExplicitAuthHandler",
    "create_auth_handler",
    "encode_basic",
]
