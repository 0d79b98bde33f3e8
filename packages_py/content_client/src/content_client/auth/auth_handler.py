"""
Auth handler utilities for content_client.
"""
import base64
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..types import RequestContext
from ..config import AuthConfig, AuthMode
from ..headers import mask_header_value

logger = logging.getLogger(__name__)

AUTHORIZATION = "Authorization"


def encode_basic(user: str, password: str) -> str:
    """Return the Basic Authorization header value for a user/password pair."""
    credentials = f"{user}:{password}"
    return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")


class AuthHandler(ABC):
    """Auth handler interface."""

    @abstractmethod
    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get auth header for request."""
        ...


class BasicAuthHandler(AuthHandler):
    """Basic auth handler. The header value is computed once."""

    def __init__(self, user: str, password: str):
        self._value = encode_basic(user, password)

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get basic auth header."""
        logger.debug(
            f"BasicAuthHandler.get_header: {context.method} {context.url} -> "
            f"Authorization={mask_header_value(self._value)}"
        )
        return {AUTHORIZATION: self._value}


class ExplicitAuthHandler(AuthHandler):
    """Sends a preconfigured Authorization value verbatim."""

    def __init__(self, value: str):
        self._value = value

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get explicit auth header."""
        logger.debug(
            f"ExplicitAuthHandler.get_header: {context.method} {context.url} -> "
            f"Authorization={mask_header_value(self._value)}"
        )
        return {AUTHORIZATION: self._value}


def create_auth_handler(config: AuthConfig) -> Optional[AuthHandler]:
    """Create auth handler from config. Returns None when auth is off."""
    logger.debug(f"create_auth_handler: mode={config.mode.value}")

    if config.mode is AuthMode.BASIC:
        return BasicAuthHandler(config.user or "", config.password or "")
    if config.mode is AuthMode.EXPLICIT:
        return ExplicitAuthHandler(config.value or "")
    return None
