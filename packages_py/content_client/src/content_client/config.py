"""
Configuration for content_client.
"""
import enum
import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import urlparse

from .errors import ConfigurationError
from .headers import has_header, mask_header_value, normalize_headers
from .serialization import JSON_CONTENT_TYPE, media_type
from .types import HeadersInput, MultiHeaders

logger = logging.getLogger("content_client.config")

# Default values
DEFAULT_CONTENT_TYPE = JSON_CONTENT_TYPE

TRACE_ENV_VAR = "CONTENT_CLIENT_TRACE"


class AuthMode(str, enum.Enum):
    NONE = "none"
    BASIC = "basic"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class AuthConfig:
    """Authentication configuration.

    Exactly one mode is active:
    - NONE: no Authorization header is added
    - BASIC: Authorization: Basic <base64(user:password)>
    - EXPLICIT: Authorization header value used verbatim
      (e.g. "Bearer <token>")
    """

    mode: AuthMode = AuthMode.NONE
    user: Optional[str] = None
    password: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def none(cls) -> "AuthConfig":
        return cls()

    @classmethod
    def basic(cls, user: str, password: str) -> "AuthConfig":
        return cls(mode=AuthMode.BASIC, user=user, password=password)

    @classmethod
    def explicit(cls, value: str) -> "AuthConfig":
        return cls(mode=AuthMode.EXPLICIT, value=value)

    @classmethod
    def bearer(cls, token: str) -> "AuthConfig":
        return cls.explicit(f"Bearer {token}")

    def __repr__(self) -> str:
        """Safe repr that masks sensitive values."""
        return (
            f"AuthConfig(mode={self.mode.value!r}, "
            f"user={self.user!r}, "
            f"password={mask_header_value(self.password, 0)!r}, "
            f"value={mask_header_value(self.value)!r})"
        )


def auth_from_credentials(
    user: Optional[str] = None,
    password: Optional[str] = None,
    authorization: Optional[str] = None,
) -> AuthConfig:
    """Pick the auth mode from constructor-style credentials.

    Raises:
        ConfigurationError: on partial basic credentials, or when both basic
            credentials and an explicit authorization value are given.
    """
    has_basic = user is not None or password is not None
    if has_basic and authorization is not None:
        raise ConfigurationError(
            "Basic credentials and an explicit authorization value are mutually exclusive"
        )
    if has_basic:
        if user is None or password is None:
            raise ConfigurationError("Basic auth requires both user and password")
        return AuthConfig.basic(user, password)
    if authorization is not None:
        if not authorization.strip():
            raise ConfigurationError("authorization must not be blank")
        return AuthConfig.explicit(authorization)
    return AuthConfig.none()


@dataclass(frozen=True)
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class ClientConfig:
    """Client configuration."""

    base_url: str = ""
    content_type: str = DEFAULT_CONTENT_TYPE
    use_cookies: bool = True
    headers: HeadersInput = field(default_factory=dict)
    auth: AuthConfig = field(default_factory=AuthConfig)
    follow_redirects: bool = True
    timeout: Union[TimeoutConfig, float, None] = None
    trace: Optional[bool] = None


@dataclass(frozen=True)
class ResolvedConfig:
    """Resolved client configuration with defaults applied."""

    base_url: str
    content_type: str
    use_cookies: bool
    headers: MultiHeaders
    auth: AuthConfig
    follow_redirects: bool
    timeout: TimeoutConfig
    trace: bool


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def is_trace_enabled_by_env() -> bool:
    return os.environ.get(TRACE_ENV_VAR, "").lower() in ("1", "true", "yes")


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration.

    An empty base_url is allowed: every call then passes a full URL.
    """
    if config.base_url:
        parsed = urlparse(config.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid base_url: {config.base_url}")

    if not media_type(config.content_type):
        raise ConfigurationError("content_type is required")

    if not isinstance(config.auth, AuthConfig):
        raise ConfigurationError(f"auth must be an AuthConfig, got {type(config.auth).__name__}")
    validate_auth_config(config.auth)

    if config.auth.mode is not AuthMode.NONE and has_header(
        normalize_headers(config.headers), "Authorization"
    ):
        raise ConfigurationError(
            "Default headers contain Authorization while auth is configured"
        )


def validate_auth_config(auth: AuthConfig) -> None:
    """Validate auth configuration."""
    if auth.mode is AuthMode.BASIC:
        if auth.user is None or auth.password is None:
            raise ConfigurationError("Basic auth requires both user and password")
        if ":" in auth.user:
            raise ConfigurationError("Basic auth user must not contain ':'")
        if auth.value is not None:
            raise ConfigurationError("Basic auth does not take an explicit value")
    elif auth.mode is AuthMode.EXPLICIT:
        if not auth.value:
            raise ConfigurationError("Explicit auth requires a value")
        if auth.user is not None or auth.password is not None:
            raise ConfigurationError("Explicit auth does not take user/password")
    elif any(v is not None for v in (auth.user, auth.password, auth.value)):
        raise ConfigurationError("Auth mode 'none' does not take credentials")


def resolve_config(config: ClientConfig) -> ResolvedConfig:
    """Resolve client configuration with defaults."""
    validate_config(config)

    trace = config.trace if config.trace is not None else is_trace_enabled_by_env()
    resolved = ResolvedConfig(
        base_url=config.base_url,
        content_type=config.content_type,
        use_cookies=config.use_cookies,
        headers=normalize_headers(config.headers),
        auth=config.auth,
        follow_redirects=config.follow_redirects,
        timeout=normalize_timeout(config.timeout),
        trace=trace,
    )
    logger.debug(
        f"resolve_config: base_url={resolved.base_url!r}, content_type={resolved.content_type}, "
        f"use_cookies={resolved.use_cookies}, auth={resolved.auth!r}"
    )
    return resolved
