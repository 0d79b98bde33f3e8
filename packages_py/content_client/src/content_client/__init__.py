"""
Content-negotiating HTTP client for Python.

Provides one method per HTTP verb, encodes structured bodies with the
negotiated content type, and manages default headers, auth and cookies per
client. Module-level verb functions use a lazily created default client.
"""
from .types import (
    HttpMethod,
    StructuredBody,
    TextBody,
    FileBody,
    RequestBody,
    RequestContext,
    as_request_body,
)
from .errors import (
    ContentClientError,
    ConfigurationError,
    DecodeError,
    TransportError,
    UnsupportedContentType,
)
from .config import (
    AuthConfig,
    AuthMode,
    ClientConfig,
    TimeoutConfig,
    DEFAULT_CONTENT_TYPE,
)
from .serialization import (
    Codec,
    CodecRegistry,
    JsonCodec,
    YamlCodec,
    FormCodec,
    decode,
    encode,
    is_structured,
    register_codec,
)
from .response import Response
from .transport import (
    Transport,
    AsyncTransport,
    TransportResponse,
    HttpxTransport,
    AsyncHttpxTransport,
)
from .core.base_client import AsyncContentClient, SyncContentClient
from .factory import create_client, create_sync_client, create_async_client
from .default_client import (
    get_default_client,
    reset_default_client,
    get,
    head,
    post,
    put,
    delete,
    trace,
    options,
    patch,
)

__all__ = [
    # Types
    "HttpMethod",
    "StructuredBody",
    "TextBody",
    "FileBody",
    "RequestBody",
    "RequestContext",
    "as_request_body",
    # Errors
    "ContentClientError",
    "ConfigurationError",
    "DecodeError",
    "TransportError",
    "UnsupportedContentType",
    # Config
    "AuthConfig",
    "AuthMode",
    "ClientConfig",
    "TimeoutConfig",
    "DEFAULT_CONTENT_TYPE",
    # Serialization
    "Codec",
    "CodecRegistry",
    "JsonCodec",
    "YamlCodec",
    "FormCodec",
    "decode",
    "encode",
    "is_structured",
    "register_codec",
    # Response
    "Response",
    # Transports
    "Transport",
    "AsyncTransport",
    "TransportResponse",
    "HttpxTransport",
    "AsyncHttpxTransport",
    # Clients
    "AsyncContentClient",
    "SyncContentClient",
    # Factory
    "create_client",
    "create_sync_client",
    "create_async_client",
    # Default client
    "get_default_client",
    "reset_default_client",
    "get",
    "head",
    "post",
    "put",
    "delete",
    "trace",
    "options",
    "patch",
]

__version__ = "0.1.0"
