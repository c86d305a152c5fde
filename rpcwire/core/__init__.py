"""Core error types and validation helpers."""

from rpcwire.core.errors import (
    ConfigError,
    DecodingError,
    EncodingError,
    HttpError,
    InternalError,
    InvalidParams,
    InvalidRequest,
    MethodNotFound,
    ParseError,
    ProtocolError,
    RemoteError,
    RequestTimeoutError,
    ResponseError,
    RpcError,
    ServerError,
    TransportError,
)
from rpcwire.core.url_validator import validate_endpoint
