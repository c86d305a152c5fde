"""JSON-RPC 2.0 wire model, codec, transport and cookie handling."""

from rpcwire.rpc.codec import Codec, JsonCodec
from rpcwire.rpc.cookies import Cookie, CookieJar, parse_set_cookie
from rpcwire.rpc.protocol import (
    ACCEPTED_STATUS_CODES,
    CONTENT_TYPE,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR,
    classify_error,
    error_from_response,
)
from rpcwire.rpc.transport import HttpxTransport, Transport, TransportResponse
from rpcwire.rpc.types import ClientRequest, ServerResponse, ServerResponseError

__all__ = [
    # Types
    "ClientRequest",
    "ServerResponse",
    "ServerResponseError",
    # Error classification
    "classify_error",
    "error_from_response",
    # Error codes
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
    # Protocol constants
    "JSONRPC_VERSION",
    "CONTENT_TYPE",
    "ACCEPTED_STATUS_CODES",
    # Codec
    "Codec",
    "JsonCodec",
    # Transport
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    # Cookies
    "Cookie",
    "CookieJar",
    "parse_set_cookie",
]
