"""JSON-RPC 2.0 protocol constants and error classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rpcwire.core.errors import (
    InternalError,
    InvalidParams,
    InvalidRequest,
    MethodNotFound,
    ParseError,
    RemoteError,
    ResponseError,
)

if TYPE_CHECKING:
    from rpcwire.rpc.types import ServerResponseError

JSONRPC_VERSION = "2.0"
CONTENT_TYPE = "application/json-rpc"

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000  # Server error range: -32000 to -32099

# Statuses whose body still carries an in-band JSON-RPC reply
# (JSON-RPC over HTTP convention).
ACCEPTED_STATUS_CODES: frozenset[int] = frozenset({200, 204, 400, 404, 500})

_ERROR_TABLE: dict[int, type[ResponseError]] = {
    PARSE_ERROR: ParseError,
    INVALID_REQUEST: InvalidRequest,
    METHOD_NOT_FOUND: MethodNotFound,
    INVALID_PARAMS: InvalidParams,
    INTERNAL_ERROR: InternalError,
}


def classify_error(code: int) -> type[ResponseError]:
    """Map a JSON-RPC error code to the exception class that represents it.

    The five standard codes map to their ServerError subclass. Everything else,
    including the implementation-defined -32099..-32000 range, is a RemoteError.

    Args:
        code: The error code reported by the server.

    Returns:
        The ResponseError subclass for this code.
    """
    return _ERROR_TABLE.get(code, RemoteError)


def error_from_response(error: ServerResponseError) -> ResponseError:
    """Build the classified exception for a parsed server error.

    Args:
        error: The ServerResponseError from a response.

    Returns:
        An exception instance carrying the raw code, message and data.
    """
    cls = classify_error(error.code)
    return cls(error.message, error.code, error.data, server_error=error)
