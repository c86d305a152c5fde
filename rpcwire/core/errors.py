"""Typed exception hierarchy for rpcwire."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rpcwire.rpc.types import ServerResponseError


class RpcError(Exception):
    """Base class for all rpcwire errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(RpcError):
    """Raised for construction-time problems (bad endpoint, bad callback, invalid config)."""


class EncodingError(RpcError):
    """Raised when an outgoing payload cannot be serialized."""


class DecodingError(RpcError):
    """Raised when a reply body cannot be deserialized."""


class TransportError(RpcError):
    """Raised when the HTTP round trip itself fails (connection, TLS, I/O)."""


class RequestTimeoutError(TransportError):
    """Raised when the transport timeout elapses before a reply arrives."""


class HttpError(RpcError):
    """Raised when the server answers with a status outside the JSON-RPC set."""

    def __init__(self, reason: str, status_code: int) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} {reason}".rstrip())


class ProtocolError(RpcError):
    """Raised for malformed replies or reply shapes that contradict the request."""


# === Server-reported errors ===


class ResponseError(RpcError):
    """Base class for errors reported in-band by the JSON-RPC server.

    Attributes:
        code: The numeric error code from the response.
        data: Optional server-supplied detail.
        server_error: The parsed ServerResponseError this was built from.
    """

    def __init__(
        self,
        message: str,
        code: int,
        data: Any = None,
        server_error: ServerResponseError | None = None,
    ) -> None:
        self.code = code
        self.data = data
        self.server_error = server_error
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class ServerError(ResponseError):
    """Base class for the standard JSON-RPC 2.0 error codes."""


class ParseError(ServerError):
    """Invalid JSON was received by the server."""


class InvalidRequest(ServerError):
    """The JSON sent is not a valid Request object."""


class InvalidParams(ServerError):
    """Invalid method parameter(s)."""


class MethodNotFound(ServerError):
    """The method does not exist / is not available."""


class InternalError(ServerError):
    """Internal JSON-RPC error."""


class RemoteError(ResponseError):
    """Any other server-reported code, including the -32099..-32000 range."""
