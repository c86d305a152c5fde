"""JSON-RPC 2.0 request and response types for the client."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rpcwire.core.errors import ConfigError, ProtocolError, ResponseError, RpcError
from rpcwire.rpc.protocol import JSONRPC_VERSION, classify_error, error_from_response

Params = list[Any] | dict[str, Any]
CompleteCallback = Callable[["ClientRequest", "ServerResponse"], Any]
ErrorCallback = Callable[["ClientRequest", "ServerResponseError"], Any]


def generate_request_id() -> str:
    """Generate a request id that is unique for the lifetime of the process."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ServerResponseError:
    """JSON-RPC 2.0 error object from a response.

    Attributes:
        code: Numeric error code.
        message: Short description of the error.
        data: Optional additional information supplied by the server.
    """

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_dict(cls, raw: Any) -> ServerResponseError:
        """Parse the ``error`` member of a response.

        Raises:
            ProtocolError: If the error object is malformed.
        """
        if not isinstance(raw, dict):
            raise ProtocolError(f"error must be an object, got: {type(raw).__name__}")

        code = raw.get("code")
        # bool is an int subclass but never a valid code
        if not isinstance(code, int) or isinstance(code, bool):
            raise ProtocolError(f"error code must be an integer, got: {code!r}")

        message = raw.get("message")
        if not isinstance(message, str):
            raise ProtocolError(f"error message must be a string, got: {type(message).__name__}")

        return cls(code=code, message=message, data=raw.get("data"))

    @property
    def kind(self) -> type[ResponseError]:
        """The exception class this error is classified as."""
        return classify_error(self.code)

    def to_exception(self) -> ResponseError:
        """Build the classified exception for this error."""
        return error_from_response(self)


@dataclass(frozen=True)
class ServerResponse:
    """JSON-RPC 2.0 response received from the server.

    Attributes:
        id: Id of the request this answers. None only for errors the server
            could not attribute to a request (e.g. it failed to parse the body).
        result: Result of the call (None when the response is an error).
        error: Parsed error object, or None on success.
        jsonrpc: Protocol version tag, always "2.0".
    """

    id: str | int | None
    result: Any = None
    error: ServerResponseError | None = None
    jsonrpc: str = JSONRPC_VERSION

    @classmethod
    def from_dict(cls, raw: Any) -> ServerResponse:
        """Parse a decoded response object.

        When both ``error`` and ``result`` are present, ``error`` wins.

        Args:
            raw: A decoded JSON value.

        Returns:
            A parsed ServerResponse.

        Raises:
            ProtocolError: If the object is not a valid JSON-RPC 2.0 response.
        """
        if not isinstance(raw, dict):
            raise ProtocolError(f"Response must be a JSON object, got: {type(raw).__name__}")

        if "jsonrpc" not in raw:
            raise ProtocolError("Response is missing the 'jsonrpc' version tag")
        jsonrpc = raw["jsonrpc"]
        if jsonrpc != JSONRPC_VERSION:
            raise ProtocolError(f"jsonrpc must be {JSONRPC_VERSION!r}, got: {jsonrpc!r}")

        response_id = raw.get("id")
        if response_id is not None and (
            not isinstance(response_id, (str, int)) or isinstance(response_id, bool)
        ):
            raise ProtocolError(
                f"id must be string, number, or null, got: {type(response_id).__name__}"
            )

        if "error" in raw:
            error = ServerResponseError.from_dict(raw["error"])
            return cls(id=response_id, error=error, jsonrpc=jsonrpc)

        if "result" not in raw:
            raise ProtocolError("Response must have either 'result' or 'error'")
        if response_id is None:
            raise ProtocolError("Successful response must carry a non-null 'id'")

        return cls(id=response_id, result=raw["result"], jsonrpc=jsonrpc)

    def has_error(self) -> bool:
        """Return True if the response carries an error."""
        return self.error is not None


class ClientRequest:
    """One logical JSON-RPC call.

    A fresh id is generated for every request, notifications included; it is
    simply left off the wire for notifications.

    Callbacks are delivered synchronously by the client, at most once:

    - ``on_error(request, error)`` fires when the response carries an error;
      ``error`` is the parsed ServerResponseError.
    - ``on_complete(request, response)`` fires for every response to a
      non-notification, including error responses. Both callbacks therefore
      run for an error reply to a normal request, error callback first.

    After delivery the request doubles as a result handle: ``done``,
    ``response`` and ``result()``.
    """

    def __init__(
        self,
        method: str,
        params: Params | tuple[Any, ...] | None = None,
        is_notification: bool = False,
        on_complete: CompleteCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        if not isinstance(method, str) or not method:
            raise ConfigError(f"method must be a non-empty string, got: {method!r}")

        if params is None:
            params = []
        elif isinstance(params, tuple):
            params = list(params)
        elif not isinstance(params, (list, dict)):
            raise ConfigError(f"params must be a list or dict, got: {type(params).__name__}")

        if on_complete is not None and not callable(on_complete):
            raise ConfigError("Complete callback is not callable")
        if on_error is not None and not callable(on_error):
            raise ConfigError("Error callback is not callable")

        self._method = method
        self._params: Params = params
        self._id = generate_request_id()
        self._is_notification = bool(is_notification)
        self._on_complete = on_complete
        self._on_error = on_error
        self._response: ServerResponse | None = None

    def __repr__(self) -> str:
        kind = "notification" if self._is_notification else "request"
        return f"ClientRequest({self._method!r}, id={self._id!r}, {kind})"

    @property
    def method(self) -> str:
        return self._method

    @property
    def params(self) -> Params:
        return self._params

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_notification(self) -> bool:
        return self._is_notification

    @property
    def done(self) -> bool:
        """True once a response has been delivered through complete()."""
        return self._response is not None

    @property
    def response(self) -> ServerResponse | None:
        return self._response

    def get_structure(self) -> dict[str, Any]:
        """Build the wire form of this request."""
        structure: dict[str, Any] = {
            "jsonrpc": JSONRPC_VERSION,
            "method": self._method,
            "params": self._params,
        }
        if not self._is_notification:
            structure["id"] = self._id
        return structure

    def complete(self, response: ServerResponse) -> None:
        """Deliver the response for this request. Called by the client.

        Raises:
            ProtocolError: If the request was already completed.
        """
        if self._response is not None:
            raise ProtocolError(f"Request {self._id} was already completed")
        self._response = response

        if response.error is not None and self._on_error is not None:
            self._on_error(self, response.error)

        if not self._is_notification and self._on_complete is not None:
            self._on_complete(self, response)

    def result(self) -> Any:
        """Return the call result, raising the classified error on failure.

        Raises:
            RpcError: If no response has been delivered yet.
            ResponseError: The classified server error, if the response is an error.
        """
        if self._response is None:
            if self._is_notification:
                raise RpcError(f"Notification {self._method!r} has no result")
            raise RpcError(f"Request {self._id} has not been completed yet")
        if self._response.error is not None:
            raise self._response.error.to_exception()
        return self._response.result
