"""Shared pytest fixtures for rpcwire tests."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from rpcwire.client import Client
from rpcwire.config.schema import ClientConfig
from rpcwire.rpc.transport import HttpxTransport

ENDPOINT = "http://example.com/api/"

Handler = Callable[[httpx.Request], httpx.Response]


def mock_transport(handler: Handler) -> HttpxTransport:
    """Build an HttpxTransport whose requests are answered by handler."""
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


def rpc_result(request_id: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def rpc_error(request_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


class RecordingServer:
    """Scripted fake server that records every HTTP request it receives.

    ``reply`` is called with the decoded request payload and returns either
    an httpx.Response or a JSON-serializable body (None means empty 204).
    """

    def __init__(self, reply: Callable[[Any], Any] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.payloads: list[Any] = []
        self._reply = reply or self.echo_results

    @staticmethod
    def echo_results(payload: Any) -> Any:
        """Answer every request that has an id with its params as result."""
        if isinstance(payload, list):
            replies = [rpc_result(item["id"], item["params"]) for item in payload if "id" in item]
            return replies or None
        if "id" not in payload:
            return None
        return rpc_result(payload["id"], payload["params"])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = json.loads(request.content)
        self.payloads.append(payload)
        reply = self._reply(payload)
        if isinstance(reply, httpx.Response):
            return reply
        if reply is None:
            return httpx.Response(204)
        return httpx.Response(200, json=reply)


@pytest.fixture
def server() -> RecordingServer:
    return RecordingServer()


@pytest.fixture
def make_client() -> Callable[..., Client]:
    """Factory building a Client wired to a mock handler."""

    def _make(handler: Handler, config: ClientConfig | None = None, **kwargs: Any) -> Client:
        return Client(ENDPOINT, config=config, transport=mock_transport(handler), **kwargs)

    return _make
