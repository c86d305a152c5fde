"""JSON-RPC 2.0 client over HTTP.

Example usage:
    from rpcwire import Client, ClientRequest, ProxyObject

    with Client("http://example.com/api/") as client:
        client.request(ClientRequest("foo.bar"))

        api = ProxyObject(client)
        print(api.echo(5))
"""

from rpcwire.client import Client
from rpcwire.config import ClientConfig, load_config
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
from rpcwire.proxy import MethodPath, ProxyBatchObject, ProxyObject
from rpcwire.rpc.types import ClientRequest, ServerResponse, ServerResponseError

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "ClientConfig",
    "load_config",
    # Requests and responses
    "ClientRequest",
    "ServerResponse",
    "ServerResponseError",
    # Proxies
    "ProxyObject",
    "ProxyBatchObject",
    "MethodPath",
    # Exceptions
    "RpcError",
    "ConfigError",
    "EncodingError",
    "DecodingError",
    "TransportError",
    "RequestTimeoutError",
    "HttpError",
    "ProtocolError",
    "ResponseError",
    "ServerError",
    "ParseError",
    "InvalidRequest",
    "MethodNotFound",
    "InvalidParams",
    "InternalError",
    "RemoteError",
]
