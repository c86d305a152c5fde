"""Proxy objects that turn local-looking calls into JSON-RPC requests.

    api = ProxyObject(client)
    api.echo(5)            # -> "echo", [5]
    api.foo.bar(1, 2)      # -> "foo.bar", [1, 2]
    api.auth.login(user="a", password="b")  # named params

    # Same thing without attribute magic
    api.namespace("foo").invoke("bar", 1, 2)
    api.invoke("foo.bar", 1, 2)

Attribute access returns a new immutable MethodPath each time, so call chains
never share state and a proxy can be used from several threads. Names that
clash with the proxy's own members ("namespace", "invoke", or anything with a
leading underscore) are reachable through invoke().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rpcwire.core.errors import ConfigError
from rpcwire.rpc.types import ClientRequest, Params

if TYPE_CHECKING:
    from rpcwire.client import Client


def _build_params(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Params:
    """JSON-RPC params are either positional or named, never both."""
    if args and kwargs:
        raise ConfigError("Cannot mix positional and keyword arguments in one call")
    if kwargs:
        return dict(kwargs)
    return list(args)


class MethodPath:
    """Accumulated method name segments, terminated by a call."""

    __slots__ = ("_proxy", "_segments")

    def __init__(self, proxy: _BaseProxy, segments: tuple[str, ...]) -> None:
        self._proxy = proxy
        self._segments = segments

    def __str__(self) -> str:
        return ".".join(self._segments)

    def __repr__(self) -> str:
        return f"MethodPath({str(self)!r})"

    def namespace(self, name: str) -> MethodPath:
        """Return a new path with ``name`` appended."""
        return MethodPath(self._proxy, self._segments + (name,))

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Call ``<this path>.<name>`` with the given arguments."""
        return self._proxy._dispatch(".".join(self._segments + (name,)), args, kwargs)

    def __getattr__(self, name: str) -> MethodPath:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.namespace(name)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._proxy._dispatch(str(self), args, kwargs)


class _BaseProxy:
    """Shared member-chain handling for both dispatch modes."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def namespace(self, name: str) -> MethodPath:
        """Start a method path at ``name``."""
        return MethodPath(self, (name,))

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Call the (possibly dotted) method ``name``."""
        return self._dispatch(name, args, kwargs)

    def __getattr__(self, name: str) -> MethodPath:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.namespace(name)

    def _dispatch(self, method: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        raise NotImplementedError


class ProxyObject(_BaseProxy):
    """Immediate mode: each call is sent at once and returns its result.

    Server errors raise their classified ResponseError at the call site;
    transport and protocol failures raise as well.
    """

    def _dispatch(self, method: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        return self._client.call(method, _build_params(args, kwargs))


class ProxyBatchObject(_BaseProxy):
    """Scheduled mode: each call is queued on the client and returned unresolved.

    Nothing is sent until ``client.batch_request()`` flushes the queue; after
    that each returned ClientRequest exposes its outcome through result().
    """

    def _dispatch(
        self, method: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> ClientRequest:
        request = ClientRequest(method, _build_params(args, kwargs))
        return self._client.schedule(request)
