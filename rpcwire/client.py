"""Synchronous HTTP client for JSON-RPC 2.0 servers."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from rpcwire.config.schema import ClientConfig
from rpcwire.core.errors import ConfigError, HttpError, ProtocolError
from rpcwire.core.url_validator import validate_endpoint
from rpcwire.rpc.codec import Codec, JsonCodec
from rpcwire.rpc.cookies import CookieJar
from rpcwire.rpc.protocol import ACCEPTED_STATUS_CODES, CONTENT_TYPE
from rpcwire.rpc.transport import HttpxTransport, Transport
from rpcwire.rpc.types import ClientRequest, ErrorCallback, Params, ServerResponse

logger = logging.getLogger(__name__)


class Client:
    """JSON-RPC 2.0 client for a single HTTP endpoint.

    Sends single requests, notifications and batches, matches replies back to
    their requests by id and delivers each reply through ClientRequest.complete().
    Every dispatch blocks until the transport returns or the configured
    timeout elapses; one Client never has more than one round trip in flight.

    Usage:
        with Client("http://example.com/api/") as client:
            print(client.call("echo", [5]))

            client.schedule(ClientRequest("foo.bar", [1]))
            client.schedule(ClientRequest("foo.bar", [2]))
            client.batch_request()  # flushes the two scheduled calls

    Cookies are captured from every reply and sent back on later requests
    unless disabled, which makes sessions (e.g. login then whoami) work.
    """

    def __init__(
        self,
        endpoint: str,
        use_cookies: bool | None = None,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        codec: Codec | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: URL of the JSON-RPC server.
            use_cookies: Enable the session cookie jar. If None, taken from config.
            config: Per-client configuration. Defaults to ClientConfig().
            transport: HTTP transport. Defaults to an HttpxTransport.
            codec: Body codec. Defaults to JsonCodec.

        Raises:
            ConfigError: If the endpoint is malformed.
        """
        self._endpoint = validate_endpoint(endpoint)
        self._config = config or ClientConfig()
        self._use_cookies = self._config.use_cookies if use_cookies is None else use_cookies
        self._transport = transport or HttpxTransport(verify=self._config.verify_ssl)
        self._codec = codec or JsonCodec()
        self._cookie_jar = CookieJar()
        self._queue: list[ClientRequest] = []
        # Guards the jar and the queue, and serializes round trips.
        # Reentrant so callbacks may schedule further requests.
        self._lock = threading.RLock()
        logger.debug(
            "Client initialized: endpoint=%s, timeout=%s, cookies=%s",
            endpoint,
            self._config.timeout,
            self._use_cookies,
        )

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport's connections."""
        self._transport.close()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def use_cookies(self) -> bool:
        return self._use_cookies

    @property
    def cookie_jar(self) -> CookieJar:
        return self._cookie_jar

    @property
    def pending(self) -> list[ClientRequest]:
        """Snapshot of the scheduled requests awaiting batch_request()."""
        with self._lock:
            return list(self._queue)

    # === Dispatch ===

    def request(self, request: ClientRequest) -> ServerResponse | None:
        """Send a single request and deliver its reply.

        Args:
            request: The request to send.

        Returns:
            The parsed response, or None for a notification with no reply.

        Raises:
            ConfigError: If request is not a ClientRequest.
            ProtocolError: If the reply is missing, an array, or answers another id.
            HttpError, TransportError, EncodingError, DecodingError: From the round trip.
        """
        if not isinstance(request, ClientRequest):
            raise ConfigError(f"Object not a ClientRequest: {request!r}")

        with self._lock:
            logger.debug("RPC call: method=%s, id=%s", request.method, request.id)
            data = self._send(request.get_structure())

            if data is None:
                if request.is_notification:
                    return None
                raise ProtocolError(
                    f"Empty reply for request {request.method!r} (id={request.id})"
                )

            if isinstance(data, list):
                raise ProtocolError("Single request answered with a batch reply")

            response = ServerResponse.from_dict(data)
            if response.id is not None and response.id != request.id:
                raise ProtocolError(
                    f"Reply id {response.id!r} does not match request id {request.id!r}"
                )

            request.complete(response)
            return response

    def batch_request(
        self, requests: Iterable[ClientRequest] | None = None
    ) -> list[ServerResponse]:
        """Send several requests in one round trip.

        With no argument the scheduled queue is flushed. The queue is cleared
        afterwards in every case, including when an explicit list is given,
        when nothing is sent, and when the round trip fails.

        Replies are matched to requests by id; replies with an unknown id are
        ignored. A per-item error reaches only that item's callbacks. If a
        callback raises, the remaining items are still completed and the first
        such exception is raised afterwards.

        Args:
            requests: Requests to send. If None, the scheduled queue is used.

        Returns:
            The parsed responses in reply order.

        Raises:
            ConfigError: If an item is not a ClientRequest.
            ProtocolError: If the reply shape contradicts the batch.
            ResponseError: If the server rejected the whole batch with an
                unattributable error reply.
            HttpError, TransportError, EncodingError, DecodingError: From the round trip.
        """
        with self._lock:
            batch = list(self._queue) if requests is None else list(requests)
            try:
                return self._dispatch_batch(batch)
            finally:
                self._queue.clear()

    def schedule(self, request: ClientRequest) -> ClientRequest:
        """Queue a request for the next batch_request() call.

        Returns:
            The same request, usable as a handle once the batch is flushed.
        """
        if not isinstance(request, ClientRequest):
            raise ConfigError(f"Object not a ClientRequest: {request!r}")
        with self._lock:
            self._queue.append(request)
            logger.debug("Scheduled %s (%d pending)", request.method, len(self._queue))
        return request

    def call(self, method: str, params: Params | tuple[Any, ...] | None = None) -> Any:
        """Call a method and return its result.

        Raises:
            ResponseError: The classified server error, if the call failed.
        """
        request = ClientRequest(method, params)
        self.request(request)
        return request.result()

    def notify(
        self,
        method: str,
        params: Params | tuple[Any, ...] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Send a notification. Any error reply goes to on_error only."""
        self.request(ClientRequest(method, params, is_notification=True, on_error=on_error))

    # === Internals ===

    def _dispatch_batch(self, batch: list[ClientRequest]) -> list[ServerResponse]:
        mappings: dict[str, ClientRequest] = {}
        structures: list[dict[str, Any]] = []

        for request in batch:
            if not isinstance(request, ClientRequest):
                raise ConfigError(f"Object not a ClientRequest: {request!r}")
            # Notifications carry no id on the wire, so nothing can answer them
            if not request.is_notification:
                mappings[request.id] = request
            structures.append(request.get_structure())

        if not structures:
            logger.debug("Empty batch, nothing to send")
            return []

        logger.debug("RPC batch: %d requests, %d expecting replies", len(batch), len(mappings))
        data = self._send(structures)
        all_notifications = not mappings

        if data is None:
            if all_notifications:
                return []
            raise ProtocolError(f"Empty reply for batch expecting {len(mappings)} responses")

        if isinstance(data, dict):
            response = ServerResponse.from_dict(data)
            if response.error is not None and response.id is None:
                logger.warning(
                    "Server rejected batch: %d %s", response.error.code, response.error.message
                )
                raise response.error.to_exception()
            raise ProtocolError("Batch request answered with a single reply")

        if not isinstance(data, list):
            raise ProtocolError(f"Batch reply must be an array, got: {type(data).__name__}")

        if all_notifications and data:
            raise ProtocolError("Non-empty reply for a batch of notifications")

        if not data and not all_notifications:
            raise ProtocolError(f"Empty reply for batch expecting {len(mappings)} responses")

        # Parse everything before delivering anything: a malformed element
        # aborts the batch without partial completion.
        responses = [ServerResponse.from_dict(item) for item in data]

        # Every matched request is completed even if a callback raises; the
        # first callback failure is re-raised afterwards.
        first_failure: Exception | None = None
        for response in responses:
            target = mappings.get(response.id) if isinstance(response.id, str) else None
            if target is None:
                logger.warning("Ignoring batch reply with unknown id %r", response.id)
                continue
            if target.done:
                logger.warning("Ignoring duplicate batch reply for id %r", response.id)
                continue
            try:
                target.complete(response)
            except Exception as e:
                logger.debug("Callback for %s raised %r", target.method, e)
                if first_failure is None:
                    first_failure = e

        if first_failure is not None:
            raise first_failure

        return responses

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": CONTENT_TYPE,
            "Content-Type": CONTENT_TYPE,
            "User-Agent": self._config.user_agent,
        }
        if self._config.application:
            headers["X-Application"] = self._config.application

        if self._use_cookies and len(self._cookie_jar) > 0:
            cookie_header = self._cookie_jar.build_cookie_header()
            if cookie_header:
                headers["Cookie"] = cookie_header

        # User headers override defaults
        headers.update(self._config.extra_headers)
        return headers

    def _send(self, payload: Any) -> Any:
        """Encode, POST and decode one payload.

        Returns:
            The decoded reply, or None for an empty body.
        """
        body = self._codec.encode(payload)
        if self._config.on_send is not None:
            self._config.on_send(body)

        reply = self._transport.send(
            self._endpoint,
            "POST",
            self._build_headers(),
            body,
            self._config.timeout,
        )

        if reply.status_code not in ACCEPTED_STATUS_CODES:
            logger.warning("Unexpected HTTP status %d from %s", reply.status_code, self._endpoint)
            raise HttpError(reply.reason, reply.status_code)

        if self._use_cookies:
            self._cookie_jar.update(reply.headers)

        if self._config.on_receive is not None:
            self._config.on_receive(reply.body)

        return self._codec.decode(reply.body)
