"""Unit tests for HttpxTransport and the JSON codec."""

import httpx
import pytest

from rpcwire.core.errors import (
    DecodingError,
    EncodingError,
    RequestTimeoutError,
    TransportError,
)
from rpcwire.rpc.codec import JsonCodec
from rpcwire.rpc.transport import HttpxTransport, TransportResponse


def _transport(handler):
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:
    """Tests for HttpxTransport.send()."""

    def test_send_returns_raw_reply(self):
        """Status, reason, headers and body are passed through unchanged."""
        received = []

        def handler(request):
            received.append(request)
            return httpx.Response(
                404,
                headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")],
                content=b'{"x":1}',
            )

        reply = _transport(handler).send(
            "http://example.com/rpc", "POST", {"X-Test": "yes"}, b"[]", 5.0
        )

        assert reply.status_code == 404
        assert reply.reason == "Not Found"
        assert reply.body == b'{"x":1}'
        assert reply.get_all("set-cookie") == ["a=1", "b=2"]
        assert received[0].headers["x-test"] == "yes"
        assert received[0].content == b"[]"

    def test_timeout_maps_to_request_timeout_error(self):
        """httpx timeouts become RequestTimeoutError."""

        def handler(request):
            raise httpx.ConnectTimeout("slow")

        with pytest.raises(RequestTimeoutError):
            _transport(handler).send("http://example.com/", "POST", {}, b"{}", 1.0)

    def test_other_failures_map_to_transport_error(self):
        """Other httpx errors become TransportError."""

        def handler(request):
            raise httpx.RemoteProtocolError("bad framing")

        with pytest.raises(TransportError) as exc_info:
            _transport(handler).send("http://example.com/", "POST", {}, b"{}", 1.0)

        assert not isinstance(exc_info.value, RequestTimeoutError)

    def test_close_keeps_injected_client_open(self):
        """A caller-supplied httpx.Client is not closed by the transport."""
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        transport = HttpxTransport(client=client)

        transport.close()

        assert not client.is_closed

    def test_close_owned_client(self):
        """The lazily created client is closed by close()."""
        transport = HttpxTransport()
        assert transport.is_closed

        transport._get_client()
        assert not transport.is_closed

        transport.close()
        assert transport.is_closed


class TestTransportResponse:
    """Tests for TransportResponse helpers."""

    def test_get_all_is_case_insensitive(self):
        """Header lookup ignores case and keeps order."""
        reply = TransportResponse(200, headers=[("A", "1"), ("b", "2"), ("a", "3")])
        assert reply.get_all("a") == ["1", "3"]
        assert reply.get_all("missing") == []


class TestJsonCodec:
    """Tests for JsonCodec."""

    def test_encode_is_compact(self):
        """Encoding produces compact JSON bytes."""
        assert JsonCodec().encode({"a": [1, "x y"]}) == b'{"a":[1,"x y"]}'

    def test_encode_rejects_unserializable(self):
        """Non-JSON values raise EncodingError."""
        with pytest.raises(EncodingError):
            JsonCodec().encode({"a": object()})

    def test_encode_rejects_nan(self):
        """NaN is not valid JSON."""
        with pytest.raises(EncodingError):
            JsonCodec().encode([float("nan")])

    @pytest.mark.parametrize("body", [b"", b"   ", b"\r\n"])
    def test_empty_body_decodes_to_none(self, body):
        """Empty or whitespace-only bodies mean 'no reply'."""
        assert JsonCodec().decode(body) is None

    def test_decode_rejects_malformed(self):
        """Malformed JSON raises DecodingError."""
        with pytest.raises(DecodingError):
            JsonCodec().decode(b'{"jsonrpc": ')

    def test_decode_rejects_invalid_utf8(self):
        """Bytes that are not UTF-8 raise DecodingError."""
        with pytest.raises(DecodingError):
            JsonCodec().decode(b'"\xff\xfe"')
