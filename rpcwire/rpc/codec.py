"""Codec contract and the default JSON codec."""

import json
from abc import ABC, abstractmethod
from typing import Any

from rpcwire.core.errors import DecodingError, EncodingError


class Codec(ABC):
    """Turns wire values into bytes and back."""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Serialize a value.

        Raises:
            EncodingError: If the value cannot be serialized.
        """

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """Deserialize a body. An empty body decodes to None.

        Raises:
            DecodingError: If the body is malformed.
        """


class JsonCodec(Codec):
    """Compact UTF-8 JSON, as produced and accepted by JSON-RPC servers."""

    def encode(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Could not encode data to JSON: {e}") from e
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        if not data or not data.strip():
            return None
        try:
            return json.loads(data)
        except UnicodeDecodeError as e:
            raise DecodingError(f"Server data is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise DecodingError(f"Could not decode server data: {e}") from e
