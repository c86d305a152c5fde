"""Client configuration schema and loading."""

from rpcwire.config.loader import load_config
from rpcwire.config.schema import ClientConfig

__all__ = ["ClientConfig", "load_config"]
