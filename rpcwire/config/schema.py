"""Pydantic models for rpcwire client configuration."""

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "rpcwire/0.1.0"
DEFAULT_APPLICATION = "rpcwire"

# Headers the client always sets itself; callers may still override them
# through extra_headers.
_RESERVED_HEADERS = frozenset({"content-length", "host"})


class ClientConfig(BaseModel):
    """Per-client configuration.

    Every Client owns its own instance, so two clients in the same process
    can use different timeouts, headers and debug hooks.

    Example in config.json:
        {
            "timeout": 10,
            "use_cookies": false,
            "extra_headers": {"Authorization": "Bearer abc"}
        }
    """

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    """Seconds to wait for a reply before raising RequestTimeoutError."""

    use_cookies: bool = True
    """Capture Set-Cookie headers and send them back on later requests."""

    extra_headers: dict[str, str] = {}
    """Additional headers sent with every request (override the defaults)."""

    user_agent: str = DEFAULT_USER_AGENT
    """Value of the User-Agent header."""

    application: str | None = DEFAULT_APPLICATION
    """Value of the X-Application header. None omits the header."""

    verify_ssl: bool = True
    """Verify TLS certificates when talking to https endpoints."""

    on_send: Callable[[bytes], None] | None = Field(default=None, exclude=True)
    """Debug hook called with each raw outgoing body."""

    on_receive: Callable[[bytes], None] | None = Field(default=None, exclude=True)
    """Debug hook called with each raw incoming body."""

    @field_validator("extra_headers")
    @classmethod
    def reject_reserved_headers(cls, v: dict[str, str]) -> dict[str, str]:
        """Host and Content-Length are computed by the transport."""
        for name in v:
            if name.lower() in _RESERVED_HEADERS:
                raise ValueError(f"Header {name!r} cannot be set through extra_headers")
        return v
