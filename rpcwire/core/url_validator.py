"""Endpoint validation for the JSON-RPC client.

Only the shape of the URL is checked here. No DNS resolution happens at
construction time; connection problems surface later as TransportError.
"""

from urllib.parse import urlparse

from rpcwire.core.errors import ConfigError

ALLOWED_SCHEMES = ("http", "https")


def validate_endpoint(url: str) -> str:
    """Validate that a URL is usable as a JSON-RPC endpoint.

    Args:
        url: The endpoint URL.

    Returns:
        The validated URL, unchanged.

    Raises:
        ConfigError: If the URL is empty, unparseable, not http(s), or has no host.
    """
    if not isinstance(url, str) or not url.strip():
        raise ConfigError("Malformed endpoint given: empty URL")

    try:
        parsed = urlparse(url)
        # Accessing .port validates the port component
        parsed.port
    except ValueError as e:
        raise ConfigError(f"Malformed endpoint given: {url!r} ({e})") from e

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ConfigError(
            f"Malformed endpoint given: {url!r} (scheme {parsed.scheme!r}, "
            "must be http or https)"
        )

    if not parsed.hostname:
        raise ConfigError(f"Malformed endpoint given: {url!r} (no hostname)")

    return url
