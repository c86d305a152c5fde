"""Session cookie storage for stateful JSON-RPC endpoints.

Cookies live in memory for the lifetime of their Client and are never
persisted. Only name/value pairs are sent back; path and domain attributes
are recorded but not used for matching, since a Client talks to a single
endpoint.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime

logger = logging.getLogger(__name__)

SET_COOKIE = "set-cookie"


@dataclass
class Cookie:
    """One stored cookie.

    Attributes:
        name: Cookie key.
        value: Cookie value, sent verbatim.
        attributes: Remaining Set-Cookie fields keyed by lowercased name.
            Flags without a value (Secure, HttpOnly) map to True.
        expires: Absolute expiry instant (UTC), or None for a session cookie.
    """

    name: str
    value: str
    attributes: dict[str, str | bool] = field(default_factory=dict)
    expires: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires is not None and self.expires <= now


def _parse_expires(value: str) -> datetime | None:
    """Parse an HTTP date. Unparseable dates yield None."""
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        logger.debug("Ignoring unparseable cookie expiry: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_set_cookie(line: str, now: datetime | None = None) -> Cookie | None:
    """Parse the value of one Set-Cookie header.

    The first ``;`` field is the cookie itself; the rest are attributes.
    Max-Age takes precedence over Expires when both are present.

    Args:
        line: Header value, e.g. ``"sid=abc; Path=/; Expires=..."``.
        now: Receipt time used to resolve Max-Age. Defaults to the current time.

    Returns:
        The parsed Cookie, or None if the line has no ``name=value`` pair.
    """
    parts = [part.strip() for part in line.split(";")]
    first = parts[0]
    if "=" not in first:
        logger.debug("Ignoring Set-Cookie without name=value: %r", line)
        return None

    name, _, value = first.partition("=")
    name = name.strip()
    if not name:
        return None

    attributes: dict[str, str | bool] = {}
    for part in parts[1:]:
        if not part:
            continue
        if "=" in part:
            key, _, attr_value = part.partition("=")
            attributes[key.strip().lower()] = attr_value.strip()
        else:
            attributes[part.lower()] = True

    expires: datetime | None = None
    raw_expires = attributes.get("expires")
    if isinstance(raw_expires, str):
        expires = _parse_expires(raw_expires)

    raw_max_age = attributes.get("max-age")
    if isinstance(raw_max_age, str):
        try:
            max_age = int(raw_max_age)
        except ValueError:
            logger.debug("Ignoring non-integer Max-Age: %r", raw_max_age)
        else:
            received = now or datetime.now(UTC)
            expires = received + timedelta(seconds=max_age)

    return Cookie(name=name, value=value.strip(), attributes=attributes, expires=expires)


class CookieJar:
    """In-memory cookie store keyed by cookie name.

    A later Set-Cookie for the same name replaces the earlier one. Expired
    cookies are removed lazily, when the Cookie header is next built.
    """

    def __init__(self) -> None:
        self._cookies: dict[str, Cookie] = {}

    def __len__(self) -> int:
        return len(self._cookies)

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def __iter__(self) -> Iterator[Cookie]:
        return iter(list(self._cookies.values()))

    def get(self, name: str) -> Cookie | None:
        return self._cookies.get(name)

    def set(self, cookie: Cookie) -> None:
        self._cookies[cookie.name] = cookie

    def clear(self) -> None:
        self._cookies.clear()

    def update(self, headers: Iterable[tuple[str, str]], now: datetime | None = None) -> int:
        """Store every cookie from the Set-Cookie lines of a response.

        Args:
            headers: Response header lines as (name, value) pairs.
            now: Receipt time used to resolve Max-Age.

        Returns:
            Number of cookies stored.
        """
        stored = 0
        for name, value in headers:
            if name.lower() != SET_COOKIE:
                continue
            cookie = parse_set_cookie(value, now=now)
            if cookie is None:
                continue
            self._cookies[cookie.name] = cookie
            stored += 1
            logger.debug("Stored cookie %s (expires=%s)", cookie.name, cookie.expires)
        return stored

    def build_cookie_header(self, now: datetime | None = None) -> str:
        """Build the Cookie header value, pruning expired cookies first.

        Args:
            now: Reference time. Defaults to the current time.

        Returns:
            ``"k1=v1; k2=v2"``, or an empty string when no cookie remains.
        """
        now = now or datetime.now(UTC)

        expired = [name for name, cookie in self._cookies.items() if cookie.is_expired(now)]
        for name in expired:
            del self._cookies[name]
            logger.debug("Removed expired cookie %s", name)

        return "; ".join(f"{cookie.name}={cookie.value}" for cookie in self._cookies.values())
