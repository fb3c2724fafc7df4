"""Set-Cookie header parsing."""

from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime


@dataclass(frozen=True)
class Cookie:
    """Read-only view of a cookie set by the server."""

    name: str
    value: str
    domain: str | None = None
    path: str | None = None
    max_age: int = -1
    """Max age of the cookie in seconds, -1 if the cookie expires with the session."""
    is_secure: bool = False
    version: int = 0


def parse_set_cookie(header: str, *, now: datetime | None = None) -> Cookie | None:
    """Parse a single Set-Cookie header value. Returns None when the header has no cookie name."""
    name_value, *attributes = header.split(";")
    name, sep, value = name_value.partition("=")
    name = name.strip()
    if not sep or not name:
        return None

    attrs: dict[str, str | None] = {}
    for attr in attributes:
        key, sep, attr_value = attr.partition("=")
        key = key.strip().lower()
        if key:
            attrs[key] = _unquote(attr_value.strip()) if sep else None

    return Cookie(
        name=name,
        value=_unquote(value.strip()),
        domain=attrs["domain"].lower() if attrs.get("domain") else None,
        path=attrs.get("path") or None,
        max_age=_max_age(attrs, now),
        is_secure="secure" in attrs,
        version=_version(attrs),
    )


def extract_cookies(headers: list[str]) -> dict[str, Cookie]:
    """Build a name to cookie mapping. A later header wins over an earlier one with the same name."""
    cookies: dict[str, Cookie] = {}
    for header in headers:
        if (cookie := parse_set_cookie(header)) is not None:
            cookies[cookie.name] = cookie
    return cookies


def _max_age(attrs: dict[str, str | None], now: datetime | None) -> int:
    if max_age := attrs.get("max-age"):
        try:
            return int(max_age)
        except ValueError:
            pass
    if expires := attrs.get("expires"):
        try:
            expires_at = parsedate_to_datetime(expires)
        except (TypeError, ValueError):
            return -1
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        delta = expires_at - (now or datetime.now(UTC))
        return max(int(delta.total_seconds()), 0)
    return -1


def _version(attrs: dict[str, str | None]) -> int:
    if version := attrs.get("version"):
        try:
            return int(version)
        except ValueError:
            pass
    # Max-Age only exists in RFC 2109 and later cookies
    return 1 if "max-age" in attrs else 0


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value
