"""HTTP encoding helpers."""

from collections.abc import Mapping
from email.message import Message
from email.utils import collapse_rfc2231_value
from typing import Any
from urllib.parse import urlencode


def get_mime_parameter(content_type: str | None, name: str) -> str | None:
    """Return a parameter of a MIME type string, e.g. the charset of "text/html; charset=utf-8"."""
    if not content_type:
        return None
    message = Message()
    message["content-type"] = content_type
    value = message.get_param(name, header="content-type")
    if value is None:
        return None
    return collapse_rfc2231_value(value) or None


def encode_query(data: str | Mapping[str, Any] | None) -> str:
    """Form-url-encode mapping data. Strings are assumed to be encoded already."""
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return urlencode(list(_iter_pairs(data)))


def append_query(url: str, query: str) -> str:
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def _iter_pairs(data: Mapping[str, Any]):
    for key, value in data.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                yield key, _to_str(item)
        else:
            yield key, _to_str(value)


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
