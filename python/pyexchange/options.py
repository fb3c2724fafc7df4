"""Request options normalization and convenience call argument resolution."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from pyexchange.config import BODY_METHODS, DEFAULT_CONTENT_TYPE
from pyexchange.exceptions import ArgumentError
from pyexchange.types import (
    BeforeSendCallback,
    BodyData,
    CompleteCallback,
    ErrorCallback,
    PartCallback,
    SuccessCallback,
)


def noop(*args: Any) -> None:
    return None


@dataclass
class RequestOptions:
    """Normalized configuration of a single request. Create with prepare_options()."""

    url: str
    method: str = "GET"
    data: BodyData | None = field(default_factory=dict)
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    username: str | None = None
    password: str | None = None
    content_type: str = DEFAULT_CONTENT_TYPE
    follow_redirects: bool = True
    binary: bool = False
    success: SuccessCallback = noop
    error: ErrorCallback = noop
    complete: CompleteCallback = noop
    before_send: BeforeSendCallback = noop
    part: PartCallback = noop
    transport: httpx.BaseTransport | None = None

    @property
    def has_body(self) -> bool:
        return self.method in BODY_METHODS


_CALLBACKS = ("success", "error", "complete", "before_send", "part")
_ALIASES = {
    "contentType": "content_type",
    "followRedirects": "follow_redirects",
    "beforeSend": "before_send",
}
_KNOWN_KEYS = frozenset(RequestOptions.__dataclass_fields__)


def prepare_options(options: Mapping[str, Any] | None = None, /, **kwargs: Any) -> RequestOptions:
    """Merge caller options over the defaults.

    Keyword arguments take precedence over the options mapping. The content type is taken from the
    content_type option, then from the Content-Type header, and defaults to form encoded utf-8.

    Raises:
        ArgumentError: On unknown keys, missing url, bad callbacks or data the method can not carry.
    """
    merged: dict[str, Any] = {}
    for source in (options or {}, kwargs):
        for key, value in source.items():
            key = _ALIASES.get(key, key)
            if key not in _KNOWN_KEYS:
                raise ArgumentError(f"unknown request option '{key}'")
            merged[key] = value

    url = merged.get("url")
    if not isinstance(url, str) or not url:
        raise ArgumentError("request option 'url' must be a non-empty string")

    for name in _CALLBACKS:
        callback = merged.get(name)
        if callback is None:
            merged[name] = noop
        elif not callable(callback):
            raise ArgumentError(f"request option '{name}' must be callable")

    merged["method"] = str(merged.get("method") or "GET").upper()
    if merged.get("data") is None:
        merged["data"] = {}
    try:
        merged["headers"] = httpx.Headers(merged.get("headers") or {})
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"invalid request option 'headers': {exc}") from exc
    merged["content_type"] = (
        merged.get("content_type") or merged["headers"].get("Content-Type") or DEFAULT_CONTENT_TYPE
    )
    merged["follow_redirects"] = bool(merged.get("follow_redirects", True))
    merged["binary"] = bool(merged.get("binary", False))

    opts = RequestOptions(**merged)
    _check_data(opts)
    return opts


def _check_data(opts: RequestOptions) -> None:
    data = opts.data
    if data is None or isinstance(data, (str, Mapping)):
        return
    if not opts.has_body:
        raise ArgumentError(f"{opts.method} data must be a string or a mapping, got {type(data).__name__}")
    if isinstance(data, (bytes, bytearray, memoryview)) or hasattr(data, "read") or isinstance(data, Iterable):
        return
    raise ArgumentError(f"unsupported request data type {type(data).__name__}")


def resolve_arguments(args: Sequence[Any]) -> dict[str, Any]:
    """Resolve the positional arguments of a convenience call into url, data, success and error.

    Accepted shapes are (url), (url, success), (url, data), (url, success, error), (url, data, success)
    and (url, data, success, error).
    """
    if not args or not isinstance(args[0], str):
        raise ArgumentError("first argument (url) must be string")

    url, *rest = args
    if len(rest) == 0:
        return {"url": url}

    if len(rest) == 1:
        if _is_function(rest[0]):
            return {"url": url, "success": rest[0]}
        return {"url": url, "data": rest[0]}

    if len(rest) == 2:
        first, second = rest
        if _is_function(first) and _is_function(second):
            return {"url": url, "success": first, "error": second}
        if not _is_function(first) and _is_function(second):
            return {"url": url, "data": first, "success": second}
        raise ArgumentError("three argument form must be (url, success, error) or (url, data, success)")

    if len(rest) == 3:
        data, success, error = rest
        return {"url": url, "data": data, "success": success, "error": error}

    raise ArgumentError("unknown arguments")


def _is_function(value: Any) -> bool:
    # Classes are callable but never callbacks
    return callable(value) and not isinstance(value, type)
