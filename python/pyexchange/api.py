"""Generic request entry point and the GET/POST/PUT/DELETE convenience calls."""

from collections.abc import Mapping
from typing import Any, overload

from pyexchange.exceptions import ArgumentError
from pyexchange.exchange import Exchange
from pyexchange.options import prepare_options, resolve_arguments
from pyexchange.types import BodyData, ErrorCallback, FormData, SuccessCallback


def request(options: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Exchange:
    """Make a generic request and block until it is done.

    Options can be given as a mapping, as keyword arguments, or both (keywords win):

    - `url`: the request URL
    - `method`: request method such as GET or POST
    - `data`: request data as string or mapping, or for POST and PUT also bytes, a binary or text stream or
      an iterable of bytes
    - `headers`: request headers
    - `username`, `password`: credentials for HTTP Basic authentication
    - `content_type`: the content type of the request body
    - `follow_redirects`: whether redirects are followed, True by default
    - `binary`: if True the content is passed to the callbacks as bytes, else as decoded text
    - `transport`: httpx transport to use instead of the default network transport

    Callbacks:

    - `before_send(exchange)`: called before the request is sent
    - `success(content, status, content_type, exchange)`: called when the request succeeded
    - `error(message, status, exchange)`: called when the request failed, status is 0 if no response was
      received
    - `complete(content, status, content_type, exchange)`: called after success or error
    - `part(chunk, status, content_type, exchange)`: called for each chunk of the response body

    Returns:
        The completed exchange.

    Raises:
        ArgumentError: If the options are invalid. Other failures are passed to the error callback.
    """
    return Exchange(prepare_options(options, **kwargs)).send()


@overload
def get(url: str, /, **options: Any) -> Exchange: ...
@overload
def get(url: str, success: SuccessCallback, error: ErrorCallback | None = None, /, **options: Any) -> Exchange: ...
@overload
def get(
    url: str,
    data: str | FormData | None,
    success: SuccessCallback | None = None,
    error: ErrorCallback | None = None,
    /,
    **options: Any,
) -> Exchange: ...
def get(*args: Any, **options: Any) -> Exchange:
    """Execute a GET request. Data is appended to the URL as query parameters."""
    return _call("GET", args, options)


@overload
def post(url: str, /, **options: Any) -> Exchange: ...
@overload
def post(url: str, success: SuccessCallback, error: ErrorCallback | None = None, /, **options: Any) -> Exchange: ...
@overload
def post(
    url: str,
    data: BodyData | None,
    success: SuccessCallback | None = None,
    error: ErrorCallback | None = None,
    /,
    **options: Any,
) -> Exchange: ...
def post(*args: Any, **options: Any) -> Exchange:
    """Execute a POST request. Data is sent as the request body."""
    return _call("POST", args, options)


@overload
def put(url: str, /, **options: Any) -> Exchange: ...
@overload
def put(url: str, success: SuccessCallback, error: ErrorCallback | None = None, /, **options: Any) -> Exchange: ...
@overload
def put(
    url: str,
    data: BodyData | None,
    success: SuccessCallback | None = None,
    error: ErrorCallback | None = None,
    /,
    **options: Any,
) -> Exchange: ...
def put(*args: Any, **options: Any) -> Exchange:
    """Execute a PUT request. Data is sent as the request body."""
    return _call("PUT", args, options)


@overload
def delete(url: str, /, **options: Any) -> Exchange: ...
@overload
def delete(url: str, success: SuccessCallback, error: ErrorCallback | None = None, /, **options: Any) -> Exchange: ...
@overload
def delete(
    url: str,
    data: str | FormData | None,
    success: SuccessCallback | None = None,
    error: ErrorCallback | None = None,
    /,
    **options: Any,
) -> Exchange: ...
def delete(*args: Any, **options: Any) -> Exchange:
    """Execute a DELETE request. Data is appended to the URL as query parameters."""
    return _call("DELETE", args, options)


def _call(method: str, args: tuple[Any, ...], options: dict[str, Any]) -> Exchange:
    if "method" in options:
        raise ArgumentError(f"method is fixed to {method} for this call")
    resolved = resolve_arguments(args)
    if overlap := resolved.keys() & options.keys():
        raise ArgumentError(f"{', '.join(sorted(overlap))} given both positionally and as keyword")
    return request({**resolved, **options, "method": method})
