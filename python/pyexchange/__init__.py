"""pyexchange - Synchronous callback based HTTP client.

Built on [httpx](https://www.python-httpx.org/) as the transport.

Features:
- Generic request() entry point and get/post/put/delete convenience calls
- success, error and complete callbacks, called exactly once per request
- Streaming request bodies from bytes, binary and text streams and iterables
- Form encoded query strings and request bodies
- gzip and deflate response decompression
- Set-Cookie parsing
- HTTP Basic authentication, also from URL user info
"""

from pyexchange.api import delete, get, post, put, request
from pyexchange.config import VERSION as __version__
from pyexchange.cookie import Cookie
from pyexchange.exchange import Exchange, ExchangeState
from pyexchange.options import RequestOptions

__all__ = [
    "Cookie",
    "Exchange",
    "ExchangeState",
    "RequestOptions",
    "__version__",
    "delete",
    "get",
    "post",
    "put",
    "request",
]
