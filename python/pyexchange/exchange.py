"""The Exchange: one full request/response cycle."""

import base64
import enum
import io
import logging
import zlib
from functools import cached_property
from typing import Self

from pyexchange.body import RequestBody
from pyexchange.config import ACCEPT_ENCODING, DEFAULT_CHARSET, READ_CHUNK_SIZE, USER_AGENT
from pyexchange.connection import Connection
from pyexchange.cookie import Cookie, extract_cookies
from pyexchange.exceptions import ConnectionError, ExchangeError, HttpStatusError, StreamError
from pyexchange.http import append_query, encode_query, get_mime_parameter
from pyexchange.options import RequestOptions
from pyexchange.streams import open_decoded_stream

logger = logging.getLogger(__name__)


class ExchangeState(enum.Enum):
    INITIALIZED = "initialized"
    CONNECTING = "connecting"
    SENDING = "sending"
    RECEIVING = "receiving"
    COMPLETED = "completed"
    CLOSED = "closed"


class Exchange:
    """A HTTP request and its response.

    send() performs the whole cycle: it connects, transmits the body, receives the response and calls
    exactly one of the success or error callbacks followed by the complete callback. The connection and
    the request body source are always released before send() returns, after which the exchange is done.
    Body content is read while the connection is open and kept in memory.
    """

    def __init__(self, options: RequestOptions) -> None:
        self._options = options
        self._state = ExchangeState.INITIALIZED
        self._connection: Connection | None = None
        self._body: RequestBody | None = None
        self._cookies: dict[str, Cookie] = {}
        self._error: ExchangeError | None = None

    @property
    def options(self) -> RequestOptions:
        return self._options

    @property
    def state(self) -> ExchangeState:
        return self._state

    @property
    def done(self) -> bool:
        """True once the exchange has completed and released its resources."""
        return self._state is ExchangeState.CLOSED

    @property
    def connection(self) -> Connection | None:
        return self._connection

    @property
    def error(self) -> ExchangeError | None:
        """The failure passed to the error callback, if any."""
        return self._error

    @property
    def url(self) -> str:
        """The final URL of the exchange, after following redirects."""
        if self._connection is None:
            return self._options.url
        if (response := self._connection.response) is not None:
            return str(response.url)
        return self._connection.url

    @property
    def status(self) -> int:
        """The response status code, 0 when no response was received."""
        return self._connection.status if self._connection is not None else 0

    @property
    def message(self) -> str:
        """The response reason phrase, e.g. "Not Found"."""
        return self._connection.message if self._connection is not None else ""

    @property
    def headers(self) -> dict[str, list[str]]:
        """Response headers, lower-cased name to all values in received order."""
        headers: dict[str, list[str]] = {}
        if self._connection is not None and (response := self._connection.response) is not None:
            for name, value in response.headers.multi_items():
                headers.setdefault(name, []).append(value)
        return headers

    @property
    def content_type(self) -> str | None:
        return self._header("Content-Type")

    @property
    def content_length(self) -> int:
        """The declared content length, -1 when unknown."""
        try:
            return int(self._header("Content-Length") or -1)
        except ValueError:
            return -1

    @property
    def encoding(self) -> str:
        """The charset of the response content type, utf-8 by default."""
        return get_mime_parameter(self.content_type, "charset") or DEFAULT_CHARSET

    @property
    def cookies(self) -> dict[str, Cookie]:
        """Cookies set by the server by name. The last Set-Cookie header for a name wins."""
        return dict(self._cookies)

    @property
    def content_stream(self) -> io.BufferedIOBase:
        """The response body as a binary stream, gzip and deflate encodings decoded. Can be read only once."""
        connection = self._connection
        if connection is None or connection.response is None:
            raise StreamError("no response received")
        content_encoding = None if connection.body_decoded else self._header("Content-Encoding")
        return open_decoded_stream(connection.iter_raw(), content_encoding)

    @cached_property
    def content_bytes(self) -> bytes:
        """The response body as bytes. Read once and cached."""
        buffer = bytearray()
        stream = self.content_stream
        try:
            while chunk := stream.read(READ_CHUNK_SIZE):
                buffer += chunk
                self._options.part(chunk, self.status, self.content_type, self)
        except ExchangeError:
            raise
        except (OSError, EOFError, zlib.error) as exc:
            raise StreamError(f"failed to read response body: {exc}") from exc
        finally:
            stream.close()
        return bytes(buffer)

    @cached_property
    def content(self) -> str:
        """The response body decoded with the response encoding. Read once and cached."""
        try:
            return self.content_bytes.decode(self.encoding, errors="replace")
        except LookupError as exc:
            raise StreamError(f"unknown response encoding {self.encoding!r}") from exc

    def send(self) -> Self:
        """Perform the exchange and dispatch the callbacks.

        Failures while performing the request are passed to the error callback, including exceptions
        raised by before_send and part. Exceptions raised by success, error and complete propagate once
        the complete callback has run and the resources are released.
        """
        if self._state is not ExchangeState.INITIALIZED:
            raise RuntimeError("Exchange was already sent")

        try:
            try:
                self._dispatch_outcome()
            finally:
                self._state = ExchangeState.COMPLETED
                self._dispatch_complete()
        finally:
            self._teardown()
        return self

    def _dispatch_outcome(self) -> None:
        try:
            content = self._perform()
        except Exception as exc:
            logger.debug("%s %s failed: %s", self._options.method, self._options.url, exc)
            self._error = error = _as_exchange_error(exc)
            self._options.error(error.message, self.status, self)
        else:
            self._options.success(content, self.status, self.content_type, self)

    def _dispatch_complete(self) -> None:
        self._options.complete(self._completion_content(), self.status, self.content_type, self)

    def _completion_content(self) -> bytes | str | None:
        # Only an error status leaves the response body unread
        if self.status == 0 or (self._error is not None and not isinstance(self._error, HttpStatusError)):
            return None
        try:
            return self._read_content()
        except ExchangeError as exc:
            logger.debug("Response content unavailable: %s", exc)
            return None

    def _read_content(self) -> bytes | str:
        return self.content_bytes if self._options.binary else self.content

    def _perform(self) -> bytes | str:
        opts = self._options
        self._state = ExchangeState.CONNECTING

        url = opts.url
        if not opts.has_body:
            url = append_query(url, encode_query(opts.data))  # type: ignore[arg-type]

        try:
            self._connection = connection = Connection(url, transport=opts.transport)
        except ValueError as exc:
            raise ConnectionError(f"invalid url {url!r}: {exc}") from exc

        connection.allow_user_interaction = False
        connection.follow_redirects = opts.follow_redirects
        connection.method = opts.method
        connection.set_request_property("User-Agent", USER_AGENT)
        connection.set_request_property("Accept-Encoding", ACCEPT_ENCODING)

        username = opts.username or connection.username
        password = opts.password or connection.password
        if username is not None and password is not None:
            credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
            connection.set_request_property("Authorization", f"Basic {credentials}")

        for name, value in opts.headers.items():
            connection.set_request_property(name, value)

        opts.before_send(self)

        if opts.has_body:
            self._state = ExchangeState.SENDING
            connection.do_output = True
            connection.set_request_property("Content-Type", opts.content_type)
            charset = get_mime_parameter(opts.content_type, "charset") or DEFAULT_CHARSET
            self._body = RequestBody(opts.data, charset)
            if self._body:
                connection.set_body(self._body.content)

        self._state = ExchangeState.RECEIVING
        connection.connect()
        self._cookies = extract_cookies(connection.header_fields("Set-Cookie"))

        if self.status > 300:
            raise HttpStatusError(self.message, details={"status": self.status})

        return self._read_content()

    def _teardown(self) -> None:
        try:
            if self._body is not None:
                self._body.close()
        finally:
            try:
                if self._connection is not None:
                    self._connection.disconnect()
            finally:
                self._state = ExchangeState.CLOSED

    def _header(self, name: str) -> str | None:
        return self._connection.header_field(name) if self._connection is not None else None

    def __repr__(self) -> str:
        status = f" {self.status} {self.message}" if self.status else ""
        return f"<Exchange [{self._options.method} {self.url}{status}] {self._state.value}>"


def _as_exchange_error(exc: Exception) -> ExchangeError:
    if isinstance(exc, ExchangeError):
        return exc
    error = ExchangeError(str(exc) or type(exc).__name__, details={"causes": [repr(exc)]})
    error.__cause__ = exc
    return error
