"""Connection primitive on top of httpx."""

import logging
from collections.abc import Iterable, Iterator
from urllib.parse import unquote, urlsplit, urlunsplit

import httpx

from pyexchange.exceptions import ConnectionError, StreamError

logger = logging.getLogger(__name__)


class Connection:
    """A single use connection to a URL.

    Configure the request, optionally attach a body, then connect() to send the request and receive the
    response head. The body is read with iter_raw(). disconnect() releases the response and the client.
    """

    def __init__(self, url: str, *, transport: httpx.BaseTransport | None = None) -> None:
        parts = urlsplit(url)
        self.username = unquote(parts.username) if parts.username is not None else None
        self.password = unquote(parts.password) if parts.password is not None else None
        # User info is resolved into an Authorization header, never forwarded as is
        self.url = urlunsplit(parts._replace(netloc=parts.netloc.rpartition("@")[2]))

        self.method = "GET"
        self.follow_redirects = True
        self.allow_user_interaction = False
        self.do_output = False
        self.request_headers = httpx.Headers()

        self._transport = transport
        self._body: bytes | Iterable[bytes] | None = None
        self._client: httpx.Client | None = None
        self._response: httpx.Response | None = None
        self._closed = False
        self._body_decoded = False

    def set_request_property(self, name: str, value: str) -> None:
        self.request_headers[name] = value

    def set_body(self, body: bytes | Iterable[bytes]) -> None:
        if not self.do_output:
            raise StreamError("connection output is not enabled")
        self._body = body

    @property
    def response(self) -> httpx.Response | None:
        return self._response

    def connect(self) -> httpx.Response:
        """Send the request and receive the response head. The body is left unread."""
        if self._closed:
            raise ConnectionError("connection is closed")
        if self._response is not None:
            return self._response

        self._client = httpx.Client(
            transport=self._transport,
            follow_redirects=self.follow_redirects,
            trust_env=self.allow_user_interaction,
        )
        try:
            request = self._client.build_request(
                self.method,
                self.url,
                headers=self.request_headers,
                content=self._body if self.do_output else None,
            )
            logger.debug("Sending %s %s", self.method, request.url)
            self._response = self._client.send(request, stream=True)
            # Transports may return a response whose body is already read and content decoded
            self._body_decoded = self._response.is_stream_consumed
        except (httpx.ReadError, httpx.WriteError, httpx.StreamError) as exc:
            raise StreamError(str(exc) or type(exc).__name__) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ConnectionError(str(exc) or type(exc).__name__) from exc

        logger.debug("Received %s %s for %s", self._response.status_code, self._response.reason_phrase, self.url)
        return self._response

    @property
    def status(self) -> int:
        return self._response.status_code if self._response is not None else 0

    @property
    def message(self) -> str:
        return self._response.reason_phrase if self._response is not None else ""

    def header_field(self, name: str) -> str | None:
        return self._response.headers.get(name) if self._response is not None else None

    def header_fields(self, name: str) -> list[str]:
        return self._response.headers.get_list(name) if self._response is not None else []

    @property
    def body_decoded(self) -> bool:
        """True when iter_raw() yields a body that the transport already content decoded."""
        return self._body_decoded

    def iter_raw(self) -> Iterator[bytes]:
        """Iterate the response body as sent by the server. See body_decoded for pre-read bodies."""
        if self._response is None:
            raise StreamError("no response received")
        try:
            if self._body_decoded:
                yield self._response.content
            else:
                yield from self._response.iter_raw()
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise StreamError(str(exc) or type(exc).__name__) from exc

    def disconnect(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._response is not None:
                self._response.close()
        finally:
            if self._client is not None:
                self._client.close()
        logger.debug("Disconnected from %s", self.url)
