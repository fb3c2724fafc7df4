"""Request body adapter."""

import io
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pyexchange.config import READ_CHUNK_SIZE
from pyexchange.exceptions import StreamError
from pyexchange.http import encode_query

logger = logging.getLogger(__name__)


class RequestBody:
    """Turns the supported request data variants into bytes for the connection.

    Bytes-like data and binary streams are sent verbatim, binary streams in chunks. Text streams are read
    fully and closed, then encoded with the charset like strings and form-url-encoded mappings. Binary
    streams are closed once the body is released.
    """

    def __init__(self, data: Any, charset: str) -> None:
        self._charset = charset
        self._source: Any = None
        self._released = False

        if data is None:
            self.content: bytes | Iterable[bytes] = b""
        elif isinstance(data, (bytes, bytearray, memoryview)):
            self.content = bytes(data)
        elif isinstance(data, str):
            self.content = self._encode(data)
        elif isinstance(data, Mapping):
            self.content = self._encode(encode_query(data))
        elif isinstance(data, io.TextIOBase):
            self._source = data
            self.content = self._encode(self._read_text(data))
        elif hasattr(data, "read"):
            self._source = data
            self.content = self._iter_stream(data)
        elif isinstance(data, Iterable):
            self._source = data
            self.content = self._iter_chunks(data)
        else:
            raise StreamError(f"unsupported request data type {type(data).__name__}")

    def __bool__(self) -> bool:
        return not isinstance(self.content, bytes) or len(self.content) > 0

    def _encode(self, text: str) -> bytes:
        try:
            return text.encode(self._charset)
        except (LookupError, UnicodeError) as exc:
            raise StreamError(f"can not encode request body as {self._charset}: {exc}") from exc

    def _read_text(self, stream: io.TextIOBase) -> str:
        try:
            return stream.read()
        except (OSError, ValueError) as exc:
            raise StreamError(f"failed to read request body: {exc}") from exc
        finally:
            stream.close()

    def _iter_stream(self, stream: Any) -> Iterator[bytes]:
        while True:
            try:
                chunk = stream.read(READ_CHUNK_SIZE)
            except (OSError, ValueError) as exc:
                raise StreamError(f"failed to read request body: {exc}") from exc
            if not chunk:
                return
            yield self._encode(chunk) if isinstance(chunk, str) else bytes(chunk)

    def _iter_chunks(self, chunks: Iterable[Any]) -> Iterator[bytes]:
        for chunk in chunks:
            if chunk:
                yield self._encode(chunk) if isinstance(chunk, str) else bytes(chunk)

    def close(self) -> None:
        """Release the data source. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        if isinstance(self.content, Iterator):
            self.content.close()  # type: ignore[attr-defined]
        if (close := getattr(self._source, "close", None)) is not None:
            logger.debug("Closing request body source %r", self._source)
            close()
