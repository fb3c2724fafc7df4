"""Readers for response bodies."""

import gzip
import io
import logging
import zlib
from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


class ChunkReader(io.RawIOBase):
    """Raw binary reader over an iterator of byte chunks."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[no-untyped-def]
        while not self._pending:
            chunk = next(self._chunks, None)
            if chunk is None:
                return 0
            self._pending = bytes(chunk)

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


class DeflateReader(io.RawIOBase):
    """Inflates a "deflate" encoded body.

    Servers disagree on whether "deflate" means a zlib wrapped stream or a bare deflate stream. The zlib
    format is tried first and bare deflate is used if the body does not start with a valid zlib header.
    """

    def __init__(self, raw: io.RawIOBase, chunk_size: int = io.DEFAULT_BUFFER_SIZE) -> None:
        self._raw = raw
        self._chunk_size = chunk_size
        self._decompressor = zlib.decompressobj()
        self._head: bytes | None = b""
        self._pending = b""
        self._eof = False

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[no-untyped-def]
        while not self._pending and not self._eof:
            data = self._raw.read(self._chunk_size)
            if data:
                self._pending = self._decompress(data)
            else:
                self._eof = True
                self._pending = self._decompress(b"", final=True) + self._decompressor.flush()

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def _decompress(self, data: bytes, final: bool = False) -> bytes:
        if self._head is None:
            return self._decompressor.decompress(data)

        self._head += data
        # The zlib header is two bytes
        if len(self._head) < 2 and not final:
            return b""
        data, self._head = self._head, None
        try:
            return self._decompressor.decompress(data)
        except zlib.error:
            logger.debug("Body is not zlib wrapped, falling back to raw deflate")
            self._decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
            return self._decompressor.decompress(data)

    def close(self) -> None:
        if not self.closed:
            self._raw.close()
        super().close()


def open_decoded_stream(chunks: Iterable[bytes], content_encoding: str | None) -> io.BufferedIOBase:
    """Return a binary reader over the body, decompressing gzip and deflate encodings.

    Unrecognized encodings are passed through as is.
    """
    raw = ChunkReader(chunks)
    encoding = (content_encoding or "").strip().lower()

    if encoding == "gzip":
        return gzip.GzipFile(fileobj=io.BufferedReader(raw), mode="rb")
    if encoding == "deflate":
        return io.BufferedReader(DeflateReader(raw))
    if encoding:
        logger.debug("Unsupported content encoding %r, passing body through", encoding)
    return io.BufferedReader(raw)
