"""Common types used in the library."""

from collections.abc import Callable, Iterable, Mapping
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pyexchange.exchange import Exchange

FormData = Mapping[str, Any]
BodyData = str | bytes | bytearray | memoryview | FormData | IO[bytes] | IO[str] | Iterable[bytes]

SuccessCallback = Callable[[Any, int, str | None, "Exchange"], Any]
ErrorCallback = Callable[[str, int, "Exchange"], Any]
CompleteCallback = Callable[[Any, int, str | None, "Exchange"], Any]
BeforeSendCallback = Callable[["Exchange"], Any]
PartCallback = Callable[[bytes, int, str | None, "Exchange"], Any]
