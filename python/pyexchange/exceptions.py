"""Exception classes."""

import builtins
from typing import Any


class ExchangeError(Exception):
    """Base class for all pyexchange errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ArgumentError(ExchangeError, TypeError):
    """Malformed request options or convenience call arguments. Raised before any network attempt."""


class ConnectionError(ExchangeError, builtins.ConnectionError):  # noqa: A001
    """Failed to open or connect to the remote host."""


class HttpStatusError(ExchangeError):
    """Response status code is greater than 300.

    Note that this is also raised for a redirect status that was not followed.
    """

    @property
    def status(self) -> int:
        return int((self.details or {}).get("status", 0))


class StreamError(ExchangeError, OSError):
    """Failed to write the request body or to read the response body."""
