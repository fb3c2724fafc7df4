from typing import Any

from pyexchange import Exchange


class CallbackRecorder:
    """Records the callbacks of a request in call order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def before_send(self, exchange: Exchange) -> None:
        self.calls.append(("before_send", (exchange,)))

    def success(self, content: Any, status: int, content_type: str | None, exchange: Exchange) -> None:
        self.calls.append(("success", (content, status, content_type, exchange)))

    def error(self, message: str, status: int, exchange: Exchange) -> None:
        self.calls.append(("error", (message, status, exchange)))

    def complete(self, content: Any, status: int, content_type: str | None, exchange: Exchange) -> None:
        self.calls.append(("complete", (content, status, content_type, exchange)))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def args(self, name: str) -> tuple[Any, ...]:
        matching = [args for call_name, args in self.calls if call_name == name]
        assert len(matching) == 1, f"{name} called {len(matching)} times"
        return matching[0]

    def options(self) -> dict[str, Any]:
        return {
            "before_send": self.before_send,
            "success": self.success,
            "error": self.error,
            "complete": self.complete,
        }
