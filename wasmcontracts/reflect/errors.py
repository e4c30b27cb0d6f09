"""Errors raised by the reflect contract."""

from __future__ import annotations

from typing import Any

from wasmcontracts.std.storage import StdError


class ReflectError(StdError):
    """Base class of the reflect contract's own errors."""

    def _fields(self) -> tuple[Any, ...]:
        return self.args

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._fields() == other._fields()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._fields()))


class NotCurrentOwnerError(ReflectError):
    """The sender is not the owner recorded in the contract state."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__("Permission denied: the sender is not the current owner")
        self.expected = expected
        self.actual = actual

    def _fields(self) -> tuple[Any, ...]:
        return (self.expected, self.actual)

    def __repr__(self) -> str:
        return f"NotCurrentOwnerError(expected={self.expected!r}, actual={self.actual!r})"


class MessagesEmptyError(ReflectError):
    """A reflect request carried no messages."""

    def __init__(self) -> None:
        super().__init__("Messages empty. Must reflect at least one message")