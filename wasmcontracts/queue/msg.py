"""Messages, responses and stored items of the queue contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from wasmcontracts.std.storage import ParseError


@dataclass(frozen=True)
class InstantiateMsg:
    pass


@dataclass(frozen=True)
class MigrateMsg:
    pass


@dataclass(frozen=True)
class Enqueue:
    """Add a value to the end of the queue."""

    value: int


@dataclass(frozen=True)
class Dequeue:
    """Remove the value at the start of the queue."""


@dataclass(frozen=True)
class Count:
    pass


@dataclass(frozen=True)
class Sum:
    pass


@dataclass(frozen=True)
class Reducer:
    pass


@dataclass(frozen=True)
class List:
    pass


@dataclass(frozen=True)
class OpenIterators:
    count: int


@dataclass(frozen=True)
class CountResponse:
    count: int


@dataclass(frozen=True)
class SumResponse:
    sum: int


@dataclass(frozen=True)
class ReducerResponse:
    """Pairs of (value of item, sum of all values greater than it)."""

    counters: list[tuple[int, int]] = field(default_factory=list)


@dataclass(frozen=True)
class ListResponse:
    empty: list[int] = field(default_factory=list)
    early: list[int] = field(default_factory=list)
    late: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Item:
    value: int

    def to_json(self) -> dict:
        return {"value": self.value}

    @classmethod
    def from_json(cls, data: Any) -> Item:
        try:
            value = data["value"]
        except (KeyError, TypeError) as exc:
            raise ParseError(f"Error parsing into type Item: {exc}") from exc
        if not isinstance(value, int) or isinstance(value, bool):
            raise ParseError("Error parsing into type Item: value must be an integer")
        return cls(value)