"""Key-value storage, JSON encoding helpers and typed storage views."""

from __future__ import annotations

import base64
import bisect
import dataclasses
import enum
import json
from dataclasses import dataclass
from typing import Any, Callable, Iterator


class StdError(Exception):
    """Base error raised by contracts and their helpers."""


class NotFoundError(StdError):
    """A value was expected in storage but is missing."""


class ParseError(StdError):
    """Data could not be decoded into the requested type."""


class Order(enum.Enum):
    ASCENDING = 1
    DESCENDING = 2


def _json_default(obj: Any) -> Any:
    to_json = getattr(obj, "to_json", None)
    if callable(to_json):
        return to_json()
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, enum.Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    raise TypeError(f"cannot serialize {type(obj).__name__}")


def to_binary(value: Any) -> bytes:
    """Serialize a value to compact JSON bytes."""
    try:
        return json.dumps(value, default=_json_default, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise StdError(f"Error serializing type: {exc}") from exc


def from_binary(data: bytes) -> Any:
    """Parse JSON bytes into plain Python values."""
    try:
        return json.loads(bytes(data).decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise ParseError(f"Error parsing JSON: {exc}") from exc


@dataclass(frozen=True)
class Codec:
    """Converts stored values to and from bytes."""

    loads: Callable[[Any], Any] | None = None
    name: str = "value"

    def encode(self, value: Any) -> bytes:
        return to_binary(value)

    def decode(self, data: bytes) -> Any:
        raw = from_binary(data)
        if self.loads is None:
            return raw
        try:
            return self.loads(raw)
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"Error parsing into type {self.name}: {exc}") from exc


class MemoryStorage:
    """An in-memory, byte-ordered key-value store."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}
        self._keys: list[bytes] = []

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        key = bytes(key)
        if key not in self._data:
            bisect.insort(self._keys, key)
        self._data[key] = bytes(value)

    def remove(self, key: bytes) -> None:
        key = bytes(key)
        if self._data.pop(key, None) is not None:
            self._keys.pop(bisect.bisect_left(self._keys, key))

    def range(
        self,
        start: bytes | None = None,
        end: bytes | None = None,
        order: Order = Order.ASCENDING,
    ) -> Iterator[tuple[bytes, bytes]]:
        """Iterate over keys in [start, end) in the given order."""
        lo = 0 if start is None else bisect.bisect_left(self._keys, bytes(start))
        hi = len(self._keys) if end is None else bisect.bisect_left(self._keys, bytes(end))
        keys = self._keys[lo:max(lo, hi)]
        if order is Order.DESCENDING:
            keys.reverse()
        snapshot = [(k, self._data[k]) for k in keys]
        return iter(snapshot)


def _length_prefixed(namespace: bytes) -> bytes:
    return len(namespace).to_bytes(2, "big") + namespace


def _as_bytes(key: bytes | str) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


class Singleton:
    """A single typed value stored under a fixed key."""

    def __init__(self, storage: MemoryStorage, key: bytes, codec: Codec | None = None) -> None:
        self._storage = storage
        self._key = _length_prefixed(_as_bytes(key))
        self._codec = codec or Codec()

    def save(self, value: Any) -> None:
        self._storage.set(self._key, self._codec.encode(value))

    def may_load(self) -> Any | None:
        data = self._storage.get(self._key)
        return None if data is None else self._codec.decode(data)

    def load(self) -> Any:
        data = self._storage.get(self._key)
        if data is None:
            raise NotFoundError(f"{self._codec.name} not found")
        return self._codec.decode(data)

    def remove(self) -> None:
        self._storage.remove(self._key)

    def update(self, action: Callable[[Any], Any]) -> Any:
        value = action(self.load())
        self.save(value)
        return value


class Bucket:
    """Typed values stored under a namespace, keyed by bytes."""

    def __init__(self, storage: MemoryStorage, namespace: bytes, codec: Codec | None = None) -> None:
        self._storage = storage
        self._prefix = _length_prefixed(_as_bytes(namespace))
        self._codec = codec or Codec()

    def _full(self, key: bytes | str) -> bytes:
        return self._prefix + _as_bytes(key)

    def save(self, key: bytes | str, value: Any) -> None:
        self._storage.set(self._full(key), self._codec.encode(value))

    def may_load(self, key: bytes | str) -> Any | None:
        data = self._storage.get(self._full(key))
        return None if data is None else self._codec.decode(data)

    def load(self, key: bytes | str) -> Any:
        data = self._storage.get(self._full(key))
        if data is None:
            raise NotFoundError(f"{self._codec.name} not found")
        return self._codec.decode(data)

    def remove(self, key: bytes | str) -> None:
        self._storage.remove(self._full(key))

    def update(self, key: bytes | str, action: Callable[[Any | None], Any]) -> Any:
        value = action(self.may_load(key))
        self.save(key, value)
        return value

    def range(
        self,
        start: bytes | None = None,
        end: bytes | None = None,
        order: Order = Order.ASCENDING,
    ) -> Iterator[tuple[bytes, Any]]:
        """Iterate over (key, value) pairs of this namespace."""
        full_start = self._prefix + (_as_bytes(start) if start is not None else b"")
        full_end = self._full(end) if end is not None else None
        plen = len(self._prefix)
        for key, data in self._storage.range(full_start, full_end, order):
            if key.startswith(self._prefix):
                yield key[plen:], self._codec.decode(data)