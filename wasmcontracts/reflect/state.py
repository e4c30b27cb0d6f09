"""Storage layout of the reflect contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wasmcontracts.std.storage import Bucket, Codec, MemoryStorage, Singleton
from wasmcontracts.std.types import Reply

CONFIG_KEY = b"config"
RESULT_PREFIX = b"result"


@dataclass(frozen=True)
class State:
    owner: str


def _load_state(raw: Any) -> State:
    owner = raw["owner"]
    if not isinstance(owner, str):
        raise TypeError("owner must be a string")
    return State(owner)


def config(storage: MemoryStorage) -> Singleton:
    """The contract state: who owns it."""
    return Singleton(storage, CONFIG_KEY, Codec(_load_state, "State"))


def replies(storage: MemoryStorage) -> Bucket:
    """Replies to sub-messages, keyed by big-endian id."""
    return Bucket(storage, RESULT_PREFIX, Codec(Reply.from_json, "Reply"))