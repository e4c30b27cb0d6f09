"""A FIFO queue of integers kept directly in contract storage."""

from __future__ import annotations

from typing import Any

from wasmcontracts.queue.msg import (
    Count,
    CountResponse,
    Dequeue,
    Enqueue,
    List,
    ListResponse,
    OpenIterators,
    Item,
    Reducer,
    ReducerResponse,
    Sum,
    SumResponse,
)
from wasmcontracts.std.mock import Deps
from wasmcontracts.std.storage import MemoryStorage, Order, StdError, from_binary, to_binary
from wasmcontracts.std.types import Env, MessageInfo, Response

FIRST_KEY = bytes(4)
_THRESHOLD = bytes([0x00, 0x00, 0x00, 0x20])


def _decode_item(data: bytes) -> Item:
    return Item.from_json(from_binary(data))


def _key_id(key: bytes) -> int:
    return int.from_bytes(key, "big")


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: Any) -> Response:
    return Response()


def execute(deps: Deps, env: Env, info: MessageInfo, msg: Any) -> Response:
    match msg:
        case Enqueue(value=value):
            enqueue(deps.storage, value)
            return Response()
        case Dequeue():
            return _dequeue(deps)
    raise StdError(f"unknown execute message: {type(msg).__name__}")


def enqueue(storage: MemoryStorage, value: int) -> None:
    last = next(storage.range(None, None, Order.DESCENDING), None)
    new_key = FIRST_KEY if last is None else (_key_id(last[0]) + 1).to_bytes(4, "big")
    storage.set(new_key, to_binary(Item(value)))


def _dequeue(deps: Deps) -> Response:
    res = Response()
    first = next(deps.storage.range(None, None, Order.ASCENDING), None)
    if first is not None:
        key, value = first
        deps.storage.remove(key)
        res.data = value
    return res


def migrate(deps: Deps, env: Env, msg: Any) -> Response:
    for key in [k for k, _ in deps.storage.range(None, None, Order.ASCENDING)]:
        deps.storage.remove(key)
    for value in (100, 101, 102):
        enqueue(deps.storage, value)
    return Response()


def query(deps: Deps, env: Env, msg: Any) -> bytes:
    match msg:
        case Count():
            return to_binary(query_count(deps))
        case Sum():
            return to_binary(query_sum(deps))
        case Reducer():
            return to_binary(query_reducer(deps))
        case List():
            return to_binary(query_list(deps))
        case OpenIterators(count=count):
            return to_binary(query_open_iterators(deps, count))
    raise StdError(f"unknown query message: {type(msg).__name__}")


def query_count(deps: Deps) -> CountResponse:
    return CountResponse(sum(1 for _ in deps.storage.range(None, None, Order.ASCENDING)))


def query_sum(deps: Deps) -> SumResponse:
    items = [_decode_item(v) for _, v in deps.storage.range(None, None, Order.ASCENDING)]
    return SumResponse(sum(item.value for item in items))


def query_reducer(deps: Deps) -> ReducerResponse:
    counters = []
    for _, raw in deps.storage.range(None, None, Order.ASCENDING):
        mine = _decode_item(raw).value
        total = sum(
            v
            for v in (_decode_item(d).value for _, d in deps.storage.range(None, None, Order.ASCENDING))
            if v > mine
        )
        counters.append((mine, total))
    return ReducerResponse(counters)


def query_list(deps: Deps) -> ListResponse:
    """Range queries with both, upper-only and lower-only bounds at 0x20."""

    def ids(start: bytes | None, end: bytes | None) -> list[int]:
        return [_key_id(k) for k, _ in deps.storage.range(start, end, Order.ASCENDING)]

    return ListResponse(
        empty=ids(_THRESHOLD, _THRESHOLD),
        early=ids(None, _THRESHOLD),
        late=ids(_THRESHOLD, None),
    )


def query_open_iterators(deps: Deps, count: int) -> dict:
    """Open iterators and discard them."""
    for _ in range(count):
        deps.storage.range(None, None, Order.ASCENDING)
    return {}