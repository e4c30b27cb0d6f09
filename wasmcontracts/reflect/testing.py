"""Test dependencies wired with the reflect contract's custom querier."""

from __future__ import annotations

from typing import Any, Iterable

from wasmcontracts.reflect.msg import CapitalizedQuery, PingQuery, SpecialResponse
from wasmcontracts.std.mock import (
    MOCK_CONTRACT_ADDR,
    Deps,
    MockApi,
    MockQuerier,
    SystemQueryError,
)
from wasmcontracts.std.storage import MemoryStorage, to_binary
from wasmcontracts.std.types import Coin


def _parse_special_query(query: Any) -> PingQuery | CapitalizedQuery:
    if isinstance(query, (PingQuery, CapitalizedQuery)):
        return query
    try:
        (kind, body), = query.items()
        match kind:
            case "ping":
                return PingQuery()
            case "capitalized":
                text = body["text"]
                if isinstance(text, str):
                    return CapitalizedQuery(text)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise SystemQueryError(f"Error parsing into type SpecialQuery: {exc}") from exc
    raise SystemQueryError(f"Error parsing into type SpecialQuery: {query!r}")


def custom_query_execute(query: Any) -> bytes:
    """Answer a special query (object or its JSON form) with encoded SpecialResponse."""
    match _parse_special_query(query):
        case PingQuery():
            msg = "pong"
        case CapitalizedQuery(text=text):
            msg = text.upper()
    return to_binary(SpecialResponse(msg))


def mock_dependencies_with_custom_querier(contract_balance: Iterable[Coin] = ()) -> Deps:
    """Mock dependencies whose querier answers special queries."""
    querier = MockQuerier({MOCK_CONTRACT_ADDR: list(contract_balance)}, custom_query_execute)
    return Deps(MemoryStorage(), MockApi(), querier)