"""In-memory test doubles for the chain environment."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from wasmcontracts.std.storage import MemoryStorage, StdError, from_binary, to_binary
from wasmcontracts.std.types import Coin, Env, MessageInfo

MOCK_CONTRACT_ADDR = "cosmos2contract"

_MIN_ADDR_LEN = 3
_MAX_ADDR_LEN = 54


class MockApi:
    """Address validation matching the mock chain rules."""

    def addr_validate(self, addr: str) -> str:
        if len(addr) < _MIN_ADDR_LEN:
            raise StdError(
                f"Invalid input: human address too short for this mock implementation (must be >= {_MIN_ADDR_LEN})."
            )
        if len(addr) > _MAX_ADDR_LEN:
            raise StdError(
                f"Invalid input: human address too long for this mock implementation (must be <= {_MAX_ADDR_LEN})."
            )
        if addr.lower() != addr:
            raise StdError("Invalid input: address not normalized")
        return addr


class SystemQueryError(StdError):
    """The querier could not handle the request."""


class ContractQueryError(StdError):
    """The queried handler returned an error."""


CustomHandler = Callable[[Any], bytes]


class MockQuerier:
    """Answers bank, wasm and custom queries from in-memory data."""

    def __init__(
        self,
        balances: dict[str, Iterable[Coin]] | None = None,
        custom_handler: CustomHandler | None = None,
    ) -> None:
        self._balances = {addr: list(c) for addr, c in (balances or {}).items()}
        self._custom_handler = custom_handler

    def update_balance(self, addr: str, balance: Iterable[Coin]) -> None:
        self._balances[addr] = list(balance)

    def query_all_balances(self, addr: str) -> list[Coin]:
        return list(self._balances.get(str(addr), []))

    def _bank(self, kind: str, body: dict) -> Any:
        match kind:
            case "all_balances":
                return {"amount": self.query_all_balances(body["address"])}
            case "balance":
                found = next(
                    (c for c in self.query_all_balances(body["address"]) if c.denom == body["denom"]),
                    Coin(0, body["denom"]),
                )
                return {"amount": found}
            case "supply":
                denom = body["denom"]
                total = sum(c.amount for held in self._balances.values() for c in held if c.denom == denom)
                return {"amount": Coin(total, denom)}
        raise SystemQueryError(f"Unsupported query type: bank {kind}")

    def raw_query(self, request: bytes) -> bytes:
        """Answer a JSON-encoded query request with JSON-encoded data."""
        try:
            parsed = from_binary(request)
            (module, body), = parsed.items()
        except (StdError, AttributeError, ValueError) as exc:
            raise SystemQueryError(f"Parsing query request: {exc}") from exc
        if module == "custom":
            if self._custom_handler is None:
                raise SystemQueryError("Unsupported query type: custom")
            return self._custom_handler(body)
        try:
            (kind, inner), = body.items()
        except (AttributeError, ValueError) as exc:
            raise SystemQueryError(f"Parsing query request: {exc}") from exc
        if module == "bank":
            try:
                return to_binary(self._bank(kind, inner))
            except (KeyError, TypeError) as exc:
                raise SystemQueryError(f"Parsing query request: {exc}") from exc
        if module == "wasm":
            addr = inner.get("contract_addr", "") if isinstance(inner, dict) else ""
            raise SystemQueryError(f"No such contract: {addr}")
        raise SystemQueryError(f"Unsupported query type: {module}")

    def query(self, request: Any) -> Any:
        """Send a request (JSON value or object) and parse the JSON answer."""
        return from_binary(self.raw_query(to_binary(request)))

    def query_wasm_raw(self, contract: str, key: bytes) -> bytes | None:
        request = {
            "wasm": {"raw": {"contract_addr": contract, "key": base64.b64encode(bytes(key)).decode("ascii")}}
        }
        answer = from_binary(self.raw_query(to_binary(request)))
        return None if answer is None else base64.b64decode(answer)


@dataclass
class Deps:
    storage: MemoryStorage = field(default_factory=MemoryStorage)
    api: MockApi = field(default_factory=MockApi)
    querier: MockQuerier = field(default_factory=MockQuerier)


def mock_dependencies(contract_balance: Iterable[Coin] = ()) -> Deps:
    """Fresh storage, api and a querier holding the contract's balance."""
    querier = MockQuerier({MOCK_CONTRACT_ADDR: list(contract_balance)})
    return Deps(MemoryStorage(), MockApi(), querier)


def mock_env() -> Env:
    return Env(contract_address=MOCK_CONTRACT_ADDR)


def mock_info(sender: str, funds: Iterable[Coin] = ()) -> MessageInfo:
    return MessageInfo(sender=sender, funds=list(funds))