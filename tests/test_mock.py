import pytest

from wasmcontracts.std.mock import (
    MOCK_CONTRACT_ADDR,
    MockApi,
    MockQuerier,
    SystemQueryError,
    mock_dependencies,
    mock_env,
    mock_info,
)
from wasmcontracts.std.storage import StdError, to_binary
from wasmcontracts.std.types import coin, coins


def test_addr_validate():
    api = MockApi()
    assert api.addr_validate("friend") == "friend"
    with pytest.raises(StdError, match="human address too short"):
        api.addr_validate("x")
    with pytest.raises(StdError):
        api.addr_validate("Friend")


def test_balances_and_all_balances_query():
    deps = mock_dependencies(coins(123, "ucosm"))
    assert deps.querier.query_all_balances(MOCK_CONTRACT_ADDR) == coins(123, "ucosm")
    res = deps.querier.query({"bank": {"all_balances": {"address": MOCK_CONTRACT_ADDR}}})
    assert res == {"amount": [{"denom": "ucosm", "amount": "123"}]}
    deps.querier.update_balance("acct", [coin(1, "a")])
    assert deps.querier.query_all_balances("acct") == [coin(1, "a")]
    assert deps.querier.query_all_balances("nobody") == []


def test_supply_query():
    q = MockQuerier({
        "ryan_reynolds": [coin(5, "ATOM"), coin(10, "OSMO")],
        "huge_ackman": [coin(15, "OSMO"), coin(5, "BTC")],
    })
    res = q.query({"bank": {"supply": {"denom": "OSMO"}}})
    assert res == {"amount": {"denom": "OSMO", "amount": "25"}}


def test_custom_handler_and_missing():
    q = MockQuerier(custom_handler=lambda body: to_binary({"msg": body["text"].upper()}))
    assert q.query({"custom": {"text": "food"}}) == {"msg": "FOOD"}
    with pytest.raises(SystemQueryError):
        MockQuerier().query({"custom": {}})


def test_wasm_raw_unknown_contract():
    with pytest.raises(SystemQueryError):
        MockQuerier().query_wasm_raw("other", b"key")


def test_env_and_info():
    assert mock_env().contract_address == MOCK_CONTRACT_ADDR
    info = mock_info("creator", coins(2, "token"))
    assert info.sender == "creator"
    assert info.funds == coins(2, "token")