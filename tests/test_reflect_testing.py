import pytest

from wasmcontracts.reflect.msg import CapitalizedQuery, PingQuery, SpecialResponse
from wasmcontracts.reflect.testing import (
    custom_query_execute,
    mock_dependencies_with_custom_querier,
)
from wasmcontracts.std.mock import MOCK_CONTRACT_ADDR, SystemQueryError
from wasmcontracts.std.storage import from_binary
from wasmcontracts.std.types import coins


def test_custom_query_execute_ping():
    res = custom_query_execute(PingQuery())
    assert SpecialResponse.from_json(from_binary(res)).msg == "pong"


def test_custom_query_execute_capitalize():
    res = custom_query_execute(CapitalizedQuery("fOObaR"))
    assert SpecialResponse.from_json(from_binary(res)).msg == "FOOBAR"


def test_custom_query_execute_accepts_json_form():
    res = custom_query_execute(CapitalizedQuery("food").to_json())
    assert SpecialResponse.from_json(from_binary(res)).msg == "FOOD"


def test_custom_querier():
    deps = mock_dependencies_with_custom_querier([])
    answer = deps.querier.query({"custom": CapitalizedQuery("food").to_json()})
    assert SpecialResponse.from_json(answer).msg == "FOOD"


def test_custom_query_execute_rejects_unknown():
    with pytest.raises(SystemQueryError):
        custom_query_execute({"unknown": {}})


def test_contract_balance_is_set():
    deps = mock_dependencies_with_custom_querier(coins(123, "ucosm"))
    assert deps.querier.query_all_balances(MOCK_CONTRACT_ADDR) == coins(123, "ucosm")