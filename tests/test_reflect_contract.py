import base64

import pytest

from wasmcontracts.reflect.contract import (
    execute,
    instantiate,
    query,
    reply,
    try_change_owner,
    try_reflect,
    try_reflect_subcall,
)
from wasmcontracts.reflect.errors import MessagesEmptyError, NotCurrentOwnerError
from wasmcontracts.reflect.msg import (
    Capitalized,
    Chain,
    ChangeOwner,
    DebugMsg,
    InstantiateMsg,
    Owner,
    PingQuery,
    Raw,
    RawMsg,
    ReflectMsg,
    ReflectSubMsg,
    SpecialResponse,
    SubMsgResultQuery,
)
from wasmcontracts.reflect.testing import (
    custom_query_execute,
    mock_dependencies_with_custom_querier,
)
from wasmcontracts.std.mock import MOCK_CONTRACT_ADDR, Deps, MockQuerier
from wasmcontracts.std.storage import NotFoundError, StdError, from_binary
from wasmcontracts.std.types import (
    BankSend,
    Coin,
    CustomMsg,
    Event,
    Reply,
    StakingDelegate,
    SubMsg,
    SubMsgResponse,
    attr,
    coin,
    coins,
)
from wasmcontracts.std.mock import mock_env, mock_info


def _setup(querier_balance=()):
    deps = mock_dependencies_with_custom_querier(querier_balance)
    instantiate(deps, mock_env(), mock_info("creator", coins(2, "token")), InstantiateMsg())
    return deps


def _owner(deps):
    return from_binary(query(deps, mock_env(), Owner()))["owner"]


def test_proper_instantialization():
    deps = mock_dependencies_with_custom_querier([])
    res = instantiate(deps, mock_env(), mock_info("creator", coins(1000, "earth")), InstantiateMsg())
    assert len(res.messages) == 0
    assert _owner(deps) == "creator"


def test_reflect():
    deps = _setup()
    payload = [BankSend("friend", coins(1, "token"))]
    res = execute(deps, mock_env(), mock_info("creator"), ReflectMsg(payload))
    assert res.messages == [SubMsg.new(m) for m in payload]
    assert res.attributes == [attr("action", "reflect")]


def test_reflect_requires_owner():
    deps = _setup()
    payload = [BankSend("friend", coins(1, "token"))]
    with pytest.raises(NotCurrentOwnerError) as info:
        execute(deps, mock_env(), mock_info("random"), ReflectMsg(payload))
    assert "Permission denied: the sender is not the current owner" in str(info.value)


def test_reflect_reject_empty_msgs():
    deps = _setup()
    with pytest.raises(MessagesEmptyError) as info:
        execute(deps, mock_env(), mock_info("creator"), ReflectMsg([]))
    assert info.value == MessagesEmptyError()


def test_reflect_multiple_messages():
    deps = _setup()
    payload = [
        BankSend("friend", coins(1, "token")),
        CustomMsg(RawMsg(b'{"foo":123}')),
        CustomMsg(DebugMsg("Hi, Dad!")),
        StakingDelegate("validator", coin(100, "ustake")),
    ]
    res = try_reflect(deps, mock_env(), mock_info("creator"), payload)
    assert res.messages == [SubMsg.new(m) for m in payload]


def test_change_owner_works():
    deps = _setup()
    res = execute(deps, mock_env(), mock_info("creator"), ChangeOwner("friend"))
    assert len(res.messages) == 0
    assert res.attributes == [attr("action", "change_owner"), attr("owner", "friend")]
    assert _owner(deps) == "friend"


def test_change_owner_requires_current_owner_as_sender():
    deps = _setup()
    with pytest.raises(NotCurrentOwnerError) as info:
        execute(deps, mock_env(), mock_info("random"), ChangeOwner("friend"))
    assert info.value == NotCurrentOwnerError(expected="creator", actual="random")
    assert _owner(deps) == "creator"


def test_change_owner_errors_for_invalid_new_address():
    deps = _setup()
    with pytest.raises(StdError, match="human address too short"):
        try_change_owner(deps, mock_env(), mock_info("creator"), "x")
    assert _owner(deps) == "creator"


def test_capitalized_query_works():
    deps = mock_dependencies_with_custom_querier([])
    value = from_binary(query(deps, mock_env(), Capitalized("demo one")))
    assert value["text"] == "DEMO ONE"


def test_chain_query_works():
    deps = mock_dependencies_with_custom_querier(coins(123, "ucosm"))
    request = {"bank": {"all_balances": {"address": MOCK_CONTRACT_ADDR}}}
    outer = from_binary(query(deps, mock_env(), Chain(request)))
    inner = from_binary(base64.b64decode(outer["data"]))
    assert [Coin.from_json(c) for c in inner["amount"]] == coins(123, "ucosm")

    outer = from_binary(query(deps, mock_env(), Chain(PingQuery())))
    inner = from_binary(base64.b64decode(outer["data"]))
    assert SpecialResponse.from_json(inner).msg == "pong"


def test_supply_query():
    querier = MockQuerier(
        {
            "ryan_reynolds": [coin(5, "ATOM"), coin(10, "OSMO")],
            "huge_ackman": [coin(15, "OSMO"), coin(5, "BTC")],
        },
        custom_query_execute,
    )
    deps = Deps(querier=querier)
    outer = from_binary(query(deps, mock_env(), Chain({"bank": {"supply": {"denom": "OSMO"}}})))
    inner = from_binary(base64.b64decode(outer["data"]))
    assert Coin.from_json(inner["amount"]) == coin(25, "OSMO")


def test_chain_query_reports_system_error():
    deps = mock_dependencies_with_custom_querier([])
    request = {"wasm": {"smart": {"contract_addr": "foo", "msg": ""}}}
    with pytest.raises(StdError, match="^Querier system error: "):
        query(deps, mock_env(), Chain(request))


class _RawQuerier(MockQuerier):
    def __init__(self, answer):
        super().__init__()
        self._answer = answer

    def query_wasm_raw(self, contract, key):
        return self._answer


def test_raw_query_returns_data():
    deps = Deps(querier=_RawQuerier(b"abc"))
    value = from_binary(query(deps, mock_env(), Raw("contract", b"key")))
    assert base64.b64decode(value["data"]) == b"abc"


def test_raw_query_missing_value_is_empty():
    deps = Deps(querier=_RawQuerier(None))
    value = from_binary(query(deps, mock_env(), Raw("contract", b"key")))
    assert base64.b64decode(value["data"]) == b""


def test_raw_query_unknown_contract_errors():
    deps = mock_dependencies_with_custom_querier([])
    with pytest.raises(StdError):
        query(deps, mock_env(), Raw("nobody", b"key"))


def test_reflect_subcall():
    deps = _setup()
    payload = SubMsg.reply_always(BankSend("friend", coins(1, "token")), 123)
    res = execute(deps, mock_env(), mock_info("creator"), ReflectSubMsg([payload]))
    assert len(res.messages) == 1
    assert res.messages.pop() == payload


def test_reflect_subcall_requires_owner():
    deps = _setup()
    payload = SubMsg.reply_always(BankSend("friend", coins(1, "token")), 123)
    with pytest.raises(NotCurrentOwnerError):
        try_reflect_subcall(deps, mock_env(), mock_info("someone"), [payload])


def test_reply_and_query():
    deps = _setup()
    events = [Event("message").add_attribute("signer", "caller-addr")]
    subcall = Reply(123, SubMsgResponse(events, b"foobar"))
    res = reply(deps, mock_env(), subcall)
    assert len(res.messages) == 0

    with pytest.raises(NotFoundError):
        query(deps, mock_env(), SubMsgResultQuery(65432))

    qres = Reply.from_json(from_binary(query(deps, mock_env(), SubMsgResultQuery(123))))
    assert qres.id == 123
    assert qres.result.data == b"foobar"
    assert qres.result.events == events