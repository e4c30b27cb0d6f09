"""IBC contract that gives each connected channel its own reflect account."""

from __future__ import annotations

from typing import Any, Iterable

from wasmcontracts.ibc_reflect.msg import (
    AccountInfo,
    AccountQuery,
    AccountResponse,
    Balances,
    BalancesResponse,
    Dispatch,
    ListAccounts,
    ListAccountsResponse,
    ReflectExecuteMsg,
    WhoAmI,
    WhoAmIResponse,
    encode_ack_error,
    encode_ack_ok,
    parse_packet_msg,
)
from wasmcontracts.ibc_reflect.state import Config, accounts, config, pending_channel
from wasmcontracts.std.ibc import (
    IbcChannelCloseMsg,
    IbcChannelConnectMsg,
    IbcChannelOpenMsg,
    IbcOrder,
    IbcPacketReceiveMsg,
)
from wasmcontracts.std.mock import Deps
from wasmcontracts.std.storage import StdError, to_binary
from wasmcontracts.std.types import (
    BankSend,
    Env,
    Event,
    IbcBasicResponse,
    IbcReceiveResponse,
    MessageInfo,
    Reply,
    Response,
    SubMsg,
    SubMsgError,
    SubMsgResponse,
    WasmInstantiate,
    wasm_execute,
)

IBC_APP_VERSION = "ibc-reflect-v1"
RECEIVE_DISPATCH_ID = 1234
INIT_CALLBACK_ID = 7890


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: Any) -> Response:
    """Remember the code id used to create reflect accounts later."""
    config(deps.storage).save(Config(msg.reflect_code_id))
    return Response().add_attribute("action", "instantiate")


def reply(deps: Deps, env: Env, reply: Reply) -> Response:
    match (reply.id, reply.result):
        case (id, SubMsgError(message=message)) if id == RECEIVE_DISPATCH_ID:
            return Response().set_data(encode_ack_error(message))
        case (id, SubMsgResponse() as response) if id == INIT_CALLBACK_ID:
            return handle_init_callback(deps, response)
    raise StdError("invalid reply id or result")


def _parse_contract_from_events(events: Iterable[Event]) -> str | None:
    event = next((e for e in events if e.ty == "instantiate"), None)
    if event is None:
        return None
    found = next((a for a in event.attributes if a.key == "_contract_address"), None)
    return None if found is None else found.value


def handle_init_callback(deps: Deps, response: SubMsgResponse) -> Response:
    """Register the newly created reflect contract for the pending channel."""
    pending = pending_channel(deps.storage)
    channel_id = pending.load()
    pending.remove()

    addr = _parse_contract_from_events(response.events)
    if addr is None:
        raise StdError("No _contract_address found in callback events")
    contract_addr = deps.api.addr_validate(addr)

    def register(existing: str | None) -> str:
        if existing is not None:
            raise StdError("Cannot register over an existing channel")
        return contract_addr

    accounts(deps.storage).update(channel_id, register)
    return Response().add_attribute("action", "execute_init_callback")


def query(deps: Deps, env: Env, msg: Any) -> bytes:
    match msg:
        case AccountQuery(channel_id=channel_id):
            return to_binary(query_account(deps, channel_id))
        case ListAccounts():
            return to_binary(query_list_accounts(deps))
    raise StdError(f"unknown query message: {type(msg).__name__}")


def query_account(deps: Deps, channel_id: str) -> AccountResponse:
    return AccountResponse(accounts(deps.storage).load(channel_id))


def query_list_accounts(deps: Deps) -> ListAccountsResponse:
    infos = []
    for key, account in accounts(deps.storage).range():
        try:
            channel_id = key.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StdError(f"Cannot decode UTF8 bytes into string: {exc}") from exc
        infos.append(AccountInfo(account=account, channel_id=channel_id))
    return ListAccountsResponse(infos)


def ibc_channel_open(deps: Deps, env: Env, msg: IbcChannelOpenMsg) -> str:
    """Enforce ordering and the counterparty version; return our version."""
    if msg.channel.order is not IbcOrder.ORDERED:
        raise StdError("Only supports ordered channels")
    counter_version = msg.counterparty_version
    if counter_version is not None and counter_version != IBC_APP_VERSION:
        raise StdError(f"Counterparty version must be `{IBC_APP_VERSION}`")
    return IBC_APP_VERSION


def ibc_channel_connect(deps: Deps, env: Env, msg: IbcChannelConnectMsg) -> IbcBasicResponse:
    """Create a reflect contract for the newly connected channel."""
    cfg = config(deps.storage).load()
    chan_id = msg.channel.endpoint.channel_id

    instantiate_msg = WasmInstantiate(
        admin=None,
        code_id=cfg.reflect_code_id,
        msg=b"{}",
        funds=[],
        label=f"ibc-reflect-{chan_id}",
    )
    sub = SubMsg.reply_on_success(instantiate_msg, INIT_CALLBACK_ID)
    pending_channel(deps.storage).save(chan_id)

    return (
        IbcBasicResponse()
        .add_submessage(sub)
        .add_attribute("action", "ibc_connect")
        .add_attribute("channel_id", chan_id)
        .add_event(Event("ibc").add_attribute("channel", "connect"))
    )


def ibc_channel_close(deps: Deps, env: Env, msg: IbcChannelCloseMsg) -> IbcBasicResponse:
    """Pull all funds out of the channel's reflect contract and forget it."""
    channel_id = msg.channel.endpoint.channel_id
    bucket = accounts(deps.storage)
    reflect_addr = bucket.load(channel_id)
    bucket.remove(channel_id)

    amount = deps.querier.query_all_balances(reflect_addr)
    messages: list[SubMsg] = []
    if amount:
        bank_msg = BankSend(to_address=env.contract_address, amount=list(amount))
        reflect_msg = ReflectExecuteMsg([bank_msg])
        messages.append(SubMsg.new(wasm_execute(reflect_addr, reflect_msg, [])))
    steal_funds = bool(messages)

    return (
        IbcBasicResponse()
        .add_submessages(messages)
        .add_attribute("action", "ibc_close")
        .add_attribute("channel_id", channel_id)
        .add_attribute("steal_funds", "true" if steal_funds else "false")
    )


def migrate(deps: Deps, env: Env, msg: Any) -> Response:
    return Response()


def ibc_packet_receive(deps: Deps, env: Env, msg: IbcPacketReceiveMsg) -> IbcReceiveResponse:
    """Handle a packet; every application error becomes an error acknowledgement."""
    try:
        packet = msg.packet
        caller = packet.dest.channel_id
        match parse_packet_msg(packet.data):
            case Dispatch(msgs=msgs):
                return _receive_dispatch(deps, caller, msgs)
            case WhoAmI():
                return _receive_who_am_i(deps, caller)
            case Balances():
                return _receive_balances(deps, caller)
    except StdError as exc:
        ack = encode_ack_error(f"invalid packet: {exc}")
        return (
            IbcReceiveResponse()
            .set_ack(ack)
            .add_event(Event("ibc").add_attribute("packet", "receive"))
        )
    raise StdError("unreachable packet variant")


def _receive_who_am_i(deps: Deps, caller: str) -> IbcReceiveResponse:
    account = accounts(deps.storage).load(caller)
    ack = encode_ack_ok(WhoAmIResponse(account))
    return IbcReceiveResponse().set_ack(ack).add_attribute("action", "receive_who_am_i")


def _receive_balances(deps: Deps, caller: str) -> IbcReceiveResponse:
    account = accounts(deps.storage).load(caller)
    balances = deps.querier.query_all_balances(account)
    ack = encode_ack_ok(BalancesResponse(account, list(balances)))
    return IbcReceiveResponse().set_ack(ack).add_attribute("action", "receive_balances")


def _receive_dispatch(deps: Deps, caller: str, msgs: list[Any]) -> IbcReceiveResponse:
    reflect_addr = accounts(deps.storage).load(caller)
    ack = encode_ack_ok(None)
    wasm_msg = wasm_execute(reflect_addr, ReflectExecuteMsg(list(msgs)), [])
    sub = SubMsg.reply_on_error(wasm_msg, RECEIVE_DISPATCH_ID)
    return (
        IbcReceiveResponse()
        .set_ack(ack)
        .add_submessage(sub)
        .add_attribute("action", "receive_dispatch")
    )


def ibc_packet_ack(deps: Deps, env: Env, msg: Any) -> IbcBasicResponse:
    """Never expected: this contract sends no packets."""
    return IbcBasicResponse().add_attribute("action", "ibc_packet_ack")


def ibc_packet_timeout(deps: Deps, env: Env, msg: Any) -> IbcBasicResponse:
    """Never expected: this contract sends no packets."""
    return IbcBasicResponse().add_attribute("action", "ibc_packet_timeout")