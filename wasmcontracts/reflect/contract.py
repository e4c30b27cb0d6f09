"""A contract that re-sends messages on behalf of its owner."""

from __future__ import annotations

from typing import Any, Iterable

from wasmcontracts.reflect.errors import MessagesEmptyError, NotCurrentOwnerError
from wasmcontracts.reflect.msg import (
    Capitalized,
    CapitalizedQuery,
    CapitalizedResponse,
    Chain,
    ChainResponse,
    ChangeOwner,
    Owner,
    OwnerResponse,
    PingQuery,
    Raw,
    RawResponse,
    ReflectMsg,
    ReflectSubMsg,
    SpecialResponse,
    SubMsgResultQuery,
)
from wasmcontracts.reflect.state import State, config, replies
from wasmcontracts.std.mock import ContractQueryError, Deps, SystemQueryError
from wasmcontracts.std.storage import StdError, to_binary
from wasmcontracts.std.types import Env, MessageInfo, Reply, Response, SubMsg


def _reply_key(id: int) -> bytes:
    return id.to_bytes(8, "big")


def _ensure_owner(state: State, sender: str) -> None:
    if sender != state.owner:
        raise NotCurrentOwnerError(expected=state.owner, actual=sender)


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: Any) -> Response:
    config(deps.storage).save(State(info.sender))
    return Response()


def execute(deps: Deps, env: Env, info: MessageInfo, msg: Any) -> Response:
    match msg:
        case ReflectMsg(msgs=msgs):
            return try_reflect(deps, env, info, msgs)
        case ReflectSubMsg(msgs=msgs):
            return try_reflect_subcall(deps, env, info, msgs)
        case ChangeOwner(owner=owner):
            return try_change_owner(deps, env, info, owner)
    raise StdError(f"unknown execute message: {type(msg).__name__}")


def try_reflect(deps: Deps, env: Env, info: MessageInfo, msgs: Iterable[Any]) -> Response:
    """Send the messages, if the sender owns the contract."""
    _ensure_owner(config(deps.storage).load(), info.sender)
    msgs = list(msgs)
    if not msgs:
        raise MessagesEmptyError()
    return Response().add_attribute("action", "reflect").add_messages(msgs)


def try_reflect_subcall(
    deps: Deps, env: Env, info: MessageInfo, msgs: Iterable[SubMsg]
) -> Response:
    """Send the sub-messages, if the sender owns the contract."""
    _ensure_owner(config(deps.storage).load(), info.sender)
    msgs = list(msgs)
    if not msgs:
        raise MessagesEmptyError()
    return Response().add_attribute("action", "reflect_subcall").add_submessages(msgs)


def try_change_owner(deps: Deps, env: Env, info: MessageInfo, new_owner: str) -> Response:
    def action(state: State) -> State:
        _ensure_owner(state, info.sender)
        return State(deps.api.addr_validate(new_owner))

    config(deps.storage).update(action)
    return (
        Response()
        .add_attribute("action", "change_owner")
        .add_attribute("owner", new_owner)
    )


def reply(deps: Deps, env: Env, msg: Reply) -> Response:
    """Store the reply so that it can be queried later."""
    replies(deps.storage).save(_reply_key(msg.id), msg)
    return Response()


def query(deps: Deps, env: Env, msg: Any) -> bytes:
    match msg:
        case Owner():
            return to_binary(OwnerResponse(config(deps.storage).load().owner))
        case Capitalized(text=text):
            return to_binary(_query_capitalized(deps, text))
        case Chain(request=request):
            return to_binary(_query_chain(deps, request))
        case Raw(contract=contract, key=key):
            return to_binary(_query_raw(deps, contract, key))
        case SubMsgResultQuery(id=id):
            return to_binary(replies(deps.storage).load(_reply_key(id)))
    raise StdError(f"unknown query message: {type(msg).__name__}")


def _query_capitalized(deps: Deps, text: str) -> CapitalizedResponse:
    answer = deps.querier.query({"custom": CapitalizedQuery(text).to_json()})
    return CapitalizedResponse(SpecialResponse.from_json(answer).msg)


def _as_request(request: Any) -> Any:
    if isinstance(request, (PingQuery, CapitalizedQuery)):
        return {"custom": request.to_json()}
    return request


def _query_chain(deps: Deps, request: Any) -> ChainResponse:
    try:
        raw = to_binary(_as_request(request))
    except StdError as exc:
        raise StdError(f"Serializing QueryRequest: {exc}") from exc
    try:
        data = deps.querier.raw_query(raw)
    except SystemQueryError as exc:
        raise StdError(f"Querier system error: {exc}") from exc
    except ContractQueryError as exc:
        raise StdError(f"Querier contract error: {exc}") from exc
    return ChainResponse(data)


def _query_raw(deps: Deps, contract: str, key: bytes) -> RawResponse:
    return RawResponse(deps.querier.query_wasm_raw(contract, key) or b"")