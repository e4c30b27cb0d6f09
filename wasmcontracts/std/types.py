"""Chain message, response and environment types."""

from __future__ import annotations

import base64
import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from wasmcontracts.std.storage import ParseError, to_binary


@dataclass(frozen=True)
class Coin:
    amount: int
    denom: str

    def to_json(self) -> dict:
        return {"denom": self.denom, "amount": str(self.amount)}

    @classmethod
    def from_json(cls, data: dict) -> Coin:
        return cls(amount=int(data["amount"]), denom=data["denom"])


def coin(amount: int, denom: str) -> Coin:
    return Coin(amount, denom)


def coins(amount: int, denom: str) -> list[Coin]:
    return [Coin(amount, denom)]


@dataclass(frozen=True)
class Attribute:
    key: str
    value: str


def attr(key: str, value: Any) -> Attribute:
    return Attribute(str(key), str(value))


@dataclass
class Event:
    ty: str
    attributes: list[Attribute] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any) -> Event:
        self.attributes.append(attr(key, value))
        return self

    def add_attributes(self, attrs: Iterable[Attribute]) -> Event:
        self.attributes.extend(attrs)
        return self

    def to_json(self) -> dict:
        return {
            "type": self.ty,
            "attributes": [{"key": a.key, "value": a.value} for a in self.attributes],
        }

    @classmethod
    def from_json(cls, data: dict) -> Event:
        return cls(data["type"], [Attribute(a["key"], a["value"]) for a in data["attributes"]])


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _unb64(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as exc:
        raise ParseError(f"invalid base64: {exc}") from exc


@dataclass(frozen=True)
class BankSend:
    to_address: str
    amount: list[Coin]

    def to_json(self) -> dict:
        return msg_to_json(self)


@dataclass(frozen=True)
class StakingDelegate:
    validator: str
    amount: Coin

    def to_json(self) -> dict:
        return msg_to_json(self)


@dataclass(frozen=True)
class WasmInstantiate:
    admin: str | None
    code_id: int
    msg: bytes
    funds: list[Coin]
    label: str

    def to_json(self) -> dict:
        return msg_to_json(self)


@dataclass(frozen=True)
class WasmExecute:
    contract_addr: str
    msg: bytes
    funds: list[Coin]

    def to_json(self) -> dict:
        return msg_to_json(self)


@dataclass(frozen=True)
class CustomMsg:
    """A chain-specific message; payload is a JSON value or an object with to_json."""

    payload: Any

    def to_json(self) -> dict:
        return msg_to_json(self)


CosmosMsg = Union[BankSend, StakingDelegate, WasmInstantiate, WasmExecute, CustomMsg]


def _coins_json(items: Iterable[Coin]) -> list[dict]:
    return [c.to_json() for c in items]


def msg_to_json(msg: CosmosMsg) -> dict:
    """Encode a message into its JSON wire form."""
    if isinstance(msg, BankSend):
        return {"bank": {"send": {"to_address": msg.to_address, "amount": _coins_json(msg.amount)}}}
    if isinstance(msg, StakingDelegate):
        return {"staking": {"delegate": {"validator": msg.validator, "amount": msg.amount.to_json()}}}
    if isinstance(msg, WasmInstantiate):
        return {
            "wasm": {
                "instantiate": {
                    "admin": msg.admin,
                    "code_id": msg.code_id,
                    "msg": _b64(msg.msg),
                    "funds": _coins_json(msg.funds),
                    "label": msg.label,
                }
            }
        }
    if isinstance(msg, WasmExecute):
        return {
            "wasm": {
                "execute": {
                    "contract_addr": msg.contract_addr,
                    "msg": _b64(msg.msg),
                    "funds": _coins_json(msg.funds),
                }
            }
        }
    if isinstance(msg, CustomMsg):
        payload = msg.payload
        to_json = getattr(payload, "to_json", None)
        return {"custom": to_json() if callable(to_json) else payload}
    raise TypeError(f"not a message: {type(msg).__name__}")


def msg_from_json(data: dict) -> CosmosMsg:
    """Decode a message from its JSON wire form."""
    try:
        (module, body), = data.items()
        if module == "custom":
            return CustomMsg(body)
        (kind, inner), = body.items()
        match (module, kind):
            case ("bank", "send"):
                return BankSend(inner["to_address"], [Coin.from_json(c) for c in inner["amount"]])
            case ("staking", "delegate"):
                return StakingDelegate(inner["validator"], Coin.from_json(inner["amount"]))
            case ("wasm", "instantiate"):
                return WasmInstantiate(
                    inner.get("admin"),
                    int(inner["code_id"]),
                    _unb64(inner["msg"]),
                    [Coin.from_json(c) for c in inner["funds"]],
                    inner["label"],
                )
            case ("wasm", "execute"):
                return WasmExecute(
                    inner["contract_addr"],
                    _unb64(inner["msg"]),
                    [Coin.from_json(c) for c in inner["funds"]],
                )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ParseError(f"invalid message: {exc}") from exc
    raise ParseError(f"unknown message variant: {module}")


def wasm_execute(contract_addr: Any, msg: Any, funds: Iterable[Coin]) -> WasmExecute:
    return WasmExecute(str(contract_addr), to_binary(msg), list(funds))


class ReplyOn(enum.Enum):
    ALWAYS = "always"
    ERROR = "error"
    SUCCESS = "success"
    NEVER = "never"


@dataclass(frozen=True)
class SubMsg:
    id: int
    msg: Any
    gas_limit: int | None = None
    reply_on: ReplyOn = ReplyOn.NEVER

    @classmethod
    def new(cls, msg: Any) -> SubMsg:
        return cls(0, msg)

    @classmethod
    def reply_on_success(cls, msg: Any, id: int) -> SubMsg:
        return cls(id, msg, reply_on=ReplyOn.SUCCESS)

    @classmethod
    def reply_on_error(cls, msg: Any, id: int) -> SubMsg:
        return cls(id, msg, reply_on=ReplyOn.ERROR)

    @classmethod
    def reply_always(cls, msg: Any, id: int) -> SubMsg:
        return cls(id, msg, reply_on=ReplyOn.ALWAYS)

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "msg": msg_to_json(self.msg),
            "gas_limit": self.gas_limit,
            "reply_on": self.reply_on.value,
        }

    @classmethod
    def from_json(cls, data: dict) -> SubMsg:
        try:
            return cls(
                int(data["id"]),
                msg_from_json(data["msg"]),
                data.get("gas_limit"),
                ReplyOn(data["reply_on"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"invalid sub-message: {exc}") from exc


def _wrap(msg: Any) -> SubMsg:
    return msg if isinstance(msg, SubMsg) else SubMsg.new(msg)


@dataclass
class Response:
    messages: list[SubMsg] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    data: bytes | None = None

    def add_attribute(self, key: str, value: Any) -> Response:
        self.attributes.append(attr(key, value))
        return self

    def add_attributes(self, attrs: Iterable[Attribute]) -> Response:
        self.attributes.extend(attrs)
        return self

    def add_message(self, msg: Any) -> Response:
        self.messages.append(SubMsg.new(msg))
        return self

    def add_messages(self, msgs: Iterable[Any]) -> Response:
        self.messages.extend(SubMsg.new(m) for m in msgs)
        return self

    def add_submessage(self, msg: SubMsg) -> Response:
        self.messages.append(msg)
        return self

    def add_submessages(self, msgs: Iterable[SubMsg]) -> Response:
        self.messages.extend(msgs)
        return self

    def add_event(self, event: Event) -> Response:
        self.events.append(event)
        return self

    def set_data(self, data: bytes) -> Response:
        self.data = bytes(data)
        return self


@dataclass
class IbcBasicResponse:
    messages: list[SubMsg] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any):
        self.attributes.append(attr(key, value))
        return self

    def add_submessage(self, msg: SubMsg):
        self.messages.append(_wrap(msg))
        return self

    def add_submessages(self, msgs: Iterable[SubMsg]):
        self.messages.extend(_wrap(m) for m in msgs)
        return self

    def add_event(self, event: Event):
        self.events.append(event)
        return self


@dataclass
class IbcReceiveResponse(IbcBasicResponse):
    acknowledgement: bytes = b""

    def set_ack(self, ack: bytes) -> IbcReceiveResponse:
        self.acknowledgement = bytes(ack)
        return self


@dataclass
class SubMsgResponse:
    events: list[Event] = field(default_factory=list)
    data: bytes | None = None


@dataclass(frozen=True)
class SubMsgError:
    message: str


@dataclass
class Reply:
    id: int
    result: SubMsgResponse | SubMsgError

    def to_json(self) -> dict:
        if isinstance(self.result, SubMsgError):
            result: dict = {"error": self.result.message}
        else:
            result = {
                "ok": {
                    "events": [e.to_json() for e in self.result.events],
                    "data": None if self.result.data is None else _b64(self.result.data),
                }
            }
        return {"id": self.id, "result": result}

    @classmethod
    def from_json(cls, data: dict) -> Reply:
        try:
            result = data["result"]
            if "error" in result:
                parsed: SubMsgResponse | SubMsgError = SubMsgError(result["error"])
            else:
                ok = result["ok"]
                raw = ok.get("data")
                parsed = SubMsgResponse(
                    [Event.from_json(e) for e in ok["events"]],
                    None if raw is None else _unb64(raw),
                )
            return cls(int(data["id"]), parsed)
        except (KeyError, TypeError, ValueError) as exc:
            raise ParseError(f"invalid reply: {exc}") from exc


@dataclass(frozen=True)
class Env:
    contract_address: str
    block_height: int = 12345
    block_time: int = 1_571_797_419_879_305_533
    chain_id: str = "cosmos-testnet-14002"


@dataclass(frozen=True)
class MessageInfo:
    sender: str
    funds: list[Coin] = field(default_factory=list)