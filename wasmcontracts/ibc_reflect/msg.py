"""Messages, packets, acknowledgements and responses of the IBC reflect contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from wasmcontracts.std.storage import ParseError, StdError, from_binary, to_binary
from wasmcontracts.std.types import Coin, msg_from_json, msg_to_json

PACKET_MSG_TYPE = "ibc_reflect::msg::PacketMsg"
_PACKET_VARIANTS = ("dispatch", "who_am_i", "balances")


@dataclass(frozen=True)
class InstantiateMsg:
    """Code id of the reflect contract used to spawn sub-accounts."""

    reflect_code_id: int


@dataclass(frozen=True)
class AccountQuery:
    """Ask for the reflect account attached to a channel."""

    channel_id: str


@dataclass(frozen=True)
class ListAccounts:
    """Ask for all (channel, reflect account) pairs."""


@dataclass(frozen=True)
class AccountResponse:
    account: str | None


@dataclass(frozen=True)
class AccountInfo:
    account: str
    channel_id: str


@dataclass(frozen=True)
class ListAccountsResponse:
    accounts: list[AccountInfo] = field(default_factory=list)


@dataclass(frozen=True)
class ReflectExecuteMsg:
    """The execute message sent to a reflect contract."""

    msgs: list[Any] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"reflect_msg": {"msgs": [msg_to_json(m) for m in self.msgs]}}

    @classmethod
    def from_json(cls, data: Any) -> ReflectExecuteMsg:
        try:
            msgs = data["reflect_msg"]["msgs"]
            if not isinstance(msgs, list):
                raise TypeError("msgs must be a list")
        except (KeyError, TypeError) as exc:
            raise ParseError(f"Error parsing into type ReflectExecuteMsg: {exc}") from exc
        return cls([msg_from_json(m) for m in msgs])


@dataclass(frozen=True)
class Dispatch:
    """Packet asking to dispatch messages from the caller's reflect account."""

    msgs: list[Any] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"dispatch": {"msgs": [msg_to_json(m) for m in self.msgs]}}


@dataclass(frozen=True)
class WhoAmI:
    """Packet asking for the caller's reflect account address."""

    def to_json(self) -> dict:
        return {"who_am_i": {}}


@dataclass(frozen=True)
class Balances:
    """Packet asking for the balances of the caller's reflect account."""

    def to_json(self) -> dict:
        return {"balances": {}}


PacketMsg = Union[Dispatch, WhoAmI, Balances]


@dataclass(frozen=True)
class WhoAmIResponse:
    account: str


@dataclass(frozen=True)
class BalancesResponse:
    account: str
    balances: list[Coin] = field(default_factory=list)


def _packet_error(detail: Any) -> ParseError:
    return ParseError(f"Error parsing into type {PACKET_MSG_TYPE}: {detail}")


def parse_packet_msg(data: bytes) -> PacketMsg:
    """Decode packet data into one of the packet message variants."""
    try:
        raw = from_binary(data)
    except ParseError as exc:
        raise _packet_error(exc) from exc
    if not isinstance(raw, dict) or len(raw) != 1:
        raise _packet_error("expected an object with exactly one variant")
    (variant, body), = raw.items()
    if variant not in _PACKET_VARIANTS:
        expected = ", ".join(f"`{v}`" for v in _PACKET_VARIANTS)
        raise _packet_error(f"unknown variant `{variant}`, expected one of {expected}")
    if not isinstance(body, dict):
        raise _packet_error(f"invalid body of variant `{variant}`")
    match variant:
        case "dispatch":
            if "msgs" not in body:
                raise _packet_error("missing field `msgs`")
            msgs = body["msgs"]
            if not isinstance(msgs, list):
                raise _packet_error("field `msgs` must be a list")
            try:
                return Dispatch([msg_from_json(m) for m in msgs])
            except ParseError as exc:
                raise _packet_error(exc) from exc
        case "who_am_i":
            return WhoAmI()
    return Balances()


def encode_ack_ok(value: Any) -> bytes:
    """Encode a successful acknowledgement carrying value."""
    return to_binary({"ok": value})


def encode_ack_error(message: Any) -> bytes:
    """Encode a failed acknowledgement carrying an error message."""
    return to_binary({"error": str(message)})


def decode_ack(data: bytes) -> Any:
    """Return the success value of an acknowledgement.

    An error acknowledgement raises StdError with its message; malformed
    data raises ParseError.
    """
    raw = from_binary(data)
    if isinstance(raw, dict) and len(raw) == 1:
        if "ok" in raw:
            return raw["ok"]
        message = raw.get("error")
        if isinstance(message, str):
            raise StdError(message)
    raise ParseError("Error parsing into type AcknowledgementMsg: expected `ok` or `error`")