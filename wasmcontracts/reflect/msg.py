"""Messages, queries and responses of the reflect contract."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

from wasmcontracts.std.storage import ParseError


@dataclass(frozen=True)
class InstantiateMsg:
    pass


@dataclass(frozen=True)
class ReflectMsg:
    """Send the given messages on behalf of the contract."""

    msgs: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class ReflectSubMsg:
    """Send the given sub-messages on behalf of the contract."""

    msgs: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class ChangeOwner:
    owner: str


@dataclass(frozen=True)
class Owner:
    pass


@dataclass(frozen=True)
class Capitalized:
    """Ask the chain's custom querier to capitalize text."""

    text: str


@dataclass(frozen=True)
class Chain:
    """Query the chain and return the answer untouched."""

    request: Any


@dataclass(frozen=True)
class Raw:
    """Read a raw storage key of another contract."""

    contract: str
    key: bytes


@dataclass(frozen=True)
class SubMsgResultQuery:
    """Look up the stored reply of an earlier sub-message."""

    id: int


@dataclass(frozen=True)
class OwnerResponse:
    owner: str


@dataclass(frozen=True)
class CapitalizedResponse:
    text: str


@dataclass(frozen=True)
class ChainResponse:
    data: bytes


@dataclass(frozen=True)
class RawResponse:
    """Empty data means a missing key or an empty value."""

    data: bytes


@dataclass(frozen=True)
class DebugMsg:
    """Custom chain message carrying a debug string."""

    text: str

    def to_json(self) -> dict:
        return {"debug": self.text}


@dataclass(frozen=True)
class RawMsg:
    """Custom chain message carrying raw bytes."""

    data: bytes

    def to_json(self) -> dict:
        return {"raw": base64.b64encode(self.data).decode("ascii")}


@dataclass(frozen=True)
class PingQuery:
    def to_json(self) -> dict:
        return {"ping": {}}


@dataclass(frozen=True)
class CapitalizedQuery:
    text: str

    def to_json(self) -> dict:
        return {"capitalized": {"text": self.text}}


@dataclass(frozen=True)
class SpecialResponse:
    """The answer to every custom query."""

    msg: str

    def to_json(self) -> dict:
        return {"msg": self.msg}

    @classmethod
    def from_json(cls, data: Any) -> SpecialResponse:
        try:
            msg = data["msg"]
        except (KeyError, TypeError) as exc:
            raise ParseError(f"Error parsing into type SpecialResponse: {exc}") from exc
        if not isinstance(msg, str):
            raise ParseError("Error parsing into type SpecialResponse: msg must be a string")
        return cls(msg)