"""Storage layout of the IBC reflect contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wasmcontracts.std.storage import Bucket, Codec, MemoryStorage, Singleton

KEY_CONFIG = b"config"
KEY_PENDING_CHANNEL = b"pending"
PREFIX_ACCOUNTS = b"accounts"


@dataclass(frozen=True)
class Config:
    reflect_code_id: int


def _load_str(raw: Any) -> str:
    if not isinstance(raw, str):
        raise TypeError("expected a string")
    return raw


def _load_config(raw: Any) -> Config:
    code_id = raw["reflect_code_id"]
    if not isinstance(code_id, int) or isinstance(code_id, bool):
        raise TypeError("reflect_code_id must be an integer")
    return Config(code_id)


def accounts(storage: MemoryStorage) -> Bucket:
    """Channel id to reflect contract address."""
    return Bucket(storage, PREFIX_ACCOUNTS, Codec(_load_str, "cosmwasm_std::addresses::Addr"))


def config(storage: MemoryStorage) -> Singleton:
    return Singleton(storage, KEY_CONFIG, Codec(_load_config, "ibc_reflect::state::Config"))


def pending_channel(storage: MemoryStorage) -> Singleton:
    """Channel id handed from channel connect to the reply handler."""
    return Singleton(storage, KEY_PENDING_CHANNEL, Codec(_load_str, "alloc::string::String"))