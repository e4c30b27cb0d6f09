"""IBC channel and packet messages, with mock constructors for tests."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from wasmcontracts.std.storage import to_binary
from wasmcontracts.std.types import Attribute


class IbcOrder(enum.Enum):
    ORDERED = "ORDER_ORDERED"
    UNORDERED = "ORDER_UNORDERED"


@dataclass(frozen=True)
class _Endpoint:
    port_id: str
    channel_id: str


@dataclass(frozen=True)
class IbcChannel:
    endpoint: _Endpoint
    counterparty_endpoint: _Endpoint
    order: IbcOrder
    version: str
    connection_id: str


@dataclass(frozen=True)
class IbcChannelOpenMsg:
    """Channel opening step; a counterparty version is present only on try."""

    channel: IbcChannel
    counterparty_version: str | None = None


@dataclass(frozen=True)
class IbcChannelConnectMsg:
    """Channel connect step; a counterparty version is present only on ack."""

    channel: IbcChannel
    counterparty_version: str | None = None


@dataclass(frozen=True)
class IbcChannelCloseMsg:
    channel: IbcChannel


@dataclass(frozen=True)
class IbcPacket:
    data: bytes
    src: _Endpoint
    dest: _Endpoint
    sequence: int
    timeout_block: tuple[int, int] | None = None
    timeout_timestamp: int | None = None


@dataclass(frozen=True)
class IbcPacketReceiveMsg:
    packet: IbcPacket
    relayer: str


def _mock_channel(channel_id: str, order: IbcOrder, version: str) -> IbcChannel:
    return IbcChannel(
        endpoint=_Endpoint("my_port", channel_id),
        counterparty_endpoint=_Endpoint("their_port", "channel-7"),
        order=order,
        version=version,
        connection_id="connection-2",
    )


def mock_ibc_channel_open_init(channel_id: str, order: IbcOrder, version: str) -> IbcChannelOpenMsg:
    return IbcChannelOpenMsg(_mock_channel(channel_id, order, version))


def mock_ibc_channel_open_try(channel_id: str, order: IbcOrder, version: str) -> IbcChannelOpenMsg:
    return IbcChannelOpenMsg(_mock_channel(channel_id, order, version), counterparty_version=version)


def mock_ibc_channel_connect_ack(
    channel_id: str, order: IbcOrder, version: str
) -> IbcChannelConnectMsg:
    return IbcChannelConnectMsg(_mock_channel(channel_id, order, version), counterparty_version=version)


def mock_ibc_channel_close_init(channel_id: str, order: IbcOrder, version: str) -> IbcChannelCloseMsg:
    return IbcChannelCloseMsg(_mock_channel(channel_id, order, version))


def mock_ibc_packet_recv(channel_id: str, data: Any) -> IbcPacketReceiveMsg:
    """A received packet on the given local channel carrying data as JSON."""
    packet = IbcPacket(
        data=to_binary(data),
        src=_Endpoint("their-port", "channel-1234"),
        dest=_Endpoint("our-port", channel_id),
        sequence=27,
        timeout_block=(1, 12345678),
    )
    return IbcPacketReceiveMsg(packet, relayer="relayer")


def mock_wasmd_attr(key: str, value: Any) -> Attribute:
    """An attribute as the chain emits it, reserved key names included."""
    return Attribute(str(key), str(value))