"""Datagram layout shared by the summing server and its clients."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

PORT = 4000
MAX_CLIENTS = 100

# type (u16) + padding, seqn (u32), then a 16-byte union aligned to 8 bytes:
# a request uses its first word for the value; an acknowledgement uses the
# words as seqn / num_reqs and the trailing 8 bytes as total_sum.
_LAYOUT = struct.Struct("<H2xIIIQ")
PACKET_SIZE = _LAYOUT.size


class PacketType(enum.IntEnum):
    """Kinds of datagram understood by the protocol."""

    DESC = 1
    REQ = 2
    DESC_ACK = 3
    REQ_ACK = 4


@dataclass(frozen=True)
class Packet:
    """One protocol datagram."""

    type: PacketType
    seqn: int = 0
    value: int = 0
    num_reqs: int = 0
    total_sum: int = 0

    def encode(self) -> bytes:
        """Return the wire representation of this packet."""
        try:
            return _LAYOUT.pack(
                int(self.type), self.seqn, self.value, self.num_reqs, self.total_sum
            )
        except struct.error as exc:
            raise ValueError(f"packet field out of range: {exc}") from exc

    @classmethod
    def decode(cls, data: bytes) -> Packet:
        """Parse a datagram; raise ValueError if it is malformed."""
        if len(data) != PACKET_SIZE:
            raise ValueError(
                f"expected {PACKET_SIZE} bytes, got {len(data)}"
            )
        raw_type, seqn, value, num_reqs, total_sum = _LAYOUT.unpack(data)
        try:
            packet_type = PacketType(raw_type)
        except ValueError as exc:
            raise ValueError(f"unknown packet type {raw_type}") from exc
        return cls(packet_type, seqn, value, num_reqs, total_sum)

    @staticmethod
    def discovery() -> Packet:
        """A discovery broadcast."""
        return Packet(PacketType.DESC)

    @staticmethod
    def discovery_ack() -> Packet:
        """The server's answer to a discovery broadcast."""
        return Packet(PacketType.DESC_ACK)

    @staticmethod
    def request(seqn: int, value: int) -> Packet:
        """A request to add ``value`` to the aggregate sum."""
        return Packet(PacketType.REQ, seqn=seqn, value=value)

    @staticmethod
    def request_ack(seqn: int, num_reqs: int, total_sum: int) -> Packet:
        """The server's acknowledgement of a request."""
        return Packet(
            PacketType.REQ_ACK, seqn=seqn, num_reqs=num_reqs, total_sum=total_sum
        )