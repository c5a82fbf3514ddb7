"""Server-side bookkeeping of clients and the aggregate sum."""

from __future__ import annotations

import socket
import threading
from dataclasses import dataclass

from udpsum.interface import print_server_state
from udpsum.protocol import MAX_CLIENTS, Packet, PacketType

_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF


@dataclass
class ClientEntry:
    """What the server remembers about one client address."""

    addr: tuple[str, int]
    last_req: int = 0
    last_sum: int = 0


class ServerFullError(RuntimeError):
    """Raised when a new client arrives and the client table is full."""


class ServerState:
    """Known clients plus the running request count and sum."""

    def __init__(self, max_clients: int = MAX_CLIENTS) -> None:
        self.max_clients = max_clients
        self.clients: dict[tuple[str, int], ClientEntry] = {}
        self.total_reqs = 0
        self.total_sum = 0
        self.lock = threading.RLock()

    def find_or_add_client(self, addr: tuple[str, int]) -> ClientEntry:
        """Return the entry for ``addr``, registering it if it is new."""
        key = (addr[0], addr[1])
        with self.lock:
            entry = self.clients.get(key)
            if entry is None:
                if len(self.clients) >= self.max_clients:
                    raise ServerFullError(
                        f"client table full ({self.max_clients} clients)"
                    )
                entry = self.clients[key] = ClientEntry(key)
            return entry

    def process(self, packet: Packet, addr: tuple[str, int]) -> Packet:
        """Apply a request from ``addr``, log it, and return the acknowledgement.

        Only the request that follows the client's last accepted one is
        added to the sum; anything else is logged as a duplicate.
        """
        if packet.type is not PacketType.REQ:
            raise ValueError(f"not a request packet: {packet.type!r}")
        with self.lock:
            entry = self.find_or_add_client(addr)
            duplicate = packet.seqn != ((entry.last_req + 1) & _U32)
            if not duplicate:
                self.total_reqs = (self.total_reqs + 1) & _U32
                self.total_sum = (self.total_sum + packet.value) & _U64
                entry.last_req = packet.seqn
                entry.last_sum = self.total_sum
            print_server_state(addr[0], packet.seqn, packet.value, self, duplicate)
            return Packet.request_ack(entry.last_req, self.total_reqs, entry.last_sum)


def handle_request(
    sock: socket.socket, state: ServerState, packet: Packet, addr: tuple[str, int]
) -> Packet:
    """Process a request and send its acknowledgement back to ``addr``."""
    with state.lock:
        ack = state.process(packet, addr)
        sock.sendto(ack.encode(), addr)
    return ack