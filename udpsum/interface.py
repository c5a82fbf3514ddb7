"""Console output and the client's request/acknowledge exchange."""

from __future__ import annotations

import select
import socket
import threading
from datetime import datetime
from typing import Iterable

from udpsum.protocol import Packet, PacketType

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
RETRY_INTERVAL = 0.01
_RECV_SIZE = 1024


def current_time(now: datetime | None = None) -> str:
    """Format ``now`` (default: the local time) as a log timestamp."""
    if now is None:
        now = datetime.now()
    return now.strftime(TIME_FORMAT)


def format_server_state(
    client_addr: str,
    seqn: int,
    value: int,
    total_reqs: int,
    total_sum: int,
    is_duplicate: bool,
    now: datetime | None = None,
) -> str:
    """Build the server's log line for one processed request."""
    marker = " DUP!!" if is_duplicate else ""
    return (
        f"{current_time(now)} client {client_addr}{marker} id_req {seqn} "
        f"value {value} num_reqs {total_reqs} total_sum {total_sum}"
    )


def print_server_state(client_addr, seqn, value, state, is_duplicate) -> None:
    """Print the server's log line using the totals held by ``state``."""
    print(
        format_server_state(
            client_addr, seqn, value, state.total_reqs, state.total_sum, is_duplicate
        ),
        flush=True,
    )


def print_initial_server_state() -> None:
    """Print the line the server emits when it starts."""
    print(f"{current_time()} num_reqs 0 total_sum 0", flush=True)


def print_client_server_addr(server_addr: str) -> None:
    """Print the address of the discovered server."""
    print(f"{current_time()} server_addr {server_addr}", flush=True)


def format_client_ack(
    server_addr: str,
    seqn: int,
    value: int,
    num_reqs: int,
    total_sum: int,
    now: datetime | None = None,
) -> str:
    """Build the client's log line for one acknowledged request."""
    return (
        f"{current_time(now)} server {server_addr} id_req {seqn} value {value} "
        f"num_reqs {num_reqs} total_sum {total_sum}"
    )


class ClientSession:
    """Sends numbered requests and waits for their acknowledgements.

    ``receive_acks`` is meant to run in its own thread while ``send`` is
    called from another; a request is resent every ``retry_interval``
    seconds until its acknowledgement arrives.
    """

    def __init__(
        self,
        sock: socket.socket,
        server_addr: tuple[str, int],
        retry_interval: float = RETRY_INTERVAL,
    ) -> None:
        self.sock = sock
        self.server_addr = server_addr
        self.retry_interval = retry_interval
        self.seqn = 1
        self.sent_values: dict[int, int] = {}
        self._cond = threading.Condition()
        self._ack: Packet | None = None
        self._awaiting = False
        self._stopped = threading.Event()

    def receive_acks(self) -> None:
        """Listen for acknowledgements until stopped or the socket closes."""
        while not self._stopped.is_set():
            try:
                ready, _, _ = select.select([self.sock], [], [], self.retry_interval)
                if not ready:
                    continue
                data, _ = self.sock.recvfrom(_RECV_SIZE)
            except (OSError, ValueError):
                break
            try:
                ack = Packet.decode(data)
            except ValueError:
                continue
            if ack.type is not PacketType.REQ_ACK:
                continue
            with self._cond:
                if not self._awaiting or ack.seqn != self.seqn:
                    continue
                print(
                    format_client_ack(
                        self.server_addr[0],
                        ack.seqn,
                        self.sent_values.get(ack.seqn, 0),
                        ack.num_reqs,
                        ack.total_sum,
                    ),
                    flush=True,
                )
                self._ack = ack
                self._awaiting = False
                self._cond.notify_all()

    def send(self, value: int) -> Packet:
        """Send ``value`` as the next request and return its acknowledgement."""
        payload = Packet.request(self.seqn, value).encode()
        with self._cond:
            self.sent_values[self.seqn] = value
            self._ack = None
            self._awaiting = True
            self.sock.sendto(payload, self.server_addr)
            while self._ack is None:
                if self._stopped.is_set():
                    self._awaiting = False
                    raise RuntimeError("client session stopped")
                self._cond.wait(self.retry_interval)
                if self._ack is None and not self._stopped.is_set():
                    self.sock.sendto(payload, self.server_addr)
            ack = self._ack
            self.seqn += 1
        return ack

    def send_all(self, values: Iterable[int]) -> list[Packet]:
        """Send every value in turn; return the acknowledgements."""
        return [self.send(value) for value in values]

    def stop(self) -> None:
        """Stop listening and abandon any request still waiting."""
        self._stopped.set()
        with self._cond:
            self._cond.notify_all()