"""The client: finds the server and sends it the numbers read from input."""

from __future__ import annotations

import re
import sys
import threading
from typing import Iterable, Iterator, TextIO

from udpsum.discovery import BROADCAST_ADDRESS, init_client
from udpsum.interface import ClientSession, print_client_server_addr
from udpsum.protocol import Packet

_NUMBER = re.compile(r"[+-]?\d+")
_U32 = 1 << 32


def read_values(stream: TextIO) -> Iterator[int]:
    """Yield unsigned 32-bit numbers from ``stream`` until one fails to parse."""
    for line in stream:
        for token in line.split():
            match = _NUMBER.match(token)
            if match is None:
                return
            yield int(match.group()) % _U32
            if match.end() != len(token):
                return


def run_client(
    port: int, values: Iterable[int], broadcast_address: str = BROADCAST_ADDRESS
) -> list[Packet]:
    """Discover the server on ``port``, send ``values`` and return the acks."""
    sock, server_addr = init_client(port, broadcast_address)
    try:
        print_client_server_addr(server_addr[0])
        session = ClientSession(sock, server_addr)
        listener = threading.Thread(target=session.receive_acks, daemon=True)
        listener.start()
        try:
            return session.send_all(values)
        finally:
            session.stop()
            listener.join()
    finally:
        sock.close()


def _atoi(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group()) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Send the numbers on standard input to the server on the given port."""
    argv = sys.argv if argv is None else argv
    if len(argv) != 2:
        program = argv[0] if argv else "client"
        print(f"Uso: {program} <porta>", file=sys.stderr)
        return 1
    try:
        run_client(_atoi(argv[1]), read_values(sys.stdin))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())