"""Socket setup for the server and discovery of the server by a client."""

from __future__ import annotations

import re
import socket

from udpsum.protocol import PORT, Packet

BROADCAST_ADDRESS = "255.255.255.255"
_RECV_SIZE = 1024


class UsageError(Exception):
    """Raised when the command line is not acceptable."""


def _atoi(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group()) if match else 0


def parse_server_port(argv: list[str]) -> int:
    """Return the port named in ``argv`` (program name first)."""
    if len(argv) < 2:
        program = argv[0] if argv else "server"
        raise UsageError(
            "the number of arguments is incorrect.\n"
            "Expected 1 argument for the port number.\n"
            f"{program} <port>"
        )
    port = _atoi(argv[1])
    if port != PORT:
        raise UsageError(f"Invalid port number. It must be {PORT}.")
    return port


def init_server(argv: list[str]) -> socket.socket:
    """Create the server's UDP socket bound to every interface."""
    port = parse_server_port(argv)
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("", port))
    except OSError:
        sock.close()
        raise
    return sock


def end_server(sock: socket.socket) -> None:
    """Close the server socket."""
    sock.close()


def init_client(
    port: int, broadcast_address: str = BROADCAST_ADDRESS
) -> tuple[socket.socket, tuple[str, int]]:
    """Broadcast a discovery packet and return the socket and the replying server."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        sock.sendto(Packet.discovery().encode(), (broadcast_address, port))
        _, server_addr = sock.recvfrom(_RECV_SIZE)
    except OSError:
        sock.close()
        raise
    return sock, server_addr