"""The summing server: answers discovery and accumulates client requests."""

from __future__ import annotations

import socket
import sys
import threading

from udpsum.discovery import UsageError, end_server, init_server
from udpsum.interface import print_initial_server_state
from udpsum.processing import ServerFullError, ServerState, handle_request
from udpsum.protocol import Packet, PacketType

_RECV_SIZE = 1024


def _handle(sock: socket.socket, state: ServerState, packet: Packet, addr) -> None:
    try:
        handle_request(sock, state, packet, addr)
    except ServerFullError as exc:
        print(f"ignoring request from {addr[0]}: {exc}", file=sys.stderr, flush=True)
    except OSError:
        # The socket was closed while the acknowledgement was on its way.
        pass


def serve(
    sock: socket.socket, state: ServerState, max_packets: int | None = None
) -> int:
    """Serve datagrams from ``sock`` and return how many were received.

    Runs until ``max_packets`` datagrams have arrived (forever if None) or
    the socket fails. Each request is handled in its own thread; all of
    them have finished when this returns.
    """
    workers: list[threading.Thread] = []
    received = 0
    try:
        while max_packets is None or received < max_packets:
            try:
                data, addr = sock.recvfrom(_RECV_SIZE)
            except OSError:
                break
            received += 1
            try:
                packet = Packet.decode(data)
            except ValueError:
                continue
            if packet.type is PacketType.DESC:
                try:
                    sock.sendto(Packet.discovery_ack().encode(), addr)
                except OSError:
                    break
                try:
                    state.find_or_add_client(addr)
                except ServerFullError as exc:
                    print(
                        f"ignoring client {addr[0]}: {exc}",
                        file=sys.stderr,
                        flush=True,
                    )
            elif packet.type is PacketType.REQ:
                worker = threading.Thread(
                    target=_handle, args=(sock, state, packet, addr), daemon=True
                )
                worker.start()
                workers = [w for w in workers if w.is_alive()]
                workers.append(worker)
    finally:
        for worker in workers:
            worker.join()
    return received


def main(argv: list[str] | None = None) -> int:
    """Run the server on the port named on the command line."""
    argv = sys.argv if argv is None else argv
    state = ServerState()
    try:
        sock = init_server(argv)
    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error binding socket: {exc}", file=sys.stderr)
        return 1
    print_initial_server_state()
    try:
        serve(sock, state)
    except KeyboardInterrupt:
        pass
    finally:
        end_server(sock)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())