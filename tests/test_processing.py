import socket

import pytest

from udpsum.processing import ServerFullError, ServerState, handle_request
from udpsum.protocol import Packet, PacketType

CLIENT_A = ("10.0.0.1", 5000)
CLIENT_B = ("10.0.0.2", 5000)


def test_find_or_add_client_reuses_entry():
    state = ServerState()
    first = state.find_or_add_client(CLIENT_A)
    again = state.find_or_add_client(CLIENT_A)
    assert first is again
    assert (first.last_req, first.last_sum) == (0, 0)
    assert list(state.clients) == [CLIENT_A]


def test_same_host_different_port_is_new_client():
    state = ServerState()
    a = state.find_or_add_client(("10.0.0.1", 5000))
    b = state.find_or_add_client(("10.0.0.1", 5001))
    assert a is not b
    assert len(state.clients) == 2


def test_client_table_limit():
    state = ServerState(max_clients=1)
    state.find_or_add_client(CLIENT_A)
    with pytest.raises(ServerFullError):
        state.find_or_add_client(CLIENT_B)
    assert state.find_or_add_client(CLIENT_A).addr == CLIENT_A


def test_process_accepts_next_request(capsys):
    state = ServerState()
    ack = state.process(Packet.request(1, 5), CLIENT_A)
    assert ack.type is PacketType.REQ_ACK
    assert ack.seqn == 1
    assert ack.num_reqs == state.total_reqs == 1
    assert ack.total_sum == state.total_sum == 5
    out = capsys.readouterr().out
    assert "client 10.0.0.1 id_req 1 value 5 num_reqs 1 total_sum 5" in out
    assert "DUP!!" not in out


def test_process_duplicate_leaves_totals(capsys):
    state = ServerState()
    first = state.process(Packet.request(1, 5), CLIENT_A)
    capsys.readouterr()
    again = state.process(Packet.request(1, 5), CLIENT_A)
    assert again == first
    assert state.total_reqs == 1
    assert state.total_sum == 5
    assert "DUP!! id_req 1" in capsys.readouterr().out


def test_process_out_of_order_acks_last_accepted():
    state = ServerState()
    state.process(Packet.request(1, 5), CLIENT_A)
    ack = state.process(Packet.request(3, 8), CLIENT_A)
    assert ack.seqn == 1
    assert state.total_sum == 5


def test_per_client_sum_snapshot():
    state = ServerState()
    state.process(Packet.request(1, 5), CLIENT_A)
    ack_b = state.process(Packet.request(1, 7), CLIENT_B)
    assert ack_b.total_sum == state.total_sum
    assert ack_b.num_reqs == state.total_reqs
    dup_a = state.process(Packet.request(1, 5), CLIENT_A)
    assert dup_a.total_sum == 5
    assert dup_a.num_reqs == state.total_reqs


def test_process_rejects_non_request():
    state = ServerState()
    with pytest.raises(ValueError):
        state.process(Packet.discovery(), CLIENT_A)
    assert state.clients == {}


def test_handle_request_sends_ack():
    server = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    client = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    server.bind(("127.0.0.1", 0))
    client.bind(("127.0.0.1", 0))
    client.settimeout(5)
    try:
        state = ServerState()
        ack = handle_request(server, state, Packet.request(1, 9), client.getsockname())
        data, addr = client.recvfrom(1024)
    finally:
        server.close()
        client.close()
    assert Packet.decode(data) == ack
    assert ack.total_sum == 9
    assert addr[1] != 0