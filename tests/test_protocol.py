import pytest

from udpsum.protocol import PACKET_SIZE, Packet, PacketType


@pytest.mark.parametrize(
    "code, expected",
    [
        (1, PacketType.DESC),
        (2, PacketType.REQ),
        (3, PacketType.DESC_ACK),
        (4, PacketType.REQ_ACK),
    ],
)
def test_decode_maps_wire_codes_to_types(code, expected):
    data = code.to_bytes(2, "little") + bytes(PACKET_SIZE - 2)
    assert Packet.decode(data).type is expected


def test_request_wire_bytes():
    encoded = Packet.request(1, 5).encode()
    assert encoded == bytes.fromhex(
        "0200" "0000" "01000000" "05000000" "00000000" "0000000000000000"
    )


def test_encoded_size_is_fixed():
    assert PACKET_SIZE == 24
    for packet in (
        Packet.discovery(),
        Packet.discovery_ack(),
        Packet.request(7, 9),
        Packet.request_ack(7, 3, 2**40),
    ):
        assert len(packet.encode()) == PACKET_SIZE


@pytest.mark.parametrize(
    "packet",
    [
        Packet.discovery(),
        Packet.discovery_ack(),
        Packet.request(1, 0),
        Packet.request(2**32 - 1, 2**32 - 1),
        Packet.request_ack(12, 12, 2**64 - 1),
    ],
)
def test_round_trip(packet):
    assert Packet.decode(packet.encode()) == packet


def test_constructors_set_type():
    assert Packet.discovery().type is PacketType.DESC
    assert Packet.discovery_ack().type is PacketType.DESC_ACK
    assert Packet.request(3, 4).type is PacketType.REQ
    assert Packet.request_ack(3, 4, 5).type is PacketType.REQ_ACK


def test_request_ack_fields():
    ack = Packet.request_ack(6, 8, 100)
    assert (ack.seqn, ack.num_reqs, ack.total_sum) == (6, 8, 100)


def test_decode_rejects_wrong_length():
    data = Packet.request(1, 1).encode()
    with pytest.raises(ValueError):
        Packet.decode(data[:-1])
    with pytest.raises(ValueError):
        Packet.decode(data + b"\x00")


def test_decode_rejects_unknown_type():
    data = bytearray(Packet.request(1, 1).encode())
    data[0] = 9
    with pytest.raises(ValueError):
        Packet.decode(bytes(data))


def test_encode_rejects_out_of_range_value():
    with pytest.raises(ValueError):
        Packet.request(1, 2**32).encode()
    with pytest.raises(ValueError):
        Packet.request(-1, 1).encode()