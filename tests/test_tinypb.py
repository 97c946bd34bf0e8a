import pytest

from rocketrpc.protocol import StringProtocol
from rocketrpc.tcp_buffer import TcpBuffer
from rocketrpc.tinypb import TinyPBCoder, TinyPBProtocol, encode_tinypb
from rocketrpc.util import get_int32_from_net_bytes


def _round_trip(*messages):
    buf = TcpBuffer(16)
    coder = TinyPBCoder()
    coder.encode(list(messages), buf)
    return coder.decode(buf), buf


def test_worked_example_wire_bytes():
    message = TinyPBProtocol(msg_id="1", method_name="a", pb_data=b"x")
    data = encode_tinypb(message)
    assert data == (
        b"\x02\x00\x00\x00\x1d"
        b"\x00\x00\x00\x011"
        b"\x00\x00\x00\x01a"
        b"\x00\x00\x00\x00"
        b"\x00\x00\x00\x00"
        b"x"
        b"\x00\x00\x00\x01"
        b"\x03"
    )


def test_encode_frames_and_sets_lengths():
    message = TinyPBProtocol(msg_id="99998888", method_name="Order.makeOrder", pb_data=b"test_pb_data")
    data = encode_tinypb(message)
    assert data[0] == TinyPBProtocol.PB_START
    assert data[-1] == TinyPBProtocol.PB_END
    assert len(data) == message.pk_len
    assert get_int32_from_net_bytes(data, 1) == len(data)
    assert message.msg_id_len == len("99998888")
    assert message.method_name_len == len("Order.makeOrder")
    assert message.parse_success is True


def test_empty_msg_id_gets_default():
    message = TinyPBProtocol()
    encode_tinypb(message)
    assert message.msg_id == "123456789"


def test_round_trip_fields():
    sent = TinyPBProtocol(
        msg_id="99998888",
        method_name="Order.makeOrder",
        err_code=-1,
        err_info="short balance",
        pb_data=b"test_pb_data",
    )
    decoded, buf = _round_trip(sent)
    assert len(decoded) == 1
    got = decoded[0]
    assert got.msg_id == sent.msg_id
    assert got.method_name == sent.method_name
    assert got.err_code == sent.err_code
    assert got.err_info == sent.err_info
    assert got.pb_data == sent.pb_data
    assert got.pk_len == sent.pk_len
    assert got.check_sum == 1
    assert got.parse_success is True
    assert buf.read_able == 0


def test_several_packets_decode_in_order():
    ids = ["1", "22", "333"]
    decoded, _ = _round_trip(*(TinyPBProtocol(msg_id=i, pb_data=i.encode()) for i in ids))
    assert [m.msg_id for m in decoded] == ids
    assert [m.pb_data for m in decoded] == [i.encode() for i in ids]


def test_partial_packet_waits_for_rest():
    data = encode_tinypb(TinyPBProtocol(msg_id="abc", method_name="S.m", pb_data=b"payload"))
    buf = TcpBuffer(8)
    coder = TinyPBCoder()
    buf.write_to_buffer(data[:10])
    assert coder.decode(buf) == []
    assert buf.read_able == 10
    buf.write_to_buffer(data[10:])
    decoded = coder.decode(buf)
    assert [m.msg_id for m in decoded] == ["abc"]
    assert buf.read_able == 0


def test_leading_junk_is_skipped():
    data = encode_tinypb(TinyPBProtocol(msg_id="m1", pb_data=b"body"))
    buf = TcpBuffer(8)
    buf.write_to_buffer(b"junk" + data)
    decoded = TinyPBCoder().decode(buf)
    assert [m.msg_id for m in decoded] == ["m1"]
    assert buf.read_able == 0


def test_malformed_packet_is_consumed_and_dropped():
    buf = TcpBuffer(16)
    buf.write_to_buffer(b"\x02\x00\x00\x00\x06\x03")
    assert TinyPBCoder().decode(buf) == []
    assert buf.read_able == 0


def test_no_start_byte_leaves_buffer():
    buf = TcpBuffer(16)
    buf.write_to_buffer(b"hello")
    assert TinyPBCoder().decode(buf) == []
    assert buf.peek() == b"hello"


def test_encode_rejects_other_messages():
    with pytest.raises(TypeError):
        TinyPBCoder().encode([StringProtocol(info="x")], TcpBuffer(8))


def test_binary_payload_round_trip():
    payload = bytes(range(256))
    decoded, _ = _round_trip(TinyPBProtocol(msg_id="bin", pb_data=payload))
    assert decoded[0].pb_data == payload