import pytest

from rocketrpc.tcp_buffer import TcpBuffer


def test_write_then_read_round_trip():
    buf = TcpBuffer(16)
    buf.write_to_buffer(b"hello")
    assert buf.read_able == len(b"hello")
    assert buf.read_from_buffer(5) == b"hello"
    assert buf.read_able == 0


def test_read_more_than_available_returns_everything():
    buf = TcpBuffer(16)
    buf.write_to_buffer(b"abc")
    assert buf.read_from_buffer(100) == b"abc"
    assert buf.read_able == 0


def test_read_from_empty_buffer():
    buf = TcpBuffer(8)
    assert buf.read_from_buffer(4) == b""
    assert buf.read_index == 0


def test_negative_read_size_rejected():
    buf = TcpBuffer(8)
    with pytest.raises(ValueError):
        buf.read_from_buffer(-1)


def test_write_beyond_capacity_grows():
    buf = TcpBuffer(4)
    buf.write_to_buffer(b"abcdefgh")
    assert buf.capacity >= 8
    assert buf.peek() == b"abcdefgh"


def test_growth_keeps_unread_data_only():
    buf = TcpBuffer(8)
    buf.write_to_buffer(b"abcdef")
    assert buf.read_from_buffer(4) == b"abcd"
    buf.write_to_buffer(b"ghijkl")
    assert buf.peek() == b"efghijkl"
    assert buf.read_able == len(b"efghijkl")


def test_peek_does_not_consume():
    buf = TcpBuffer(8)
    buf.write_to_buffer(b"xy")
    assert buf.peek() == b"xy"
    assert buf.peek() == b"xy"
    assert buf.read_able == 2


def test_move_read_index_compacts_after_a_third():
    buf = TcpBuffer(9)
    buf.write_to_buffer(b"abcdef")
    buf.move_read_index(3)
    assert buf.read_index == 0
    assert buf.write_index == 3
    assert buf.peek() == b"def"
    assert buf.capacity == 9


def test_move_read_index_below_a_third_keeps_position():
    buf = TcpBuffer(9)
    buf.write_to_buffer(b"abcdef")
    buf.move_read_index(2)
    assert buf.read_index == 2
    assert buf.peek() == b"cdef"


def test_move_read_index_past_written_data_raises():
    buf = TcpBuffer(16)
    buf.write_to_buffer(b"abc")
    with pytest.raises(ValueError):
        buf.move_read_index(4)
    assert buf.peek() == b"abc"


def test_move_write_index_marks_bytes_written():
    buf = TcpBuffer(8)
    buf.write_to_buffer(b"ab")
    buf.buffer[2:4] = b"cd"
    buf.move_write_index(2)
    assert buf.write_index == 4
    assert buf.peek() == b"abcd"


def test_move_write_index_to_full_capacity_allowed():
    buf = TcpBuffer(4)
    buf.buffer[:] = b"wxyz"
    buf.move_write_index(4)
    assert buf.write_able == 0
    assert buf.peek() == b"wxyz"


def test_move_write_index_past_capacity_raises():
    buf = TcpBuffer(4)
    with pytest.raises(ValueError):
        buf.move_write_index(5)


def test_resize_smaller_truncates_readable_data():
    buf = TcpBuffer(8)
    buf.write_to_buffer(b"abcdef")
    buf.resize_buffer(4)
    assert buf.capacity == 4
    assert buf.peek() == b"abcd"


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        TcpBuffer(-1)