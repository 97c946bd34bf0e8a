import pytest

from rocketrpc.protocol import (
    AbstractCoder,
    AbstractProtocol,
    StringCoder,
    StringProtocol,
)
from rocketrpc.tcp_buffer import TcpBuffer


def test_encode_appends_trailer():
    buf = TcpBuffer(8)
    StringCoder().encode(
        [StringProtocol(info="hi"), StringProtocol(info="there")], buf
    )
    assert buf.peek() == b"hithereencode hello rocket"


def test_encode_no_messages_writes_trailer_only():
    buf = TcpBuffer(8)
    StringCoder().encode([], buf)
    assert buf.peek() == b"encode hello rocket"


def test_encode_rejects_other_messages():
    with pytest.raises(TypeError):
        StringCoder().encode([AbstractProtocol(msg_id="1")], TcpBuffer(8))


def test_decode_reads_everything():
    buf = TcpBuffer(32)
    buf.write_to_buffer(b"hello rocket!")
    messages = StringCoder().decode(buf)
    assert len(messages) == 1
    assert messages[0].info == "hello rocket!"
    assert messages[0].msg_id == "123456"
    assert buf.read_able == 0


def test_decode_empty_buffer_gives_empty_message():
    messages = StringCoder().decode(TcpBuffer(8))
    assert [m.info for m in messages] == [""]


def test_round_trip_keeps_text():
    buf = TcpBuffer(8)
    coder = StringCoder()
    coder.encode([StringProtocol(info="ping")], buf)
    decoded = coder.decode(buf)
    assert decoded[0].info.startswith("ping")
    assert decoded[0].info.endswith(StringCoder.TRAILER)


def test_abstract_coder_cannot_be_instantiated():
    with pytest.raises(TypeError):
        AbstractCoder()