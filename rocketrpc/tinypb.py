"""The TinyPB wire format.

A packet is laid out as:
start(0x02) pk_len msg_id_len msg_id method_name_len method_name
err_code err_info_len err_info pb_data check_sum end(0x03),
where every length and code is a signed 32-bit big-endian integer and
pk_len counts the whole packet.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar, Sequence

from rocketrpc.log import debug_log, error_log
from rocketrpc.protocol import AbstractCoder, AbstractProtocol
from rocketrpc.tcp_buffer import TcpBuffer
from rocketrpc.util import get_int32_from_net_bytes

_INT32 = struct.Struct("!i")
# start and end bytes plus six 32-bit fields
_FIXED_LEN = 2 + 24
_DEFAULT_MSG_ID = "123456789"
_CHECK_SUM = 1


@dataclass
class TinyPBProtocol(AbstractProtocol):
    """One TinyPB packet."""

    PB_START: ClassVar[int] = 0x02
    PB_END: ClassVar[int] = 0x03

    pk_len: int = 0
    msg_id_len: int = 0
    method_name_len: int = 0
    method_name: str = ""
    err_code: int = 0
    err_info_len: int = 0
    err_info: str = ""
    pb_data: bytes = b""
    check_sum: int = 0
    parse_success: bool = False


def _enc(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


def _dec(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


def encode_tinypb(message: TinyPBProtocol) -> bytes:
    """Return the packet for message and fill in its length fields."""
    if not message.msg_id:
        message.msg_id = _DEFAULT_MSG_ID
    debug_log("msg_id = %s", message.msg_id)

    msg_id = _enc(message.msg_id)
    method_name = _enc(message.method_name)
    err_info = _enc(message.err_info)
    pb_data = bytes(message.pb_data)
    pk_len = _FIXED_LEN + len(msg_id) + len(method_name) + len(err_info) + len(pb_data)
    debug_log("pk_len = %d", pk_len)

    packet = b"".join(
        (
            bytes((TinyPBProtocol.PB_START,)),
            _INT32.pack(pk_len),
            _INT32.pack(len(msg_id)),
            msg_id,
            _INT32.pack(len(method_name)),
            method_name,
            _INT32.pack(message.err_code),
            _INT32.pack(len(err_info)),
            err_info,
            pb_data,
            _INT32.pack(_CHECK_SUM),
            bytes((TinyPBProtocol.PB_END,)),
        )
    )

    message.pk_len = pk_len
    message.msg_id_len = len(msg_id)
    message.method_name_len = len(method_name)
    message.err_info_len = len(err_info)
    message.check_sum = _CHECK_SUM
    message.parse_success = True
    debug_log("encode message[%s] success", message.msg_id)
    return packet


class _ParseError(Exception):
    pass


def _find_packet(data: bytes) -> tuple[int, int, int] | None:
    """Locate the first complete packet: (start, end, pk_len)."""
    start_byte = bytes((TinyPBProtocol.PB_START,))
    pos = data.find(start_byte)
    while pos != -1:
        if pos + 5 <= len(data):
            pk_len = get_int32_from_net_bytes(data, pos + 1)
            end = pos + pk_len - 1
            if pos < end < len(data) and data[end] == TinyPBProtocol.PB_END:
                debug_log("get pk_len = %d", pk_len)
                return pos, end, pk_len
        pos = data.find(start_byte, pos + 1)
    return None


def _read_int(packet: bytes, index: int, end: int, name: str) -> int:
    if index + 4 > end:
        raise _ParseError(f"{name} index[{index}] exceeds end_index[{end}]")
    return get_int32_from_net_bytes(packet, index)


def _read_bytes(packet: bytes, index: int, length: int, end: int, name: str) -> bytes:
    if length < 0 or index + length > end:
        raise _ParseError(f"{name} of length {length} at [{index}] exceeds end_index[{end}]")
    return packet[index:index + length]


def _parse_packet(packet: bytes, pk_len: int) -> TinyPBProtocol:
    end = len(packet) - 1
    message = TinyPBProtocol(pk_len=pk_len)
    index = 5

    message.msg_id_len = _read_int(packet, index, end, "msg_id_len")
    index += 4
    message.msg_id = _dec(_read_bytes(packet, index, message.msg_id_len, end, "msg_id"))
    index += message.msg_id_len
    debug_log("parse msg_id=%s", message.msg_id)

    message.method_name_len = _read_int(packet, index, end, "method_name_len")
    index += 4
    message.method_name = _dec(
        _read_bytes(packet, index, message.method_name_len, end, "method_name")
    )
    index += message.method_name_len
    debug_log("parse method_name=%s", message.method_name)

    message.err_code = _read_int(packet, index, end, "err_code")
    index += 4
    message.err_info_len = _read_int(packet, index, end, "err_info_len")
    index += 4
    message.err_info = _dec(_read_bytes(packet, index, message.err_info_len, end, "err_info"))
    index += message.err_info_len
    debug_log("parse error_info=%s", message.err_info)

    pb_data_len = (
        pk_len
        - message.method_name_len
        - message.msg_id_len
        - message.err_info_len
        - _FIXED_LEN
    )
    message.pb_data = _read_bytes(packet, index, pb_data_len, end, "pb_data")
    index += pb_data_len
    message.check_sum = _read_int(packet, index, end, "check_sum")

    message.parse_success = True
    return message


class TinyPBCoder(AbstractCoder):
    """Encodes and decodes TinyPB packets."""

    def encode(self, messages: Sequence[AbstractProtocol], out_buffer: TcpBuffer) -> None:
        for message in messages:
            if not isinstance(message, TinyPBProtocol):
                raise TypeError(f"expected TinyPBProtocol, got {type(message).__name__}")
            packet = encode_tinypb(message)
            if packet:
                out_buffer.write_to_buffer(packet)

    def decode(self, buffer: TcpBuffer) -> list[AbstractProtocol]:
        """Consume every complete packet; bytes before a packet are discarded.

        Packets whose fields do not fit are consumed and dropped.
        """
        messages: list[AbstractProtocol] = []
        while True:
            data = buffer.peek()
            found = _find_packet(data)
            if found is None:
                debug_log("decode end, read all buffer data")
                return messages
            start, end, pk_len = found
            buffer.move_read_index(end + 1)
            try:
                messages.append(_parse_packet(data[start:end + 1], pk_len))
            except _ParseError as exc:
                error_log("parse error, %s", exc)