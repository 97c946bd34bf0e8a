"""Messages and the coders that turn them into bytes and back."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from rocketrpc.tcp_buffer import TcpBuffer


@dataclass
class AbstractProtocol:
    """A request or response; msg_id identifies it."""

    msg_id: str = ""


class AbstractCoder(ABC):
    """Converts between messages and a byte stream."""

    @abstractmethod
    def encode(self, messages: Sequence[AbstractProtocol], out_buffer: TcpBuffer) -> None:
        """Write the encoded messages to out_buffer."""

    @abstractmethod
    def decode(self, buffer: TcpBuffer) -> list[AbstractProtocol]:
        """Consume complete messages from buffer and return them."""


@dataclass
class StringProtocol(AbstractProtocol):
    """A message carrying plain text."""

    info: str = ""


class StringCoder(AbstractCoder):
    """Writes message text followed by a fixed trailer; reads everything as one message."""

    TRAILER = "encode hello rocket"
    DECODED_MSG_ID = "123456"

    def encode(self, messages: Sequence[AbstractProtocol], out_buffer: TcpBuffer) -> None:
        for message in messages:
            if not isinstance(message, StringProtocol):
                raise TypeError(f"expected StringProtocol, got {type(message).__name__}")
            out_buffer.write_to_buffer(message.info.encode("utf-8"))
        out_buffer.write_to_buffer(self.TRAILER.encode("utf-8"))

    def decode(self, buffer: TcpBuffer) -> list[AbstractProtocol]:
        data = buffer.read_from_buffer(buffer.read_able)
        info = data.decode("utf-8", errors="surrogateescape")
        return [StringProtocol(msg_id=self.DECODED_MSG_ID, info=info)]