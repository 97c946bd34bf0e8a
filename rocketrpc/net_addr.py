"""IPv4 network addresses."""

from __future__ import annotations

import re
import socket
from abc import ABC, abstractmethod
from dataclasses import dataclass

from rocketrpc.log import error_log

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_INADDR_NONE = b"\xff\xff\xff\xff"


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class NetAddr(ABC):
    """A socket address."""

    @property
    @abstractmethod
    def family(self) -> int:
        """The address family for creating sockets."""

    @abstractmethod
    def sockaddr(self) -> tuple:
        """The address in the form the socket module takes."""

    @abstractmethod
    def check_valid(self) -> bool:
        """Whether the address can be used."""

    @abstractmethod
    def __str__(self) -> str:
        ...


@dataclass(frozen=True)
class IPNetAddr(NetAddr):
    """An IPv4 address and port."""

    ip: str
    port: int

    @classmethod
    def from_string(cls, addr: str) -> "IPNetAddr":
        """Parse "ip:port"."""
        ip, sep, port = addr.partition(":")
        if not sep:
            error_log("invalid ipv4 addr %s", addr)
            raise ValueError(f"invalid ipv4 addr {addr}")
        return cls(ip, _atoi(port))

    @classmethod
    def from_sockaddr(cls, addr: tuple) -> "IPNetAddr":
        """Build from an (ip, port) pair as returned by the socket module."""
        return cls(addr[0], int(addr[1]))

    @property
    def family(self) -> int:
        return socket.AF_INET

    def sockaddr(self) -> tuple[str, int]:
        return (self.ip, self.port)

    def check_valid(self) -> bool:
        if not self.ip:
            return False
        if not 0 <= self.port <= 65535:
            return False
        try:
            packed = socket.inet_aton(self.ip)
        except OSError:
            return False
        return packed != _INADDR_NONE

    def __str__(self) -> str:
        return f"{self.ip}:{self.port}"