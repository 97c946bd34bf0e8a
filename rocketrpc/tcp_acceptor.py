"""The listening socket of a server."""

from __future__ import annotations

import socket

from rocketrpc.log import error_log, info_log
from rocketrpc.net_addr import IPNetAddr, NetAddr


class AcceptorError(Exception):
    """Raised when the listening socket cannot be set up or accept fails."""


class TcpAcceptor:
    """Binds and listens on an address and accepts clients."""

    BACKLOG = 1000

    def __init__(self, local_addr: NetAddr) -> None:
        if not local_addr.check_valid():
            error_log("invalid local addr %s", local_addr)
            raise AcceptorError(f"invalid local addr {local_addr}")
        self.local_addr = local_addr
        self.family = local_addr.family
        try:
            self._sock = socket.socket(self.family, socket.SOCK_STREAM)
        except OSError as exc:
            error_log("invalid listen socket, error=%s", exc)
            raise AcceptorError(f"failed to create listen socket: {exc}") from exc
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError as exc:
            error_log("setsockopt REUSEADDR error,error=%s", exc)
        try:
            self._sock.bind(local_addr.sockaddr())
            self._sock.listen(self.BACKLOG)
        except OSError as exc:
            error_log("bind or listen error,error=%s", exc)
            self._sock.close()
            raise AcceptorError(f"failed to listen on {local_addr}: {exc}") from exc

    @property
    def listen_fd(self) -> int:
        return self._sock.fileno()

    @property
    def bound_addr(self) -> IPNetAddr:
        """The address actually bound, with the port chosen if 0 was given."""
        return IPNetAddr.from_sockaddr(self._sock.getsockname())

    def accept(self) -> tuple[socket.socket, IPNetAddr]:
        """Accept one client; return its socket and address."""
        try:
            client, addr = self._sock.accept()
        except OSError as exc:
            error_log("accept error,error=%s", exc)
            raise AcceptorError(f"accept error: {exc}") from exc
        peer_addr = IPNetAddr.from_sockaddr(addr)
        info_log("A client have accepted succ,peer addr[%s]", peer_addr)
        return client, peer_addr

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> "TcpAcceptor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()