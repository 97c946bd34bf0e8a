import socket

import pytest

from rocketrpc.net_addr import IPNetAddr
from rocketrpc.tcp_acceptor import AcceptorError, TcpAcceptor


def test_accept_returns_client_and_peer_address():
    with TcpAcceptor(IPNetAddr("127.0.0.1", 0)) as acceptor:
        bound = acceptor.bound_addr
        assert bound.ip == "127.0.0.1"
        assert 0 < bound.port <= 65535
        with socket.create_connection(bound.sockaddr(), timeout=2) as client:
            server_side, peer = acceptor.accept()
            with server_side:
                assert peer == IPNetAddr.from_sockaddr(client.getsockname())
                client.sendall(b"hello rocket!")
                assert server_side.recv(100) == b"hello rocket!"


def test_listen_fd_is_open_descriptor():
    with TcpAcceptor(IPNetAddr("127.0.0.1", 0)) as acceptor:
        assert acceptor.listen_fd >= 0
    assert acceptor.listen_fd == -1


@pytest.mark.parametrize(
    "addr",
    [IPNetAddr("", 12345), IPNetAddr("127.0.0.1", 70000), IPNetAddr("not-an-ip", 1)],
)
def test_invalid_address_rejected(addr):
    with pytest.raises(AcceptorError):
        TcpAcceptor(addr)


def test_port_in_use_rejected():
    with TcpAcceptor(IPNetAddr("127.0.0.1", 0)) as first:
        with pytest.raises(AcceptorError):
            TcpAcceptor(first.bound_addr)


def test_accept_after_close_fails():
    acceptor = TcpAcceptor(IPNetAddr("127.0.0.1", 0))
    acceptor.close()
    with pytest.raises(AcceptorError):
        acceptor.accept()