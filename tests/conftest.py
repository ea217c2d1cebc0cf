from __future__ import annotations

import threading

import pytest

from echoip.net import Endpoint, bind_udp
from echoip.server import Server

LOCALHOST = Endpoint.of("127.0.0.1", 0)


@pytest.fixture
def running_server():
    server = Server(LOCALHOST, poll_interval=0.05)
    endpoint = server.bind()
    t = threading.Thread(target=server.serve_forever, daemon=True)
    t.start()
    try:
        yield server, endpoint
    finally:
        server.stop()
        t.join(timeout=2.0)


@pytest.fixture
def peer():
    """A plain loopback UDP socket for playing the other side of an exchange."""
    sock = bind_udp(LOCALHOST, timeout_s=2.0)
    try:
        yield sock
    finally:
        sock.close()


class FakeSocket:
    """Stands in for a UDP socket; replays queued recvfrom results."""

    def __init__(self, incoming=(), sent_size=None, send_error=None, name=("127.0.0.1", 5300)):
        self.incoming = list(incoming)
        self.sent: list[tuple[bytes, tuple]] = []
        self.sent_size = sent_size
        self.send_error = send_error
        self.name = name
        self.closed = False
        self.on_empty = None

    def recvfrom(self, bufsize: int):
        if not self.incoming:
            if self.on_empty is not None:
                self.on_empty()
            raise TimeoutError("timed out")
        item = self.incoming.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def sendto(self, data: bytes, addr) -> int:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((data, addr))
        return len(data) if self.sent_size is None else self.sent_size

    def getsockname(self):
        return self.name

    def close(self) -> None:
        self.closed = True
