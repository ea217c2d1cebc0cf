from __future__ import annotations

import logging
import socket
from dataclasses import dataclass, field
from ipaddress import IPv4Address

from .codec import DecodeError, decode
from .constants import CLIENT_RECV_BUFSIZE, PROBE, RECV_TIMEOUT_S
from .errors import EchoIpError
from .net import Endpoint, bind_udp, local_endpoint

ANY_LOCAL = Endpoint(IPv4Address("0.0.0.0"), 0)


@dataclass(slots=True)
class ClientSession:
    """One probe/response exchange with an echo server.

    `run()` does bind, send, receive and decode in order and either returns
    the address the server saw or raises EchoIpError for the first step that
    failed. There is no retry.
    """

    server: Endpoint
    sock: socket.socket | None = field(default=None, init=False, repr=False)

    def run(self) -> IPv4Address:
        self.bind()
        try:
            self.send_probe()
            payload = self.receive_response()
            return self.decode_response(payload)
        finally:
            self.close()

    def bind(self) -> None:
        try:
            self.sock = bind_udp(ANY_LOCAL, timeout_s=RECV_TIMEOUT_S)
        except OSError as exc:
            raise EchoIpError.bind_failure(ANY_LOCAL) from exc
        logging.debug("client bound to %s", local_endpoint(self.sock))

    def send_probe(self) -> None:
        assert self.sock is not None
        try:
            sent = self.sock.sendto(PROBE, self.server.to_sockaddr())
        except OSError as exc:
            raise EchoIpError.send_failure(self.server) from exc
        if sent != len(PROBE):
            raise EchoIpError.mismatched_send_size(self.server, sent, len(PROBE))
        logging.debug("probe sent to %s", self.server)

    def receive_response(self) -> bytes:
        assert self.sock is not None
        try:
            data, sender = self.sock.recvfrom(CLIENT_RECV_BUFSIZE)
        except OSError as exc:
            # TimeoutError included
            raise EchoIpError.receive_failure(local_endpoint(self.sock)) from exc
        if sender != self.server.to_sockaddr():
            logging.debug("response from unexpected sender %s", sender)
            raise EchoIpError.receive_failure(local_endpoint(self.sock))
        logging.debug("received %d bytes from %s", len(data), self.server)
        return data

    def decode_response(self, payload: bytes) -> IPv4Address:
        try:
            return decode(payload)
        except DecodeError as exc:
            raise EchoIpError.mismatched_recv_size(self.server, exc.actual, exc.expected) from exc

    def close(self) -> None:
        if self.sock is not None:
            self.sock.close()
            self.sock = None


def discover(server: Endpoint) -> IPv4Address:
    return ClientSession(server).run()
