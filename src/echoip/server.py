from __future__ import annotations

import enum
import logging
import socket
import threading
from dataclasses import dataclass, field

from .codec import encode
from .constants import ADDR_LEN, SERVER_RECV_BUFSIZE
from .errors import EchoIpError
from .net import Endpoint, SockAddr, bind_udp, local_endpoint


class ServerState(enum.Enum):
    STARTING = "starting"
    SERVING = "serving"
    STOPPED = "stopped"


@dataclass(slots=True)
class ServerStats:
    received: int = 0
    echoed: int = 0
    errors: int = 0


@dataclass(slots=True)
class Server:
    """Echo server: answers every IPv4 datagram with its sender's address.

    Requests are handled one at a time in arrival order. Any failure while
    handling a single datagram is logged and counted, never raised, so one
    bad peer cannot take the server down. Only `bind()` can fail fatally.

    With `poll_interval=None` the receive blocks until a datagram arrives,
    so `stop()` takes effect on the next datagram. A poll interval bounds
    how long that takes.
    """

    endpoint: Endpoint
    poll_interval: float | None = None
    sock: socket.socket | None = field(default=None, init=False, repr=False)
    state: ServerState = field(default=ServerState.STARTING, init=False)
    stats: ServerStats = field(default_factory=ServerStats, init=False)
    _stop: threading.Event = field(default_factory=threading.Event, init=False, repr=False)

    def bind(self) -> Endpoint:
        try:
            self.sock = bind_udp(self.endpoint, timeout_s=self.poll_interval)
        except OSError as exc:
            raise EchoIpError.bind_failure(self.endpoint) from exc
        return local_endpoint(self.sock)

    def serve_forever(self) -> None:
        if self.sock is None:
            self.bind()
        assert self.sock is not None
        self.state = ServerState.SERVING
        logging.info("serving on %s", local_endpoint(self.sock))
        try:
            while not self._stop.is_set():
                self.handle_one()
        finally:
            self.close()
            self.state = ServerState.STOPPED
            logging.info("server stopped; %s", self.stats)

    def stop(self) -> None:
        self._stop.set()

    def handle_one(self) -> None:
        assert self.sock is not None
        try:
            _, sender = self.sock.recvfrom(SERVER_RECV_BUFSIZE)
        except TimeoutError:
            return
        except OSError:
            self._report(EchoIpError.receive_failure(local_endpoint(self.sock)))
            return

        self.stats.received += 1
        try:
            client = self.classify_sender(sender)
            self.send_echo(client)
        except EchoIpError as err:
            self._report(err)
            return
        self.stats.echoed += 1
        logging.debug("echoed %s", client)

    @staticmethod
    def classify_sender(sender: SockAddr) -> Endpoint:
        try:
            return Endpoint.from_sockaddr(sender)
        except ValueError as exc:
            raise EchoIpError.invalid_address(sender) from exc

    def send_echo(self, client: Endpoint) -> None:
        assert self.sock is not None
        payload = encode(client.address)
        try:
            sent = self.sock.sendto(payload, client.to_sockaddr())
        except OSError as exc:
            raise EchoIpError.send_failure(client) from exc
        if sent != ADDR_LEN:
            raise EchoIpError.mismatched_send_size(client, sent, ADDR_LEN)

    def close(self) -> None:
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def _report(self, err: EchoIpError) -> None:
        self.stats.errors += 1
        logging.warning("%s", err)
