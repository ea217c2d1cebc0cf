from __future__ import annotations

import socket
from dataclasses import dataclass
from ipaddress import IPv4Address, ip_address
from typing import Any, Tuple

SockAddr = Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class Endpoint:
    address: IPv4Address
    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")

    @classmethod
    def of(cls, host: str | IPv4Address, port: int) -> "Endpoint":
        return cls(IPv4Address(host), port)

    @classmethod
    def from_sockaddr(cls, sockaddr: SockAddr) -> "Endpoint":
        """Build an endpoint from a (host, port) pair as returned by the socket module.

        Raises ValueError for anything that is not an IPv4 socket address,
        including IPv4-mapped IPv6 addresses.
        """
        if len(sockaddr) != 2:
            raise ValueError(f"not an IPv4 socket address: {sockaddr!r}")
        host, port = sockaddr
        addr = ip_address(host)
        if not isinstance(addr, IPv4Address):
            raise ValueError(f"not an IPv4 socket address: {sockaddr!r}")
        return cls(addr, port)

    def to_sockaddr(self) -> Tuple[str, int]:
        return (str(self.address), self.port)

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


def format_sockaddr(sockaddr: SockAddr | Endpoint) -> str:
    if isinstance(sockaddr, Endpoint):
        return str(sockaddr)
    host, port = sockaddr[0], sockaddr[1]
    if ":" in str(host):
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def local_endpoint(sock: socket.socket) -> Endpoint:
    return Endpoint.from_sockaddr(sock.getsockname())


def bind_udp(endpoint: Endpoint, timeout_s: float | None = None) -> socket.socket:
    """Open an IPv4 UDP socket bound to `endpoint`.

    The socket is closed again if binding fails, and the OSError propagates.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(endpoint.to_sockaddr())
        sock.settimeout(timeout_s)
    except OSError:
        sock.close()
        raise
    return sock
