from __future__ import annotations

import enum
from typing import Optional, Union

from .net import Endpoint, SockAddr, format_sockaddr


class ErrorKind(enum.Enum):
    BIND_FAILURE = "bind_failure"
    SEND_FAILURE = "send_failure"
    MISMATCHED_SEND_SIZE = "mismatched_send_size"
    RECEIVE_FAILURE = "receive_failure"
    MISMATCHED_RECV_SIZE = "mismatched_recv_size"
    INVALID_ADDRESS = "invalid_address"


class EchoIpError(Exception):
    """A failed step of an echoip exchange.

    There is exactly one error type; `kind` says which step failed. The
    size-mismatch kinds also carry the `actual` and `expected` byte counts.
    `endpoint` is the peer or local address involved, which for
    INVALID_ADDRESS is the raw socket address of a non-IPv4 sender.
    """

    def __init__(
        self,
        kind: ErrorKind,
        endpoint: Union[Endpoint, SockAddr],
        actual: Optional[int] = None,
        expected: Optional[int] = None,
    ):
        self.kind = kind
        self.endpoint = endpoint
        self.actual = actual
        self.expected = expected
        super().__init__(self._message())

    def _message(self) -> str:
        where = format_sockaddr(self.endpoint)
        if self.kind is ErrorKind.BIND_FAILURE:
            return f"unable to bind socket to {where}"
        if self.kind is ErrorKind.SEND_FAILURE:
            return f"error sending data to {where}"
        if self.kind is ErrorKind.MISMATCHED_SEND_SIZE:
            return f"sent {self.actual} of {self.expected} bytes to {where}"
        if self.kind is ErrorKind.RECEIVE_FAILURE:
            return f"error receiving data on {where}"
        if self.kind is ErrorKind.MISMATCHED_RECV_SIZE:
            return f"received {self.actual} of {self.expected} bytes from {where}"
        return f"received invalid address {where}"

    def __repr__(self) -> str:
        return f"EchoIpError({self.kind.name}, {self!s})"

    @classmethod
    def bind_failure(cls, endpoint: Endpoint) -> "EchoIpError":
        return cls(ErrorKind.BIND_FAILURE, endpoint)

    @classmethod
    def send_failure(cls, endpoint: Endpoint) -> "EchoIpError":
        return cls(ErrorKind.SEND_FAILURE, endpoint)

    @classmethod
    def mismatched_send_size(cls, endpoint: Endpoint, actual: int, expected: int) -> "EchoIpError":
        return cls(ErrorKind.MISMATCHED_SEND_SIZE, endpoint, actual, expected)

    @classmethod
    def receive_failure(cls, endpoint: Endpoint) -> "EchoIpError":
        return cls(ErrorKind.RECEIVE_FAILURE, endpoint)

    @classmethod
    def mismatched_recv_size(cls, endpoint: Endpoint, actual: int, expected: int) -> "EchoIpError":
        return cls(ErrorKind.MISMATCHED_RECV_SIZE, endpoint, actual, expected)

    @classmethod
    def invalid_address(cls, sender: SockAddr) -> "EchoIpError":
        return cls(ErrorKind.INVALID_ADDRESS, sender)
