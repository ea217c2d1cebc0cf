from __future__ import annotations

from ipaddress import IPv4Address

from .constants import ADDR_LEN


class DecodeError(ValueError):
    def __init__(self, actual: int, expected: int = ADDR_LEN):
        super().__init__(f"{actual} bytes of address data, expected {expected} bytes")
        self.actual = actual
        self.expected = expected


def encode(addr: IPv4Address) -> bytes:
    return addr.packed


def decode(raw: bytes) -> IPv4Address:
    if len(raw) != ADDR_LEN:
        raise DecodeError(len(raw))
    return IPv4Address(bytes(raw))
