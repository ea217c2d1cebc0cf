from __future__ import annotations

from ipaddress import IPv4Address

import pytest

from echoip.net import Endpoint, bind_udp, format_sockaddr, local_endpoint


def test_endpoint_str_and_sockaddr():
    ep = Endpoint.of("10.1.2.3", 5300)
    assert ep.address == IPv4Address("10.1.2.3")
    assert str(ep) == "10.1.2.3:5300"
    assert ep.to_sockaddr() == ("10.1.2.3", 5300)
    assert Endpoint.from_sockaddr(("10.1.2.3", 5300)) == ep


def test_endpoint_is_immutable():
    ep = Endpoint.of("10.1.2.3", 5300)
    with pytest.raises(AttributeError):
        ep.port = 1  # type: ignore[misc]


@pytest.mark.parametrize("port", [-1, 65536])
def test_endpoint_rejects_bad_port(port):
    with pytest.raises(ValueError):
        Endpoint.of("127.0.0.1", port)


@pytest.mark.parametrize(
    "sockaddr",
    [("::1", 0, 0, 0), ("::ffff:1.2.3.4", 80, 0, 0), ("::1", 80), ("not-an-ip", 80)],
)
def test_from_sockaddr_rejects_non_ipv4(sockaddr):
    with pytest.raises(ValueError):
        Endpoint.from_sockaddr(sockaddr)


def test_format_sockaddr():
    assert format_sockaddr(("1.2.3.4", 9)) == "1.2.3.4:9"
    assert format_sockaddr(("fe80::1", 9, 0, 2)) == "[fe80::1]:9"
    assert format_sockaddr(Endpoint.of("1.2.3.4", 9)) == "1.2.3.4:9"


def test_bind_udp_assigns_port_and_timeout():
    sock = bind_udp(Endpoint.of("127.0.0.1", 0), timeout_s=0.5)
    try:
        ep = local_endpoint(sock)
        assert ep.address == IPv4Address("127.0.0.1")
        assert ep.port != 0
        assert sock.gettimeout() == 0.5
    finally:
        sock.close()


def test_bind_udp_blocking_by_default():
    sock = bind_udp(Endpoint.of("127.0.0.1", 0))
    try:
        assert sock.gettimeout() is None
    finally:
        sock.close()


def test_bind_udp_fails_on_port_in_use():
    first = bind_udp(Endpoint.of("127.0.0.1", 0))
    try:
        with pytest.raises(OSError):
            bind_udp(local_endpoint(first))
    finally:
        first.close()
