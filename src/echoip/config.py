from __future__ import annotations

import argparse
from dataclasses import dataclass
from ipaddress import IPv4Address
from typing import Optional, Sequence

from . import __version__
from .constants import DEFAULT_LISTEN_HOST, DEFAULT_PORT
from .net import Endpoint

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def port_number(val: str) -> int:
    try:
        port = int(val)
    except ValueError:
        raise argparse.ArgumentTypeError("Not a valid port number") from None
    if not 0 <= port <= 0xFFFF:
        raise argparse.ArgumentTypeError("Not a valid port number")
    return port


def ipv4_address(val: str) -> IPv4Address:
    try:
        return IPv4Address(val)
    except ValueError:
        raise argparse.ArgumentTypeError("Not a valid IP address") from None


def add_port_argument(parser: argparse.ArgumentParser, help: str) -> None:
    parser.add_argument(
        "-p",
        "--port",
        type=port_number,
        default=DEFAULT_PORT,
        metavar="PORT",
        help=f"{help} (default: {DEFAULT_PORT})",
    )


@dataclass(frozen=True, slots=True)
class ClientConfig:
    address: IPv4Address
    port: int = DEFAULT_PORT
    log_level: str = "WARNING"

    @property
    def server(self) -> Endpoint:
        return Endpoint(self.address, self.port)


@dataclass(frozen=True, slots=True)
class ServerConfig:
    address: IPv4Address = IPv4Address(DEFAULT_LISTEN_HOST)
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def listen(self) -> Endpoint:
        return Endpoint(self.address, self.port)


def build_client_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="echoip", description="Gets the public IP address of the caller.")
    parser.add_argument("address", type=ipv4_address, metavar="ADDRESS", help="The IP address of the echo server")
    add_port_argument(parser, "The port number to use on the echo server")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_server_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="echoipd", description="Echoes each caller's IP address back to it.")
    parser.add_argument(
        "address",
        nargs="?",
        type=ipv4_address,
        default=IPv4Address(DEFAULT_LISTEN_HOST),
        metavar="ADDRESS",
        help=f"The IP address to listen on (default: {DEFAULT_LISTEN_HOST})",
    )
    add_port_argument(parser, "The port number to listen on")
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_client_args(argv: Optional[Sequence[str]] = None) -> ClientConfig:
    args = build_client_parser().parse_args(argv)
    return ClientConfig(args.address, args.port, args.log_level)


def parse_server_args(argv: Optional[Sequence[str]] = None) -> ServerConfig:
    args = build_server_parser().parse_args(argv)
    return ServerConfig(args.address, args.port, args.log_level)
