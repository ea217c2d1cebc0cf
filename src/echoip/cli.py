from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .client import discover
from .config import parse_client_args, parse_server_args
from .errors import EchoIpError
from .server import Server

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def client_main(argv: Optional[Sequence[str]] = None) -> int:
    config = parse_client_args(argv)
    logging.basicConfig(level=getattr(logging, config.log_level), format=LOG_FORMAT)

    try:
        addr = discover(config.server)
    except EchoIpError as e:
        print(e, file=sys.stderr)
        return 1
    print(addr)
    return 0


def server_main(argv: Optional[Sequence[str]] = None) -> int:
    config = parse_server_args(argv)
    logging.basicConfig(level=getattr(logging, config.log_level), format=LOG_FORMAT)

    server = Server(config.listen)
    try:
        server.bind()
    except EchoIpError as e:
        logging.error("%s", e)
        return 1

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logging.info("interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(client_main())
