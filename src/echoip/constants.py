from __future__ import annotations

DEFAULT_PORT = 5300
DEFAULT_LISTEN_HOST = "0.0.0.0"

PROBE = b""
ADDR_LEN = 4  # IPv4 octets, network order

RECV_TIMEOUT_S = 5.0

SERVER_RECV_BUFSIZE = 8
CLIENT_RECV_BUFSIZE = 16  # larger than ADDR_LEN so oversize replies are caught
