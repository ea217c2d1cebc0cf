"""echoip: discover your public IPv4 address over UDP

A client sends an empty datagram to an echo server; the server replies with
the 4-byte network-order address it saw the datagram come from.

- `codec` turns addresses into payloads and back
- `client` runs one timed request/response exchange
- `server` answers requests forever, surviving bad peers
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
