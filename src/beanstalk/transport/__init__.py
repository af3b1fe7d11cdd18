"""Transport layer implementations."""

import os

from .base import (
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
)

_BACKEND = os.environ.get("BEANSTALK_TRANSPORT", "zmq")

if _BACKEND == "zmq":
    from .zmq import stream
else:
    raise ImportError(f"unknown BEANSTALK_TRANSPORT backend: {_BACKEND!r}")


def connect(address: str, port: int) -> Transport:
    """Return an open transport to the server at *address* and *port*."""

    transport = stream.Stream(address, port)
    transport.open()
    return transport
