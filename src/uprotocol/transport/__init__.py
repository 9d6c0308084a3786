"""Transport layer implementations."""

from .. import config

from .base import (
    Listener,
    Transport,
    TransportError,
    TransportConnectionError,
    TransportPortError,
)
from .local import Bus, LocalTransport


def create(source, **kwargs):
    """Create a transport for *source* using the backend named by the
    ``UPROTOCOL_TRANSPORT`` environment variable.
    """

    backend = config.transport

    if backend == "local":
        return LocalTransport(source, **kwargs)
    elif backend == "zmq":
        from .zmq import ZmqTransport
        return ZmqTransport(source, **kwargs)

    raise ValueError(f"unknown UPROTOCOL_TRANSPORT backend: {backend!r}")
