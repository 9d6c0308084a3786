"""ZeroMQ transport backend."""

from . import framing
from .transport import ZmqTransport
