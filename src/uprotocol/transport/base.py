"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`uprotocol.protocol` so the message layer remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ..protocol.message import UMessage
from ..protocol.status import UStatus
from ..uri.model import UUri


Listener = Callable[[UMessage], None]


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class TransportPortError(TransportError):
    """No suitable endpoint could be bound or connected."""


class Transport(ABC):
    """Minimal contract for a message transport.

    Every operation reports its outcome as a :class:`UStatus`; only
    failures to set the transport up in the first place raise.
    """

    @abstractmethod
    def send(self, message: UMessage) -> UStatus:
        """Send a message."""

    @abstractmethod
    def register_listener(self, source_filter: UUri, sink_filter: UUri, listener: Listener) -> UStatus:
        """Deliver messages matching both filters to *listener*."""

    @abstractmethod
    def unregister_listener(self, source_filter: UUri, sink_filter: UUri, listener: Listener) -> UStatus:
        """Stop delivering to *listener*.

        Does not return until any delivery already in progress for this
        registration has finished.
        """

    @abstractmethod
    def get_source(self) -> UUri:
        """The address of the local entity using this transport."""

    def close(self) -> None:
        """Release any resources held by the transport."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
