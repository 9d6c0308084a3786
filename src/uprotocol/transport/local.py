"""In-process transport.

Every :class:`LocalTransport` attached to the same :class:`Bus` sees every
message sent by any of them; several entities can therefore be modelled
within one process, with delivery performed by worker threads just as an
out-of-process transport would.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ..protocol.message import UMessage
from ..protocol.status import UCode, UStatus
from ..protocol.validator import get_validator
from ..uri.model import UUri
from .base import Listener, Transport
from .listeners import ListenerRegistry


logger = logging.getLogger(__name__)


class Bus:
    """The shared medium connecting local transports."""

    def __init__(self):
        self.lock = threading.Lock()
        self.transports = list()

    def attach(self, transport: LocalTransport) -> None:
        with self.lock:
            self.transports.append(transport)

    def detach(self, transport: LocalTransport) -> None:
        with self.lock:
            try:
                self.transports.remove(transport)
            except ValueError:
                pass

    def publish(self, message: UMessage) -> int:
        with self.lock:
            transports = tuple(self.transports)

        count = 0
        for transport in transports:
            count += transport.registry.dispatch(message)
        return count


default_bus = Bus()


class LocalTransport(Transport):
    """A transport for entities living in the same process."""

    def __init__(self, source: UUri, bus: Optional[Bus] = None, workers: Optional[int] = None):
        self.source = source
        self.bus = bus if bus is not None else default_bus
        self.registry = ListenerRegistry(workers)
        self.closed = False

        self.bus.attach(self)

    def send(self, message: UMessage) -> UStatus:
        if self.closed:
            return UStatus(UCode.UNAVAILABLE, 'Transport is closed')

        result = get_validator(message.attributes).validate(message.attributes)
        if result.is_failure():
            logger.warning('rejected message %s: %s', message.id, result.message)
            return result.to_status()

        delivered = self.bus.publish(message)
        logger.debug('message %s delivered to %d listeners', message.id, delivered)
        return UStatus.ok()

    def register_listener(self, source_filter: UUri, sink_filter: UUri, listener: Listener) -> UStatus:
        if self.closed:
            return UStatus(UCode.UNAVAILABLE, 'Transport is closed')

        return self.registry.register(source_filter, sink_filter, listener)

    def unregister_listener(self, source_filter: UUri, sink_filter: UUri, listener: Listener) -> UStatus:
        return self.registry.unregister(source_filter, sink_filter, listener)

    def get_source(self) -> UUri:
        return self.source

    def close(self) -> None:
        if self.closed:
            return

        self.closed = True
        self.bus.detach(self)
        self.registry.close()
