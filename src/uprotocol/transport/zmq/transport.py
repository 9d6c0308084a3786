"""ZeroMQ publish/subscribe transport.

Each :class:`ZmqTransport` binds one PUB socket, through which it sends
every message, and connects one SUB socket to the PUB socket of each peer.
Inbound messages are decoded on a background thread and handed to the
listener registry; routing by address happens there, not in ZeroMQ.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterable, Optional

import zmq

from ... import config
from ...protocol.message import UMessage
from ...protocol.status import UCode, UStatus
from ...protocol.validator import get_validator
from ...uri.model import UUri
from ..base import Listener, Transport, TransportConnectionError, TransportPortError
from ..listeners import ListenerRegistry
from .framing import from_frames, to_frames


logger = logging.getLogger(__name__)


class ZmqTransport(Transport):
    """PUB/SUB transport.

    *bind* is the endpoint for this transport's PUB socket; *connect* is an
    iterable of peer endpoints to subscribe to. With *loopback* set, the
    transport also receives the messages it sends itself, so that a client
    and a server sharing one transport can talk to each other.
    """

    poll_interval = 1000

    def __init__(self, source: UUri, bind: str, connect: Iterable[str] = (),
                 loopback: bool = True, context: Optional[zmq.Context] = None,
                 workers: Optional[int] = None):

        self.source = source
        self.endpoint = bind
        self.context = context or zmq.Context.instance()
        self.registry = ListenerRegistry(workers)
        self.closed = False

        self.pub = self.context.socket(zmq.PUB)
        self.pub.setsockopt(zmq.LINGER, config.zmq_linger)

        try:
            self.pub.bind(bind)
        except zmq.ZMQError as exc:
            self.pub.close()
            raise TransportPortError(f"cannot bind {bind}: {exc}") from exc

        self.sub = self.context.socket(zmq.SUB)
        self.sub.setsockopt(zmq.LINGER, 0)
        self.sub.setsockopt(zmq.SUBSCRIBE, b'')

        peers = list(connect)
        if loopback:
            peers.insert(0, self._loopback(bind))

        for peer in peers:
            self._connect(peer)

        self._outbox = queue.SimpleQueue()

        internal = f"inproc://uprotocol.ZmqTransport:signal:{id(self)}"
        self._signal_rx = self.context.socket(zmq.PAIR)
        self._signal_rx.bind(internal)
        self._signal_tx = self.context.socket(zmq.PAIR)
        self._signal_tx.connect(internal)
        self._signal_lock = threading.Lock()

        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()

    @staticmethod
    def _loopback(endpoint: str) -> str:
        # A wildcard bind address cannot be connected to.
        if endpoint.startswith('tcp://*:'):
            return 'tcp://127.0.0.1:' + endpoint[len('tcp://*:'):]
        return endpoint

    def _connect(self, peer: str) -> None:
        try:
            self.sub.connect(peer)
        except zmq.ZMQError as exc:
            raise TransportConnectionError(f"cannot connect to {peer}: {exc}") from exc

    def _signal(self, command, value) -> None:
        self._outbox.put((command, value))
        with self._signal_lock:
            self._signal_tx.send(b'')

    def connect(self, peer: str) -> None:
        """Subscribe to the PUB socket of another transport."""

        self._signal('connect', peer)

    def send(self, message: UMessage) -> UStatus:
        if self.closed:
            return UStatus(UCode.UNAVAILABLE, 'Transport is closed')

        result = get_validator(message.attributes).validate(message.attributes)
        if result.is_failure():
            logger.warning('rejected message %s: %s', message.id, result.message)
            return result.to_status()

        try:
            frames = to_frames(message)
        except (TypeError, ValueError) as exc:
            return UStatus(UCode.INVALID_ARGUMENT, str(exc))

        self._signal('send', frames)
        return UStatus.ok()

    def register_listener(self, source_filter: UUri, sink_filter: UUri, listener: Listener) -> UStatus:
        if self.closed:
            return UStatus(UCode.UNAVAILABLE, 'Transport is closed')

        return self.registry.register(source_filter, sink_filter, listener)

    def unregister_listener(self, source_filter: UUri, sink_filter: UUri, listener: Listener) -> UStatus:
        return self.registry.unregister(source_filter, sink_filter, listener)

    def get_source(self) -> UUri:
        return self.source

    def _handle_outgoing(self) -> None:
        self._signal_rx.recv(flags=zmq.NOBLOCK)
        command, value = self._outbox.get(block=False)

        if command == 'send':
            self.pub.send_multipart(value)
        elif command == 'connect':
            self._connect(value)

    def _handle_incoming(self) -> None:
        parts = self.sub.recv_multipart()

        try:
            message = from_frames(parts)
        except (KeyError, TypeError, ValueError):
            logger.warning('discarding malformed message', exc_info=True)
            return

        self.registry.dispatch(message)

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self.sub, zmq.POLLIN)
        poller.register(self._signal_rx, zmq.POLLIN)

        while not self.closed:
            for active, _flag in poller.poll(self.poll_interval):
                if self.closed:
                    break

                try:
                    if active == self._signal_rx:
                        self._handle_outgoing()
                    elif active == self.sub:
                        self._handle_incoming()
                except (zmq.ZMQError, TransportConnectionError):
                    logger.exception('ZeroMQ transport %s', self.endpoint)

        self.pub.close()
        self.sub.close()
        self._signal_rx.close()

    def close(self) -> None:
        if self.closed:
            return

        self.closed = True
        self._signal('stop', None)
        self.thread.join()

        with self._signal_lock:
            self._signal_tx.close()

        self.registry.close()
