import threading
import uuid

import pytest

import uprotocol
from uprotocol.protocol.status import UCode, UStatus
from uprotocol.transport.base import Transport
from uprotocol.transport.local import Bus, LocalTransport


class RecordingTransport(Transport):
    """ A transport that delivers nothing on its own: sent messages are
        recorded, and the test decides what arrives and when by calling
        deliver(). The status returned by send() and the registration
        methods can be set per test.
    """

    def __init__(self, source):
        self.source = source
        self.sent = list()
        self.listeners = list()
        self.send_status = UStatus.ok()
        self.register_status = UStatus.ok()
        self.send_exception = None
        self.lock = threading.Lock()

    def send(self, message):
        if self.send_exception is not None:
            raise self.send_exception

        with self.lock:
            self.sent.append(message)
        return self.send_status

    def register_listener(self, source_filter, sink_filter, listener):
        if self.register_status.is_failure():
            return self.register_status

        self.listeners.append((source_filter, sink_filter, listener))
        return UStatus.ok()

    def unregister_listener(self, source_filter, sink_filter, listener):
        try:
            self.listeners.remove((source_filter, sink_filter, listener))
        except ValueError:
            return UStatus(UCode.NOT_FOUND)
        return UStatus.ok()

    def get_source(self):
        return self.source

    def deliver(self, message):
        for _source, _sink, listener in tuple(self.listeners):
            listener(message)



class FixedIds:
    """ An id generator that always mints the same id. """

    def __init__(self, id):
        self.id = id
        self.count = 0

    def new_id(self):
        self.count += 1
        return self.id



@pytest.fixture
def source():
    authority = uprotocol.UAuthority(name='hartley')
    entity = uprotocol.UEntity(name='body.access', id=4, version_major=1)
    return uprotocol.UUri(authority=authority, entity=entity)


@pytest.fixture
def method(source):
    return source.replace(resource=uprotocol.UResource.for_rpc_request('open_door', 12))


@pytest.fixture
def recording(source):
    return RecordingTransport(source)


@pytest.fixture
def fixed_ids():
    return FixedIds(uprotocol.uuid.new_id())


@pytest.fixture
def bus():
    return Bus()


@pytest.fixture
def transport(source, bus):
    transport = LocalTransport(source, bus=bus)
    yield transport
    transport.close()


@pytest.fixture
def not_a_uuid():
    # Version 4, not time-ordered.
    return uuid.UUID('b0a2d9f5-3c51-4b8e-9a43-0d5b6e1f2a77')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
