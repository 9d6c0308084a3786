""" Handler registration and request dispatch by the RPC server. """

import threading
import time

import pytest

from uprotocol.protocol.builder import UAttributesBuilder
from uprotocol.protocol.message import UMessageType, UPayload, UPayloadFormat
from uprotocol.protocol.status import UCode, UStatus, UStatusError
from uprotocol.rpc import RpcServer
from uprotocol.uri.model import ANY, UAuthority, UEntity, UResource, UUri


payload = UPayload(b'hello', UPayloadFormat.TEXT)

caller = UUri(entity=UEntity(name='dashboard', id=9, version_major=1),
              resource=UResource.for_rpc_response())


def echo(request):
    return request.payload


def request_for(method):
    return UAttributesBuilder.request(caller, method, ttl=1000).message(payload)


def wait_for_response(recording, timeout=5):
    expiration = time.time() + timeout
    while time.time() < expiration:
        if recording.sent:
            return recording.sent[-1]
        time.sleep(0.01)

    pytest.fail('no response sent')


def test_register(recording, method):
    server = RpcServer(recording)

    assert server.register_request_handler(method, echo).is_success()
    assert recording.listeners == [(ANY, method, server._handle_request)]

    assert server.unregister_request_handler(method, echo).is_success()
    assert recording.listeners == []


def test_register_twice(recording, method):
    server = RpcServer(recording)

    assert server.register_request_handler(method, echo).is_success()

    status = server.register_request_handler(method, echo)
    assert status.code == UCode.ALREADY_EXISTS
    assert status.message == 'Handler already registered'
    assert len(recording.listeners) == 1


def test_unregister_unknown(recording, method):
    server = RpcServer(recording)

    status = server.unregister_request_handler(method, echo)
    assert status.code == UCode.NOT_FOUND
    assert status.message == 'Handler not found'


def test_unregister_other_handler(recording, method):
    server = RpcServer(recording)
    server.register_request_handler(method, echo)

    status = server.unregister_request_handler(method, lambda request: None)
    assert status.code == UCode.NOT_FOUND
    assert len(recording.listeners) == 1


@pytest.mark.parametrize('change', [
    dict(authority=UAuthority(name='steven')),
    dict(authority=None),
    dict(entity=UEntity(name='body.access', id=5, version_major=1)),
    dict(entity=UEntity(name='body.access', id=4, version_major=2)),
])
def test_wrong_address(recording, method, change):
    server = RpcServer(recording)
    foreign = method.replace(**change)

    for operation in (server.register_request_handler, server.unregister_request_handler):
        status = operation(foreign, echo)
        assert status.code == UCode.INVALID_ARGUMENT
        assert status.message == 'Method URI does not match the transport source URI'

    assert recording.listeners == []


def test_not_a_method(recording, source):
    server = RpcServer(recording)
    topic = source.replace(resource=UResource(name='door', id=0x8000))

    status = server.register_request_handler(topic, echo)
    assert status.code == UCode.INVALID_ARGUMENT
    assert recording.listeners == []


def test_transport_failure(recording, method):
    recording.register_status = UStatus(UCode.FAILED_PRECONDITION, 'no')
    server = RpcServer(recording)

    status = server.register_request_handler(method, echo)
    assert status.code == UCode.FAILED_PRECONDITION
    assert server.handlers == dict()


def test_response(recording, method):
    server = RpcServer(recording)
    server.register_request_handler(method, echo)

    request = request_for(method)
    recording.deliver(request)

    response = wait_for_response(recording)
    attributes = response.attributes

    assert attributes.type == UMessageType.RESPONSE
    assert attributes.reqid == request.attributes.id
    assert attributes.source == method
    assert attributes.sink == caller
    assert attributes.commstatus is None
    assert response.payload == payload


def test_empty_response(recording, method):
    server = RpcServer(recording)
    server.register_request_handler(method, lambda request: None)

    recording.deliver(request_for(method))

    assert wait_for_response(recording).payload == UPayload.EMPTY


def test_status_error(recording, method):

    def refuse(request):
        raise UStatusError(UCode.FAILED_PRECONDITION, 'door is locked')

    server = RpcServer(recording)
    server.register_request_handler(method, refuse)

    recording.deliver(request_for(method))
    response = wait_for_response(recording)

    assert response.attributes.commstatus == UCode.FAILED_PRECONDITION
    assert response.payload == UPayload.EMPTY


def test_unexpected_exception(recording, method):

    def broken(request):
        raise RuntimeError('broken handler')

    server = RpcServer(recording)
    server.register_request_handler(method, broken)

    recording.deliver(request_for(method))
    response = wait_for_response(recording)

    assert response.attributes.commstatus == UCode.INTERNAL
    assert response.payload == UPayload.EMPTY


def test_ignored_messages(recording, method, source):
    server = RpcServer(recording)
    server.register_request_handler(method, echo)

    other = method.replace(resource=UResource.for_rpc_request('close_door', 13))
    recording.deliver(request_for(other))

    topic = source.replace(resource=UResource(name='door', id=0x8000))
    recording.deliver(UAttributesBuilder.notification(topic, method).message(payload))

    time.sleep(0.1)
    assert recording.sent == []


def test_handlers_run_off_delivery_path(recording, method):
    release = threading.Event()

    def slow(request):
        release.wait(5)
        return request.payload

    server = RpcServer(recording)
    server.register_request_handler(method, slow)

    # deliver() returns without waiting for the handler.

    recording.deliver(request_for(method))
    assert recording.sent == []

    release.set()
    assert wait_for_response(recording).payload == payload


def test_close(recording, method):
    server = RpcServer(recording)
    server.register_request_handler(method, echo)

    server.close()
    assert recording.listeners == []


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
