""" Per-type validation rules for message attributes, and expiry. """

import dataclasses
import uuid

import pytest

import uprotocol.uuid
from uprotocol.protocol.builder import UAttributesBuilder
from uprotocol.protocol.message import UAttributes, UMessageType, UPriority
from uprotocol.protocol.validator import AttributesValidator, get_validator, is_expired, validate
from uprotocol.uri.model import UAuthority, UEntity, UResource, UUri


source = UUri(authority=UAuthority(name='vcu'),
              entity=UEntity(name='hartley', id=4, version_major=1),
              resource=UResource.for_rpc_response())

method = UUri(authority=UAuthority(name='vcu'),
              entity=UEntity(name='petapp', id=5, version_major=1),
              resource=UResource.for_rpc_request('raise', 3))

topic = source.replace(resource=UResource(name='door', instance='front_left', id=0x8000))


def test_dispatch():
    for type in (UMessageType.PUBLISH, UMessageType.NOTIFICATION, UMessageType.REQUEST, UMessageType.RESPONSE):
        assert get_validator(UAttributes(type=type)).type == type

    assert get_validator(UAttributes()).type == UMessageType.PUBLISH


def test_unspecified_type():
    attributes = UAttributes(id=uprotocol.uuid.new_id(), source=topic, priority=UPriority.CS1)

    result = validate(attributes)
    assert result.message == 'Wrong Attribute Type [UNSPECIFIED]'


def test_wrong_type():
    attributes = UAttributesBuilder.publish(topic).build()

    result = AttributesValidator(UMessageType.NOTIFICATION).validate(attributes)
    assert result.message == 'Wrong Attribute Type [PUBLISH],Missing Sink'


def test_aggregation_order():
    attributes = UAttributes(type=UMessageType.REQUEST, source=source, priority=UPriority.CS4, ttl=1000)

    result = validate(attributes)
    assert result.is_failure()
    assert result.message == 'Missing id,Missing Sink'


def test_everything_wrong():
    attributes = UAttributes(id=uuid.uuid4(),
                             type=UMessageType.RESPONSE,
                             source=method,
                             sink=method,
                             priority=UPriority.CS1,
                             ttl=-5,
                             permission_level=-1)

    result = validate(attributes)
    assert result.message.split(',') == [
        'Attributes must contain valid uProtocol UUID in id property',
        'Invalid TTL [-5]',
        'Invalid Sink Uri',
        'Invalid UPriority [CS1]',
        'Invalid Permission Level',
        'Missing correlationId',
    ]


def test_publish():
    assert validate(UAttributesBuilder.publish(topic).build()).is_success()
    assert validate(UAttributesBuilder.publish(topic).with_sink(source).build()).is_success()

    low = UAttributesBuilder.publish(topic, UPriority.CS0).build()
    assert validate(low).message == 'Invalid UPriority [CS0]'

    bad_ttl = UAttributesBuilder.publish(topic).with_ttl(0).build()
    assert validate(bad_ttl).message == 'Invalid TTL [0]'

    bad_sink = UAttributesBuilder.publish(topic).with_sink(UUri(authority=UAuthority(), entity=UEntity(name='x'))).build()
    assert validate(bad_sink).message == 'Invalid Sink Uri'

    bad_reqid = UAttributesBuilder.publish(topic).with_reqid(uuid.uuid4()).build()
    assert validate(bad_reqid).message == 'Invalid UUID'


def test_notification():
    assert validate(UAttributesBuilder.notification(topic, source).build()).is_success()

    missing = UAttributesBuilder.notification(topic, None).build()
    assert validate(missing).message == 'Missing Sink'

    empty = UAttributesBuilder.notification(topic, UUri.EMPTY).build()
    assert validate(empty).message == 'Missing Sink'


def test_request():
    assert validate(UAttributesBuilder.request(source, method, ttl=1000).build()).is_success()

    no_ttl = UAttributesBuilder.request(source, method).build()
    assert validate(no_ttl).message == 'Missing TTL'

    not_a_method = UAttributesBuilder.request(source, topic, ttl=1000).build()
    assert validate(not_a_method).message == 'Invalid RPC method uri. Uri should be the method to be called, or method from response.'

    low = UAttributesBuilder.request(source, method, UPriority.CS3, 1000).build()
    assert validate(low).message == 'Invalid UPriority [CS3]'


def test_response():
    request = UAttributesBuilder.request(source, method, ttl=1000).build()
    response = UAttributesBuilder.response_for(request).build()
    assert validate(response).is_success()

    missing_reqid = dataclasses.replace(response, reqid=None)
    assert validate(missing_reqid).message == 'Missing correlationId'

    bad_reqid = dataclasses.replace(response, reqid=uuid.uuid4())
    assert validate(bad_reqid).message == 'Invalid correlation UUID'

    bad_sink = dataclasses.replace(response, sink=method)
    assert validate(bad_sink).message == 'Invalid Sink Uri'

    missing_sink = dataclasses.replace(response, sink=None)
    assert validate(missing_sink).message == 'Missing Sink'


def test_permission_level():
    attributes = UAttributesBuilder.publish(topic).with_permission_level(0).build()
    assert validate(attributes).is_success()


@pytest.mark.parametrize('ttl', [None, 0, -1])
def test_never_expires(ttl):
    id = uprotocol.uuid.UuidFactory().new_id(1000)
    attributes = UAttributesBuilder.publish(topic).with_id(id).with_ttl(ttl).build()

    assert not is_expired(attributes, now=10 ** 15)


def test_expiry():
    id = uprotocol.uuid.UuidFactory().new_id(1000)
    attributes = UAttributesBuilder.publish(topic).with_id(id).with_ttl(500).build()

    assert not is_expired(attributes, now=1400)
    assert not is_expired(attributes, now=1500)
    assert is_expired(attributes, now=1501)


def test_expiry_current_time():
    fresh = UAttributesBuilder.publish(topic).with_ttl(60000).build()
    assert not is_expired(fresh)

    stale = UAttributesBuilder.publish(topic).with_id(uprotocol.uuid.UuidFactory().new_id(1000)).with_ttl(1).build()
    assert is_expired(stale)


def test_expiry_without_timestamp():
    attributes = UAttributesBuilder.publish(topic).with_id(uuid.uuid4()).with_ttl(1).build()

    assert not is_expired(attributes, now=10 ** 15)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
