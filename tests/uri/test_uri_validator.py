from uprotocol.uri import validator
from uprotocol.uri.long import deserialize
from uprotocol.uri.model import UAuthority, UEntity, UResource, UUri


def test_validate():
    assert validator.validate(deserialize('/hartley')).is_success()
    assert validator.validate(deserialize('//vcu/hartley/1')).is_success()
    assert validator.validate(UUri(entity=UEntity(id=4))).is_success()


def test_validate_empty():
    result = validator.validate(UUri.EMPTY)

    assert result.is_failure()
    assert result.message == 'Uri is empty.'


def test_validate_missing_authority():
    uri = UUri(authority=UAuthority(), entity=UEntity(name='hartley'))

    assert validator.validate(uri).message == 'Uri is remote missing uAuthority.'


def test_validate_missing_entity():
    uri = UUri(authority=UAuthority(name='vcu'), resource=UResource(name='door'))

    assert validator.validate(uri).message == 'Uri is missing uSoftware Entity name.'


def test_rpc_method():
    assert validator.validate_rpc_method(deserialize('/hartley/1/rpc.echo')).is_success()
    assert validator.validate_rpc_method(deserialize('//vcu/hartley/1/rpc.echo')).is_success()

    numbered = UUri(entity=UEntity(id=4, version_major=1), resource=UResource(id=5))
    assert validator.validate_rpc_method(numbered).is_success()

    result = validator.validate_rpc_method(deserialize('/hartley/1/door.front_left'))
    assert result.message == 'Invalid RPC method uri. Uri should be the method to be called, or method from response.'

    assert validator.validate_rpc_method(UUri.EMPTY).message == 'Uri is empty.'


def test_rpc_method_predicate():
    assert validator.is_rpc_method(UUri(resource=UResource(name='rpc', id=0)))
    assert validator.is_rpc_method(UUri(resource=UResource(name='rpc', id=0x7fff)))
    assert not validator.is_rpc_method(UUri(resource=UResource(name='rpc', id=0x8000)))
    assert not validator.is_rpc_method(UUri(resource=UResource(name='rpc', instance=' ')))
    assert not validator.is_rpc_method(UUri(resource=UResource(name='rpc')))
    assert validator.is_rpc_method(UUri(resource=UResource(id=5)))
    assert not validator.is_rpc_method(UUri(resource=UResource(id=0x8000)))
    assert not validator.is_rpc_method(UUri(resource=UResource()))
    assert not validator.is_rpc_method(UUri(resource=UResource(name='door', id=5)))
    assert not validator.is_rpc_method(UUri(entity=UEntity(name='hartley')))
    assert not validator.is_rpc_method(None)


def test_rpc_response():
    assert validator.validate_rpc_response(deserialize('/hartley/1/rpc.response')).is_success()

    numbered = UUri(entity=UEntity(id=4, version_major=1), resource=UResource(id=0))
    assert validator.validate_rpc_response(numbered).is_success()

    result = validator.validate_rpc_response(deserialize('/hartley/1/rpc.echo'))
    assert result.message == 'Invalid RPC response type.'


def test_forms():
    named = deserialize('//vcu/hartley/1/door')
    numbered = UUri(entity=UEntity(id=4, version_major=1), resource=UResource(id=0x8000))
    both = UUri(entity=UEntity(name='hartley', id=4, version_major=1),
                resource=UResource(name='door', id=0x8000))

    assert validator.is_long_form(named)
    assert not validator.is_micro_form(named)
    assert validator.is_micro_form(numbered)
    assert not validator.is_long_form(numbered)
    assert validator.is_resolved(both)
    assert not validator.is_resolved(named)
    assert not validator.is_long_form(UUri.EMPTY)
    assert not validator.is_long_form(UUri(authority=UAuthority(id=b'vcu'), entity=both.entity, resource=both.resource))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
