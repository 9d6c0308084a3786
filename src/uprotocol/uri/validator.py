""" Structural checks for :class:`UUri` addresses: whether an address is
    usable at all, whether it names an RPC method or response, and which
    wire forms it can be expressed in.
"""

from ..validation import ValidationResult
from .model import MIN_TOPIC_ID, RESPONSE_RESOURCE_ID


def validate(uri):
    """ Validate that *uri* is a usable address. """

    if uri is None or uri.is_empty():
        return ValidationResult.failure('Uri is empty.')

    if uri.authority is not None and uri.authority.is_empty():
        return ValidationResult.failure('Uri is remote missing uAuthority.')

    entity = uri.entity
    if (entity.name is None or entity.name.strip() == '') and entity.id is None:
        return ValidationResult.failure('Uri is missing uSoftware Entity name.')

    return ValidationResult.success()



def validate_rpc_method(uri):
    """ Validate that *uri* is an RPC method, the target of a request. """

    result = validate(uri)
    if result.is_failure():
        return result

    if not is_rpc_method(uri):
        return ValidationResult.failure('Invalid RPC method uri. Uri should be the method to be called, or method from response.')

    return ValidationResult.success()



def validate_rpc_response(uri):
    """ Validate that *uri* is an RPC response, the sink of a response. """

    result = validate(uri)
    if result.is_failure():
        return result

    if not is_rpc_response(uri):
        return ValidationResult.failure('Invalid RPC response type.')

    return ValidationResult.success()



def is_rpc_method(uri):
    """ Return True if *uri* addresses an RPC method: a resource named 'rpc'
        with either a method name or a numeric id in the method range. The
        compact forms carry no names, so a nameless resource with an id in
        the method range also qualifies.
    """

    if uri is None or uri.resource is None:
        return False

    resource = uri.resource
    if not resource.name and not resource.instance and not resource.message:
        return resource.id is not None and resource.id < MIN_TOPIC_ID

    if resource.name != 'rpc':
        return False

    if resource.instance and resource.instance.strip() != '':
        return True

    return resource.id is not None and resource.id < MIN_TOPIC_ID



def is_rpc_response(uri):
    if not is_rpc_method(uri):
        return False

    resource = uri.resource
    return resource.instance == 'response' or resource.id == RESPONSE_RESOURCE_ID



def is_long_form(uri):
    """ Return True if *uri* carries the names required by the long form. """

    if uri is None or uri.is_empty():
        return False

    authority = uri.authority
    if authority is not None and not authority.name:
        return False

    if not uri.entity.name or uri.entity.name.strip() == '':
        return False

    resource = uri.resource
    return resource is not None and bool(resource.name) and resource.name.strip() != ''



def is_micro_form(uri):
    """ Return True if *uri* carries the ids required by the micro form. """

    return uri is not None and uri.is_micro_encodable()



def is_resolved(uri):
    """ Return True if *uri* carries both its names and its ids. """

    return is_long_form(uri) and is_micro_form(uri)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
