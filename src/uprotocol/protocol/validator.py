""" Per-message-type validation of :class:`UAttributes`. Each message type
    has its own rule set; :func:`get_validator` picks the rule set for a
    given set of attributes, falling back to the publish rules for any type
    it does not recognize.

    A validator runs every rule, in a fixed order, and reports all the
    failures at once, joined by commas.
"""

import time

from .. import uuid as ids
from ..uri import validator as uri_validator
from ..validation import ValidationResult
from .message import UMessageType, UPriority


class AttributesValidator:
    """ Validate attributes against the rules for one :class:`UMessageType`.

        :ivar type: The message type this validator expects.
        :ivar priority_floor: The lowest acceptable :class:`UPriority`.
    """

    floors = {
        UMessageType.PUBLISH: UPriority.CS1,
        UMessageType.NOTIFICATION: UPriority.CS1,
        UMessageType.REQUEST: UPriority.CS4,
        UMessageType.RESPONSE: UPriority.CS4,
    }

    def __init__(self, type):
        self.type = UMessageType(type)
        self.priority_floor = self.floors[self.type]


    def validate(self, attributes):
        """ Run every rule against *attributes*, returning a single
            :class:`uprotocol.validation.ValidationResult`.
        """

        rules = (self.validate_id,
                 self.validate_type,
                 self.validate_ttl,
                 self.validate_sink,
                 self.validate_priority,
                 self.validate_permission_level,
                 self.validate_reqid)

        errors = list()
        for rule in rules:
            result = rule(attributes)
            if result.is_failure():
                errors.append(result.message)

        if errors:
            return ValidationResult.failure(','.join(errors))

        return ValidationResult.success()


    def validate_id(self, attributes):
        id = attributes.id

        if id is None:
            return ValidationResult.failure('Missing id')

        if not ids.is_uuid(id):
            return ValidationResult.failure('Attributes must contain valid uProtocol UUID in id property')

        return ValidationResult.success()


    def validate_type(self, attributes):
        if attributes.type != self.type:
            return ValidationResult.failure('Wrong Attribute Type [%s]' % (_name(attributes.type),))

        return ValidationResult.success()


    def validate_ttl(self, attributes):
        ttl = attributes.ttl

        if ttl is None:
            if self.type == UMessageType.REQUEST:
                return ValidationResult.failure('Missing TTL')
            return ValidationResult.success()

        if ttl <= 0:
            return ValidationResult.failure('Invalid TTL [%s]' % (ttl,))

        return ValidationResult.success()


    def validate_sink(self, attributes):
        sink = attributes.sink
        missing = sink is None or sink.is_empty()

        if self.type == UMessageType.PUBLISH:
            if sink is None:
                return ValidationResult.success()
            if uri_validator.validate(sink).is_failure():
                return ValidationResult.failure('Invalid Sink Uri')
            return ValidationResult.success()

        if missing:
            return ValidationResult.failure('Missing Sink')

        if self.type == UMessageType.REQUEST:
            return uri_validator.validate_rpc_method(sink)

        if self.type == UMessageType.RESPONSE:
            if uri_validator.validate_rpc_response(sink).is_failure():
                return ValidationResult.failure('Invalid Sink Uri')
            return ValidationResult.success()

        return uri_validator.validate(sink)


    def validate_priority(self, attributes):
        priority = attributes.priority

        if priority is None or priority < self.priority_floor:
            return ValidationResult.failure('Invalid UPriority [%s]' % (_name(priority),))

        return ValidationResult.success()


    def validate_permission_level(self, attributes):
        level = attributes.permission_level

        if level is not None and level < 0:
            return ValidationResult.failure('Invalid Permission Level')

        return ValidationResult.success()


    def validate_reqid(self, attributes):
        reqid = attributes.reqid

        if self.type == UMessageType.RESPONSE:
            if reqid is None:
                return ValidationResult.failure('Missing correlationId')
            if not ids.is_uuid(reqid):
                return ValidationResult.failure('Invalid correlation UUID')
            return ValidationResult.success()

        if reqid is not None and not ids.is_uuid(reqid):
            return ValidationResult.failure('Invalid UUID')

        return ValidationResult.success()


    def __repr__(self):
        return 'AttributesValidator(%s)' % (self.type.name,)

# end of class AttributesValidator


validators = {type: AttributesValidator(type) for type in AttributesValidator.floors}



def get_validator(attributes):
    """ Return the :class:`AttributesValidator` for the type of *attributes*;
        an unrecognized type gets the publish rules.
    """

    try:
        return validators[attributes.type]
    except KeyError:
        return validators[UMessageType.PUBLISH]



def validate(attributes):
    return get_validator(attributes).validate(attributes)



def is_expired(attributes, now=None):
    """ Return True if the time to live of *attributes* has elapsed. A
        missing or non-positive ttl, or an id that carries no timestamp,
        never expires. *now* is a unix timestamp in milliseconds.
    """

    ttl = attributes.ttl
    if ttl is None or ttl <= 0:
        return False

    sent = ids.extract_timestamp(attributes.id)
    if sent is None:
        return False

    if now is None:
        now = time.time_ns() // 1000000

    return sent + ttl < now



def _name(value):
    try:
        return value.name
    except AttributeError:
        return str(value)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
