""" Time-ordered identifiers for uProtocol messages. Identifiers are plain
    :class:`uuid.UUID` instances; this module mints them, recognizes them,
    and recovers the send timestamp embedded within them.

    A uProtocol UUID is a UUIDv8 laid out as follows::

        48 bits  unix timestamp, milliseconds
         4 bits  version (8)
        12 bits  counter, for ids minted within the same millisecond
         2 bits  variant (RFC 4122)
        62 bits  random, fixed for the lifetime of the factory

    UUIDv6 identifiers are also accepted as time-ordered; the timestamp is
    recovered from the Gregorian 100-nanosecond clock they carry.
"""

import random
import threading
import time
import uuid

from .validation import ValidationResult


UPROTOCOL = 8
TIME_ORDERED = 6

MAX_COUNT = 0xfff

# 100-nanosecond intervals between 1582-10-15 and 1970-01-01.
GREGORIAN_OFFSET = 0x01b21dd213814000

_random_bits = random.SystemRandom()


class UuidFactory:
    """ Mint uProtocol UUIDv8 identifiers. Each factory picks its random
        tail once; ids minted within the same millisecond are kept in order
        by a counter that saturates at :data:`MAX_COUNT`.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.random = _random_bits.getrandbits(62)
        self.last = None
        self.count = 0


    def new_id(self, now=None):
        """ Return a new :class:`uuid.UUID`. *now*, if specified, is the
            unix timestamp in milliseconds to embed in the identifier.
        """

        if now is None:
            now = time.time_ns() // 1000000

        with self.lock:
            if now == self.last:
                if self.count < MAX_COUNT:
                    self.count += 1
            else:
                self.last = now
                self.count = 0

            count = self.count

        msb = ((now & 0xffffffffffff) << 16) | (UPROTOCOL << 12) | count
        lsb = (0b10 << 62) | self.random

        return uuid.UUID(int=(msb << 64) | lsb)


    def extract_timestamp(self, id):
        return extract_timestamp(id)

# end of class UuidFactory



def get_version(id):
    """ Return the version nibble of *id*, regardless of its variant. """

    return (id.int >> 76) & 0xf



def is_uprotocol(id):
    return _is_rfc(id) and get_version(id) == UPROTOCOL



def is_time_ordered(id):
    return _is_rfc(id) and get_version(id) == TIME_ORDERED



def is_uuid(id):
    """ Return True if *id* is a uProtocol UUIDv8 or a UUIDv6; anything else,
        including objects that are not :class:`uuid.UUID` instances, is not
        a valid message identifier.
    """

    return is_uprotocol(id) or is_time_ordered(id)



def extract_timestamp(id):
    """ Return the unix timestamp, in milliseconds, at which *id* was
        minted. None is returned if the identifier does not carry a
        timestamp.
    """

    if is_uprotocol(id):
        return id.int >> 80

    if is_time_ordered(id):
        msb = id.int >> 64
        high = msb >> 32
        middle = (msb >> 16) & 0xffff
        low = msb & 0xfff

        gregorian = (high << 28) | (middle << 12) | low
        if gregorian < GREGORIAN_OFFSET:
            return None

        return (gregorian - GREGORIAN_OFFSET) // 10000

    return None



def validate(id):
    """ Validate *id* as a message identifier, returning a
        :class:`uprotocol.validation.ValidationResult`.
    """

    if not isinstance(id, uuid.UUID):
        return ValidationResult.failure('Invalid UUID')

    errors = list()

    if get_version(id) not in (UPROTOCOL, TIME_ORDERED):
        errors.append('Invalid UUID Version')

    if id.variant != uuid.RFC_4122:
        errors.append('Invalid UUID Variant')

    if extract_timestamp(id) is None:
        errors.append('Invalid UUID Time')

    if errors:
        return ValidationResult.failure(','.join(errors))

    return ValidationResult.success()



def _is_rfc(id):
    return isinstance(id, uuid.UUID) and id.variant == uuid.RFC_4122



factory = UuidFactory()
new_id = factory.new_id


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
