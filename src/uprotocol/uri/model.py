""" Immutable value types describing a uProtocol address. A :class:`UUri`
    names a resource (a topic or an RPC method) on a software entity,
    optionally scoped by a remote authority (a device or domain).

    Instances are never modified in place; use :func:`dataclasses.replace`
    to derive a modified copy.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional


WILDCARD_ID = 0xFFFF
WILDCARD_VERSION = 0xFF
WILDCARD_AUTHORITY = '*'

# Resource ids at or above this value are topics; below it, methods.
MIN_TOPIC_ID = 0x8000

# Resource ids below this value are presumed to be RPC methods when decoding
# an address that carries no resource name.
MAX_RPC_ID = 1000

RESPONSE_RESOURCE_ID = 0

IPV4_LENGTH = 4
IPV6_LENGTH = 16
MAX_ID_LENGTH = 255


def is_wildcard(value, bits=16) -> bool:
    """ Return True if *value* is the reserved all-ones sentinel for a field
        of the given width.
    """

    return value is not None and value == (1 << bits) - 1



def _check_range(name, value, bits):
    if value is None:
        return

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, not {type(value).__name__}")

    if value < 0 or value >= (1 << bits):
        raise ValueError(f"{name} {value} does not fit in {bits} bits")



@dataclass(frozen=True)
class UAuthority:
    """ The device or domain hosting a software entity. An authority has an
        optional *name*, and at most one resolved numeric form: either an
        *ip* address (4 or 16 packed bytes) or an opaque *id* (1-255 bytes).
    """

    name: Optional[str] = None
    ip: Optional[bytes] = None
    id: Optional[bytes] = None

    def __post_init__(self):
        if self.ip is not None and self.id is not None:
            raise ValueError('an authority is addressed by ip or by id, not both')

        if self.ip is not None:
            object.__setattr__(self, 'ip', bytes(self.ip))
        if self.id is not None:
            object.__setattr__(self, 'id', bytes(self.id))

    def is_empty(self) -> bool:
        return not self.name and not self.ip and not self.id

    def is_wildcard(self) -> bool:
        return self.name == WILDCARD_AUTHORITY

    def is_micro_encodable(self) -> bool:
        if self.ip:
            return len(self.ip) in (IPV4_LENGTH, IPV6_LENGTH)
        if self.id:
            return len(self.id) <= MAX_ID_LENGTH
        return False

# end of class UAuthority



@dataclass(frozen=True)
class UEntity:
    """ A software entity (a service or application), addressed by *name*
        and/or numeric *id*, plus its major version.
    """

    name: Optional[str] = None
    id: Optional[int] = None
    version_major: Optional[int] = None

    def __post_init__(self):
        _check_range('entity id', self.id, 16)
        _check_range('entity version', self.version_major, 8)

    def is_empty(self) -> bool:
        return not self.name and self.id is None and self.version_major is None

    def is_micro_encodable(self) -> bool:
        return self.id is not None and self.version_major is not None

# end of class UEntity



@dataclass(frozen=True)
class UResource:
    """ A topic or method on a software entity. The long form addresses a
        resource as *name*, optional *instance*, and optional *message*
        (the type name of the data it carries); compact forms use the
        numeric *id* alone.
    """

    name: Optional[str] = None
    instance: Optional[str] = None
    message: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        _check_range('resource id', self.id, 16)

    @classmethod
    def for_rpc_request(cls, method=None, id=None) -> UResource:
        return cls(name='rpc', instance=method, id=id)

    @classmethod
    def for_rpc_response(cls) -> UResource:
        return cls(name='rpc', instance='response', id=RESPONSE_RESOURCE_ID)

    @classmethod
    def from_id(cls, id) -> UResource:
        """ Build a resource from its numeric *id* alone. Small ids are
            RPC methods by convention, and are named accordingly.
        """

        if id is not None and id < MAX_RPC_ID:
            return cls(name='rpc', id=id)
        return cls(id=id)

    def is_empty(self) -> bool:
        return not self.name and not self.instance and not self.message and self.id is None

# end of class UResource



@dataclass(frozen=True)
class UUri:
    """ A complete uProtocol address. An absent *authority* means the
        address is local to the default transport; an absent *resource*
        addresses the entity as a whole.
    """

    authority: Optional[UAuthority] = None
    entity: UEntity = UEntity()
    resource: Optional[UResource] = None

    EMPTY = None

    def is_empty(self) -> bool:
        return (self.authority is None or self.authority.is_empty()) and \
               self.entity.is_empty() and \
               (self.resource is None or self.resource.is_empty())

    def is_local(self) -> bool:
        return self.authority is None

    def is_remote(self) -> bool:
        return self.authority is not None

    @staticmethod
    def is_wildcard_field(value, bits=16) -> bool:
        return is_wildcard(value, bits)

    def has_wildcard(self) -> bool:
        """ Return True if any field of this address is a wildcard. """

        if self.authority is not None and self.authority.is_wildcard():
            return True
        if is_wildcard(self.entity.id) or is_wildcard(self.entity.version_major, 8):
            return True
        if self.resource is not None and is_wildcard(self.resource.id):
            return True
        return False

    def is_micro_encodable(self) -> bool:
        """ Return True if this address can be expressed in the binary micro
            form: numeric entity id and version, a numeric resource id, and
            either no authority or an authority with a usable ip or id.
        """

        if self.is_empty():
            return False
        if not self.entity.is_micro_encodable():
            return False
        if self.resource is None or self.resource.id is None:
            return False
        if self.authority is not None and not self.authority.is_micro_encodable():
            return False
        return True

    def replace(self, **changes) -> UUri:
        return dataclasses.replace(self, **changes)

# end of class UUri


UUri.EMPTY = UUri()

ANY = UUri(authority=UAuthority(name=WILDCARD_AUTHORITY),
           entity=UEntity(id=WILDCARD_ID, version_major=WILDCARD_VERSION),
           resource=UResource(id=WILDCARD_ID))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
