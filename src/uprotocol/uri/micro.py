""" The binary micro form of a :class:`UUri`, for transports where every
    byte matters. The layout is fixed::

        byte 0     format version (1)
        byte 1     authority type: 0 local, 1 IPv4, 2 IPv6, 3 opaque id
        bytes 2-3  resource id, big-endian
        bytes 4-5  entity id, big-endian
        byte 6     entity major version
        byte 7     reserved: written as zero, ignored when read

    followed by the authority: nothing for a local address, 4 or 16 bytes
    for an IP address, or a length byte and 1-255 bytes for an opaque id.
    Only numeric fields survive the trip; names are not represented, and a
    decoded resource carries its id alone.
"""

import enum
import struct

from .model import IPV4_LENGTH, IPV6_LENGTH, MAX_ID_LENGTH
from .model import UAuthority, UEntity, UResource, UUri


VERSION = 1

header = struct.Struct('>BBHHBB')


class AddressType(enum.IntEnum):
    LOCAL = 0
    IPV4 = 1
    IPV6 = 2
    ID = 3



def serialize(uri):
    """ Return the micro form of *uri* as bytes; empty bytes are returned if
        *uri* cannot be represented in the micro form.
    """

    if uri is None or not uri.is_micro_encodable():
        return b''

    authority = uri.authority

    if authority is None:
        kind = AddressType.LOCAL
        trailer = b''
    elif authority.ip:
        if len(authority.ip) == IPV4_LENGTH:
            kind = AddressType.IPV4
        else:
            kind = AddressType.IPV6
        trailer = authority.ip
    else:
        kind = AddressType.ID
        trailer = bytes((len(authority.id),)) + authority.id

    prefix = header.pack(VERSION, kind, uri.resource.id, uri.entity.id,
                         uri.entity.version_major, 0)

    return prefix + trailer



def deserialize(data):
    """ Parse the micro form contained in *data*. Anything other than a
        well-formed buffer of exactly the expected length yields
        :data:`UUri.EMPTY`; this function does not raise.
    """

    if not data or len(data) < header.size:
        return UUri.EMPTY

    data = bytes(data)
    version, kind, resource_id, entity_id, entity_version, _ = header.unpack_from(data)

    if version != VERSION:
        return UUri.EMPTY

    try:
        kind = AddressType(kind)
    except ValueError:
        return UUri.EMPTY

    trailer = data[header.size:]

    if kind == AddressType.LOCAL:
        if trailer:
            return UUri.EMPTY
        authority = None

    elif kind == AddressType.IPV4:
        if len(trailer) != IPV4_LENGTH:
            return UUri.EMPTY
        authority = UAuthority(ip=trailer)

    elif kind == AddressType.IPV6:
        if len(trailer) != IPV6_LENGTH:
            return UUri.EMPTY
        authority = UAuthority(ip=trailer)

    else:
        if not trailer:
            return UUri.EMPTY

        length = trailer[0]
        if length == 0 or length > MAX_ID_LENGTH or len(trailer) != length + 1:
            return UUri.EMPTY
        authority = UAuthority(id=trailer[1:])

    entity = UEntity(id=entity_id, version_major=entity_version)
    resource = UResource(id=resource_id)

    return UUri(authority=authority, entity=entity, resource=resource)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
