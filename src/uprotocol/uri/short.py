""" The compact short form of a :class:`UUri`::

        [scheme:][//authority]/entity-id[/version[/resource-id]]

    Numeric fields are written as lowercase hexadecimal. The authority, if
    present, is either an IP address literal or the text of an opaque id.
"""

import re

from . import ip
from .long import _split, _strip_scheme
from .model import UAuthority, UEntity, UResource, UUri


_hex = re.compile(r'^[0-9a-fA-F]+$')


def serialize(uri):
    """ Return the short form of *uri*, or an empty string if *uri* lacks
        the numeric fields the short form requires.
    """

    if uri is None or uri.is_empty():
        return ''

    entity = uri.entity
    if entity.id is None:
        return ''

    pieces = list()

    if uri.authority is not None:
        authority = _authority(uri.authority)
        if authority is None:
            return ''
        pieces.append('//' + authority)

    pieces.append('/%x' % (entity.id,))

    resource = uri.resource

    if entity.version_major is not None or resource is not None:
        pieces.append('/')
        if entity.version_major is not None:
            pieces.append('%x' % (entity.version_major,))

    if resource is not None:
        if resource.id is None:
            return ''
        pieces.append('/%x' % (resource.id,))

    return ''.join(pieces)



def _authority(authority):
    if authority.ip:
        return ip.unpack(authority.ip)

    if authority.id:
        try:
            text = authority.id.decode('utf-8')
        except UnicodeDecodeError:
            return None

        if text.strip() == '' or '/' in text:
            return None
        return text

    return None



def deserialize(string):
    """ Parse a short form address. Malformed input yields
        :data:`UUri.EMPTY`; this function does not raise.
    """

    if not string or string.strip() == '':
        return UUri.EMPTY

    uri = _strip_scheme(string).replace('\\', '/')
    parts = _split(uri)

    if len(parts) < 2:
        return UUri.EMPTY

    authority = None

    if uri.startswith('//'):
        if len(parts) < 3:
            return UUri.EMPTY

        text = parts[2]
        if text.strip() == '':
            return UUri.EMPTY

        packed = ip.pack(text)
        if packed is None:
            authority = UAuthority(id=text.encode('utf-8'))
        else:
            authority = UAuthority(ip=packed)

        if len(parts) == 3:
            return UUri(authority=authority)

        offset = 3
    else:
        offset = 1

    if len(parts) > offset + 3:
        return UUri.EMPTY

    fields = parts[offset:] + [''] * (offset + 3 - len(parts))
    entity_id, version, resource_id = fields

    try:
        entity_id = _number(entity_id, 16)
        version = _number(version, 8)
        resource_id = _number(resource_id, 16)
    except ValueError:
        return UUri.EMPTY

    if entity_id is None:
        return UUri.EMPTY

    entity = UEntity(id=entity_id, version_major=version)

    if resource_id is None:
        resource = None
    else:
        resource = UResource(id=resource_id)

    return UUri(authority=authority, entity=entity, resource=resource)



def _number(token, bits):
    """ Parse a hexadecimal *token* that must fit in *bits*. A blank token
        is an absent field.
    """

    if token == '':
        return None

    if _hex.match(token) is None:
        raise ValueError('not a hexadecimal value: ' + repr(token))

    value = int(token, 16)
    if value >= (1 << bits):
        raise ValueError('value exceeds %d bits: %s' % (bits, token))

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
