""" Merge the long and micro forms of the same address. The long form
    carries the names, the micro form carries the authoritative numeric
    ids; the result of merging the two is a resolved :class:`UUri`.
"""

from . import long
from . import micro
from .model import UAuthority, UEntity, UResource, UUri


def build_resolved(long_form, micro_form):
    """ Combine the long form string *long_form* and the micro form bytes
        *micro_form* into one :class:`UUri`. If either is missing or cannot
        be decoded the result is :data:`UUri.EMPTY`.
    """

    if not long_form or not micro_form:
        return UUri.EMPTY

    named = long.deserialize(long_form)
    numbered = micro.deserialize(micro_form)

    if named.is_empty() or numbered.is_empty():
        return UUri.EMPTY

    authority = _authority(named.authority, numbered.authority)

    entity = UEntity(name=named.entity.name,
                     id=numbered.entity.id,
                     version_major=numbered.entity.version_major)

    resource = named.resource or UResource()
    resource = UResource(name=resource.name,
                         instance=resource.instance,
                         message=resource.message,
                         id=numbered.resource.id)

    return UUri(authority=authority, entity=entity, resource=resource)



def _authority(named, numbered):
    if named is None and numbered is None:
        return None

    name = named.name if named is not None else None

    if numbered is None:
        return UAuthority(name=name)

    return UAuthority(name=name, ip=numbered.ip, id=numbered.id)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
