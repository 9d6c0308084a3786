""" The human-readable long form of a :class:`UUri`::

        [scheme:][//authority]/entity[/version][/resource]

    where *resource* is ``name[.instance][#message]``. The long form carries
    names only; numeric ids are not represented.
"""

from .model import UAuthority, UEntity, UResource, UUri


def serialize(uri):
    """ Return the long form of *uri*, or an empty string if *uri* is empty,
        has a remote authority with no name, or has a version or resource
        but no entity name.
    """

    if uri is None or uri.is_empty():
        return ''

    pieces = list()

    if uri.authority is not None:
        name = uri.authority.name
        if not name or name.strip() == '':
            return ''
        pieces.append('//' + name)

    entity = uri.entity
    named = bool(entity.name) and entity.name.strip() != ''

    # Without the entity name the remaining segments shift left, and the
    # string would read back as a different address.

    if not named and (entity.version_major is not None or uri.resource is not None):
        return ''

    pieces.append('/')
    if named:
        pieces.append(entity.name.strip())

    pieces.append('/')
    if entity.version_major is not None:
        pieces.append(str(entity.version_major))

    if uri.resource is not None:
        pieces.append('/')
        pieces.append(_resource(uri.resource))

    return ''.join(pieces).rstrip('/')



def _resource(resource):
    text = resource.name or ''

    if resource.instance:
        text = text + '.' + resource.instance
    if resource.message:
        text = text + '#' + resource.message

    return text



def deserialize(string):
    """ Parse a long form address. Malformed input yields :data:`UUri.EMPTY`;
        this function does not raise.
    """

    if not string or string.strip() == '':
        return UUri.EMPTY

    uri = _strip_scheme(string).replace('\\', '/')
    parts = _split(uri)

    if len(parts) < 2:
        return UUri.EMPTY

    authority = None

    if uri.startswith('//'):
        if len(parts) < 3 or parts[2].strip() == '':
            return UUri.EMPTY

        authority = UAuthority(name=parts[2])
        if len(parts) == 3:
            return UUri(authority=authority)

        offset = 3
    else:
        offset = 1

    name = parts[offset]
    version = parts[offset + 1] if len(parts) > offset + 1 else ''
    resource = parts[offset + 2] if len(parts) > offset + 2 else ''

    if len(parts) > offset + 3:
        return UUri.EMPTY

    if name.strip() == '':
        return UUri.EMPTY

    try:
        if version.strip() == '':
            version = None
        else:
            version = int(version)

        entity = UEntity(name=name, version_major=version)
    except ValueError:
        return UUri.EMPTY

    if resource == '':
        resource = None
    else:
        resource = _parse_resource(resource)

    return UUri(authority=authority, entity=entity, resource=resource)



def _parse_resource(text):
    name, _, message = text.partition('#')
    name, _, instance = name.partition('.')

    instance = instance or None
    message = message or None

    if name == 'rpc' and instance == 'response':
        resource = UResource.for_rpc_response()
        if message is not None:
            resource = UResource(name=resource.name, instance=resource.instance,
                                 message=message, id=resource.id)
        return resource

    return UResource(name=name, instance=instance, message=message)



def _strip_scheme(string):
    """ Discard any scheme prefix: everything up to a colon that precedes
        the first slash.
    """

    colon = string.find(':')
    if colon == -1:
        return string

    slash = string.find('/')
    if slash != -1 and slash < colon:
        return string

    return string[colon + 1:]



def _split(uri):
    """ Split on slashes, ignoring any trailing empty segments. """

    parts = uri.split('/')
    while parts and parts[-1] == '':
        parts.pop()
    return parts


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
