"""ZMQ multipart framing for uProtocol messages.

Publish (PUB/SUB)
    version, header_json, payload

The header is a JSON object holding every attribute that is set, plus the
payload format; addresses are written as nested objects so that names and
numeric ids both survive the trip.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, Optional, Sequence, Tuple

from ...protocol.message import UAttributes, UMessage, UMessageType, UPayload, UPayloadFormat, UPriority
from ...protocol.status import UCode
from ...uri.model import UAuthority, UEntity, UResource, UUri


PROTOCOL_VERSION = b'1'


def to_frames(message: UMessage) -> Tuple[bytes, ...]:
    """Encode a message as ZMQ multipart frames."""

    attributes = message.attributes

    header: Dict[str, Any] = {
        'id': _id_out(attributes.id),
        'type': int(attributes.type),
        'source': uri_to_dict(attributes.source),
        'sink': uri_to_dict(attributes.sink),
        'priority': int(attributes.priority),
        'ttl': attributes.ttl,
        'reqid': _id_out(attributes.reqid),
        'commstatus': None if attributes.commstatus is None else int(attributes.commstatus),
        'permission_level': attributes.permission_level,
        'token': attributes.token,
        'traceparent': attributes.traceparent,
        'format': int(message.payload.format),
    }

    header = {key: value for key, value in header.items() if value is not None}
    header = json.dumps(header, separators=(',', ':')).encode()

    return (PROTOCOL_VERSION, header, message.payload.data)


def from_frames(parts: Sequence[bytes]) -> UMessage:
    """Decode ZMQ multipart frames into a message.

    Raises ValueError for frames that are not a well-formed message.
    """

    if len(parts) != 3:
        raise ValueError(f"expected 3 frames, received {len(parts)}")

    version, header, payload = parts

    if version != PROTOCOL_VERSION:
        raise ValueError(f"message is protocol {version!r}, recipient expects {PROTOCOL_VERSION!r}")

    header = json.loads(header)

    commstatus = header.get('commstatus')
    if commstatus is not None:
        commstatus = UCode(commstatus)

    attributes = UAttributes(
        id=_id_in(header.get('id')),
        type=UMessageType(header.get('type', 0)),
        source=uri_from_dict(header.get('source')),
        sink=uri_from_dict(header.get('sink')),
        priority=UPriority(header.get('priority', 0)),
        ttl=header.get('ttl'),
        reqid=_id_in(header.get('reqid')),
        commstatus=commstatus,
        permission_level=header.get('permission_level'),
        token=header.get('token'),
        traceparent=header.get('traceparent'),
    )

    payload = UPayload(bytes(payload), UPayloadFormat(header.get('format', 0)))
    return UMessage(attributes, payload)


def uri_to_dict(uri: Optional[UUri]) -> Optional[Dict[str, Any]]:
    if uri is None:
        return None

    result: Dict[str, Any] = dict()

    if uri.authority is not None:
        authority = uri.authority
        result['authority'] = _prune({
            'name': authority.name,
            'ip': None if authority.ip is None else authority.ip.hex(),
            'id': None if authority.id is None else authority.id.hex(),
        })

    entity = uri.entity
    result['entity'] = _prune({
        'name': entity.name,
        'id': entity.id,
        'version_major': entity.version_major,
    })

    if uri.resource is not None:
        resource = uri.resource
        result['resource'] = _prune({
            'name': resource.name,
            'instance': resource.instance,
            'message': resource.message,
            'id': resource.id,
        })

    return result


def uri_from_dict(data: Optional[Dict[str, Any]]) -> Optional[UUri]:
    if data is None:
        return None

    authority = data.get('authority')
    if authority is not None:
        ip = authority.get('ip')
        id = authority.get('id')
        authority = UAuthority(name=authority.get('name'),
                               ip=None if ip is None else bytes.fromhex(ip),
                               id=None if id is None else bytes.fromhex(id))

    entity = UEntity(**data.get('entity', {}))

    resource = data.get('resource')
    if resource is not None:
        resource = UResource(**resource)

    return UUri(authority=authority, entity=entity, resource=resource)


def _prune(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def _id_out(id: Optional[uuid.UUID]) -> Optional[str]:
    return None if id is None else str(id)


def _id_in(text: Optional[str]) -> Optional[uuid.UUID]:
    return None if text is None else uuid.UUID(text)
