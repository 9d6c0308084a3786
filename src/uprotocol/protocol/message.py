""" The uProtocol message: a :class:`UAttributes` envelope describing how
    the message is to be routed and handled, plus an opaque
    :class:`UPayload`.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from typing import Optional

from ..uri.model import UUri
from .status import UCode


class UMessageType(enum.IntEnum):
    UNSPECIFIED = 0
    PUBLISH = 1
    REQUEST = 2
    RESPONSE = 3
    NOTIFICATION = 4



class UPriority(enum.IntEnum):
    """ Quality of service classes, in increasing order of importance. """

    UNSPECIFIED = 0
    CS0 = 1
    CS1 = 2
    CS2 = 3
    CS3 = 4
    CS4 = 5
    CS5 = 6
    CS6 = 7



class UPayloadFormat(enum.IntEnum):
    UNSPECIFIED = 0
    PROTOBUF_WRAPPED_IN_ANY = 1
    PROTOBUF = 2
    JSON = 3
    SOMEIP = 4
    SOMEIP_TLV = 5
    RAW = 6
    TEXT = 7



@dataclass(frozen=True)
class UPayload:
    """ Opaque message content: the raw *data*, and a *format* tag that
        tells the receiver how to interpret it. The content is never
        inspected here.
    """

    data: bytes = b''
    format: UPayloadFormat = UPayloadFormat.UNSPECIFIED

    EMPTY = None

    def __post_init__(self):
        object.__setattr__(self, 'data', bytes(self.data))
        object.__setattr__(self, 'format', UPayloadFormat(self.format))

    def is_empty(self) -> bool:
        return self.data == b''

# end of class UPayload


UPayload.EMPTY = UPayload()



@dataclass(frozen=True)
class UAttributes:
    """ The envelope of every message.

        :ivar id: Unique, time-ordered identifier of this message.
        :ivar type: The :class:`UMessageType`; drives every other rule.
        :ivar source: Address of the sender.
        :ivar sink: Address of the recipient, where the type requires one.
        :ivar priority: The :class:`UPriority` of the message.
        :ivar ttl: Time to live in milliseconds; zero or None never expires.
        :ivar reqid: For responses, the id of the originating request.
        :ivar commstatus: For responses, a remote-side failure code.
        :ivar permission_level: Opaque, passed through.
        :ivar token: Opaque access token, passed through.
        :ivar traceparent: Opaque tracing context, passed through.
    """

    id: Optional[uuid.UUID] = None
    type: UMessageType = UMessageType.UNSPECIFIED
    source: Optional[UUri] = None
    sink: Optional[UUri] = None
    priority: UPriority = UPriority.UNSPECIFIED
    ttl: Optional[int] = None
    reqid: Optional[uuid.UUID] = None
    commstatus: Optional[UCode] = None
    permission_level: Optional[int] = None
    token: Optional[str] = None
    traceparent: Optional[str] = None

# end of class UAttributes



@dataclass(frozen=True)
class UMessage:

    attributes: UAttributes
    payload: UPayload = UPayload.EMPTY

    @property
    def id(self):
        return self.attributes.id

    @property
    def type(self):
        return self.attributes.type

# end of class UMessage


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
