from __future__ import annotations

import uuid
from typing import Optional

from .. import uuid as ids
from ..uri.model import UUri
from .message import UAttributes, UMessage, UMessageType, UPayload, UPriority
from .status import UCode


class UAttributesBuilder:
    """ Fluent construction of :class:`UAttributes`. Start from one of the
        per-type class methods, chain any optional setters, then call
        :func:`build`; an id is minted at build time unless one was set.
    """

    def __init__(self, source: UUri, type: UMessageType, priority: UPriority, id_generator=None):
        self._generator = id_generator or ids.factory

        self._source = source
        self._type = type
        self._priority = UPriority(priority)

        self._id: Optional[uuid.UUID] = None
        self._sink: Optional[UUri] = None
        self._ttl: Optional[int] = None
        self._reqid: Optional[uuid.UUID] = None
        self._commstatus: Optional[UCode] = None
        self._permission_level: Optional[int] = None
        self._token: Optional[str] = None
        self._traceparent: Optional[str] = None

    # Per-type starting points
    @classmethod
    def publish(cls, source: UUri, priority=UPriority.CS1, **kwargs):
        return cls(source, UMessageType.PUBLISH, priority, **kwargs)

    @classmethod
    def notification(cls, source: UUri, sink: UUri, priority=UPriority.CS1, **kwargs):
        return cls(source, UMessageType.NOTIFICATION, priority, **kwargs).with_sink(sink)

    @classmethod
    def request(cls, source: UUri, sink: UUri, priority=UPriority.CS4, ttl: Optional[int] = None, **kwargs):
        return cls(source, UMessageType.REQUEST, priority, **kwargs).with_sink(sink).with_ttl(ttl)

    @classmethod
    def response(cls, source: UUri, sink: UUri, priority=UPriority.CS4, reqid: Optional[uuid.UUID] = None, **kwargs):
        return cls(source, UMessageType.RESPONSE, priority, **kwargs).with_sink(sink).with_reqid(reqid)

    @classmethod
    def response_for(cls, request: UAttributes, **kwargs):
        """ Start the response to *request*: addressed back to its source,
            from its sink, correlated by its id.
        """

        return cls.response(request.sink, request.source, request.priority, request.id, **kwargs)

    # Optional fields
    def with_id(self, id: Optional[uuid.UUID]):
        self._id = id
        return self

    def with_sink(self, sink: Optional[UUri]):
        self._sink = sink
        return self

    def with_ttl(self, ttl: Optional[int]):
        self._ttl = ttl
        return self

    def with_reqid(self, reqid: Optional[uuid.UUID]):
        self._reqid = reqid
        return self

    def with_commstatus(self, commstatus: Optional[UCode]):
        self._commstatus = None if commstatus is None else UCode(commstatus)
        return self

    def with_permission_level(self, level: Optional[int]):
        self._permission_level = level
        return self

    def with_token(self, token: Optional[str]):
        self._token = token
        return self

    def with_traceparent(self, traceparent: Optional[str]):
        self._traceparent = traceparent
        return self

    # Finalize
    def build(self) -> UAttributes:

        id = self._id
        if id is None:
            id = self._generator.new_id()

        return UAttributes(
            id=id,
            type=self._type,
            source=self._source,
            sink=self._sink,
            priority=self._priority,
            ttl=self._ttl,
            reqid=self._reqid,
            commstatus=self._commstatus,
            permission_level=self._permission_level,
            token=self._token,
            traceparent=self._traceparent,
        )

    def message(self, payload: Optional[UPayload] = None) -> UMessage:
        """ Build the attributes and wrap them, with *payload*, in a
            :class:`UMessage`.
        """

        if payload is None:
            payload = UPayload.EMPTY

        return UMessage(self.build(), payload)

# end of class UAttributesBuilder


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
