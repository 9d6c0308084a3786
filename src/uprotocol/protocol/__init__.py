"""
uProtocol Message Layer
=======================

This package defines the transport-agnostic message model: the status
codes reported to callers, the attribute envelope and payload of every
message, a fluent builder for attributes, and the per-type validator that
decides whether a message may be sent.

The message layer MUST NOT depend on any transport implementation.

Layer Overview
--------------

status.py      UCode, UStatus, UStatusError
message.py     UAttributes, UPayload, UMessage and their enumerations
builder.py     UAttributesBuilder
validator.py   AttributesValidator, get_validator(), is_expired()
"""

from . import status
from . import message
from . import builder
from . import validator

from .status import UCode, UStatus, UStatusError
from .message import UAttributes, UMessage, UMessageType, UPayload, UPayloadFormat, UPriority
from .builder import UAttributesBuilder

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
