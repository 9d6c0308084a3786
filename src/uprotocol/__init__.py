""" Python implementation of the uProtocol addressing and remote invocation
    core. This includes the address model and its wire forms, the message
    envelope and its validation, transports, and the client and server
    halves of the RPC pattern.
"""

# Utility components.

from . import config
from . import validation
from . import uuid

# Submodules used by multiple other components.

from . import uri
from . import protocol
from . import transport

# Primary public-facing interfaces.

from .uri import UAuthority, UEntity, UResource, UUri
from .protocol import UAttributes, UAttributesBuilder, UCode, UMessage, UMessageType
from .protocol import UPayload, UPayloadFormat, UPriority, UStatus, UStatusError
from .rpc import CallOptions, RpcClient, RpcServer

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
