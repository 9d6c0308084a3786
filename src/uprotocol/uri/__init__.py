""" The uProtocol address, its three wire forms, and the predicates used to
    validate and match addresses.
"""

from . import model
from . import ip
from . import long
from . import short
from . import micro
from . import resolve
from . import validator
from . import filter

from .model import UAuthority, UEntity, UResource, UUri, ANY
from .resolve import build_resolved
from .filter import UriFilter

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
