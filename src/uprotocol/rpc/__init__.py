""" Request/response on top of a one-way transport. """

from .options import CallOptions
from .client import Invocation, RpcClient
from .server import RpcServer

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
