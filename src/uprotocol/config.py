""" Runtime configuration. Every setting is read once from the environment
    when this module is imported; callers that need a different value can
    either set the environment variable before importing :mod:`uprotocol`,
    or assign to the module attribute directly.
"""

import os


def _integer(name, default):
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default

    return int(value)


transport = os.environ.get('UPROTOCOL_TRANSPORT', 'local')

# Milliseconds.
rpc_timeout = _integer('UPROTOCOL_RPC_TIMEOUT', 10000)

rpc_workers = _integer('UPROTOCOL_RPC_WORKERS', 8)
dispatch_workers = _integer('UPROTOCOL_DISPATCH_WORKERS', 4)

# Milliseconds a ZeroMQ socket will hold unsent messages after close().
zmq_linger = _integer('UPROTOCOL_ZMQ_LINGER', 0)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
