from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .. import config
from ..protocol.message import UPriority


@dataclass(frozen=True)
class CallOptions:
    """ Per-invocation settings for :func:`RpcClient.invoke_method`.

        :ivar timeout: Milliseconds to wait for the response; also the ttl
            of the request.
        :ivar priority: The :class:`UPriority` of the request.
        :ivar token: Optional access token attached to the request.
    """

    timeout: int = field(default_factory=lambda: config.rpc_timeout)
    priority: UPriority = UPriority.CS4
    token: Optional[str] = None

    def __post_init__(self):
        if self.timeout is None or self.timeout <= 0:
            raise ValueError(f"timeout must be a positive number of milliseconds, not {self.timeout}")

# end of class CallOptions


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
