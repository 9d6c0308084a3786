""" Status codes surfaced to callers, and the exception that carries them
    across an asynchronous boundary.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class UCode(enum.IntEnum):
    """ Canonical status codes, numbered as in ``google.rpc.Code``. """

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16



@dataclass(frozen=True)
class UStatus:
    """ The outcome of an operation: a :class:`UCode` and, for failures, a
        human-readable *message*.
    """

    code: UCode = UCode.OK
    message: str = ''

    @classmethod
    def ok(cls) -> UStatus:
        return _OK

    @classmethod
    def failed(cls, code: UCode, message: str = '') -> UStatus:
        return cls(UCode(code), message)

    def is_success(self) -> bool:
        return self.code == UCode.OK

    def is_failure(self) -> bool:
        return self.code != UCode.OK

# end of class UStatus


_OK = UStatus()



class UStatusError(Exception):
    """ Raised, or set on a future, to report a failed operation. The
        :class:`UStatus` is available as the *status* attribute.
    """

    def __init__(self, code, message=None):
        if isinstance(code, UStatus):
            status = code
        else:
            status = UStatus(UCode(code), message or '')

        Exception.__init__(self, status.message)
        self.status = status


    @property
    def code(self):
        return self.status.code


    @property
    def message(self):
        return self.status.message


    def __str__(self):
        if self.status.message:
            return self.status.message
        return self.status.code.name

# end of class UStatusError


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
