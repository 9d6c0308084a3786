""" The outcome of a validation pass, shared by the URI and attribute
    validators.
"""


class ValidationResult:
    """ A :class:`ValidationResult` is either a success, or a failure
        carrying a human-readable message. Failures from several rules
        are combined by joining their messages with a comma.
    """

    __slots__ = ('message',)

    def __init__(self, message=''):
        self.message = message


    @classmethod
    def success(cls):
        return _SUCCESS


    @classmethod
    def failure(cls, message):
        return cls(message)


    def is_success(self):
        return self.message == ''


    def is_failure(self):
        return self.message != ''


    def to_status(self):
        from .protocol.status import UCode, UStatus

        if self.is_success():
            return UStatus.ok()

        return UStatus(UCode.INVALID_ARGUMENT, self.message)


    def __eq__(self, other):
        if isinstance(other, ValidationResult):
            return self.message == other.message
        return NotImplemented


    def __hash__(self):
        return hash(self.message)


    def __bool__(self):
        return self.is_success()


    def __repr__(self):
        if self.is_success():
            return 'ValidationResult.success()'
        return 'ValidationResult.failure(%r)' % (self.message,)

# end of class ValidationResult


_SUCCESS = ValidationResult()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
