from uprotocol.protocol.status import UCode, UStatus, UStatusError
from uprotocol.validation import ValidationResult


def test_codes():
    assert UCode.OK == 0
    assert UCode.INVALID_ARGUMENT == 3
    assert UCode.DEADLINE_EXCEEDED == 4
    assert UCode.ALREADY_EXISTS == 6
    assert UCode.INTERNAL == 13
    assert UCode.DATA_LOSS == 15
    assert UCode.UNAUTHENTICATED == 16


def test_status():
    assert UStatus.ok().is_success()
    assert UStatus() == UStatus.ok()

    failed = UStatus.failed(UCode.NOT_FOUND, 'Handler not found')
    assert failed.is_failure()
    assert failed.code == UCode.NOT_FOUND


def test_error():
    error = UStatusError(UCode.ALREADY_EXISTS, 'Duplicated request found')

    assert error.code == UCode.ALREADY_EXISTS
    assert error.message == 'Duplicated request found'
    assert str(error) == 'Duplicated request found'
    assert error.status == UStatus(UCode.ALREADY_EXISTS, 'Duplicated request found')

    wrapped = UStatusError(UStatus(UCode.DATA_LOSS))
    assert wrapped.code == UCode.DATA_LOSS
    assert str(wrapped) == 'DATA_LOSS'


def test_validation_result():
    assert ValidationResult.success().is_success()
    assert ValidationResult.success().to_status() == UStatus.ok()

    failure = ValidationResult.failure('Missing Sink')
    assert failure.is_failure()
    assert not failure
    assert failure.to_status() == UStatus(UCode.INVALID_ARGUMENT, 'Missing Sink')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
