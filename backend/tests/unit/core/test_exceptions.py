import pytest

from doctor_slots.core.exceptions import (
    BusinessRuleException,
    CapacityExceededException,
    ConflictException,
    DomainException,
    InvalidRecordException,
    SessionNotStartedException,
    TimeRangeExistsException,
    ValidationException,
)


@pytest.mark.parametrize(
    "exc, status_code",
    [
        (DomainException("boom"), 500),
        (ValidationException("bad"), 400),
        (ConflictException("dup"), 409),
        (BusinessRuleException("nope"), 422),
        (CapacityExceededException("2024-06-10", 2), 422),
        (InvalidRecordException(3, "missing date"), 400),
        (TimeRangeExistsException("2024-06-10"), 409),
        (SessionNotStartedException("add_time"), 422),
    ],
)
def test_http_status_mapping(exc, status_code):
    http_exc = exc.to_http_exception()
    assert http_exc.status_code == status_code
    assert http_exc.detail["code"] == exc.code
    assert http_exc.detail["message"] == exc.message


def test_default_code_is_class_name():
    assert DomainException("boom").code == "DomainException"
    assert ValidationException("bad", code="INVALID_DATE").code == "INVALID_DATE"


def test_capacity_exceeded_details():
    exc = CapacityExceededException("2024-06-10", 2)
    assert exc.message == "Maximum 2 time slots allowed per day"
    assert exc.day == "2024-06-10"
    assert exc.details == {"date": "2024-06-10", "current_count": 2, "max_per_day": 2}


def test_invalid_record_message_names_position():
    exc = InvalidRecordException(1, "missing date", {"times": []})
    assert str(exc) == "Invalid slot record at position 1: missing date"
    assert exc.reason == "missing date"
    assert exc.details["record"] == repr({"times": []})
