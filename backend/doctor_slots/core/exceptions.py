# backend/doctor_slots/core/exceptions.py
"""
Domain-specific exceptions for the availability scheduler.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from .constants import (
    ERROR_CAPACITY_EXCEEDED,
    ERROR_SESSION_NOT_STARTED,
    ERROR_TIME_RANGE_EXISTS,
    MAX_SLOTS_PER_DAY,
)

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def _http(self, status_code: int) -> HTTPException:
        return HTTPException(
            status_code=status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )

    def to_http_exception(self) -> HTTPException:
        """Default conversion to HTTPException (override in subclasses)."""
        return self._http(status.HTTP_500_INTERNAL_SERVER_ERROR)


class ValidationException(DomainException):
    """Raised when business validation fails."""

    def to_http_exception(self) -> HTTPException:
        return self._http(status.HTTP_400_BAD_REQUEST)


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    def to_http_exception(self) -> HTTPException:
        return self._http(status.HTTP_409_CONFLICT)


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    def to_http_exception(self) -> HTTPException:
        return self._http(HTTP_422_UNPROCESSABLE)


# Specific business exceptions


class CapacityExceededException(BusinessRuleException):
    """Raised when a day already holds the maximum number of time labels."""

    def __init__(self, day: str, current_count: int):
        super().__init__(
            message=ERROR_CAPACITY_EXCEEDED,
            code="CAPACITY_EXCEEDED",
            details={
                "date": day,
                "current_count": current_count,
                "max_per_day": MAX_SLOTS_PER_DAY,
            },
        )
        self.day = day


class InvalidRecordException(ValidationException):
    """Raised when a wire record cannot be decoded into a day entry."""

    def __init__(self, index: int, reason: str, record: Any = None):
        super().__init__(
            message=f"Invalid slot record at position {index}: {reason}",
            code="INVALID_RECORD",
            details={"index": index, "reason": reason, "record": repr(record)},
        )
        self.index = index
        self.reason = reason


class TimeRangeExistsException(ConflictException):
    """Raised when a range is added to a day that already has one."""

    def __init__(self, day: str):
        super().__init__(
            message=ERROR_TIME_RANGE_EXISTS,
            code="TIME_RANGE_EXISTS",
            details={"date": day},
        )
        self.day = day


class SessionNotStartedException(BusinessRuleException):
    """Raised when an edit is attempted before the session was seeded."""

    def __init__(self, operation: str):
        super().__init__(
            message=ERROR_SESSION_NOT_STARTED,
            code="SESSION_NOT_STARTED",
            details={"operation": operation},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    Used when data access operations fail, such as connection issues,
    query failures or constraint violations.
    """
