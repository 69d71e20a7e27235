"""
Day windows for availability editing.

A window is the ordered list of calendar days the editor shows. Two shapes
exist: a rolling window starting at the reference day, and the Sunday to
Saturday week containing the reference day. Day keys are ISO dates in the
editor's local time; no timezone normalization happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from ..core.constants import DEFAULT_WINDOW_DAYS
from ..core.exceptions import ValidationException

DateLike = Union[date, datetime, str]


def _local_date(value: datetime) -> date:
    """Truncate a datetime to the host's local calendar day."""
    if value.tzinfo is not None and value.tzinfo.utcoffset(value) is not None:
        value = value.astimezone()
    return value.date()


def to_date(value: DateLike) -> date:
    """
    Convert a date-ish value to a local calendar date.

    Accepts date objects, datetimes (aware values are shifted to local time
    first) and ISO-8601 strings, either a bare date or a full timestamp.
    """
    if isinstance(value, datetime):
        return _local_date(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValidationException("Empty date value", code="INVALID_DATE")
        try:
            if len(raw) == 10:
                return date.fromisoformat(raw)
            if raw.endswith(("Z", "z")):
                raw = raw[:-1] + "+00:00"
            return _local_date(datetime.fromisoformat(raw))
        except ValueError:
            raise ValidationException(
                f"Unrecognized date value: {value!r}", code="INVALID_DATE"
            ) from None
    raise ValidationException(
        f"Unsupported date type: {type(value).__name__}", code="INVALID_DATE"
    )


def to_day_key(value: DateLike) -> str:
    """Return the canonical YYYY-MM-DD day key for a date-ish value."""
    return to_date(value).isoformat()


def _reference(reference: Optional[DateLike]) -> date:
    return date.today() if reference is None else to_date(reference)


@dataclass(frozen=True)
class WindowDay:
    """One day of a window plus its display metadata."""

    day_key: str
    date: date
    weekday_name: str
    weekday_short: str
    month_short: str
    day_number: int
    is_reference_day: bool

    @classmethod
    def build(cls, day: date, reference: date) -> "WindowDay":
        return cls(
            day_key=day.isoformat(),
            date=day,
            weekday_name=day.strftime("%A"),
            weekday_short=day.strftime("%a"),
            month_short=day.strftime("%b"),
            day_number=day.day,
            is_reference_day=day == reference,
        )


def next_n_days(
    n: int = DEFAULT_WINDOW_DAYS, reference: Optional[DateLike] = None
) -> List[WindowDay]:
    """Return ``n`` consecutive days starting at the reference day (inclusive)."""
    start = _reference(reference)
    return [WindowDay.build(start + timedelta(days=offset), start) for offset in range(max(n, 0))]


def current_week(reference: Optional[DateLike] = None) -> List[WindowDay]:
    """Return Sunday through Saturday of the week containing the reference day."""
    ref = _reference(reference)
    # date.weekday(): Monday=0 ... Sunday=6
    sunday = ref - timedelta(days=(ref.weekday() + 1) % 7)
    return [WindowDay.build(sunday + timedelta(days=offset), ref) for offset in range(7)]


def day_keys(window: List[WindowDay]) -> List[str]:
    """Project a window onto its day keys, keeping order."""
    return [day.day_key for day in window]
