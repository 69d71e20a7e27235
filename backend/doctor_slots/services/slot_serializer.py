# backend/doctor_slots/services/slot_serializer.py
"""
Conversion between the wire schedule and SlotSet.

Wire shape::

    [{"date": "2024-06-10T00:00:00", "times": ["9:00 AM", "10:00 AM"]}, ...]

Decoding truncates each ``date`` to the local calendar day, drops records with
no times and lets a later record for the same day replace an earlier one.
Encoding emits one record per non-empty day at local midnight.

The "never send an empty list" quirk of the schedule backend is handled by
``with_empty_placeholder`` and must only be applied by the outermost save call.
"""

from __future__ import annotations

from datetime import date, datetime, time
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import MAX_SLOTS_PER_DAY
from ..core.exceptions import InvalidRecordException, ValidationException
from ..domain.date_window import to_date, to_day_key
from ..domain.slot_set import DaySlots, SlotSet
from ..schemas.slot_schedule import SlotRecord

logger = logging.getLogger(__name__)

_MISSING = object()


def _fields(record: Any) -> Tuple[Any, Any]:
    if isinstance(record, Mapping):
        return record.get("date", _MISSING), record.get("times", None)
    return getattr(record, "date", _MISSING), getattr(record, "times", None)


def _decode_times(index: int, record: Any, raw_times: Any) -> DaySlots:
    if raw_times is None:
        return ()
    if isinstance(raw_times, (str, bytes)) or not isinstance(raw_times, Sequence):
        raise InvalidRecordException(index, "times must be a list of labels", record)
    for label in raw_times:
        if not isinstance(label, str):
            raise InvalidRecordException(index, "time labels must be strings", record)
    if len(raw_times) > MAX_SLOTS_PER_DAY:
        raise InvalidRecordException(
            index, f"more than {MAX_SLOTS_PER_DAY} times for one day", record
        )
    return tuple(raw_times)


def decode(records: Optional[Iterable[Any]]) -> SlotSet:
    """
    Build a SlotSet from wire records.

    Records may be mappings or objects exposing ``date`` and ``times``.

    Raises:
        InvalidRecordException: a record has a missing or malformed date or
            malformed times. Decoding is all-or-nothing.
    """
    days: Dict[str, DaySlots] = {}
    for index, record in enumerate(records or []):
        raw_date, raw_times = _fields(record)
        if raw_date is _MISSING or raw_date is None:
            raise InvalidRecordException(index, "missing date", record)
        try:
            key = to_day_key(raw_date)
        except ValidationException as exc:
            raise InvalidRecordException(index, exc.message, record) from exc

        times = _decode_times(index, record, raw_times)
        if not times:
            continue
        if key in days:
            logger.debug(f"Duplicate schedule record for {key} at position {index}; later wins")
        days[key] = times
    return SlotSet(days)


def _local_midnight(day_key: str) -> datetime:
    return datetime.combine(date.fromisoformat(day_key), time.min)


def encode(slot_set: SlotSet) -> List[SlotRecord]:
    """Encode a SlotSet as one record per configured day, ordered by date."""
    return [
        SlotRecord(date=_local_midnight(key), times=list(times)) for key, times in slot_set.items()
    ]


def encode_payload(slot_set: SlotSet) -> List[Dict[str, Any]]:
    """Encode a SlotSet as JSON-ready dicts."""
    return [record.model_dump(mode="json") for record in encode(slot_set)]


def with_empty_placeholder(
    payload: List[Dict[str, Any]], today: Optional[date] = None
) -> List[Dict[str, Any]]:
    """
    Substitute a single empty record for an empty payload.

    The schedule backend rejects an empty list, so a cleared schedule is sent
    as ``[{"date": <today>, "times": []}]``. Non-empty payloads pass through.
    """
    if payload:
        return payload
    day = to_date(today) if today is not None else date.today()
    placeholder = SlotRecord(date=_local_midnight(day.isoformat()), times=[])
    return [placeholder.model_dump(mode="json")]
