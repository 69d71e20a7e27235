# backend/doctor_slots/schemas/slot_schedule.py
"""
Wire schemas for a doctor's availability schedule.

The persisted schedule is a list of ``{date, times}`` records, one per day
that has at least one time label. ``date`` is local midnight of the day.
"""

import datetime
from typing import List

from pydantic import Field

from ..core.constants import MAX_SLOTS_PER_DAY
from ._strict_base import StrictModel

DateTimeType = datetime.datetime


class SlotRecord(StrictModel):
    """One day of availability as exchanged with the schedule backend."""

    date: DateTimeType
    times: List[str] = Field(default_factory=list, max_length=MAX_SLOTS_PER_DAY)


class SaveAck(StrictModel):
    """Acknowledgement returned once a full schedule replacement is stored."""

    owner_id: str
    day_count: int = Field(ge=0)
    slot_count: int = Field(ge=0)
    saved_at: DateTimeType
    placeholder_sent: bool = False
