"""
Range view over a shared SlotEditor.

Presents each day as a single start/end range. The first label of a day is
the start and the second is the end; a day with only one label shows the
default end time until the doctor picks one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from ..core.config import settings
from ..core.constants import RANGE_TIME_OPTIONS
from ..core.exceptions import TimeRangeExistsException, ValidationException
from ..domain.date_window import DateLike, to_day_key
from ..domain.slot_set import SlotSet
from ..events.slot_events import SlotsChanged
from .slot_editor import SlotEditor

RangeField = Literal["start", "end"]


@dataclass(frozen=True)
class TimeRange:
    day_key: str
    start_time: str
    end_time: str

    @property
    def label(self) -> str:
        return f"{self.start_time} to {self.end_time}"


def ranges_from_slot_set(
    slot_set: SlotSet, default_end: Optional[str] = None
) -> Dict[str, TimeRange]:
    """Map every configured day to its start/end range."""
    fallback_end = default_end or settings.default_range_end
    ranges: Dict[str, TimeRange] = {}
    for key, times in slot_set.items():
        end = times[1] if len(times) >= 2 else fallback_end
        ranges[key] = TimeRange(day_key=key, start_time=times[0], end_time=end)
    return ranges


class TimeRangeView:
    """Range-picker surface bound to a shared editor."""

    time_options = tuple(RANGE_TIME_OPTIONS)

    def __init__(
        self,
        editor: SlotEditor,
        *,
        default_start: Optional[str] = None,
        default_end: Optional[str] = None,
    ) -> None:
        self.editor = editor
        self.default_start = default_start or settings.default_range_start
        self.default_end = default_end or settings.default_range_end

    def ranges(self) -> Dict[str, TimeRange]:
        return ranges_from_slot_set(self.editor.current, self.default_end)

    def get_range(self, day: DateLike) -> Optional[TimeRange]:
        return self.ranges().get(to_day_key(day))

    def add_range(self, day: DateLike) -> Optional[SlotsChanged]:
        """
        Create the default range on an empty day.

        Raises:
            TimeRangeExistsException: the day already has a range.
        """
        key = to_day_key(day)
        if self.editor.current.get(key):
            raise TimeRangeExistsException(key)
        self.editor.add_time(key, self.default_start)
        return self.editor.add_time(key, self.default_end)

    def update_range(self, day: DateLike, field: RangeField, value: str) -> Optional[SlotsChanged]:
        """Change the start or end of an existing range; absent days are left alone."""
        key = to_day_key(day)
        times = self.editor.current.get(key)
        if not times:
            return None
        if field == "start":
            return self.editor.update_time(key, 0, value)
        if field == "end":
            if len(times) >= 2:
                return self.editor.update_time(key, 1, value)
            return self.editor.add_time(key, value)
        raise ValidationException(f"Unknown range field: {field}", code="INVALID_RANGE_FIELD")

    def remove_range(self, day: DateLike) -> Optional[SlotsChanged]:
        return self.editor.clear_day(day)
