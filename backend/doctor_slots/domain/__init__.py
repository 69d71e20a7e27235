"""Pure value types for availability slots."""

from .date_window import WindowDay, current_week, day_keys, next_n_days, to_date, to_day_key
from .slot_set import DaySlots, SlotSet

__all__ = [
    "DaySlots",
    "SlotSet",
    "WindowDay",
    "current_week",
    "day_keys",
    "next_n_days",
    "to_date",
    "to_day_key",
]
