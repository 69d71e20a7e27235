"""
SlotSet: a doctor's bookable time labels keyed by calendar day.

The value is immutable. Every ``with_*`` operation returns a new SlotSet and
leaves the receiver untouched, so an edit session can always fall back to the
originally loaded value.

Invariants:
    - a day never maps to an empty tuple (emptied days are pruned)
    - a day never holds more than MAX_SLOTS_PER_DAY labels
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import MAX_SLOTS_PER_DAY
from ..core.exceptions import CapacityExceededException, ValidationException
from .date_window import DateLike, to_day_key

DaySlots = Tuple[str, ...]


class SlotSet:
    """Immutable mapping of day key to an ordered tuple of time labels."""

    __slots__ = ("_days",)

    capacity = MAX_SLOTS_PER_DAY

    def __init__(self, days: Optional[Mapping[DateLike, Iterable[str]]] = None) -> None:
        normalized: Dict[str, DaySlots] = {}
        for day, times in (days or {}).items():
            labels = tuple(times)
            if not labels:
                continue
            key = to_day_key(day)
            if len(labels) > self.capacity:
                raise CapacityExceededException(key, len(labels))
            for label in labels:
                if not isinstance(label, str):
                    raise ValidationException(
                        f"Time labels must be strings, got {type(label).__name__}",
                        code="INVALID_TIME_LABEL",
                        details={"date": key},
                    )
            normalized[key] = labels
        self._days: Mapping[str, DaySlots] = MappingProxyType(normalized)

    @classmethod
    def empty(cls) -> "SlotSet":
        return cls()

    @classmethod
    def _from_trusted(cls, days: Dict[str, DaySlots]) -> "SlotSet":
        # Skips validation; callers guarantee the invariants.
        instance = cls.__new__(cls)
        instance._days = MappingProxyType(days)
        return instance

    # Reads

    def get(self, day: DateLike) -> DaySlots:
        """Return the labels for a day, or an empty tuple if the day is absent."""
        return self._days.get(to_day_key(day), ())

    def days(self) -> List[str]:
        return sorted(self._days)

    def items(self) -> Iterator[Tuple[str, DaySlots]]:
        for key in self.days():
            yield key, self._days[key]

    def day_count(self) -> int:
        return len(self._days)

    def total_slot_count(self) -> int:
        return sum(len(times) for times in self._days.values())

    def remaining_capacity(self, day: DateLike) -> int:
        return self.capacity - len(self.get(day))

    def is_empty(self) -> bool:
        return not self._days

    def summary(self) -> str:
        """Human-readable summary line for the editor footer."""
        return (
            f"{self.day_count()} days configured with a total of "
            f"{self.total_slot_count()} time slots"
        )

    def to_dict(self) -> Dict[str, List[str]]:
        """Plain dict copy with an independent list per day."""
        return {key: list(times) for key, times in self.items()}

    # Mutations (each returns a new SlotSet)

    def with_time_added(self, day: DateLike, time_label: str) -> "SlotSet":
        """
        Append a label to a day, creating the day if needed.

        Raises:
            CapacityExceededException: the day already holds the maximum labels.
                The receiver is unchanged.
        """
        key = to_day_key(day)
        current = self._days.get(key, ())
        if len(current) >= self.capacity:
            raise CapacityExceededException(key, len(current))
        updated = dict(self._days)
        updated[key] = current + (time_label,)
        return SlotSet._from_trusted(updated)

    def with_time_removed_at(self, day: DateLike, index: int) -> "SlotSet":
        """Remove the label at ``index``; out-of-range indices return ``self``."""
        key = to_day_key(day)
        current = self._days.get(key, ())
        if not 0 <= index < len(current):
            return self
        remaining = current[:index] + current[index + 1 :]
        updated = dict(self._days)
        if remaining:
            updated[key] = remaining
        else:
            del updated[key]
        return SlotSet._from_trusted(updated)

    def with_time_updated_at(self, day: DateLike, index: int, time_label: str) -> "SlotSet":
        """Replace the label at ``index`` in place; out-of-range indices return ``self``."""
        key = to_day_key(day)
        current = self._days.get(key, ())
        if not 0 <= index < len(current):
            return self
        if current[index] == time_label:
            return self
        updated = dict(self._days)
        updated[key] = current[:index] + (time_label,) + current[index + 1 :]
        return SlotSet._from_trusted(updated)

    def with_day_cleared(self, day: DateLike) -> "SlotSet":
        key = to_day_key(day)
        if key not in self._days:
            return self
        updated = dict(self._days)
        del updated[key]
        return SlotSet._from_trusted(updated)

    def with_day_replaced(self, day: DateLike, times: Sequence[str]) -> "SlotSet":
        """Overwrite a day's labels wholesale (an empty sequence clears the day)."""
        key = to_day_key(day)
        labels = tuple(times)
        if len(labels) > self.capacity:
            raise CapacityExceededException(key, len(labels))
        updated = dict(self._days)
        if labels:
            updated[key] = labels
        else:
            updated.pop(key, None)
        return SlotSet._from_trusted(updated)

    # Value semantics

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SlotSet):
            return NotImplemented
        return dict(self._days) == dict(other._days)

    def __hash__(self) -> int:
        return hash(frozenset(self._days.items()))

    def __len__(self) -> int:
        return len(self._days)

    def __contains__(self, day: object) -> bool:
        if isinstance(day, str):
            return day in self._days
        return False

    def __repr__(self) -> str:
        return f"SlotSet({self.to_dict()!r})"
