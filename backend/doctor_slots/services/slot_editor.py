# backend/doctor_slots/services/slot_editor.py
"""
Slot Editor for the availability scheduler

A bounded edit session over one doctor's SlotSet. Every picker surface
(simple picker, range picker, inline tab editor) binds to a shared editor
instance instead of keeping its own copy of the schedule.

State machine:
    UNINITIALIZED --seed()--> EDITING
    EDITING --mutation--> EDITING (listeners receive a SlotsChanged event)
    EDITING --seed(identical payload)--> EDITING (ignored, nobody notified)
    EDITING --discard()--> UNINITIALIZED (nobody notified)

The session never talks to the persistence port. Saving is done by whoever
owns the editor, which then calls ``mark_saved()``.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from ..core.config import settings
from ..core.constants import COMMON_TIME_OPTIONS
from ..core.exceptions import CapacityExceededException, SessionNotStartedException
from ..domain.date_window import DateLike, WindowDay, to_day_key
from ..domain.slot_set import SlotSet
from ..events.slot_events import SlotsChanged
from ..monitoring.prometheus_metrics import prometheus_metrics
from .apply_template import apply_template_to_all_days
from .slot_serializer import decode, encode_payload

logger = logging.getLogger(__name__)

SlotsListener = Callable[[SlotsChanged], None]


class EditorState(str, Enum):
    UNINITIALIZED = "uninitialized"
    EDITING = "editing"


class SlotEditor:
    """Stateful edit session producing a new SlotSet on each mutation."""

    # Labels offered by the simple picker; any other label is accepted too
    time_options = tuple(COMMON_TIME_OPTIONS)

    def __init__(
        self,
        owner_id: Optional[str] = None,
        *,
        default_time_label: Optional[str] = None,
    ) -> None:
        self.owner_id = owner_id
        self.default_time_label = default_time_label or settings.default_time_label
        self._state = EditorState.UNINITIALIZED
        self._current = SlotSet.empty()
        self._seeded: Optional[SlotSet] = None
        self._dirty = False
        self._listeners: List[SlotsListener] = []

    # Introspection

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state is EditorState.EDITING

    @property
    def current(self) -> SlotSet:
        return self._current

    @property
    def baseline(self) -> Optional[SlotSet]:
        """The SlotSet from the last seed or save, or None before seeding."""
        return self._seeded

    @property
    def dirty(self) -> bool:
        return self._dirty

    def encoded(self) -> List[dict]:
        return encode_payload(self._current)

    # Observers

    def subscribe(self, listener: SlotsListener) -> Callable[[], None]:
        """Register a listener for SlotsChanged events; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Session lifecycle

    def seed(self, payload: Optional[Iterable[Any]]) -> bool:
        """
        Start (or restart) the session from a wire payload.

        Returns True if the session state changed. A payload that decodes to
        the same schedule as the last seed is ignored so re-delivered data
        cannot trigger an update loop.

        Raises:
            InvalidRecordException: the payload could not be decoded; the
                session is left as it was.
        """
        return self.seed_slot_set(decode(payload))

    def seed_slot_set(self, slot_set: SlotSet) -> bool:
        if self.is_editing and self._seeded is not None and slot_set == self._seeded:
            logger.debug(f"Ignoring identical reseed for owner {self.owner_id}")
            return False
        self._current = slot_set
        self._seeded = slot_set
        self._dirty = False
        self._state = EditorState.EDITING
        logger.debug(
            f"Seeded slot editor for owner {self.owner_id}: {slot_set.day_count()} days, "
            f"{slot_set.total_slot_count()} slots"
        )
        return True

    def discard(self) -> None:
        """End the session without notifying anyone; the baseline is dropped."""
        self._state = EditorState.UNINITIALIZED
        self._current = SlotSet.empty()
        self._seeded = None
        self._dirty = False

    def mark_saved(self) -> None:
        """Record that the current schedule has been persisted."""
        self._require_editing("mark_saved")
        self._seeded = self._current
        self._dirty = False

    # Mutations

    def add_time(self, day: DateLike, time_label: Optional[str] = None) -> Optional[SlotsChanged]:
        """
        Append a label to a day (the default label when none is given).

        Raises:
            CapacityExceededException: the day is full; the session is unchanged.
        """
        self._require_editing("add_time")
        label = time_label if time_label is not None else self.default_time_label
        try:
            updated = self._current.with_time_added(day, label)
        except CapacityExceededException:
            prometheus_metrics.record_capacity_rejection()
            logger.info(f"Rejected add for owner {self.owner_id} on {to_day_key(day)}: day is full")
            raise
        return self._commit("add_time", updated, [day])

    def remove_time(self, day: DateLike, index: int) -> Optional[SlotsChanged]:
        self._require_editing("remove_time")
        return self._commit("remove_time", self._current.with_time_removed_at(day, index), [day])

    def update_time(self, day: DateLike, index: int, time_label: str) -> Optional[SlotsChanged]:
        self._require_editing("update_time")
        return self._commit(
            "update_time", self._current.with_time_updated_at(day, index, time_label), [day]
        )

    def clear_day(self, day: DateLike) -> Optional[SlotsChanged]:
        self._require_editing("clear_day")
        return self._commit("clear_day", self._current.with_day_cleared(day), [day])

    def clear_all(self) -> Optional[SlotsChanged]:
        self._require_editing("clear_all")
        return self._commit("clear_all", SlotSet.empty(), self._current.days())

    def apply_template_to_all_days(
        self, window: Sequence[Union[WindowDay, DateLike]]
    ) -> Optional[SlotsChanged]:
        self._require_editing("apply_template_to_all_days")
        updated = apply_template_to_all_days(self._current, window)
        affected = [day.day_key if isinstance(day, WindowDay) else day for day in window]
        return self._commit("apply_template_to_all_days", updated, affected)

    # Internals

    def _require_editing(self, operation: str) -> None:
        if not self.is_editing:
            raise SessionNotStartedException(operation)

    def _commit(
        self, operation: str, updated: SlotSet, days: Iterable[DateLike]
    ) -> Optional[SlotsChanged]:
        if updated is self._current or updated == self._current:
            return None

        # The session changes only once the event is built
        event = SlotsChanged(
            operation=operation,
            payload=encode_payload(updated),
            day_count=updated.day_count(),
            slot_count=updated.total_slot_count(),
            dirty=True,
            owner_id=self.owner_id,
            days_affected=sorted({to_day_key(day) for day in days}),
        )
        self._current = updated
        self._dirty = True
        prometheus_metrics.record_slot_mutation(operation)

        for listener in list(self._listeners):
            listener(event)
        return event
