"""Persistence port for availability schedules."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from ..domain.slot_set import SlotSet
from ..schemas.slot_schedule import SaveAck


@runtime_checkable
class SlotPersistencePort(Protocol):
    """
    Whole-schedule storage for one owner.

    ``load_slots`` returns an empty SlotSet when the owner has no schedule yet.
    ``save_slots`` always receives the complete schedule and replaces whatever
    was stored; partial updates are not supported.
    """

    async def load_slots(self, owner_id: str) -> SlotSet:
        ...

    async def save_slots(self, owner_id: str, slot_set: SlotSet) -> SaveAck:
        ...


def build_ack(owner_id: str, slot_set: SlotSet, *, placeholder_sent: bool = False) -> SaveAck:
    return SaveAck(
        owner_id=owner_id,
        day_count=slot_set.day_count(),
        slot_count=slot_set.total_slot_count(),
        saved_at=datetime.now(timezone.utc),
        placeholder_sent=placeholder_sent,
    )
