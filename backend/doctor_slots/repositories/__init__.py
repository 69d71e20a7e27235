"""
Repository layer for the availability scheduler.

Repositories own data access; the persistence port is the only contract the
edit session's callers depend on.
"""

from .schedule_day_repository import DatabaseSlotPort, ScheduleDayRepository
from .slot_port import SlotPersistencePort, build_ack

__all__ = [
    "DatabaseSlotPort",
    "ScheduleDayRepository",
    "SlotPersistencePort",
    "build_ack",
]
