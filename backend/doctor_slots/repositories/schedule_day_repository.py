from __future__ import annotations

import asyncio
from datetime import date
import logging
from typing import Dict, List, Optional, Tuple, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.exceptions import RepositoryException
from ..database import SessionLocal
from ..domain.slot_set import SlotSet
from ..models import ScheduleDay
from ..schemas.slot_schedule import SaveAck
from ..services.slot_serializer import decode
from .slot_port import build_ack

logger = logging.getLogger(__name__)


class ScheduleDayRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_rows(self, owner_id: str) -> List[ScheduleDay]:
        rows = (
            self.db.query(ScheduleDay)
            .filter(ScheduleDay.owner_id == owner_id)
            .order_by(ScheduleDay.day_date)
            .all()
        )
        return cast(List[ScheduleDay], rows)

    def get_schedule(self, owner_id: str) -> Dict[date, List[str]]:
        return {row.day_date: list(row.times or []) for row in self.get_rows(owner_id)}

    def replace_schedule(self, owner_id: str, items: List[Tuple[date, List[str]]]) -> int:
        """Replace the owner's whole schedule with ``items``; returns rows written."""
        wanted = {day_date: times for day_date, times in items if times}
        existing = {row.day_date: row for row in self.get_rows(owner_id)}

        for day_date, row in existing.items():
            if day_date not in wanted:
                self.db.delete(row)

        count = 0
        for day_date, times in wanted.items():
            row = existing.get(day_date)
            if row:
                row.times = list(times)
            else:
                self.db.add(ScheduleDay(owner_id=owner_id, day_date=day_date, times=list(times)))
            count += 1
        self.db.flush()
        return count


class DatabaseSlotPort:
    """SlotPersistencePort backed by the doctor_schedule_days table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory or SessionLocal

    async def load_slots(self, owner_id: str) -> SlotSet:
        schedule = await asyncio.to_thread(self._load_schedule, owner_id)
        return decode({"date": day, "times": times} for day, times in schedule.items())

    async def save_slots(self, owner_id: str, slot_set: SlotSet) -> SaveAck:
        items = [(date.fromisoformat(key), list(times)) for key, times in slot_set.items()]
        written = await asyncio.to_thread(self._replace_schedule, owner_id, items)
        logger.info(f"Saved {written} schedule days for owner {owner_id}")
        return build_ack(owner_id, slot_set)

    def _load_schedule(self, owner_id: str) -> Dict[date, List[str]]:
        """Read the owner's rows (sync helper for asyncio.to_thread)."""
        db: Session = self.session_factory()
        try:
            schedule = ScheduleDayRepository(db).get_schedule(owner_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load schedule for {owner_id}: {str(e)}")
            raise RepositoryException(f"Failed to load schedule: {str(e)}") from e
        finally:
            db.close()
        return schedule

    def _replace_schedule(self, owner_id: str, items: List[Tuple[date, List[str]]]) -> int:
        """Replace the owner's rows in one transaction (sync helper for asyncio.to_thread)."""
        db: Session = self.session_factory()
        try:
            written = ScheduleDayRepository(db).replace_schedule(owner_id, items)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save schedule for {owner_id}: {str(e)}")
            raise RepositoryException(f"Failed to save schedule: {str(e)}") from e
        finally:
            db.close()
        return written

