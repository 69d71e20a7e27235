from __future__ import annotations

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy import JSON, Column, Date, DateTime, Index, String

from ..database import Base


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class ScheduleDay(Base):
    """One configured day of a doctor's availability schedule."""

    __tablename__ = "doctor_schedule_days"

    owner_id = Column(String(64), primary_key=True)
    day_date = Column(Date, primary_key=True)
    # Ordered list of 1-2 display labels, e.g. ["9:00 AM", "5:00 PM"]
    times = Column(JSON, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_now_utc,
        onupdate=_now_utc,
        server_default=sa.func.now(),
    )

    __table_args__ = (Index("ix_schedule_days_owner_date", "owner_id", "day_date"),)
