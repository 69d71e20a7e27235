# backend/doctor_slots/services/slot_schedule_service.py
"""
Slot Schedule Service for the availability scheduler

Ties the edit session to the persistence port:
- builds the day window the editor shows
- opens a session from the stored schedule
- re-seeds a session when fresh data arrives
- saves the complete schedule and clears the dirty flag

Loading is forgiving: a stored schedule that cannot be decoded is logged and
replaced by an empty one so the doctor can still edit.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..core.config import Settings, settings as default_settings
from ..core.constants import WINDOW_MODE_WEEK
from ..core.exceptions import InvalidRecordException
from ..domain.date_window import DateLike, WindowDay, current_week, next_n_days
from ..domain.slot_set import SlotSet
from ..repositories.slot_port import SlotPersistencePort
from ..schemas.slot_schedule import SaveAck
from .base import BaseService
from .slot_editor import SlotEditor

logger = logging.getLogger(__name__)


class SlotScheduleService(BaseService):
    """Service coordinating slot edit sessions with schedule storage."""

    def __init__(self, port: SlotPersistencePort, settings: Optional[Settings] = None):
        super().__init__()
        self.port = port
        self.settings = settings or default_settings

    def window(self, reference: Optional[DateLike] = None) -> List[WindowDay]:
        """Day window for the editor, per the configured window mode."""
        if self.settings.window_mode == WINDOW_MODE_WEEK:
            return current_week(reference)
        return next_n_days(self.settings.window_days, reference)

    @BaseService.measure_operation("load_schedule")
    async def load_schedule(self, owner_id: str) -> SlotSet:
        """Load the stored schedule, falling back to empty on undecodable data."""
        try:
            return await self.port.load_slots(owner_id)
        except InvalidRecordException as exc:
            self.logger.warning(
                f"Could not load prior schedule for owner {owner_id}: {exc.message}",
                extra={"owner_id": owner_id, "record_index": exc.index},
            )
            return SlotSet.empty()

    async def open_session(self, owner_id: str) -> SlotEditor:
        self.log_operation("open_session", owner_id=owner_id)
        editor = SlotEditor(owner_id, default_time_label=self.settings.default_time_label)
        editor.seed_slot_set(await self.load_schedule(owner_id))
        return editor

    async def refresh_session(self, editor: SlotEditor) -> bool:
        """Re-seed an editor from storage; identical data leaves it untouched."""
        if editor.owner_id is None:
            raise ValueError("Editor has no owner to refresh from")
        return editor.seed_slot_set(await self.load_schedule(editor.owner_id))

    @BaseService.measure_operation("save_schedule")
    async def save_schedule(self, editor: SlotEditor) -> SaveAck:
        """
        Persist the editor's complete schedule.

        The port is handed the whole SlotSet, never a diff. Errors from the
        port propagate; retrying is the caller's decision.
        """
        if editor.owner_id is None:
            raise ValueError("Editor has no owner to save for")
        self.log_operation(
            "save_schedule",
            owner_id=editor.owner_id,
            day_count=editor.current.day_count(),
            slot_count=editor.current.total_slot_count(),
        )
        ack = await self.port.save_slots(editor.owner_id, editor.current)
        editor.mark_saved()
        return ack
