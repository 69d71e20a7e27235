"""Template fill: copy the first window day's labels onto every day of the window."""

from __future__ import annotations

import logging
from typing import Sequence, Union

from ..domain.date_window import DateLike, WindowDay
from ..domain.slot_set import SlotSet

logger = logging.getLogger(__name__)


def _key(day: Union[WindowDay, DateLike]) -> DateLike:
    return day.day_key if isinstance(day, WindowDay) else day


def apply_template_to_all_days(
    slot_set: SlotSet, window: Sequence[Union[WindowDay, DateLike]]
) -> SlotSet:
    """
    Overwrite every day in ``window`` with the labels of ``window[0]``.

    Target days are replaced, not merged. If the window is empty or its first
    day has no labels there is nothing to copy and ``slot_set`` is returned
    unchanged.
    """
    if not window:
        return slot_set

    source = slot_set.get(_key(window[0]))
    if not source:
        logger.debug("Template fill skipped: source day has no time slots")
        return slot_set

    result = slot_set
    for day in window:
        result = result.with_day_replaced(_key(day), list(source))
    return result
