"""Availability editing events."""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SlotsChanged:
    """Fired after a mutation changed the in-progress schedule."""

    operation: str
    payload: List[Dict[str, Any]]
    day_count: int
    slot_count: int
    dirty: bool = True
    owner_id: Optional[str] = None
    days_affected: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
