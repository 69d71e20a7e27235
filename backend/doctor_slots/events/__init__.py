from .slot_events import SlotsChanged

__all__ = ["SlotsChanged"]
