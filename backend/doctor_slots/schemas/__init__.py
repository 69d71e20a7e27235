from .slot_schedule import SaveAck, SlotRecord

__all__ = ["SaveAck", "SlotRecord"]
