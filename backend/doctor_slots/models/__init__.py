from .schedule_day import ScheduleDay

__all__ = ["ScheduleDay"]
