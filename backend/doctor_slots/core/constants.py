"""Application-wide constants for the doctor availability scheduler."""

from __future__ import annotations

# Availability constraints
MAX_SLOTS_PER_DAY = 2  # Maximum time labels per calendar day
DEFAULT_WINDOW_DAYS = 7

# Time label defaults used when the caller does not pick one
DEFAULT_TIME_LABEL = "9:00 AM"
DEFAULT_RANGE_START = "9:00 AM"
DEFAULT_RANGE_END = "5:00 PM"

# Half-hour options offered by the simple slot picker
COMMON_TIME_OPTIONS = [
    "9:00 AM",
    "9:30 AM",
    "10:00 AM",
    "10:30 AM",
    "11:00 AM",
    "11:30 AM",
    "12:00 PM",
    "12:30 PM",
    "2:00 PM",
    "2:30 PM",
    "3:00 PM",
    "3:30 PM",
    "4:00 PM",
    "4:30 PM",
    "5:00 PM",
    "5:30 PM",
    "6:00 PM",
    "6:30 PM",
    "7:00 PM",
    "7:30 PM",
    "8:00 PM",
    "8:30 PM",
    "9:00 PM",
]

# Hourly options offered by the range picker
RANGE_TIME_OPTIONS = [
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "1:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
    "5:00 PM",
    "6:00 PM",
    "7:00 PM",
    "8:00 PM",
    "9:00 PM",
]

# Day window modes
WINDOW_MODE_ROLLING = "rolling"
WINDOW_MODE_WEEK = "week"

# User-facing messages
ERROR_CAPACITY_EXCEEDED = f"Maximum {MAX_SLOTS_PER_DAY} time slots allowed per day"
ERROR_TIME_RANGE_EXISTS = "Time range already exists for this day"
ERROR_SESSION_NOT_STARTED = "Slot editing session has not been started"
