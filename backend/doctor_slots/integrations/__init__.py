from .schedule_api_client import (
    ScheduleApiAuthError,
    ScheduleApiClient,
    ScheduleApiConnectionError,
    ScheduleApiError,
    ScheduleApiRequestError,
)

__all__ = [
    "ScheduleApiAuthError",
    "ScheduleApiClient",
    "ScheduleApiConnectionError",
    "ScheduleApiError",
    "ScheduleApiRequestError",
]
