"""HTTP client for the doctor schedule endpoints of the booking backend."""

from __future__ import annotations

from datetime import date
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import SecretStr

from ..core.config import Settings, settings as default_settings
from ..domain.slot_set import SlotSet
from ..repositories.slot_port import build_ack
from ..schemas.slot_schedule import SaveAck
from ..services.slot_serializer import decode, encode_payload, with_empty_placeholder

logger = logging.getLogger(__name__)


class ScheduleApiError(Exception):
    """Base error for schedule backend request failures."""


class ScheduleApiAuthError(ScheduleApiError):
    """Raised when the backend rejects authentication."""


class ScheduleApiConnectionError(ScheduleApiError):
    """Raised when the backend cannot be reached or times out."""


class ScheduleApiRequestError(ScheduleApiError):
    """Raised for non-auth backend errors."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _secret_value(value: SecretStr | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return str(value)


class ScheduleApiClient:
    """
    SlotPersistencePort over the backend's REST schedule resource.

    ``GET /api/doctors/{owner_id}/slots`` returns the wire payload, 404 meaning
    "no schedule yet". ``PUT`` replaces the whole schedule.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.http = http or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=httpx.Timeout(self.settings.request_timeout_seconds),
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "ScheduleApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _path(self, owner_id: str) -> str:
        return f"/api/doctors/{quote(owner_id, safe='')}/slots"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = _secret_value(self.settings.api_token)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, path: str, *, json: Any = None) -> httpx.Response:
        try:
            response = await self.http.request(method, path, json=json, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise ScheduleApiConnectionError(
                f"Schedule backend timed out: {method} {path}"
            ) from exc
        except httpx.RequestError as exc:
            raise ScheduleApiConnectionError(f"Schedule backend unreachable: {exc}") from exc

        if response.status_code in (401, 403):
            raise ScheduleApiAuthError(
                f"Schedule backend rejected credentials ({response.status_code})"
            )
        return response

    async def fetch_payload(self, owner_id: str) -> Optional[list]:
        """Return the raw wire payload, or None when the owner has no schedule."""
        path = self._path(owner_id)
        response = await self._request("GET", path)
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise ScheduleApiRequestError(
                f"Failed to load schedule ({response.status_code})", response.status_code
            )
        body = response.json()
        # Some deployments wrap the list as {"slots": [...]}
        if isinstance(body, dict):
            body = body.get("slots", [])
        if not isinstance(body, list):
            raise ScheduleApiRequestError("Unexpected schedule payload shape", response.status_code)
        return body

    async def load_slots(self, owner_id: str) -> SlotSet:
        """
        Load the owner's schedule.

        Raises:
            InvalidRecordException: the stored payload has malformed records.
        """
        payload = await self.fetch_payload(owner_id)
        if payload is None:
            logger.info(f"No schedule stored for owner {owner_id}")
            return SlotSet.empty()
        return decode(payload)

    async def save_slots(
        self, owner_id: str, slot_set: SlotSet, *, today: Optional[date] = None
    ) -> SaveAck:
        """Replace the owner's schedule with the complete ``slot_set``."""
        payload = encode_payload(slot_set)
        placeholder_sent = False
        if not payload and self.settings.empty_save_placeholder:
            payload = with_empty_placeholder(payload, today)
            placeholder_sent = True

        path = self._path(owner_id)
        response = await self._request("PUT", path, json=payload)
        if response.status_code >= 400:
            raise ScheduleApiRequestError(
                f"Failed to save schedule ({response.status_code})", response.status_code
            )
        logger.info(
            f"Saved schedule for owner {owner_id}: {slot_set.day_count()} days, "
            f"{slot_set.total_slot_count()} slots"
        )
        return build_ack(owner_id, slot_set, placeholder_sent=placeholder_sent)
