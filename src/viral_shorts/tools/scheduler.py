"""Scheduler service: async httpx client plus cron rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
import structlog

from viral_shorts.config import settings
from viral_shorts.models.fields import as_mapping
from viral_shorts.models.schedule import ExecutionLogEntry, Schedule

logger = structlog.get_logger()


class SchedulerServiceError(RuntimeError):
    """The scheduler service was unreachable or answered with a failure status."""


# ---------------------------------------------------------------------------
# Return types
# ---------------------------------------------------------------------------


@dataclass
class ScheduleResponse:
    success: bool
    schedule: Optional[Schedule] = None
    error: Optional[str] = None


@dataclass
class LogsResponse:
    success: bool
    executions: list[ExecutionLogEntry] = field(default_factory=list)
    error: Optional[str] = None


def _error_text(body: dict) -> Optional[str]:
    error = body.get("error")
    return error if isinstance(error, str) and error else None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class SchedulerClient:
    def __init__(
        self,
        base_url: str = settings.scheduler_api_base_url,
        api_key: str = settings.scheduler_api_key,
        timeout: Optional[float] = settings.http_timeout_sec,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as http:
                resp = await http.request(
                    method, f"{self.base_url}{path}", headers=headers, **kwargs
                )
                resp.raise_for_status()
                body = resp.json() if resp.content else {}
        except httpx.HTTPError as exc:
            raise SchedulerServiceError(f"Scheduler request failed: {method} {path}: {exc}") from exc
        except ValueError as exc:
            raise SchedulerServiceError(f"Scheduler returned invalid JSON: {method} {path}") from exc
        return as_mapping(body)

    async def get_schedule(self, schedule_id: str) -> ScheduleResponse:
        body = await self._request("GET", f"/schedules/{schedule_id}")
        raw = body.get("schedule")
        schedule = Schedule.model_validate(raw) if isinstance(raw, dict) else None
        return ScheduleResponse(
            success=body.get("success") is True,
            schedule=schedule,
            error=_error_text(body),
        )

    async def pause_schedule(self, schedule_id: str) -> dict:
        logger.info("scheduler.pause", schedule_id=schedule_id)
        return await self._request("POST", f"/schedules/{schedule_id}/pause")

    async def resume_schedule(self, schedule_id: str) -> dict:
        logger.info("scheduler.resume", schedule_id=schedule_id)
        return await self._request("POST", f"/schedules/{schedule_id}/resume")

    async def trigger_now(self, schedule_id: str) -> dict:
        logger.info("scheduler.trigger", schedule_id=schedule_id)
        return await self._request("POST", f"/schedules/{schedule_id}/trigger")

    async def get_logs(self, schedule_id: str, limit: int = 20) -> LogsResponse:
        body = await self._request(
            "GET", f"/schedules/{schedule_id}/logs", params={"limit": limit}
        )
        raw = body.get("executions")
        executions: list[ExecutionLogEntry] = []
        if isinstance(raw, list):
            executions = [
                ExecutionLogEntry.model_validate(item) for item in raw if isinstance(item, dict)
            ]
            if len(executions) != len(raw):
                logger.warning(
                    "scheduler.logs_skipped",
                    schedule_id=schedule_id,
                    skipped=len(raw) - len(executions),
                )
        return LogsResponse(
            success=body.get("success") is True and isinstance(raw, list),
            executions=executions[:limit],
            error=_error_text(body),
        )


# ---------------------------------------------------------------------------
# Cron rendering
# ---------------------------------------------------------------------------

_WEEKDAYS = {
    "0": "Sunday",
    "1": "Monday",
    "2": "Tuesday",
    "3": "Wednesday",
    "4": "Thursday",
    "5": "Friday",
    "6": "Saturday",
    "7": "Sunday",
}


def _clock(hour: str, minute: str) -> Optional[str]:
    if not (hour.isdigit() and minute.isdigit()):
        return None
    h, m = int(hour), int(minute)
    if h > 23 or m > 59:
        return None
    suffix = "AM" if h < 12 else "PM"
    return f"{h % 12 or 12}:{m:02d} {suffix}"


def cron_to_human(expression: str) -> str:
    """Render a 5-field cron expression as a short phrase.

    Only the common shapes are recognized; anything else is returned as-is.

    >>> cron_to_human("0 8 * * *")
    'daily at 8:00 AM'
    """
    fields = expression.split()
    if len(fields) != 5:
        return expression
    minute, hour, dom, month, dow = fields

    if minute.startswith("*/") and minute[2:].isdigit() and fields[1:] == ["*"] * 4:
        return f"every {int(minute[2:])} minutes"
    if minute.isdigit() and fields[1:] == ["*"] * 4:
        return "every hour" if int(minute) == 0 else f"every hour at minute {int(minute)}"

    at = _clock(hour, minute)
    if at is None or month != "*":
        return expression

    if dom == "*" and dow == "*":
        return f"daily at {at}"
    if dom == "*" and dow in ("1-5", "MON-FRI"):
        return f"every weekday at {at}"
    if dom == "*" and dow in ("0,6", "6,0", "SAT,SUN"):
        return f"every weekend at {at}"
    if dom == "*" and dow in _WEEKDAYS:
        return f"every {_WEEKDAYS[dow]} at {at}"
    if dow == "*" and dom.isdigit():
        return f"monthly on day {int(dom)} at {at}"
    return expression
