"""Schedule controller: view and control the recurring generation schedule.

Local schedule state only changes through ``load``; mutating verbs never
flip ``is_active`` optimistically.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional

import structlog

from viral_shorts.config import settings
from viral_shorts.models.schedule import ExecutionLogEntry, Schedule
from viral_shorts.tools.scheduler import SchedulerClient, cron_to_human

logger = structlog.get_logger()

LOAD_FAILED_MESSAGE = "Failed to load schedule"
TOGGLE_FAILED_MESSAGE = "Failed to toggle schedule"
TRIGGER_FAILED_MESSAGE = "Failed to trigger schedule"


@dataclass
class ScheduleState:
    schedule: Optional[Schedule] = None
    logs: list[ExecutionLogEntry] = field(default_factory=list)
    error: str = ""
    loading: bool = False
    logs_loading: bool = False
    action_loading: bool = False

    @property
    def cron_description(self) -> Optional[str]:
        if self.schedule is None or not self.schedule.cron_expression:
            return None
        return cron_to_human(self.schedule.cron_expression)


class ScheduleController:
    def __init__(
        self,
        client: SchedulerClient,
        schedule_id: str = settings.schedule_id,
        log_limit: int = settings.schedule_log_limit,
    ):
        self._client = client
        self.schedule_id = schedule_id
        self.log_limit = log_limit
        self._state = ScheduleState()

    @property
    def state(self) -> ScheduleState:
        return self._state

    def clear_error(self) -> None:
        self._state.error = ""

    async def load(self) -> Optional[Schedule]:
        state = self._state
        state.loading = True
        try:
            res = await self._client.get_schedule(self.schedule_id)
            if res.success and res.schedule is not None:
                state.schedule = res.schedule
                logger.info(
                    "schedule.loaded",
                    schedule_id=self.schedule_id,
                    is_active=res.schedule.is_active,
                )
            else:
                state.error = res.error or LOAD_FAILED_MESSAGE
                logger.warning("schedule.load_unsuccessful", error=state.error)
        except Exception:
            logger.warning("schedule.load_failed", schedule_id=self.schedule_id, exc_info=True)
            state.error = LOAD_FAILED_MESSAGE
        finally:
            state.loading = False
        return state.schedule

    async def load_logs(self, limit: Optional[int] = None) -> list[ExecutionLogEntry]:
        """Fetch the execution-log feed. Best effort: failures keep the old list."""
        state = self._state
        state.logs_loading = True
        try:
            res = await self._client.get_logs(self.schedule_id, limit=limit or self.log_limit)
            if res.success:
                state.logs = res.executions
        except Exception:
            logger.warning("schedule.logs_failed", schedule_id=self.schedule_id, exc_info=True)
        finally:
            state.logs_loading = False
        return state.logs

    async def refresh(self) -> None:
        await asyncio.gather(self.load(), self.load_logs())

    async def toggle(self) -> None:
        """Pause an active schedule or resume a paused one, then reload it."""
        state = self._state
        if state.schedule is None or state.action_loading:
            return
        state.action_loading = True
        try:
            if state.schedule.is_active:
                await self._client.pause_schedule(self.schedule_id)
            else:
                await self._client.resume_schedule(self.schedule_id)
            await self.load()
        except Exception:
            logger.warning("schedule.toggle_failed", schedule_id=self.schedule_id, exc_info=True)
            state.error = TOGGLE_FAILED_MESSAGE
        finally:
            state.action_loading = False

    async def run_now(self) -> None:
        """Force an out-of-band run, then reload the logs (not the schedule)."""
        state = self._state
        if state.action_loading:
            return
        state.action_loading = True
        try:
            await self._client.trigger_now(self.schedule_id)
            await self.load_logs()
        except Exception:
            logger.warning("schedule.trigger_failed", schedule_id=self.schedule_id, exc_info=True)
            state.error = TRIGGER_FAILED_MESSAGE
        finally:
            state.action_loading = False
