"""Pydantic models for the scheduler service resources.

Scheduler payloads are read leniently: a malformed field falls back to its
default instead of rejecting the whole schedule or log entry.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator

from viral_shorts.models.fields import (
    Flag,
    Integer,
    LenientModel,
    OptionalFlag,
    OptionalInteger,
    OptionalText,
    Text,
)

DEFAULT_TIMEZONE = "America/New_York"


def _timezone(value: Any) -> str:
    return value if isinstance(value, str) and value else DEFAULT_TIMEZONE


class Schedule(LenientModel):
    id: Text = ""
    is_active: Flag = False
    cron_expression: Text = ""
    timezone: Annotated[str, BeforeValidator(_timezone)] = DEFAULT_TIMEZONE
    next_run_time: OptionalText = None
    last_run_at: OptionalText = None
    last_run_success: OptionalFlag = None

    @property
    def last_run_label(self) -> str:
        if self.last_run_success is True:
            return "Success"
        if self.last_run_success is False:
            return "Failed"
        return "N/A"


class ExecutionLogEntry(LenientModel):
    id: Text = ""
    executed_at: Text = ""
    success: Flag = False
    attempt: Integer = 0
    max_attempts: Integer = 0
    response_status: OptionalInteger = None
    error_message: OptionalText = None
