"""Tests for the schedule view controller."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from viral_shorts.models.schedule import ExecutionLogEntry, Schedule
from viral_shorts.tools.scheduler import LogsResponse, ScheduleResponse, SchedulerServiceError
from viral_shorts.workflow.schedule import (
    LOAD_FAILED_MESSAGE,
    TOGGLE_FAILED_MESSAGE,
    TRIGGER_FAILED_MESSAGE,
    ScheduleController,
)


def _schedule(is_active=True, **overrides):
    return Schedule(
        id="sched-1",
        is_active=is_active,
        cron_expression="0 9 * * 1-5",
        **overrides,
    )


@pytest.fixture
def client():
    client = MagicMock()
    client.get_schedule = AsyncMock(
        return_value=ScheduleResponse(success=True, schedule=_schedule())
    )
    client.get_logs = AsyncMock(
        return_value=LogsResponse(
            success=True,
            executions=[ExecutionLogEntry(id="run-1", executed_at="2026-03-01T14:00:00Z", success=True)],
        )
    )
    client.pause_schedule = AsyncMock(return_value={"success": True})
    client.resume_schedule = AsyncMock(return_value={"success": True})
    client.trigger_now = AsyncMock(return_value={"success": True})
    return client


@pytest.fixture
def controller(client):
    return ScheduleController(client, schedule_id="sched-1", log_limit=20)


class TestLoad:
    @pytest.mark.asyncio
    async def test_refresh_loads_schedule_and_logs(self, controller, client):
        await controller.refresh()

        state = controller.state
        assert state.schedule.is_active is True
        assert state.cron_description == "every weekday at 9:00 AM"
        assert [e.id for e in state.logs] == ["run-1"]
        assert state.loading is False
        assert state.logs_loading is False
        client.get_logs.assert_awaited_once_with("sched-1", limit=20)

    @pytest.mark.asyncio
    async def test_load_error_uses_service_message(self, controller, client):
        client.get_schedule.return_value = ScheduleResponse(success=False, error="Not found")

        await controller.load()

        assert controller.state.schedule is None
        assert controller.state.error == "Not found"

    @pytest.mark.asyncio
    async def test_load_exception_uses_default_message(self, controller, client):
        client.get_schedule.side_effect = SchedulerServiceError("down")

        await controller.load()

        assert controller.state.error == LOAD_FAILED_MESSAGE
        assert controller.state.loading is False

    @pytest.mark.asyncio
    async def test_logs_failure_leaves_schedule_loaded(self, controller, client):
        client.get_logs.side_effect = SchedulerServiceError("down")

        await controller.refresh()

        assert controller.state.schedule is not None
        assert controller.state.logs == []
        assert controller.state.error == ""

    @pytest.mark.asyncio
    async def test_logs_failure_keeps_previous_list(self, controller, client):
        await controller.load_logs()
        client.get_logs.side_effect = SchedulerServiceError("down")

        await controller.load_logs()

        assert [e.id for e in controller.state.logs] == ["run-1"]

    def test_last_run_label(self):
        assert _schedule(last_run_success=True).last_run_label == "Success"
        assert _schedule(last_run_success=False).last_run_label == "Failed"
        assert _schedule().last_run_label == "N/A"


class TestToggle:
    @pytest.mark.asyncio
    async def test_active_schedule_is_paused_then_reloaded(self, controller, client):
        await controller.load()
        client.get_schedule.reset_mock()
        client.get_schedule.return_value = ScheduleResponse(
            success=True, schedule=_schedule(is_active=False)
        )

        await controller.toggle()

        client.pause_schedule.assert_awaited_once_with("sched-1")
        client.resume_schedule.assert_not_called()
        client.get_schedule.assert_awaited_once()
        assert controller.state.schedule.is_active is False
        assert controller.state.action_loading is False

    @pytest.mark.asyncio
    async def test_paused_schedule_is_resumed(self, controller, client):
        client.get_schedule.return_value = ScheduleResponse(
            success=True, schedule=_schedule(is_active=False)
        )
        await controller.load()

        await controller.toggle()

        client.resume_schedule.assert_awaited_once_with("sched-1")
        client.pause_schedule.assert_not_called()

    @pytest.mark.asyncio
    async def test_state_changes_only_after_reload(self, controller, client):
        await controller.load()
        reload_gate = asyncio.Event()
        observed = {}

        async def slow_reload(schedule_id):
            observed["during"] = controller.state.schedule.is_active
            await reload_gate.wait()
            return ScheduleResponse(success=True, schedule=_schedule(is_active=False))

        client.get_schedule.side_effect = slow_reload

        task = asyncio.create_task(controller.toggle())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert controller.state.schedule.is_active is True
        assert controller.state.action_loading is True

        reload_gate.set()
        await task

        assert observed["during"] is True
        assert controller.state.schedule.is_active is False

    @pytest.mark.asyncio
    async def test_toggle_without_schedule_is_noop(self, controller, client):
        await controller.toggle()

        client.pause_schedule.assert_not_called()
        client.resume_schedule.assert_not_called()

    @pytest.mark.asyncio
    async def test_toggle_failure_sets_error_and_keeps_schedule(self, controller, client):
        await controller.load()
        client.pause_schedule.side_effect = SchedulerServiceError("down")

        await controller.toggle()

        assert controller.state.error == TOGGLE_FAILED_MESSAGE
        assert controller.state.schedule.is_active is True
        assert controller.state.action_loading is False


class TestRunNow:
    @pytest.mark.asyncio
    async def test_run_now_reloads_logs_not_schedule(self, controller, client):
        await controller.load()
        client.get_schedule.reset_mock()

        await controller.run_now()

        client.trigger_now.assert_awaited_once_with("sched-1")
        client.get_logs.assert_awaited_once()
        client.get_schedule.assert_not_called()

    @pytest.mark.asyncio
    async def test_run_now_failure(self, controller, client):
        client.trigger_now.side_effect = SchedulerServiceError("down")

        await controller.run_now()

        assert controller.state.error == TRIGGER_FAILED_MESSAGE
        client.get_logs.assert_not_called()

    @pytest.mark.asyncio
    async def test_clear_error(self, controller, client):
        client.trigger_now.side_effect = SchedulerServiceError("down")
        await controller.run_now()

        controller.clear_error()

        assert controller.state.error == ""
