"""FastAPI route handlers for settings, generation, history and schedule."""

from __future__ import annotations

import asyncio
import json

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse

from viral_shorts.api.dependencies import Services, get_services
from viral_shorts.api.schemas import (
    DashboardResponse,
    GenerationStartResponse,
    GenerationStatusResponse,
    HistoryDeleteResponse,
    HistoryListResponse,
    ScheduleStatusResponse,
    SettingsOptionsResponse,
)
from viral_shorts.models.history import HistoryEntry
from viral_shorts.models.product import ProductSettings
from viral_shorts.models.samples import SAMPLE_HISTORY, SAMPLE_SETTINGS, SAMPLE_VIDEOS
from viral_shorts.workflow.generation import dashboard_stats

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1")

_STREAM_POLL_SEC = 0.25


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@router.get("/settings", response_model=ProductSettings)
async def get_settings(services: Services = Depends(get_services)):
    return services.settings_store.current


@router.put("/settings", response_model=ProductSettings)
async def save_settings(request: ProductSettings, services: Services = Depends(get_services)):
    """Replace the product profile used for the next generation."""
    return services.settings_store.save(request)


@router.get("/settings/options", response_model=SettingsOptionsResponse)
async def get_settings_options():
    """Selectable content pillars and platforms."""
    return SettingsOptionsResponse()


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


@router.post("/generation", response_model=GenerationStartResponse)
async def start_generation(
    background_tasks: BackgroundTasks, services: Services = Depends(get_services)
):
    """Start a manager-agent generation in the background."""
    orchestrator = services.orchestrator
    if not services.settings_store.current.can_generate:
        raise HTTPException(status_code=400, detail="Configure a product name first")
    # Busy is claimed here, before the background task runs
    if not orchestrator.reserve():
        raise HTTPException(status_code=409, detail="A generation is already in progress")

    background_tasks.add_task(orchestrator.generate)
    logger.info("generation.requested")
    return GenerationStartResponse()


@router.get("/generation", response_model=GenerationStatusResponse)
async def get_generation(sample: bool = False, services: Services = Depends(get_services)):
    return GenerationStatusResponse.from_orchestrator(services.orchestrator, sample=sample)


@router.get("/generation/stream")
async def stream_generation(services: Services = Depends(get_services)):
    """SSE endpoint emitting phase changes until the busy flag is released."""
    orchestrator = services.orchestrator

    async def event_generator():
        last = None
        while True:
            state = orchestrator.state
            current = (state.phase.value, state.busy, state.error)
            if current != last:
                last = current
                yield {
                    "event": "phase",
                    "data": json.dumps(
                        {"phase": current[0], "busy": current[1], "error": current[2]}
                    ),
                }
            if not state.busy:
                return
            await asyncio.sleep(_STREAM_POLL_SEC)

    return EventSourceResponse(event_generator())


@router.post("/generation/videos/{video_index}/visuals", response_model=GenerationStartResponse)
async def start_visuals(
    video_index: int,
    background_tasks: BackgroundTasks,
    sample: bool = False,
    services: Services = Depends(get_services),
):
    """Start visual generation for one video of the current (or sample) result."""
    orchestrator = services.orchestrator
    videos = SAMPLE_VIDEOS if sample else orchestrator.state.videos
    if not 0 <= video_index < len(videos):
        raise HTTPException(status_code=404, detail=f"Video {video_index} not found")

    background_tasks.add_task(orchestrator.generate_visuals, video_index, list(videos))
    logger.info("generation.visuals_requested", video_index=video_index, sample=sample)
    return GenerationStartResponse()


# ---------------------------------------------------------------------------
# History & dashboard
# ---------------------------------------------------------------------------


@router.get("/history", response_model=HistoryListResponse)
async def list_history(sample: bool = False, services: Services = Depends(get_services)):
    entries = SAMPLE_HISTORY if sample else services.history_store.list()
    return HistoryListResponse(entries=entries)


@router.get("/history/{entry_id}", response_model=HistoryEntry)
async def get_history_entry(
    entry_id: str, sample: bool = False, services: Services = Depends(get_services)
):
    if sample:
        entry = next((e for e in SAMPLE_HISTORY if e.id == entry_id), None)
    else:
        entry = services.history_store.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"History entry {entry_id} not found")
    return entry


@router.delete("/history/{entry_id}", response_model=HistoryDeleteResponse)
async def delete_history(entry_id: str, services: Services = Depends(get_services)):
    deleted = services.history_store.delete(entry_id)
    return HistoryDeleteResponse(id=entry_id, deleted=deleted)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(sample: bool = False, services: Services = Depends(get_services)):
    if sample:
        history, product, videos = SAMPLE_HISTORY, SAMPLE_SETTINGS, SAMPLE_VIDEOS
    else:
        history = services.history_store.list()
        product = services.settings_store.current
        videos = services.orchestrator.state.videos
    stats = dashboard_stats(history, videos)
    return DashboardResponse(
        product_name=product.product_name,
        can_generate=product.can_generate,
        total_videos=stats.total_videos,
        this_week=stats.this_week,
        pending_review=stats.pending_review,
        recent=history[:5],
    )


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------


@router.get("/schedule", response_model=ScheduleStatusResponse)
async def get_schedule(services: Services = Depends(get_services)):
    return ScheduleStatusResponse.from_state(services.schedule.state)


@router.post("/schedule/refresh", response_model=ScheduleStatusResponse)
async def refresh_schedule(services: Services = Depends(get_services)):
    services.schedule.clear_error()
    await services.schedule.refresh()
    return ScheduleStatusResponse.from_state(services.schedule.state)


@router.post("/schedule/toggle", response_model=ScheduleStatusResponse)
async def toggle_schedule(services: Services = Depends(get_services)):
    if services.schedule.state.action_loading:
        raise HTTPException(status_code=409, detail="A schedule action is already in progress")
    await services.schedule.toggle()
    return ScheduleStatusResponse.from_state(services.schedule.state)


@router.post("/schedule/run", response_model=ScheduleStatusResponse)
async def run_schedule_now(services: Services = Depends(get_services)):
    if services.schedule.state.action_loading:
        raise HTTPException(status_code=409, detail="A schedule action is already in progress")
    await services.schedule.run_now()
    return ScheduleStatusResponse.from_state(services.schedule.state)
