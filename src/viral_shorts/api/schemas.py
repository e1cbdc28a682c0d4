"""Request/Response schemas for the FastAPI endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from viral_shorts.models.history import HistoryEntry
from viral_shorts.models.product import ALL_PILLARS, ALL_PLATFORMS
from viral_shorts.models.samples import SAMPLE_RESEARCH, SAMPLE_VIDEOS
from viral_shorts.models.schedule import ExecutionLogEntry, Schedule
from viral_shorts.models.video import ResearchSummary, VideoScript
from viral_shorts.models.visual import VisualPackage
from viral_shorts.workflow.generation import GenerationOrchestrator
from viral_shorts.workflow.schedule import ScheduleState


class GenerationStartResponse(BaseModel):
    status: str = "started"


class SettingsOptionsResponse(BaseModel):
    content_pillars: list[str] = Field(default_factory=lambda: list(ALL_PILLARS))
    platform_targets: list[str] = Field(default_factory=lambda: list(ALL_PLATFORMS))


class GenerationStatusResponse(BaseModel):
    phase: str
    busy: bool
    error: str = ""
    active_agent: Optional[str] = None
    videos: list[VideoScript] = Field(default_factory=list)
    research_summary: Optional[ResearchSummary] = None
    content_strategy_notes: str = ""
    visual_style_recommendations: str = ""
    visual: Optional[VisualPackage] = None
    visual_assets: list[str] = Field(default_factory=list)
    visual_loading: bool = False
    visual_video_index: Optional[int] = None

    @classmethod
    def from_orchestrator(
        cls, orchestrator: GenerationOrchestrator, sample: bool = False
    ) -> "GenerationStatusResponse":
        """Snapshot the orchestrator; ``sample`` swaps in the demo scripts and research."""
        state = orchestrator.state
        result = state.result
        return cls(
            phase=state.phase.value,
            busy=state.busy,
            error=state.error,
            active_agent=orchestrator.active_agent_label,
            videos=SAMPLE_VIDEOS if sample else state.videos,
            research_summary=SAMPLE_RESEARCH if sample else state.research,
            content_strategy_notes=result.content_strategy_notes if result else "",
            visual_style_recommendations=result.visual_style_recommendations if result else "",
            visual=state.visual,
            visual_assets=state.visual_assets,
            visual_loading=state.visual_loading,
            visual_video_index=state.visual_video_index,
        )


class HistoryListResponse(BaseModel):
    entries: list[HistoryEntry]


class HistoryDeleteResponse(BaseModel):
    id: str
    deleted: bool


class DashboardResponse(BaseModel):
    product_name: str
    can_generate: bool
    total_videos: int
    this_week: int
    pending_review: int
    recent: list[HistoryEntry]


class ScheduleStatusResponse(BaseModel):
    schedule: Optional[Schedule] = None
    cron_description: Optional[str] = None
    last_run: str = "N/A"
    logs: list[ExecutionLogEntry] = Field(default_factory=list)
    error: str = ""
    loading: bool = False
    logs_loading: bool = False
    action_loading: bool = False

    @classmethod
    def from_state(cls, state: ScheduleState) -> "ScheduleStatusResponse":
        return cls(
            schedule=state.schedule,
            cron_description=state.cron_description,
            last_run=state.schedule.last_run_label if state.schedule else "N/A",
            logs=state.logs,
            error=state.error,
            loading=state.loading,
            logs_loading=state.logs_loading,
            action_loading=state.action_loading,
        )
