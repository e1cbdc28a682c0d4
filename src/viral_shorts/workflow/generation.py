"""Generation orchestrator: manager-agent scripts and per-video visuals.

Phase flow of one manager request:

    Idle -> Researching -> Writing scripts -> Complete | Failed

The busy flag outlives the request by a short cosmetic delay so the final
phase label stays visible; that release is scheduled separately and never
touches result data. Visual requests are keyed to one video at a time and
the most recent request wins; superseded responses are dropped on arrival.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

import structlog

from viral_shorts.config import settings
from viral_shorts.memory.history import HistoryStore, generate_history_id
from viral_shorts.memory.settings_store import SettingsStore
from viral_shorts.models.history import HistoryEntry
from viral_shorts.models.normalize import (
    normalize_generation_result,
    normalize_visual_result,
)
from viral_shorts.models.product import ProductSettings
from viral_shorts.models.video import GenerationResult, ResearchSummary, VideoScript
from viral_shorts.models.visual import VisualPackage
from viral_shorts.tools.agent_client import (
    AgentClient,
    AgentFailure,
    AgentOutcome,
    FailureReason,
)
from viral_shorts.workflow.prompts import build_manager_prompt, build_visual_prompt

logger = structlog.get_logger()

GENERATION_FAILED_MESSAGE = "Generation failed"
NO_DATA_MESSAGE = "Agent returned no data. Please try again."
VISUAL_FAILED_MESSAGE = "Visual generation failed"


class GenerationPhase(str, Enum):
    IDLE = ""
    RESEARCHING = "Researching..."
    WRITING_SCRIPTS = "Writing scripts..."
    COMPLETE = "Complete!"
    FAILED = "Failed"


@dataclass
class GenerationState:
    phase: GenerationPhase = GenerationPhase.IDLE
    busy: bool = False
    error: str = ""
    active_agent_id: Optional[str] = None

    # Latest manager result
    result: Optional[GenerationResult] = None
    videos: list[VideoScript] = field(default_factory=list)

    # Latest visual request
    visual: Optional[VisualPackage] = None
    visual_assets: list[str] = field(default_factory=list)
    visual_loading: bool = False
    visual_video_index: Optional[int] = None

    @property
    def research(self) -> Optional[ResearchSummary]:
        return self.result.research_or_empty if self.result is not None else None


class GenerationOrchestrator:
    def __init__(
        self,
        agent_client: AgentClient,
        settings_store: SettingsStore,
        history_store: HistoryStore,
        *,
        manager_agent_id: str = settings.manager_agent_id,
        visual_agent_id: str = settings.visual_agent_id,
        busy_release_delay: float = settings.busy_release_delay_sec,
    ):
        self._agents = agent_client
        self._settings = settings_store
        self._history = history_store
        self.manager_agent_id = manager_agent_id
        self.visual_agent_id = visual_agent_id
        self.busy_release_delay = busy_release_delay

        self._state = GenerationState()
        self._release_handle: Optional[asyncio.TimerHandle] = None
        self._reserved = False
        self._visual_request = 0

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def active_agent_label(self) -> Optional[str]:
        if self._state.active_agent_id is None:
            return None
        if self._state.active_agent_id == self.manager_agent_id:
            return "Production Manager"
        return "Visual Generator"

    # ------------------------------------------------------------------
    # Manager flow
    # ------------------------------------------------------------------

    def reserve(self) -> bool:
        """Claim the busy flag ahead of a scheduled ``generate`` call.

        Returns False when a generation is already running or reserved.
        """
        if self._state.busy:
            return False
        self._reserved = True
        self._state.busy = True
        return True

    async def generate(self) -> Optional[HistoryEntry]:
        """Run one manager-agent generation for the current product settings.

        Returns the new history entry on success. Without a product name the
        call is a no-op and returns None.
        """
        reserved, self._reserved = self._reserved, False
        product = self._settings.current
        if not product.can_generate:
            if reserved:
                self._state.busy = False
            logger.info("generation.skipped", reason="no product name")
            return None

        state = self._state
        state.busy = True
        state.error = ""
        state.phase = GenerationPhase.RESEARCHING
        state.active_agent_id = self.manager_agent_id
        logger.info("generation.start", product_name=product.product_name)

        entry: Optional[HistoryEntry] = None
        try:
            prompt = build_manager_prompt(product)
            # Label only; the agent call below is a single request
            state.phase = GenerationPhase.WRITING_SCRIPTS
            outcome = await self._agents.invoke(prompt, self.manager_agent_id)
            entry = self._apply_manager_outcome(outcome, product)
        except Exception:
            logger.exception("generation.failed", product_name=product.product_name)
            state.error = GENERATION_FAILED_MESSAGE
            state.phase = GenerationPhase.FAILED
        finally:
            state.active_agent_id = None
            self._schedule_busy_release()

        return entry

    def _apply_manager_outcome(
        self, outcome: AgentOutcome, product: ProductSettings
    ) -> Optional[HistoryEntry]:
        state = self._state

        if isinstance(outcome, AgentFailure):
            state.error = (
                NO_DATA_MESSAGE
                if outcome.reason is FailureReason.EMPTY
                else GENERATION_FAILED_MESSAGE
            )
            state.phase = GenerationPhase.FAILED
            logger.warning(
                "generation.agent_failed",
                reason=outcome.reason.value,
                detail=outcome.message,
            )
            return None

        result = normalize_generation_result(outcome.result)
        state.result = result
        state.videos = list(result.videos)
        state.phase = GenerationPhase.COMPLETE

        # Zero-video results are still recorded
        entry = HistoryEntry(
            id=generate_history_id(),
            timestamp=_utc_timestamp(),
            product_name=product.product_name,
            videos=result.videos,
            research_summary=result.research_summary,
            content_strategy_notes=result.content_strategy_notes,
            visual_style_recommendations=result.visual_style_recommendations,
        )
        self._history.prepend(entry)

        logger.info(
            "generation.complete",
            entry_id=entry.id,
            video_count=len(result.videos),
        )
        return entry

    def _schedule_busy_release(self) -> None:
        if self._release_handle is not None:
            self._release_handle.cancel()
            self._release_handle = None
        if self.busy_release_delay <= 0:
            self._release_busy()
            return
        loop = asyncio.get_running_loop()
        self._release_handle = loop.call_later(self.busy_release_delay, self._release_busy)

    def _release_busy(self) -> None:
        self._release_handle = None
        self._state.busy = False

    # ------------------------------------------------------------------
    # Visual flow
    # ------------------------------------------------------------------

    async def generate_visuals(
        self, video_index: int, videos: Optional[list[VideoScript]] = None
    ) -> Optional[VisualPackage]:
        """Request storyboard frames and a thumbnail for one video.

        ``videos`` defaults to the current generation result; the sample view
        passes the sample scripts instead. Returns the package shown in
        state, or None when the index is out of range, the agent returned
        nothing, or a newer request superseded this one.
        """
        if videos is None:
            videos = self._state.videos
        if not 0 <= video_index < len(videos):
            logger.info("generation.visuals_skipped", video_index=video_index)
            return None
        video = videos[video_index]

        self._visual_request += 1
        request_id = self._visual_request

        state = self._state
        state.visual_loading = True
        state.visual = None
        state.visual_assets = []
        state.visual_video_index = video_index
        state.active_agent_id = self.visual_agent_id
        logger.info(
            "generation.visuals_start",
            video_index=video_index,
            video_number=video.video_number,
        )

        try:
            outcome = await self._agents.invoke(
                build_visual_prompt(video), self.visual_agent_id
            )
        except Exception as exc:
            logger.exception("generation.visuals_failed", video_index=video_index)
            outcome = AgentFailure(reason=FailureReason.TRANSPORT, message=str(exc))

        if request_id != self._visual_request:
            logger.info(
                "generation.visuals_superseded",
                video_index=video_index,
                current_video_index=state.visual_video_index,
            )
            return None

        package: Optional[VisualPackage] = None
        if isinstance(outcome, AgentFailure):
            state.visual_assets = list(outcome.artifact_urls)
            if outcome.reason is FailureReason.TRANSPORT:
                state.error = VISUAL_FAILED_MESSAGE
        else:
            package = normalize_visual_result(outcome.result, video, outcome.artifact_urls)
            state.visual = package
            state.visual_assets = list(package.asset_urls)

        state.active_agent_id = None
        state.visual_loading = False
        logger.info(
            "generation.visuals_done",
            video_index=video_index,
            frame_count=len(package.scene_frames) if package else 0,
            asset_count=len(state.visual_assets),
        )
        return package


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Dashboard statistics
# ---------------------------------------------------------------------------


@dataclass
class DashboardStats:
    total_videos: int
    this_week: int
    pending_review: int


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def dashboard_stats(
    history: list[HistoryEntry],
    videos: list[VideoScript],
    now: Optional[datetime] = None,
) -> DashboardStats:
    """Summary counters. Each generation counts as two videos."""
    now = now or datetime.now(timezone.utc)
    week_ago = now - timedelta(days=7)
    this_week = 0
    for entry in history:
        created = _parse_timestamp(entry.timestamp)
        if created is not None and created > week_ago:
            this_week += 1
    return DashboardStats(
        total_videos=len(history) * 2,
        this_week=this_week,
        pending_review=len(videos),
    )
