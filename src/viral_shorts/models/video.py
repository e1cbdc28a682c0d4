"""Pydantic models for manager-agent output: scripts, scenes and research."""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from viral_shorts.models.fields import (
    Count,
    Integer,
    LenientModel,
    Number,
    StringList,
    Text,
    sequence_or_empty,
)


class Scene(LenientModel):
    scene_number: Integer = 0
    duration_seconds: Number = 0.0
    voiceover_text: Text = ""
    visual_description: Text = ""
    text_overlay: Text = ""
    b_roll_cue: Text = ""
    transition: Text = ""
    camera_direction: Text = ""


class MusicDirection(LenientModel):
    style: Text = ""
    bpm: Text = ""
    energy_progression: Text = ""


class CallToAction(LenientModel):
    text: Text = ""
    placement: Text = ""
    timing: Text = ""


SceneList = Annotated[list[Scene], BeforeValidator(sequence_or_empty)]


class VideoScript(LenientModel):
    """One generated short-form video script."""

    video_number: Integer = 0
    title: Text = ""
    topic_tag: Text = ""
    hook: Text = ""
    total_duration_seconds: Number = 0.0
    platform_target: Text = ""
    aspect_ratio: Text = ""
    scenes: SceneList = Field(default_factory=list)
    music_direction: MusicDirection = Field(default_factory=MusicDirection)
    cta: CallToAction = Field(default_factory=CallToAction)


class ResearchSummary(LenientModel):
    key_findings: StringList = Field(default_factory=list)
    angles_used: StringList = Field(default_factory=list)
    data_sources_count: Count = 0


VideoList = Annotated[list[VideoScript], BeforeValidator(sequence_or_empty)]


class GenerationResult(LenientModel):
    """Normalized output of one manager-agent call.

    ``research_summary`` stays ``None`` only when the agent left it out (or
    sent ``null``); any other value is coerced field by field.
    """

    research_summary: Optional[ResearchSummary] = None
    videos: VideoList = Field(default_factory=list)
    content_strategy_notes: Text = ""
    visual_style_recommendations: Text = ""

    @property
    def research_or_empty(self) -> ResearchSummary:
        return self.research_summary or ResearchSummary()
