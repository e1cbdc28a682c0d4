"""Pydantic model for persisted generation history."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from viral_shorts.models.fields import LenientModel, Text
from viral_shorts.models.video import ResearchSummary, VideoList


class HistoryEntry(LenientModel):
    """One past generation result. Immutable once created."""

    model_config = {"frozen": True}

    id: Text = ""
    timestamp: Text = ""
    product_name: Text = Field(default="", alias="productName")
    videos: VideoList = Field(default_factory=list)
    research_summary: Optional[ResearchSummary] = Field(default=None, alias="researchSummary")
    content_strategy_notes: Text = Field(default="", alias="contentStrategyNotes")
    visual_style_recommendations: Text = Field(default="", alias="visualStyleRecommendations")
