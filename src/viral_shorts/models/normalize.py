"""Normalization of raw agent results into typed records.

Both functions are total: any JSON value in, a fully populated record out.
"""

from __future__ import annotations

from typing import Any, Iterable

import structlog

from viral_shorts.models.fields import as_mapping
from viral_shorts.models.video import GenerationResult, VideoScript
from viral_shorts.models.visual import VisualPackage

logger = structlog.get_logger()


def normalize_generation_result(raw: Any) -> GenerationResult:
    """Coerce a manager-agent ``result`` payload into a GenerationResult."""
    result = GenerationResult.model_validate(as_mapping(raw))
    logger.debug(
        "normalize.generation_result",
        video_count=len(result.videos),
        has_research=result.research_summary is not None,
    )
    return result


def normalize_visual_result(
    raw: Any,
    video: VideoScript,
    asset_urls: Iterable[str] = (),
) -> VisualPackage:
    """Coerce a visual-agent ``result`` payload into a VisualPackage.

    The requested video's number and title are echoed back when the agent
    omits them. ``asset_urls`` comes from the invocation's side channel.
    """
    data = {k: v for k, v in as_mapping(raw).items() if k != "asset_urls"}
    data["asset_urls"] = [url for url in asset_urls if isinstance(url, str) and url]
    return VisualPackage.model_validate(data, context={"video": video})
