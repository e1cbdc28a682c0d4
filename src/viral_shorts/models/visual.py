"""Pydantic models for visual-agent output: storyboard frames and thumbnail."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, ValidationInfo, model_validator

from viral_shorts.models.fields import (
    Integer,
    LenientModel,
    StringList,
    Text,
    as_mapping,
    is_integer,
    sequence_or_empty,
)


class SceneFrame(LenientModel):
    scene_number: Integer = 0
    frame_description: Text = ""
    visual_style_notes: Text = ""


FrameList = Annotated[list[SceneFrame], BeforeValidator(sequence_or_empty)]


class VisualPackage(LenientModel):
    """Normalized output of one visual-agent call for a single video.

    ``asset_urls`` never comes from the agent's JSON body; it is filled from
    the module-output side channel of the invocation envelope.
    """

    video_number: Integer = 0
    video_title: Text = ""
    thumbnail_description: Text = ""
    scene_frames: FrameList = Field(default_factory=list)
    overall_visual_direction: Text = ""
    asset_urls: StringList = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _echo_requested_video(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, cls):
            return data
        data = dict(as_mapping(data))
        video = (info.context or {}).get("video")
        if video is None:
            return data
        if not is_integer(data.get("video_number")):
            data["video_number"] = video.video_number
        if not isinstance(data.get("video_title"), str):
            data["video_title"] = video.title
        return data
