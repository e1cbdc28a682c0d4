"""Prompt builders for the manager and visual agents.

The rendered text is the whole contract with each agent; no structured
request schema is sent.
"""

from __future__ import annotations

from viral_shorts.models.product import ProductSettings
from viral_shorts.models.video import VideoScript

# ---------------------------------------------------------------------------
# Prompt templates
# ---------------------------------------------------------------------------

MANAGER_PROMPT_TEMPLATE = """\
Create a 2-video viral content package for the SaaS product "{product_name}"{product_url}.
Key features: {key_features}.
Target audience: {target_audience}.
Brand voice: {brand_voice}.
Content pillars to focus on: {content_pillars}.
Platform targets: {platform_targets}."""

VISUAL_PROMPT_TEMPLATE = """\
Generate visual storyboard frames and a thumbnail for Video {video_number}: "{title}".
Hook: {hook}
Platform: {platform}
Aspect ratio: {aspect_ratio}
Scenes:
{scenes}
Create eye-catching visuals that match the viral short-form video style."""


def build_manager_prompt(product: ProductSettings) -> str:
    return MANAGER_PROMPT_TEMPLATE.format(
        product_name=product.product_name,
        product_url=f" ({product.product_url})" if product.product_url else "",
        key_features=", ".join(product.key_features) or "N/A",
        target_audience=product.target_audience or "general SaaS users",
        brand_voice=product.brand_voice or "professional",
        content_pillars=", ".join(product.content_pillars) or "Features",
        platform_targets=", ".join(product.platform_targets) or "TikTok",
    )


def build_visual_prompt(video: VideoScript) -> str:
    scenes = "\n".join(
        f'Scene {s.scene_number}: {s.visual_description} - '
        f'Text overlay: "{s.text_overlay}" - B-roll: {s.b_roll_cue}'
        for s in video.scenes
    )
    return VISUAL_PROMPT_TEMPLATE.format(
        video_number=video.video_number,
        title=video.title,
        hook=video.hook,
        platform=video.platform_target or "TikTok",
        aspect_ratio=video.aspect_ratio or "9:16",
        scenes=scenes,
    )
