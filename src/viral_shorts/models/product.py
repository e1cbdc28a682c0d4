"""Pydantic models for the product profile used to build agent prompts."""

from __future__ import annotations

from pydantic import Field

from viral_shorts.models.fields import LenientModel, StringList, Text

ALL_PILLARS = ["Features", "Testimonials", "Trends", "Use Cases", "Problem-Solution"]
ALL_PLATFORMS = ["TikTok", "Instagram Reels", "YouTube Shorts"]


class ProductSettings(LenientModel):
    """Product identity. Stored under camelCase keys."""

    product_name: Text = Field(default="", alias="productName")
    product_url: Text = Field(default="", alias="productUrl")
    key_features: StringList = Field(default_factory=list, alias="keyFeatures")
    target_audience: Text = Field(default="", alias="targetAudience")
    brand_voice: Text = Field(default="", alias="brandVoice")
    content_pillars: StringList = Field(default_factory=list, alias="contentPillars")
    platform_targets: StringList = Field(default_factory=list, alias="platformTargets")

    @property
    def can_generate(self) -> bool:
        return bool(self.product_name)


DEFAULT_PRODUCT_SETTINGS = ProductSettings(
    product_name="Emergent",
    product_url="https://emergent.sh",
    key_features=[
        "AI-powered app builder",
        "No coding required",
        "Visual interface",
        "Rapid app development",
    ],
    target_audience=(
        "Non-technical entrepreneurs, startup founders, small business owners, "
        "and teams looking to build apps without developers"
    ),
    brand_voice="Empowering, modern, accessible, bold",
    content_pillars=["Features", "Use Cases", "Problem-Solution"],
    platform_targets=["TikTok", "Instagram Reels", "YouTube Shorts"],
)
