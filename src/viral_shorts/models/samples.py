"""Sample content for the demo view.

Shown instead of live data when a client asks for ``sample=true``; never
persisted and never mixed into the stores.
"""

from __future__ import annotations

from viral_shorts.models.history import HistoryEntry
from viral_shorts.models.product import DEFAULT_PRODUCT_SETTINGS
from viral_shorts.models.video import ResearchSummary, VideoScript

SAMPLE_SETTINGS = DEFAULT_PRODUCT_SETTINGS

SAMPLE_VIDEOS = [
    VideoScript.model_validate(
        {
            "video_number": 1,
            "title": "You Do NOT Need a Developer to Build Your App",
            "topic_tag": "#NoCode",
            "hook": "What if I told you that you could build a full app in 10 minutes with zero code?",
            "total_duration_seconds": 42,
            "platform_target": "TikTok",
            "aspect_ratio": "9:16",
            "scenes": [
                {
                    "scene_number": 1,
                    "duration_seconds": 5,
                    "voiceover_text": "What if I told you that you could build a full app in 10 minutes with zero code?",
                    "visual_description": "Person staring at complex code on screen, then pushing laptop away",
                    "text_overlay": "ZERO CODE NEEDED",
                    "b_roll_cue": "Time-lapse of frustrated coding session",
                    "transition": "Quick zoom",
                    "camera_direction": "Close-up on face, dramatic pull back",
                },
                {
                    "scene_number": 2,
                    "duration_seconds": 8,
                    "voiceover_text": "Emergent lets you describe your app idea in plain English and AI builds it for you.",
                    "visual_description": "Clean Emergent interface with text prompt being typed",
                    "text_overlay": "Just Describe It",
                    "b_roll_cue": "Screen recording of Emergent builder",
                    "transition": "Slide left",
                    "camera_direction": "Screen capture showing prompt to app flow",
                },
                {
                    "scene_number": 3,
                    "duration_seconds": 10,
                    "voiceover_text": "No frameworks. No debugging. No hiring a dev team. Just your idea turned into a real working app.",
                    "visual_description": "Split screen: left shows traditional dev process, right shows Emergent one-step flow",
                    "text_overlay": "Idea to App. Instantly.",
                    "b_roll_cue": "Side-by-side comparison animation",
                    "transition": "Morph",
                    "camera_direction": "Wide shot comparison",
                },
                {
                    "scene_number": 4,
                    "duration_seconds": 7,
                    "voiceover_text": "Thousands of founders are already building with Emergent. Why are you still waiting?",
                    "visual_description": "Montage of different app types built with Emergent",
                    "text_overlay": "BUILD YOURS NOW",
                    "b_roll_cue": "Rapid app showcase montage",
                    "transition": "Wipe",
                    "camera_direction": "Quick cuts between apps",
                },
            ],
            "music_direction": {
                "style": "Electronic / Trap beat",
                "bpm": "115",
                "energy_progression": "Low to High build with drop at Scene 3",
            },
            "cta": {
                "text": "Try Emergent free at emergent.sh",
                "placement": "Bottom third + pinned comment",
                "timing": "Last 5 seconds",
            },
        }
    ),
    VideoScript.model_validate(
        {
            "video_number": 2,
            "title": "Stop Paying Developers $150/hr for Simple Apps",
            "topic_tag": "#StartupHacks",
            "hook": "You are burning cash on developers for apps that AI can build in minutes.",
            "total_duration_seconds": 36,
            "platform_target": "Instagram Reels",
            "aspect_ratio": "9:16",
            "scenes": [
                {
                    "scene_number": 1,
                    "duration_seconds": 4,
                    "voiceover_text": "You are burning cash on developers for apps that AI can build in minutes.",
                    "visual_description": "Money flying out of wallet with developer invoice",
                    "text_overlay": "$150/HR FOR THIS?",
                    "b_roll_cue": "Stack of invoices being tossed",
                    "transition": "Shake effect",
                    "camera_direction": "Top-down dramatic reveal",
                },
                {
                    "scene_number": 2,
                    "duration_seconds": 8,
                    "voiceover_text": "Emergent is an AI app builder. Describe what you want, and watch it come to life. No code. No waiting weeks.",
                    "visual_description": "Emergent interface building an app in real-time",
                    "text_overlay": "AI Builds It For You",
                    "b_roll_cue": "Product demo with live generation",
                    "transition": "Smooth slide",
                    "camera_direction": "Screen recording with highlights",
                },
                {
                    "scene_number": 3,
                    "duration_seconds": 6,
                    "voiceover_text": "From idea to launch in one afternoon. That is the Emergent difference.",
                    "visual_description": "Before/after timeline: 6 weeks vs 1 afternoon",
                    "text_overlay": "6 Weeks vs 1 Afternoon",
                    "b_roll_cue": "Animated timeline comparison",
                    "transition": "Pop zoom",
                    "camera_direction": "Clean infographic animation",
                },
            ],
            "music_direction": {
                "style": "Upbeat electronic",
                "bpm": "120",
                "energy_progression": "Medium to High",
            },
            "cta": {
                "text": "Link in bio - emergent.sh",
                "placement": "End card overlay",
                "timing": "Last 4 seconds",
            },
        }
    ),
]

SAMPLE_RESEARCH = ResearchSummary(
    key_findings=[
        "No-code app market projected to reach $65B by 2027",
        "AI-assisted development reduces time-to-market by 80%",
        "72% of entrepreneurs say lack of technical skills is their biggest barrier",
        "Short-form video content drives 3x more SaaS signups than blog posts",
        "Emergent enables full app creation from natural language descriptions",
    ],
    angles_used=[
        "Cost savings vs hiring devs",
        "Speed to market",
        "Democratizing app development",
    ],
    data_sources_count=15,
)

SAMPLE_HISTORY = [
    HistoryEntry(
        id="hist_001",
        timestamp="2026-02-20T14:30:00Z",
        product_name="Emergent",
        videos=SAMPLE_VIDEOS,
        research_summary=SAMPLE_RESEARCH,
        content_strategy_notes=(
            "Lead with the cost/time pain point of traditional development. Show the "
            "contrast between weeks of dev work and minutes with Emergent. Target "
            "founders and solopreneurs who feel blocked by technical barriers."
        ),
        visual_style_recommendations=(
            "Use bold, high-contrast text overlays on dark backgrounds. Show actual "
            "product UI for credibility. Quick cuts to match the energetic no-code "
            "builder vibe."
        ),
    ),
    HistoryEntry(
        id="hist_002",
        timestamp="2026-02-19T09:15:00Z",
        product_name="Emergent",
        videos=SAMPLE_VIDEOS[:1],
        research_summary=SAMPLE_RESEARCH,
        content_strategy_notes=(
            'Test the "you don\'t need a developer" angle against the "save money" '
            "angle. Both resonate strongly with the solopreneur audience."
        ),
        visual_style_recommendations=(
            "Split-screen before/after comparisons work well. Show the traditional "
            "dev process vs the Emergent one-prompt flow."
        ),
    ),
]
