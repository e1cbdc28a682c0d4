"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from viral_shorts.memory.history import HistoryStore
from viral_shorts.memory.kv_store import InMemoryKeyValueStore
from viral_shorts.memory.settings_store import SettingsStore
from viral_shorts.models.product import ProductSettings
from viral_shorts.tools.agent_client import AgentResult
from viral_shorts.workflow.generation import GenerationOrchestrator

MANAGER_ID = "manager-agent"
VISUAL_ID = "visual-agent"


def video_payload(number=1, title=None, scene_count=2):
    """A well-formed video object as the manager agent returns it."""
    return {
        "video_number": number,
        "title": title or f"Video {number} title",
        "topic_tag": "#NoCode",
        "hook": "What if you could build an app in 10 minutes?",
        "total_duration_seconds": 40,
        "platform_target": "TikTok",
        "aspect_ratio": "9:16",
        "scenes": [
            {
                "scene_number": i + 1,
                "duration_seconds": 5,
                "voiceover_text": f"Line {i + 1}",
                "visual_description": f"Shot {i + 1}",
                "text_overlay": "ZERO CODE",
                "b_roll_cue": "Screen recording",
                "transition": "Quick zoom",
                "camera_direction": "Close-up",
            }
            for i in range(scene_count)
        ],
        "music_direction": {"style": "Trap", "bpm": "115", "energy_progression": "Low to high"},
        "cta": {"text": "Try it free", "placement": "Bottom third", "timing": "Last 5 seconds"},
    }


def manager_payload(video_count=2, finding_count=3):
    return {
        "research_summary": {
            "key_findings": [f"Finding {i}" for i in range(finding_count)],
            "angles_used": ["Cost savings", "Speed"],
            "data_sources_count": 15,
        },
        "videos": [video_payload(i + 1) for i in range(video_count)],
        "content_strategy_notes": "Lead with the pain point.",
        "visual_style_recommendations": "Bold overlays.",
    }


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def settings_store(kv):
    store = SettingsStore(kv)
    store.load()
    store.save(
        ProductSettings(
            product_name="Acme",
            key_features=["Fast"],
            content_pillars=["Features"],
            platform_targets=["TikTok"],
        )
    )
    return store


@pytest.fixture
def history_store(kv):
    store = HistoryStore(kv)
    store.load()
    return store


@pytest.fixture
def agent_client():
    client = MagicMock()
    client.invoke = AsyncMock(return_value=AgentResult(result=manager_payload()))
    return client


@pytest.fixture
def orchestrator(agent_client, settings_store, history_store):
    return GenerationOrchestrator(
        agent_client,
        settings_store,
        history_store,
        manager_agent_id=MANAGER_ID,
        visual_agent_id=VISUAL_ID,
        busy_release_delay=0,
    )
