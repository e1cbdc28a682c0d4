"""Tests for per-video visual generation."""

import asyncio

import pytest
import pytest_asyncio

from conftest import VISUAL_ID, video_payload
from viral_shorts.models.video import VideoScript
from viral_shorts.tools.agent_client import AgentFailure, AgentResult, FailureReason
from viral_shorts.workflow.generation import VISUAL_FAILED_MESSAGE


@pytest_asyncio.fixture
async def generated(orchestrator):
    await orchestrator.generate()
    return orchestrator


@pytest.mark.asyncio
async def test_visual_success(generated, agent_client):
    agent_client.invoke.return_value = AgentResult(
        result={"thumbnail_description": "Laptop on fire", "scene_frames": [{"scene_number": 1}]},
        artifact_urls=["https://cdn.example/thumb.png"],
    )

    package = await generated.generate_visuals(1)

    state = generated.state
    assert package is state.visual
    assert package.video_number == 2
    assert package.video_title == "Video 2 title"
    assert package.thumbnail_description == "Laptop on fire"
    assert state.visual_assets == ["https://cdn.example/thumb.png"]
    assert state.visual_loading is False
    assert state.visual_video_index == 1
    assert state.active_agent_id is None
    assert agent_client.invoke.await_args.args[1] == VISUAL_ID


@pytest.mark.asyncio
async def test_visual_out_of_range_is_noop(generated, agent_client):
    agent_client.invoke.reset_mock()

    assert await generated.generate_visuals(5) is None
    assert await generated.generate_visuals(-1) is None

    agent_client.invoke.assert_not_called()
    assert generated.state.visual_loading is False


@pytest.mark.asyncio
async def test_visual_for_explicit_video_list(orchestrator, agent_client):
    agent_client.invoke.return_value = AgentResult(result={"thumbnail_description": "Demo"})
    videos = [VideoScript.model_validate(video_payload(7, title="Sample script"))]

    package = await orchestrator.generate_visuals(0, videos)

    assert orchestrator.state.videos == []
    assert package.video_number == 7
    assert package.video_title == "Sample script"
    assert 'Video 7: "Sample script"' in agent_client.invoke.await_args.args[0]


@pytest.mark.asyncio
async def test_visual_without_videos_is_noop(orchestrator, agent_client):
    assert await orchestrator.generate_visuals(0) is None

    agent_client.invoke.assert_not_called()


@pytest.mark.asyncio
async def test_visual_transport_failure(generated, agent_client):
    agent_client.invoke.return_value = AgentFailure(
        reason=FailureReason.TRANSPORT, message="502"
    )

    package = await generated.generate_visuals(0)

    assert package is None
    assert generated.state.error == VISUAL_FAILED_MESSAGE
    assert generated.state.visual is None
    assert generated.state.visual_loading is False


@pytest.mark.asyncio
async def test_visual_empty_result_keeps_artifacts(generated, agent_client):
    agent_client.invoke.return_value = AgentFailure(
        reason=FailureReason.EMPTY,
        message="Agent returned no data",
        artifact_urls=["https://cdn.example/frame.png"],
    )

    package = await generated.generate_visuals(0)

    assert package is None
    assert generated.state.error == ""
    assert generated.state.visual is None
    assert generated.state.visual_assets == ["https://cdn.example/frame.png"]


@pytest.mark.asyncio
async def test_visual_does_not_touch_history(generated, agent_client, history_store):
    before = history_store.list()
    agent_client.invoke.return_value = AgentResult(result={"thumbnail_description": "x"})

    await generated.generate_visuals(0)

    assert history_store.list() == before


@pytest.mark.asyncio
async def test_latest_visual_request_wins(generated, agent_client):
    release_a = asyncio.Event()
    release_b = asyncio.Event()

    async def fake_invoke(prompt, agent_id):
        if 'Video 1: "Video 1 title"' in prompt:
            await release_a.wait()
            return AgentResult(result={"thumbnail_description": "A"})
        await release_b.wait()
        return AgentResult(result={"thumbnail_description": "B"})

    agent_client.invoke.side_effect = fake_invoke

    task_a = asyncio.create_task(generated.generate_visuals(0))
    await asyncio.sleep(0)
    task_b = asyncio.create_task(generated.generate_visuals(1))
    await asyncio.sleep(0)

    release_b.set()
    package_b = await task_b
    release_a.set()
    package_a = await task_a

    state = generated.state
    assert package_a is None
    assert package_b.thumbnail_description == "B"
    assert state.visual.thumbnail_description == "B"
    assert state.visual.video_number == 2
    assert state.visual_video_index == 1
    assert state.visual_loading is False


@pytest.mark.asyncio
async def test_late_response_does_not_overwrite_newer_result(generated, agent_client):
    release_b = asyncio.Event()

    async def fake_invoke(prompt, agent_id):
        if 'Video 2: "Video 2 title"' in prompt:
            await release_b.wait()
            return AgentResult(result={"thumbnail_description": "B"})
        return AgentResult(result={"thumbnail_description": "A"})

    agent_client.invoke.side_effect = fake_invoke

    task_b = asyncio.create_task(generated.generate_visuals(1))
    await asyncio.sleep(0)
    package_a = await generated.generate_visuals(0)

    release_b.set()
    assert await task_b is None
    assert package_a.thumbnail_description == "A"
    assert generated.state.visual is package_a
    assert generated.state.visual_video_index == 0
    assert generated.state.visual_loading is False
