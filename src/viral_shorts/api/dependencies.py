"""FastAPI dependency injection: stores, clients and controllers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from viral_shorts.config import settings
from viral_shorts.memory.history import HistoryStore
from viral_shorts.memory.kv_store import FileKeyValueStore, KeyValueStore
from viral_shorts.memory.settings_store import SettingsStore
from viral_shorts.tools.agent_client import AgentClient
from viral_shorts.tools.scheduler import SchedulerClient
from viral_shorts.workflow.generation import GenerationOrchestrator
from viral_shorts.workflow.schedule import ScheduleController


@dataclass
class Services:
    settings_store: SettingsStore
    history_store: HistoryStore
    orchestrator: GenerationOrchestrator
    schedule: ScheduleController


_services: Optional[Services] = None


def build_services(
    kv: Optional[KeyValueStore] = None,
    agent_client: Optional[AgentClient] = None,
    scheduler_client: Optional[SchedulerClient] = None,
) -> Services:
    """Wire the object graph. Stores are loaded before anything reads them."""
    kv = kv if kv is not None else FileKeyValueStore(settings.data_dir)

    settings_store = SettingsStore(kv)
    settings_store.load()
    history_store = HistoryStore(kv)
    history_store.load()

    orchestrator = GenerationOrchestrator(
        agent_client or AgentClient(),
        settings_store,
        history_store,
    )
    schedule = ScheduleController(scheduler_client or SchedulerClient())
    return Services(
        settings_store=settings_store,
        history_store=history_store,
        orchestrator=orchestrator,
        schedule=schedule,
    )


def set_services(services: Optional[Services]) -> None:
    global _services
    _services = services


def get_services() -> Services:
    if _services is None:
        raise RuntimeError("Services not initialized; app lifespan has not run")
    return _services
