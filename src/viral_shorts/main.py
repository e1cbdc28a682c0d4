"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from viral_shorts.api.dependencies import build_services, set_services
from viral_shorts.api.routes import router
from viral_shorts.config import settings

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# CORS configuration
# ---------------------------------------------------------------------------

_DEFAULT_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
}


def _get_allowed_origins() -> set[str]:
    origins = set(_DEFAULT_ORIGINS)
    if settings.allowed_origins:
        origins.update(o.strip() for o in settings.allowed_origins.split(",") if o.strip())
    return origins


_ALLOWED_ORIGINS = _get_allowed_origins()


# ---------------------------------------------------------------------------
# App lifecycle
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load persisted settings/history and fetch the schedule view once."""
    logger.info("app.startup", allowed_origins=sorted(_ALLOWED_ORIGINS), data_dir=settings.data_dir)

    services = build_services()
    set_services(services)
    await services.schedule.refresh()
    try:
        yield
    finally:
        set_services(None)
        logger.info("app.shutdown")


app = FastAPI(
    title="Viral Shorts Generator",
    description="Short-form video scripts and storyboards from external agents",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_ALLOWED_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}
