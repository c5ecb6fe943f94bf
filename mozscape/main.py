from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from mozscape.api.router import router
from mozscape.core.log import configure_logging
from mozscape.services.throttle import close_shared_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # ── Startup ──────────────────────────────────────────────────────
    configure_logging()
    yield
    # ── Shutdown ─────────────────────────────────────────────────────
    close_shared_client()


app = FastAPI(
    title="Mozscape Metrics",
    description="Signed url-metrics lookups for single URLs and batches.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
