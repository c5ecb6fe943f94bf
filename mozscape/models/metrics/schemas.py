from __future__ import annotations

from pydantic import BaseModel


class BatchMetricsRequest(BaseModel):
    """Request body for POST /metrics/batch.

    ``cols`` falls back to every known column when omitted.
    """

    urls: list[str]
    cols: int | None = None
