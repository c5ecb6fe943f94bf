from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException

from mozscape.core.columns import DEFAULT_COLUMNS
from mozscape.core.errors import (
    DecodeError,
    ServiceError,
    TooManyRequestsError,
    TransportError,
)
from mozscape.models.common import ErrorResponse
from mozscape.models.metrics.schemas import BatchMetricsRequest
from mozscape.models.metrics.url_metrics import URLMetrics
from mozscape.services.throttle import ThrottledMetricsClient, get_shared_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/metrics", tags=["metrics"])

T = TypeVar("T")

_ERROR_RESPONSES = {
    429: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Dependency
# ---------------------------------------------------------------------------


def _get_client() -> ThrottledMetricsClient:
    """FastAPI dependency returning the shared throttled client."""
    try:
        return get_shared_client()
    except RuntimeError as exc:
        logger.error("Metrics client unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc))


def _lookup(what: str, call: Callable[[], T]) -> T:
    """Run *call* and translate lookup failures into HTTP errors."""
    try:
        return call()
    except TooManyRequestsError as exc:
        logger.warning("%s: quota exceeded", what)
        raise HTTPException(status_code=429, detail=str(exc))
    except ServiceError as exc:
        logger.warning("%s: service error %s", what, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    except DecodeError as exc:
        logger.error("%s: undecodable response: %s", what, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    except TransportError as exc:
        logger.error("%s: transport error: %s", what, exc)
        raise HTTPException(status_code=504, detail=str(exc))


# ---------------------------------------------------------------------------
# GET /metrics
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=URLMetrics,
    response_model_by_alias=False,
    responses=_ERROR_RESPONSES,
    summary="Look up metrics for one URL",
)
def get_metrics(
    url: str,
    cols: int = int(DEFAULT_COLUMNS),
    client: ThrottledMetricsClient = Depends(_get_client),
) -> URLMetrics:
    """Return the metrics the service holds for *url*.

    - **200**: metrics returned (absent columns are zero)
    - **429**: account quota exhausted
    - **502**: the service answered with an error or an unreadable body
    - **503**: no credentials configured
    - **504**: the service could not be reached
    """
    return _lookup(
        f"GET /metrics {url}", lambda: client.metrics_for_url(url, cols)
    )


# ---------------------------------------------------------------------------
# POST /metrics/batch
# ---------------------------------------------------------------------------


@router.post(
    "/batch",
    response_model=list[URLMetrics],
    response_model_by_alias=False,
    responses=_ERROR_RESPONSES,
    summary="Look up metrics for several URLs",
)
def post_metrics_batch(
    request: BatchMetricsRequest,
    client: ThrottledMetricsClient = Depends(_get_client),
) -> list[URLMetrics]:
    """Return metrics for every URL in the request body.

    Results follow the order the service answered in; long lists are split
    into several service batches.  Status codes as for ``GET /metrics``.
    """
    cols = int(DEFAULT_COLUMNS) if request.cols is None else request.cols
    return _lookup(
        f"POST /metrics/batch ({len(request.urls)} URLs)",
        lambda: client.metrics_for_urls(request.urls, cols),
    )
