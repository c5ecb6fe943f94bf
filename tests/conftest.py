from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from mozscape.core.config import Settings
from mozscape.main import app
from mozscape.services.throttle import ThrottledMetricsClient
from mozscape.workers.client import MetricsClient

ACCESS_ID = "member-0123456789"
SECRET_KEY = "0123456789abcdef0123456789abcdef"
NOW = 1_700_000_000
BASE_URL = "http://lsapi.seomoz.com"
ENDPOINT = f"{BASE_URL}/linkscape/url-metrics"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        access_id=ACCESS_ID,
        secret_key=SECRET_KEY,
        base_url=BASE_URL,
        expire_time_seconds=300,
        max_requests_per_second=10,
        wait_time_between_requests=10.0,
    )


@pytest.fixture
def metrics_client(settings):
    """MetricsClient with a frozen clock so expiries are predictable."""
    with MetricsClient(
        ACCESS_ID, SECRET_KEY, settings=settings, clock=lambda: NOW
    ) as client:
        yield client


@pytest.fixture
def mock_client():
    """Stand-in for the shared throttled client used by the API."""
    return MagicMock(spec=ThrottledMetricsClient)


@pytest.fixture
def client(mock_client):
    """TestClient whose routes talk to ``mock_client``."""
    with (
        patch(
            "mozscape.api.metrics.routes.get_shared_client",
            return_value=mock_client,
        ),
        patch("mozscape.main.close_shared_client"),
    ):
        with TestClient(app) as c:
            yield c
