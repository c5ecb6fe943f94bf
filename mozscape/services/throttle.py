"""Client-side throttling for the free-access quota.

:class:`MetricsClient` never limits itself; the quota values in
:class:`~mozscape.core.config.Settings` are only applied when a client is
wrapped in :class:`ThrottledMetricsClient`.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from typing import TypeVar

from mozscape.core.config import settings
from mozscape.models.metrics.url_metrics import URLMetrics
from mozscape.workers.client import MetricsClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Module-level shared client
_shared_client: ThrottledMetricsClient | None = None


class ThrottledMetricsClient:
    """Wrap a :class:`MetricsClient` with a fixed delay between requests.

    - At most one request is in flight; concurrent callers queue on a lock.
    - A request starts no sooner than ``wait_seconds`` after the previous
      one finished.  The first request never waits.
    - :meth:`metrics_for_urls` splits long URL lists into batches of at most
      ``max_urls_per_request`` URLs.

    Errors from the wrapped client propagate unchanged.
    """

    def __init__(
        self,
        client: MetricsClient,
        *,
        max_urls_per_request: int | None = None,
        wait_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        cfg = client.settings
        if max_urls_per_request is None:
            max_urls_per_request = cfg.max_requests_per_second
        if wait_seconds is None:
            wait_seconds = cfg.wait_time_between_requests
        if max_urls_per_request < 1:
            raise ValueError("max_urls_per_request must be at least 1")

        self._client = client
        self._max_urls = max_urls_per_request
        self._wait = wait_seconds
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()
        self._last_finished: float | None = None

    @property
    def client(self) -> MetricsClient:
        return self._client

    def metrics_for_url(self, url: str, columns: int) -> URLMetrics:
        return self._throttled(self._client.metrics_for_url, url, columns)

    def metrics_for_url_batch(
        self, urls: Sequence[str], columns: int
    ) -> list[URLMetrics]:
        return self._throttled(self._client.metrics_for_url_batch, urls, columns)

    def metrics_for_urls(self, urls: Sequence[str], columns: int) -> list[URLMetrics]:
        """Look up any number of URLs, one throttled batch per chunk.

        Results are concatenated in chunk order.  An empty list is still sent
        as a single (empty) batch.
        """
        urls = list(urls)
        if not urls:
            return self.metrics_for_url_batch(urls, columns)

        results: list[URLMetrics] = []
        for start in range(0, len(urls), self._max_urls):
            chunk = urls[start : start + self._max_urls]
            logger.debug(
                "Requesting batch of %d URL(s) starting at index %d",
                len(chunk),
                start,
            )
            results.extend(self.metrics_for_url_batch(chunk, columns))
        return results

    def close(self) -> None:
        self._client.close()

    def _throttled(self, call: Callable[..., T], *args: object) -> T:
        with self._lock:
            if self._last_finished is not None:
                remaining = self._wait - (self._clock() - self._last_finished)
                if remaining > 0:
                    logger.debug("Waiting %.2fs before next request.", remaining)
                    self._sleep(remaining)
            try:
                return call(*args)
            finally:
                self._last_finished = self._clock()


def get_shared_client() -> ThrottledMetricsClient:
    """Return the shared throttled client.  Creates one if missing.

    Raises:
        RuntimeError: no credentials are configured.
    """
    global _shared_client  # noqa: PLW0603
    if _shared_client is None:
        if not settings.access_id or not settings.secret_key:
            raise RuntimeError(
                "Credentials are not configured. "
                "Set MOZSCAPE_ACCESS_ID and MOZSCAPE_SECRET_KEY."
            )
        _shared_client = ThrottledMetricsClient(
            MetricsClient(settings.access_id, settings.secret_key, settings=settings)
        )
    return _shared_client


def close_shared_client() -> None:
    """Close the shared client and its HTTP connection pool."""
    global _shared_client  # noqa: PLW0603
    if _shared_client is not None:
        _shared_client.close()
        _shared_client = None
