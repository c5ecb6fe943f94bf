"""Signed HTTP client for the url-metrics endpoint.

Responsible solely for building authenticated requests, sending them and
classifying the response body into :class:`URLMetrics` or one of the errors
in :mod:`mozscape.core.errors`.

Each call performs exactly one blocking round trip: no retries, no caching
and no throttling (see :mod:`mozscape.services.throttle` for the latter).
The client only holds immutable credentials and a thread-safe
``httpx.Client``, so one instance can be shared between threads.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import quote_plus

import httpx
from pydantic import TypeAdapter, ValidationError

from mozscape.core.config import Settings, settings as default_settings
from mozscape.core.errors import (
    DecodeError,
    ServiceError,
    TooManyRequestsError,
    TransportError,
)
from mozscape.core.signing import expires_at, sign
from mozscape.models.metrics.url_metrics import URLMetrics

logger = logging.getLogger(__name__)

# A bare ``null`` body decodes like an empty result.
_METRICS_OBJECT = TypeAdapter(URLMetrics | None)
_METRICS_LIST = TypeAdapter(list[URLMetrics] | None)
_ERROR_ENVELOPE = TypeAdapter(dict[str, str | None])

#: Envelope status the service uses for an exhausted quota.
QUOTA_EXCEEDED_STATUS = "429"


def _build_http_client(cfg: Settings) -> httpx.Client:
    if cfg.http_timeout is None:
        return httpx.Client()
    return httpx.Client(timeout=httpx.Timeout(cfg.http_timeout))


def decode_batch_response(body: bytes) -> list[URLMetrics]:
    """Classify a batch response body by its JSON shape.

    1. An array of metrics objects is the success case; order is kept as
       received and entries are not matched back to the requested URLs.
    2. Otherwise the body must be an object of string or null values (the
       error envelope; null reads as ""):

       - ``status == "429"`` raises :class:`TooManyRequestsError`;
       - any other ``status`` raises :class:`ServiceError`;
       - no ``status`` at all raises :class:`DecodeError` chained to the
         array decoding failure.

    3. A body that is neither raises :class:`DecodeError` chained to the
       envelope decoding failure, with the raw body attached.

    HTTP status codes play no part: the service reports application errors
    inside 200-class bodies.
    """
    try:
        return _METRICS_LIST.validate_json(body) or []
    except ValidationError as array_exc:
        text = body.decode("utf-8", errors="replace")
        try:
            envelope = _ERROR_ENVELOPE.validate_json(body)
        except ValidationError as envelope_exc:
            logger.debug("Unparseable batch response: %s", text)
            raise DecodeError(
                f"Cannot decode batch response: {envelope_exc}", body=text
            ) from envelope_exc

        # null values read as empty strings
        envelope = {key: value or "" for key, value in envelope.items()}
        status = envelope.get("status")
        if status is None:
            raise DecodeError(
                f"Cannot decode batch response: {array_exc}", body=text
            ) from array_exc
        if status == QUOTA_EXCEEDED_STATUS:
            raise TooManyRequestsError() from None
        raise ServiceError(status, envelope.get("message", "")) from None


class MetricsClient:
    """Client for single and batch url-metrics lookups.

    Usage::

        with MetricsClient(access_id, secret_key) as client:
            metrics = client.metrics_for_url("moz.com", Column.PAGE_AUTHORITY)

    ``http_client`` and ``clock`` are injectable; a client passed in is not
    closed by :meth:`close`.
    """

    def __init__(
        self,
        access_id: str,
        secret_key: str,
        *,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._access_id = access_id
        self._secret_key = secret_key
        self._settings = settings or default_settings
        self._owns_http_client = http_client is None
        self._http = http_client or _build_http_client(self._settings)
        self._clock = clock

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def access_id(self) -> str:
        return self._access_id

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def metrics_for_url(self, url: str, columns: int) -> URLMetrics:
        """Return the metrics for a single *url*.

        The body is decoded as one metrics object; an error envelope decodes
        to an empty :class:`URLMetrics` since unknown keys are ignored.

        Raises:
            TransportError: the request failed or the body could not be read.
            DecodeError: the body is not a metrics object.
        """
        request_url = (
            f"{self._endpoint()}/{quote_plus(url)}?{self._signed_query(columns)}"
        )
        body = self._send("GET", request_url)
        try:
            metrics = _METRICS_OBJECT.validate_json(body)
        except ValidationError as exc:
            raise DecodeError(
                f"Cannot decode metrics for {url}: {exc}",
                body=body.decode("utf-8", errors="replace"),
            ) from exc
        return metrics if metrics is not None else URLMetrics()

    def metrics_for_url_batch(
        self, urls: Sequence[str], columns: int
    ) -> list[URLMetrics]:
        """Return the metrics for *urls* in one POST round trip.

        The result follows the order of the response array.  See
        :func:`decode_batch_response` for how error bodies are classified.

        Raises:
            TransportError: the request failed or the body could not be read.
            TooManyRequestsError: the service reported status 429.
            ServiceError: the service reported any other status.
            DecodeError: the body matched no expected shape.
        """
        request_url = f"{self._endpoint()}/?{self._signed_query(columns)}"
        body = self._send("POST", request_url, json=list(urls))
        return decode_batch_response(body)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._owns_http_client and not self._http.is_closed:
            self._http.close()
            logger.debug("HTTP client closed.")

    def __enter__(self) -> MetricsClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _endpoint(self) -> str:
        base = self._settings.base_url.rstrip("/")
        return f"{base}/{self._settings.url_metrics_path.strip('/')}"

    def _signed_query(self, columns: int) -> str:
        # A fresh expiry and signature for every request.
        expires = expires_at(self._clock(), self._settings.expire_time_seconds)
        signature = sign(self._access_id, self._secret_key, expires)
        return (
            f"Cols={int(columns)}"
            f"&AccessID={quote_plus(self._access_id)}"
            f"&Expires={expires}"
            f"&Signature={signature}"
        )

    def _send(self, method: str, url: str, **kwargs: Any) -> bytes:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.InvalidURL as exc:
            raise TransportError(f"Invalid request URL: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"{method} request failed: {exc}") from exc
        logger.debug(
            "%s %s -> %d (%d bytes)",
            method,
            url.split("?", 1)[0],
            response.status_code,
            len(response.content),
        )
        return response.content
