from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MOZSCAPE_", extra="ignore"
    )

    # Credentials
    access_id: str = ""
    secret_key: str = ""

    # Service endpoint
    base_url: str = "http://lsapi.seomoz.com"
    url_metrics_path: str = "linkscape/url-metrics"

    # Quotas. Only the expiry is applied by MetricsClient; the rate values
    # describe the free-access quota and are honoured by ThrottledMetricsClient.
    expire_time_seconds: int = 300
    max_requests_per_second: int = 10
    wait_time_between_requests: float = 10.0

    # HTTP client (None keeps the httpx defaults)
    http_timeout: float | None = None

    # Logging
    log_level: str = "INFO"


settings = Settings()
