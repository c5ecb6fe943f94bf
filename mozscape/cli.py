"""Command-line front-end: ``mozscape -u URL [-u URL ...]``.

Prints one summary line per URL.  Exit status is 0 on success, 1 when the
lookup fails and 2 on usage errors.
"""

from __future__ import annotations

import logging

import click

from mozscape.core.columns import DEFAULT_COLUMNS
from mozscape.core.config import settings
from mozscape.core.errors import MetricsError
from mozscape.core.log import configure_logging
from mozscape.services.throttle import ThrottledMetricsClient
from mozscape.workers.client import MetricsClient

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-u",
    "--url",
    "urls",
    multiple=True,
    required=True,
    help="URL to retrieve information for. Repeat for several URLs.",
)
@click.option(
    "--cols",
    type=int,
    default=int(DEFAULT_COLUMNS),
    show_default=True,
    help="Column bitmask to request.",
)
@click.option(
    "--access-id",
    default=lambda: settings.access_id,
    help="Account access ID [env: MOZSCAPE_ACCESS_ID].",
)
@click.option(
    "--secret-key",
    default=lambda: settings.secret_key,
    help="Account secret key [env: MOZSCAPE_SECRET_KEY].",
)
@click.option("--log-level", default=None, help="Override MOZSCAPE_LOG_LEVEL.")
def cli(
    urls: tuple[str, ...],
    cols: int,
    access_id: str,
    secret_key: str,
    log_level: str | None,
) -> None:
    """Retrieve url-metrics for the given URLs."""
    configure_logging(log_level)
    if not access_id or not secret_key:
        raise click.UsageError("An access ID and a secret key are required.")

    with MetricsClient(access_id, secret_key, settings=settings) as client:
        try:
            metrics = ThrottledMetricsClient(client).metrics_for_urls(urls, cols)
        except MetricsError as exc:
            logger.debug("Lookup failed", exc_info=True)
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(1)

    for entry in metrics:
        click.echo(str(entry))


if __name__ == "__main__":
    cli()
