from __future__ import annotations

import logging

from mozscape.core.config import settings


def configure_logging(level_name: str | None = None) -> None:
    """Send ``mozscape.*`` records to stderr at *level_name*.

    Falls back to ``settings.log_level``; unknown names mean INFO.  The
    handler is attached once, so repeated calls only change the level.
    """
    level_name = level_name or settings.log_level
    level = getattr(logging, level_name.upper(), logging.INFO)
    package_log = logging.getLogger("mozscape")
    package_log.setLevel(level)
    if not package_log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        package_log.addHandler(handler)
    package_log.propagate = False
