"""Root logger setup for the legisync command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for sync runs.

    Sync runs are long and unattended, so timestamps carry the date. ``force``
    replaces handlers installed earlier (pytest's, or a previous call).
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=force)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
