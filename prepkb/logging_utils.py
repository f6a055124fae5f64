"""Logging setup shared by the CLI and the API."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | int = "INFO") -> None:
    """Configure root logging once per process.

    Later calls only adjust the level of the ``prepkb`` logger.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if not _configured:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        _configured = True
    logging.getLogger("prepkb").setLevel(level)
