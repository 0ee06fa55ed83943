"""Logging setup for Gift Organizer."""

import logging
import sys

_configured = False


def configure_logging(level: str | int = "WARNING") -> None:
    """Attach a stderr handler to the package logger.

    Later calls only adjust the level.
    """
    global _configured

    package_logger = logging.getLogger("gift_organizer")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    package_logger.setLevel(level)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    package_logger.addHandler(handler)
    _configured = True
