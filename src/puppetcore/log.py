"""Console logging setup.

Records are prefixed with an ISO-8601 timestamp with millisecond precision,
e.g. ``[2025-01-31T12:00:00.123Z] puppetcore.engine.session  Found <button> ...``.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

SECTION_RULE = "-" * 37


class IsoTimestampFormatter(logging.Formatter):
    """Formatter whose ``%(asctime)s`` is a UTC ISO-8601 timestamp."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def configure_logging(verbose: bool = False, stream=None) -> logging.Handler:
    """Attach a timestamped console handler to the ``puppetcore`` logger.

    Calling it again replaces the previously installed handler.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(IsoTimestampFormatter("[%(asctime)s] %(name)s  %(message)s"))
    handler.set_name("puppetcore-console")

    root = logging.getLogger("puppetcore")
    for existing in list(root.handlers):
        if existing.get_name() == "puppetcore-console":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def log_section(logger: logging.Logger, text: str) -> None:
    """Log ``text`` framed between two dashed rules."""
    logger.info(SECTION_RULE)
    logger.info(text)
    logger.info(SECTION_RULE)
