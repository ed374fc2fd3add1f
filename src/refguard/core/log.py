"""Logging configuration for the refguard CLI and embedding applications."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

from refguard.core.settings import LoggingSettings

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """
    Attach a single stderr handler to the ``refguard`` logger.

    Calling it again replaces the handler rather than stacking another one.
    """
    settings = settings or LoggingSettings()
    root = logging.getLogger("refguard")
    for handler in list(root.handlers):
        if getattr(handler, "_refguard", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler._refguard = True  # type: ignore[attr-defined]
    if settings.format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(settings.level)
    return root
