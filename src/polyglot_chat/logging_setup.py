"""Process-wide logging configuration.

Every module logs through ``logging.getLogger(__name__)``; this module is
the one place that attaches a handler and picks the output format, driven
by ``LoggingSettings`` from :mod:`polyglot_chat.config`.

Formats
-------
``simple``    level and message only, for the interactive CLI.
``detailed``  timestamp, level, logger name and message (the default).
``json``      one JSON object per line, for log shippers.
"""

from __future__ import annotations

import json
import logging

from polyglot_chat.config import LoggingSettings

_SIMPLE_FORMAT = "%(levelname)s: %(message)s"
_DETAILED_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_HANDLER_NAME = "polyglot-chat"


class JsonFormatter(logging.Formatter):
    """Render each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def build_formatter(fmt: str) -> logging.Formatter:
    """Return the formatter for a ``LoggingSettings.format`` value."""
    if fmt == "json":
        return JsonFormatter()
    if fmt == "simple":
        return logging.Formatter(_SIMPLE_FORMAT)
    return logging.Formatter(_DETAILED_FORMAT)


def configure_logging(settings: LoggingSettings) -> logging.Handler:
    """Install the package's stream handler on the root logger.

    Calling this more than once replaces the previously installed handler
    rather than stacking duplicates.  Handlers installed by anyone else
    (uvicorn, pytest) are left alone.

    Returns:
        The handler now attached to the root logger.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(settings.format))
    handler.set_name(_HANDLER_NAME)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.level.upper(), logging.INFO))
    return handler
