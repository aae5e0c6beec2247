"""
Logging setup for the job application tracker.

setup_logging() configures the root handler once per process (API server
or CLI). get_logger() returns a logger whose messages carry a context tag
such as "[api]" or "[board]", so interleaved output stays readable.
"""

import json
import logging
import os
import sys
from typing import Optional, TextIO

LOG_FORMATS = ("simple", "json")

# Toggled by DEBUG_MODE=true or the CLI --debug flag
_debug_mode = os.getenv("DEBUG_MODE", "false").lower() == "true"


def set_global_debug_mode(enabled: bool) -> None:
    global _debug_mode
    _debug_mode = enabled


def is_debug_mode() -> bool:
    return _debug_mode


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class ContextLogger(logging.LoggerAdapter):
    """Prefixes each message with "[context]" when a context is set."""

    def process(self, msg, kwargs):
        context = self.extra.get("context")
        if context:
            msg = f"[{context}] {msg}"
        return msg, kwargs


def setup_logging(level: str = "INFO", format: str = "simple", stream: Optional[TextIO] = None) -> None:
    """
    Configure the root logger, replacing any handlers already installed.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (unknown names fall back to INFO)
        format: "simple" for human-readable lines, "json" for one object per line
        stream: Output stream (default: stdout)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    if format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str, context: Optional[str] = None, debug_mode: Optional[bool] = None) -> ContextLogger:
    """
    Logger for a module, tagged with an optional context.

    debug_mode=True (or global debug mode when debug_mode is None) lowers
    this logger to DEBUG regardless of the root level.
    """
    logger = logging.getLogger(name)
    if debug_mode if debug_mode is not None else is_debug_mode():
        logger.setLevel(logging.DEBUG)
    return ContextLogger(logger, {"context": context})
