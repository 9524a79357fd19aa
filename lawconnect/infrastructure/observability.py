"""Structured Logging — JSON and key=value formatters, configured once at startup.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Marketplace context passed via extra= (actor_id, error_code, resource ids,
      aggregate) is emitted by both formats when present
    - setup_logging is idempotent: a second call does not stack handlers

Design Decisions:
    - stdlib logging with a small JSONFormatter, no logging dependency
    - LOG_FORMAT=text appends the context as key=value pairs for local development
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "actor_id", "error_code", "path",
    "resource_type", "resource_id", "aggregate",
)


def _context(record: logging.LogRecord) -> dict[str, str]:
    return {
        key: str(record.__dict__[key])
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class ContextTextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(f"{k}={v}" for k, v in _context(record).items())
        return f"{line} [{pairs}]" if pairs else line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    if logging.root.handlers:
        # Already configured (uvicorn reload, repeated lifespan in tests)
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
