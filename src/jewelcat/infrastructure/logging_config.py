"""Logging setup — human-readable text or one JSON object per line.

Log records go to stderr so command output on stdout stays clean.
Extra fields passed via ``extra={...}`` are surfaced in JSON output.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_HANDLER_NAME = "jewelcat"
_EXTRA_FIELDS = ("material_id", "product_id", "variant_index", "changed_by")


class JSONFormatter(logging.Formatter):
    """Format records as JSON for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install the jewelcat handler on the root logger.

    Calling it again replaces the previous handler instead of adding a
    second one.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
