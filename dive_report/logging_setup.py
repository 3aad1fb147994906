"""Logging setup for dive report tools."""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional, TextIO


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    *,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure root logging; logs go to stderr so report output stays clean on stdout."""
    level_value = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )

    logging.basicConfig(level=level_value, handlers=[handler], force=True)


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True)
