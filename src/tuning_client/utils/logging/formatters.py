"""Log formatters for console and file output."""

import json
import logging
from datetime import datetime, timezone

FORMAT_STYLES = {
    "standard": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
    "minimal": "%(levelname)s: %(message)s",
}


class CustomFormatter(logging.Formatter):
    """Plain-text formatter with named format styles."""

    def __init__(self, format_style: str = "standard"):
        if format_style not in FORMAT_STYLES:
            raise ValueError(f"Unknown log format style: {format_style!r}")
        super().__init__(FORMAT_STYLES[format_style])
        self.format_style = format_style


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
