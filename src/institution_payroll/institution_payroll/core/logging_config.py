"""Logging setup shared by services and the Flask app."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal

_LOGGER_PREFIX = "institution_payroll"

_STDLIB_KEYS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()) | {"message", "taskName"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line; ``extra=`` fields are merged into the payload."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val
        if record.exc_info and record.exc_info[1] is not None:
            payload["exc_type"] = type(record.exc_info[1]).__name__
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default)


def _json_default(obj):
    if isinstance(obj, Decimal):
        return str(obj)
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    return str(obj)


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace, e.g. ``get_logger(__name__)``."""
    if name.startswith(_LOGGER_PREFIX):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str | int = "INFO", *, json_output: bool = False) -> logging.Logger:
    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_institution_payroll", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler._institution_payroll = True
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
    root.propagate = False
    return root
