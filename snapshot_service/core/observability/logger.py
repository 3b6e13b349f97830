"""
Structured JSON logger for the snapshot service.

Usage:
    from snapshot_service.core.observability.logger import get_logger
    log = get_logger(__name__)
    log.info("refresh_completed", extra={"source": name, "phase": "refresh", "status": "ok", "duration": 1.23})
"""

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_RESERVED_FIELDS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "getMessage",
    "message",
}

# snapshot identities are full sha256 digests; log lines carry a prefix
DATA_ID_LOG_LENGTH = 12


class SnapshotJSONFormatter(logging.Formatter):
    """Emit one JSON object per log line.

    Snapshot fields are shortened for reading: ``data_id`` to a digest prefix,
    ``created_at`` epoch seconds to an ISO-8601 timestamp.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Attach extra fields (structured context)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_FIELDS:
                payload[key] = value

        if "duration" in payload and isinstance(payload["duration"], (int, float)):
            payload["duration"] = round(float(payload["duration"]), 3)

        data_id = payload.get("data_id")
        if isinstance(data_id, str) and len(data_id) > DATA_ID_LOG_LENGTH:
            payload["data_id"] = data_id[:DATA_ID_LOG_LENGTH]

        if isinstance(payload.get("created_at"), (int, float)):
            payload["created_at"] = datetime.fromtimestamp(payload["created_at"], tz=timezone.utc).isoformat()

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_structured_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SnapshotJSONFormatter())
    root.handlers.clear()
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class PhaseTimer:
    """Context manager to time phases and emit structured completion logs."""

    def __init__(
        self,
        logger: logging.Logger,
        phase: str,
        source: Optional[str] = None,
        status: str = "ok",
        **extra_fields: Any,
    ):
        self.logger = logger
        self.phase = phase
        self.source = source
        self.status = status
        self.extra_fields = extra_fields
        self.start: Optional[float] = None
        self.duration: Optional[float] = None

    def __enter__(self):
        self.start = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = (time.monotonic() - self.start) if self.start is not None else None
        final_status = "failed" if exc_type else self.status
        payload: Dict[str, Any] = {
            "phase": self.phase,
            "status": final_status,
        }
        if self.source:
            payload["source"] = self.source
        if self.duration is not None:
            payload["duration"] = self.duration
        payload.update(self.extra_fields)

        if exc_type:
            payload["error"] = repr(exc_val)
            self.logger.warning(f"{self.phase}_failed", extra=payload)
        else:
            self.logger.info(f"{self.phase}_completed", extra=payload)
        return False


__all__ = ["DATA_ID_LOG_LENGTH", "SnapshotJSONFormatter", "setup_structured_logging", "get_logger", "PhaseTimer"]
