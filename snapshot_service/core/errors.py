"""
Snapshot service error hierarchy for clear classification in logs and alerts.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SnapshotServiceError(Exception):
    """Base class for all snapshot service errors."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        phase: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.phase = phase
        self.details = details or {}

    def as_dict(self) -> Dict[str, Any]:
        """Serializable representation for logs/alerts."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "source": self.source,
            "phase": self.phase,
            "details": self.details,
        }


class ConfigurationError(SnapshotServiceError):
    """Raised on invalid registration arguments or settings values."""

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs,
    ) -> None:
        kwargs.setdefault("phase", "configure")
        super().__init__(message, **kwargs)
        self.key = key
        self.value = value
        if key is not None:
            self.details["key"] = key
        if value is not None:
            self.details["value"] = repr(value)


class DuplicateNameError(ConfigurationError):
    """Raised when registering a source name that is already taken."""

    def __init__(self, name: str, **kwargs) -> None:
        super().__init__(f"source {name} already registered", key="name", source=name, **kwargs)


class SourceNotFoundError(SnapshotServiceError, LookupError):
    """Raised when a source is requested by a name that is not registered."""

    def __init__(self, name: str, **kwargs) -> None:
        kwargs.setdefault("phase", "lookup")
        super().__init__(f"source {name} not defined", source=name, **kwargs)


class RefreshError(SnapshotServiceError):
    """Wraps a failure raised by a source's refresh procedure."""

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        **kwargs,
    ) -> None:
        kwargs.setdefault("phase", "refresh")
        super().__init__(message, **kwargs)
        self.cause = cause
        if cause is not None:
            self.details["error"] = {
                "type": type(cause).__name__,
                "message": str(cause),
            }


__all__ = [
    "SnapshotServiceError",
    "ConfigurationError",
    "DuplicateNameError",
    "SourceNotFoundError",
    "RefreshError",
]
