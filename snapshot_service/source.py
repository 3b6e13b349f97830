"""Domain model for a named, independently refreshed snapshot source."""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from snapshot_service.core.identity import NO_IDENTITY
from snapshot_service.core.snapshot import Snapshot

RefreshProcedure = Callable[[], Awaitable[Any]]


class SourceState(str, Enum):
    COLD = "cold"
    FRESH = "fresh"
    STALE = "stale"


@dataclass(slots=True, eq=False)
class Source:
    """A registered refresh procedure and the latest snapshot it produced.

    ``snapshot`` and ``refresh_in_flight`` are written only by the
    refresh scheduler; readers use ``data`` and ``data_id``.
    """

    name: str
    refresh_procedure: RefreshProcedure
    refresh_interval: int = 0
    snapshot: Optional[Snapshot] = None
    refresh_in_flight: Optional[asyncio.Future] = None
    refresh_count: int = 0
    failure_count: int = 0
    last_attempt: Optional[float] = None
    last_error: Optional[str] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def data(self) -> Any:
        return self.snapshot.data if self.snapshot is not None else None

    @property
    def data_id(self) -> str:
        return self.snapshot.identity if self.snapshot is not None else NO_IDENTITY

    def state(self, now: float) -> SourceState:
        if self.snapshot is None:
            return SourceState.COLD
        if self.snapshot.is_fresh(now):
            return SourceState.FRESH
        return SourceState.STALE

    def record_success(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self.refresh_count += 1
        self.failure_count = 0
        self.last_error = None

    def record_failure(self, error: BaseException) -> None:
        self.failure_count = max(self.failure_count, 0) + 1
        self.last_error = repr(error)

    def status(self, now: float) -> Dict[str, Any]:
        return {
            "name": self.name,
            "state": self.state(now).value,
            "data_id": self.data_id,
            "snapshot": self.snapshot.to_dict() if self.snapshot is not None else None,
            "refresh_interval": self.refresh_interval,
            "in_flight": self.refresh_in_flight is not None,
            "refresh_count": self.refresh_count,
            "failure_count": self.failure_count,
            "last_attempt": self.last_attempt,
            "last_error": self.last_error,
        }


__all__ = ["RefreshProcedure", "Source", "SourceState"]
