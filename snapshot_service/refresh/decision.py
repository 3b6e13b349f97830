"""Refresh decision engine based on snapshot age and interval policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snapshot_service.source import Source


@dataclass(slots=True)
class DecisionResult:
    should_run: bool
    reason: str


def evaluate_refresh(source: "Source", now: float) -> DecisionResult:
    if source.refresh_in_flight is not None:
        return DecisionResult(False, "refresh in flight")

    snapshot = source.snapshot
    if snapshot is None:
        return DecisionResult(True, "never refreshed")

    if snapshot.is_fresh(now):
        remaining = int(snapshot.refresh_interval - snapshot.age(now))
        return DecisionResult(False, f"fresh (next refresh in {remaining}s)")

    overdue = int(snapshot.age(now) - snapshot.refresh_interval)
    return DecisionResult(True, f"stale by {overdue}s")


def should_refresh(source: "Source", now: float) -> bool:
    return evaluate_refresh(source, now).should_run


__all__ = ["DecisionResult", "evaluate_refresh", "should_refresh"]
