"""Refresh policy helpers for scheduled snapshot updates."""

from .decision import DecisionResult, evaluate_refresh, should_refresh
from .policy import DEFAULT_REFRESH_INTERVAL, TICK_SECONDS, parse_refresh_interval

__all__ = [
    "DecisionResult",
    "evaluate_refresh",
    "should_refresh",
    "DEFAULT_REFRESH_INTERVAL",
    "TICK_SECONDS",
    "parse_refresh_interval",
]
