"""Process-wide snapshot service.

Usage:
    import snapshot_service

    snapshot_service.configure_logging()

    async def load_acl():
        return await fetch_acl_rules()

    snapshot_service.register("acl", load_acl, refresh_interval=60)
    await snapshot_service.initialize_all()
    rules = snapshot_service.get_data("acl")
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from snapshot_service.core.config import get_settings
from snapshot_service.core.observability.alerts import AlertManager
from snapshot_service.core.observability.logger import setup_structured_logging
from snapshot_service.core.snapshot import Snapshot
from snapshot_service.registry import SourceRegistry
from snapshot_service.scheduler.scheduler import RefreshScheduler
from snapshot_service.source import RefreshProcedure, Source

_scheduler: Optional[RefreshScheduler] = None


def configure_logging() -> None:
    """Install the JSON log handler at the configured ``SNAPSHOT_LOG_LEVEL``."""
    setup_structured_logging(get_settings().log_level)


def get_scheduler() -> RefreshScheduler:
    """Return the global scheduler, creating it and its registry on first use."""
    global _scheduler
    if _scheduler is None:
        settings = get_settings()
        _scheduler = RefreshScheduler(
            SourceRegistry(),
            reporter=AlertManager(),
            tick_seconds=settings.tick_seconds,
        )
    return _scheduler


def get_registry() -> SourceRegistry:
    return get_scheduler().registry


def register(name: str, refresh_procedure: RefreshProcedure, *, refresh_interval: Optional[Any] = None) -> Source:
    return get_registry().register(name, refresh_procedure, refresh_interval=refresh_interval)


def get_source(name: str) -> Source:
    return get_registry().get(name)


def get_sources() -> Mapping[str, Source]:
    return get_registry().as_mapping()


def has_source(name: str) -> bool:
    return get_registry().has(name)


def get_data(name: str) -> Any:
    return get_source(name).data


def get_data_id(name: str) -> str:
    return get_source(name).data_id


async def refresh(name: str, *, force: bool = False) -> Optional[Snapshot]:
    return await get_scheduler().refresh(name, force=force)


async def initialize_all() -> None:
    await get_scheduler().initialize_all()


async def reinitialize_check() -> None:
    await get_scheduler().reinitialize_check()


def reinitialize_start() -> None:
    get_scheduler().reinitialize_start()


def reinitialize_stop() -> None:
    get_scheduler().reinitialize_stop()


def reset() -> None:
    """Stop the tick and drop every registered source."""
    global _scheduler
    if _scheduler is not None:
        _scheduler.reset()
    _scheduler = None


__all__ = [
    "configure_logging",
    "get_scheduler",
    "get_registry",
    "register",
    "get_source",
    "get_sources",
    "has_source",
    "get_data",
    "get_data_id",
    "refresh",
    "initialize_all",
    "reinitialize_check",
    "reinitialize_start",
    "reinitialize_stop",
    "reset",
]
