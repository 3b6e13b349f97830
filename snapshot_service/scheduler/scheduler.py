"""Refresh scheduling over a source registry.

The scheduler owns every write to ``Source.snapshot`` and
``Source.refresh_in_flight``. For a given source at most one refresh job is
running at any time; callers that arrive while it runs await the same job.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from snapshot_service.core.observability.logger import get_logger
from snapshot_service.core.snapshot import Snapshot
from snapshot_service.refresh.decision import evaluate_refresh
from snapshot_service.refresh.policy import TICK_SECONDS
from snapshot_service.registry import SourceRegistry
from snapshot_service.scheduler.jobs import ErrorReporter, log_refresh_error, refresh_source_job
from snapshot_service.source import Source

log = get_logger(__name__)

TICK_JOB_ID = "reinitialize_check"


def get_time_seconds() -> float:
    return time.time()


class RefreshScheduler:
    def __init__(
        self,
        registry: SourceRegistry,
        *,
        reporter: Optional[ErrorReporter] = None,
        clock: Optional[Callable[[], float]] = None,
        tick_seconds: float = TICK_SECONDS,
    ) -> None:
        self.registry = registry
        self.reporter = reporter or log_refresh_error
        self.clock = clock or get_time_seconds
        self.tick_seconds = tick_seconds
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def dispatch(self, source: Source, now: Optional[float] = None, *, force: bool = False) -> Optional[asyncio.Future]:
        """Return the source's in-flight refresh, starting one if it is due.

        Returns ``None`` when the source is fresh and no refresh is running.
        Must be called from within a running event loop.
        """
        now = self.clock() if now is None else now
        with source.lock:
            handle = source.refresh_in_flight
            if handle is not None and not handle.done():
                return handle
            source.refresh_in_flight = None

            decision = evaluate_refresh(source, now)
            if not (decision.should_run or force):
                return None

            log.debug("refresh_dispatched", extra={"source": source.name, "reason": decision.reason, "force": force})
            source.last_attempt = now
            handle = asyncio.ensure_future(refresh_source_job(source, now, self.reporter))
            if not handle.done():
                source.refresh_in_flight = handle
            return handle

    async def maybe_refresh(self, source: Source, now: Optional[float] = None, *, force: bool = False) -> Optional[Snapshot]:
        handle = self.dispatch(source, now, force=force)
        if handle is None:
            return source.snapshot
        # a cancelled caller must not cancel the job other callers share
        return await asyncio.shield(handle)

    async def refresh(self, name: str, *, force: bool = False) -> Optional[Snapshot]:
        return await self.maybe_refresh(self.registry.get(name), force=force)

    async def _refresh_all(self) -> List[Optional[Snapshot]]:
        now = self.clock()
        sources = self.registry.sources()
        results = await asyncio.gather(
            *(self.maybe_refresh(source, now) for source in sources),
            return_exceptions=True,
        )
        snapshots: List[Optional[Snapshot]] = []
        for source, result in zip(sources, results):
            if isinstance(result, BaseException):
                log.error(
                    "refresh_check_failed",
                    extra={"source": source.name, "error": repr(result)},
                )
                snapshots.append(source.snapshot)
            else:
                snapshots.append(result)
        return snapshots

    async def initialize_all(self) -> None:
        """Refresh every source once, then start the recurring tick."""
        await self._refresh_all()
        log.info(
            "initialize_all_completed",
            extra={
                "sources": len(self.registry),
                "cold": [source.name for source in self.registry if source.snapshot is None],
            },
        )
        self.reinitialize_start()

    async def reinitialize_check(self) -> None:
        await self._refresh_all()

    async def _tick(self) -> None:
        # dispatch without awaiting so one slow source never holds up the tick
        now = self.clock()
        for source in self.registry.sources():
            self.dispatch(source, now)

    def reinitialize_start(self) -> None:
        """(Re)schedule the recurring check, replacing any previous tick."""
        self.reinitialize_stop()
        scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())
        scheduler.add_job(
            self._tick,
            "interval",
            seconds=self.tick_seconds,
            id=TICK_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        log.info("tick_started", extra={"tick_seconds": self.tick_seconds})

    def reinitialize_stop(self) -> None:
        """Cancel the recurring check. In-flight refreshes run to completion."""
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is None:
            return
        if scheduler.running:
            try:
                scheduler.shutdown(wait=False)
            except RuntimeError:
                # the tick's event loop is already closed, so its timer cannot fire again
                log.debug("tick_loop_closed")
        log.info("tick_stopped")

    def reset(self) -> None:
        self.reinitialize_stop()
        self.registry.clear()
        log.info("registry_reset")


__all__ = ["RefreshScheduler", "TICK_JOB_ID", "get_time_seconds"]
