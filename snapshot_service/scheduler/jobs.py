"""Single refresh execution for one source."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Union

from snapshot_service.core.errors import RefreshError
from snapshot_service.core.observability.logger import PhaseTimer, get_logger
from snapshot_service.core.snapshot import Snapshot
from snapshot_service.source import Source

log = get_logger(__name__)

ErrorReporter = Callable[[str, str, BaseException], Union[None, Awaitable[None]]]


def log_refresh_error(source_name: str, phase: str, error: BaseException) -> None:
    """Default error reporter: one structured ERROR line per failed attempt."""

    if isinstance(error, RefreshError):
        payload = error.as_dict()
    else:
        payload = {"error_type": type(error).__name__, "message": str(error)}
    log.error(f"{phase}_error", extra={"source": source_name, "phase": phase, "error": payload})


async def report_error(reporter: ErrorReporter, source_name: str, phase: str, error: BaseException) -> None:
    try:
        result = reporter(source_name, phase, error)
        if inspect.isawaitable(result):
            await result
    except Exception:  # noqa: BLE001
        log.exception("error_reporter_failed", extra={"source": source_name, "phase": phase})


async def _invoke(source: Source) -> Any:
    result = source.refresh_procedure()
    if not inspect.isawaitable(result):
        raise TypeError(f"refresh procedure for {source.name} did not return an awaitable")
    return await result


async def refresh_source_job(source: Source, now: float, reporter: ErrorReporter) -> Optional[Snapshot]:
    """
    Run the refresh procedure once and publish the result.
    Returns the snapshot the source holds afterwards; failures leave the
    previous snapshot in place and are handed to ``reporter``.
    """
    try:
        with PhaseTimer(log, "refresh", source=source.name):
            data = await _invoke(source)
        snapshot = Snapshot.create(data, created_at=now, refresh_interval=source.refresh_interval)
    except asyncio.CancelledError:
        source.refresh_in_flight = None
        raise
    except Exception as exc:  # noqa: BLE001
        source.refresh_in_flight = None
        source.record_failure(exc)
        error = RefreshError(
            f"refresh failed for source {source.name}",
            source=source.name,
            cause=exc,
            details={"failure_count": source.failure_count},
        )
        await report_error(reporter, source.name, error.phase or "refresh", error)
        return source.snapshot

    source.record_success(snapshot)
    source.refresh_in_flight = None
    log.debug(
        "snapshot_published",
        extra={"source": source.name, "data_id": snapshot.identity, "created_at": snapshot.created_at},
    )
    return snapshot


__all__ = ["ErrorReporter", "log_refresh_error", "report_error", "refresh_source_job"]
