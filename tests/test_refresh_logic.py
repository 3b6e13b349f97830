import asyncio

import pytest

from snapshot_service.core.errors import ConfigurationError
from snapshot_service.core.snapshot import Snapshot
from snapshot_service.refresh.decision import evaluate_refresh, should_refresh
from snapshot_service.refresh.policy import DEFAULT_REFRESH_INTERVAL, parse_refresh_interval
from snapshot_service.source import Source, SourceState


async def load_data():
    return {"v": 1}


def make_source(**overrides):
    data = {"name": "foo", "refresh_procedure": load_data, "refresh_interval": 10}
    data.update(overrides)
    return Source(**data)


def test_default_interval():
    assert parse_refresh_interval(None) == DEFAULT_REFRESH_INTERVAL == 0


def test_interval_rejects_fractional_seconds():
    with pytest.raises(ConfigurationError):
        parse_refresh_interval(0.5)


def test_evaluate_refresh_runs_when_cold():
    source = make_source()
    result = evaluate_refresh(source, now=1_000.0)
    assert result.should_run
    assert result.reason == "never refreshed"
    assert source.state(1_000.0) is SourceState.COLD


def test_evaluate_refresh_runs_when_stale():
    source = make_source()
    source.snapshot = Snapshot.create({"v": 1}, created_at=1_000.0, refresh_interval=10)
    result = evaluate_refresh(source, now=1_015.0)
    assert result.should_run
    assert "stale" in result.reason
    assert source.state(1_015.0) is SourceState.STALE


def test_evaluate_refresh_skips_when_fresh():
    source = make_source()
    source.snapshot = Snapshot.create({"v": 1}, created_at=1_000.0, refresh_interval=10)
    result = evaluate_refresh(source, now=1_004.0)
    assert not result.should_run
    assert "fresh" in result.reason
    assert source.state(1_004.0) is SourceState.FRESH


def test_evaluate_refresh_skips_when_in_flight():
    source = make_source()
    loop = asyncio.new_event_loop()
    try:
        source.refresh_in_flight = loop.create_future()
        result = evaluate_refresh(source, now=1_000.0)
    finally:
        loop.close()
    assert not result.should_run
    assert "in flight" in result.reason


def test_zero_interval_source_is_always_due():
    source = make_source(refresh_interval=0)
    source.snapshot = Snapshot.create({"v": 1}, created_at=1_000.0, refresh_interval=0)
    assert should_refresh(source, now=1_000.0)


def test_source_status_summary():
    source = make_source()
    source.record_success(Snapshot.create({"v": 1}, created_at=1_000.0, refresh_interval=10))
    source.record_failure(RuntimeError("boom"))
    status = source.status(1_001.0)
    assert status["state"] == "fresh"
    assert status["data_id"] == source.snapshot.identity
    assert status["refresh_count"] == 1
    assert status["failure_count"] == 1
    assert "boom" in status["last_error"]
    assert status["in_flight"] is False
    assert status["snapshot"] == {"identity": source.data_id, "created_at": 1_000.0, "refresh_interval": 10}


def test_cold_source_status_has_no_snapshot():
    status = make_source().status(1_000.0)
    assert status["state"] == "cold"
    assert status["data_id"] == ""
    assert status["snapshot"] is None
