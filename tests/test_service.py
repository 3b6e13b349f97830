import asyncio
import logging

import pytest

import snapshot_service
from snapshot_service.core.errors import DuplicateNameError, SourceNotFoundError
from snapshot_service.core.identity import compute_identity
from snapshot_service.core.observability.logger import SnapshotJSONFormatter


def test_facade_initializes_and_reads(make_procedure):
    procedure = make_procedure({"v": 1})
    snapshot_service.register("foo", procedure, refresh_interval=10)

    async def scenario():
        await snapshot_service.initialize_all()
        snapshot_service.reinitialize_stop()

    asyncio.run(scenario())

    assert snapshot_service.has_source("foo")
    assert snapshot_service.get_data("foo") == {"v": 1}
    assert snapshot_service.get_data_id("foo") == compute_identity({"v": 1})
    assert set(snapshot_service.get_sources()) == {"foo"}
    with pytest.raises(TypeError):
        snapshot_service.get_data("foo")["v"] = 2


def test_facade_cold_source_has_placeholder_identity(make_procedure):
    snapshot_service.register("foo", make_procedure({"v": 1}))
    assert snapshot_service.get_data("foo") is None
    assert snapshot_service.get_data_id("foo") == ""


def test_facade_unknown_source():
    assert not snapshot_service.has_source("missing")
    with pytest.raises(SourceNotFoundError):
        snapshot_service.get_data("missing")
    with pytest.raises(LookupError):
        snapshot_service.get_data_id("missing")


def test_facade_rejects_duplicates(make_procedure):
    snapshot_service.register("foo", make_procedure({"v": 1}))
    with pytest.raises(DuplicateNameError):
        snapshot_service.register("foo", make_procedure({"v": 2}))


def test_facade_explicit_refresh(make_procedure):
    procedure = make_procedure({"v": 1}, {"v": 2})
    snapshot_service.register("foo", procedure, refresh_interval=60)

    async def scenario():
        await snapshot_service.refresh("foo")
        await snapshot_service.reinitialize_check()
        await snapshot_service.refresh("foo", force=True)

    asyncio.run(scenario())

    assert procedure.calls == 2
    assert snapshot_service.get_data("foo") == {"v": 2}


def test_reset_clears_sources_and_stops_tick(monkeypatch, make_procedure):
    monkeypatch.setenv("SNAPSHOT_TICK_SECONDS", "0.05")
    procedure = make_procedure({"v": 1})
    snapshot_service.register("foo", procedure, refresh_interval=0)
    snapshot_service.register("bar", make_procedure({"v": 2}), refresh_interval=0)

    async def scenario():
        await snapshot_service.initialize_all()
        assert snapshot_service.get_scheduler().running
        await asyncio.sleep(0.3)
        ticked = procedure.calls
        snapshot_service.reset()
        stopped_at = procedure.calls
        await asyncio.sleep(0.3)
        return ticked, stopped_at

    ticked, stopped_at = asyncio.run(scenario())

    assert ticked > 1
    assert procedure.calls == stopped_at
    assert not snapshot_service.has_source("foo")
    assert not snapshot_service.has_source("bar")
    assert not snapshot_service.get_scheduler().running


def test_reset_allows_reregistration(make_procedure):
    snapshot_service.register("foo", make_procedure({"v": 1}))
    snapshot_service.reset()
    source = snapshot_service.register("foo", make_procedure({"v": 2}))
    assert snapshot_service.get_source("foo") is source


def test_configure_logging_applies_configured_level(monkeypatch):
    monkeypatch.setenv("SNAPSHOT_LOG_LEVEL", "debug")
    root = logging.getLogger()
    previous_handlers, previous_level = list(root.handlers), root.level
    try:
        snapshot_service.configure_logging()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, SnapshotJSONFormatter)
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
