import pytest

import snapshot_service
from snapshot_service.core.config import Config, get_settings
from snapshot_service.registry import SourceRegistry
from snapshot_service.scheduler import RefreshScheduler


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingReporter:
    def __init__(self) -> None:
        self.reports = []

    def __call__(self, source_name, phase, error):
        self.reports.append((source_name, phase, error))


class StubProcedure:
    """Async refresh procedure returning (or raising) queued results in order."""

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self.results[min(self.calls, len(self.results)) - 1]
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def registry() -> SourceRegistry:
    return SourceRegistry()


@pytest.fixture
def scheduler(registry, reporter, clock):
    sched = RefreshScheduler(registry, reporter=reporter, clock=clock, tick_seconds=0.05)
    yield sched
    sched.reinitialize_stop()


@pytest.fixture(autouse=True)
def _reset_service(monkeypatch):
    monkeypatch.delenv("SNAPSHOT_TICK_SECONDS", raising=False)
    monkeypatch.delenv("SNAPSHOT_LOG_LEVEL", raising=False)
    monkeypatch.setenv("SNAPSHOT_SERVICE_CONFIG", "does-not-exist.yaml")
    Config.clear()
    get_settings.cache_clear()
    snapshot_service.reset()
    yield
    snapshot_service.reset()
    Config.clear()
    get_settings.cache_clear()


@pytest.fixture
def make_procedure():
    return StubProcedure
