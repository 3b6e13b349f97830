"""Named, periodically refreshed immutable snapshots."""

from .core.errors import (
    ConfigurationError,
    DuplicateNameError,
    RefreshError,
    SnapshotServiceError,
    SourceNotFoundError,
)
from .core.identity import compute_identity
from .core.snapshot import Snapshot, freeze, thaw
from .registry import SourceRegistry
from .scheduler import RefreshScheduler, get_time_seconds
from .service import (
    configure_logging,
    get_data,
    get_data_id,
    get_registry,
    get_scheduler,
    get_source,
    get_sources,
    has_source,
    initialize_all,
    refresh,
    register,
    reinitialize_check,
    reinitialize_start,
    reinitialize_stop,
    reset,
)
from .source import Source, SourceState

__all__ = [
    "ConfigurationError",
    "DuplicateNameError",
    "RefreshError",
    "SnapshotServiceError",
    "SourceNotFoundError",
    "compute_identity",
    "Snapshot",
    "freeze",
    "thaw",
    "SourceRegistry",
    "RefreshScheduler",
    "get_time_seconds",
    "Source",
    "SourceState",
    "get_data",
    "get_data_id",
    "get_registry",
    "configure_logging",
    "get_scheduler",
    "get_source",
    "get_sources",
    "has_source",
    "initialize_all",
    "refresh",
    "register",
    "reinitialize_check",
    "reinitialize_start",
    "reinitialize_stop",
    "reset",
]
