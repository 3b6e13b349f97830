"""Core building blocks exposed for external consumers."""

from .errors import ConfigurationError, DuplicateNameError, RefreshError, SnapshotServiceError, SourceNotFoundError
from .identity import compute_identity
from .snapshot import Snapshot, freeze, thaw

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
]
