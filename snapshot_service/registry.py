"""Name to source mapping shared by the scheduler and snapshot readers."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from snapshot_service.core.errors import ConfigurationError, DuplicateNameError, SourceNotFoundError
from snapshot_service.core.observability.logger import get_logger
from snapshot_service.refresh.policy import parse_refresh_interval
from snapshot_service.source import RefreshProcedure, Source

log = get_logger(__name__)

_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*")


def validate_name(name: Any) -> str:
    if not isinstance(name, str):
        raise ConfigurationError("name must be a string", key="name", value=name)
    if not name:
        raise ConfigurationError("name required", key="name")
    if not _NAME_PATTERN.fullmatch(name):
        raise ConfigurationError(
            "Invalid name format. Expected a letter or underscore followed by letters, digits, '_', '.' or '-'.",
            key="name",
            value=name,
        )
    return name


class SourceRegistry:
    """Registered sources keyed by unique name."""

    def __init__(self) -> None:
        self._sources: Dict[str, Source] = {}

    def register(
        self,
        name: str,
        refresh_procedure: RefreshProcedure,
        *,
        refresh_interval: Optional[Any] = None,
    ) -> Source:
        name = validate_name(name)
        if not callable(refresh_procedure):
            raise ConfigurationError(
                "refresh_procedure must be callable",
                key="refresh_procedure",
                value=refresh_procedure,
                source=name,
            )
        interval = parse_refresh_interval(refresh_interval)
        if name in self._sources:
            raise DuplicateNameError(name)

        source = Source(name=name, refresh_procedure=refresh_procedure, refresh_interval=interval)
        self._sources[name] = source
        log.info("source_registered", extra={"source": name, "refresh_interval": interval})
        return source

    def get(self, name: str) -> Source:
        source = self._sources.get(name)
        if source is None:
            raise SourceNotFoundError(name)
        return source

    def has(self, name: str) -> bool:
        return name in self._sources

    def names(self) -> List[str]:
        return list(self._sources)

    def sources(self) -> List[Source]:
        return list(self._sources.values())

    def as_mapping(self) -> Mapping[str, Source]:
        return MappingProxyType(self._sources)

    def clear(self) -> None:
        self._sources.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __iter__(self) -> Iterator[Source]:
        return iter(self.sources())

    def __len__(self) -> int:
        return len(self._sources)


__all__ = ["SourceRegistry", "validate_name"]
