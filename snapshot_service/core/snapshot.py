"""Immutable snapshot of one successful refresh."""

from __future__ import annotations

import dataclasses
import datetime
import uuid
from collections.abc import Mapping, Set
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Dict

from snapshot_service.core.identity import compute_identity

_SCALARS = (str, bytes, int, float, complex, bool, type(None))
# value types whose instances cannot be changed in place
_IMMUTABLES = (
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    Decimal,
    Fraction,
    uuid.UUID,
    Enum,
)


def freeze(value: Any) -> Any:
    """Copy ``value`` into read-only structures.

    Mappings and dataclass instances become ``MappingProxyType`` views over
    private dicts, lists and tuples become tuples, sets become frozensets.
    Raises ``TypeError`` for any other object, since it could be mutated
    through the snapshot.
    """

    if isinstance(value, _SCALARS) or isinstance(value, _IMMUTABLES):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, Set):
        return frozenset(freeze(item) for item in value)
    if isinstance(value, bytearray):
        return bytes(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return MappingProxyType(
            {field.name: freeze(getattr(value, field.name)) for field in dataclasses.fields(value)}
        )
    raise TypeError(f"cannot freeze value of type {type(value).__name__} into a snapshot")


def thaw(value: Any) -> Any:
    """Return a mutable deep copy of frozen snapshot data."""

    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    if isinstance(value, Set):
        return {thaw(item) for item in value}
    return value


@dataclass(frozen=True, slots=True)
class Snapshot:
    data: Any
    identity: str
    created_at: float
    refresh_interval: int = 0

    @classmethod
    def create(cls, data: Any, *, created_at: float, refresh_interval: int = 0) -> "Snapshot":
        frozen = freeze(data)
        return cls(
            data=frozen,
            identity=compute_identity(frozen),
            created_at=float(created_at),
            refresh_interval=int(refresh_interval),
        )

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_fresh(self, now: float) -> bool:
        # interval 0 is never fresh: such sources refresh on every check
        return self.age(now) < self.refresh_interval

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identity": self.identity,
            "created_at": self.created_at,
            "refresh_interval": self.refresh_interval,
        }


__all__ = ["Snapshot", "freeze", "thaw"]
