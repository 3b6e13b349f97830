"""Content-derived identity for snapshot data."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from collections.abc import Mapping, Set
from typing import Any

NO_IDENTITY = ""

# Tag keys start with NUL; user keys starting with NUL are escaped by doubling it.
_TAG = "\x00"


def _tagged(kind: str, value: Any) -> dict:
    return {f"{_TAG}{kind}": value}


def _escape_key(key: str) -> str:
    return _TAG + key if key.startswith(_TAG) else key


def _canonical(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Mapping):
        if all(isinstance(key, str) for key in value):
            return {_escape_key(key): _canonical(item) for key, item in value.items()}
        pairs = [[_canonical(key), _canonical(item)] for key, item in value.items()]
        return _tagged("map", sorted(pairs, key=_sort_key))
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    if isinstance(value, Set):
        return _tagged("set", sorted((_canonical(item) for item in value), key=_sort_key))
    if isinstance(value, (bytes, bytearray)):
        return _tagged("bytes", value.hex())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        # same form as the read-only mapping a snapshot stores for it
        return _canonical({field.name: getattr(value, field.name) for field in dataclasses.fields(value)})
    return _tagged(f"{type(value).__module__}.{type(value).__qualname__}", str(value))


def _sort_key(item: Any) -> str:
    return json.dumps(item, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonical_json(data: Any) -> str:
    """Serialize data with sorted keys so equal values give equal text.

    Sets, bytes, non-string mapping keys and other non-JSON values are tagged
    with their type, so e.g. ``{1, 2}`` and ``[1, 2]`` never serialize alike.
    Lists and tuples share a form: frozen snapshot data turns lists into tuples.
    """

    return json.dumps(
        _canonical(data),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def compute_identity(data: Any) -> str:
    """Return a fixed-length hex digest of the canonical form of ``data``.

    Frozen snapshot structures and their mutable originals produce the same
    identity. ``None`` and empty containers are valid inputs.
    """

    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


__all__ = ["NO_IDENTITY", "canonical_json", "compute_identity"]
