"""Refresh interval policy for registered sources."""

from __future__ import annotations

from typing import Any

from snapshot_service.core.errors import ConfigurationError

DEFAULT_REFRESH_INTERVAL = 0
TICK_SECONDS = 1.0


def parse_refresh_interval(value: Any) -> int:
    """Return ``value`` as a non-negative integer number of seconds.

    ``None`` means the default. Integral floats and digit strings are
    accepted; booleans are rejected even though they are ints.
    """

    if value is None:
        return DEFAULT_REFRESH_INTERVAL

    if isinstance(value, bool):
        raise ConfigurationError("refresh_interval must be an integer", key="refresh_interval", value=value)

    if isinstance(value, int):
        interval = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ConfigurationError("refresh_interval must be an integer", key="refresh_interval", value=value)
        interval = int(value)
    elif isinstance(value, str):
        try:
            interval = int(value.strip())
        except ValueError as exc:
            raise ConfigurationError(
                "refresh_interval must be an integer", key="refresh_interval", value=value
            ) from exc
    else:
        raise ConfigurationError("refresh_interval must be an integer", key="refresh_interval", value=value)

    if interval < 0:
        raise ConfigurationError("refresh_interval must be non-negative", key="refresh_interval", value=value)
    return interval


__all__ = ["DEFAULT_REFRESH_INTERVAL", "TICK_SECONDS", "parse_refresh_interval"]
