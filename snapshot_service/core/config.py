"""Configuration loading: YAML settings file plus environment overrides."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from snapshot_service.core.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path("config/settings.yaml")
DEFAULT_TICK_SECONDS = 1.0


class Config:
    _config: Optional[Dict[str, Any]] = None

    @classmethod
    def load(cls, path: Optional[str] = None) -> Dict[str, Any]:
        if cls._config is None:
            config_path = Path(path or os.getenv("SNAPSHOT_SERVICE_CONFIG") or DEFAULT_CONFIG_PATH)
            if not config_path.exists():
                cls._config = {}
            else:
                with config_path.open("r", encoding="utf-8") as f:
                    cls._config = yaml.safe_load(f) or {}
        return cls._config

    @classmethod
    def get(cls, *keys, default=None):
        cfg = cls.load()
        for key in keys:
            if not isinstance(cfg, dict):
                return default
            cfg = cfg.get(key)
        return cfg if cfg is not None else default

    @classmethod
    def clear(cls) -> None:
        cls._config = None


class ServiceSettings:
    """Container for runtime-tunable service settings."""

    def __init__(self) -> None:
        load_dotenv()
        self.tick_seconds: float = self._load_tick_seconds()
        self.log_level: str = (
            os.getenv("SNAPSHOT_LOG_LEVEL") or Config.get("logging", "level", default="INFO")
        ).upper()

    @staticmethod
    def _load_tick_seconds() -> float:
        raw = os.getenv("SNAPSHOT_TICK_SECONDS")
        if raw is None:
            raw = Config.get("scheduler", "tick_seconds", default=DEFAULT_TICK_SECONDS)
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("tick_seconds must be a number", key="tick_seconds", value=raw) from exc
        if value <= 0:
            raise ConfigurationError("tick_seconds must be positive", key="tick_seconds", value=raw)
        return value


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    """Return cached service settings instance."""

    return ServiceSettings()


__all__ = ["Config", "ServiceSettings", "get_settings", "DEFAULT_TICK_SECONDS"]
