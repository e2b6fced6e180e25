"""Runtime configuration read from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> List[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    database_url: str = field(
        default_factory=lambda: os.environ.get("RACESYNC_DATABASE_URL", "sqlite://races.db")
    )
    generate_schemas: bool = field(
        default_factory=lambda: _env_bool("RACESYNC_GENERATE_SCHEMAS", True)
    )
    cors_origins: List[str] = field(
        default_factory=lambda: _env_list("RACESYNC_CORS_ORIGINS", "*")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("RACESYNC_LOG_LEVEL", "INFO").upper()
    )


__all__ = ["Settings"]
