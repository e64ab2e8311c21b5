"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_csv(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    database_path: Path
    cors_allowed_origins: tuple[str, ...]
    cors_allowed_methods: tuple[str, ...]
    forecast_base_multiplier: float
    forecast_naive_multiplier: float
    forecast_default_feedback_factor: float
    seed_sample_history: bool


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``cache_clear`` to reload."""
    database_path = Path(
        os.getenv("SMARTSERVE_DATABASE_PATH", str(PROJECT_ROOT / "data" / "smartserve.db"))
    )
    return Settings(
        app_name=os.getenv("SMARTSERVE_APP_NAME", "SmartServe Food Forecasting API"),
        app_version=os.getenv("SMARTSERVE_APP_VERSION", "1.0.0"),
        log_level=os.getenv("SMARTSERVE_LOG_LEVEL", "INFO"),
        database_path=database_path,
        cors_allowed_origins=_env_csv(
            "SMARTSERVE_CORS_ORIGINS",
            ("http://localhost:3000",),
        ),
        cors_allowed_methods=("GET", "POST", "PUT", "DELETE", "OPTIONS"),
        forecast_base_multiplier=float(os.getenv("SMARTSERVE_BASE_MULTIPLIER", "1.2")),
        forecast_naive_multiplier=float(os.getenv("SMARTSERVE_NAIVE_MULTIPLIER", "2.0")),
        forecast_default_feedback_factor=1.0,
        seed_sample_history=_env_bool("SMARTSERVE_SEED_SAMPLE_HISTORY", True),
    )
