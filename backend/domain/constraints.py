"""Numeric knobs of the forecasting rules and their validation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ForecastConfig:
    base_multiplier: float = 1.2
    naive_multiplier: float = 2.0
    default_feedback_factor: float = 1.0


DEFAULT_FORECAST_CONFIG = ForecastConfig()


def validate_forecast_config(config: ForecastConfig) -> None:
    if config.base_multiplier <= 0.0:
        raise ValueError("base_multiplier must be > 0")
    if config.naive_multiplier <= 0.0:
        raise ValueError("naive_multiplier must be > 0")
    if config.default_feedback_factor <= 0.0:
        raise ValueError("default_feedback_factor must be > 0")
