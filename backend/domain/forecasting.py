"""Rule-based food preparation forecast.

The pipeline is a chain of pure functions:

    base estimate -> event type factor -> audience factor -> feedback factor
    -> round half away from zero -> clamp at zero

A second, deliberately oversized estimate (``footfall * naive_multiplier``)
is compared against the forecast to express the waste-reduction potential.
Nothing here performs I/O or keeps state, so every function is safe to call
concurrently.
"""

from __future__ import annotations

import math
from typing import Iterable

from backend.domain.adjustments import audience_profile_factor, event_type_factor
from backend.domain.constraints import DEFAULT_FORECAST_CONFIG, ForecastConfig
from backend.domain.models import ForecastBreakdown, ForecastResult, HistoricalRecord


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer; ties move away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # Compare the fraction instead of adding 0.5, which can round up on its own.
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def base_estimate(footfall: int, config: ForecastConfig = DEFAULT_FORECAST_CONFIG) -> float:
    return footfall * config.base_multiplier


def historical_feedback_factor(
    historical_data: Iterable[HistoricalRecord],
    config: ForecastConfig = DEFAULT_FORECAST_CONFIG,
) -> float:
    """Mean consumption-to-footfall ratio over records with positive footfall.

    Records with ``footfall <= 0`` are skipped. When no record qualifies the
    configured default (1.0) is returned.
    """
    ratios = [
        record.food_consumed / record.footfall
        for record in historical_data
        if record.footfall > 0
    ]
    if not ratios:
        return config.default_feedback_factor
    return sum(ratios) / len(ratios)


def naive_estimate(footfall: int, config: ForecastConfig = DEFAULT_FORECAST_CONFIG) -> int:
    return round_half_away_from_zero(footfall * config.naive_multiplier)


def waste_reduction_potential(
    footfall: int,
    predicted_quantity: int,
    config: ForecastConfig = DEFAULT_FORECAST_CONFIG,
) -> int:
    return max(0, naive_estimate(footfall, config) - predicted_quantity)


def explain_forecast(
    historical_data: Iterable[HistoricalRecord],
    event_type: str,
    audience_profile: str,
    footfall: int,
    config: ForecastConfig = DEFAULT_FORECAST_CONFIG,
) -> ForecastBreakdown:
    """Run the full pipeline and keep every intermediate value."""
    base = base_estimate(footfall, config)
    event_factor = event_type_factor(event_type)
    audience_factor = audience_profile_factor(audience_profile)
    feedback = historical_feedback_factor(historical_data, config)

    estimate = base
    estimate *= event_factor
    estimate *= audience_factor
    estimate *= feedback

    predicted_quantity = max(0, round_half_away_from_zero(estimate))
    result = ForecastResult(
        predicted_quantity=predicted_quantity,
        waste_reduction_potential=waste_reduction_potential(
            footfall,
            predicted_quantity,
            config,
        ),
    )
    return ForecastBreakdown(
        base_estimate=base,
        event_type_factor=event_factor,
        audience_profile_factor=audience_factor,
        feedback_factor=feedback,
        raw_estimate=estimate,
        naive_estimate=naive_estimate(footfall, config),
        result=result,
    )


def forecast(
    historical_data: Iterable[HistoricalRecord],
    event_type: str,
    audience_profile: str,
    footfall: int,
    config: ForecastConfig = DEFAULT_FORECAST_CONFIG,
) -> ForecastResult:
    return explain_forecast(
        historical_data,
        event_type,
        audience_profile,
        footfall,
        config,
    ).result
