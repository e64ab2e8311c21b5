from __future__ import annotations

import itertools

import pytest

from backend.domain.adjustments import AUDIENCE_PROFILE_FACTORS, EVENT_TYPE_FACTORS
from backend.domain.constraints import ForecastConfig
from backend.domain.forecasting import (
    base_estimate,
    explain_forecast,
    forecast,
    historical_feedback_factor,
    naive_estimate,
    round_half_away_from_zero,
    waste_reduction_potential,
)
from backend.domain.models import ForecastResult, HistoricalRecord


def _record(footfall: int, food_consumed: int, food_prepared: int = 0) -> HistoricalRecord:
    return HistoricalRecord(
        date="2024-01-01",
        event_type="Other",
        audience_profile="Mixed",
        footfall=footfall,
        food_prepared=food_prepared,
        food_consumed=food_consumed,
    )


# --- Reference scenarios ---

def test_holiday_party_for_families_without_history() -> None:
    breakdown = explain_forecast([], "Holiday Party", "Families", 100)

    assert breakdown.base_estimate == pytest.approx(120.0)
    assert breakdown.raw_estimate == pytest.approx(147.66)
    assert breakdown.naive_estimate == 200
    assert breakdown.result == ForecastResult(predicted_quantity=148, waste_reduction_potential=52)


def test_neutral_categories_with_one_historical_record() -> None:
    history = [_record(footfall=50, food_consumed=40)]

    breakdown = explain_forecast(history, "Other", "Mixed", 50)

    assert breakdown.feedback_factor == pytest.approx(0.8)
    assert breakdown.base_estimate == pytest.approx(60.0)
    assert breakdown.result == ForecastResult(predicted_quantity=48, waste_reduction_potential=52)


@pytest.mark.parametrize("event_type", ["Holiday Party", "Corporate Lunch", "Unknown"])
@pytest.mark.parametrize("audience_profile", ["Students", "Professionals", "Unknown"])
def test_zero_footfall_yields_zero(event_type: str, audience_profile: str) -> None:
    history = [_record(footfall=10, food_consumed=25)]

    result = forecast(history, event_type, audience_profile, 0)

    assert result == ForecastResult(predicted_quantity=0, waste_reduction_potential=0)


# --- Properties ---

def test_empty_history_matches_categorical_product() -> None:
    for event_type, audience_profile in itertools.product(
        EVENT_TYPE_FACTORS,
        AUDIENCE_PROFILE_FACTORS,
    ):
        event_factor = EVENT_TYPE_FACTORS[event_type]
        audience_factor = AUDIENCE_PROFILE_FACTORS[audience_profile]
        for footfall in (0, 1, 7, 42, 100, 333, 1000):
            result = forecast([], event_type, audience_profile, footfall)
            expected = round_half_away_from_zero(footfall * 1.2 * event_factor * audience_factor)
            assert result.predicted_quantity == expected


def test_waste_reduction_is_gap_to_naive_estimate() -> None:
    history = [_record(50, 90), _record(20, 10)]
    for footfall in (0, 3, 25, 80, 250):
        result = forecast(history, "Weekend Brunch", "Students", footfall)
        naive = round_half_away_from_zero(footfall * 2.0)
        assert result.waste_reduction_potential == max(0, naive - result.predicted_quantity)
        assert result.waste_reduction_potential >= 0


def test_waste_reduction_never_negative_when_forecast_exceeds_naive() -> None:
    history = [_record(10, 30)]

    result = forecast(history, "Holiday Party", "Students", 100)

    assert result.predicted_quantity > 200
    assert result.waste_reduction_potential == 0


def test_unknown_categories_behave_as_neutral() -> None:
    history = [_record(40, 36)]
    for footfall in (5, 55, 505):
        assert forecast(history, "Gala Dinner", "Families", footfall) == forecast(
            history, "Other", "Families", footfall
        )
        assert forecast(history, "Corporate Lunch", "Retirees", footfall) == forecast(
            history, "Corporate Lunch", "Mixed", footfall
        )


def test_prediction_is_non_decreasing_in_footfall() -> None:
    history = [_record(80, 90), _record(120, 100)]
    for event_type, audience_profile in itertools.product(
        EVENT_TYPE_FACTORS,
        AUDIENCE_PROFILE_FACTORS,
    ):
        previous = -1
        for footfall in range(0, 300):
            predicted = forecast(history, event_type, audience_profile, footfall).predicted_quantity
            assert predicted >= previous
            previous = predicted


def test_forecast_is_repeatable() -> None:
    history = (_record(60, 65), _record(80, 90))

    first = forecast(history, "Corporate Lunch", "Professionals", 75)
    second = forecast(history, "Corporate Lunch", "Professionals", 75)

    assert first == second


def test_negative_footfall_is_clamped_to_zero() -> None:
    result = forecast([], "Holiday Party", "Families", -10)

    assert result == ForecastResult(predicted_quantity=0, waste_reduction_potential=0)


# --- Historical feedback ---

def test_feedback_defaults_to_neutral_without_history() -> None:
    assert historical_feedback_factor([]) == 1.0


def test_feedback_skips_records_without_positive_footfall() -> None:
    history = [_record(100, 90), _record(0, 10), _record(-5, 3), _record(50, 60)]

    assert historical_feedback_factor(history) == pytest.approx((0.9 + 1.2) / 2)


def test_feedback_is_neutral_when_no_record_has_footfall() -> None:
    history = [_record(0, 10), _record(0, 0)]

    assert historical_feedback_factor(history) == 1.0


def test_feedback_ignores_record_order() -> None:
    history = [_record(150, 180), _record(80, 90), _record(120, 140), _record(60, 65)]

    assert historical_feedback_factor(history) == pytest.approx(
        historical_feedback_factor(list(reversed(history)))
    )


def test_feedback_accepts_any_iterable() -> None:
    assert historical_feedback_factor(_record(n, n // 2) for n in (10, 20)) == pytest.approx(0.5)


# --- Building blocks ---

@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, 0),
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.4999, 2),
        (147.66, 148),
        (-0.5, -1),
        (-2.5, -3),
        (-2.4, -2),
        (0.49999999999999994, 0),
        (-0.49999999999999994, 0),
        (4503599627370497.0, 4503599627370497),
    ],
)
def test_round_half_away_from_zero(value: float, expected: int) -> None:
    assert round_half_away_from_zero(value) == expected


def test_base_and_naive_estimates_follow_config() -> None:
    config = ForecastConfig(base_multiplier=1.5, naive_multiplier=3.0)

    assert base_estimate(10, config) == pytest.approx(15.0)
    assert naive_estimate(10, config) == 30
    assert waste_reduction_potential(10, 12, config) == 18
    assert base_estimate(0) == 0


def test_default_feedback_factor_comes_from_config() -> None:
    config = ForecastConfig(default_feedback_factor=0.9)

    assert historical_feedback_factor([], config) == 0.9
    assert forecast([], "Other", "Mixed", 100, config).predicted_quantity == 108
