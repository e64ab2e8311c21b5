from __future__ import annotations

from dataclasses import replace

import pytest

from backend.domain.forecasting import forecast
from backend.domain.models import EventContext, ForecastResult, HistoricalRecord
from backend.repository.data_repository import SAMPLE_HISTORY, DataRepository
from backend.services.forecast_service import FoodForecastService, ForecastValidationError
from backend.utils.config import get_settings


def _build_test_settings(tmp_path, filename: str):
    get_settings.cache_clear()
    base = get_settings()
    return replace(base, database_path=tmp_path / filename)


def _build_service(tmp_path, filename: str, *, seed: bool = True):
    settings = _build_test_settings(tmp_path, filename)
    repository = DataRepository(settings)
    repository.initialize_database()
    if seed:
        repository.seed_sample_history_if_empty()
    return FoodForecastService(repository=repository, settings=settings), repository


def test_request_history_is_used_as_given(tmp_path):
    service, _ = _build_service(tmp_path, "request_history.db")
    history = [HistoricalRecord("2024-03-01", "Other", "Mixed", 50, 55, 40)]

    result = service.predict_food_preparation(history, "Other", "Mixed", 50)

    assert result == ForecastResult(predicted_quantity=48, waste_reduction_potential=52)


def test_empty_request_history_is_neutral_even_with_stored_history(tmp_path):
    service, repository = _build_service(tmp_path, "empty_history.db")
    assert repository.count_historical_records() == len(SAMPLE_HISTORY)

    result = service.predict_food_preparation([], "Holiday Party", "Families", 100)

    assert result.predicted_quantity == 148
    assert result.waste_reduction_potential == 52


def test_missing_history_falls_back_to_stored_records(tmp_path):
    service, _ = _build_service(tmp_path, "stored_history.db")

    result = service.predict_food_preparation(None, "Corporate Lunch", "Professionals", 80)

    assert result == forecast(SAMPLE_HISTORY, "Corporate Lunch", "Professionals", 80)


def test_missing_history_with_empty_store_is_neutral(tmp_path):
    service, _ = _build_service(tmp_path, "no_history.db", seed=False)

    result = service.predict_food_preparation(None, "Other", "Mixed", 10)

    assert result == ForecastResult(predicted_quantity=12, waste_reduction_potential=8)


def test_negative_footfall_is_rejected(tmp_path):
    service, _ = _build_service(tmp_path, "negative.db")

    with pytest.raises(ForecastValidationError):
        service.predict_food_preparation([], "Other", "Mixed", -1)


def test_named_item_forecast_is_persisted(tmp_path):
    service, repository = _build_service(tmp_path, "persist.db")

    result = service.predict_food_preparation(
        [],
        "Weekend Brunch",
        "Young Adults",
        40,
        item_name="Pancakes",
        event_date="2024-06-01",
    )

    assert repository.count_forecasts() == 1
    stored = service.find_forecasts("Pancakes", "2024-06-01")
    assert len(stored) == 1
    assert stored[0].quantity_recommended == result.predicted_quantity
    assert stored[0].expected_footfall == 40
    assert stored[0].record_id is not None
    assert service.find_forecasts("Pancakes", "2024-06-02") == []


def test_forecast_is_not_persisted_without_item_or_when_disabled(tmp_path):
    service, repository = _build_service(tmp_path, "no_persist.db")

    service.predict_food_preparation([], "Other", "Mixed", 10, event_date="2024-06-01")
    service.predict_food_preparation(
        [],
        "Other",
        "Mixed",
        10,
        item_name="Salad",
        event_date="2024-06-01",
        persist=False,
    )

    assert repository.count_forecasts() == 0


def test_find_forecasts_requires_item_name(tmp_path):
    service, _ = _build_service(tmp_path, "lookup.db")

    with pytest.raises(ForecastValidationError):
        service.find_forecasts("  ", "2024-06-01")


def test_forecast_event_uses_event_date_for_persistence(tmp_path):
    service, repository = _build_service(tmp_path, "event_context.db")
    event = EventContext(
        event_type="Holiday Party",
        audience_profile="Families",
        footfall=100,
        date="2024-12-20",
    )

    result = service.forecast_event(event, [], item_name="Mulled Cider")

    assert result == ForecastResult(predicted_quantity=148, waste_reduction_potential=52)
    stored = repository.find_forecasts_by_item_and_date("Mulled Cider", "2024-12-20")
    assert [record.quantity_recommended for record in stored] == [148]
