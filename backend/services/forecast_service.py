"""Business logic around the food preparation forecast."""

from __future__ import annotations

from typing import Optional, Sequence

from backend.domain.constraints import ForecastConfig, validate_forecast_config
from backend.domain.forecasting import explain_forecast
from backend.domain.models import (
    EventContext,
    FoodForecastRecord,
    ForecastResult,
    HistoricalRecord,
)
from backend.repository.data_repository import DataRepository
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class ForecastError(Exception):
    """Base exception for forecast workflow failures."""


class ForecastValidationError(ForecastError):
    """Raised when forecast input is outside the supported domain."""


def build_forecast_config(settings: Settings) -> ForecastConfig:
    config = ForecastConfig(
        base_multiplier=settings.forecast_base_multiplier,
        naive_multiplier=settings.forecast_naive_multiplier,
        default_feedback_factor=settings.forecast_default_feedback_factor,
    )
    validate_forecast_config(config)
    return config


class FoodForecastService:
    """Feeds the rule-based estimator and records its recommendations."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)
        self._config = build_forecast_config(self._settings)

    def predict_food_preparation(
        self,
        historical_data: Optional[Sequence[HistoricalRecord]],
        event_type: str,
        audience_profile: str,
        footfall: int,
        *,
        item_name: Optional[str] = None,
        event_date: Optional[str] = None,
        persist: bool = True,
    ) -> ForecastResult:
        """Forecast one event.

        ``historical_data=None`` falls back to the stored history; an empty
        sequence is taken at face value and yields a neutral feedback factor.
        When both ``item_name`` and ``event_date`` are given the result is
        stored as a food forecast record.
        """
        if footfall < 0:
            raise ForecastValidationError("footfall must be a non-negative integer")

        if historical_data is None:
            history = self._repository.list_historical_records()
            history_source = "stored"
        else:
            history = list(historical_data)
            history_source = "request"

        breakdown = explain_forecast(
            history,
            event_type,
            audience_profile,
            footfall,
            self._config,
        )
        result = breakdown.result

        logger.info(
            (
                "Forecast completed | event_type=%s | audience_profile=%s | footfall=%s | "
                "history=%s(%s) | base=%.4f | event_factor=%.2f | audience_factor=%.2f | "
                "feedback_factor=%.6f | predicted=%s | naive=%s | waste_reduction=%s"
            ),
            event_type,
            audience_profile,
            footfall,
            history_source,
            len(history),
            breakdown.base_estimate,
            breakdown.event_type_factor,
            breakdown.audience_profile_factor,
            breakdown.feedback_factor,
            result.predicted_quantity,
            breakdown.naive_estimate,
            result.waste_reduction_potential,
        )

        if persist and item_name and event_date:
            record_id = self._repository.save_forecast(
                FoodForecastRecord(
                    item_name=item_name,
                    expected_footfall=footfall,
                    quantity_recommended=result.predicted_quantity,
                    date=event_date,
                )
            )
            logger.info(
                "Forecast persisted | id=%s | item_name=%s | date=%s",
                record_id,
                item_name,
                event_date,
            )

        return result

    def find_forecasts(self, item_name: str, date: str) -> list[FoodForecastRecord]:
        if not item_name.strip():
            raise ForecastValidationError("item_name must be non-empty")
        return self._repository.find_forecasts_by_item_and_date(item_name, date)

    def forecast_event(
        self,
        event: EventContext,
        historical_data: Optional[Sequence[HistoricalRecord]] = None,
        *,
        item_name: Optional[str] = None,
        persist: bool = True,
    ) -> ForecastResult:
        return self.predict_food_preparation(
            historical_data,
            event.event_type,
            event.audience_profile,
            event.footfall,
            item_name=item_name,
            event_date=event.date,
            persist=persist,
        )
