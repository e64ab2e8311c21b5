"""HTTP controller layer for food preparation forecasting."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field

from backend.controllers.dependencies import CamelModel, get_forecast_service
from backend.domain.models import EventContext, HistoricalRecord
from backend.services.forecast_service import FoodForecastService, ForecastValidationError
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/api/forecast", tags=["forecast"])


class EventDetailsRequest(CamelModel):
    """Upcoming event to forecast."""

    event_type: str
    audience_profile: str
    footfall: int = Field(ge=0)
    date: date
    item_name: Optional[str] = Field(default=None, min_length=1)

    def to_domain(self) -> EventContext:
        return EventContext(
            event_type=self.event_type,
            audience_profile=self.audience_profile,
            footfall=self.footfall,
            date=self.date.isoformat(),
        )


class HistoricalDataItem(CamelModel):
    """One past event.

    Footfall is not bounded here: records without positive footfall are
    dropped by the estimator itself.
    """

    date: str
    event_type: str
    audience_profile: str
    footfall: int
    food_prepared: int = Field(ge=0)
    food_consumed: int = Field(ge=0)

    def to_domain(self) -> HistoricalRecord:
        return HistoricalRecord(
            date=self.date,
            event_type=self.event_type,
            audience_profile=self.audience_profile,
            footfall=self.footfall,
            food_prepared=self.food_prepared,
            food_consumed=self.food_consumed,
        )


class ForecastRequest(CamelModel):
    event_details: EventDetailsRequest
    historical_data: Optional[list[HistoricalDataItem]] = None


class ForecastResponse(CamelModel):
    predicted_food_quantity: int = Field(ge=0)
    waste_reduction_potential: int = Field(ge=0)


class FoodForecastRow(CamelModel):
    id: int = Field(gt=0)
    item_name: str
    expected_footfall: int
    quantity_recommended: int = Field(ge=0)
    date: date


class FoodForecastListResponse(CamelModel):
    forecasts: list[FoodForecastRow]


@router.post(
    "",
    response_model=ForecastResponse,
    status_code=status.HTTP_200_OK,
)
async def get_food_forecast(
    payload: ForecastRequest,
    service: FoodForecastService = Depends(get_forecast_service),
) -> ForecastResponse:
    """Forecast food preparation for one event."""
    details = payload.event_details
    logger.info(
        "Received forecast request | event_type=%s | audience_profile=%s | "
        "footfall=%s | date=%s | historical_items=%s",
        details.event_type,
        details.audience_profile,
        details.footfall,
        details.date.isoformat(),
        "stored" if payload.historical_data is None else len(payload.historical_data),
    )
    historical_data = (
        None
        if payload.historical_data is None
        else [item.to_domain() for item in payload.historical_data]
    )
    try:
        result = service.forecast_event(
            details.to_domain(),
            historical_data,
            item_name=details.item_name,
        )
        return ForecastResponse(
            predicted_food_quantity=result.predicted_quantity,
            waste_reduction_potential=result.waste_reduction_potential,
        )
    except ForecastValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected forecast failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate forecast",
        ) from exc


@router.get(
    "/records",
    response_model=FoodForecastListResponse,
    status_code=status.HTTP_200_OK,
)
async def list_food_forecasts(
    item_name: str = Query(alias="itemName", min_length=1),
    forecast_date: date = Query(alias="date"),
    service: FoodForecastService = Depends(get_forecast_service),
) -> FoodForecastListResponse:
    """Persisted recommendations for one item on one date."""
    try:
        records = service.find_forecasts(item_name, forecast_date.isoformat())
        return FoodForecastListResponse(
            forecasts=[
                FoodForecastRow(
                    id=record.record_id,
                    item_name=record.item_name,
                    expected_footfall=record.expected_footfall,
                    quantity_recommended=record.quantity_recommended,
                    date=record.date,
                )
                for record in records
            ]
        )
    except ForecastValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected forecast lookup failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load forecasts",
        ) from exc
