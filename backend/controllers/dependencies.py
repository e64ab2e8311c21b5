"""Shared FastAPI dependency providers and DTO base for the controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from backend.services.forecast_service import FoodForecastService
from backend.services.history_service import HistoricalDataService


class CamelModel(BaseModel):
    """DTO base: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def get_forecast_service(request: Request) -> FoodForecastService:
    service = getattr(request.app.state, "forecast_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Forecast service is not initialized",
        )
    return service


def get_history_service(request: Request) -> HistoricalDataService:
    service = getattr(request.app.state, "history_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="History service is not initialized",
        )
    return service
