"""HTTP controller layer for stored event history."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field

from backend.controllers.dependencies import CamelModel, get_history_service
from backend.domain.models import HistoricalRecord
from backend.services.history_service import HistoricalDataService, HistoryValidationError
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/api/history", tags=["history"])


class HistoricalRecordPayload(CamelModel):
    date: date
    event_type: str = Field(min_length=1)
    audience_profile: str = Field(min_length=1)
    footfall: int = Field(ge=0)
    food_prepared: int = Field(ge=0)
    food_consumed: int = Field(ge=0)

    @classmethod
    def from_domain(cls, record: HistoricalRecord) -> HistoricalRecordPayload:
        return cls(
            date=record.date,
            event_type=record.event_type,
            audience_profile=record.audience_profile,
            footfall=record.footfall,
            food_prepared=record.food_prepared,
            food_consumed=record.food_consumed,
        )


class HistoryListResponse(CamelModel):
    records: list[HistoricalRecordPayload]


class EventTypeSummaryRow(CamelModel):
    event_type: str
    events: int = Field(ge=0)
    total_footfall: int
    total_prepared: int = Field(ge=0)
    total_consumed: int = Field(ge=0)
    mean_consumption_ratio: float = Field(ge=0.0)
    waste_percentage: float


class OverallSummary(CamelModel):
    events: int = Field(ge=0)
    total_footfall: int
    total_prepared: int = Field(ge=0)
    total_consumed: int = Field(ge=0)
    feedback_factor: float = Field(ge=0.0)


class HistorySummaryResponse(CamelModel):
    by_event_type: list[EventTypeSummaryRow]
    overall: OverallSummary


@router.get("", response_model=HistoryListResponse, status_code=status.HTTP_200_OK)
async def list_history(
    service: HistoricalDataService = Depends(get_history_service),
) -> HistoryListResponse:
    try:
        return HistoryListResponse(
            records=[
                HistoricalRecordPayload.from_domain(record)
                for record in service.list_records()
            ]
        )
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected history listing failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load historical data",
        ) from exc


@router.post(
    "",
    response_model=HistoricalRecordPayload,
    status_code=status.HTTP_201_CREATED,
)
async def add_history_record(
    payload: HistoricalRecordPayload,
    service: HistoricalDataService = Depends(get_history_service),
) -> HistoricalRecordPayload:
    try:
        stored = service.add_record(
            HistoricalRecord(
                date=payload.date.isoformat(),
                event_type=payload.event_type,
                audience_profile=payload.audience_profile,
                footfall=payload.footfall,
                food_prepared=payload.food_prepared,
                food_consumed=payload.food_consumed,
            )
        )
        return HistoricalRecordPayload.from_domain(stored)
    except HistoryValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected history insert failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store historical record",
        ) from exc


@router.get(
    "/summary",
    response_model=HistorySummaryResponse,
    status_code=status.HTTP_200_OK,
)
async def summarize_history(
    service: HistoricalDataService = Depends(get_history_service),
) -> HistorySummaryResponse:
    try:
        return HistorySummaryResponse(**service.summarize())
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected history summary failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to summarize historical data",
        ) from exc
