"""Stored event history and its consumption summaries."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from backend.domain.forecasting import historical_feedback_factor
from backend.domain.models import HistoricalRecord
from backend.repository.data_repository import DataRepository
from backend.services.forecast_service import build_forecast_config
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class HistoryError(Exception):
    """Base exception for history workflow failures."""


class HistoryValidationError(HistoryError):
    """Raised when a historical record cannot be stored."""


class HistoricalDataService:
    """Reads, appends and summarizes past events."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)
        self._config = build_forecast_config(self._settings)

    def list_records(self) -> list[HistoricalRecord]:
        return self._repository.list_historical_records()

    def _validate_record(self, record: HistoricalRecord) -> None:
        try:
            datetime.strptime(record.date, "%Y-%m-%d")
        except ValueError as exc:
            raise HistoryValidationError("date must follow YYYY-MM-DD format") from exc
        if not record.event_type.strip():
            raise HistoryValidationError("event_type must be non-empty")
        if not record.audience_profile.strip():
            raise HistoryValidationError("audience_profile must be non-empty")
        if record.footfall < 0:
            raise HistoryValidationError("footfall must be >= 0")
        if record.food_prepared < 0 or record.food_consumed < 0:
            raise HistoryValidationError("food quantities must be >= 0")

    def add_record(self, record: HistoricalRecord) -> HistoricalRecord:
        self._validate_record(record)
        self._repository.add_historical_record(record)
        logger.info(
            "Historical record stored | date=%s | event_type=%s | footfall=%s",
            record.date,
            record.event_type,
            record.footfall,
        )
        return record

    def summarize(
        self,
        records: Optional[Sequence[HistoricalRecord]] = None,
    ) -> dict[str, Any]:
        """Aggregate consumption per event type plus an overall feedback factor.

        Per-record consumption ratios follow the forecasting rule: records
        without positive footfall are left out of the mean, and a group with
        no usable record reports the neutral default.
        """
        history = list(records) if records is not None else self.list_records()
        overall: dict[str, Any] = {
            "events": len(history),
            "total_footfall": 0,
            "total_prepared": 0,
            "total_consumed": 0,
            "feedback_factor": historical_feedback_factor(history, self._config),
        }
        if not history:
            return {"by_event_type": [], "overall": overall}

        frame = pd.DataFrame([asdict(record) for record in history])
        frame["consumption_ratio"] = np.where(
            frame["footfall"] > 0,
            frame["food_consumed"] / frame["footfall"].clip(lower=1),
            np.nan,
        )

        grouped = (
            frame.groupby("event_type", sort=True)
            .agg(
                events=("date", "count"),
                total_footfall=("footfall", "sum"),
                total_prepared=("food_prepared", "sum"),
                total_consumed=("food_consumed", "sum"),
                mean_consumption_ratio=("consumption_ratio", "mean"),
            )
            .reset_index()
        )
        grouped["mean_consumption_ratio"] = grouped["mean_consumption_ratio"].fillna(
            self._config.default_feedback_factor
        )
        prepared = grouped["total_prepared"]
        grouped["waste_percentage"] = (
            (prepared - grouped["total_consumed"]) / prepared.where(prepared > 0) * 100
        ).round(2).fillna(0.0)

        rows = [
            {
                "event_type": str(row["event_type"]),
                "events": int(row["events"]),
                "total_footfall": int(row["total_footfall"]),
                "total_prepared": int(row["total_prepared"]),
                "total_consumed": int(row["total_consumed"]),
                "mean_consumption_ratio": float(row["mean_consumption_ratio"]),
                "waste_percentage": float(row["waste_percentage"]),
            }
            for _, row in grouped.iterrows()
        ]
        overall.update(
            {
                "total_footfall": int(frame["footfall"].sum()),
                "total_prepared": int(frame["food_prepared"].sum()),
                "total_consumed": int(frame["food_consumed"].sum()),
            }
        )
        return {"by_event_type": rows, "overall": overall}
