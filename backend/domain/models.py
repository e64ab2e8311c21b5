"""Value types exchanged between the forecasting core and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HistoricalRecord:
    date: str
    event_type: str
    audience_profile: str
    footfall: int
    food_prepared: int
    food_consumed: int


@dataclass(frozen=True)
class EventContext:
    event_type: str
    audience_profile: str
    footfall: int
    date: str


@dataclass(frozen=True)
class ForecastResult:
    predicted_quantity: int
    waste_reduction_potential: int

    def to_dict(self) -> dict[str, int]:
        return {
            "predicted_quantity": self.predicted_quantity,
            "waste_reduction_potential": self.waste_reduction_potential,
        }


@dataclass(frozen=True)
class ForecastBreakdown:
    """Intermediate values of one forecast, kept for logging and inspection."""

    base_estimate: float
    event_type_factor: float
    audience_profile_factor: float
    feedback_factor: float
    raw_estimate: float
    naive_estimate: int
    result: ForecastResult


@dataclass(frozen=True)
class FoodForecastRecord:
    """Persisted recommendation for one menu item on one date."""

    item_name: str
    expected_footfall: int
    quantity_recommended: int
    date: str
    record_id: Optional[int] = None
