"""Categorical adjustment factors applied to the base estimate."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


NEUTRAL_FACTOR = 1.00

EVENT_TYPE_FACTORS: Mapping[str, float] = MappingProxyType(
    {
        "Holiday Party": 1.15,
        "Corporate Lunch": 0.95,
        "Weekend Brunch": 1.08,
        "Birthday Celebration": 1.00,
        "Other": 1.00,
    }
)

AUDIENCE_PROFILE_FACTORS: Mapping[str, float] = MappingProxyType(
    {
        "Families": 1.07,
        "Professionals": 0.98,
        "Young Adults": 1.05,
        "Students": 1.10,
        "Mixed": 1.00,
    }
)


def event_type_factor(event_type: str) -> float:
    """Multiplier for an event type; unknown types pass through unchanged."""
    return EVENT_TYPE_FACTORS.get(event_type, NEUTRAL_FACTOR)


def audience_profile_factor(audience_profile: str) -> float:
    """Multiplier for an audience profile; unknown profiles pass through unchanged."""
    return AUDIENCE_PROFILE_FACTORS.get(audience_profile, NEUTRAL_FACTOR)
