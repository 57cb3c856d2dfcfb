# src/core/world_electricity.py
from __future__ import annotations

from src.config import settings


def world_electricity_twh(
    year: int,
    base_twh: float | None = None,
    base_year: int | None = None,
    growth: float | None = None,
) -> float:
    """
    Projected global electricity consumption (TWh) for a calendar year.

    Plain exponential extrapolation from the base year in both directions;
    extreme years give implausible values and that is accepted.
    """
    base = settings.WORLD_ELEC_BASE_TWH if base_twh is None else base_twh
    anchor = settings.WORLD_ELEC_BASE_YEAR if base_year is None else base_year
    rate = settings.WORLD_ELEC_GROWTH if growth is None else growth
    return base * (1.0 + rate) ** (year - anchor)
