# src/core/model_utils.py
from __future__ import annotations

from datetime import date

from src.config import settings


def add_years_safe(d: date, years: int) -> date:
    """Add whole years to a date, handling leap years."""
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(month=2, day=28, year=d.year + years)


def years_since(start: date, end: date) -> float:
    """
    Fractional years from `start` to `end` using a 365.2425-day year.

    Negative when `end` precedes `start`.
    """
    return (end - start).days / settings.DAYS_PER_YEAR


def compound_factor(annual_pct: float, years: float) -> float:
    """Compound an annual % rate over (possibly fractional) years."""
    return (1.0 + annual_pct / 100.0) ** years
