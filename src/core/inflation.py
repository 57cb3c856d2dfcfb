# src/core/inflation.py
from __future__ import annotations

from datetime import date

from src.config import settings
from src.core.model_utils import compound_factor, years_since


def cpi_factor(on_date: date, cpi_pct: float, base_date: date | None = None) -> float:
    """Cumulative CPI growth from the model base date to `on_date`."""
    anchor = base_date or settings.MODEL_BASE_DATE
    return compound_factor(cpi_pct, years_since(anchor, on_date))


def to_real(
    nominal: float, on_date: date, cpi_pct: float, base_date: date | None = None
) -> float:
    """Convert a nominal amount at `on_date` into base-date dollars."""
    return nominal / cpi_factor(on_date, cpi_pct, base_date)
