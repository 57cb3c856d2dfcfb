# src/core/electricity_price.py
from __future__ import annotations

from datetime import date

from src.config import settings
from src.core.model_utils import compound_factor, years_since
from src.core.scenario_models import ScenarioPreset


def price_usd_per_kwh(
    on_date: date,
    scenario: ScenarioPreset,
    base_price_usd_per_kwh: float,
    drift_pct: float,
    base_date: date | None = None,
) -> float:
    """
    Regional electricity price (USD/kWh) on `on_date` for a scenario.

    base_price * (1 + drift)^years * scenario multiplier. Inputs are not
    clamped; zero or negative prices and drifts flow straight through.
    """
    anchor = base_date or settings.MODEL_BASE_DATE
    drifted = base_price_usd_per_kwh * compound_factor(
        drift_pct, years_since(anchor, on_date)
    )
    return drifted * scenario.electricity_price_multiplier
