# src/core/scenario_models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from src.config import settings


@dataclass(frozen=True)
class ScenarioPreset:
    """
    Named scenario multipliers.

    Shared between the preset table (Bearish / Base / Bullish) and the
    valuation engine. All fields are plain multipliers, e.g. 1.2 = +20%.
    """

    name: str

    # Fraction of the configured energy cap the network actually reaches
    cap_utilization_multiplier: float
    # Applied on top of the drifted electricity price
    electricity_price_multiplier: float
    # Fair value = floor * markup
    markup_multiplier: float


@dataclass(frozen=True)
class HistoricalSharePoint:
    """Measured Bitcoin share of world electricity for one calendar year."""

    year: int
    share: float  # 0-1
    electricity_twh: float


@dataclass
class ModelInputs:
    """
    User-adjustable model state. Percentages are expressed as %, e.g.
    1.5 = 1.5%.
    """

    target_date: date = field(default_factory=lambda: settings.DEFAULT_TARGET_DATE)
    scenario: str = settings.DEFAULT_SCENARIO

    cap_share_pct: float = settings.DEFAULT_CAP_SHARE_PCT
    fees_pct: float = settings.DEFAULT_FEES_PCT

    elec_base_usd_per_kwh: float = settings.DEFAULT_ELEC_BASE_USD_PER_KWH
    elec_drift_pct: float = settings.DEFAULT_ELEC_DRIFT_PCT
    cpi_pct: float = settings.DEFAULT_CPI_PCT

    # Multiplies energy spend to include non-electric OPEX/CAPEX
    overhead_phi: float = settings.DEFAULT_OVERHEAD_PHI

    stack_btc: float = settings.DEFAULT_STACK_BTC


@dataclass(frozen=True)
class ValuationResult:
    """
    Output of a single valuation. Prices are USD per BTC; `_real` is
    CPI-discounted to base-date dollars.
    """

    subsidy: float
    effective_subsidy: float
    floor_price_per_btc: float
    fair_price_per_btc: float
    fair_price_per_btc_real: float
    network_share_used: float  # 0-1


@dataclass(frozen=True)
class SeriesPoint:
    year: int
    price: float
