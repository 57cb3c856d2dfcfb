# src/core/valuation_engine.py
"""
Energy-cap valuation engine

Prices one BTC as the energy cost of producing a block divided by the
block reward:

- Block reward is the halving-aware subsidy plus a flat fee percentage
  (fees are modelled as a share of subsidy, not block by block).
- Energy per block is Bitcoin's share of projected world electricity spread
  over a constant 600-second block interval (no difficulty variance).
- Cost per block = energy * scenario electricity price * overhead factor.
- Floor price = cost per block / effective subsidy; fair price applies the
  scenario markup; real price deflates by CPI back to the model base date.
"""
from __future__ import annotations

from datetime import date
from typing import List, Tuple

import pandas as pd

from src.config import settings
from src.core.electricity_price import price_usd_per_kwh
from src.core.energy_share import HistoricalTable, share_at
from src.core.halving import subsidy_at
from src.core.inflation import to_real
from src.core.scenario_models import (
    ModelInputs,
    ScenarioPreset,
    SeriesPoint,
    ValuationResult,
)
from src.core.world_electricity import world_electricity_twh


def effective_subsidy(subsidy_btc: float, fees_pct: float) -> float:
    """Subsidy grossed up by a flat fee share (e.g. 15.0 = +15%)."""
    return subsidy_btc * (1.0 + fees_pct / 100.0)


def energy_per_block_wh(btc_twh: float) -> float:
    """Annual network energy (TWh) spread evenly over a year of blocks."""
    return (btc_twh * 1e12) / settings.BLOCKS_PER_YEAR


def valuate_at(
    on_date: date,
    scenario: ScenarioPreset,
    inputs: ModelInputs,
    historical: HistoricalTable,
) -> ValuationResult:
    """
    Floor and fair price per BTC on `on_date`.

    `inputs.target_date` and `inputs.scenario` are ignored here; the caller
    passes the date and resolved preset explicitly so series and single
    point valuations share one code path.
    """
    subsidy = subsidy_at(on_date)
    subsidy_eff = effective_subsidy(subsidy, inputs.fees_pct)

    year = on_date.year
    world_twh = world_electricity_twh(year)
    share = share_at(year, scenario, inputs.cap_share_pct, historical)
    btc_twh = world_twh * share

    usd_per_kwh = price_usd_per_kwh(
        on_date,
        scenario,
        inputs.elec_base_usd_per_kwh,
        inputs.elec_drift_pct,
    )
    cost_per_block_usd = (
        (energy_per_block_wh(btc_twh) / 1000.0) * usd_per_kwh * inputs.overhead_phi
    )

    floor_per_btc = cost_per_block_usd / subsidy_eff
    fair_per_btc = floor_per_btc * scenario.markup_multiplier
    fair_per_btc_real = to_real(fair_per_btc, on_date, inputs.cpi_pct)

    return ValuationResult(
        subsidy=subsidy,
        effective_subsidy=subsidy_eff,
        floor_price_per_btc=floor_per_btc,
        fair_price_per_btc=fair_per_btc,
        fair_price_per_btc_real=fair_per_btc_real,
        network_share_used=share,
    )


def _series_anchor_date(year: int) -> date:
    base = settings.MODEL_BASE_DATE
    return date(year, base.month, base.day)


def series_from(
    start_year: int,
    end_year: int,
    scenario: ScenarioPreset,
    inputs: ModelInputs,
    historical: HistoricalTable,
    real: bool = False,
) -> List[SeriesPoint]:
    """
    One fair-price point per calendar year, start and end inclusive.

    Each year is valued on the month/day of MODEL_BASE_DATE. Set `real` to
    return CPI-discounted prices.
    """
    points: List[SeriesPoint] = []
    for year in range(start_year, end_year + 1):
        result = valuate_at(_series_anchor_date(year), scenario, inputs, historical)
        price = result.fair_price_per_btc_real if real else result.fair_price_per_btc
        points.append(SeriesPoint(year=year, price=price))
    return points


def default_series_range() -> Tuple[int, int]:
    """Genesis year through base year + SERIES_HORIZON_YEARS."""
    return (
        settings.SERIES_START_YEAR,
        settings.MODEL_BASE_DATE.year + settings.SERIES_HORIZON_YEARS,
    )


def series_to_dataframe(points: List[SeriesPoint]) -> pd.DataFrame:
    if not points:
        return pd.DataFrame()
    return pd.DataFrame(
        [{"Year": p.year, "Price (USD)": p.price} for p in points]
    )
