# src/core/history.py
"""
Historical Bitcoin share of world electricity, by calendar year.

Daily network hashrate (TH/s) is averaged per UTC year and turned into
energy using a stepped fleet-efficiency curve (J/TH):

    power_w = avg_th_per_s * j_per_th
    twh     = power_w * hours_per_year / 1e12
    share   = twh / world_electricity_twh(year)

The efficiency steps are rough era averages (CPU, GPU/FPGA, early ASICs,
S9, S19, S21 class) and live in settings.EFFICIENCY_J_PER_TH_BY_YEAR.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

import pandas as pd

from src.config import settings
from src.core.scenario_models import HistoricalSharePoint
from src.core.world_electricity import world_electricity_twh

HashratePoint = Tuple[float, float]  # (unix seconds, TH/s)


def efficiency_j_per_th(year: int) -> float:
    """Fleet-average mining efficiency for a calendar year."""
    for upper_year, j_per_th in settings.EFFICIENCY_J_PER_TH_BY_YEAR:
        if year <= upper_year:
            return j_per_th
    return settings.EFFICIENCY_J_PER_TH_FUTURE


def annual_network_twh(avg_th_per_s: float, j_per_th: float) -> float:
    """Energy (TWh/yr) drawn by an average hashrate at a given efficiency."""
    if j_per_th <= 0:
        raise ValueError("j_per_th must be > 0")
    power_w = avg_th_per_s * j_per_th
    return (power_w * settings.HOURS_PER_YEAR) / 1e12


def _annual_average_hashrate(points: Iterable[HashratePoint]) -> pd.Series:
    df = pd.DataFrame(list(points), columns=["ts", "th_per_s"])
    if df.empty:
        return pd.Series(dtype=float)
    df["ts"] = pd.to_numeric(df["ts"], errors="coerce")
    df["th_per_s"] = pd.to_numeric(df["th_per_s"], errors="coerce")
    df = df.replace([math.inf, -math.inf], math.nan).dropna()
    if df.empty:
        return pd.Series(dtype=float)
    df["year"] = pd.to_datetime(df["ts"], unit="s", utc=True).dt.year
    return df.groupby("year")["th_per_s"].mean().sort_index()


def build_historical_table(
    points: Iterable[HashratePoint],
    world_twh: Callable[[int], float] = world_electricity_twh,
) -> Dict[int, HistoricalSharePoint]:
    """
    Build the year -> HistoricalSharePoint table from raw hashrate samples.

    Null or non-finite samples are dropped. Years with no world
    electricity (<= 0 TWh) get a share of 0.
    """
    averages = _annual_average_hashrate(points)

    table: Dict[int, HistoricalSharePoint] = {}
    for year, avg_th_per_s in averages.items():
        year = int(year)
        twh = annual_network_twh(float(avg_th_per_s), efficiency_j_per_th(year))
        world = world_twh(year)
        share = twh / world if world > 0 else 0.0
        table[year] = HistoricalSharePoint(year=year, share=share, electricity_twh=twh)
    return table


def last_point(
    table: Mapping[int, HistoricalSharePoint],
) -> Optional[HistoricalSharePoint]:
    """Latest measured year, or None for an empty table."""
    if not table:
        return None
    return table[max(table)]


def historical_table_to_dataframe(
    table: Mapping[int, HistoricalSharePoint],
) -> pd.DataFrame:
    if not table:
        return pd.DataFrame()
    return pd.DataFrame(
        [
            {
                "Year": p.year,
                "Network energy (TWh)": p.electricity_twh,
                "Share of world electricity": p.share,
            }
            for p in (table[y] for y in sorted(table))
        ]
    )
