# src/core/energy_share.py
"""
Bitcoin's share of world electricity by calendar year.

Two sources feed the share:

- Measured years come straight from the historical share table
  (hashrate x fleet efficiency, see src/core/history.py).
- Every other year is projected with a logistic adoption curve that rises
  towards the configured energy cap:

      cap_fraction = cap_share_pct / 100 * scenario.cap_utilization_multiplier
      share(year)  = cap_fraction * 1 / (1 + exp(-k * (year - y0)))

  The midpoint y0 is solved so the curve passes through the last measured
  point (anchor_year, anchor_share / cap_fraction). The projection therefore
  starts exactly where history ends and then climbs monotonically towards
  the cap.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Union

from src.config import settings
from src.core.scenario_models import HistoricalSharePoint, ScenarioPreset

HistoricalTable = Mapping[int, HistoricalSharePoint]


@dataclass(frozen=True)
class AdoptionAnchor:
    anchor_year: int
    anchor_share: float
    cap_fraction: float
    # Adoption level (0-1 of cap) at the anchor year, after clamping
    a0: float
    # Year at which adoption reaches half the cap
    midpoint_year: float


@dataclass(frozen=True)
class MeasuredShare:
    year: int
    share: float


@dataclass(frozen=True)
class ProjectedShare:
    year: int
    share: float
    adoption: float
    anchor: AdoptionAnchor


ShareEstimate = Union[MeasuredShare, ProjectedShare]


def cap_fraction_for(scenario: ScenarioPreset, cap_share_pct: float) -> float:
    """Long-run ceiling share of world electricity for a scenario."""
    return (cap_share_pct / 100.0) * scenario.cap_utilization_multiplier


def _anchor_share(historical: HistoricalTable, anchor_year: int) -> float:
    point = historical.get(anchor_year)
    share = getattr(point, "share", None)
    if share is None:
        return settings.DEFAULT_ANCHOR_SHARE
    try:
        share = float(share)
    except (TypeError, ValueError):
        return settings.DEFAULT_ANCHOR_SHARE
    if not math.isfinite(share):
        return settings.DEFAULT_ANCHOR_SHARE
    return share


def fit_adoption_anchor(
    scenario: ScenarioPreset,
    cap_share_pct: float,
    historical: HistoricalTable,
) -> AdoptionAnchor:
    """
    Fit the logistic midpoint so the curve passes through the last
    measured year.

    With an empty table the anchor falls back to the model base year and
    DEFAULT_ANCHOR_SHARE. A non-positive cap uses DEFAULT_ANCHOR_RATIO
    instead of dividing by zero.
    """
    floor = settings.ADOPTION_FLOOR
    steepness = settings.ADOPTION_STEEPNESS

    if historical:
        anchor_year = max(historical)
        anchor_share = _anchor_share(historical, anchor_year)
    else:
        anchor_year = settings.MODEL_BASE_DATE.year
        anchor_share = settings.DEFAULT_ANCHOR_SHARE

    cap_fraction = cap_fraction_for(scenario, cap_share_pct)
    if cap_fraction > 0:
        a0_raw = anchor_share / cap_fraction
    else:
        a0_raw = settings.DEFAULT_ANCHOR_RATIO
    # Keep the logit finite at both ends
    a0 = max(floor, min(1.0 - floor, a0_raw))

    # logistic(anchor_year) == a0  <=>  anchor_year - y0 == logit(a0) / k
    midpoint_year = anchor_year + (1.0 / steepness) * math.log(1.0 / a0 - 1.0)

    return AdoptionAnchor(
        anchor_year=anchor_year,
        anchor_share=anchor_share,
        cap_fraction=cap_fraction,
        a0=a0,
        midpoint_year=midpoint_year,
    )


def adoption_level(year: int, anchor: AdoptionAnchor) -> float:
    """Logistic adoption (fraction of the cap) for `year`, within [floor, 1]."""
    floor = settings.ADOPTION_FLOOR
    exponent = -settings.ADOPTION_STEEPNESS * (year - anchor.midpoint_year)
    try:
        x = 1.0 / (1.0 + math.exp(exponent))
    except OverflowError:
        # Far before the midpoint adoption is effectively zero
        x = 0.0
    return max(floor, min(1.0, x))


def project_share(year: int, anchor: AdoptionAnchor) -> ProjectedShare:
    adoption = adoption_level(year, anchor)
    return ProjectedShare(
        year=year,
        share=anchor.cap_fraction * adoption,
        adoption=adoption,
        anchor=anchor,
    )


def estimate_share(
    year: int,
    scenario: ScenarioPreset,
    cap_share_pct: float,
    historical: HistoricalTable,
) -> ShareEstimate:
    """
    Measured share when the table covers `year`, projected share otherwise.
    """
    point = historical.get(year)
    if point is not None:
        return MeasuredShare(year=year, share=point.share)

    anchor = fit_adoption_anchor(scenario, cap_share_pct, historical)
    return project_share(year, anchor)


def share_at(
    year: int,
    scenario: ScenarioPreset,
    cap_share_pct: float,
    historical: HistoricalTable,
) -> float:
    """Bitcoin's share (0-1) of world electricity in `year`."""
    return estimate_share(year, scenario, cap_share_pct, historical).share
