# tests/test_energy_share.py

import math

import pytest

from src.config import settings
from src.core.energy_share import (
    MeasuredShare,
    ProjectedShare,
    adoption_level,
    cap_fraction_for,
    estimate_share,
    fit_adoption_anchor,
    project_share,
    share_at,
)
from src.core.scenario_config import get_preset
from src.core.scenario_models import HistoricalSharePoint, ScenarioPreset


@pytest.fixture()
def historical():
    return {
        2022: HistoricalSharePoint(year=2022, share=0.0042, electricity_twh=120.0),
        2023: HistoricalSharePoint(year=2023, share=0.0050, electricity_twh=145.0),
        2024: HistoricalSharePoint(year=2024, share=0.0058, electricity_twh=175.0),
    }


def test_measured_year_returns_table_value(historical):
    base = get_preset("Base")
    for year, point in historical.items():
        assert share_at(year, base, 1.5, historical) == point.share
        estimate = estimate_share(year, base, 1.5, historical)
        assert isinstance(estimate, MeasuredShare)


def test_unmeasured_year_is_projected(historical):
    estimate = estimate_share(2030, get_preset("Base"), 1.5, historical)
    assert isinstance(estimate, ProjectedShare)
    assert estimate.anchor.anchor_year == 2024
    assert estimate.share == pytest.approx(estimate.anchor.cap_fraction * estimate.adoption)


def test_anchor_uses_last_year_and_its_share(historical):
    anchor = fit_adoption_anchor(get_preset("Base"), 1.5, historical)
    assert anchor.anchor_year == 2024
    assert anchor.anchor_share == 0.0058
    assert anchor.cap_fraction == pytest.approx(0.015)
    assert anchor.a0 == pytest.approx(0.0058 / 0.015)


def test_projection_is_continuous_at_anchor(historical):
    for name in ("Bearish", "Base", "Bullish"):
        anchor = fit_adoption_anchor(get_preset(name), 1.5, historical)
        projected = project_share(anchor.anchor_year, anchor)
        assert projected.share == pytest.approx(historical[2024].share, rel=1e-9)


def test_projection_is_continuous_with_empty_table():
    anchor = fit_adoption_anchor(get_preset("Base"), 1.5, {})
    assert anchor.anchor_year == settings.MODEL_BASE_DATE.year
    assert anchor.anchor_share == settings.DEFAULT_ANCHOR_SHARE
    assert share_at(anchor.anchor_year, get_preset("Base"), 1.5, {}) == pytest.approx(
        settings.DEFAULT_ANCHOR_SHARE
    )


def test_projection_monotonic_and_bounded_by_cap(historical):
    base = get_preset("Base")
    cap = cap_fraction_for(base, 1.5)
    shares = [share_at(y, base, 1.5, historical) for y in range(2025, 2200)]
    assert all(b >= a for a, b in zip(shares, shares[1:]))
    assert all(s <= cap for s in shares)
    assert shares[-1] == pytest.approx(cap, rel=1e-6)


def test_non_finite_anchor_share_falls_back_to_default():
    table = {2024: HistoricalSharePoint(year=2024, share=math.nan, electricity_twh=0.0)}
    anchor = fit_adoption_anchor(get_preset("Base"), 1.5, table)
    assert anchor.anchor_share == settings.DEFAULT_ANCHOR_SHARE
    value = share_at(2030, get_preset("Base"), 1.5, table)
    assert math.isfinite(value)


def test_zero_cap_share_does_not_raise():
    base = get_preset("Base")
    value = share_at(2040, base, 0.0, {})
    assert math.isfinite(value)
    assert value == 0.0
    anchor = fit_adoption_anchor(base, 0.0, {})
    assert anchor.a0 == settings.DEFAULT_ANCHOR_RATIO


def test_zero_utilisation_does_not_raise():
    idle = ScenarioPreset(
        name="Idle",
        cap_utilization_multiplier=0.0,
        electricity_price_multiplier=1.0,
        markup_multiplier=1.0,
    )
    assert math.isfinite(share_at(2050, idle, 1.5, {}))


def test_a0_clamped_when_history_exceeds_cap(historical):
    anchor = fit_adoption_anchor(get_preset("Base"), 0.1, historical)
    assert anchor.a0 == pytest.approx(1.0 - settings.ADOPTION_FLOOR)
    assert math.isfinite(anchor.midpoint_year)


def test_adoption_level_extreme_years_stay_in_bounds():
    anchor = fit_adoption_anchor(get_preset("Base"), 1.5, {})
    assert adoption_level(-100_000, anchor) == settings.ADOPTION_FLOOR
    assert adoption_level(100_000, anchor) == 1.0


def test_bearish_cap_is_lower(historical):
    bearish = estimate_share(2100, get_preset("Bearish"), 1.5, historical)
    base = estimate_share(2100, get_preset("Base"), 1.5, historical)
    assert bearish.anchor.cap_fraction < base.anchor.cap_fraction
    assert bearish.share < base.share
