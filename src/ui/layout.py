# src/ui/layout.py
from __future__ import annotations

from datetime import date
from typing import Mapping

import streamlit as st

from src.config import settings
from src.core.halving import ALL_ERAS
from src.core.history import historical_table_to_dataframe, last_point
from src.core.milestones import (
    Milestone,
    find_milestones,
    stack_in_blocks,
    stack_in_minutes,
)
from src.core.scenario_config import PRESETS, get_preset
from src.core.scenario_models import HistoricalSharePoint, ModelInputs
from src.core.valuation_engine import (
    default_series_range,
    series_from,
    series_to_dataframe,
    valuate_at,
)
from src.ui.charts import render_price_chart


def format_usd(x: float) -> str:
    try:
        return f"${float(x):,.0f}"
    except (TypeError, ValueError):
        return "N/A"


def _format_date(d: date | None) -> str:
    if d is None:
        return "N/A"
    return d.strftime(settings.DATE_DISPLAY_FMT)


def _render_scenario_and_date(inputs: ModelInputs) -> bool:
    """Scenario, target date and nominal/real toggle. Returns show_real."""
    inputs.scenario = st.radio(
        "Scenario",
        options=list(PRESETS.keys()),
        index=list(PRESETS.keys()).index(inputs.scenario),
        horizontal=True,
        help=(
            "Utilisation of the energy cap, electricity price multiplier and "
            "markup. Bearish → Bullish raises utilisation and markup."
        ),
    )
    inputs.target_date = st.date_input(
        "Target date",
        value=inputs.target_date,
        min_value=date(settings.TARGET_YEAR_MIN, 1, 3),
        max_value=date(settings.TARGET_YEAR_MAX, 12, 31),
        help="Past: measured network share. Future: transitions smoothly to your cap.",
    )
    return st.toggle(
        "Real (CPI-adjusted)",
        value=False,
        help="Nominal: dollars at the date. Real: CPI-adjusted to today's buying power.",
    )


def _render_model_dials(inputs: ModelInputs, live_fee_pct: float | None) -> None:
    with st.expander("Model dials", expanded=False):
        col1, col2 = st.columns(2)
        with col1:
            inputs.cap_share_pct = st.number_input(
                "Bitcoin energy cap share (%)",
                min_value=0.0,
                max_value=100.0,
                value=float(inputs.cap_share_pct),
                step=0.1,
                help="Max share of world electricity Bitcoin can access in steady state.",
            )
            fee_default = (
                float(live_fee_pct) if live_fee_pct is not None else inputs.fees_pct
            )
            inputs.fees_pct = st.number_input(
                "Fees (% of subsidy)",
                min_value=0.0,
                value=fee_default,
                step=1.0,
            )
            inputs.overhead_phi = st.number_input(
                "Overhead factor φ",
                min_value=0.0,
                value=float(inputs.overhead_phi),
                step=0.05,
                help="Multiplies energy spend to include non-electric OPEX/CAPEX.",
            )
        with col2:
            inputs.elec_base_usd_per_kwh = st.number_input(
                "Electricity price (USD/kWh)",
                min_value=0.0,
                value=float(inputs.elec_base_usd_per_kwh),
                step=0.005,
                format="%.3f",
            )
            inputs.elec_drift_pct = st.number_input(
                "Electricity drift (%/yr)",
                value=float(inputs.elec_drift_pct),
                step=0.1,
            )
            inputs.cpi_pct = st.number_input(
                "CPI (%/yr)",
                value=float(inputs.cpi_pct),
                step=0.1,
            )


def _render_milestones(milestones: list[Milestone]) -> None:
    st.markdown("### Your stack commands the network: milestones in time")
    st.caption(
        "First halving eras where your stack equals 1 block, 1 hour, 1 day, etc. "
        "As the subsidy halves, the same stack commands more blocks."
    )
    cols = st.columns(len(milestones))
    for col, m in zip(cols, milestones):
        with col:
            st.markdown(f"**{m.label}**  \n{m.time_label}")
            if not m.reached:
                st.write("Not within the modelled eras")
                continue
            st.write(f"First reached: **{_format_date(m.start_date)}**")
            st.caption(
                f"Era {m.era_index} • Subsidy ≈ {m.subsidy_btc:.6f} BTC/block  \n"
                f"Your stack ≈ {m.blocks_at_era:.2f} blocks then"
            )


def render_dashboard(
    historical: Mapping[int, HistoricalSharePoint],
    live_fee_pct: float | None = None,
) -> None:
    st.title("SID: Scarcity • Incentives • Demand")
    st.caption(
        "Bitcoin priced as energy-backed digital scarcity: the electricity cost "
        "of a block divided by its reward."
    )

    inputs = ModelInputs()
    col_stack, col_scenario = st.columns(2)

    with col_scenario:
        show_real = _render_scenario_and_date(inputs)
        _render_model_dials(inputs, live_fee_pct)

    with col_stack:
        inputs.stack_btc = st.number_input(
            "Your stack (BTC)",
            min_value=0.0,
            value=float(inputs.stack_btc),
            step=0.001,
            format="%.3f",
        )

    scenario = get_preset(inputs.scenario)
    result = valuate_at(inputs.target_date, scenario, inputs, historical)
    per_btc = result.fair_price_per_btc_real if show_real else result.fair_price_per_btc

    with col_stack:
        st.metric(
            f"Your stack: {'Real' if show_real else 'Nominal'} fair value",
            format_usd(per_btc * inputs.stack_btc),
        )
        st.write(f"Per BTC: **{format_usd(per_btc)}**")
        st.caption(f"Floor (per BTC, nominal): {format_usd(result.floor_price_per_btc)}")
        blocks = stack_in_blocks(inputs.stack_btc, result.effective_subsidy)
        minutes = stack_in_minutes(inputs.stack_btc, result.effective_subsidy)
        st.write(
            f"On {_format_date(inputs.target_date)}, your stack equals "
            f"**{blocks:.3f}** blocks (≈ **{minutes:.1f} "
            "minutes** of energy-backed work)."
        )
        st.caption(
            f"Network share used: {result.network_share_used * 100:.4f}% of world "
            "electricity"
        )

    _render_milestones(find_milestones(inputs.stack_btc, inputs.fees_pct, ALL_ERAS))

    st.markdown("### 1 BTC: Genesis to +25 Years (Model)")
    start_year, end_year = default_series_range()
    points = series_from(
        start_year, end_year, scenario, inputs, historical, real=show_real
    )
    latest = last_point(historical)
    render_price_chart(
        series_to_dataframe(points),
        real=show_real,
        last_measured_year=latest.year if latest else None,
    )

    if historical:
        with st.expander("Measured network share by year", expanded=False):
            st.dataframe(
                historical_table_to_dataframe(historical),
                hide_index=True,
                use_container_width=True,
            )

    st.caption("Education only; not financial advice.")
