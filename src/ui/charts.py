# src/ui/charts.py
from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from src.config import settings


def build_price_chart(
    df: pd.DataFrame,
    real: bool = False,
    last_measured_year: Optional[int] = None,
) -> go.Figure:
    """
    Build the 1 BTC fair-value line chart.

    Expected df columns:
    - Year: int
    - Price (USD): float

    If `last_measured_year` is given, years after it are drawn dashed to
    mark the projected part of the curve.
    """
    missing = {"Year", "Price (USD)"} - set(df.columns)
    if missing:
        raise ValueError(f"DataFrame missing required columns: {sorted(missing)}")

    btc_orange = getattr(settings, "BITCOIN_ORANGE_HEX", "#F7931A")
    name = "Per BTC (Real)" if real else "Per BTC (Nominal)"
    df_plot = df.sort_values("Year")

    fig = go.Figure()

    if last_measured_year is None:
        fig.add_trace(
            go.Scatter(
                x=df_plot["Year"],
                y=df_plot["Price (USD)"],
                mode="lines",
                name=name,
                line=dict(color=btc_orange, width=2),
                hovertemplate="<b>Year %{x}</b><br>%{y:$,.0f}<extra></extra>",
            )
        )
    else:
        measured = df_plot[df_plot["Year"] <= last_measured_year]
        # Overlap one point so the two segments join up
        projected = df_plot[df_plot["Year"] >= last_measured_year]
        fig.add_trace(
            go.Scatter(
                x=measured["Year"],
                y=measured["Price (USD)"],
                mode="lines",
                name=f"{name} – measured share",
                line=dict(color=btc_orange, width=2),
                hovertemplate="<b>Year %{x}</b><br>%{y:$,.0f}<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=projected["Year"],
                y=projected["Price (USD)"],
                mode="lines",
                name=f"{name} – projected share",
                line=dict(color=btc_orange, width=2, dash="dash"),
                hovertemplate="<b>Year %{x}</b><br>%{y:$,.0f}<extra></extra>",
            )
        )

    fig.update_layout(
        height=320,
        margin=dict(l=10, r=10, t=10, b=10),
        xaxis=dict(title="Year"),
        yaxis=dict(title="USD per BTC", type="log", tickformat="$~s"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        hovermode="x unified",
    )
    return fig


def render_price_chart(
    df: pd.DataFrame,
    real: bool = False,
    last_measured_year: Optional[int] = None,
) -> None:
    if df.empty:
        st.info("No price series to display.")
        return
    fig = build_price_chart(df, real=real, last_measured_year=last_measured_year)
    st.plotly_chart(fig, use_container_width=True)
