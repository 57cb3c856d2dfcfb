import streamlit as st

from src.config.settings import LIVE_DATA_CACHE_TTL_S
from src.core.live_data import (
    LiveDataError,
    fetch_fee_share_pct,
    get_historical_share_table,
)
from src.core.scenario_models import HistoricalSharePoint
from src.ui.layout import render_dashboard


@st.cache_data(ttl=LIVE_DATA_CACHE_TTL_S)
def load_historical_share_table() -> dict[int, HistoricalSharePoint]:
    return get_historical_share_table()


@st.cache_data(ttl=LIVE_DATA_CACHE_TTL_S)
def load_fee_share_pct() -> float:
    return fetch_fee_share_pct().fees_pct_of_subsidy


def main() -> None:
    st.set_page_config(
        page_title="SID Model: Scarcity • Incentives • Demand",
        layout="wide",
    )

    try:
        historical = load_historical_share_table()
    except LiveDataError as e:
        st.warning(f"History data error, projecting every year instead. ({e})")
        historical = {}

    live_fee_pct = None
    if st.sidebar.toggle("Use live fee share", value=False):
        try:
            live_fee_pct = load_fee_share_pct()
        except LiveDataError as e:
            st.sidebar.warning(f"Could not load fee share, using default. ({e})")

    render_dashboard(historical, live_fee_pct=live_fee_pct)


if __name__ == "__main__":
    main()
