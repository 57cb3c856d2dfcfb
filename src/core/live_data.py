# src/core/live_data.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

import requests

from src.config import settings
from src.core.history import HashratePoint, build_historical_table
from src.core.scenario_models import HistoricalSharePoint

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Data model
# ---------------------------------------------------------


@dataclass(slots=True)
class FeeShare:
    fee_share_pct: float  # % of total miner revenue (fees + subsidy)
    fees_pct_of_subsidy: float  # same fees as % of the subsidy alone
    sample_blocks: int
    as_of_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class LiveDataError(RuntimeError):
    """Raised when live data cannot be fetched."""


def _get_json(url: str, params: dict | None = None):
    resp = requests.get(
        url,
        params=params,
        headers={"User-Agent": settings.LIVE_DATA_USER_AGENT},
        timeout=settings.LIVE_DATA_REQUEST_TIMEOUT_S,
    )
    resp.raise_for_status()
    return resp.json()


def block_subsidy_sats(height: int) -> int:
    """Subsidy in sats at a block height (210,000-block halvings)."""
    era = height // settings.BLOCKS_PER_HALVING
    if era >= 64:
        return 0
    return (int(settings.GENESIS_SUBSIDY_BTC) * settings.SATS_PER_BTC) >> era


def fee_share_to_pct_of_subsidy(fee_share_pct: float) -> float:
    """
    Fees as % of total revenue -> fees as % of the subsidy, the unit
    ModelInputs.fees_pct expects. A 50% revenue share is 100% of subsidy.
    """
    if fee_share_pct >= 100.0:
        raise ValueError("Fee share of 100% or more leaves no subsidy")
    return fee_share_pct / (100.0 - fee_share_pct) * 100.0


# ---------------------------------------------------------
# Fetchers
# ---------------------------------------------------------


def fetch_hashrate_history() -> List[HashratePoint]:
    """
    Full daily hashrate history (TH/s) from Blockchain.com charts.
    """
    try:
        data = _get_json(
            settings.BLOCKCHAIN_HASHRATE_HISTORY_URL,
            params={"timespan": "all", "format": "json"},
        )
    except (requests.RequestException, ValueError) as exc:
        raise LiveDataError(f"Failed to fetch hashrate history: {exc}") from exc

    values = data.get("values") if isinstance(data, dict) else None
    if not isinstance(values, list):
        raise LiveDataError("Hashrate history payload is malformed")

    points: List[HashratePoint] = []
    skipped = 0
    for item in values:
        try:
            points.append((float(item["x"]), float(item["y"])))
        except (KeyError, TypeError, ValueError):
            skipped += 1
    if skipped:
        logger.warning("Skipped %d malformed hashrate samples", skipped)
    logger.debug("Fetched %d hashrate samples", len(points))
    return points


def fetch_fee_share_pct(sample_blocks: int | None = None) -> FeeShare:
    """
    Fee share of total miner revenue over the most recent blocks
    (mempool.space), also expressed as % of the subsidy for ModelInputs.
    Blocks without a fee total are ignored.
    """
    n = settings.FEE_SAMPLE_BLOCKS_DEFAULT if sample_blocks is None else sample_blocks
    n = min(settings.FEE_SAMPLE_BLOCKS_MAX, max(settings.FEE_SAMPLE_BLOCKS_MIN, n))

    try:
        blocks = _get_json(settings.MEMPOOL_RECENT_BLOCKS_URL)
    except (requests.RequestException, ValueError) as exc:
        raise LiveDataError(f"Failed to fetch recent blocks: {exc}") from exc
    if not isinstance(blocks, list):
        raise LiveDataError("Recent blocks payload is malformed")

    fees_sum = 0
    subsidy_sum = 0
    counted = 0
    for block in blocks[:n]:
        if not isinstance(block, dict):
            continue
        height = block.get("height")
        extras = block.get("extras") or {}
        total_fees = extras.get("totalFees", block.get("totalFees"))
        if not isinstance(height, int) or not isinstance(total_fees, (int, float)):
            continue
        fees_sum += total_fees
        subsidy_sum += block_subsidy_sats(height)
        counted += 1

    denom = fees_sum + subsidy_sum
    pct = (fees_sum / denom) * 100.0 if denom > 0 else 0.0
    try:
        pct_of_subsidy = fee_share_to_pct_of_subsidy(pct)
    except ValueError as exc:
        raise LiveDataError(f"Recent blocks carry no subsidy: {exc}") from exc
    logger.debug(
        "Fee share %.2f%% of revenue (%.2f%% of subsidy) over %d blocks",
        pct,
        pct_of_subsidy,
        counted,
    )
    return FeeShare(
        fee_share_pct=round(pct, 2),
        fees_pct_of_subsidy=round(pct_of_subsidy, 2),
        sample_blocks=counted,
    )


# ---------------------------------------------------------
# Public API
# ---------------------------------------------------------


def get_historical_share_table() -> Dict[int, HistoricalSharePoint]:
    """
    Public-facing function for the rest of the app.

    UI (app.py) is responsible for:
    - caching via st.cache_data
    - handling LiveDataError and falling back to an empty table
    """
    return build_historical_table(fetch_hashrate_history())
