# tests/test_live_data.py

from datetime import date, datetime, timezone

import pytest
import requests

from src.core import live_data
from src.core.live_data import (
    LiveDataError,
    block_subsidy_sats,
    fee_share_to_pct_of_subsidy,
    fetch_fee_share_pct,
    fetch_hashrate_history,
    get_historical_share_table,
)
from src.core.scenario_config import get_preset
from src.core.scenario_models import ModelInputs
from src.core.valuation_engine import valuate_at


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        return self._payload


def _patch_get(monkeypatch, payload, status_code: int = 200):
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return _FakeResponse(payload, status_code)

    monkeypatch.setattr(live_data.requests, "get", fake_get)
    return calls


def _ts(year: int, month: int) -> int:
    return int(datetime(year, month, 1, tzinfo=timezone.utc).timestamp())


def test_block_subsidy_sats():
    assert block_subsidy_sats(0) == 5_000_000_000
    assert block_subsidy_sats(210_000) == 2_500_000_000
    assert block_subsidy_sats(840_000) == 312_500_000
    assert block_subsidy_sats(64 * 210_000) == 0


def test_fetch_hashrate_history_parses_points(monkeypatch):
    payload = {
        "status": "ok",
        "values": [{"x": _ts(2023, 1), "y": 2.5e8}, {"x": _ts(2023, 2)}, {"x": 1, "y": "bad"}],
    }
    calls = _patch_get(monkeypatch, payload)
    points = fetch_hashrate_history()
    assert points == [(float(_ts(2023, 1)), 2.5e8)]
    assert calls[0][1]["params"]["timespan"] == "all"


def test_fetch_hashrate_history_malformed_payload(monkeypatch):
    _patch_get(monkeypatch, {"status": "ok"})
    with pytest.raises(LiveDataError):
        fetch_hashrate_history()


def test_fetch_hashrate_history_http_error(monkeypatch):
    _patch_get(monkeypatch, {}, status_code=503)
    with pytest.raises(LiveDataError):
        fetch_hashrate_history()


def test_fetch_hashrate_history_connection_error(monkeypatch):
    def boom(url, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(live_data.requests, "get", boom)
    with pytest.raises(LiveDataError):
        fetch_hashrate_history()


def test_get_historical_share_table(monkeypatch):
    payload = {
        "values": [
            {"x": _ts(2022, 3), "y": 2.0e8},
            {"x": _ts(2023, 3), "y": 3.5e8},
            {"x": _ts(2023, 9), "y": 4.5e8},
        ]
    }
    _patch_get(monkeypatch, payload)
    table = get_historical_share_table()
    assert list(table) == [2022, 2023]
    assert 0 < table[2022].share < table[2023].share < 1


def test_fetch_fee_share_pct_clamps_sample_and_sums(monkeypatch):
    blocks = [{"height": 840_000 + i, "extras": {"totalFees": 10_000_000}} for i in range(12)]
    blocks.insert(0, {"height": "oops"})
    _patch_get(monkeypatch, blocks)

    result = fetch_fee_share_pct(sample_blocks=5)
    # Clamped up to 10 blocks, the first of which is malformed
    assert result.sample_blocks == 9
    assert result.fee_share_pct == pytest.approx(3.1)
    assert result.fees_pct_of_subsidy == pytest.approx(3.2)


def test_fetch_fee_share_pct_reads_top_level_total_fees(monkeypatch):
    _patch_get(monkeypatch, [{"height": 840_000, "totalFees": 312_500_000}])
    result = fetch_fee_share_pct()
    assert result.fee_share_pct == pytest.approx(50.0)
    assert result.fees_pct_of_subsidy == pytest.approx(100.0)


def test_fetch_fee_share_pct_no_usable_blocks(monkeypatch):
    _patch_get(monkeypatch, [])
    result = fetch_fee_share_pct()
    assert result.fee_share_pct == 0.0
    assert result.sample_blocks == 0


def test_fetch_fee_share_pct_malformed(monkeypatch):
    _patch_get(monkeypatch, {"error": "nope"})
    with pytest.raises(LiveDataError):
        fetch_fee_share_pct()


def test_fee_share_to_pct_of_subsidy():
    assert fee_share_to_pct_of_subsidy(0.0) == 0.0
    assert fee_share_to_pct_of_subsidy(50.0) == pytest.approx(100.0)
    assert fee_share_to_pct_of_subsidy(15.0) == pytest.approx(17.647, rel=1e-4)
    with pytest.raises(ValueError):
        fee_share_to_pct_of_subsidy(100.0)


def test_live_fee_share_feeds_effective_subsidy(monkeypatch):
    # Fees equal to the subsidy: half of revenue, so the block pays 2x subsidy
    _patch_get(monkeypatch, [{"height": 840_000, "extras": {"totalFees": 312_500_000}}])
    fees = fetch_fee_share_pct()
    inputs = ModelInputs(fees_pct=fees.fees_pct_of_subsidy)

    result = valuate_at(date(2024, 6, 1), get_preset("Base"), inputs, {})
    assert result.effective_subsidy == pytest.approx(2 * result.subsidy)
    assert result.effective_subsidy == pytest.approx(6.25)


def test_fetch_fee_share_pct_fees_only_sample(monkeypatch):
    _patch_get(monkeypatch, [{"height": 64 * 210_000, "totalFees": 1_000}])
    with pytest.raises(LiveDataError):
        fetch_fee_share_pct()
