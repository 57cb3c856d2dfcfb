# tests/test_halving.py

from datetime import date, timedelta

import pytest

from src.core.halving import (
    ALL_ERAS,
    Era,
    build_era_table,
    era_index_at,
    subsidy_at,
)

KNOWN = [
    (date(2009, 1, 3), 50.0),
    (date(2012, 11, 28), 25.0),
    (date(2016, 7, 9), 12.5),
    (date(2020, 5, 11), 6.25),
    (date(2024, 4, 20), 3.125),
]


@pytest.mark.parametrize("start, subsidy", KNOWN)
def test_subsidy_at_known_checkpoint_and_after(start, subsidy):
    assert subsidy_at(start) == subsidy
    assert subsidy_at(start + timedelta(days=30)) == subsidy


@pytest.mark.parametrize("start, subsidy", KNOWN[1:])
def test_subsidy_day_before_checkpoint_is_previous_era(start, subsidy):
    assert subsidy_at(start - timedelta(days=1)) == subsidy * 2


def test_subsidy_before_genesis_is_fifty():
    assert subsidy_at(date(2008, 10, 31)) == 50.0
    assert era_index_at(date(2008, 10, 31)) is None


def test_future_eras_halve_every_four_calendar_years():
    assert subsidy_at(date(2028, 4, 19)) == 3.125
    assert subsidy_at(date(2028, 4, 20)) == 1.5625
    assert subsidy_at(date(2032, 4, 20)) == 0.78125

    future = ALL_ERAS[len(KNOWN) - 1 :]
    for prev, nxt in zip(future, future[1:]):
        assert nxt.start_date == prev.start_date.replace(year=prev.start_date.year + 4)
        assert nxt.subsidy_btc == prev.subsidy_btc / 2


def test_era_table_covers_at_least_a_century():
    last_known = KNOWN[-1][0]
    assert ALL_ERAS[-1].start_date.year - last_known.year >= 100


def test_era_table_sorted_and_built_once():
    starts = [e.start_date for e in ALL_ERAS]
    assert starts == sorted(starts)
    assert isinstance(ALL_ERAS, tuple)
    assert subsidy_at(date(2030, 1, 1)) == subsidy_at(date(2030, 1, 1))


def test_subsidy_non_increasing_over_time():
    d = date(2008, 1, 1)
    prev = subsidy_at(d)
    while d.year < 2180:
        d = d + timedelta(days=90)
        current = subsidy_at(d)
        assert current <= prev
        assert current > 0
        prev = current


def test_build_era_table_from_custom_checkpoints():
    eras = build_era_table(
        known=[Era(date(2020, 1, 1), 8.0), Era(date(2010, 1, 1), 16.0)],
        future_count=2,
        interval_years=4,
    )
    assert [e.subsidy_btc for e in eras] == [16.0, 8.0, 4.0, 2.0]
    assert eras[-1].start_date == date(2028, 1, 1)
    assert subsidy_at(date(2025, 6, 1), eras) == 4.0


def test_build_era_table_leap_day_start_rolls_to_feb_28():
    eras = build_era_table(
        known=[Era(date(2024, 2, 29), 1.0)], future_count=1, interval_years=3
    )
    assert eras[-1].start_date == date(2027, 2, 28)


def test_build_era_table_empty_known_is_empty():
    assert build_era_table(known=[]) == ()
