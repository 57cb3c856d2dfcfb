# src/core/halving.py
"""
Block subsidy schedule by calendar date.

Genesis and the four halvings up to 2024 are fixed checkpoints. Later halvings are
placed exactly HALVING_INTERVAL_YEARS calendar years apart. This is an
approximation of the real 210,000-block schedule: actual block times drift
away from 10 minutes, so real halving dates will not land on these days.
The era table is built once at import and never regenerated.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Tuple

from src.config import settings
from src.core.model_utils import add_years_safe


@dataclass(frozen=True)
class Era:
    start_date: date
    subsidy_btc: float


def _known_eras() -> Tuple[Era, ...]:
    return tuple(
        Era(start_date=date(*start), subsidy_btc=float(subsidy))
        for start, subsidy in settings.KNOWN_HALVING_ERAS
    )


def generate_future_eras(last: Era, count: int, interval_years: int) -> Tuple[Era, ...]:
    """Project `count` eras after `last`, halving every `interval_years`."""
    eras = []
    start, subsidy = last.start_date, last.subsidy_btc
    for _ in range(count):
        start = add_years_safe(start, interval_years)
        subsidy = subsidy / 2.0
        eras.append(Era(start_date=start, subsidy_btc=subsidy))
    return tuple(eras)


def build_era_table(
    known: Iterable[Era] | None = None,
    future_count: int | None = None,
    interval_years: int | None = None,
) -> Tuple[Era, ...]:
    """
    Known checkpoints followed by generated future eras, sorted by start date.
    """
    source = _known_eras() if known is None else known
    known_eras = tuple(sorted(source, key=lambda e: e.start_date))
    if not known_eras:
        return ()
    count = settings.FUTURE_ERA_COUNT if future_count is None else future_count
    interval = (
        settings.HALVING_INTERVAL_YEARS if interval_years is None else interval_years
    )
    return known_eras + generate_future_eras(known_eras[-1], count, interval)


ALL_ERAS: Tuple[Era, ...] = build_era_table()


def era_index_at(on_date: date, eras: Tuple[Era, ...] = ALL_ERAS) -> int | None:
    """Index of the era active on `on_date`, or None before the first era."""
    index = None
    for i, era in enumerate(eras):
        if era.start_date <= on_date:
            index = i
        else:
            break
    return index


def subsidy_at(on_date: date, eras: Tuple[Era, ...] = ALL_ERAS) -> float:
    """
    Block subsidy (BTC) in effect on `on_date`.

    Dates before genesis return the genesis subsidy.
    """
    index = era_index_at(on_date, eras)
    if index is None:
        return settings.GENESIS_SUBSIDY_BTC
    return eras[index].subsidy_btc
