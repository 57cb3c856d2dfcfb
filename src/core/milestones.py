# src/core/milestones.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from src.config import settings
from src.core.halving import ALL_ERAS, Era
from src.core.valuation_engine import effective_subsidy


@dataclass(frozen=True)
class Milestone:
    """
    First halving era in which a stack covers `blocks` whole block rewards.

    Era fields are None when the threshold is never reached within the
    generated era table.
    """

    label: str
    time_label: str
    blocks: int
    era_index: Optional[int] = None
    start_date: Optional[date] = None
    subsidy_btc: Optional[float] = None
    blocks_at_era: Optional[float] = None

    @property
    def reached(self) -> bool:
        return self.era_index is not None


def stack_in_blocks(stack_btc: float, effective_subsidy_btc: float) -> float:
    """How many full block rewards a stack is worth."""
    if effective_subsidy_btc <= 0:
        return float("inf")
    return stack_btc / effective_subsidy_btc


def stack_in_minutes(stack_btc: float, effective_subsidy_btc: float) -> float:
    """Stack expressed as minutes of network work at one block per 10 minutes."""
    return stack_in_blocks(stack_btc, effective_subsidy_btc) * settings.MINUTES_PER_BLOCK


def find_milestones(
    stack_btc: float,
    fees_pct: float,
    eras: Tuple[Era, ...] = ALL_ERAS,
) -> List[Milestone]:
    """
    For each threshold in settings.MILESTONE_THRESHOLDS, the first era where
    the stack is worth at least that many blocks.
    """
    milestones: List[Milestone] = []
    for blocks, label, time_label in settings.MILESTONE_THRESHOLDS:
        found = None
        for index, era in enumerate(eras):
            subsidy_eff = effective_subsidy(era.subsidy_btc, fees_pct)
            if stack_in_blocks(stack_btc, subsidy_eff) >= blocks:
                found = (index, era, subsidy_eff)
                break

        if found is None:
            milestones.append(Milestone(label=label, time_label=time_label, blocks=blocks))
            continue

        index, era, subsidy_eff = found
        milestones.append(
            Milestone(
                label=label,
                time_label=time_label,
                blocks=blocks,
                era_index=index,
                start_date=era.start_date,
                subsidy_btc=era.subsidy_btc,
                blocks_at_era=stack_in_blocks(stack_btc, subsidy_eff),
            )
        )
    return milestones
