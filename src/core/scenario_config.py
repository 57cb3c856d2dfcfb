# src/core/scenario_config.py
from __future__ import annotations

from typing import Dict, Literal

from src.config import settings
from src.core.scenario_models import ScenarioPreset

ScenarioName = Literal["Bearish", "Base", "Bullish"]


def build_default_scenarios() -> Dict[ScenarioName, ScenarioPreset]:
    """
    Factory for the Bearish / Base / Bullish presets using the centralised
    constants from settings.py. Ordered bearish to bullish.
    """
    return {
        "Bearish": ScenarioPreset(
            name="Bearish",
            cap_utilization_multiplier=settings.SCENARIO_BEARISH_CAP_UTIL,
            electricity_price_multiplier=settings.SCENARIO_BEARISH_ELEC_PRICE_MULT,
            markup_multiplier=settings.SCENARIO_BEARISH_MARKUP,
        ),
        "Base": ScenarioPreset(
            name="Base",
            cap_utilization_multiplier=settings.SCENARIO_BASE_CAP_UTIL,
            electricity_price_multiplier=settings.SCENARIO_BASE_ELEC_PRICE_MULT,
            markup_multiplier=settings.SCENARIO_BASE_MARKUP,
        ),
        "Bullish": ScenarioPreset(
            name="Bullish",
            cap_utilization_multiplier=settings.SCENARIO_BULLISH_CAP_UTIL,
            electricity_price_multiplier=settings.SCENARIO_BULLISH_ELEC_PRICE_MULT,
            markup_multiplier=settings.SCENARIO_BULLISH_MARKUP,
        ),
    }


PRESETS: Dict[ScenarioName, ScenarioPreset] = build_default_scenarios()


def get_preset(name: str) -> ScenarioPreset:
    """Look up a preset by name; raises KeyError for unknown names."""
    return PRESETS[name]
