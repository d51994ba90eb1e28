"""Options pricing and multi-leg strategy analytics."""

from __future__ import annotations

from .core import (
    OptionLeg,
    OptionType,
    PositionSide,
    PricingContext,
    StrategyAggregator,
    StrategyPosition,
)

__all__ = [
    "OptionLeg",
    "OptionType",
    "PositionSide",
    "PricingContext",
    "StrategyAggregator",
    "StrategyPosition",
]
