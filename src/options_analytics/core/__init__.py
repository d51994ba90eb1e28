"""Core pricing and strategy analytics."""

from .breakevens import BreakevenConfig, BreakevenFinder, calculate_breakevens
from .curves import CurveGenerator, greeks_sensitivity
from .extrema import ExtremaConfig, ExtremaScanner, calculate_max_profit_loss
from .implied_volatility import ImpliedVolatilitySolver, implied_volatility
from .models import (
    LOT_MULTIPLIER,
    ExtremaResult,
    GreeksPoint,
    GreeksVector,
    ImpliedVolatilityResult,
    LegValuation,
    OptionLeg,
    OptionType,
    OptionValuation,
    PLCurve,
    PositionSide,
    PricingContext,
    SolverStatus,
    StrategyPosition,
    StrategySummary,
)
from .pricing_models import BlackScholesModel
from .strategy import StrategyAggregator

__all__ = [
    "LOT_MULTIPLIER",
    "BlackScholesModel",
    "BreakevenConfig",
    "BreakevenFinder",
    "CurveGenerator",
    "ExtremaConfig",
    "ExtremaResult",
    "ExtremaScanner",
    "GreeksPoint",
    "GreeksVector",
    "ImpliedVolatilityResult",
    "ImpliedVolatilitySolver",
    "LegValuation",
    "OptionLeg",
    "OptionType",
    "OptionValuation",
    "PLCurve",
    "PositionSide",
    "PricingContext",
    "SolverStatus",
    "StrategyAggregator",
    "StrategyPosition",
    "StrategySummary",
    "calculate_breakevens",
    "calculate_max_profit_loss",
    "greeks_sensitivity",
    "implied_volatility",
]
