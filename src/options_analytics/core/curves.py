"""P&L curves and Greeks sensitivity ladders for charting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .models import GreeksPoint, OptionType, PLCurve, PricingContext, StrategyPosition
from .payoff import current_pl, pl_at_expiration
from .pricing_models import calculate_greeks, option_price

CURVE_POINTS = 100
CURVE_RANGE_FRACTION = 0.5
CURVE_MIN_PRICE = 0.01
SENSITIVITY_BAND = 0.2
SENSITIVITY_POINTS = 21


@dataclass(frozen=True, slots=True)
class CurveGenerator:
    """Sample expiration and current P&L across a band around the spot."""

    points: int = CURVE_POINTS
    range_fraction: float = CURVE_RANGE_FRACTION

    def __post_init__(self) -> None:
        if self.points < 2:
            raise ValueError("points must be >= 2")
        if self.range_fraction <= 0:
            raise ValueError("range_fraction must be strictly positive")

    def price_axis(self, spot: float, price_range: Optional[float] = None) -> np.ndarray:
        half_width = price_range if price_range is not None else spot * self.range_fraction
        start = max(CURVE_MIN_PRICE, spot - half_width)
        return np.linspace(start, spot + half_width, self.points)

    def generate(
        self,
        position: StrategyPosition,
        context: PricingContext,
        price_range: Optional[float] = None,
    ) -> PLCurve:
        prices = self.price_axis(context.underlying_price, price_range)
        expiration = pl_at_expiration(position, prices)
        current = [current_pl(position, float(price), context) for price in prices]
        return PLCurve(
            prices=tuple(float(price) for price in prices),
            at_expiration=tuple(float(value) for value in expiration),
            current=tuple(current),
        )


def greeks_sensitivity(
    option_type: OptionType,
    strike: float,
    tau: float,
    context: PricingContext,
    *,
    band: float = SENSITIVITY_BAND,
    points: int = SENSITIVITY_POINTS,
) -> Tuple[GreeksPoint, ...]:
    """Price and Greeks of one option across ``spot * (1 +/- band)``."""

    spot = context.underlying_price
    prices = np.linspace(max(CURVE_MIN_PRICE, spot * (1.0 - band)), spot * (1.0 + band), points)
    ladder = []
    for price in prices:
        underlying = float(price)
        ladder.append(
            GreeksPoint(
                stock_price=underlying,
                price=option_price(
                    option_type, underlying, strike, tau, context.risk_free_rate, context.volatility
                ),
                greeks=calculate_greeks(
                    option_type, underlying, strike, tau, context.risk_free_rate, context.volatility
                ),
            )
        )
    return tuple(ladder)
