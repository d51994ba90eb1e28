"""Profit and loss of option legs and strategies."""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .models import OptionLeg, OptionType, PricingContext, StrategyPosition
from .pricing_models import option_price

PriceInput = Union[float, ArrayLike]


def leg_pl_at_expiration(leg: OptionLeg, prices: PriceInput) -> NDArray[np.float64]:
    """Expiration P&L of a single leg, vectorised over ``prices``."""

    spots = np.asarray(prices, dtype=float)
    if leg.option_type is OptionType.CALL:
        intrinsic = np.maximum(spots - leg.strike, 0.0)
    else:
        intrinsic = np.maximum(leg.strike - spots, 0.0)
    return (intrinsic - leg.premium) * leg.contracts


def pl_at_expiration(position: StrategyPosition, prices: PriceInput) -> NDArray[np.float64]:
    spots = np.asarray(prices, dtype=float)
    total = np.zeros_like(spots, dtype=float)
    for leg in position:
        total = total + leg_pl_at_expiration(leg, spots)
    return total


def leg_current_pl(leg: OptionLeg, price: float, context: PricingContext) -> float:
    """Mark-to-model P&L of a leg at underlying ``price``.

    The leg is valued at its own time to expiry, measured from the context's
    valuation time, with the context's rate and volatility.
    """

    tau = leg.time_to_expiry(context.valuation_time)
    theoretical = option_price(
        leg.option_type, price, leg.strike, tau, context.risk_free_rate, context.volatility
    )
    return (theoretical - leg.premium) * leg.contracts


def current_pl(position: StrategyPosition, price: float, context: PricingContext) -> float:
    return float(sum(leg_current_pl(leg, price, context) for leg in position))


def upper_tail_slope(position: StrategyPosition) -> float:
    """Slope of the expiration payoff as the underlying price grows without bound."""

    return float(
        sum(leg.contracts for leg in position if leg.option_type is OptionType.CALL)
    )


__all__ = [
    "current_pl",
    "leg_current_pl",
    "leg_pl_at_expiration",
    "pl_at_expiration",
    "upper_tail_slope",
]
