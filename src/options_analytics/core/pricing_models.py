"""Closed-form Black-Scholes pricing kernel.

Every function here is a pure function of its arguments. Inputs are not
validated: callers guarantee ``spot``, ``strike`` and ``volatility`` are
strictly positive, anything else propagates ``nan``.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Optional

from .models import (
    DAYS_PER_YEAR,
    GreeksVector,
    OptionLeg,
    OptionType,
    OptionValuation,
    PricingContext,
    time_to_expiry,
)

LOGGER = logging.getLogger(__name__)

INV_SQRT_TWO_PI = 1.0 / math.sqrt(2.0 * math.pi)
SQRT_TWO = math.sqrt(2.0)

# Abramowitz & Stegun 7.1.26
_AS_A1 = 0.254829592
_AS_A2 = -0.284496736
_AS_A3 = 1.421413741
_AS_A4 = -1.453152027
_AS_A5 = 1.061405429
_AS_P = 0.3275911

__all__ = [
    "BlackScholesModel",
    "call_price",
    "calculate_greeks",
    "d1",
    "d2",
    "delta",
    "gamma",
    "intrinsic_value",
    "normal_cdf",
    "normal_pdf",
    "option_price",
    "probability_of_profit",
    "put_price",
    "rho",
    "theta",
    "time_to_expiry",
    "vega",
]


def normal_cdf(x: float) -> float:
    """Standard normal CDF, accurate to roughly seven decimal places."""

    sign = -1.0 if x < 0 else 1.0
    z = abs(x) / SQRT_TWO
    t = 1.0 / (1.0 + _AS_P * z)
    poly = ((((_AS_A5 * t + _AS_A4) * t + _AS_A3) * t + _AS_A2) * t + _AS_A1) * t
    y = 1.0 - poly * math.exp(-z * z)
    return 0.5 * (1.0 + sign * y)


def normal_pdf(x: float) -> float:
    return INV_SQRT_TWO_PI * math.exp(-0.5 * x * x)


def d1(spot: float, strike: float, tau: float, rate: float, volatility: float) -> float:
    return (math.log(spot / strike) + (rate + 0.5 * volatility * volatility) * tau) / (
        volatility * math.sqrt(tau)
    )


def d2(spot: float, strike: float, tau: float, rate: float, volatility: float) -> float:
    return d1(spot, strike, tau, rate, volatility) - volatility * math.sqrt(tau)


def intrinsic_value(option_type: OptionType, spot: float, strike: float) -> float:
    """Return the payoff from immediate exercise."""
    if option_type is OptionType.CALL:
        return max(spot - strike, 0.0)
    return max(strike - spot, 0.0)


def call_price(spot: float, strike: float, tau: float, rate: float, volatility: float) -> float:
    if tau <= 0.0:
        return max(spot - strike, 0.0)
    first = d1(spot, strike, tau, rate, volatility)
    second = first - volatility * math.sqrt(tau)
    price = spot * normal_cdf(first) - strike * math.exp(-rate * tau) * normal_cdf(second)
    return max(price, 0.0)


def put_price(spot: float, strike: float, tau: float, rate: float, volatility: float) -> float:
    if tau <= 0.0:
        return max(strike - spot, 0.0)
    first = d1(spot, strike, tau, rate, volatility)
    second = first - volatility * math.sqrt(tau)
    price = strike * math.exp(-rate * tau) * normal_cdf(-second) - spot * normal_cdf(-first)
    return max(price, 0.0)


def option_price(
    option_type: OptionType,
    spot: float,
    strike: float,
    tau: float,
    rate: float,
    volatility: float,
) -> float:
    if option_type is OptionType.CALL:
        return call_price(spot, strike, tau, rate, volatility)
    return put_price(spot, strike, tau, rate, volatility)


def delta(
    option_type: OptionType,
    spot: float,
    strike: float,
    tau: float,
    rate: float,
    volatility: float,
) -> float:
    if tau <= 0.0:
        if option_type is OptionType.CALL:
            return 1.0 if spot > strike else 0.0
        return -1.0 if spot < strike else 0.0
    cdf = normal_cdf(d1(spot, strike, tau, rate, volatility))
    return cdf if option_type is OptionType.CALL else cdf - 1.0


def gamma(spot: float, strike: float, tau: float, rate: float, volatility: float) -> float:
    if tau <= 0.0:
        return 0.0
    return normal_pdf(d1(spot, strike, tau, rate, volatility)) / (
        spot * volatility * math.sqrt(tau)
    )


def theta(
    option_type: OptionType,
    spot: float,
    strike: float,
    tau: float,
    rate: float,
    volatility: float,
) -> float:
    """Time decay per calendar day."""
    if tau <= 0.0:
        return 0.0
    sqrt_t = math.sqrt(tau)
    first = d1(spot, strike, tau, rate, volatility)
    second = first - volatility * sqrt_t
    decay = -(spot * normal_pdf(first) * volatility) / (2.0 * sqrt_t)
    carry = rate * strike * math.exp(-rate * tau)
    if option_type is OptionType.CALL:
        return (decay - carry * normal_cdf(second)) / DAYS_PER_YEAR
    return (decay + carry * normal_cdf(-second)) / DAYS_PER_YEAR


def vega(spot: float, strike: float, tau: float, rate: float, volatility: float) -> float:
    """Price change for a one point (1%) move in volatility."""
    if tau <= 0.0:
        return 0.0
    first = d1(spot, strike, tau, rate, volatility)
    return spot * normal_pdf(first) * math.sqrt(tau) / 100.0


def rho(
    option_type: OptionType,
    spot: float,
    strike: float,
    tau: float,
    rate: float,
    volatility: float,
) -> float:
    """Price change for a one point (1%) move in the risk-free rate."""
    if tau <= 0.0:
        return 0.0
    second = d2(spot, strike, tau, rate, volatility)
    discounted = strike * tau * math.exp(-rate * tau)
    if option_type is OptionType.CALL:
        return discounted * normal_cdf(second) / 100.0
    return -discounted * normal_cdf(-second) / 100.0


def calculate_greeks(
    option_type: OptionType,
    spot: float,
    strike: float,
    tau: float,
    rate: float,
    volatility: float,
) -> GreeksVector:
    return GreeksVector(
        delta=delta(option_type, spot, strike, tau, rate, volatility),
        gamma=gamma(spot, strike, tau, rate, volatility),
        theta=theta(option_type, spot, strike, tau, rate, volatility),
        vega=vega(spot, strike, tau, rate, volatility),
        rho=rho(option_type, spot, strike, tau, rate, volatility),
    )


def probability_of_profit(spot: float, breakeven: float, tau: float, volatility: float) -> float:
    """Percent probability that the underlying finishes above ``breakeven``.

    Driftless lognormal approximation; the risk-free rate is ignored. The
    underlying never finishes at or below a non-positive breakeven.
    """

    if breakeven <= 0.0:
        return 100.0
    if tau <= 0.0:
        return 100.0 if spot > breakeven else 0.0
    log_return = math.log(breakeven / spot)
    drift = -0.5 * volatility * volatility * tau
    diffusion = volatility * math.sqrt(tau)
    z = (log_return - drift) / diffusion
    return (1.0 - normal_cdf(z)) * 100.0


@dataclass(frozen=True, slots=True)
class BlackScholesModel:
    """Deterministic Black-Scholes valuation of a single leg."""

    name: str = "black_scholes"

    def calculate_price(
        self,
        leg: OptionLeg,
        context: PricingContext,
        volatility: Optional[float] = None,
    ) -> OptionValuation:
        start = time.perf_counter()
        sigma = context.volatility if volatility is None else volatility
        spot = context.underlying_price
        tau = leg.time_to_expiry(context.valuation_time)
        intrinsic = intrinsic_value(leg.option_type, spot, leg.strike)
        try:
            price = option_price(
                leg.option_type, spot, leg.strike, tau, context.risk_free_rate, sigma
            )
            greeks = calculate_greeks(
                leg.option_type, spot, leg.strike, tau, context.risk_free_rate, sigma
            )
        except (ArithmeticError, ValueError) as exc:
            LOGGER.exception("Black-Scholes valuation failed")
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            return OptionValuation(
                option_type=leg.option_type,
                strike=leg.strike,
                theoretical_price=0.0,
                intrinsic_value=intrinsic,
                time_value=0.0,
                time_to_expiry=tau,
                greeks=GreeksVector.zero(),
                volatility=sigma,
                computation_time_ms=elapsed_ms,
                model_used=self.name,
                error=str(exc),
            )

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        return OptionValuation(
            option_type=leg.option_type,
            strike=leg.strike,
            theoretical_price=price,
            intrinsic_value=intrinsic,
            time_value=price - intrinsic,
            time_to_expiry=tau,
            greeks=greeks,
            volatility=sigma,
            computation_time_ms=elapsed_ms,
            model_used=self.name,
        )
