"""Builders for commonly traded option strategies."""

from __future__ import annotations

from datetime import date

from .models import OptionLeg, OptionType, PositionSide, StrategyPosition

LONG, SHORT = PositionSide.LONG, PositionSide.SHORT
CALL, PUT = OptionType.CALL, OptionType.PUT


def _leg(
    position: PositionSide,
    option_type: OptionType,
    strike: float,
    premium: float,
    expiration: date,
    quantity: int,
) -> OptionLeg:
    return OptionLeg(position, option_type, strike, premium, quantity, expiration)


def long_call(strike: float, premium: float, expiration: date, quantity: int = 1) -> StrategyPosition:
    return StrategyPosition.from_legs([_leg(LONG, CALL, strike, premium, expiration, quantity)])


def long_put(strike: float, premium: float, expiration: date, quantity: int = 1) -> StrategyPosition:
    return StrategyPosition.from_legs([_leg(LONG, PUT, strike, premium, expiration, quantity)])


def covered_call(strike: float, premium: float, expiration: date, quantity: int = 1) -> StrategyPosition:
    """Short call overlay only; the stock leg is held outside the model."""
    return StrategyPosition.from_legs([_leg(SHORT, CALL, strike, premium, expiration, quantity)])


def bull_call_spread(
    long_strike: float,
    long_premium: float,
    short_strike: float,
    short_premium: float,
    expiration: date,
    quantity: int = 1,
) -> StrategyPosition:
    if short_strike <= long_strike:
        raise ValueError("bull call spread sells the higher strike")
    return StrategyPosition.from_legs(
        [
            _leg(LONG, CALL, long_strike, long_premium, expiration, quantity),
            _leg(SHORT, CALL, short_strike, short_premium, expiration, quantity),
        ]
    )


def bear_put_spread(
    long_strike: float,
    long_premium: float,
    short_strike: float,
    short_premium: float,
    expiration: date,
    quantity: int = 1,
) -> StrategyPosition:
    if short_strike >= long_strike:
        raise ValueError("bear put spread sells the lower strike")
    return StrategyPosition.from_legs(
        [
            _leg(LONG, PUT, long_strike, long_premium, expiration, quantity),
            _leg(SHORT, PUT, short_strike, short_premium, expiration, quantity),
        ]
    )


def long_straddle(
    strike: float,
    call_premium: float,
    put_premium: float,
    expiration: date,
    quantity: int = 1,
) -> StrategyPosition:
    return StrategyPosition.from_legs(
        [
            _leg(LONG, CALL, strike, call_premium, expiration, quantity),
            _leg(LONG, PUT, strike, put_premium, expiration, quantity),
        ]
    )


def long_strangle(
    put_strike: float,
    put_premium: float,
    call_strike: float,
    call_premium: float,
    expiration: date,
    quantity: int = 1,
) -> StrategyPosition:
    if put_strike > call_strike:
        raise ValueError("strangle put strike must not exceed the call strike")
    return StrategyPosition.from_legs(
        [
            _leg(LONG, CALL, call_strike, call_premium, expiration, quantity),
            _leg(LONG, PUT, put_strike, put_premium, expiration, quantity),
        ]
    )


def iron_condor(
    strikes: tuple[float, float, float, float],
    premiums: tuple[float, float, float, float],
    expiration: date,
    quantity: int = 1,
) -> StrategyPosition:
    """Long put, short put, short call, long call at ascending ``strikes``."""

    long_put_k, short_put_k, short_call_k, long_call_k = strikes
    if not long_put_k < short_put_k <= short_call_k < long_call_k:
        raise ValueError("iron condor strikes must be ascending")
    p1, p2, p3, p4 = premiums
    return StrategyPosition.from_legs(
        [
            _leg(LONG, PUT, long_put_k, p1, expiration, quantity),
            _leg(SHORT, PUT, short_put_k, p2, expiration, quantity),
            _leg(SHORT, CALL, short_call_k, p3, expiration, quantity),
            _leg(LONG, CALL, long_call_k, p4, expiration, quantity),
        ]
    )


STRATEGY_TEMPLATES = {
    "long_call": long_call,
    "long_put": long_put,
    "covered_call": covered_call,
    "bull_call_spread": bull_call_spread,
    "bear_put_spread": bear_put_spread,
    "straddle": long_straddle,
    "strangle": long_strangle,
    "iron_condor": iron_condor,
}
