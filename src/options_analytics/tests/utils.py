"""Test helpers for building deterministic strategies."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

from options_analytics.core.models import OptionLeg, OptionType, PositionSide

VALUATION_TIME = datetime(2025, 1, 1, tzinfo=UTC)


def expiry_in(days: int) -> date:
    return (VALUATION_TIME + timedelta(days=days)).date()


def make_leg(
    position: str,
    option_type: str,
    strike: float,
    premium: float,
    *,
    quantity: int = 1,
    days: int = 30,
) -> OptionLeg:
    return OptionLeg(
        position=PositionSide(position),
        option_type=OptionType(option_type),
        strike=strike,
        premium=premium,
        quantity=quantity,
        expiration=expiry_in(days),
    )


__all__ = ["VALUATION_TIME", "expiry_in", "make_leg"]
