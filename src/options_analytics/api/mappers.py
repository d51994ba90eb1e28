"""Helpers for converting API schemas into domain models and back."""

from __future__ import annotations

import math
from typing import List, Optional, Union

from ..core.models import (
    GreeksPoint,
    GreeksVector,
    LegValuation,
    OptionLeg,
    OptionType as DomainOptionType,
    OptionValuation,
    PLCurve,
    PositionSide,
    StrategyPosition,
    StrategySummary,
)
from .schemas.request import OptionLegRequest, StrategyRequest
from .schemas.response import (
    GreeksPointResponse,
    GreeksResponse,
    LegResultResponse,
    OptionPricingResponse,
    PLCurveResponse,
    PLPointResponse,
    StrategySummaryResponse,
)

UNBOUNDED = "unbounded"


def to_option_leg(leg: OptionLegRequest) -> OptionLeg:
    return OptionLeg(
        position=PositionSide(leg.position.value),
        option_type=DomainOptionType(leg.option_type.value),
        strike=leg.strike,
        premium=leg.premium,
        quantity=leg.quantity,
        expiration=leg.expiration,
    )


def to_strategy_position(request: StrategyRequest) -> StrategyPosition:
    return StrategyPosition.from_legs(to_option_leg(leg) for leg in request.legs)


def bounded(value: Optional[float]) -> Optional[Union[float, str]]:
    """Serialise infinities as the ``"unbounded"`` sentinel."""
    if value is not None and math.isinf(value):
        return UNBOUNDED
    return value


def from_greeks(greeks: GreeksVector) -> GreeksResponse:
    return GreeksResponse(**greeks.to_dict())


def from_summary(summary: StrategySummary) -> StrategySummaryResponse:
    return StrategySummaryResponse(
        breakevens=list(summary.breakevens),
        max_profit=bounded(summary.max_profit),
        max_loss=bounded(summary.max_loss),
        current_pl=summary.current_pl,
        total_premium=summary.total_premium,
        risk_reward_ratio=bounded(summary.risk_reward_ratio),
        probability_of_profit=summary.probability_of_profit,
        greeks=from_greeks(summary.greeks),
    )


def from_curve(curve: PLCurve) -> PLCurveResponse:
    return PLCurveResponse(
        at_expiration=[
            PLPointResponse(stock_price=price, pl=pl) for price, pl, _ in curve.points()
        ],
        current=[PLPointResponse(stock_price=price, pl=pl) for price, _, pl in curve.points()],
    )


def from_leg_valuations(valuations: tuple[LegValuation, ...]) -> List[LegResultResponse]:
    return [
        LegResultResponse(
            leg=index,
            position=item.leg.position.value,
            option_type=item.leg.option_type.value,
            strike=item.leg.strike,
            premium=item.leg.premium,
            quantity=item.leg.quantity,
            theoretical_price=item.valuation.theoretical_price,
            time_to_expiry=item.valuation.time_to_expiry,
            cost_basis=item.cost_basis,
            current_value=item.current_value,
            unrealized_pl=item.unrealized_pl,
            unrealized_pl_percent=item.unrealized_pl_percent,
            greeks=from_greeks(item.position_greeks),
        )
        for index, item in enumerate(valuations, start=1)
    ]


def from_valuation(valuation: OptionValuation) -> OptionPricingResponse:
    return OptionPricingResponse(
        price=valuation.theoretical_price,
        greeks=from_greeks(valuation.greeks),
        time_to_expiration=valuation.time_to_expiry,
        intrinsic_value=valuation.intrinsic_value,
        time_value=valuation.time_value,
    )


def from_greeks_points(points: tuple[GreeksPoint, ...]) -> List[GreeksPointResponse]:
    return [
        GreeksPointResponse(
            stock_price=point.stock_price, price=point.price, greeks=from_greeks(point.greeks)
        )
        for point in points
    ]
