"""Multi-leg strategy analytics."""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from .breakevens import BreakevenFinder
from .curves import CurveGenerator
from .extrema import ExtremaScanner
from .models import (
    LOT_MULTIPLIER,
    ExtremaResult,
    GreeksVector,
    LegValuation,
    PLCurve,
    PricingContext,
    StrategyPosition,
    StrategySummary,
)
from .payoff import current_pl, pl_at_expiration
from .pricing_models import BlackScholesModel, probability_of_profit

LOGGER = logging.getLogger(__name__)


def risk_reward_ratio(max_profit: Optional[float], max_loss: Optional[float]) -> Optional[float]:
    """Return ``|max_profit / max_loss|``.

    ``None`` when the loss is unknown, zero or unbounded; ``math.inf`` when only
    the profit is unbounded.
    """

    if max_profit is None or max_loss is None:
        return None
    if max_loss == 0 or math.isinf(max_loss):
        return None
    return abs(max_profit / max_loss)


class StrategyAggregator:
    """Builds a :class:`StrategySummary` for one strategy.

    Holds no mutable state: the position and the collaborating scanners are
    immutable, so an aggregator can be shared between threads.
    """

    def __init__(
        self,
        position: StrategyPosition,
        *,
        breakeven_finder: Optional[BreakevenFinder] = None,
        extrema_scanner: Optional[ExtremaScanner] = None,
        curve_generator: Optional[CurveGenerator] = None,
        model: Optional[BlackScholesModel] = None,
    ) -> None:
        self._position = position
        self._breakevens = breakeven_finder or BreakevenFinder()
        self._extrema = extrema_scanner or ExtremaScanner()
        self._curves = curve_generator or CurveGenerator()
        self._model = model or BlackScholesModel()

    @property
    def position(self) -> StrategyPosition:
        return self._position

    def calculate_pl_at_expiration(self, stock_price: float) -> float:
        return float(pl_at_expiration(self._position, stock_price))

    def calculate_current_pl(self, context: PricingContext, stock_price: Optional[float] = None) -> float:
        price = context.underlying_price if stock_price is None else stock_price
        return current_pl(self._position, price, context)

    def calculate_breakevens(self) -> Tuple[float, ...]:
        return self._breakevens.find(self._position)

    def calculate_max_profit_loss(self) -> ExtremaResult:
        return self._extrema.scan(self._position)

    def total_premium(self) -> float:
        """Signed premium flow: negative for a net debit, positive for a net credit."""
        return float(sum(-leg.premium * leg.contracts for leg in self._position))

    def leg_valuations(self, context: PricingContext) -> Tuple[LegValuation, ...]:
        valuations = []
        for leg in self._position:
            valuation = self._model.calculate_price(leg, context)
            valuations.append(
                LegValuation(
                    leg=leg,
                    valuation=valuation,
                    position_greeks=valuation.greeks.scale(leg.contracts),
                    cost_basis=leg.premium * leg.contracts,
                    current_value=valuation.theoretical_price * leg.contracts,
                )
            )
        return tuple(valuations)

    def aggregate_greeks(
        self,
        context: PricingContext,
        valuations: Optional[Tuple[LegValuation, ...]] = None,
    ) -> GreeksVector:
        """Sum position Greeks, reusing ``valuations`` when already computed."""
        if valuations is None:
            valuations = self.leg_valuations(context)
        total = GreeksVector.zero()
        for valuation in valuations:
            total = total + valuation.position_greeks
        return total

    def generate_pl_curve(
        self, context: PricingContext, price_range: Optional[float] = None
    ) -> PLCurve:
        return self._curves.generate(self._position, context, price_range)

    def probability_of_profit(
        self, context: PricingContext, breakevens: Tuple[float, ...]
    ) -> Optional[float]:
        # first breakeven and first leg only, even for multi-breakeven shapes
        if self._position.is_empty or not breakevens:
            return None
        tau = self._position.legs[0].time_to_expiry(context.valuation_time)
        return probability_of_profit(
            context.underlying_price, breakevens[0], tau, context.volatility
        )

    def get_strategy_summary(
        self,
        context: PricingContext,
        valuations: Optional[Tuple[LegValuation, ...]] = None,
    ) -> StrategySummary:
        breakevens = self.calculate_breakevens()
        extrema = self.calculate_max_profit_loss()
        summary = StrategySummary(
            breakevens=breakevens,
            max_profit=extrema.max_profit,
            max_loss=extrema.max_loss,
            current_pl=self.calculate_current_pl(context),
            total_premium=self.total_premium(),
            risk_reward_ratio=risk_reward_ratio(extrema.max_profit, extrema.max_loss),
            probability_of_profit=self.probability_of_profit(context, breakevens),
            greeks=self.aggregate_greeks(context, valuations),
            leg_count=len(self._position),
        )
        LOGGER.debug(
            "Summarised %d-leg strategy (lot=%d): breakevens=%s",
            summary.leg_count,
            LOT_MULTIPLIER,
            summary.breakevens,
        )
        return summary
