"""Breakeven detection on the expiration payoff."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import bisect

from .models import StrategyPosition
from .payoff import pl_at_expiration

LOGGER = logging.getLogger(__name__)

BREAKEVEN_GRID_STEP = 0.25
BREAKEVEN_RANGE_FLOOR = 50.0
BREAKEVEN_RANGE_MULTIPLIER = 0.5
BREAKEVEN_TOLERANCE = 0.01
# bisection stops well inside a cent so the final rounding is what decides it
BISECTION_REFINEMENT = 0.01


def price_grid(lower: float, upper: float, step: float) -> NDArray[np.float64]:
    """Return ``lower + i * step`` for every point not beyond ``upper``."""

    count = int(math.floor((upper - lower) / step + 1e-9)) + 1
    return lower + step * np.arange(max(count, 1), dtype=float)


@dataclass(frozen=True, slots=True)
class BreakevenConfig:
    grid_step: float = BREAKEVEN_GRID_STEP
    range_floor: float = BREAKEVEN_RANGE_FLOOR
    range_multiplier: float = BREAKEVEN_RANGE_MULTIPLIER
    tolerance: float = BREAKEVEN_TOLERANCE

    def __post_init__(self) -> None:
        if self.grid_step <= 0:
            raise ValueError("grid_step must be strictly positive")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be strictly positive")
        if self.range_floor < 0 or self.range_multiplier < 0:
            raise ValueError("range parameters must be non-negative")


@dataclass(frozen=True, slots=True)
class BreakevenFinder:
    """Grid scan plus bisection over the expiration P&L.

    Breakevens closer together than ``grid_step`` can be missed; the step is a
    precision/performance trade-off, not a guarantee.
    """

    config: BreakevenConfig = BreakevenConfig()

    def bounds(self, position: StrategyPosition) -> Tuple[float, float]:
        low_strike, high_strike = position.min_strike, position.max_strike
        span = max(high_strike - low_strike, self.config.range_floor)
        half = span * self.config.range_multiplier
        return low_strike - half, high_strike + half

    def find(self, position: StrategyPosition) -> Tuple[float, ...]:
        if position.is_empty:
            return ()

        lower, upper = self.bounds(position)
        prices = price_grid(lower, upper, self.config.grid_step)
        values = pl_at_expiration(position, prices)
        tolerance = self.config.tolerance

        def objective(price: float) -> float:
            return float(pl_at_expiration(position, price))

        roots: List[float] = []
        for index in range(1, len(prices)):
            left, right = float(values[index - 1]), float(values[index])
            crosses = (left <= 0.0 <= right) or (left >= 0.0 >= right)
            # a payoff resting on zero is not a crossing
            if not crosses or (abs(left) < tolerance and abs(right) < tolerance):
                continue
            if abs(left) < tolerance:
                roots.append(float(prices[index - 1]))
            elif abs(right) < tolerance:
                roots.append(float(prices[index]))
            else:
                roots.append(
                    bisect(
                        objective,
                        float(prices[index - 1]),
                        float(prices[index]),
                        xtol=tolerance * BISECTION_REFINEMENT,
                    )
                )

        breakevens = sorted({round(root, 2) for root in roots})
        LOGGER.debug(
            "Scanned %d prices in [%.2f, %.2f]; breakevens=%s",
            len(prices),
            lower,
            upper,
            breakevens,
        )
        return tuple(breakevens)


def calculate_breakevens(
    position: StrategyPosition, config: BreakevenConfig = BreakevenConfig()
) -> Tuple[float, ...]:
    return BreakevenFinder(config).find(position)
