"""Maximum profit / maximum loss search on the expiration payoff."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .breakevens import price_grid
from .models import ExtremaResult, StrategyPosition
from .payoff import pl_at_expiration, upper_tail_slope

LOGGER = logging.getLogger(__name__)

EXTREMA_GRID_STEP = 0.5
EXTREMA_RANGE_FLOOR = 100.0
EXTREMA_RANGE_MULTIPLIER = 1.0
EXTREMA_LOWER_BOUNDARY = 0.01
EXTREMA_UPPER_BOUNDARY_MULTIPLIER = 2.0


@dataclass(frozen=True, slots=True)
class ExtremaConfig:
    grid_step: float = EXTREMA_GRID_STEP
    range_floor: float = EXTREMA_RANGE_FLOOR
    range_multiplier: float = EXTREMA_RANGE_MULTIPLIER
    lower_boundary: float = EXTREMA_LOWER_BOUNDARY
    upper_boundary_multiplier: float = EXTREMA_UPPER_BOUNDARY_MULTIPLIER

    def __post_init__(self) -> None:
        if self.grid_step <= 0:
            raise ValueError("grid_step must be strictly positive")
        if self.lower_boundary <= 0:
            raise ValueError("lower_boundary must be strictly positive")
        if self.upper_boundary_multiplier < 1.0:
            raise ValueError("upper_boundary_multiplier must be >= 1")


@dataclass(frozen=True, slots=True)
class ExtremaScanner:
    """Estimate max profit and max loss of a strategy at expiration.

    The payoff is piecewise linear with kinks only at strikes, so sampling the
    strikes in addition to the grid makes interior extrema exact. Unbounded
    wings are detected from the payoff slope beyond the highest strike.
    """

    config: ExtremaConfig = ExtremaConfig()

    def bounds(self, position: StrategyPosition) -> Tuple[float, float]:
        low_strike, high_strike = position.min_strike, position.max_strike
        span = max(high_strike - low_strike, self.config.range_floor) * self.config.range_multiplier
        return max(self.config.lower_boundary, low_strike - span), high_strike + span

    def scan(self, position: StrategyPosition) -> ExtremaResult:
        if position.is_empty:
            return ExtremaResult()

        lower, upper = self.bounds(position)
        samples = np.concatenate(
            (
                price_grid(lower, upper, self.config.grid_step),
                np.asarray(position.strikes, dtype=float),
                np.asarray(
                    (self.config.lower_boundary, upper * self.config.upper_boundary_multiplier),
                    dtype=float,
                ),
            )
        )
        values = pl_at_expiration(position, samples)

        best, worst = int(np.argmax(values)), int(np.argmin(values))
        max_profit, max_loss = float(values[best]), float(values[worst])
        max_profit_price: float | None = float(samples[best])
        max_loss_price: float | None = float(samples[worst])

        slope = upper_tail_slope(position)
        if slope > 0:
            max_profit, max_profit_price = math.inf, None
        elif slope < 0:
            max_loss, max_loss_price = -math.inf, None

        LOGGER.debug(
            "Extrema over %d samples: max_profit=%s max_loss=%s",
            samples.size,
            max_profit,
            max_loss,
        )
        return ExtremaResult(
            max_profit=max_profit,
            max_loss=max_loss,
            max_profit_price=max_profit_price,
            max_loss_price=max_loss_price,
        )


def calculate_max_profit_loss(
    position: StrategyPosition, config: ExtremaConfig = ExtremaConfig()
) -> ExtremaResult:
    return ExtremaScanner(config).scan(position)
