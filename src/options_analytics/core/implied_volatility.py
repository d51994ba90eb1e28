"""Newton-Raphson inversion of Black-Scholes prices into volatility."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .models import ImpliedVolatilityResult, OptionType, SolverStatus
from .pricing_models import option_price, vega

LOGGER = logging.getLogger(__name__)

IV_INITIAL_GUESS = 0.30
IV_TOLERANCE = 1e-4
IV_MAX_ITERATIONS = 100
IV_MIN_VOLATILITY = 0.01
IV_MAX_VOLATILITY = 5.0
IV_VEGA_FLOOR = 1e-8


@dataclass(frozen=True, slots=True)
class ImpliedVolatilitySolver:
    """Best-effort implied volatility search.

    The result is always tagged: ``CONVERGED`` when the model price matched the
    market price within ``tolerance``, ``BEST_EFFORT`` when the iteration budget
    ran out first and ``DEGENERATE`` when vega vanished (expired or extremely
    far from the money options).
    """

    tolerance: float = IV_TOLERANCE
    max_iterations: int = IV_MAX_ITERATIONS
    initial_guess: float = IV_INITIAL_GUESS
    min_volatility: float = IV_MIN_VOLATILITY
    max_volatility: float = IV_MAX_VOLATILITY
    vega_floor: float = IV_VEGA_FLOOR

    def __post_init__(self) -> None:
        if self.tolerance <= 0:
            raise ValueError("tolerance must be strictly positive")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if not 0 < self.min_volatility < self.max_volatility:
            raise ValueError("volatility bounds must satisfy 0 < min < max")

    def _clamp(self, sigma: float) -> float:
        return max(self.min_volatility, min(self.max_volatility, sigma))

    def solve(
        self,
        market_price: float,
        spot: float,
        strike: float,
        tau: float,
        rate: float,
        option_type: OptionType,
    ) -> ImpliedVolatilityResult:
        sigma = self._clamp(self.initial_guess)
        if tau <= 0.0:
            residual = option_price(option_type, spot, strike, tau, rate, sigma) - market_price
            return ImpliedVolatilityResult(sigma, SolverStatus.DEGENERATE, 0, residual)

        residual = float("nan")
        for iteration in range(1, self.max_iterations + 1):
            price = option_price(option_type, spot, strike, tau, rate, sigma)
            residual = price - market_price
            if abs(residual) < self.tolerance:
                return ImpliedVolatilityResult(sigma, SolverStatus.CONVERGED, iteration, residual)

            # kernel vega is quoted per vol point
            raw_vega = vega(spot, strike, tau, rate, sigma) * 100.0
            if raw_vega < self.vega_floor:
                LOGGER.debug("Vega underflow at sigma=%.6f after %d iterations", sigma, iteration)
                return ImpliedVolatilityResult(sigma, SolverStatus.DEGENERATE, iteration, residual)

            sigma = self._clamp(sigma - residual / raw_vega)

        residual = option_price(option_type, spot, strike, tau, rate, sigma) - market_price
        if abs(residual) < self.tolerance:
            return ImpliedVolatilityResult(
                sigma, SolverStatus.CONVERGED, self.max_iterations, residual
            )
        LOGGER.debug(
            "Implied volatility search exhausted %d iterations (residual=%.6g)",
            self.max_iterations,
            residual,
        )
        return ImpliedVolatilityResult(
            sigma, SolverStatus.BEST_EFFORT, self.max_iterations, residual
        )


_DEFAULT_SOLVER = ImpliedVolatilitySolver()


def implied_volatility(
    market_price: float,
    spot: float,
    strike: float,
    tau: float,
    rate: float,
    option_type: OptionType,
    tolerance: float = IV_TOLERANCE,
    max_iterations: int = IV_MAX_ITERATIONS,
) -> ImpliedVolatilityResult:
    """Functional shortcut around :class:`ImpliedVolatilitySolver`."""

    solver = _DEFAULT_SOLVER
    if tolerance != solver.tolerance or max_iterations != solver.max_iterations:
        solver = ImpliedVolatilitySolver(tolerance=tolerance, max_iterations=max_iterations)
    return solver.solve(market_price, spot, strike, tau, rate, option_type)
