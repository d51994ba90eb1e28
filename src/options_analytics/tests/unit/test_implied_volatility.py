from __future__ import annotations

import pytest

from options_analytics.core.implied_volatility import (
    IV_MAX_VOLATILITY,
    IV_MIN_VOLATILITY,
    ImpliedVolatilitySolver,
    implied_volatility,
)
from options_analytics.core.models import OptionType, SolverStatus
from options_analytics.core.pricing_models import call_price, option_price


@pytest.mark.parametrize("sigma", [0.05, 0.15, 0.3, 0.75, 1.25, 2.0])
def test_round_trip_recovers_call_volatility(sigma: float) -> None:
    spot, strike, tau, rate = 100.0, 100.0, 0.5, 0.01
    market = call_price(spot, strike, tau, rate, sigma)

    result = implied_volatility(market, spot, strike, tau, rate, OptionType.CALL)

    assert result.status is SolverStatus.CONVERGED
    assert result.converged
    assert abs(result.volatility - sigma) < 1e-3
    assert abs(result.residual) < 1e-4


@pytest.mark.parametrize("sigma", [0.2, 0.5, 1.0])
def test_round_trip_recovers_put_volatility(sigma: float) -> None:
    spot, strike, tau, rate = 100.0, 110.0, 0.5, 0.01
    market = option_price(OptionType.PUT, spot, strike, tau, rate, sigma)

    result = ImpliedVolatilitySolver().solve(market, spot, strike, tau, rate, OptionType.PUT)

    assert result.converged
    assert result.volatility == pytest.approx(sigma, abs=1e-3)


def test_exhausted_budget_is_tagged_best_effort() -> None:
    market = call_price(100.0, 100.0, 0.5, 0.01, 0.8)

    result = implied_volatility(
        market, 100.0, 100.0, 0.5, 0.01, OptionType.CALL, max_iterations=1
    )

    assert result.status is SolverStatus.BEST_EFFORT
    assert not result.converged
    assert result.iterations == 1
    assert abs(result.residual) >= 1e-4
    assert IV_MIN_VOLATILITY <= result.volatility <= IV_MAX_VOLATILITY


def test_expired_option_is_degenerate() -> None:
    result = implied_volatility(5.0, 105.0, 100.0, 0.0, 0.05, OptionType.CALL)

    assert result.status is SolverStatus.DEGENERATE
    assert result.iterations == 0
    assert result.volatility == pytest.approx(0.30)


def test_vanishing_vega_is_degenerate() -> None:
    result = implied_volatility(0.001, 100.0, 300.0, 0.1, 0.05, OptionType.CALL)

    assert result.status is SolverStatus.DEGENERATE
    assert not result.converged


def test_volatility_stays_clamped() -> None:
    # a price above the spot cannot be matched; the search saturates at the cap
    result = implied_volatility(99.0, 100.0, 100.0, 0.5, 0.01, OptionType.CALL)

    assert result.status is not SolverStatus.CONVERGED
    assert IV_MIN_VOLATILITY <= result.volatility <= IV_MAX_VOLATILITY


def test_solver_rejects_invalid_configuration() -> None:
    with pytest.raises(ValueError):
        ImpliedVolatilitySolver(tolerance=0.0)
    with pytest.raises(ValueError):
        ImpliedVolatilitySolver(max_iterations=0)
    with pytest.raises(ValueError):
        ImpliedVolatilitySolver(min_volatility=2.0, max_volatility=1.0)
