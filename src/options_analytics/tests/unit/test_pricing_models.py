import math

import pytest
from numpy.random import default_rng

from options_analytics.core.models import GreeksVector, OptionType, PricingContext
from options_analytics.core.pricing_models import (
    BlackScholesModel,
    calculate_greeks,
    call_price,
    d1,
    d2,
    delta,
    gamma,
    normal_cdf,
    normal_pdf,
    option_price,
    probability_of_profit,
    put_price,
    rho,
    theta,
    vega,
)
from options_analytics.tests.utils import VALUATION_TIME, make_leg


def _exact_cdf(x: float) -> float:
    return 0.5 * math.erfc(-x / math.sqrt(2.0))


def _reference_call(spot: float, strike: float, tau: float, rate: float, vol: float) -> float:
    first = (math.log(spot / strike) + (rate + 0.5 * vol**2) * tau) / (vol * math.sqrt(tau))
    second = first - vol * math.sqrt(tau)
    return spot * _exact_cdf(first) - strike * math.exp(-rate * tau) * _exact_cdf(second)


def test_normal_cdf_is_centred_and_symmetric() -> None:
    assert normal_cdf(0.0) == pytest.approx(0.5, abs=1e-6)
    for x in (0.1, 0.5, 1.0, 1.96, 3.0, 6.0):
        assert math.isclose(normal_cdf(-x), 1.0 - normal_cdf(x), abs_tol=1e-12)


def test_normal_cdf_matches_erf_to_seven_digits() -> None:
    for x in (-4.0, -2.5, -1.0, -0.3, 0.0, 0.4, 1.2, 2.2, 3.7):
        assert normal_cdf(x) == pytest.approx(_exact_cdf(x), abs=1e-7)


def test_normal_pdf_peak_and_tails() -> None:
    assert normal_pdf(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))
    assert normal_pdf(1.5) == pytest.approx(normal_pdf(-1.5))
    assert normal_pdf(40.0) == 0.0


def test_d2_is_d1_minus_sigma_root_t() -> None:
    args = (105.0, 100.0, 0.75, 0.03, 0.4)
    assert d2(*args) == pytest.approx(d1(*args) - 0.4 * math.sqrt(0.75))


def test_reference_example_price_and_delta() -> None:
    spot, strike, tau, rate, vol = 100.0, 100.0, 30.0 / 365.0, 0.05, 0.25
    price = call_price(spot, strike, tau, rate, vol)
    assert price == pytest.approx(3.06, abs=0.01)
    assert price == pytest.approx(_reference_call(spot, strike, tau, rate, vol), abs=1e-4)
    assert delta(OptionType.CALL, spot, strike, tau, rate, vol) == pytest.approx(0.537, abs=0.005)


def test_european_call_put_parity_holds() -> None:
    rng = default_rng(42)

    for _ in range(25):
        spot = float(rng.uniform(50.0, 150.0))
        strike = float(rng.uniform(50.0, 150.0))
        rate = float(rng.uniform(0.0, 0.1))
        tau = float(rng.uniform(0.1, 2.0))
        vol = float(rng.uniform(0.05, 0.6))

        call = call_price(spot, strike, tau, rate, vol)
        put = put_price(spot, strike, tau, rate, vol)
        expected = spot - strike * math.exp(-rate * tau)
        assert math.isclose(call - put, expected, rel_tol=0.0, abs_tol=1e-6)


@pytest.mark.parametrize("spot", [80.0, 100.0, 120.0])
def test_expired_options_price_at_intrinsic(spot: float) -> None:
    assert call_price(spot, 100.0, 0.0, 0.05, 0.3) == max(spot - 100.0, 0.0)
    assert put_price(spot, 100.0, 0.0, 0.05, 0.3) == max(100.0 - spot, 0.0)
    assert call_price(spot, 100.0, -0.1, 0.05, 0.3) == max(spot - 100.0, 0.0)


def test_expired_greeks_degenerate() -> None:
    itm_call = calculate_greeks(OptionType.CALL, 110.0, 100.0, 0.0, 0.05, 0.3)
    otm_call = calculate_greeks(OptionType.CALL, 90.0, 100.0, 0.0, 0.05, 0.3)
    itm_put = calculate_greeks(OptionType.PUT, 90.0, 100.0, 0.0, 0.05, 0.3)
    otm_put = calculate_greeks(OptionType.PUT, 110.0, 100.0, 0.0, 0.05, 0.3)

    assert itm_call == GreeksVector(delta=1.0)
    assert otm_call == GreeksVector.zero()
    assert itm_put == GreeksVector(delta=-1.0)
    assert otm_put == GreeksVector.zero()


def test_greeks_match_finite_differences() -> None:
    spot, strike, tau, rate, vol = 100.0, 95.0, 0.5, 0.03, 0.3
    h = 1e-3
    for option_type in (OptionType.CALL, OptionType.PUT):
        price = lambda s=spot, t=tau, r=rate, v=vol: option_price(option_type, s, strike, t, r, v)  # noqa: E731

        fd_delta = (price(s=spot + h) - price(s=spot - h)) / (2 * h)
        fd_gamma = (price(s=spot + h) - 2 * price() + price(s=spot - h)) / h**2
        fd_vega = (price(v=vol + h) - price(v=vol - h)) / (2 * h) / 100.0
        fd_rho = (price(r=rate + h) - price(r=rate - h)) / (2 * h) / 100.0
        fd_theta = -(price(t=tau + h) - price(t=tau - h)) / (2 * h) / 365.0

        assert delta(option_type, spot, strike, tau, rate, vol) == pytest.approx(fd_delta, abs=1e-4)
        assert gamma(spot, strike, tau, rate, vol) == pytest.approx(fd_gamma, abs=1e-3)
        assert vega(spot, strike, tau, rate, vol) == pytest.approx(fd_vega, abs=1e-4)
        assert rho(option_type, spot, strike, tau, rate, vol) == pytest.approx(fd_rho, abs=1e-4)
        assert theta(option_type, spot, strike, tau, rate, vol) == pytest.approx(fd_theta, abs=1e-4)


def test_put_delta_is_call_delta_minus_one() -> None:
    args = (100.0, 105.0, 0.25, 0.02, 0.35)
    call = delta(OptionType.CALL, *args)
    put = delta(OptionType.PUT, *args)
    assert put == pytest.approx(call - 1.0)


def test_probability_of_profit_bounds() -> None:
    assert probability_of_profit(100.0, 100.0, 0.0, 0.25) == 0.0
    assert probability_of_profit(101.0, 100.0, 0.0, 0.25) == 100.0
    assert probability_of_profit(100.0, 0.0, 0.5, 0.25) == 100.0
    assert probability_of_profit(100.0, -3.0, 0.0, 0.25) == 100.0
    near = probability_of_profit(100.0, 100.0, 0.5, 0.25)
    # zero-drift lognormal median sits below the spot
    assert 45.0 < near < 50.0
    assert probability_of_profit(100.0, 80.0, 0.5, 0.25) > probability_of_profit(100.0, 120.0, 0.5, 0.25)


def test_black_scholes_model_values_leg() -> None:
    leg = make_leg("long", "put", 105.0, 0.0, days=73)
    context = PricingContext(100.0, 0.04, 0.3, valuation_time=VALUATION_TIME)

    valuation = BlackScholesModel().calculate_price(leg, context)

    assert valuation.error is None
    assert valuation.time_to_expiry == pytest.approx(0.2)
    assert valuation.intrinsic_value == pytest.approx(5.0)
    assert valuation.theoretical_price == pytest.approx(put_price(100.0, 105.0, 0.2, 0.04, 0.3))
    assert valuation.time_value == pytest.approx(valuation.theoretical_price - 5.0)
    assert valuation.greeks.delta < 0.0
    assert valuation.volatility == 0.3
    assert valuation.model_used == "black_scholes"


def test_black_scholes_model_volatility_override() -> None:
    leg = make_leg("long", "call", 100.0, 0.0)
    context = PricingContext(100.0, 0.05, 0.25, valuation_time=VALUATION_TIME)
    model = BlackScholesModel()

    base = model.calculate_price(leg, context)
    bumped = model.calculate_price(leg, context, volatility=0.5)

    assert bumped.volatility == 0.5
    assert bumped.theoretical_price > base.theoretical_price
