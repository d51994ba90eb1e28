"""Request-level orchestration between the validation layer and the core."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import AnalyticsSettings, get_settings
from ..core.curves import greeks_sensitivity
from ..core.models import (
    OptionLeg,
    OptionType as DomainOptionType,
    PositionSide,
    PricingContext,
    SolverStatus,
    time_to_expiry,
)
from ..core.pricing_models import BlackScholesModel
from ..core.strategy import StrategyAggregator
from ..observability.metrics import ANALYTICS_ERRORS, ANALYTICS_LATENCY, IV_SOLVER_OUTCOMES
from ..utils.validation import InvalidInputError
from .mappers import (
    from_curve,
    from_greeks_points,
    from_leg_valuations,
    from_summary,
    from_valuation,
    to_strategy_position,
)
from .schemas.request import (
    GreeksRequest,
    ImpliedVolatilityRequest,
    MarketInputs,
    SingleOptionRequest,
    StrategyRequest,
)
from .schemas.response import (
    GreeksSensitivityResponse,
    ImpliedVolatilityResponse,
    OptionPricingResponse,
    StrategyAnalysisResponse,
)

LOGGER = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)


def _parse(schema: Type[RequestT], payload: Mapping[str, Any]) -> RequestT:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInputError(
            f"Invalid {schema.__name__}: {exc.error_count()} error(s)", errors=exc.errors()
        ) from exc


def parse_strategy_request(
    payload: Mapping[str, Any], settings: Optional[AnalyticsSettings] = None
) -> StrategyRequest:
    settings = settings or get_settings()
    request = _parse(StrategyRequest, payload)
    if len(request.legs) > settings.max_legs:
        raise InvalidInputError(f"A strategy may contain at most {settings.max_legs} legs")
    return request


def parse_single_option_request(payload: Mapping[str, Any]) -> SingleOptionRequest:
    return _parse(SingleOptionRequest, payload)


def parse_greeks_request(payload: Mapping[str, Any]) -> GreeksRequest:
    return _parse(GreeksRequest, payload)


def parse_implied_volatility_request(payload: Mapping[str, Any]) -> ImpliedVolatilityRequest:
    return _parse(ImpliedVolatilityRequest, payload)


@contextmanager
def _instrumented(operation: str) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    except Exception:
        ANALYTICS_ERRORS.labels(operation=operation).inc()
        LOGGER.exception("%s failed", operation)
        raise
    finally:
        ANALYTICS_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)


def _context(
    request: MarketInputs,
    settings: AnalyticsSettings,
    valuation_time: Optional[datetime],
) -> PricingContext:
    provided = request.model_fields_set
    rate = request.risk_free_rate if "risk_free_rate" in provided else settings.default_risk_free_rate
    volatility = (
        request.implied_volatility
        if "implied_volatility" in provided
        else settings.default_volatility
    )
    return PricingContext(
        underlying_price=request.stock_price,
        risk_free_rate=rate,
        volatility=volatility,
        valuation_time=valuation_time,
    )


def _single_leg(request: SingleOptionRequest) -> OptionLeg:
    return OptionLeg(
        position=PositionSide.LONG,
        option_type=DomainOptionType(request.option_type.value),
        strike=request.strike,
        premium=0.0,
        quantity=1,
        expiration=request.expiration,
    )


def analyze_strategy(
    request: StrategyRequest,
    *,
    valuation_time: Optional[datetime] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> StrategyAnalysisResponse:
    """Summarise a multi-leg strategy and sample its P&L curves."""

    settings = settings or get_settings()
    start = time.perf_counter()
    with _instrumented("strategy"):
        context = _context(request, settings, valuation_time)
        aggregator = StrategyAggregator(
            to_strategy_position(request),
            breakeven_finder=settings.breakeven_finder(),
            extrema_scanner=settings.extrema_scanner(),
            curve_generator=settings.curve_generator(),
        )
        legs = aggregator.leg_valuations(context)
        summary = aggregator.get_strategy_summary(context, legs)
        curve = aggregator.generate_pl_curve(context, request.price_range)

    LOGGER.info(
        "Analysed %d-leg strategy: breakevens=%s net_premium=%.2f",
        summary.leg_count,
        list(summary.breakevens),
        summary.total_premium,
    )
    return StrategyAnalysisResponse(
        summary=from_summary(summary),
        pl_data=from_curve(curve),
        legs=from_leg_valuations(legs),
        leg_count=summary.leg_count,
        net_premium=summary.total_premium,
        computation_time_ms=(time.perf_counter() - start) * 1000.0,
    )


def price_single_option(
    request: SingleOptionRequest,
    *,
    valuation_time: Optional[datetime] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> OptionPricingResponse:
    settings = settings or get_settings()
    with _instrumented("single_option"):
        context = _context(request, settings, valuation_time)
        valuation = BlackScholesModel().calculate_price(_single_leg(request), context)
    if valuation.error is not None:
        raise RuntimeError(f"Option valuation failed: {valuation.error}")
    return from_valuation(valuation)


def calculate_greeks_sensitivity(
    request: GreeksRequest,
    *,
    valuation_time: Optional[datetime] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> GreeksSensitivityResponse:
    settings = settings or get_settings()
    with _instrumented("greeks"):
        context = _context(request, settings, valuation_time)
        leg = _single_leg(request)
        current = BlackScholesModel().calculate_price(leg, context)
        ladder = greeks_sensitivity(
            leg.option_type,
            leg.strike,
            current.time_to_expiry,
            context,
            band=request.band,
            points=request.points,
        )
    return GreeksSensitivityResponse(
        current=from_valuation(current),
        sensitivity=from_greeks_points(ladder),
    )


def solve_implied_volatility(
    request: ImpliedVolatilityRequest,
    *,
    valuation_time: Optional[datetime] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> ImpliedVolatilityResponse:
    settings = settings or get_settings()
    with _instrumented("implied_volatility"):
        tau = time_to_expiry(request.expiration, valuation_time)
        result = settings.implied_volatility_solver().solve(
            request.market_price,
            request.stock_price,
            request.strike,
            tau,
            request.risk_free_rate,
            DomainOptionType(request.option_type.value),
        )

    IV_SOLVER_OUTCOMES.labels(status=result.status.value).inc()
    if result.status is not SolverStatus.CONVERGED:
        LOGGER.warning(
            "Implied volatility did not converge (%s) after %d iterations; residual=%.6g",
            result.status.value,
            result.iterations,
            result.residual,
        )
    return ImpliedVolatilityResponse(
        implied_volatility=result.volatility,
        annualized_percentage=f"{result.volatility * 100:.2f}%",
        status=result.status.value,
        converged=result.converged,
        iterations=result.iterations,
        residual=result.residual,
    )
