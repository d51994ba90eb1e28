"""Response schemas returned by the service layer."""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel

Unbounded = Literal["unbounded"]
BoundedValue = Optional[Union[float, Unbounded]]


class GreeksResponse(BaseModel):
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float


class StrategySummaryResponse(BaseModel):
    breakevens: List[float]
    max_profit: BoundedValue = None
    max_loss: BoundedValue = None
    current_pl: float
    total_premium: float
    risk_reward_ratio: BoundedValue = None
    probability_of_profit: Optional[float] = None
    greeks: GreeksResponse


class PLPointResponse(BaseModel):
    stock_price: float
    pl: float


class PLCurveResponse(BaseModel):
    at_expiration: List[PLPointResponse]
    current: List[PLPointResponse]


class LegResultResponse(BaseModel):
    leg: int
    position: str
    option_type: str
    strike: float
    premium: float
    quantity: int
    theoretical_price: float
    time_to_expiry: float
    cost_basis: float
    current_value: float
    unrealized_pl: float
    unrealized_pl_percent: float
    greeks: GreeksResponse


class StrategyAnalysisResponse(BaseModel):
    summary: StrategySummaryResponse
    pl_data: PLCurveResponse
    legs: List[LegResultResponse]
    leg_count: int
    net_premium: float
    computation_time_ms: float


class OptionPricingResponse(BaseModel):
    price: float
    greeks: GreeksResponse
    time_to_expiration: float
    intrinsic_value: float
    time_value: float


class GreeksPointResponse(BaseModel):
    stock_price: float
    price: float
    greeks: GreeksResponse


class GreeksSensitivityResponse(BaseModel):
    current: OptionPricingResponse
    sensitivity: List[GreeksPointResponse]


class ImpliedVolatilityResponse(BaseModel):
    implied_volatility: float
    annualized_percentage: str
    status: str
    converged: bool
    iterations: int
    residual: float
