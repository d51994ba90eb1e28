"""Pydantic request schemas forming the validation layer in front of the core."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...core.models import DEFAULT_RISK_FREE_RATE, DEFAULT_VOLATILITY


class OptionType(str, Enum):
    CALL = "call"
    PUT = "put"


class Position(str, Enum):
    LONG = "long"
    SHORT = "short"


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid")


class OptionLegRequest(_Request):
    position: Position
    option_type: OptionType
    strike: float = Field(..., gt=0, le=1e9)
    premium: float = Field(..., ge=0, le=1e9)
    quantity: int = Field(1, ge=1, le=1_000_000)
    expiration: date


class MarketInputs(_Request):
    stock_price: float = Field(..., gt=0, le=1e9)
    risk_free_rate: float = Field(DEFAULT_RISK_FREE_RATE, ge=-1.0, le=1.0)
    implied_volatility: float = Field(DEFAULT_VOLATILITY, gt=0, le=5.0)


class StrategyRequest(MarketInputs):
    legs: List[OptionLegRequest] = Field(..., min_length=1)
    price_range: Optional[float] = Field(None, gt=0, le=1e9)


class SingleOptionRequest(MarketInputs):
    option_type: OptionType
    strike: float = Field(..., gt=0, le=1e9)
    expiration: date


class GreeksRequest(SingleOptionRequest):
    band: float = Field(0.2, gt=0, lt=1.0)
    points: int = Field(21, ge=2, le=1_000)


class ImpliedVolatilityRequest(_Request):
    market_price: float = Field(..., gt=0, le=1e9)
    stock_price: float = Field(..., gt=0, le=1e9)
    strike: float = Field(..., gt=0, le=1e9)
    expiration: date
    option_type: OptionType
    risk_free_rate: float = Field(DEFAULT_RISK_FREE_RATE, ge=-1.0, le=1.0)
