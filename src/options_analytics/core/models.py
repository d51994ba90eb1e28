"""Domain models for the options strategy analytics engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, date, datetime, time as dt_time
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple

import pandas as pd

from ..utils.validation import (
    InvalidInputError,
    require_non_negative,
    require_positive,
    validate_pricing_inputs,
    validate_quantity,
)

DAYS_PER_YEAR = 365.0
SECONDS_PER_DAY = 86_400.0
LOT_MULTIPLIER = 100
DEFAULT_RISK_FREE_RATE = 0.05
DEFAULT_VOLATILITY = 0.25


class OptionType(str, Enum):
    """Supported option contract types."""

    CALL = "call"
    PUT = "put"


class PositionSide(str, Enum):
    """Direction of an option leg."""

    LONG = "long"
    SHORT = "short"

    @property
    def sign(self) -> int:
        return 1 if self is PositionSide.LONG else -1


class SolverStatus(str, Enum):
    """Outcome of an implied volatility search."""

    CONVERGED = "converged"
    BEST_EFFORT = "best_effort"
    DEGENERATE = "degenerate"


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def time_to_expiry(expiration: date, now: Optional[datetime] = None) -> float:
    """Return the year fraction (365-day year) between ``now`` and ``expiration``.

    Plain dates expire at midnight UTC. The result is floored at zero.
    """

    if isinstance(expiration, datetime):
        expiry = _as_utc(expiration)
    else:
        expiry = datetime.combine(expiration, dt_time.min, tzinfo=UTC)
    current = _as_utc(now) if now is not None else datetime.now(UTC)
    days = (expiry - current).total_seconds() / SECONDS_PER_DAY
    return max(0.0, days / DAYS_PER_YEAR)


@dataclass(frozen=True, slots=True)
class OptionLeg:
    """One option position inside a strategy."""

    position: PositionSide
    option_type: OptionType
    strike: float
    premium: float
    quantity: int
    expiration: date

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "position", PositionSide(self.position))
            object.__setattr__(self, "option_type", OptionType(self.option_type))
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc
        object.__setattr__(self, "strike", require_positive("strike", self.strike))
        object.__setattr__(self, "premium", require_non_negative("premium", self.premium))
        validate_quantity(self.quantity)
        if not isinstance(self.expiration, date):
            raise InvalidInputError("expiration must be a date")

    @property
    def sign(self) -> int:
        return self.position.sign

    @property
    def contracts(self) -> int:
        """Signed share count represented by the leg."""
        return self.sign * self.quantity * LOT_MULTIPLIER

    def time_to_expiry(self, now: Optional[datetime] = None) -> float:
        return time_to_expiry(self.expiration, now)


@dataclass(frozen=True, slots=True)
class StrategyPosition:
    """Immutable, ordered collection of option legs analysed together."""

    legs: Tuple[OptionLeg, ...] = ()

    def __post_init__(self) -> None:
        legs = tuple(self.legs)
        for leg in legs:
            if not isinstance(leg, OptionLeg):
                raise InvalidInputError("strategy legs must be OptionLeg instances")
        object.__setattr__(self, "legs", legs)

    @classmethod
    def from_legs(cls, legs: Iterable[OptionLeg]) -> "StrategyPosition":
        return cls(tuple(legs))

    def __len__(self) -> int:
        return len(self.legs)

    def __iter__(self) -> Iterator[OptionLeg]:
        return iter(self.legs)

    @property
    def is_empty(self) -> bool:
        return not self.legs

    @property
    def strikes(self) -> Tuple[float, ...]:
        return tuple(leg.strike for leg in self.legs)

    @property
    def min_strike(self) -> float:
        if self.is_empty:
            raise ValueError("an empty strategy has no strikes")
        return min(self.strikes)

    @property
    def max_strike(self) -> float:
        if self.is_empty:
            raise ValueError("an empty strategy has no strikes")
        return max(self.strikes)


@dataclass(frozen=True, slots=True)
class PricingContext:
    """Market inputs shared by every leg of one calculation."""

    underlying_price: float
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE
    volatility: float = DEFAULT_VOLATILITY
    valuation_time: Optional[datetime] = None

    def __post_init__(self) -> None:
        validate_pricing_inputs(self.underlying_price, self.risk_free_rate, self.volatility)
        if self.valuation_time is None:
            object.__setattr__(self, "valuation_time", datetime.now(UTC))
        else:
            object.__setattr__(self, "valuation_time", _as_utc(self.valuation_time))


@dataclass(frozen=True, slots=True)
class GreeksVector:
    """Option sensitivities; theta per day, vega and rho per one point."""

    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0
    rho: float = 0.0

    @classmethod
    def zero(cls) -> "GreeksVector":
        return cls()

    def __add__(self, other: "GreeksVector") -> "GreeksVector":
        if not isinstance(other, GreeksVector):
            return NotImplemented
        return GreeksVector(
            delta=self.delta + other.delta,
            gamma=self.gamma + other.gamma,
            theta=self.theta + other.theta,
            vega=self.vega + other.vega,
            rho=self.rho + other.rho,
        )

    def scale(self, factor: float) -> "GreeksVector":
        return GreeksVector(
            delta=self.delta * factor,
            gamma=self.gamma * factor,
            theta=self.theta * factor,
            vega=self.vega * factor,
            rho=self.rho * factor,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "delta": self.delta,
            "gamma": self.gamma,
            "theta": self.theta,
            "vega": self.vega,
            "rho": self.rho,
        }


@dataclass(slots=True)
class OptionValuation:
    """Container for the outcome of a single option evaluation."""

    option_type: OptionType
    strike: float
    theoretical_price: float
    intrinsic_value: float
    time_value: float
    time_to_expiry: float
    greeks: GreeksVector
    volatility: float
    computation_time_ms: float = 0.0
    model_used: str = "black_scholes"
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LegValuation:
    """Mark-to-model view of one leg, scaled to the position."""

    leg: OptionLeg
    valuation: OptionValuation
    position_greeks: GreeksVector
    cost_basis: float
    current_value: float

    @property
    def unrealized_pl(self) -> float:
        return self.current_value - self.cost_basis

    @property
    def unrealized_pl_percent(self) -> float:
        if self.cost_basis == 0:
            return 0.0
        return self.unrealized_pl / abs(self.cost_basis) * 100.0


@dataclass(frozen=True, slots=True)
class ImpliedVolatilityResult:
    """Tagged outcome of the Newton-Raphson volatility search."""

    volatility: float
    status: SolverStatus
    iterations: int
    residual: float

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED


@dataclass(frozen=True, slots=True)
class ExtremaResult:
    """Maximum profit and loss at expiration.

    ``math.inf`` / ``-math.inf`` mark unbounded wings; ``None`` means the
    strategy had no legs.
    """

    max_profit: Optional[float] = None
    max_loss: Optional[float] = None
    max_profit_price: Optional[float] = None
    max_loss_price: Optional[float] = None

    @property
    def profit_unbounded(self) -> bool:
        return self.max_profit is not None and math.isinf(self.max_profit)

    @property
    def loss_unbounded(self) -> bool:
        return self.max_loss is not None and math.isinf(self.max_loss)


@dataclass(frozen=True, slots=True)
class PLCurve:
    """Index-aligned P&L series over a range of underlying prices."""

    prices: Tuple[float, ...]
    at_expiration: Tuple[float, ...]
    current: Tuple[float, ...]

    def __post_init__(self) -> None:
        if not len(self.prices) == len(self.at_expiration) == len(self.current):
            raise ValueError("P&L series must be index-aligned")

    def __len__(self) -> int:
        return len(self.prices)

    def points(self) -> Iterator[Tuple[float, float, float]]:
        return zip(self.prices, self.at_expiration, self.current)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "stock_price": self.prices,
                "pl_at_expiration": self.at_expiration,
                "pl_current": self.current,
            }
        )


@dataclass(frozen=True, slots=True)
class GreeksPoint:
    """Price and Greeks of one option at a given underlying price."""

    stock_price: float
    price: float
    greeks: GreeksVector


@dataclass(frozen=True, slots=True)
class StrategySummary:
    """Aggregate analytics of a strategy at a given pricing context."""

    breakevens: Tuple[float, ...]
    max_profit: Optional[float]
    max_loss: Optional[float]
    current_pl: float
    total_premium: float
    risk_reward_ratio: Optional[float]
    probability_of_profit: Optional[float]
    greeks: GreeksVector
    leg_count: int

    @property
    def is_net_debit(self) -> bool:
        return self.total_premium < 0

    @property
    def is_net_credit(self) -> bool:
        return self.total_premium > 0
