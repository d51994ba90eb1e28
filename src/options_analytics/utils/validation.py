"""Validation helpers for strategy and pricing inputs."""

from __future__ import annotations

import math
from typing import Any, Final, List, Optional

MAX_VOLATILITY: Final[float] = 5.0
MAX_QUANTITY: Final[int] = 1_000_000


class InvalidInputError(ValueError):
    """Raised when an input violates the domain invariants."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.errors: List[Any] = list(errors or [])


def _require_finite(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be a number") from exc
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite")
    return number


def require_positive(name: str, value: float) -> float:
    number = _require_finite(name, value)
    if number <= 0.0:
        raise InvalidInputError(f"{name} must be strictly positive")
    return number


def require_non_negative(name: str, value: float) -> float:
    number = _require_finite(name, value)
    if number < 0.0:
        raise InvalidInputError(f"{name} must be non-negative")
    return number


def validate_quantity(quantity: int) -> int:
    """Return ``quantity`` if it is an integer in ``[1, MAX_QUANTITY]``."""

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidInputError("quantity must be an integer")
    if quantity < 1:
        raise InvalidInputError("quantity must be >= 1")
    if quantity > MAX_QUANTITY:
        raise InvalidInputError(f"quantity must be <= {MAX_QUANTITY}")
    return quantity


def validate_pricing_inputs(underlying_price: float, risk_free_rate: float, volatility: float) -> None:
    """Validate the numeric part of a pricing context."""

    require_positive("underlying_price", underlying_price)
    rate = _require_finite("risk_free_rate", risk_free_rate)
    if not -1.0 <= rate <= 1.0:
        raise InvalidInputError("risk_free_rate must be within [-1, 1]")
    vol = require_positive("volatility", volatility)
    if vol > MAX_VOLATILITY:
        raise InvalidInputError("volatility is outside the supported range")
