"""Utility helpers exposed by :mod:`options_analytics`."""

from .validation import (
    InvalidInputError,
    require_non_negative,
    require_positive,
    validate_pricing_inputs,
    validate_quantity,
)

__all__ = [
    "InvalidInputError",
    "require_non_negative",
    "require_positive",
    "validate_pricing_inputs",
    "validate_quantity",
]
