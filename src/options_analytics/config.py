"""Centralised analytics configuration derived from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from .core.breakevens import BREAKEVEN_GRID_STEP, BREAKEVEN_TOLERANCE, BreakevenConfig, BreakevenFinder
from .core.curves import CURVE_POINTS, CURVE_RANGE_FRACTION, CurveGenerator
from .core.extrema import EXTREMA_GRID_STEP, ExtremaConfig, ExtremaScanner
from .core.implied_volatility import IV_MAX_ITERATIONS, IV_TOLERANCE, ImpliedVolatilitySolver
from .core.models import DEFAULT_RISK_FREE_RATE, DEFAULT_VOLATILITY

ENV_PREFIX = "OSA_"
DEFAULT_MAX_LEGS = 16


def _get_env(name: str, *, default: str | None = None) -> str | None:
    """Return a trimmed environment variable value, or ``default`` when unset or blank."""

    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    trimmed = value.strip()
    return trimmed or default


def _as_int(name: str, *, default: int, minimum: int | None = None) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {ENV_PREFIX}{name} must be an integer") from exc
    if minimum is not None and value < minimum:
        raise RuntimeError(f"Environment variable {ENV_PREFIX}{name} must be >= {minimum}")
    return value


def _as_float(
    name: str,
    *,
    default: float,
    minimum: float | None = None,
    exclusive: bool = False,
) -> float:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {ENV_PREFIX}{name} must be a number") from exc
    if minimum is not None and (value <= minimum if exclusive else value < minimum):
        comparator = ">" if exclusive else ">="
        raise RuntimeError(
            f"Environment variable {ENV_PREFIX}{name} must be {comparator} {minimum}"
        )
    return value


@dataclass(frozen=True, slots=True)
class AnalyticsSettings:
    """Immutable view over analytics configuration."""

    default_risk_free_rate: float = DEFAULT_RISK_FREE_RATE
    default_volatility: float = DEFAULT_VOLATILITY
    breakeven_grid_step: float = BREAKEVEN_GRID_STEP
    breakeven_tolerance: float = BREAKEVEN_TOLERANCE
    extrema_grid_step: float = EXTREMA_GRID_STEP
    curve_points: int = CURVE_POINTS
    curve_range_fraction: float = CURVE_RANGE_FRACTION
    iv_tolerance: float = IV_TOLERANCE
    iv_max_iterations: int = IV_MAX_ITERATIONS
    max_legs: int = DEFAULT_MAX_LEGS

    @classmethod
    def from_env(cls) -> "AnalyticsSettings":
        return cls(
            default_risk_free_rate=_as_float("DEFAULT_RISK_FREE_RATE", default=DEFAULT_RISK_FREE_RATE),
            default_volatility=_as_float(
                "DEFAULT_VOLATILITY", default=DEFAULT_VOLATILITY, minimum=0.0, exclusive=True
            ),
            breakeven_grid_step=_as_float(
                "BREAKEVEN_GRID_STEP", default=BREAKEVEN_GRID_STEP, minimum=0.0, exclusive=True
            ),
            breakeven_tolerance=_as_float(
                "BREAKEVEN_TOLERANCE", default=BREAKEVEN_TOLERANCE, minimum=0.0, exclusive=True
            ),
            extrema_grid_step=_as_float(
                "EXTREMA_GRID_STEP", default=EXTREMA_GRID_STEP, minimum=0.0, exclusive=True
            ),
            curve_points=_as_int("CURVE_POINTS", default=CURVE_POINTS, minimum=2),
            curve_range_fraction=_as_float(
                "CURVE_RANGE_FRACTION", default=CURVE_RANGE_FRACTION, minimum=0.0, exclusive=True
            ),
            iv_tolerance=_as_float("IV_TOLERANCE", default=IV_TOLERANCE, minimum=0.0, exclusive=True),
            iv_max_iterations=_as_int("IV_MAX_ITERATIONS", default=IV_MAX_ITERATIONS, minimum=1),
            max_legs=_as_int("MAX_LEGS", default=DEFAULT_MAX_LEGS, minimum=1),
        )

    def breakeven_finder(self) -> BreakevenFinder:
        return BreakevenFinder(
            BreakevenConfig(grid_step=self.breakeven_grid_step, tolerance=self.breakeven_tolerance)
        )

    def extrema_scanner(self) -> ExtremaScanner:
        return ExtremaScanner(ExtremaConfig(grid_step=self.extrema_grid_step))

    def curve_generator(self) -> CurveGenerator:
        return CurveGenerator(points=self.curve_points, range_fraction=self.curve_range_fraction)

    def implied_volatility_solver(self) -> ImpliedVolatilitySolver:
        return ImpliedVolatilitySolver(
            tolerance=self.iv_tolerance, max_iterations=self.iv_max_iterations
        )


@lru_cache(maxsize=1)
def get_settings() -> AnalyticsSettings:
    return AnalyticsSettings.from_env()
