"""Prometheus metrics used across the analytics engine."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


ANALYTICS_LATENCY = Histogram(
    "osa_analytics_latency_seconds",
    "Time spent serving analytics requests",
    labelnames=("operation",),
    buckets=(
        0.0005,
        0.001,
        0.005,
        0.01,
        0.025,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
    ),
)

ANALYTICS_ERRORS = Counter(
    "osa_analytics_errors_total",
    "Number of analytics requests that failed",
    labelnames=("operation",),
)

IV_SOLVER_OUTCOMES = Counter(
    "osa_iv_solver_outcomes_total",
    "Implied volatility solver results by outcome",
    labelnames=("status",),
)
