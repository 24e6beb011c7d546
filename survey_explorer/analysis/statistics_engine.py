# ==============================================
# Statistics Engine
# ==============================================
#
# PURPOSE:
#   Turn aggregated chart data into the summary numbers shown next
#   to each chart. Undefined statistics come back as None plus a
#   ComputationFailure; NaN and Infinity never leave this module.
#
# FUNCTIONS:
# ----------
#   Building blocks:
#   - mean(values) -> float | None
#   - std_dev(values) -> float | None          (population, two-pass)
#   - correlation(xs, ys) -> (r | None, failure | None)
#   - linear_regression(xs, ys) -> (slope, intercept, failure)
#   - regression_endpoints(xs, slope, intercept) -> tuple[ScatterPoint, ...]
#
#   Per mode:
#   - scatter_stats(points) -> ScatterStats
#   - rate_bar_stats(rows) -> RateBarStats
#   - grouped_stats(table) -> GroupedStats
#
# ==============================================

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .aggregation import GroupedTable
from .decision import ComputationFailure, FailureReason
from .results import GroupedStats, RateBarStats, RateRow, ScatterPoint, ScatterStats


logger = logging.getLogger(__name__)


_EMPTY_SAMPLE = ComputationFailure(
    FailureReason.EMPTY_SAMPLE,
    "No records have usable values for both fields.",
)
_ZERO_X_VARIANCE = ComputationFailure(
    FailureReason.ZERO_X_VARIANCE,
    "Insufficient variance: every x value is identical.",
)
_ZERO_Y_VARIANCE = ComputationFailure(
    FailureReason.ZERO_Y_VARIANCE,
    "Insufficient variance: every y value is identical.",
)
_EMPTY_GROUP = ComputationFailure(
    FailureReason.EMPTY_GROUP,
    "No categories have any responses.",
)


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _has_no_spread(values: np.ndarray) -> bool:
    # Exact check; a computed sum of squares can be a tiny non-zero
    return bool(values.max() == values.min())


# ======================================
# Building blocks
# ======================================
def mean(values: Sequence[float]) -> Optional[float]:
    if len(values) == 0:
        return None
    return float(np.mean(_as_array(values)))


def std_dev(values: Sequence[float]) -> Optional[float]:
    """Population standard deviation: mean first, then squared deviations."""
    if len(values) == 0:
        return None
    data = _as_array(values)
    deviations = data - data.mean()
    return float(np.sqrt(np.dot(deviations, deviations) / data.size))


def correlation(
    xs: Sequence[float],
    ys: Sequence[float],
) -> Tuple[Optional[float], Optional[ComputationFailure]]:
    """
    Pearson product-moment correlation.

    r = Σ(x-x̄)(y-ȳ) / sqrt(Σ(x-x̄)² · Σ(y-ȳ)²)

    Args:
        xs: x values
        ys: y values, same length as xs

    Returns:
        (r, None) on success, (None, failure) when either axis is empty
        or constant
    """
    if len(xs) != len(ys):
        raise ValueError(f"Length mismatch: {len(xs)} x values, {len(ys)} y values")
    if len(xs) == 0:
        return None, _EMPTY_SAMPLE

    x = _as_array(xs)
    y = _as_array(ys)
    if _has_no_spread(x):
        return None, _ZERO_X_VARIANCE
    if _has_no_spread(y):
        return None, _ZERO_Y_VARIANCE

    dx = x - x.mean()
    dy = y - y.mean()
    r = float(np.dot(dx, dy) / np.sqrt(np.dot(dx, dx) * np.dot(dy, dy)))
    return float(np.clip(r, -1.0, 1.0)), None


def linear_regression(
    xs: Sequence[float],
    ys: Sequence[float],
) -> Tuple[Optional[float], Optional[float], Optional[ComputationFailure]]:
    """
    Ordinary least squares fit of y on x.

    slope = Σ(x-x̄)(y-ȳ) / Σ(x-x̄)², intercept = ȳ - slope·x̄

    Returns:
        (slope, intercept, None), or (None, None, failure) when the x
        values are empty or all identical
    """
    if len(xs) != len(ys):
        raise ValueError(f"Length mismatch: {len(xs)} x values, {len(ys)} y values")
    if len(xs) == 0:
        return None, None, _EMPTY_SAMPLE

    x = _as_array(xs)
    y = _as_array(ys)
    if _has_no_spread(x):
        return None, None, _ZERO_X_VARIANCE

    x_mean = x.mean()
    y_mean = y.mean()
    dx = x - x_mean
    slope = float(np.dot(dx, y - y_mean) / np.dot(dx, dx))
    intercept = float(y_mean - slope * x_mean)
    return slope, intercept, None


def regression_endpoints(
    xs: Sequence[float],
    slope: Optional[float],
    intercept: Optional[float],
) -> Tuple[ScatterPoint, ...]:
    """The fitted line at min(xs) and max(xs); empty when there is no fit."""
    if slope is None or intercept is None or len(xs) == 0:
        return ()
    low = min(xs)
    high = max(xs)
    return (
        ScatterPoint(x=low, y=slope * low + intercept),
        ScatterPoint(x=high, y=slope * high + intercept),
    )


# ======================================
# Per-mode statistics
# ======================================
def scatter_stats(points: Sequence[ScatterPoint]) -> ScatterStats:
    """
    Summarize a scatter plot.

    A constant x axis leaves correlation and the regression undefined;
    a constant y axis leaves only correlation undefined (the fit is the
    flat line y = ȳ).
    """
    if not points:
        return ScatterStats(count=0, failure=_EMPTY_SAMPLE)

    xs: List[float] = [p.x for p in points]
    ys: List[float] = [p.y for p in points]

    r, r_failure = correlation(xs, ys)
    slope, intercept, fit_failure = linear_regression(xs, ys)
    failure = fit_failure or r_failure
    if failure is not None:
        logger.warning("Scatter statistics incomplete for %d points: %s", len(points), failure.message)

    return ScatterStats(
        count=len(points),
        correlation=r,
        r_squared=r * r if r is not None else None,
        slope=slope,
        intercept=intercept,
        x_mean=mean(xs),
        y_mean=mean(ys),
        x_std_dev=std_dev(xs),
        y_std_dev=std_dev(ys),
        failure=failure,
    )


def rate_bar_stats(rows: Sequence[RateRow]) -> RateBarStats:
    """
    Summarize knowledge-rate rows (already sorted, highest first).

    Returns:
        RateBarStats; rates are None with an EMPTY_GROUP failure when
        there are no rows or no responses
    """
    total_responses = sum(row.total for row in rows)
    if not rows or total_responses == 0:
        return RateBarStats(count=total_responses, categories=len(rows), failure=_EMPTY_GROUP)

    total_correct = sum(row.correct for row in rows)
    top = rows[0]
    return RateBarStats(
        count=total_responses,
        categories=len(rows),
        average=mean([row.percentage for row in rows]),
        overall_rate=total_correct / total_responses * 100,
        highest_category=top.name,
        highest_rate=top.percentage,
    )


def grouped_stats(table: GroupedTable) -> GroupedStats:
    """
    Summarize a grouped cross-tabulation.

    average_percentage only counts cells with at least one response;
    the zero cells still appear in the chart rows.
    """
    shares = [cell.percentage for row in table.rows for cell in row.cells if cell.count > 0]
    return GroupedStats(
        count=table.record_count,
        x_categories=len(table.rows),
        y_categories=len(table.series_keys),
        average_percentage=mean(shares) if shares else 0.0,
        top_count=table.top_count,
        top_percentage=table.top_percentage,
    )
