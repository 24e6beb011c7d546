# ==============================================
# Aggregation
# ==============================================
#
# PURPOSE:
#   Walk the survey records once per selection and turn them into
#   chart data: scatter points, knowledge-rate rows or a grouped
#   cross-tabulation. Values are normalized per record; records with
#   an excluded value on either selected field are dropped silently.
#
# FUNCTIONS:
# ----------
#   - aggregate_scatter(records, x_field, y_field) -> list[ScatterPoint]
#       Both values numeric and strictly positive; input order kept.
#
#   - aggregate_rates(records, grouping_field, flag_field) -> list[RateRow]
#       One row per category, sorted by percentage descending.
#       Ties keep first-encounter order (sorted() is stable).
#       Records with a missing or unparseable flag are dropped.
#
#   - aggregate_grouped(records, x_field, y_field) -> GroupedTable
#       Rows per x-category in first-seen order, one cell per series
#       key, plus the max-count / max-percentage cells.
#
#   Internal helpers:
#   -----------------
#   - _accumulate_rates / _accumulate_crosstab
#       First pass: per-category counters, in first-seen order.
#
# ==============================================

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from survey_explorer.normalization import category_for, knowledge_flag, numeric_for
from .results import GroupedCell, GroupedRow, RateRow, ScatterPoint, TopCell


logger = logging.getLogger(__name__)


def _value(record: Mapping[str, Any], field_id: str) -> Any:
    return record.get(field_id)


def percentage_share(part: int, whole: int) -> float:
    """100 * part / whole, or 0.0 for an empty whole."""
    if whole <= 0:
        return 0.0
    return part / whole * 100


@dataclass
class _RateCounter:
    total: int = 0
    correct: int = 0


@dataclass
class _CrosstabGroup:
    counts: Dict[str, int] = field(default_factory=dict)
    total: int = 0


@dataclass(frozen=True)
class GroupedTable:
    """Output of aggregate_grouped, before statistics are computed."""
    rows: Tuple[GroupedRow, ...]
    series_keys: Tuple[str, ...]
    top_count: TopCell
    top_percentage: TopCell

    @property
    def record_count(self) -> int:
        return sum(row.total for row in self.rows)


# ======================================
# Scatter
# ======================================
def aggregate_scatter(records: Iterable[Mapping[str, Any]], x_field: str, y_field: str) -> List[ScatterPoint]:
    """
    Build scatter points from two numeric fields.

    Args:
        records: Survey records, in dataset order
        x_field: Numeric field on the x axis
        y_field: Numeric field on the y axis

    Returns:
        Points for every record whose two values are both > 0
    """
    points: List[ScatterPoint] = []
    seen = 0

    for record in records:
        seen += 1
        x = numeric_for(x_field, _value(record, x_field))
        y = numeric_for(y_field, _value(record, y_field))
        if x is None or y is None or x <= 0 or y <= 0:
            continue
        points.append(ScatterPoint(x=float(x), y=float(y)))

    logger.debug("Scatter %s × %s: kept %d of %d records", x_field, y_field, len(points), seen)
    return points


# ======================================
# Knowledge rates
# ======================================
def _accumulate_rates(
    records: Iterable[Mapping[str, Any]],
    grouping_field: str,
    flag_field: str,
) -> Dict[str, _RateCounter]:
    groups: Dict[str, _RateCounter] = {}

    for record in records:
        key = category_for(grouping_field, _value(record, grouping_field))
        if not key:
            continue

        flag = knowledge_flag(_value(record, flag_field))
        if flag is None:
            continue

        counter = groups.setdefault(key, _RateCounter())
        counter.total += 1
        if flag:
            counter.correct += 1

    return groups


def aggregate_rates(
    records: Iterable[Mapping[str, Any]],
    grouping_field: str,
    flag_field: str,
) -> List[RateRow]:
    """
    Compute the share of correct answers per category.

    Args:
        records: Survey records, in dataset order
        grouping_field: Field whose categories become rows
        flag_field: Boolean correctness field

    Returns:
        RateRows sorted by percentage, highest first
    """
    groups = _accumulate_rates(records, grouping_field, flag_field)

    rows = [
        RateRow(
            name=name,
            total=counter.total,
            correct=counter.correct,
            percentage=percentage_share(counter.correct, counter.total),
        )
        for name, counter in groups.items()
    ]
    rows = sorted(rows, key=lambda row: row.percentage, reverse=True)

    logger.debug("Rates by %s: %d categories, %d records",
                 grouping_field, len(rows), sum(row.total for row in rows))
    return rows


# ======================================
# Grouped cross-tabulation
# ======================================
def _accumulate_crosstab(
    records: Iterable[Mapping[str, Any]],
    x_field: str,
    y_field: str,
) -> Tuple[Dict[str, _CrosstabGroup], List[str]]:
    groups: Dict[str, _CrosstabGroup] = {}
    series_keys: List[str] = []
    seen_keys = set()

    for record in records:
        x_key = category_for(x_field, _value(record, x_field))
        y_key = category_for(y_field, _value(record, y_field))
        if not x_key or not y_key:
            continue

        group = groups.setdefault(x_key, _CrosstabGroup())
        group.counts[y_key] = group.counts.get(y_key, 0) + 1
        group.total += 1

        if y_key not in seen_keys:
            seen_keys.add(y_key)
            series_keys.append(y_key)

    return groups, series_keys


def aggregate_grouped(records: Iterable[Mapping[str, Any]], x_field: str, y_field: str) -> GroupedTable:
    """
    Cross-tabulate y-categories within each x-category.

    Both maxima are replaced only on a strictly greater value, so the
    earliest maximal cell (row order, then series order) wins.

    Args:
        records: Survey records, in dataset order
        x_field: Field whose categories become rows
        y_field: Field whose categories become bar series

    Returns:
        A GroupedTable with rows, series keys and the top cells
    """
    groups, series_keys = _accumulate_crosstab(records, x_field, y_field)

    rows: List[GroupedRow] = []
    top_count = TopCell()
    top_percentage = TopCell()

    for name, group in groups.items():
        cells = []
        for key in series_keys:
            count = group.counts.get(key, 0)
            share = percentage_share(count, group.total)
            cells.append(GroupedCell(series_key=key, count=count, percentage=share))

            if count > top_count.value:
                top_count = TopCell(value=count, category=name, subcategory=key)
            if share > top_percentage.value:
                top_percentage = TopCell(value=share, category=name, subcategory=key)

        rows.append(GroupedRow(name=name, total=group.total, cells=tuple(cells)))

    logger.debug("Grouped %s × %s: %d rows, %d series", x_field, y_field, len(rows), len(series_keys))
    return GroupedTable(
        rows=tuple(rows),
        series_keys=tuple(series_keys),
        top_count=top_count,
        top_percentage=top_percentage,
    )
