# ==============================================
# Assembler — analyze()
# ==============================================
#
# PURPOSE:
#   The single entry point of the analytics pipeline:
#
#     Classifier → Aggregation → Statistics Engine → Result
#
#   analyze() is pure: the same records and selection always give
#   an equal result, and the records are never modified.
#
# FUNCTION:
# ---------
# - analyze(records, x_field, y_field, show_percentages=False,
#           classifier=None) -> AnalysisResult
#
#   Returns ScatterResult, RateBarResult or GroupedResult depending on
#   the mode. Empty aggregations still return a well-formed result
#   with zero counts.
#
# ==============================================

import logging
from typing import Any, Mapping, Optional, Sequence

from survey_explorer import fields
from .aggregation import aggregate_grouped, aggregate_rates, aggregate_scatter
from .classifier import Classifier
from .decision import AnalysisMode, ModeDecision
from .results import AnalysisResult, GroupedResult, RateBarResult, ScatterResult
from .statistics_engine import grouped_stats, rate_bar_stats, regression_endpoints, scatter_stats


logger = logging.getLogger(__name__)


def _assemble_scatter(records, decision: ModeDecision, show_percentages: bool) -> ScatterResult:
    points = aggregate_scatter(records, decision.x_field, decision.y_field)
    stats = scatter_stats(points)
    endpoints = regression_endpoints([p.x for p in points], stats.slope, stats.intercept)
    return ScatterResult(
        decision=decision,
        show_percentages=show_percentages,
        points=tuple(points),
        regression_endpoints=endpoints,
        stats=stats,
    )


def _assemble_rate_bar(records, decision: ModeDecision, show_percentages: bool) -> RateBarResult:
    rows = aggregate_rates(records, decision.grouping_field, fields.POLITICAL_KNOWLEDGE)
    return RateBarResult(
        decision=decision,
        show_percentages=show_percentages,
        rows=tuple(rows),
        stats=rate_bar_stats(rows),
    )


def _assemble_grouped(records, decision: ModeDecision, show_percentages: bool) -> GroupedResult:
    table = aggregate_grouped(records, decision.x_field, decision.y_field)
    return GroupedResult(
        decision=decision,
        show_percentages=show_percentages,
        rows=table.rows,
        series_keys=table.series_keys,
        stats=grouped_stats(table),
    )


_ASSEMBLERS = {
    AnalysisMode.SCATTER: _assemble_scatter,
    AnalysisMode.RATE_BAR: _assemble_rate_bar,
    AnalysisMode.GROUPED: _assemble_grouped,
}


def analyze(
    records: Sequence[Mapping[str, Any]],
    x_field: str,
    y_field: str,
    show_percentages: bool = False,
    classifier: Optional[Classifier] = None,
) -> AnalysisResult:
    """
    Run the full pipeline for one axis selection.

    Args:
        records: Survey records (SurveyRecord or plain dicts keyed by field id)
        x_field: Field identifier on the x axis
        y_field: Field identifier on the y axis
        show_percentages: Display selector only; both counts and
                          percentages are always computed
        classifier: Optional Classifier instance

    Returns:
        ScatterResult, RateBarResult or GroupedResult

    Raises:
        InvalidSelectionError: If either field is not a column option
    """
    decision = (classifier or Classifier()).classify(x_field, y_field)
    result = _ASSEMBLERS[decision.mode](records, decision, bool(show_percentages))
    logger.debug("Analyzed %s × %s as %s", x_field, y_field, decision.mode.value)
    return result
