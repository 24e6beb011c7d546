# ==============================================
# ANALYSIS
# ==============================================
#
# This package turns an axis selection into chart data and
# summary statistics.
#
#   Step 1 (Classification): (x, y) → AnalysisMode
#   Step 2 (Aggregation):    records → points / rate rows / crosstab
#   Step 3 (Statistics):     chart data → correlation, rates, shares
#   Step 4 (Assembly):       everything → AnalysisResult
#
# Modules:
# --------
# - decision.py           → AnalysisMode, ModeDecision, ComputationFailure
# - classifier.py         → Ordered mode rules
# - aggregation.py        → Per-mode grouping of records
# - statistics_engine.py  → Correlation, regression, means, shares
# - results.py            → Result and stats data classes
# - assembler.py          → analyze()
#
# ==============================================

from .decision import AnalysisMode, ComputationFailure, FailureReason, ModeDecision
from .classifier import Classifier
from .results import (
    AnalysisResult,
    GroupedCell,
    GroupedResult,
    GroupedRow,
    GroupedStats,
    RateBarResult,
    RateBarStats,
    RateRow,
    ScatterPoint,
    ScatterResult,
    ScatterStats,
    TopCell,
)
from .assembler import analyze

__all__ = [
    "AnalysisMode",
    "ComputationFailure",
    "FailureReason",
    "ModeDecision",
    "Classifier",
    "AnalysisResult",
    "GroupedCell",
    "GroupedResult",
    "GroupedRow",
    "GroupedStats",
    "RateBarResult",
    "RateBarStats",
    "RateRow",
    "ScatterPoint",
    "ScatterResult",
    "ScatterStats",
    "TopCell",
    "analyze",
]
