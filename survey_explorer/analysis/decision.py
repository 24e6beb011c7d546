# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of mode classification
#   and the tagged failures the statistics step can report.
#
# ENUMS:
# ------
# - AnalysisMode(Enum): SCATTER, RATE_BAR, GROUPED
#     Which chart/statistics shape a field pair produces.
#
# - FailureReason(Enum): EMPTY_SAMPLE, ZERO_X_VARIANCE,
#                        ZERO_Y_VARIANCE, EMPTY_GROUP
#
# CLASSES:
# --------
# - ModeDecision (dataclass)
#     The classifier's verdict for one (x, y) selection.
#
#     Attributes:
#     -----------
#     - mode: AnalysisMode
#     - x_field / y_field: str       → The validated selection
#     - rule: str                    → Name of the rule that matched
#     - grouping_field: str | None   → RateBar only: the non-boolean field
#     - reason: str                  → Human-readable explanation
#
# - ComputationFailure (dataclass)
#     A statistic that could not be computed, with its reason.
#     Stored on the stats record instead of a NaN / Infinity value.
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Dict, Any


class AnalysisMode(Enum):
    """
    Enumeration of analysis shapes.

    - SCATTER: numeric × numeric → points, regression line, correlation
    - RATE_BAR: field × knowledge flag → % correct per category
    - GROUPED: categorical × categorical → cross-tabulated grouped bars
    """
    SCATTER = "Scatter"
    RATE_BAR = "RateBar"
    GROUPED = "Grouped"


class FailureReason(Enum):
    EMPTY_SAMPLE = "empty_sample"
    ZERO_X_VARIANCE = "zero_x_variance"
    ZERO_Y_VARIANCE = "zero_y_variance"
    EMPTY_GROUP = "empty_group"


@dataclass(frozen=True)
class ModeDecision:
    """
    Represents the classification decision for one axis selection.

    This is what the Classifier produces and what the assembler uses
    to pick an aggregation path.
    """

    x_field: str
    y_field: str
    mode: AnalysisMode
    rule: str  # "numeric_pair", "boolean_pair" or "categorical_pair"

    # --- RateBar only ---
    grouping_field: Optional[str] = None  # The field whose categories become bars

    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x_field": self.x_field,
            "y_field": self.y_field,
            "mode": self.mode.value,
            "rule": self.rule,
            "grouping_field": self.grouping_field,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ComputationFailure:
    """
    A statistic that is undefined for the given data.

    Renderers must show `message` (e.g. "insufficient variance") in
    place of the missing number.
    """

    reason: FailureReason
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": self.reason.value,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComputationFailure":
        return cls(
            reason=FailureReason(data["reason"]),
            message=data.get("message", ""),
        )
