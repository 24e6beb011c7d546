# ==============================================
# Results (Data Classes)
# ==============================================
#
# PURPOSE:
#   Immutable containers for everything the pipeline hands to the
#   rendering layer: aggregated chart data, per-mode statistics and
#   the three AnalysisResult variants.
#
# CLASSES:
# --------
#   Chart data:
#   - ScatterPoint(x, y)
#   - RateRow(name, total, correct, percentage)
#   - GroupedCell(series_key, count, percentage)
#   - GroupedRow(name, total, cells)
#   - TopCell(value, category, subcategory)
#
#   Statistics:
#   - ScatterStats   → correlation, regression, means, std devs
#   - RateBarStats   → average / overall rate, top category
#   - GroupedStats   → counts, average share, top cells
#
#   Results (tagged by `mode`):
#   - ScatterResult(points, regression_endpoints, stats)
#   - RateBarResult(rows, stats)
#   - GroupedResult(rows, series_keys, stats)
#
#   Every class has to_dict() producing a JSON-ready structure.
#   Undefined statistics are None and come with a ComputationFailure.
#
# ==============================================

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple

from .decision import AnalysisMode, ComputationFailure, ModeDecision


STRONG_CORRELATION = 0.7
MODERATE_CORRELATION = 0.4


# ======================================
# Chart data
# ======================================
@dataclass(frozen=True)
class ScatterPoint:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class RateRow:
    """Knowledge rate for one category of the grouping field."""
    name: str
    total: int
    correct: int
    percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "total": self.total,
            "count": self.total,
            "correct": self.correct,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class GroupedCell:
    series_key: str
    count: int
    percentage: float


@dataclass(frozen=True)
class GroupedRow:
    """
    One x-category of a grouped chart.

    `cells` holds one entry per series key, in series order,
    including keys with a zero count.
    """
    name: str
    total: int
    cells: Tuple[GroupedCell, ...]

    def cell(self, series_key: str) -> GroupedCell:
        for cell in self.cells:
            if cell.series_key == series_key:
                return cell
        raise KeyError(series_key)

    def to_dict(self) -> Dict[str, Any]:
        # Flat "<series>__count" / "<series>__percentage" keys, as bar charts read them
        row: Dict[str, Any] = {"name": self.name, "total": self.total}
        for cell in self.cells:
            row[f"{cell.series_key}__count"] = cell.count
            row[f"{cell.series_key}__percentage"] = cell.percentage
        return row


@dataclass(frozen=True)
class TopCell:
    value: float = 0
    category: str = ""
    subcategory: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "category": self.category,
            "subcategory": self.subcategory,
        }


# ======================================
# Statistics
# ======================================
@dataclass(frozen=True)
class ScatterStats:
    """
    Statistics for a numeric × numeric selection.

    correlation / slope / intercept are None when the sample has no
    variance on the relevant axis; `failure` then says why.
    """

    count: int = 0

    # --- Relationship ---
    correlation: Optional[float] = None
    r_squared: Optional[float] = None
    slope: Optional[float] = None
    intercept: Optional[float] = None

    # --- Per-axis summaries ---
    x_mean: Optional[float] = None
    y_mean: Optional[float] = None
    x_std_dev: Optional[float] = None
    y_std_dev: Optional[float] = None

    failure: Optional[ComputationFailure] = None

    @property
    def variance_explained(self) -> Optional[float]:
        """r² as a percentage."""
        if self.r_squared is None:
            return None
        return self.r_squared * 100

    def relationship_strength(
        self,
        strong: float = STRONG_CORRELATION,
        moderate: float = MODERATE_CORRELATION,
    ) -> Optional[str]:
        """
        Describe |r| as "Strong", "Moderate" or "Weak".

        Args:
            strong: |r| above this is "Strong"
            moderate: |r| above this (and not strong) is "Moderate"

        Returns:
            The label, or None when correlation is undefined
        """
        if self.correlation is None:
            return None
        magnitude = abs(self.correlation)
        if magnitude > strong:
            return "Strong"
        if magnitude > moderate:
            return "Moderate"
        return "Weak"

    def to_dict(
        self,
        strong: float = STRONG_CORRELATION,
        moderate: float = MODERATE_CORRELATION,
    ) -> Dict[str, Any]:
        return {
            "count": self.count,
            "correlation": self.correlation,
            "r_squared": self.r_squared,
            "slope": self.slope,
            "intercept": self.intercept,
            "x_mean": self.x_mean,
            "y_mean": self.y_mean,
            "x_std_dev": self.x_std_dev,
            "y_std_dev": self.y_std_dev,
            "relationship_strength": self.relationship_strength(strong, moderate),
            "variance_explained": self.variance_explained,
            "failure": self.failure.to_dict() if self.failure else None,
        }


@dataclass(frozen=True)
class RateBarStats:
    """
    Statistics for a knowledge-rate selection.

    `average` is the plain mean of the row percentages; `overall_rate`
    weights every respondent equally (Σcorrect / Σtotal).
    """

    count: int = 0
    categories: int = 0
    average: Optional[float] = None
    overall_rate: Optional[float] = None
    highest_category: Optional[str] = None
    highest_rate: Optional[float] = None
    failure: Optional[ComputationFailure] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "categories": self.categories,
            "average": self.average,
            "overall_rate": self.overall_rate,
            "highest_category": self.highest_category,
            "highest_rate": self.highest_rate,
            "failure": self.failure.to_dict() if self.failure else None,
        }


@dataclass(frozen=True)
class GroupedStats:
    """
    Statistics for a categorical × categorical selection.

    `average_percentage` is the unweighted mean of every non-empty
    cell's share of its row.
    """

    count: int = 0
    x_categories: int = 0
    y_categories: int = 0
    average_percentage: float = 0.0
    top_count: TopCell = TopCell()
    top_percentage: TopCell = TopCell()

    def headline(self, show_percentages: bool) -> TopCell:
        """The top cell for whichever metric is on display."""
        return self.top_percentage if show_percentages else self.top_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "x_categories": self.x_categories,
            "y_categories": self.y_categories,
            "average_percentage": self.average_percentage,
            "top_count": self.top_count.to_dict(),
            "top_percentage": self.top_percentage.to_dict(),
        }


# ======================================
# Results
# ======================================
@dataclass(frozen=True)
class AnalysisResult:
    """
    Base of the three result variants.

    `show_percentages` never changes what is computed; it only tells
    the renderer which metric to read (see `display_metric`).
    """

    decision: ModeDecision
    show_percentages: bool

    mode: ClassVar[AnalysisMode]

    @property
    def display_metric(self) -> str:
        return "percentage" if self.show_percentages else "count"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "x_field": self.decision.x_field,
            "y_field": self.decision.y_field,
            "show_percentages": self.show_percentages,
            "display_metric": self.display_metric,
        }


@dataclass(frozen=True)
class ScatterResult(AnalysisResult):
    points: Tuple[ScatterPoint, ...]
    regression_endpoints: Tuple[ScatterPoint, ...]
    stats: ScatterStats

    mode: ClassVar[AnalysisMode] = AnalysisMode.SCATTER

    @property
    def display_metric(self) -> str:
        return "value"

    def to_dict(
        self,
        strong: float = STRONG_CORRELATION,
        moderate: float = MODERATE_CORRELATION,
    ) -> Dict[str, Any]:
        """
        Args:
            strong: |r| threshold for a "Strong" relationship_strength
            moderate: |r| threshold for a "Moderate" relationship_strength
        """
        data = super().to_dict()
        data.update({
            "points": [p.to_dict() for p in self.points],
            "regression_endpoints": [p.to_dict() for p in self.regression_endpoints],
            "stats": self.stats.to_dict(strong, moderate),
        })
        return data


@dataclass(frozen=True)
class RateBarResult(AnalysisResult):
    rows: Tuple[RateRow, ...]
    stats: RateBarStats

    mode: ClassVar[AnalysisMode] = AnalysisMode.RATE_BAR

    @property
    def display_metric(self) -> str:
        # Percentage is the only metric for knowledge rates
        return "percentage"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "grouping_field": self.decision.grouping_field,
            "rows": [row.to_dict() for row in self.rows],
            "stats": self.stats.to_dict(),
        })
        return data


@dataclass(frozen=True)
class GroupedResult(AnalysisResult):
    rows: Tuple[GroupedRow, ...]
    series_keys: Tuple[str, ...]
    stats: GroupedStats

    mode: ClassVar[AnalysisMode] = AnalysisMode.GROUPED

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "rows": [row.to_dict() for row in self.rows],
            "series_keys": list(self.series_keys),
            "stats": self.stats.to_dict(),
        })
        return data
