# ==============================================
# Classifier
# ==============================================
#
# PURPOSE:
#   Takes the two selected field identifiers and decides which
#   analysis mode applies. This decides the chart shape.
#
# CLASS: Classifier
# -----------------
#   Stateless — selection in, ModeDecision out.
#
#   Methods:
#   --------
#   - classify(x_field: str, y_field: str) -> ModeDecision
#       Validates both fields, then applies rules in order
#       (first match wins):
#
#       RULE 1: NUMERIC PAIR → SCATTER
#         Both fields in NUMERIC_FIELDS (GradeLevel, GPA).
#         Numeric takes strict precedence over every other rule.
#
#       RULE 2: BOOLEAN PAIR → RATE_BAR
#         One field is PoliticalKnowledge; the OTHER field becomes
#         the grouping field. When both axes are the knowledge flag
#         the flag groups itself (Correct / Incorrect).
#
#       RULE 3: EVERYTHING ELSE → GROUPED
#         Categorical fallback. An ordinal field paired with a
#         categorical one is grouped by its band labels (e.g. GPA ×
#         PoliticalParty gives one row per GPA band, not an empty chart).
#
# ==============================================

import logging
from typing import Callable, Optional, Tuple

from survey_explorer import fields
from .decision import AnalysisMode, ModeDecision


logger = logging.getLogger(__name__)

Rule = Callable[[str, str], Optional[ModeDecision]]


def _numeric_pair(x_field: str, y_field: str) -> Optional[ModeDecision]:
    if x_field in fields.NUMERIC_FIELDS and y_field in fields.NUMERIC_FIELDS:
        return ModeDecision(
            x_field=x_field,
            y_field=y_field,
            mode=AnalysisMode.SCATTER,
            rule="numeric_pair",
            reason=f"'{x_field}' and '{y_field}' both convert to numbers.",
        )
    return None


def _boolean_pair(x_field: str, y_field: str) -> Optional[ModeDecision]:
    x_is_boolean = x_field in fields.BOOLEAN_FIELDS
    y_is_boolean = y_field in fields.BOOLEAN_FIELDS
    if not (x_is_boolean or y_is_boolean):
        return None

    grouping_field = x_field if y_is_boolean else y_field
    flag_field = y_field if y_is_boolean else x_field
    return ModeDecision(
        x_field=x_field,
        y_field=y_field,
        mode=AnalysisMode.RATE_BAR,
        rule="boolean_pair",
        grouping_field=grouping_field,
        reason=f"'{flag_field}' is a correctness flag; rates are grouped by '{grouping_field}'.",
    )


def _categorical_pair(x_field: str, y_field: str) -> Optional[ModeDecision]:
    return ModeDecision(
        x_field=x_field,
        y_field=y_field,
        mode=AnalysisMode.GROUPED,
        rule="categorical_pair",
        reason=f"'{y_field}' categories are cross-tabulated within each '{x_field}' category.",
    )


class Classifier:
    """
    Applies the ordered mode rules to an axis selection.

    The rule order is part of the contract: a numeric pair is never
    checked against the boolean rule.
    """

    RULES: Tuple[Rule, ...] = (_numeric_pair, _boolean_pair, _categorical_pair)

    def classify(self, x_field: str, y_field: str) -> ModeDecision:
        """
        Classify an (x, y) selection.

        Args:
            x_field: Field identifier on the x axis
            y_field: Field identifier on the y axis

        Returns:
            A ModeDecision naming the mode and the rule that matched

        Raises:
            InvalidSelectionError: If either field is not a column option
        """
        fields.validate_field(x_field)
        fields.validate_field(y_field)

        for rule in self.RULES:
            decision = rule(x_field, y_field)
            if decision is not None:
                logger.debug("Selection (%s, %s) → %s via %s",
                             x_field, y_field, decision.mode.value, decision.rule)
                return decision

        # _categorical_pair always matches
        raise AssertionError("No classification rule matched")
