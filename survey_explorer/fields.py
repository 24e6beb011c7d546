# ==============================================
# Column Options
# ==============================================
#
# PURPOSE:
#   The closed set of survey fields a user may put on either axis,
#   with the human-readable labels used for axis titles.
#
# CONSTANTS:
# ----------
# - COLUMN_OPTIONS   → ordered (value, label) pairs
# - FIELD_IDS        → frozenset of every selectable field identifier
# - NUMERIC_FIELDS   → fields that convert to numbers (GradeLevel, GPA)
# - BOOLEAN_FIELDS   → the knowledge correctness flag
# - PARTY_FIELDS     → fields normalized with the party rules
#
# FUNCTIONS:
# ----------
# - validate_field(field_id) -> str
#     Raise InvalidSelectionError for anything outside FIELD_IDS.
#
# - label_for(field_id) -> str
#
# ==============================================

from dataclasses import dataclass
from typing import Dict, Tuple


POLITICAL_PARTY = "PoliticalParty"
PARENTS_PARTY = "ParentsParty"
IDEOLOGY = "Ideology"
NEWS_SOURCE = "NewsSource"
GRADE_LEVEL = "GradeLevel"
GPA = "GPA"
POLITICAL_KNOWLEDGE = "PoliticalKnowledge"


class InvalidSelectionError(ValueError):
    """Raised when an axis selection names a field outside the column options."""

    def __init__(self, field_id: object):
        self.field_id = field_id
        super().__init__(
            f"Unknown field {field_id!r}; expected one of: {', '.join(sorted(FIELD_IDS))}"
        )


@dataclass(frozen=True)
class ColumnOption:
    """One selectable field and its display label."""
    value: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"value": self.value, "label": self.label}


COLUMN_OPTIONS: Tuple[ColumnOption, ...] = (
    ColumnOption(POLITICAL_PARTY, "Political Party"),
    ColumnOption(PARENTS_PARTY, "Parents' Political Party"),
    ColumnOption(IDEOLOGY, "Political Ideology"),
    ColumnOption(NEWS_SOURCE, "Primary News Source"),
    ColumnOption(GRADE_LEVEL, "Grade Level"),
    ColumnOption(GPA, "GPA"),
    ColumnOption(POLITICAL_KNOWLEDGE, "Political Knowledge"),
)

FIELD_IDS = frozenset(option.value for option in COLUMN_OPTIONS)
NUMERIC_FIELDS = frozenset({GRADE_LEVEL, GPA})
BOOLEAN_FIELDS = frozenset({POLITICAL_KNOWLEDGE})
PARTY_FIELDS = frozenset({POLITICAL_PARTY, PARENTS_PARTY})

_LABELS: Dict[str, str] = {option.value: option.label for option in COLUMN_OPTIONS}


def validate_field(field_id: str) -> str:
    """
    Check a field identifier against the column options.

    Args:
        field_id: Identifier chosen for an axis (e.g., "PoliticalParty")

    Returns:
        The same identifier, unchanged

    Raises:
        InvalidSelectionError: If the identifier is not a known field
    """
    if not isinstance(field_id, str) or field_id not in FIELD_IDS:
        raise InvalidSelectionError(field_id)
    return field_id


def label_for(field_id: str) -> str:
    """Return the display label for a field identifier."""
    return _LABELS[validate_field(field_id)]
