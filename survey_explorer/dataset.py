# ==============================================
# Dataset
# ==============================================
#
# PURPOSE:
#   Read-only record store for the survey. Loads the survey CSV
#   (or in-memory rows) into immutable SurveyRecord objects in
#   file order. No analytics happen here.
#
# CLASSES:
# --------
# - SurveyRecord (frozen dataclass)
#     One respondent. Raw answers are kept as-is; normalization
#     happens later in the pipeline.
#     - get(field_id, default=None)   → raw value by field identifier
#     - to_dict() / from_mapping()
#
# - DatasetError(Exception)
#     Missing file or missing required column.
#
# FUNCTIONS:
# ----------
# - load_survey_csv(path) -> tuple[SurveyRecord, ...]
# - records_from_dicts(rows) -> tuple[SurveyRecord, ...]
#
# HEADER MATCHING:
# ----------------
#   Headers are compared in snake_case, so "PoliticalParty",
#   "Political Party" and "political_party" are the same column.
#
# ==============================================

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from survey_explorer import fields
from survey_explorer.normalization import canonical_field_key


logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when the survey file cannot be read as a dataset."""


# field id → SurveyRecord attribute
_ATTRIBUTES: Dict[str, str] = {
    fields.POLITICAL_PARTY: "political_party",
    fields.PARENTS_PARTY: "parents_party",
    fields.IDEOLOGY: "ideology",
    fields.NEWS_SOURCE: "news_source",
    fields.GRADE_LEVEL: "grade_level",
    fields.GPA: "gpa",
    fields.POLITICAL_KNOWLEDGE: "political_knowledge",
}


@dataclass(frozen=True)
class SurveyRecord:
    """One respondent's raw answers."""
    political_party: Any = None
    parents_party: Any = None
    ideology: Any = None
    news_source: Any = None
    grade_level: Any = None
    gpa: Any = None
    political_knowledge: Any = None

    def get(self, field_id: str, default: Any = None) -> Any:
        attribute = _ATTRIBUTES.get(field_id)
        if attribute is None:
            return default
        return getattr(self, attribute)

    def to_dict(self) -> Dict[str, Any]:
        return {field_id: getattr(self, attribute) for field_id, attribute in _ATTRIBUTES.items()}

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "SurveyRecord":
        """
        Build a record from a row keyed by field id or any header spelling.

        Unrecognized keys are ignored; absent fields are None.
        """
        by_key = {canonical_field_key(str(k)): v for k, v in row.items() if k is not None}
        values = {}
        for field_id, attribute in _ATTRIBUTES.items():
            value = by_key.get(canonical_field_key(field_id))
            if isinstance(value, str):
                value = value.strip()
            values[attribute] = value
        return cls(**values)


def records_from_dicts(rows: Iterable[Mapping[str, Any]]) -> Tuple[SurveyRecord, ...]:
    return tuple(SurveyRecord.from_mapping(row) for row in rows)


def load_survey_csv(path: Union[str, Path], encoding: Optional[str] = "utf-8-sig") -> Tuple[SurveyRecord, ...]:
    """
    Load the survey CSV into immutable records.

    Args:
        path: Path to the CSV file (header row required)
        encoding: File encoding; the default strips a UTF-8 BOM

    Returns:
        Tuple of SurveyRecord in file order

    Raises:
        DatasetError: If the file is missing/unreadable or a field
                      column is absent from the header
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise DatasetError(f"Survey data file not found: {csv_path}")

    try:
        with csv_path.open(newline="", encoding=encoding) as handle:
            reader = csv.DictReader(handle)
            header = {canonical_field_key(name) for name in (reader.fieldnames or [])}

            missing = [
                field_id for field_id in sorted(fields.FIELD_IDS)
                if canonical_field_key(field_id) not in header
            ]
            if missing:
                raise DatasetError(f"{csv_path} is missing required columns: {', '.join(missing)}")

            records = records_from_dicts(reader)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise DatasetError(f"Could not read {csv_path}: {exc}") from exc

    logger.info("Loaded %d survey records from %s", len(records), csv_path)
    return records
