# ==============================================
# NORMALIZATION
# ==============================================
#
# This package turns raw survey answers into canonical
# labels and numbers BEFORE they enter the analysis pipeline.
#
# Modules:
# --------
# - type_detector.py     → Missing-value, boolean and number parsing
# - field_normalizer.py  → Per-field canonical labels / numeric values
#
# ==============================================

from .type_detector import TypeDetector
from .field_normalizer import (
    news_source_primary,
    party_simplified,
    ideology_label,
    knowledge_label,
    knowledge_flag,
    ordinal_label,
    gpa_to_numeric,
    grade_level_to_numeric,
    category_for,
    numeric_for,
    canonical_field_key,
)

__all__ = [
    "TypeDetector",
    "news_source_primary",
    "party_simplified",
    "ideology_label",
    "knowledge_label",
    "knowledge_flag",
    "ordinal_label",
    "gpa_to_numeric",
    "grade_level_to_numeric",
    "category_for",
    "numeric_for",
    "canonical_field_key",
]
