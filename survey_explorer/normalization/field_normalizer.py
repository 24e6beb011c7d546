# ==============================================
# Field Normalizer
# ==============================================
#
# PURPOSE:
#   Collapse the free-text survey answers into a small set of
#   canonical labels (or numbers) so that "Instagram, TikTok",
#   "social media" and "Social Media" all land in the same group.
#
# FUNCTIONS:
# ----------
#   Categorical:
#   - news_source_primary(raw) -> str | None
#       First listed source, bucketed into NEWS_SOURCE_LABELS.
#   - party_simplified(raw) -> str | None
#       Democrat / Republican / Independent / Other.
#   - ideology_label(raw) -> str | None
#       Liberal / Moderate / Conservative.
#   - knowledge_label(raw) -> str | None
#       Correct / Incorrect.
#   - ordinal_label(raw, to_numeric) -> str | None
#       Raw band label, kept only if it converts to a number.
#
#   Numeric:
#   - gpa_to_numeric(raw) -> float | None
#   - grade_level_to_numeric(raw) -> int | None
#
#   Flags:
#   - knowledge_flag(raw) -> bool | None
#
#   Dispatch:
#   - category_for(field_id, raw) -> str | None
#   - numeric_for(field_id, raw) -> float | None
#
#   Header names:
#   - canonical_field_key(name) -> str
#       snake_case key used to match CSV headers to field ids.
#
# RULES:
# ------
#   1. Every function is total: bad input gives None, never an exception.
#   2. None means "excluded" and is dropped by the aggregation step.
#   3. Every function is idempotent: f(f(v)) == f(v).
#
# ==============================================

import re
from re import Pattern
from typing import Any, Callable, Dict, Optional, Tuple

from survey_explorer import fields
from .type_detector import TypeDetector


NEWS_SOURCE_LABELS = (
    "Social Media",
    "Podcast/Radio",
    "TV",
    "Print",
    "Online News",
    "Family & Friends",
)
PARTY_LABELS = ("Democrat", "Republican", "Independent", "Other")
IDEOLOGY_LABELS = ("Liberal", "Moderate", "Conservative")
KNOWLEDGE_LABELS = ("Correct", "Incorrect")

GPA_MAX = 5.0
GRADE_RANGE = range(1, 13)


def _keyword_pattern(keywords: Tuple[str, ...]) -> Pattern:
    alternatives = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<![a-z0-9])(?:{alternatives})(?![a-z0-9])")


# Checked in order; the first bucket with a matching keyword wins.
_NEWS_SOURCE_RULES: Tuple[Tuple[str, Pattern], ...] = (
    ("Social Media", _keyword_pattern((
        "social media", "social", "instagram", "insta", "tiktok", "twitter", "x",
        "facebook", "snapchat", "reddit", "youtube", "threads",
    ))),
    ("Podcast/Radio", _keyword_pattern((
        "podcast", "podcasts", "radio", "npr", "spotify",
    ))),
    ("TV", _keyword_pattern((
        "tv", "television", "cable", "cable news", "cnn", "fox", "fox news", "msnbc",
        "abc", "nbc", "cbs", "local news", "news channel", "broadcast",
    ))),
    ("Print", _keyword_pattern((
        "print", "newspaper", "newspapers", "magazine", "magazines",
        "new york times", "wall street journal", "washington post", "inquirer",
    ))),
    ("Online News", _keyword_pattern((
        "online news", "online", "website", "websites", "news site", "news sites",
        "news app", "news apps", "apple news", "google news", "internet", "ap news",
    ))),
    ("Family & Friends", _keyword_pattern((
        "family", "friends", "friend", "parents", "parent", "word of mouth",
        "school", "teacher", "teachers", "classmates",
    ))),
)

_PARTY_UNDECIDED = _keyword_pattern((
    "not sure", "unsure", "don't know", "dont know", "do not know", "idk",
    "prefer not to say", "prefer not", "undecided",
))
_PARTY_RULES: Tuple[Tuple[str, Pattern], ...] = (
    ("Democrat", _keyword_pattern((
        "democrat", "democrats", "democratic", "dem", "dems", "d",
    ))),
    ("Republican", _keyword_pattern((
        "republican", "republicans", "gop", "rep", "r",
    ))),
    ("Independent", _keyword_pattern((
        "independent", "unaffiliated", "no party", "nonpartisan", "non-partisan",
        "unenrolled", "i",
    ))),
)

_IDEOLOGY_RULES: Tuple[Tuple[str, Pattern], ...] = (
    ("Liberal", _keyword_pattern((
        "liberal", "progressive", "left", "far left", "left-leaning",
        "socialist", "democratic socialist",
    ))),
    ("Conservative", _keyword_pattern((
        "conservative", "right", "far right", "right-leaning", "traditionalist",
    ))),
    ("Moderate", _keyword_pattern((
        "moderate", "centrist", "center", "centre", "middle", "neutral",
    ))),
)

_SOURCE_SEPARATORS = re.compile(r"[,;|]")

_GPA_LETTERS: Dict[str, float] = {
    "a+": 4.0, "a": 4.0, "a-": 3.7,
    "b+": 3.3, "b": 3.0, "b-": 2.7,
    "c+": 2.3, "c": 2.0, "c-": 1.7,
    "d": 1.0,
}

_GRADE_WORDS: Dict[str, int] = {
    "freshman": 9,
    "sophomore": 10,
    "junior": 11,
    "senior": 12,
}


def _match_bucket(text: str, rules: Tuple[Tuple[str, Pattern], ...]) -> Optional[str]:
    lowered = text.lower()
    for label, _ in rules:
        if label.lower() == lowered:
            return label
    for label, pattern in rules:
        if pattern.search(lowered):
            return label
    return None


# ======================================
# Categorical fields
# ======================================
def news_source_primary(raw: Any) -> Optional[str]:
    """
    Bucket the respondent's primary news source.

    Multi-select answers ("Instagram, CNN") are reduced to the first
    listed source before bucketing.

    Args:
        raw: Raw NewsSource answer

    Returns:
        One of NEWS_SOURCE_LABELS, or None when unrecognized
    """
    text = TypeDetector.clean_text(raw)
    if text is None:
        return None

    for label in NEWS_SOURCE_LABELS:
        if text.lower() == label.lower():
            return label

    primary = next((part.strip() for part in _SOURCE_SEPARATORS.split(text) if part.strip()), "")
    if not primary:
        return None
    return _match_bucket(primary, _NEWS_SOURCE_RULES)


def party_simplified(raw: Any) -> Optional[str]:
    """
    Collapse a party label (respondent's or parents').

    Args:
        raw: Raw party answer

    Returns:
        One of PARTY_LABELS, or None for missing / undecided answers
    """
    text = TypeDetector.clean_text(raw)
    if text is None:
        return None

    lowered = text.lower()
    if lowered == "other":
        return "Other"
    if _PARTY_UNDECIDED.search(lowered):
        return None

    return _match_bucket(text, _PARTY_RULES) or "Other"


def ideology_label(raw: Any) -> Optional[str]:
    """Collapse free-text ideology into Liberal / Moderate / Conservative."""
    text = TypeDetector.clean_text(raw)
    if text is None:
        return None
    return _match_bucket(text, _IDEOLOGY_RULES)


def knowledge_label(raw: Any) -> Optional[str]:
    flag = knowledge_flag(raw)
    if flag is None:
        return None
    return "Correct" if flag else "Incorrect"


def ordinal_label(raw: Any, to_numeric: Callable[[Any], Optional[float]]) -> Optional[str]:
    """
    Category label for an ordinal field used on a categorical axis.

    The cleaned raw label is kept as-is ("3.5-3.99", "11th") so band
    names stay readable; answers that do not convert are excluded.
    """
    text = TypeDetector.clean_text(raw)
    if text is None or to_numeric(text) is None:
        return None
    return text


# ======================================
# Numeric fields
# ======================================
def gpa_to_numeric(raw: Any) -> Optional[float]:
    """
    Map a GPA band to a representative value.

    "3.5-3.99" → 3.745 (band midpoint), "4.0+" → 4.0, "Below 2.5" → 2.5,
    "B+" → 3.3. A number already on the GPA scale maps to itself.

    Args:
        raw: Raw GPA answer (band label, letter grade or number)

    Returns:
        A float in (0, GPA_MAX], or None when unparseable
    """
    text = TypeDetector.clean_text(raw)
    if text is None:
        return None

    letter = _GPA_LETTERS.get(text.lower())
    if letter is not None:
        return letter

    numbers = [n for n in TypeDetector.extract_numbers(raw) if 0 < n <= GPA_MAX]
    if not numbers:
        return None
    if len(numbers) >= 2:
        return round((numbers[0] + numbers[1]) / 2, 3)
    return round(numbers[0], 3)


def grade_level_to_numeric(raw: Any) -> Optional[int]:
    """Map "9th", "Grade 10", "Junior" or 11 to the grade number; None otherwise."""
    text = TypeDetector.clean_text(raw)
    if text is None:
        return None

    lowered = text.lower()
    for word, grade in _GRADE_WORDS.items():
        if word in lowered:
            return grade

    numbers = TypeDetector.extract_numbers(raw)
    if not numbers:
        return None
    value = numbers[0]
    if value != int(value) or int(value) not in GRADE_RANGE:
        return None
    return int(value)


def knowledge_flag(raw: Any) -> Optional[bool]:
    return TypeDetector.coerce_bool(raw)


# ======================================
# Field dispatch
# ======================================
_CATEGORY_NORMALIZERS: Dict[str, Callable[[Any], Optional[str]]] = {
    fields.POLITICAL_PARTY: party_simplified,
    fields.PARENTS_PARTY: party_simplified,
    fields.IDEOLOGY: ideology_label,
    fields.NEWS_SOURCE: news_source_primary,
    fields.GRADE_LEVEL: lambda raw: ordinal_label(raw, grade_level_to_numeric),
    fields.GPA: lambda raw: ordinal_label(raw, gpa_to_numeric),
    fields.POLITICAL_KNOWLEDGE: knowledge_label,
}

_NUMERIC_NORMALIZERS: Dict[str, Callable[[Any], Optional[float]]] = {
    fields.GRADE_LEVEL: grade_level_to_numeric,
    fields.GPA: gpa_to_numeric,
}


def category_for(field_id: str, raw: Any) -> Optional[str]:
    """Canonical category of a raw value for the given field."""
    return _CATEGORY_NORMALIZERS[fields.validate_field(field_id)](raw)


def numeric_for(field_id: str, raw: Any) -> Optional[float]:
    """Numeric value of a raw answer; only defined for NUMERIC_FIELDS."""
    fields.validate_field(field_id)
    if field_id not in _NUMERIC_NORMALIZERS:
        raise ValueError(f"Field '{field_id}' has no numeric conversion")
    return _NUMERIC_NORMALIZERS[field_id](raw)


# ======================================
# Header names
# ======================================
def canonical_field_key(name: str) -> str:
    """
    Convert a column header to snake_case.

    "PoliticalParty", "Political Party" and "political_party" all
    become "political_party"; "GPA" becomes "gpa".
    """
    if not name:
        return ""

    # Remove any non-alphanumeric characters except underscores
    key = re.sub(r"[^a-zA-Z0-9_]", "_", name.strip())

    # "XMLParser" -> "XML_Parser"
    key = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", key)

    # "userName" -> "user_Name"
    key = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", key)

    key = re.sub(r"_+", "_", key.lower())
    return key.strip("_")
