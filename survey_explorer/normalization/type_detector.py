import math
import re
from typing import Any, List, Optional


class TypeDetector:
    MISSING_VARIANTS = {"", "unknown", "null", "none", "nil", "n/a", "na", "nan", "-"}
    BOOL_TRUE_VARIANTS = {"true", "yes", "correct", "t", "y", "1"}
    BOOL_FALSE_VARIANTS = {"false", "no", "incorrect", "f", "n", "0"}

    NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?|\.\d+")
    WHITESPACE_PATTERN = re.compile(r"\s+")

    @classmethod
    def is_missing(cls, value: Any) -> bool:
        if value is None:
            return True

        if isinstance(value, float) and math.isnan(value):
            return True

        if isinstance(value, str):
            return value.strip().lower() in cls.MISSING_VARIANTS

        return False

    @classmethod
    def clean_text(cls, value: Any) -> Optional[str]:
        """Stringify a raw answer and collapse its whitespace; None when missing."""
        if cls.is_missing(value):
            return None

        text = cls.WHITESPACE_PATTERN.sub(" ", str(value)).strip()
        return text or None

    @classmethod
    def coerce_bool(cls, value: Any) -> Optional[bool]:
        if isinstance(value, bool):
            return value

        if isinstance(value, (int, float)):
            if value == 1:
                return True
            if value == 0:
                return False
            return None

        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in cls.BOOL_TRUE_VARIANTS:
                return True
            if lowered in cls.BOOL_FALSE_VARIANTS:
                return False

        return None

    @classmethod
    def extract_numbers(cls, value: Any) -> List[float]:
        if isinstance(value, bool) or cls.is_missing(value):
            return []

        if isinstance(value, (int, float)):
            if math.isinf(value):
                return []
            return [float(value)]

        if isinstance(value, str):
            return [float(match) for match in cls.NUMBER_PATTERN.findall(value)]

        return []
