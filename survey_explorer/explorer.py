# ==============================================
# SurveyExplorer — Orchestrator
# ==============================================
#
# PURPOSE:
#   The class the presentation layer talks to. Holds the immutable
#   survey records, runs analyze() for each axis selection and
#   memoizes results.
#
#   ┌──────────────────────────────────────────────┐
#   │               SurveyExplorer                 │
#   │                                              │
#   │  records (tuple, read-only)                  │
#   │      │                                       │
#   │      ▼                                       │
#   │  analyze(x, y, show_percentages)             │
#   │      │  cache hit? → reuse, swap the flag    │
#   │      ▼                                       │
#   │  Classifier → Aggregation → Statistics       │
#   │      │                                       │
#   │      ▼                                       │
#   │  AnalysisResult                              │
#   └──────────────────────────────────────────────┘
#
# CLASS: SurveyExplorer
# ---------------------
#   Constructor:
#   ------------
#   - __init__(records, config: AppConfig | None = None)
#
#   - from_config(config: AppConfig | None = None)  (classmethod)
#       Load the CSV named by config.dataset.path.
#
#   Public Methods:
#   ---------------
#   - analyze(x_field=None, y_field=None, show_percentages=False)
#       Missing axes fall back to the configured defaults.
#   - column_options() -> list[dict]
#   - total_responses  (property)
#   - clear_cache() -> None
#   - get_status() -> dict
#
#   The cache key is (x_field, y_field): show_percentages never
#   changes what is computed, so one cached result serves both.
#
# ==============================================

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from survey_explorer import fields
from survey_explorer.analysis import AnalysisResult, Classifier, analyze
from survey_explorer.config import AppConfig, get_config
from survey_explorer.dataset import SurveyRecord, load_survey_csv, records_from_dicts


logger = logging.getLogger(__name__)


class SurveyExplorer:
    """
    Selection-driven front door to the analytics pipeline.
    """

    def __init__(self, records: Iterable[Any], config: Optional[AppConfig] = None):
        """
        Args:
            records: SurveyRecord objects or plain dicts keyed by field id
            config: Application configuration. If None, loads from environment.
        """
        self._config = config or get_config()
        self._records: Tuple[SurveyRecord, ...] = tuple(
            record if isinstance(record, SurveyRecord) else SurveyRecord.from_mapping(record)
            for record in records
        )
        self._classifier = Classifier()
        self._cache: Dict[Tuple[str, str], AnalysisResult] = {}
        self._hits = 0
        self._misses = 0

        logger.info("Explorer ready with %d responses (cache %s)",
                    len(self._records), "on" if self._config.analysis.cache_results else "off")

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "SurveyExplorer":
        """
        Build an explorer from the configured CSV file.

        Raises:
            DatasetError: If the file cannot be loaded
        """
        config = config or get_config()
        return cls(load_survey_csv(config.dataset.path), config)

    @classmethod
    def from_dicts(cls, rows: Iterable[Mapping[str, Any]], config: Optional[AppConfig] = None) -> "SurveyExplorer":
        return cls(records_from_dicts(rows), config)

    @property
    def records(self) -> Tuple[SurveyRecord, ...]:
        return self._records

    @property
    def total_responses(self) -> int:
        return len(self._records)

    @property
    def config(self) -> AppConfig:
        return self._config

    def column_options(self) -> List[Dict[str, str]]:
        return [option.to_dict() for option in fields.COLUMN_OPTIONS]

    def analyze(
        self,
        x_field: Optional[str] = None,
        y_field: Optional[str] = None,
        show_percentages: bool = False,
    ) -> AnalysisResult:
        """
        Analyze one axis selection.

        Args:
            x_field: Field on the x axis (default: config.dataset.default_x_field)
            y_field: Field on the y axis (default: config.dataset.default_y_field)
            show_percentages: Which metric the renderer should read

        Returns:
            The AnalysisResult for the selection

        Raises:
            InvalidSelectionError: If either field is not a column option
        """
        if x_field is None:
            x_field = self._config.dataset.default_x_field
        if y_field is None:
            y_field = self._config.dataset.default_y_field
        fields.validate_field(x_field)
        fields.validate_field(y_field)
        show_percentages = bool(show_percentages)

        if not self._config.analysis.cache_results:
            return analyze(self._records, x_field, y_field, show_percentages, self._classifier)

        key = (x_field, y_field)
        cached = self._cache.get(key)
        if cached is None:
            self._misses += 1
            cached = analyze(self._records, x_field, y_field, show_percentages, self._classifier)
            self._cache[key] = cached
            return cached

        self._hits += 1
        if cached.show_percentages == show_percentages:
            return cached
        return replace(cached, show_percentages=show_percentages)

    def clear_cache(self) -> None:
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def get_status(self) -> Dict[str, Any]:
        """
        Return explorer status.

        Returns:
            Dict with response count, cache settings and cache counters
        """
        return {
            "total_responses": self.total_responses,
            "cache_enabled": self._config.analysis.cache_results,
            "cached_selections": len(self._cache),
            "cache_hits": self._hits,
            "cache_misses": self._misses,
        }
