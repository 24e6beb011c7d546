# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to the explorer and the CLI. analyze() itself takes no
#   configuration.
#
# CLASSES:
# --------
# - DatasetConfig (dataclass)
#     path: str               (default "data/survey-data.csv")
#     default_x_field: str    (default "PoliticalParty")
#     default_y_field: str    (default "PoliticalKnowledge")
#
# - AnalysisConfig (dataclass)
#     strong_correlation: float    (default 0.7)
#     moderate_correlation: float  (default 0.4)
#     cache_results: bool          (default True)
#
# - AppConfig (dataclass)
#     dataset: DatasetConfig
#     analysis: AnalysisConfig
#     log_level: str               (default "INFO")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the singleton (tests, reloading .env).
#
# USAGE:
# ------
#   from survey_explorer.config import get_config
#   config = get_config()
#   print(config.dataset.path)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from survey_explorer import fields


_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class DatasetConfig:
    """Where the survey data lives and the initial axis selection."""
    path: str = "data/survey-data.csv"
    default_x_field: str = fields.POLITICAL_PARTY
    default_y_field: str = fields.POLITICAL_KNOWLEDGE

    def __post_init__(self):
        fields.validate_field(self.default_x_field)
        fields.validate_field(self.default_y_field)


@dataclass
class AnalysisConfig:
    """Presentation thresholds and result caching."""
    strong_correlation: float = 0.7
    moderate_correlation: float = 0.4
    cache_results: bool = True

    def __post_init__(self):
        if not 0 <= self.moderate_correlation <= self.strong_correlation <= 1:
            raise ValueError(
                "Correlation thresholds must satisfy 0 <= moderate <= strong <= 1 "
                f"(got moderate={self.moderate_correlation}, strong={self.strong_correlation})"
            )


@dataclass
class AppConfig:
    """Main application configuration."""
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        InvalidSelectionError: If a default axis names an unknown field
        ValueError: If a numeric setting cannot be parsed
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    dataset_config = DatasetConfig(
        path=os.getenv("SURVEY_DATA_PATH", "data/survey-data.csv"),
        default_x_field=os.getenv("DEFAULT_X_FIELD", fields.POLITICAL_PARTY),
        default_y_field=os.getenv("DEFAULT_Y_FIELD", fields.POLITICAL_KNOWLEDGE),
    )

    analysis_config = AnalysisConfig(
        strong_correlation=float(os.getenv("STRONG_CORRELATION_THRESHOLD", "0.7")),
        moderate_correlation=float(os.getenv("MODERATE_CORRELATION_THRESHOLD", "0.4")),
        cache_results=os.getenv("CACHE_RESULTS", "true").strip().lower() in _TRUE_VALUES,
    )

    _config_instance = AppConfig(
        dataset=dataset_config,
        analysis=analysis_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None
