# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - sample_rows      → eight realistic raw survey rows (one fully blank)
# - sample_records   → the same rows as SurveyRecord objects
# - app_config       → AppConfig built in code (no environment)
# - survey_csv       → sample_rows written to a temporary CSV file
# - clean_config     → (autouse) drops the config singleton around tests
#
# ==============================================

import csv

import pytest

from survey_explorer import fields
from survey_explorer.config import AnalysisConfig, AppConfig, DatasetConfig, reset_config
from survey_explorer.dataset import records_from_dicts


FIELD_ORDER = [
    fields.POLITICAL_PARTY,
    fields.PARENTS_PARTY,
    fields.IDEOLOGY,
    fields.NEWS_SOURCE,
    fields.GRADE_LEVEL,
    fields.GPA,
    fields.POLITICAL_KNOWLEDGE,
]


def make_row(party=None, parents=None, ideology=None, source=None, grade=None, gpa=None, knowledge=None):
    """Build a raw row keyed by field id."""
    return dict(zip(FIELD_ORDER, [party, parents, ideology, source, grade, gpa, knowledge]))


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_rows():
    return [
        make_row("Democrat", "Democratic", "Liberal", "Instagram, CNN", "9th", "3.5-3.99", "TRUE"),
        make_row("Republican", "GOP", "Conservative", "Fox News", "10th", "3.0-3.49", "TRUE"),
        make_row("Independent", "Democrat", "Moderate", "New York Times", "11th", "4.0+", "FALSE"),
        make_row("Democrat", "Republican", "Very Liberal", "TikTok", "12th", "3.5-3.99", "FALSE"),
        make_row("Unknown", "", "", "", "", "", "FALSE"),
        make_row("Republican", "Republican", "Conservative", "Podcasts", "Senior", "Below 2.5", "TRUE"),
        make_row("Not sure", "Independent", "Moderate", "Apple News", "Junior", "3.0-3.49", "TRUE"),
        make_row("Libertarian", "Other", "Center-left", "Newspaper", "Grade 10", "4.0+", "FALSE"),
    ]


@pytest.fixture
def sample_records(sample_rows):
    return records_from_dicts(sample_rows)


@pytest.fixture
def app_config():
    return AppConfig(
        dataset=DatasetConfig(path="unused.csv"),
        analysis=AnalysisConfig(cache_results=True),
        log_level="DEBUG",
    )


@pytest.fixture
def survey_csv(tmp_path, sample_rows):
    path = tmp_path / "survey-data.csv"
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELD_ORDER)
        writer.writeheader()
        for row in sample_rows:
            writer.writerow({k: ("" if v is None else v) for k, v in row.items()})
    return path
