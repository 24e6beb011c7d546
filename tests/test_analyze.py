# ==============================================
# Tests for analyze() (end-to-end pipeline)
# ==============================================

import pytest

from survey_explorer import fields
from survey_explorer.analysis import (
    AnalysisMode,
    FailureReason,
    GroupedResult,
    RateBarResult,
    ScatterResult,
    analyze,
)
from survey_explorer.dataset import records_from_dicts
from survey_explorer.fields import InvalidSelectionError

from conftest import make_row


def _rate_rows(party, correct, incorrect):
    return (
        [make_row(party=party, knowledge=True) for _ in range(correct)]
        + [make_row(party=party, knowledge=False) for _ in range(incorrect)]
    )


class TestScatterMode:
    def test_constant_gpa_has_no_regression(self):
        records = records_from_dicts([
            make_row(gpa="3.0", grade="9th"),
            make_row(gpa="3.0", grade="10th"),
            make_row(gpa="3.0", grade="11th"),
            make_row(gpa="3.0", grade="12th"),
        ])
        result = analyze(records, fields.GPA, fields.GRADE_LEVEL)

        assert isinstance(result, ScatterResult)
        assert len(result.points) == 4
        assert result.regression_endpoints == ()
        assert result.stats.correlation is None
        assert result.stats.slope is None
        assert result.stats.failure.reason is FailureReason.ZERO_X_VARIANCE
        assert result.stats.y_mean == pytest.approx(10.5)

    def test_perfect_fit(self):
        records = records_from_dicts([
            make_row(gpa="2.0", grade="9th"),
            make_row(gpa="3.0", grade="10th"),
            make_row(gpa="4.0", grade="11th"),
        ])
        result = analyze(records, fields.GPA, fields.GRADE_LEVEL)

        assert result.stats.slope == pytest.approx(1.0)
        assert result.stats.intercept == pytest.approx(7.0)
        assert result.stats.correlation == pytest.approx(1.0)
        low, high = result.regression_endpoints
        assert (low.x, low.y) == (2.0, pytest.approx(9.0))
        assert (high.x, high.y) == (4.0, pytest.approx(11.0))

    def test_sample_dataset(self, sample_records):
        result = analyze(sample_records, fields.GPA, fields.GRADE_LEVEL)
        assert result.stats.count == 7
        assert -1.0 <= result.stats.correlation <= 1.0
        assert result.display_metric == "value"


class TestRateBarMode:
    def test_rates_per_party(self):
        records = records_from_dicts(_rate_rows("Republican", 4, 1) + _rate_rows("Democrat", 3, 2))
        result = analyze(records, fields.POLITICAL_PARTY, fields.POLITICAL_KNOWLEDGE)

        assert isinstance(result, RateBarResult)
        assert [(row.name, row.percentage) for row in result.rows] == [
            ("Republican", 80.0),
            ("Democrat", 60.0),
        ]
        assert result.stats.count == 10
        assert result.stats.overall_rate == pytest.approx(70.0)
        assert result.stats.average == pytest.approx(70.0)
        assert result.stats.highest_category == "Republican"

    def test_missing_knowledge_answers_are_excluded(self):
        records = records_from_dicts([
            make_row(party="Democrat", knowledge="TRUE"),
            make_row(party="Democrat", knowledge=""),
            make_row(party="Democrat", knowledge=None),
        ])
        result = analyze(records, fields.POLITICAL_PARTY, fields.POLITICAL_KNOWLEDGE)
        assert result.stats.count == 1
        assert [(row.name, row.total, row.correct, row.percentage) for row in result.rows] == [
            ("Democrat", 1, 1, 100.0),
        ]

    def test_knowledge_on_x_axis(self, sample_records):
        forwards = analyze(sample_records, fields.POLITICAL_PARTY, fields.POLITICAL_KNOWLEDGE)
        backwards = analyze(sample_records, fields.POLITICAL_KNOWLEDGE, fields.POLITICAL_PARTY)
        assert forwards.rows == backwards.rows
        assert forwards.stats == backwards.stats

    def test_sample_dataset(self, sample_records):
        result = analyze(sample_records, fields.POLITICAL_PARTY, fields.POLITICAL_KNOWLEDGE)
        assert [row.name for row in result.rows] == ["Republican", "Democrat", "Independent", "Other"]
        assert result.stats.count == 6
        assert result.stats.overall_rate == pytest.approx(50.0)
        assert result.stats.average == pytest.approx(37.5)

    def test_knowledge_against_itself(self, sample_records):
        result = analyze(sample_records, fields.POLITICAL_KNOWLEDGE, fields.POLITICAL_KNOWLEDGE)
        by_name = {row.name: row.percentage for row in result.rows}
        assert by_name == {"Correct": 100.0, "Incorrect": 0.0}

    def test_display_metric_always_percentage(self, sample_records):
        result = analyze(sample_records, fields.IDEOLOGY, fields.POLITICAL_KNOWLEDGE, show_percentages=False)
        assert result.display_metric == "percentage"


class TestGroupedMode:
    def test_crosstab(self):
        records = records_from_dicts([
            make_row(source="Print", ideology="Liberal"),
            make_row(source="Print", ideology="Conservative"),
            make_row(source="Print", ideology="Liberal"),
            make_row(source="Social Media", ideology="Liberal"),
            make_row(source="Social Media", ideology="Liberal"),
            make_row(source="Social Media", ideology="Conservative"),
        ])
        result = analyze(records, fields.NEWS_SOURCE, fields.IDEOLOGY)

        assert isinstance(result, GroupedResult)
        assert result.series_keys == ("Liberal", "Conservative")
        assert [row.name for row in result.rows] == ["Print", "Social Media"]
        assert result.stats.count == 6
        assert result.stats.top_count.to_dict() == {"value": 2, "category": "Print", "subcategory": "Liberal"}
        assert result.stats.top_percentage.category == "Print"
        assert result.stats.top_percentage.value == pytest.approx(200 / 3)
        assert result.stats.average_percentage == pytest.approx(50.0)

    def test_show_percentages_only_changes_display(self, sample_records):
        counts = analyze(sample_records, fields.NEWS_SOURCE, fields.IDEOLOGY, show_percentages=False)
        shares = analyze(sample_records, fields.NEWS_SOURCE, fields.IDEOLOGY, show_percentages=True)

        assert counts.display_metric == "count"
        assert shares.display_metric == "percentage"
        assert counts.rows == shares.rows
        assert counts.stats == shares.stats
        assert counts.stats.headline(False).value == 2
        assert shares.stats.headline(True).value == pytest.approx(100.0)


class TestEmptyInputs:
    @pytest.mark.parametrize("x, y, mode", [
        (fields.GPA, fields.GRADE_LEVEL, AnalysisMode.SCATTER),
        (fields.POLITICAL_PARTY, fields.POLITICAL_KNOWLEDGE, AnalysisMode.RATE_BAR),
        (fields.NEWS_SOURCE, fields.IDEOLOGY, AnalysisMode.GROUPED),
    ])
    def test_empty_dataset(self, x, y, mode):
        result = analyze([], x, y)
        assert result.mode is mode
        assert result.stats.count == 0

    @pytest.mark.parametrize("x, y", [
        (fields.GPA, fields.GRADE_LEVEL),
        (fields.POLITICAL_PARTY, fields.POLITICAL_KNOWLEDGE),
        (fields.NEWS_SOURCE, fields.IDEOLOGY),
    ])
    def test_all_records_excluded(self, x, y):
        records = records_from_dicts([make_row(), make_row(party="Unknown", gpa="n/a", source="")])
        result = analyze(records, x, y)
        assert result.stats.count == 0
        assert len(result.rows if hasattr(result, "rows") else result.points) == 0

    def test_empty_scatter_reports_failure(self):
        result = analyze([], fields.GRADE_LEVEL, fields.GPA)
        assert result.regression_endpoints == ()
        assert result.stats.failure.reason is FailureReason.EMPTY_SAMPLE

    def test_empty_rates_report_failure(self):
        result = analyze([], fields.IDEOLOGY, fields.POLITICAL_KNOWLEDGE)
        assert result.rows == ()
        assert result.stats.failure.reason is FailureReason.EMPTY_GROUP

    def test_empty_grouped_has_zero_average(self):
        result = analyze([], fields.NEWS_SOURCE, fields.IDEOLOGY)
        assert result.series_keys == ()
        assert result.stats.average_percentage == 0.0
        assert result.stats.top_count.value == 0


class TestPipelineContract:
    def test_invalid_field(self, sample_records):
        with pytest.raises(InvalidSelectionError):
            analyze(sample_records, "FavoriteColor", fields.GPA)

    @pytest.mark.parametrize("x, y", [
        (fields.GPA, fields.GRADE_LEVEL),
        (fields.IDEOLOGY, fields.POLITICAL_KNOWLEDGE),
        (fields.POLITICAL_PARTY, fields.PARENTS_PARTY),
    ])
    def test_same_inputs_give_equal_results(self, sample_records, x, y):
        assert analyze(sample_records, x, y) == analyze(sample_records, x, y)

    def test_records_are_not_modified(self, sample_rows):
        snapshot = [dict(row) for row in sample_rows]
        for x in fields.FIELD_IDS:
            for y in fields.FIELD_IDS:
                analyze(sample_rows, x, y)
        assert sample_rows == snapshot

    def test_every_pair_produces_a_result(self, sample_records):
        for x in fields.FIELD_IDS:
            for y in fields.FIELD_IDS:
                result = analyze(sample_records, x, y)
                assert result.stats.count <= len(sample_records)

    def test_scatter_to_dict(self, sample_records):
        data = analyze(sample_records, fields.GPA, fields.GRADE_LEVEL).to_dict()
        assert data["mode"] == "Scatter"
        assert data["display_metric"] == "value"
        assert len(data["points"]) == 7
        assert len(data["regression_endpoints"]) == 2
        assert set(data["stats"]) >= {"correlation", "slope", "intercept", "relationship_strength"}

    def test_rate_bar_to_dict(self, sample_records):
        data = analyze(sample_records, fields.POLITICAL_PARTY, fields.POLITICAL_KNOWLEDGE).to_dict()
        assert data["mode"] == "RateBar"
        assert data["grouping_field"] == fields.POLITICAL_PARTY
        assert data["rows"][0] == {
            "name": "Republican", "total": 2, "count": 2, "correct": 2, "percentage": 100.0,
        }

    def test_scatter_to_dict_uses_given_thresholds(self):
        records = records_from_dicts([
            make_row(gpa="2.0", grade="9th"),
            make_row(gpa="3.0", grade="10th"),
            make_row(gpa="4.0", grade="11th"),
        ])
        result = analyze(records, fields.GPA, fields.GRADE_LEVEL)
        assert result.to_dict()["stats"]["relationship_strength"] == "Strong"
        assert result.to_dict(strong=1.0, moderate=1.0)["stats"]["relationship_strength"] == "Weak"
        assert result.stats.to_dict(strong=1.0, moderate=0.5)["relationship_strength"] == "Moderate"

    def test_grouped_to_dict(self, sample_records):
        data = analyze(sample_records, fields.NEWS_SOURCE, fields.IDEOLOGY, show_percentages=True).to_dict()
        assert data["mode"] == "Grouped"
        assert data["series_keys"] == ["Liberal", "Conservative", "Moderate"]
        first = data["rows"][0]
        assert first["name"] == "Social Media"
        assert first["Liberal__count"] == 2
        assert first["Liberal__percentage"] == 100.0
        assert first["Moderate__count"] == 0
