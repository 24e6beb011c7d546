# ==============================================
# Tests for the Command Line Interface
# ==============================================

import json

import pytest

from survey_explorer import cli, fields


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in ("SURVEY_DATA_PATH", "DEFAULT_X_FIELD", "DEFAULT_Y_FIELD", "CACHE_RESULTS", "LOG_LEVEL",
                 "STRONG_CORRELATION_THRESHOLD", "MODERATE_CORRELATION_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("survey_explorer.config.load_dotenv", lambda **kwargs: False)


def _run(capsys, *argv):
    code = cli.main(list(argv))
    return code, capsys.readouterr()


class TestCommands:
    def test_columns(self, capsys):
        code, out = _run(capsys, "columns")
        assert code == 0
        options = json.loads(out.out)
        assert len(options) == len(fields.COLUMN_OPTIONS)
        assert {"value": "GPA", "label": "GPA"} in options

    def test_summary(self, capsys, survey_csv):
        code, out = _run(capsys, "summary", "--data", str(survey_csv))
        assert code == 0
        assert json.loads(out.out) == {"total_responses": 8}

    def test_summary_uses_environment_path(self, capsys, survey_csv, monkeypatch):
        monkeypatch.setenv("SURVEY_DATA_PATH", str(survey_csv))
        code, out = _run(capsys, "summary")
        assert code == 0
        assert json.loads(out.out)["total_responses"] == 8

    def test_analyze_scatter(self, capsys, survey_csv):
        code, out = _run(capsys, "analyze", "--x", "GPA", "--y", "GradeLevel", "--data", str(survey_csv))
        assert code == 0
        payload = json.loads(out.out)
        assert payload["mode"] == "Scatter"
        assert payload["x_label"] == "GPA"
        assert payload["y_label"] == "Grade Level"
        assert payload["stats"]["count"] == 7
        assert payload["stats"]["relationship_strength"] in {"Strong", "Moderate", "Weak"}

    def test_analyze_applies_configured_thresholds(self, capsys, survey_csv, monkeypatch):
        monkeypatch.setenv("STRONG_CORRELATION_THRESHOLD", "1.0")
        monkeypatch.setenv("MODERATE_CORRELATION_THRESHOLD", "1.0")
        code, out = _run(capsys, "analyze", "--x", "GPA", "--y", "GradeLevel", "--data", str(survey_csv))
        assert code == 0
        assert json.loads(out.out)["stats"]["relationship_strength"] == "Weak"

    def test_analyze_defaults_to_configured_axes(self, capsys, survey_csv):
        code, out = _run(capsys, "analyze", "--data", str(survey_csv))
        assert code == 0
        payload = json.loads(out.out)
        assert payload["mode"] == "RateBar"
        assert payload["grouping_field"] == fields.POLITICAL_PARTY

    def test_analyze_percentages(self, capsys, survey_csv):
        code, out = _run(capsys, "analyze", "--x", "NewsSource", "--y", "Ideology",
                         "--percentages", "--data", str(survey_csv))
        assert code == 0
        payload = json.loads(out.out)
        assert payload["display_metric"] == "percentage"
        assert payload["series_keys"] == ["Liberal", "Conservative", "Moderate"]


class TestErrors:
    def test_unknown_field_exits_2(self, capsys, survey_csv):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["analyze", "--x", "Hometown", "--y", "GPA", "--data", str(survey_csv)])
        assert excinfo.value.code == 2
        assert "Hometown" in capsys.readouterr().err

    def test_missing_data_file_returns_1(self, capsys, tmp_path):
        code, out = _run(capsys, "summary", "--data", str(tmp_path / "missing.csv"))
        assert code == 1
        assert out.out == ""

    def test_bad_configuration_exits_2(self, monkeypatch):
        monkeypatch.setenv("MODERATE_CORRELATION_THRESHOLD", "0.9")
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["columns"])
        assert excinfo.value.code == 2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.main([])
