# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run the analytics pipeline against the survey CSV from a
#   terminal. Output is JSON so it can be piped into other tools.
#
# COMMANDS:
# ---------
# 1. List selectable fields:
#    python -m survey_explorer.cli columns
#
# 2. Show dataset size:
#    python -m survey_explorer.cli summary --data data/survey-data.csv
#
# 3. Analyze a field pair:
#    python -m survey_explorer.cli analyze --x GPA --y GradeLevel
#    python -m survey_explorer.cli analyze --x NewsSource --y Ideology --percentages
#
# EXIT CODES:
# -----------
#   0 success, 1 dataset could not be loaded, 2 bad arguments / fields
#
# ==============================================

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from survey_explorer import fields
from survey_explorer.analysis import ScatterResult
from survey_explorer.config import AppConfig, get_config
from survey_explorer.dataset import DatasetError
from survey_explorer.explorer import SurveyExplorer


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="survey-explorer",
        description="Pick two survey fields and get chart-ready data plus statistics.",
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("columns", help="List selectable fields and their labels")

    summary = subparsers.add_parser("summary", help="Show the number of survey responses")
    summary.add_argument("--data", help="Survey CSV (default: SURVEY_DATA_PATH)")

    analyze = subparsers.add_parser("analyze", help="Analyze one field pair")
    analyze.add_argument("--x", dest="x_field", choices=sorted(fields.FIELD_IDS),
                         help="Field on the x axis (default: DEFAULT_X_FIELD)")
    analyze.add_argument("--y", dest="y_field", choices=sorted(fields.FIELD_IDS),
                         help="Field on the y axis (default: DEFAULT_Y_FIELD)")
    analyze.add_argument("--percentages", action="store_true",
                         help="Mark percentages as the displayed metric")
    analyze.add_argument("--data", help="Survey CSV (default: SURVEY_DATA_PATH)")
    analyze.add_argument("--indent", type=int, default=2, help="JSON indentation")

    return parser


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_explorer(config: AppConfig, data_path: Optional[str]) -> SurveyExplorer:
    if data_path:
        config = replace(config, dataset=replace(config.dataset, path=data_path))
    return SurveyExplorer.from_config(config)


def _cmd_columns(args: argparse.Namespace, config: AppConfig) -> int:
    print(json.dumps([option.to_dict() for option in fields.COLUMN_OPTIONS], indent=2))
    return 0


def _cmd_summary(args: argparse.Namespace, config: AppConfig) -> int:
    explorer = _load_explorer(config, args.data)
    print(json.dumps({"total_responses": explorer.total_responses}, indent=2))
    return 0


def _cmd_analyze(args: argparse.Namespace, config: AppConfig) -> int:
    explorer = _load_explorer(config, args.data)
    result = explorer.analyze(args.x_field, args.y_field, args.percentages)

    if isinstance(result, ScatterResult):
        payload = result.to_dict(
            strong=config.analysis.strong_correlation,
            moderate=config.analysis.moderate_correlation,
        )
    else:
        payload = result.to_dict()
    payload["x_label"] = fields.label_for(result.decision.x_field)
    payload["y_label"] = fields.label_for(result.decision.y_field)

    print(json.dumps(payload, indent=args.indent))
    return 0


_COMMANDS = {
    "columns": _cmd_columns,
    "summary": _cmd_summary,
    "analyze": _cmd_analyze,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
    except ValueError as exc:
        parser.error(f"invalid configuration: {exc}")

    _configure_logging(args.log_level or config.log_level)

    try:
        return _COMMANDS[args.command](args, config)
    except fields.InvalidSelectionError as exc:
        parser.error(str(exc))
    except DatasetError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
