# ==============================================
# Survey Explorer
# ==============================================
#
# Package Structure:
#
# survey_explorer/
# ├── normalization/    # Raw answers → canonical labels / numbers
# ├── analysis/         # Classify, aggregate, compute statistics, assemble
# ├── fields.py         # Column options (the selectable fields)
# ├── dataset.py        # Read-only record store + CSV loader
# ├── config.py         # Configuration management
# ├── explorer.py       # SurveyExplorer orchestrator (memoized analyze)
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
