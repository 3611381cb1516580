"""Paths, defaults and thresholds shared by the backend and the engine helpers.

Environment overrides:
  SASP_DATA_DIR       directory holding user data (default: <repo>/user_data)
  SASP_PROFILES_FILE  profile slot file name or absolute path (default: profiles.json)
  SASP_PORT           port for `python -m sasp.backend` (default: 8000)
"""
from __future__ import annotations

import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get("SASP_DATA_DIR") or os.path.join(BASE_DIR, "user_data")
PROFILES_PATH = os.path.join(DATA_DIR, os.environ.get("SASP_PROFILES_FILE", "profiles.json"))
PORT = int(os.environ.get("SASP_PORT", "8000"))

DEFAULT_ALGORITHM = "sigmoid"
DEFAULT_SAFETY_LINE = 6.0
SAFETY_LINE_MIN = 3
SAFETY_LINE_MAX = 24
SAFETY_LINE_PRESETS = [
    {"label": "Aggressive (3 months)", "value": 3},
    {"label": "Standard (6 months)", "value": 6},
    {"label": "Conservative (12 months)", "value": 12},
]

# Share of nominal disposable suggested as a ceiling for the saving target.
SUGGESTED_TARGET_SHARE = 0.3

# Runway below this many months is flagged as dangerous regardless of L.
DANGER_RUNWAY_MONTHS = 3.0

HIGH_INTEREST_RATE = 10.0  # percent per year, strict >
DEBT_TO_INCOME_THRESHOLDS = (100.0, 300.0)  # safe < 100 <= manageable < 300 <= dangerous
PAYMENT_PRESSURE_THRESHOLDS = (20.0, 30.0)  # easy < 20 <= moderate < 30 <= high
SAVINGS_PROGRESS_THRESHOLDS = (50.0, 80.0, 100.0)

# Upper bound on the runway grid sampled for the curve chart.
MAX_CURVE_POINTS = 1000
