"""REST backend for the safety-adjusted spending power calculator."""

from __future__ import annotations

import math
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from sasp.config import (
    DEFAULT_ALGORITHM,
    DEFAULT_SAFETY_LINE,
    PORT,
    SAFETY_LINE_MAX,
    SAFETY_LINE_MIN,
    SAFETY_LINE_PRESETS,
)
from sasp.data_model import (
    AssetTableModel,
    DebtTableModel,
    HoldingTableModel,
    default_financials,
    profile_from_payload,
)
from sasp.engine.algorithms import ALGORITHMS, factor_curve
from sasp.engine.analysis import analysis_payload
from sasp.engine.calculator import compare_algorithms, compute
from sasp.engine.state import ProfileState

app = Flask(__name__)

profile_state = ProfileState()

ASSET_MODEL = AssetTableModel()
DEBT_MODEL = DebtTableModel()


def _is_nan(value: Any) -> bool:
    try:
        return not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    clean_rows: List[Dict[str, Any]] = []
    for row in records:
        clean_rows.append({key: (None if _is_nan(value) else value) for key, value in row.items()})
    return clean_rows


def _model_payload(model: HoldingTableModel) -> Dict[str, Any]:
    columns: List[Dict[str, Any]] = []
    for col in model.columns:
        columns.append(
            {
                "field": col.field,
                "label": col.label,
                "kind": col.kind,
                "default": col.default,
                "min": col.min_value,
                "step": col.step,
                "format": col.format,
                "help": col.help,
            }
        )
    defaults = _sanitize_records(model.create_default_df().to_dict("records"))
    return {"name": model.name, "columns": columns, "defaults": defaults}


def _error(message: str, status: int = 400):
    app.logger.warning("Rejected request to %s: %s", request.path, message)
    return jsonify({"error": message}), status


def _request_profile():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object.")
    return profile_from_payload(payload)


@app.after_request
def apply_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@app.get("/api/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/schema")
def get_schema():
    payload = {
        "assets": _model_payload(ASSET_MODEL),
        "debts": _model_payload(DEBT_MODEL),
        "financialDefaults": default_financials(),
        "algorithms": [algo.to_payload() for algo in ALGORITHMS],
        "defaultAlgorithm": DEFAULT_ALGORITHM,
        "safetyLine": {
            "default": DEFAULT_SAFETY_LINE,
            "min": SAFETY_LINE_MIN,
            "max": SAFETY_LINE_MAX,
            "presets": SAFETY_LINE_PRESETS,
        },
    }
    return jsonify(payload)


@app.get("/api/algorithms")
def list_algorithms():
    return jsonify({"algorithms": [algo.to_payload() for algo in ALGORITHMS]})


@app.post("/api/calculate")
def calculate():
    try:
        profile = _request_profile()
    except ValueError as exc:
        return _error(str(exc))
    result = compute(profile.assets, profile.debts, profile.financials, profile.algorithm, profile.safety_line)
    app.logger.debug(
        "Calculated %s with L=%s: runway=%.2f K=%.3f sasp=%.2f",
        profile.algorithm.value,
        profile.safety_line,
        result.runway_months,
        result.safety_factor,
        result.sasp,
    )
    return jsonify(
        {
            "algorithm": profile.algorithm.value,
            "safetyLine": profile.safety_line,
            "result": result.as_payload(),
            "analysis": analysis_payload(result, profile.debts, profile.financials, profile.safety_line),
        }
    )


@app.post("/api/compare")
def compare():
    try:
        profile = _request_profile()
    except ValueError as exc:
        return _error(str(exc))
    df = compare_algorithms(profile.assets, profile.debts, profile.financials, profile.safety_line)
    return jsonify(
        {
            "algorithm": profile.algorithm.value,
            "safetyLine": profile.safety_line,
            "rows": _sanitize_records(df.to_dict(orient="records")),
        }
    )


@app.get("/api/curve")
def curve():
    try:
        safety_line = float(request.args.get("safetyLine", DEFAULT_SAFETY_LINE))
        max_runway_raw = request.args.get("maxRunway")
        max_runway = float(max_runway_raw) if max_runway_raw else None
        points = int(request.args.get("points", 61))
    except (TypeError, ValueError):
        return _error("Invalid curve parameters.")
    if not math.isfinite(safety_line) or safety_line <= 0:
        return _error("safetyLine must be a positive finite number.")
    if max_runway is not None and not math.isfinite(max_runway):
        return _error("maxRunway must be a finite number.")
    df = factor_curve(safety_line, max_runway=max_runway, points=points)
    return jsonify({"safetyLine": safety_line, "data": _sanitize_records(df.to_dict(orient="records"))})


@app.get("/api/profiles")
def list_profiles():
    return jsonify({"profiles": profile_state.list_names()})


@app.get("/api/profiles/<profile_name>")
def get_profile(profile_name: str):
    profile = profile_state.get(profile_name)
    if profile is None:
        return jsonify({"error": "Profile not found."}), 404
    return jsonify(profile.to_payload())


@app.post("/api/profiles")
def save_profile():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return _error("Request body must be a JSON object.")
    name = str(payload.get("name", "")).strip()
    if not name:
        return _error("Profile name is required.")
    try:
        profile = profile_from_payload(payload, name=name)
    except ValueError as exc:
        return _error(str(exc))
    profile_state.save(profile)
    app.logger.info("Saved profile %r", name)
    return jsonify(
        {"message": "Profile saved.", "profiles": profile_state.list_names(), "profile": profile.to_payload()}
    )


@app.delete("/api/profiles/<profile_name>")
def delete_profile(profile_name: str):
    if not profile_state.delete(profile_name):
        return jsonify({"error": "Profile not found."}), 404
    app.logger.info("Deleted profile %r", profile_name)
    return jsonify({"message": "Profile deleted.", "profiles": profile_state.list_names()})


if __name__ == "__main__":
    app.run(debug=False, port=PORT)
