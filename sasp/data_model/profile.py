# data_model/profile.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from ..config import DEFAULT_ALGORITHM, DEFAULT_SAFETY_LINE
from ..engine.algorithms import SafetyAlgorithm
from .financials import FinancialState, financials_from_payload
from .holdings import Asset, Debt, _to_float, rows_to_assets, rows_to_debts


@dataclass
class Profile:
    """Everything the calculator needs, grouped under one saved slot."""

    name: str
    assets: List[Asset] = field(default_factory=list)
    debts: List[Debt] = field(default_factory=list)
    financials: FinancialState = field(default_factory=FinancialState)
    algorithm: SafetyAlgorithm = SafetyAlgorithm(DEFAULT_ALGORITHM)
    safety_line: float = DEFAULT_SAFETY_LINE

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "assets": [a.to_record() for a in self.assets],
            "debts": [d.to_record() for d in self.debts],
            "financials": self.financials.to_record(),
            "algorithm": self.algorithm.value,
            "safetyLine": self.safety_line,
        }


def parse_safety_line(value: Any) -> float:
    line = _to_float(value)
    return line if line > 0 else DEFAULT_SAFETY_LINE


def profile_from_payload(payload: dict, name: str | None = None) -> Profile:
    """Build a profile from a request body or a stored slot.

    Raises ValueError for an unknown algorithm name or for asset, debt and
    financial sections of the wrong shape; numeric fields are coerced
    instead of rejected.
    """
    raw_algorithm = payload.get("algorithm") or DEFAULT_ALGORITHM
    return Profile(
        name=str(name if name is not None else payload.get("name", "")).strip(),
        assets=rows_to_assets(payload.get("assets")),
        debts=rows_to_debts(payload.get("debts")),
        financials=financials_from_payload(payload.get("financials")),
        algorithm=SafetyAlgorithm.parse(raw_algorithm),
        safety_line=parse_safety_line(payload.get("safetyLine", payload.get("safety_line"))),
    )
