"""Safety-factor curves.

Each curve maps a runway M (months of expense covered by net worth) and a
safety line L to a factor K in [0, 1]. The set of curves is closed: every
member of ``SafetyAlgorithm`` has exactly one formula in ``_FORMULAS`` and one
entry in ``ALGORITHMS``.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List

import numpy as np
import pandas as pd

from ..config import MAX_CURVE_POINTS


class SafetyAlgorithm(str, Enum):
    LINEAR = "linear"
    SMOOTH = "smooth"
    STEP = "step"
    SIGMOID = "sigmoid"

    @classmethod
    def parse(cls, value: Any) -> "SafetyAlgorithm":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            options = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown algorithm {value!r}; expected one of: {options}") from None


def _linear(runway: float, line: float) -> float:
    return min(1.0, runway / line)


def _smooth(runway: float, line: float) -> float:
    return 1.0 - math.exp(-runway / line)


def _step(runway: float, line: float) -> float:
    # Upper bounds are strict: a runway sitting on a threshold gets the higher tier.
    if runway < line * 0.5:
        return 0.3
    if runway < line:
        return 0.6
    if runway < line * 1.5:
        return 0.85
    return 1.0


def _sigmoid(runway: float, line: float) -> float:
    return 1.0 / (1.0 + math.exp((-2.0 * (runway - line)) / line))


_FORMULAS: Dict[SafetyAlgorithm, Callable[[float, float], float]] = {
    SafetyAlgorithm.LINEAR: _linear,
    SafetyAlgorithm.SMOOTH: _smooth,
    SafetyAlgorithm.STEP: _step,
    SafetyAlgorithm.SIGMOID: _sigmoid,
}


def safety_factor(runway: float, safety_line: float, algorithm: SafetyAlgorithm) -> float:
    """Return K for the given runway, clamped to [0, 1].

    A non-positive runway always yields 0. A non-positive safety line means
    any positive runway is already past it, so K is 1.
    """
    if runway <= 0:
        return 0.0
    if safety_line <= 0:
        return 1.0
    k = _FORMULAS[algorithm](runway, safety_line)
    return max(0.0, min(1.0, k))


@dataclass(frozen=True)
class AlgorithmDef:
    id: SafetyAlgorithm
    name: str
    description: str
    formula: str
    features: List[str] = field(default_factory=list)
    scenarios: str = ""
    recommended: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["id"] = self.id.value
        return payload


ALGORITHMS: List[AlgorithmDef] = [
    AlgorithmDef(
        id=SafetyAlgorithm.LINEAR,
        name="Linear",
        description="Releases spending power in direct proportion to the runway",
        formula="K = min(1.0, M / L)",
        features=["Simple to reason about", "Grows in a straight line", "Full release once M reaches L"],
        scenarios="Budgeting beginners and anyone who prefers a plain rule",
    ),
    AlgorithmDef(
        id=SafetyAlgorithm.SMOOTH,
        name="Smooth",
        description="Conservative growth that approaches but never reaches 100%",
        formula="K = 1 - exp(-M / L)",
        features=["Fast early growth", "Flattens out later", "Always keeps a buffer"],
        scenarios="Risk-averse users who want a permanent safety margin",
    ),
    AlgorithmDef(
        id=SafetyAlgorithm.STEP,
        name="Step",
        description="Tiered release unlocked by reaching runway milestones",
        formula="K = 0.3 | 0.6 | 0.85 | 1.0",
        features=["Clear milestones", "Jumps between tiers", "Rewards saving"],
        scenarios="Goal-driven users who like levelling up",
    ),
    AlgorithmDef(
        id=SafetyAlgorithm.SIGMOID,
        name="Sigmoid",
        description="Balances flexibility and safety around the safety line",
        formula="K = 1 / (1 + exp(-2*(M-L)/L))",
        features=["Most elastic near the safety line", "Strict at low runway", "Releases quickly at high runway"],
        scenarios="Most users; follows diminishing marginal utility",
        recommended=True,
    ),
]


def get_algorithm_def(algorithm: SafetyAlgorithm) -> AlgorithmDef:
    for algo in ALGORITHMS:
        if algo.id is algorithm:
            return algo
    raise KeyError(algorithm)


def factor_curve(safety_line: float, max_runway: float | None = None, points: int = 61) -> pd.DataFrame:
    """Sample K for every algorithm over an evenly spaced runway grid.

    The grid runs from 0 to ``max_runway`` (default 3 * L) inclusive and holds
    between 2 and MAX_CURVE_POINTS samples.
    """
    points = min(MAX_CURVE_POINTS, max(2, int(points)))
    if max_runway is None or max_runway <= 0:
        max_runway = 3.0 * safety_line if safety_line > 0 else 1.0
    grid = np.linspace(0.0, float(max_runway), points)
    data: dict[str, list[float]] = {"Runway": grid.tolist()}
    for algo in SafetyAlgorithm:
        data[algo.value] = [safety_factor(float(m), safety_line, algo) for m in grid]
    return pd.DataFrame(data)
