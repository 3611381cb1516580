from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .holdings import _to_float


@dataclass(frozen=True)
class FinancialState:
    """Monthly cash flow inputs.

    ``target_saving`` is ``None`` when the user has not set a goal, which is
    not the same thing as a goal of 0: only a set target can be "too high".
    """

    income: float = 0.0
    expense: float = 0.0
    target_saving: Optional[float] = None

    @property
    def has_target(self) -> bool:
        return self.target_saving is not None

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {"income": self.income, "expense": self.expense}
        if self.target_saving is not None:
            record["targetSaving"] = self.target_saving
        return record


def _parse_target(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return _to_float(value)


def financials_from_payload(payload: dict | None) -> FinancialState:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError(f"Financials must be an object, got {type(payload).__name__}.")
    target = payload.get("targetSaving", payload.get("target_saving"))
    return FinancialState(
        income=_to_float(payload.get("income")),
        expense=_to_float(payload.get("expense")),
        target_saving=_parse_target(target),
    )
