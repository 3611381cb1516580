from __future__ import annotations

import math
import uuid
from dataclasses import asdict, dataclass
from typing import Any, List


@dataclass(frozen=True)
class Holding:
    """A named balance with an annual rate in percent (6.0 means 6 %/yr)."""

    id: str
    name: str
    amount: float
    rate: float = 0.0

    def annual_accrual(self) -> float:
        return self.amount * (self.rate / 100.0)

    def monthly_accrual(self) -> float:
        return self.annual_accrual() / 12.0

    def to_record(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Asset(Holding):
    pass


@dataclass(frozen=True)
class Debt(Holding):
    pass


def _to_float(value: Any) -> float:
    """Coerce a user-entered value to a finite float, falling back to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def new_holding_id() -> str:
    return uuid.uuid4().hex[:12]


def _row_value(row: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default


def _rows_to_holdings(rows: List[dict] | None, cls: type, default_name: str) -> list:
    if rows is not None and not isinstance(rows, (list, tuple)):
        raise ValueError(f"{default_name} rows must be a list, got {type(rows).__name__}.")
    items = []
    seen: set[str] = set()
    for row in rows or []:
        if not isinstance(row, dict):
            continue
        item_id = str(_row_value(row, "id", "Id", default="") or "").strip()
        if not item_id or item_id in seen:
            item_id = new_holding_id()
        seen.add(item_id)
        name = str(_row_value(row, "name", "Name", default="") or "").strip() or default_name
        items.append(
            cls(
                id=item_id,
                name=name,
                amount=_to_float(_row_value(row, "amount", "Amount")),
                rate=_to_float(_row_value(row, "rate", "Rate (%)")),
            )
        )
    return items


def rows_to_assets(rows: List[dict] | None) -> List[Asset]:
    return _rows_to_holdings(rows, Asset, "Asset")


def rows_to_debts(rows: List[dict] | None) -> List[Debt]:
    return _rows_to_holdings(rows, Debt, "Debt")

