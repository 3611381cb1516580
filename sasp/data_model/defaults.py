from __future__ import annotations

from typing import List


def default_asset_rows() -> List[dict[str, float | str]]:
    return [
        {"id": "1", "name": "Cash", "amount": 10000.0, "rate": 0.0},
        {"id": "2", "name": "Money Market Fund", "amount": 30000.0, "rate": 2.0},
        {"id": "3", "name": "Fund Savings Plan", "amount": 50000.0, "rate": 6.0},
        {"id": "4", "name": "Brokerage Account", "amount": 30000.0, "rate": 10.0},
    ]


def default_debt_rows() -> List[dict[str, float | str]]:
    return [
        {"id": "1", "name": "Credit Line", "amount": 2000.0, "rate": 15.0},
    ]


def default_financials() -> dict[str, float]:
    return {"income": 12000.0, "expense": 6000.0, "targetSaving": 1000.0}
