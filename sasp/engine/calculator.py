from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import pandas as pd

from ..data_model import Asset, Debt, FinancialState
from .algorithms import ALGORITHMS, SafetyAlgorithm, safety_factor

_PAYLOAD_KEYS = {
    "total_assets": "totalAssets",
    "total_debts": "totalDebts",
    "net_worth": "netWorth",
    "passive_income": "passiveIncome",
    "monthly_interest": "monthlyInterest",
    "net_passive_income": "netPassiveIncome",
    "nominal_disposable": "nominalDisposable",
    "available_disposable": "availableDisposable",
    "runway_months": "runwayMonths",
    "safety_factor": "safetyFactor",
    "sasp": "sasp",
    "locked_savings": "lockedSavings",
    "target_savings": "targetSavings",
    "total_savings": "totalSavings",
    "is_insolvency": "isInsolvency",
    "is_cash_flow_crisis": "isCashFlowCrisis",
}


@dataclass(frozen=True)
class CalculationResult:
    total_assets: float
    total_debts: float
    net_worth: float
    passive_income: float  # monthly asset yield
    monthly_interest: float
    net_passive_income: float
    nominal_disposable: float  # disposable before the target, floored at 0
    available_disposable: float  # after the target, floored at 0
    runway_months: float
    safety_factor: float
    sasp: float
    locked_savings: float
    target_savings: float
    total_savings: float
    is_insolvency: bool
    is_cash_flow_crisis: bool

    def as_payload(self) -> dict[str, Any]:
        return {_PAYLOAD_KEYS[key]: value for key, value in asdict(self).items()}


def compute(
    assets: Sequence[Asset],
    debts: Sequence[Debt],
    financials: FinancialState,
    algorithm: SafetyAlgorithm,
    safety_line: float,
) -> CalculationResult:
    """Derive net worth, runway, safety factor and the spending/savings split.

    Pure and total: empty collections, zero expense and negative net worth all
    resolve to numbers.
    """
    total_assets = sum(a.amount for a in assets)
    total_debts = sum(d.amount for d in debts)
    net_worth = total_assets - total_debts

    passive_income = sum(a.annual_accrual() for a in assets) / 12.0
    monthly_interest = sum(d.annual_accrual() for d in debts) / 12.0
    net_passive_income = passive_income - monthly_interest

    base_disposable = financials.income - financials.expense + net_passive_income
    target_savings = financials.target_saving if financials.target_saving is not None else 0.0
    nominal_disposable = max(0.0, base_disposable)
    available_disposable = max(0.0, nominal_disposable - target_savings)

    runway = net_worth / financials.expense if financials.expense > 0 else 0.0
    k = safety_factor(runway, safety_line, algorithm)

    if net_worth < 0:
        # Everything goes to repairing equity; K is ignored.
        sasp = 0.0
        locked_savings = nominal_disposable
        total_savings = locked_savings + target_savings
    elif nominal_disposable > target_savings:
        sasp = available_disposable * k
        locked_savings = available_disposable - sasp
        total_savings = locked_savings + target_savings
    else:
        # The target cannot be met; only what exists is saved.
        sasp = 0.0
        locked_savings = nominal_disposable
        total_savings = nominal_disposable

    return CalculationResult(
        total_assets=total_assets,
        total_debts=total_debts,
        net_worth=net_worth,
        passive_income=passive_income,
        monthly_interest=monthly_interest,
        net_passive_income=net_passive_income,
        nominal_disposable=nominal_disposable,
        available_disposable=available_disposable,
        runway_months=runway,
        safety_factor=k,
        sasp=sasp,
        locked_savings=locked_savings,
        target_savings=target_savings,
        total_savings=total_savings,
        is_insolvency=net_worth < 0,
        is_cash_flow_crisis=financials.income < financials.expense + monthly_interest,
    )


def compare_algorithms(
    assets: Sequence[Asset],
    debts: Sequence[Debt],
    financials: FinancialState,
    safety_line: float,
) -> pd.DataFrame:
    """Run the engine once per algorithm, in catalogue order."""
    rows = []
    for algo in ALGORITHMS:
        res = compute(assets, debts, financials, algo.id, safety_line)
        rows.append(
            {
                "algorithm": algo.id.value,
                "name": algo.name,
                "safetyFactor": res.safety_factor,
                "sasp": res.sasp,
                "lockedSavings": res.locked_savings,
                "totalSavings": res.total_savings,
            }
        )
    return pd.DataFrame(rows)
