"""Read-only analytics layered on top of a CalculationResult.

None of this feeds back into the engine; it mirrors what the front end shows
next to the result (warnings, health badges, debt ratios).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional, Sequence

from ..config import (
    DANGER_RUNWAY_MONTHS,
    DEBT_TO_INCOME_THRESHOLDS,
    HIGH_INTEREST_RATE,
    PAYMENT_PRESSURE_THRESHOLDS,
    SAVINGS_PROGRESS_THRESHOLDS,
    SUGGESTED_TARGET_SHARE,
)
from ..data_model import Debt, FinancialState
from .calculator import CalculationResult


@dataclass(frozen=True)
class TargetWarning:
    has_target: bool
    too_high: bool
    nominal_disposable: float
    suggested_max: float

    def to_payload(self) -> dict[str, Any]:
        return {
            "hasTarget": self.has_target,
            "tooHigh": self.too_high,
            "nominalDisposable": self.nominal_disposable,
            "suggestedMax": self.suggested_max,
        }


@dataclass(frozen=True)
class SavingsProgress:
    percent: float
    status: str  # low | fair | close | met

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DebtAnalysis:
    debt_to_income: float
    debt_to_income_label: str  # safe | manageable | dangerous
    payment_pressure: float
    payment_pressure_label: str  # easy | moderate | high
    high_interest_names: List[str] = field(default_factory=list)
    high_interest_amount: float = 0.0

    def to_payload(self) -> dict[str, Any]:
        return {
            "debtToIncome": self.debt_to_income,
            "debtToIncomeLabel": self.debt_to_income_label,
            "paymentPressure": self.payment_pressure,
            "paymentPressureLabel": self.payment_pressure_label,
            "highInterestDebts": list(self.high_interest_names),
            "highInterestAmount": self.high_interest_amount,
        }


def suggested_max_target(nominal_disposable: float) -> float:
    return max(0.0, nominal_disposable * SUGGESTED_TARGET_SHARE)


def target_warning(financials: FinancialState, nominal_disposable: float) -> TargetWarning:
    too_high = financials.has_target and financials.target_saving > nominal_disposable
    return TargetWarning(
        has_target=financials.has_target,
        too_high=too_high,
        nominal_disposable=nominal_disposable,
        suggested_max=suggested_max_target(nominal_disposable),
    )


def runway_health(runway_months: float, safety_line: float) -> str:
    if runway_months < DANGER_RUNWAY_MONTHS:
        return "danger"
    if runway_months < safety_line:
        return "warning"
    return "healthy"


def savings_progress(result: CalculationResult) -> Optional[SavingsProgress]:
    """Share of the target actually saved; None when no positive target is set."""
    if result.target_savings <= 0:
        return None
    percent = result.total_savings / result.target_savings * 100.0
    low, fair, close = SAVINGS_PROGRESS_THRESHOLDS
    if percent < low:
        status = "low"
    elif percent < fair:
        status = "fair"
    elif percent < close:
        status = "close"
    else:
        status = "met"
    return SavingsProgress(percent=percent, status=status)


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator * 100.0 if denominator > 0 else 0.0


def _band(value: float, thresholds: tuple[float, float], labels: tuple[str, str, str]) -> str:
    lower, upper = thresholds
    if value >= upper:
        return labels[2]
    if value >= lower:
        return labels[1]
    return labels[0]


def high_interest_debts(debts: Sequence[Debt]) -> List[Debt]:
    return [d for d in debts if d.rate > HIGH_INTEREST_RATE]


def analyze_debts(debts: Sequence[Debt], monthly_income: float) -> Optional[DebtAnalysis]:
    total_debts = sum(d.amount for d in debts)
    if total_debts == 0:
        return None
    monthly_interest = sum(d.monthly_accrual() for d in debts)
    dti = _ratio(total_debts, monthly_income * 12.0)
    pressure = _ratio(monthly_interest, monthly_income)
    risky = high_interest_debts(debts)
    return DebtAnalysis(
        debt_to_income=dti,
        debt_to_income_label=_band(dti, DEBT_TO_INCOME_THRESHOLDS, ("safe", "manageable", "dangerous")),
        payment_pressure=pressure,
        payment_pressure_label=_band(pressure, PAYMENT_PRESSURE_THRESHOLDS, ("easy", "moderate", "high")),
        high_interest_names=[d.name for d in risky],
        high_interest_amount=sum(d.amount for d in risky),
    )


def analysis_payload(
    result: CalculationResult,
    debts: Sequence[Debt],
    financials: FinancialState,
    safety_line: float,
) -> dict[str, Any]:
    progress = savings_progress(result)
    debt_analysis = analyze_debts(debts, financials.income)
    return {
        "runwayHealth": runway_health(result.runway_months, safety_line),
        "targetWarning": target_warning(financials, result.nominal_disposable).to_payload(),
        "savingsProgress": progress.to_payload() if progress else None,
        "debtAnalysis": debt_analysis.to_payload() if debt_analysis else None,
    }
