import math

import pytest

from sasp.data_model import Asset, Debt, FinancialState
from sasp.engine.algorithms import SafetyAlgorithm
from sasp.engine.calculator import compare_algorithms, compute


def _asset(amount, rate=0.0, name="Asset"):
    return Asset(id=name.lower(), name=name, amount=amount, rate=rate)


def _debt(amount, rate=0.0, name="Debt"):
    return Debt(id=name.lower(), name=name, amount=amount, rate=rate)


def _worked_example_inputs():
    # 60000 @ 5% + 30000 @ 13% -> 6900 a year -> 575 a month of passive income
    assets = [_asset(60000, 5.0, "Index Fund"), _asset(30000, 13.0, "Stocks")]
    debts = [_debt(2000, 15.0, "Credit Line")]
    financials = FinancialState(income=12000, expense=6000, target_saving=1000)
    return assets, debts, financials


def test_compute_is_deterministic():
    assets, debts, financials = _worked_example_inputs()

    first = compute(assets, debts, financials, SafetyAlgorithm.SIGMOID, 6)
    second = compute(assets, debts, financials, SafetyAlgorithm.SIGMOID, 6)

    assert first == second


def test_normal_case_worked_example():
    assets, debts, financials = _worked_example_inputs()

    result = compute(assets, debts, financials, SafetyAlgorithm.SIGMOID, 6)

    runway = 88000 / 6000
    expected_k = 1 / (1 + math.exp(-2 * (runway - 6) / 6))
    assert result.total_assets == 90000
    assert result.total_debts == 2000
    assert result.net_worth == 88000
    assert result.passive_income == pytest.approx(575)
    assert result.monthly_interest == pytest.approx(25)
    assert result.net_passive_income == pytest.approx(550)
    assert result.nominal_disposable == pytest.approx(6550)
    assert result.available_disposable == pytest.approx(5550)
    assert result.runway_months == pytest.approx(14.6667, abs=1e-4)
    assert result.safety_factor == pytest.approx(expected_k)
    assert result.sasp == pytest.approx(5550 * expected_k)
    assert result.sasp == pytest.approx(5257.5, abs=0.5)
    assert result.locked_savings == pytest.approx(5550 - result.sasp)
    assert result.total_savings == pytest.approx(result.locked_savings + 1000)
    assert result.target_savings == 1000
    assert not result.is_insolvency
    assert not result.is_cash_flow_crisis


@pytest.mark.parametrize("algorithm", list(SafetyAlgorithm))
def test_insolvency_forces_zero_spending(algorithm):
    assets = [_asset(1000)]
    debts = [_debt(6000)]
    financials = FinancialState(income=10000, expense=3000, target_saving=500)

    result = compute(assets, debts, financials, algorithm, 6)

    assert result.net_worth == -5000
    assert result.runway_months == pytest.approx(-5000 / 3000)
    assert result.safety_factor == 0
    assert result.sasp == 0
    assert result.locked_savings == result.nominal_disposable == 7000
    assert result.total_savings == 7500
    assert result.is_insolvency


@pytest.mark.parametrize(
    "net_worth,expected",
    [(2999, 0.3), (3000, 0.6), (5999, 0.6), (6000, 0.85), (8999, 0.85), (9000, 1.0)],
)
def test_step_boundaries_belong_to_higher_tier(net_worth, expected):
    financials = FinancialState(income=5000, expense=1000)

    result = compute([_asset(net_worth)], [], financials, SafetyAlgorithm.STEP, 6)

    assert result.safety_factor == expected


def test_sigmoid_midpoint_is_exactly_half():
    financials = FinancialState(income=5000, expense=1000)

    result = compute([_asset(6000)], [], financials, SafetyAlgorithm.SIGMOID, 6)

    assert result.runway_months == 6
    assert result.safety_factor == 0.5


@pytest.mark.parametrize("algorithm", list(SafetyAlgorithm))
def test_zero_expense_means_zero_runway_and_spending(algorithm):
    financials = FinancialState(income=5000, expense=0)

    result = compute([_asset(100000, 4.0)], [], financials, algorithm, 6)

    assert result.runway_months == 0
    assert result.safety_factor == 0
    assert result.sasp == 0
    assert result.locked_savings == pytest.approx(result.nominal_disposable)


def test_target_higher_than_disposable_saves_what_exists():
    financials = FinancialState(income=5000, expense=4000, target_saving=2000)

    result = compute([], [], financials, SafetyAlgorithm.SIGMOID, 6)

    assert result.nominal_disposable == 1000
    assert result.available_disposable == 0
    assert result.sasp == 0
    assert result.locked_savings == 1000
    assert result.total_savings == 1000


def test_target_equal_to_disposable_takes_target_branch():
    financials = FinancialState(income=5000, expense=4000, target_saving=1000)

    result = compute([_asset(48000)], [], financials, SafetyAlgorithm.LINEAR, 6)

    assert result.sasp == 0
    assert result.total_savings == 1000


def test_missing_target_behaves_like_zero_in_the_engine():
    assets = [_asset(24000)]
    without = compute(assets, [], FinancialState(income=5000, expense=3000), SafetyAlgorithm.LINEAR, 6)
    with_zero = compute(assets, [], FinancialState(income=5000, expense=3000, target_saving=0), SafetyAlgorithm.LINEAR, 6)

    assert without == with_zero
    assert without.target_savings == 0
    # runway 8 > L, so linear releases everything
    assert without.sasp == 2000
    assert without.locked_savings == 0


def test_negative_disposable_clamps_to_zero():
    debts = [_debt(120000, 20.0)]  # 2000 a month of interest
    financials = FinancialState(income=3000, expense=2000)

    result = compute([_asset(200000)], debts, financials, SafetyAlgorithm.SMOOTH, 6)

    assert result.net_passive_income == pytest.approx(-2000)
    assert result.nominal_disposable == 0
    assert result.available_disposable == 0
    assert result.sasp == 0
    assert result.is_cash_flow_crisis


def test_cash_flow_crisis_counts_debt_interest():
    debts = [_debt(12000, 12.0)]  # 120 a month
    financials = FinancialState(income=3000, expense=2900)

    result = compute([_asset(50000)], debts, financials, SafetyAlgorithm.SIGMOID, 6)

    assert result.monthly_interest == pytest.approx(120)
    assert result.is_cash_flow_crisis
    assert not result.is_insolvency


def test_empty_collections_do_not_raise():
    result = compute([], [], FinancialState(), SafetyAlgorithm.LINEAR, 6)

    assert result.total_assets == 0
    assert result.total_debts == 0
    assert result.net_worth == 0
    assert result.passive_income == 0
    assert result.monthly_interest == 0
    assert result.sasp == 0
    assert not result.is_insolvency
    assert not result.is_cash_flow_crisis


def test_negative_rates_reduce_passive_income():
    financials = FinancialState(income=4000, expense=2000)

    result = compute([_asset(12000, -12.0)], [], financials, SafetyAlgorithm.LINEAR, 6)

    assert result.passive_income == pytest.approx(-120)
    assert result.nominal_disposable == pytest.approx(1880)


@pytest.mark.parametrize("algorithm", list(SafetyAlgorithm))
@pytest.mark.parametrize("net_worth", [-1e9, -1, 0, 1, 3000, 6000, 1e6, 1e12])
def test_safety_factor_stays_within_unit_interval(algorithm, net_worth):
    assets = [_asset(max(net_worth, 0))]
    debts = [_debt(max(-net_worth, 0))]

    result = compute(assets, debts, FinancialState(income=1000, expense=500), algorithm, 6)

    assert 0.0 <= result.safety_factor <= 1.0


def test_payload_uses_camel_case_keys():
    assets, debts, financials = _worked_example_inputs()

    payload = compute(assets, debts, financials, SafetyAlgorithm.SIGMOID, 6).as_payload()

    assert payload["nominalDisposable"] == pytest.approx(6550)
    assert payload["isCashFlowCrisis"] is False
    assert set(payload) >= {"runwayMonths", "safetyFactor", "sasp", "lockedSavings", "totalSavings"}


def test_compare_algorithms_runs_each_variant_independently():
    assets, debts, financials = _worked_example_inputs()

    df = compare_algorithms(assets, debts, financials, 6)

    assert df["algorithm"].tolist() == ["linear", "smooth", "step", "sigmoid"]
    for row in df.to_dict("records"):
        single = compute(assets, debts, financials, SafetyAlgorithm(row["algorithm"]), 6)
        assert row["sasp"] == single.sasp
        assert row["safetyFactor"] == single.safety_factor
        assert row["totalSavings"] == single.total_savings
