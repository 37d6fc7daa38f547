#tests/test_scenarios.py
from datetime import date

import pytest

from debtwise.errors import DebtError, ErrorKind
from debtwise.scenarios import calculate_extra_payment_effect, compare_strategies
from debtwise.schemas import Strategy

START = date(2024, 1, 1)


def sample_debts():
    return [
        {"id": "debt-1", "name": "Credit Card", "balance": 1500, "apr": 18, "minimumPayment": 50},
        {"id": "debt-2", "name": "Student Loan", "balance": 6000, "apr": 4.5, "minimumPayment": 120},
        {"id": "debt-3", "name": "Auto Loan", "balance": 3200, "apr": 7.9, "minimumPayment": 90},
    ]


def test_compare_returns_both_runs():
    result = compare_strategies(sample_debts(), 700, START)
    assert result.snowball.strategy == Strategy.SNOWBALL
    assert result.avalanche.strategy == Strategy.AVALANCHE
    insight = result.comparison
    # same priority order under both strategies for this portfolio
    assert insight.interest_savings == pytest.approx(0.0, abs=1e-9)
    assert insight.time_savings == 0
    assert insight.recommended_strategy == Strategy.SNOWBALL
    assert "雪球法" in insight.reasoning


def test_compare_recommends_avalanche_for_large_savings():
    debts = [
        {"id": "card", "name": "Credit Card", "balance": 50000, "apr": 29.99, "minimumPayment": 1300},
        {"id": "bnpl", "name": "Installments", "balance": 5000, "apr": 0, "minimumPayment": 50},
    ]
    result = compare_strategies(debts, 2000, START)
    insight = result.comparison
    assert insight.interest_savings > 1000
    assert insight.time_savings > 0
    assert insight.recommended_strategy == Strategy.AVALANCHE
    assert "雪崩法" in insight.reasoning
    assert result.to_json()["comparison"]["recommendedStrategy"] == "avalanche"


def test_compare_keeps_error_kind():
    with pytest.raises(DebtError) as exc:
        compare_strategies(sample_debts(), 100, START)
    assert exc.value.kind == ErrorKind.BUDGET_TOO_LOW


def test_extra_payment_saves_interest_and_time():
    effect = calculate_extra_payment_effect(sample_debts(), 700, 200, start_date=START)
    assert effect.base_scenario.strategy == Strategy.AVALANCHE
    assert effect.extra_payment_scenario.monthly_budget == 900
    b = effect.benefits
    assert b.interest_savings > 0
    assert b.time_savings > 0
    assert b.years_time_savings == round(b.time_savings / 12, 1)
    assert b.roi == pytest.approx(
        b.interest_savings / (200 * effect.extra_payment_scenario.total_months) * 100
    )


def test_zero_extra_payment_changes_nothing():
    effect = calculate_extra_payment_effect(sample_debts(), 700, 0, Strategy.SNOWBALL, START)
    assert effect.benefits.interest_savings == 0
    assert effect.benefits.time_savings == 0
    assert effect.benefits.roi == 0


def test_negative_extra_payment_rejected():
    with pytest.raises(DebtError) as exc:
        calculate_extra_payment_effect(sample_debts(), 700, -50, start_date=START)
    assert exc.value.kind == ErrorKind.INVALID_INPUT
