#tests/test_properties.py
"""Property tests for the payoff simulator (hypothesis)."""
import math

import pytest
from hypothesis import given, settings, strategies as st

from debtwise.optimization import simulate_strategy


@st.composite
def portfolios(draw):
    n = draw(st.integers(min_value=1, max_value=4))
    debts = []
    for i in range(n):
        balance = draw(st.integers(min_value=1, max_value=20_000))
        apr = draw(st.floats(min_value=0, max_value=30, allow_nan=False, allow_infinity=False))
        # every minimum covers its interest and amortizes within ~10 years on its own
        minimum = math.ceil(balance * apr / 1200 + balance / 120) + 1
        debts.append({"id": f"d{i}", "name": f"Debt {i}", "balance": balance, "apr": apr, "minimumPayment": minimum})
    extra = draw(st.integers(min_value=0, max_value=1_000))
    budget = sum(d["minimumPayment"] for d in debts) + extra
    strategy = draw(st.sampled_from(["snowball", "avalanche"]))
    return debts, {"strategy": strategy, "monthlyBudget": budget, "startDate": "2024-01-01"}


@settings(max_examples=60, deadline=None)
@given(portfolios())
def test_balances_are_non_increasing(case):
    debts, options = case
    result = simulate_strategy(debts, options)
    for d in debts:
        prev = float(d["balance"])
        for m in result.schedule:
            row = m.row_for(d["id"])
            if row is None:
                continue
            assert row.ending_balance <= prev + 1e-9
            prev = row.ending_balance


@settings(max_examples=60, deadline=None)
@given(portfolios())
def test_budget_is_respected_and_fully_used(case):
    debts, options = case
    budget = options["monthlyBudget"]
    result = simulate_strategy(debts, options)
    for m in result.schedule:
        assert m.total_paid <= budget + 1e-6
        if any(r.ending_balance > 0 for r in m.entries):
            assert m.total_paid == pytest.approx(budget)


@settings(max_examples=60, deadline=None)
@given(portfolios())
def test_money_is_conserved(case):
    debts, options = case
    result = simulate_strategy(debts, options)
    owed = sum(s.original_balance + s.total_interest for s in result.debt_summaries)
    assert owed == pytest.approx(result.total_paid, abs=0.01)
    assert result.total_interest == pytest.approx(
        sum(r.interest_accrued for m in result.schedule for r in m.entries)
    )
    assert all(s.months_to_payoff >= 1 for s in result.debt_summaries)
    assert max(s.months_to_payoff for s in result.debt_summaries) == result.total_months
