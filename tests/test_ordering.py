#tests/test_ordering.py
import pytest

from debtwise.errors import DebtError, ErrorKind
from debtwise.optimization import DebtState
from debtwise.ordering import order_debts
from debtwise.schemas import Debt, Strategy


def states(*rows):
    return [
        DebtState.from_debt(i, Debt(id=debt_id, balance=balance, apr=apr, minimum_payment=10))
        for i, (debt_id, balance, apr) in enumerate(rows)
    ]


def ids(ordered):
    return [s.id for s in ordered]


def test_snowball_orders_by_balance():
    s = states(("a", 500, 5), ("b", 100, 1), ("c", 300, 30))
    assert ids(order_debts(s, Strategy.SNOWBALL)) == ["b", "c", "a"]


def test_avalanche_orders_by_apr():
    s = states(("a", 500, 5), ("b", 100, 1), ("c", 300, 30))
    assert ids(order_debts(s, Strategy.AVALANCHE)) == ["c", "a", "b"]


def test_ties_keep_input_order():
    s = states(("x", 200, 9), ("y", 200, 9), ("z", 200, 9))
    assert ids(order_debts(s, Strategy.SNOWBALL)) == ["x", "y", "z"]
    assert ids(order_debts(list(reversed(s)), Strategy.AVALANCHE)) == ["x", "y", "z"]


def test_snowball_follows_current_balances():
    s = states(("a", 100, 5), ("b", 300, 5))
    s[0].balance = 400
    assert ids(order_debts(s, Strategy.SNOWBALL)) == ["b", "a"]


def test_string_tags_and_input_untouched():
    s = states(("a", 500, 5), ("b", 100, 1))
    assert ids(order_debts(s, "snowball")) == ["b", "a"]
    assert ids(s) == ["a", "b"]


def test_unknown_strategy():
    with pytest.raises(DebtError) as exc:
        order_debts(states(("a", 1, 1)), "minimum-only")
    assert exc.value.kind == ErrorKind.INVALID_INPUT
