# debtwise/plan_utils.py
from typing import List, Sequence

import pandas as pd

from .schemas import Debt, SimulationResult

PLAN_COLUMNS = ["month", "date", "debt", "payment", "interest", "principal", "ending_balance", "cleared"]


def plan_to_dataframe(result: SimulationResult) -> pd.DataFrame:
    rows = []
    for m in result.schedule:
        for r in m.entries:
            rows.append({
                "month": m.month_index + 1,
                "date": m.date,
                "debt": r.debt_id,
                "payment": r.payment_applied,
                "interest": r.interest_accrued,
                "principal": r.principal_paid,
                "ending_balance": r.ending_balance,
                "cleared": r.cleared_this_month,
            })
    if not rows:
        return pd.DataFrame(columns=PLAN_COLUMNS)
    return pd.DataFrame(rows, columns=PLAN_COLUMNS)


def debts_table(debts: Sequence[Debt]) -> pd.DataFrame:
    rows = []
    for d in debts:
        rows.append({
            "Debt": d.label,
            "Balance": float(d.balance),
            "APR (%)": float(d.apr),
            "Min Payment": float(d.minimum_payment),
            "Est. Monthly Interest": float(d.balance) * float(d.apr) / 100.0 / 12.0,
        })
    return pd.DataFrame(rows)


def simulate_total_balance_series(result: SimulationResult) -> List[float]:
    """Portfolio balance left at the end of each simulated month."""
    balances = {s.debt_id: 0.0 for s in result.debt_summaries}
    totals = []
    for m in result.schedule:
        for r in m.entries:
            balances[r.debt_id] = r.ending_balance
        totals.append(sum(balances.values()))
    return totals
