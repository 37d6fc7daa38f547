# debtwise/aggregation.py
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from .schemas import DebtSummary, ScheduleEntry, SimulationResult
from .utils import month_label

if TYPE_CHECKING:
    from .validation import ValidatedInputs


def aggregate(validated: "ValidatedInputs", schedule: Sequence[ScheduleEntry]) -> SimulationResult:
    """Fold the raw schedule into per-debt summaries and portfolio totals."""
    opts = validated.options
    interest: Dict[str, float] = {d.id: 0.0 for d in validated.debts}
    paid: Dict[str, float] = {d.id: 0.0 for d in validated.debts}
    payoff: Dict[str, Optional[ScheduleEntry]] = {d.id: None for d in validated.debts}

    for entry in schedule:
        for row in entry.entries:
            interest[row.debt_id] += row.interest_accrued
            paid[row.debt_id] += row.payment_applied
            if row.cleared_this_month and payoff[row.debt_id] is None:
                payoff[row.debt_id] = entry

    summaries: List[DebtSummary] = []
    for d in validated.debts:
        cleared_in = payoff[d.id]
        summaries.append(DebtSummary(
            debt_id=d.id,
            name=d.label,
            original_balance=float(d.balance),
            total_interest=interest[d.id],
            total_paid=paid[d.id],
            # zero-balance debts were never simulated
            months_to_payoff=cleared_in.month_index + 1 if cleared_in is not None else 0,
            payoff_date=cleared_in.date if cleared_in is not None else None,
        ))

    return SimulationResult(
        strategy=opts.strategy,
        monthly_budget=opts.monthly_budget,
        start_date=opts.start_date,
        schedule=list(schedule),
        debt_summaries=summaries,
        total_interest=sum(interest.values()),
        total_paid=sum(paid.values()),
        total_months=len(schedule),
        payoff_date=schedule[-1].date if schedule else month_label(opts.start_date, 0),
    )
