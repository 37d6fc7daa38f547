# debtwise/optimization.py
import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from .aggregation import aggregate
from .errors import DebtError, ErrorKind
from .ordering import order_debts
from .schemas import Debt, ScheduleEntry, ScheduleRow, SimulationResult, Strategy
from .utils import month_label
from .validation import DebtLike, OptionsLike, validate

logger = logging.getLogger(__name__)

MAX_MONTHS = 1200
# half a cent; absorbs accrual/payment rounding
CLEARED_EPSILON = 0.005


def _monthly_rate(apr: float) -> float:
    return max(0.0, apr) / 100.0 / 12.0


@dataclass
class DebtState:
    id: str
    name: str
    index: int
    balance: float
    apr: float
    monthly_rate: float
    minimum_payment: float
    original_balance: float
    cumulative_interest: float = 0.0
    first_month_index: int = 0
    payoff_month_index: Optional[int] = None
    start_balance: float = 0.0

    @classmethod
    def from_debt(cls, index: int, debt: Debt) -> "DebtState":
        return cls(
            id=debt.id,
            name=debt.label,
            index=index,
            balance=float(debt.balance),
            apr=float(debt.apr),
            monthly_rate=_monthly_rate(debt.apr),
            minimum_payment=float(debt.minimum_payment),
            original_balance=float(debt.balance),
            start_balance=float(debt.balance),
        )

    @property
    def active(self) -> bool:
        return self.payoff_month_index is None


def step_month(
    states: Sequence[DebtState],
    monthly_budget: float,
    strategy: Strategy,
    month_index: int,
    start_date: date,
) -> ScheduleEntry:
    """
    Advance every active debt by one month and return the schedule entry.
    Mutates `states`. Order of operations: accrue interest, pay minimums,
    roll the rest of the budget over in priority order, detect payoffs.
    """
    active = [s for s in states if s.active]
    # priority comes from balances at the start of the month
    ordered = order_debts(active, strategy)

    interest: Dict[str, float] = {}
    paid: Dict[str, float] = {}
    for s in active:
        s.start_balance = s.balance
        accrued = s.balance * s.monthly_rate
        s.balance += accrued
        s.cumulative_interest += accrued
        interest[s.id] = accrued
        paid[s.id] = 0.0

    remaining = monthly_budget
    for s in active:
        pay = min(s.minimum_payment, s.balance)
        s.balance -= pay
        paid[s.id] += pay
        remaining -= pay

    extra = max(0.0, remaining)
    for s in ordered:
        if extra <= 0:
            break
        if s.balance <= 0:
            continue
        take = min(extra, s.balance)
        s.balance -= take
        paid[s.id] += take
        extra -= take

    rows: List[ScheduleRow] = []
    for s in active:
        cleared = False
        if s.balance <= CLEARED_EPSILON:
            # write the sub-cent residual off against this month's interest
            residual = max(0.0, s.balance)
            interest[s.id] -= residual
            s.cumulative_interest -= residual
            s.balance = 0.0
            s.payoff_month_index = month_index
            cleared = True
            logger.debug(
                "%s cleared in month %d (%.2f interest paid)", s.id, month_index + 1, s.cumulative_interest
            )
        rows.append(ScheduleRow(
            debt_id=s.id,
            interest_accrued=interest[s.id],
            payment_applied=paid[s.id],
            principal_paid=paid[s.id] - interest[s.id],
            ending_balance=s.balance,
            cleared_this_month=cleared,
        ))

    return ScheduleEntry(month_index=month_index, date=month_label(start_date, month_index), entries=rows)


def _non_convergent(states: Sequence[DebtState]) -> DebtError:
    stuck = [s for s in states if s.active]
    culprit = next((s for s in stuck if s.balance >= s.start_balance), stuck[0])
    logger.warning(
        "Simulation aborted after %d months; %s is not amortizing (balance %.2f)",
        MAX_MONTHS, culprit.id, culprit.balance,
    )
    return DebtError(
        ErrorKind.NON_CONVERGENT,
        f"Simulation did not finish within {MAX_MONTHS} months; debt '{culprit.name}' ({culprit.id}) "
        f"is not decreasing / 模擬超過最大支援期間（{MAX_MONTHS // 12} 年），債務「{culprit.name}」餘額未減少",
        field=culprit.id,
    )


def simulate_strategy(
    debts: Sequence[DebtLike],
    options: OptionsLike,
) -> SimulationResult:
    """
    Project the payoff schedule of `debts` under a fixed monthly budget.

    debts: Debt models or JSON-shaped mappings (id, name, balance, apr, minimumPayment)
    options: SimulationOptions or mapping (strategy, monthlyBudget, startDate)

    Raises DebtError (INVALID_INPUT, BUDGET_TOO_LOW, NON_CONVERGENT).
    """
    validated = validate(debts, options)
    opts = validated.options
    states = [DebtState.from_debt(i, d) for i, d in validated.active]

    schedule: List[ScheduleEntry] = []
    month_index = 0
    while any(s.active for s in states):
        if month_index >= MAX_MONTHS:
            raise _non_convergent(states)
        schedule.append(step_month(states, opts.monthly_budget, opts.strategy, month_index, opts.start_date))
        month_index += 1

    result = aggregate(validated, schedule)
    logger.debug(
        "%s plan: %d months, interest %.2f, paid %.2f",
        result.strategy.value, result.total_months, result.total_interest, result.total_paid,
    )
    return result
