# debtwise/__init__.py
from .errors import DebtError, ErrorKind
from .optimization import MAX_MONTHS, simulate_strategy
from .scenarios import calculate_extra_payment_effect, compare_strategies
from .schemas import (
    Debt,
    DebtSummary,
    ScheduleEntry,
    ScheduleRow,
    SimulationOptions,
    SimulationResult,
    Strategy,
)
from .validation import parse_debts_json

__all__ = [
    "Debt",
    "DebtError",
    "DebtSummary",
    "ErrorKind",
    "MAX_MONTHS",
    "ScheduleEntry",
    "ScheduleRow",
    "SimulationOptions",
    "SimulationResult",
    "Strategy",
    "calculate_extra_payment_effect",
    "compare_strategies",
    "parse_debts_json",
    "simulate_strategy",
]
