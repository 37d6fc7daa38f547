# debtwise/scenarios.py
from datetime import date
from typing import Optional, Sequence

from .errors import DebtError, ErrorKind
from .optimization import simulate_strategy
from .schemas import (
    ComparisonInsight,
    ExtraPaymentBenefits,
    ExtraPaymentEffect,
    Strategy,
    StrategyComparison,
)
from .utils import money
from .validation import DebtLike

# avalanche is only worth recommending when it saves more than this
RECOMMENDATION_THRESHOLD = 1000.0


def _options(strategy: Strategy, budget: float, start_date: Optional[date]) -> dict:
    opts = {"strategy": strategy, "monthly_budget": budget}
    if start_date is not None:
        opts["start_date"] = start_date
    return opts


def compare_strategies(debts: Sequence[DebtLike], monthly_budget: float,
                       start_date: Optional[date] = None) -> StrategyComparison:
    snow = simulate_strategy(debts, _options(Strategy.SNOWBALL, monthly_budget, start_date))
    aval = simulate_strategy(debts, _options(Strategy.AVALANCHE, monthly_budget, start_date))

    savings = snow.total_interest - aval.total_interest
    if savings > RECOMMENDATION_THRESHOLD:
        recommended = Strategy.AVALANCHE
        reasoning = (f"Avalanche saves {money(savings)} in interest / "
                     f"雪崩法可節省 {money(savings)} 利息")
    else:
        recommended = Strategy.SNOWBALL
        reasoning = ("Snowball offers stronger motivation for a similar cost / "
                     "雪球法能提供更好的心理激勵，建議優先使用")

    return StrategyComparison(
        snowball=snow,
        avalanche=aval,
        comparison=ComparisonInsight(
            interest_savings=max(0.0, savings),
            time_savings=snow.total_months - aval.total_months,
            recommended_strategy=recommended,
            reasoning=reasoning,
        ),
    )


def calculate_extra_payment_effect(debts: Sequence[DebtLike], base_budget: float, extra_amount: float,
                                   strategy: Strategy = Strategy.AVALANCHE,
                                   start_date: Optional[date] = None) -> ExtraPaymentEffect:
    if extra_amount is None or extra_amount < 0:
        raise DebtError(ErrorKind.INVALID_INPUT,
                        "Extra payment cannot be negative / 額外還款金額不可為負數",
                        field="extraAmount")

    base = simulate_strategy(debts, _options(strategy, base_budget, start_date))
    extra = simulate_strategy(debts, _options(strategy, base_budget + extra_amount, start_date))

    savings = base.total_interest - extra.total_interest
    months_saved = base.total_months - extra.total_months
    roi = 0.0
    if extra_amount > 0 and extra.total_months > 0:
        roi = savings / (extra_amount * extra.total_months) * 100.0

    return ExtraPaymentEffect(
        base_scenario=base,
        extra_payment_scenario=extra,
        benefits=ExtraPaymentBenefits(
            interest_savings=max(0.0, savings),
            time_savings=months_saved,
            years_time_savings=round(months_saved / 12, 1),
            roi=roi,
        ),
    )
