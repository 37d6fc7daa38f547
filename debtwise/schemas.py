# debtwise/schemas.py
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Strategy(str, Enum):
    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"


class _Record(BaseModel):
    # camelCase on the wire (HTTP layer), snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class Debt(_Record):
    """
    One installment debt as supplied by the HTTP layer.
    Accepts the legacy key names too:
     - principal      -> balance
     - interestRate   -> apr (percent, e.g. 18 for 18%)
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str = ""
    balance: float = Field(ge=0.0, allow_inf_nan=False)
    apr: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    minimum_payment: float = Field(ge=0.0, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def normalize_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        d = dict(data)
        if "balance" not in d and "principal" in d:
            d["balance"] = d.pop("principal")
        if "apr" not in d:
            for key in ("interestRate", "interest_rate"):
                if key in d:
                    d["apr"] = d.pop(key)
                    break
        return d

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        # numeric primary keys come straight from the database
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def label(self) -> str:
        return self.name or self.id


class SimulationOptions(_Record):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    strategy: Strategy = Strategy.SNOWBALL
    monthly_budget: float = Field(gt=0.0, allow_inf_nan=False)
    start_date: date = Field(default_factory=date.today)

    @field_validator("start_date", mode="before")
    @classmethod
    def drop_time(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        return v


# Simple types for plan reporting (produced by optimization/aggregation)
class ScheduleRow(_Record):
    debt_id: str
    interest_accrued: float
    payment_applied: float
    principal_paid: float
    ending_balance: float
    cleared_this_month: bool = False


class ScheduleEntry(_Record):
    month_index: int
    date: str
    entries: List[ScheduleRow]

    @property
    def total_paid(self) -> float:
        return sum(r.payment_applied for r in self.entries)

    @property
    def total_interest(self) -> float:
        return sum(r.interest_accrued for r in self.entries)

    def row_for(self, debt_id: str) -> Optional[ScheduleRow]:
        return next((r for r in self.entries if r.debt_id == debt_id), None)


class DebtSummary(_Record):
    debt_id: str
    name: str
    original_balance: float
    total_interest: float
    total_paid: float
    months_to_payoff: int
    payoff_date: Optional[str] = None


class SimulationResult(_Record):
    strategy: Strategy
    monthly_budget: float
    start_date: date
    schedule: List[ScheduleEntry]
    debt_summaries: List[DebtSummary]
    total_interest: float
    total_paid: float
    total_months: int
    payoff_date: str

    def summary_for(self, debt_id: str) -> Optional[DebtSummary]:
        return next((s for s in self.debt_summaries if s.debt_id == debt_id), None)


class ComparisonInsight(_Record):
    interest_savings: float
    time_savings: int
    recommended_strategy: Strategy
    reasoning: str


class StrategyComparison(_Record):
    snowball: SimulationResult
    avalanche: SimulationResult
    comparison: ComparisonInsight


class ExtraPaymentBenefits(_Record):
    interest_savings: float
    time_savings: int
    years_time_savings: float
    roi: float


class ExtraPaymentEffect(_Record):
    base_scenario: SimulationResult
    extra_payment_scenario: SimulationResult
    benefits: ExtraPaymentBenefits
