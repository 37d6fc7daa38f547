# debtwise/validation.py
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .errors import DebtError, ErrorKind
from .schemas import Debt, SimulationOptions
from .utils import money

logger = logging.getLogger(__name__)

DebtLike = Union[Debt, Mapping[str, Any]]
OptionsLike = Union[SimulationOptions, Mapping[str, Any]]

# field -> (english, chinese) used in INVALID_INPUT messages
_FIELD_LABELS = {
    "id": ("id", "識別碼"),
    "name": ("name", "名稱"),
    "balance": ("balance", "餘額"),
    "apr": ("APR", "年利率"),
    "minimumPayment": ("minimum payment", "最低還款額"),
    "minimum_payment": ("minimum payment", "最低還款額"),
    "strategy": ("strategy", "策略"),
    "monthlyBudget": ("monthly budget", "月預算"),
    "monthly_budget": ("monthly budget", "月預算"),
    "startDate": ("start date", "開始日期"),
    "start_date": ("start date", "開始日期"),
}


@dataclass(frozen=True)
class ValidatedInputs:
    debts: Tuple[Debt, ...]
    # (input index, debt) for every debt with balance > 0
    active: Tuple[Tuple[int, Debt], ...]
    options: SimulationOptions

    @property
    def minimum_required(self) -> float:
        return sum(d.minimum_payment for _, d in self.active)


def _invalid(message: str, field: Optional[str] = None) -> DebtError:
    return DebtError(ErrorKind.INVALID_INPUT, message, field=field)


def _from_validation_error(exc: ValidationError, owner: str) -> DebtError:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ())) or owner
    if field == "strategy":
        return _invalid("Strategy must be snowball or avalanche / 策略必須是 snowball（雪球法）或 avalanche（雪崩法）", field)
    if field in ("monthlyBudget", "monthly_budget"):
        return _invalid("Monthly budget must be a positive number / 月預算必須是正數", field)
    en, zh = _FIELD_LABELS.get(field, (field, field))
    return _invalid(f"Invalid {en} for {owner}: {err.get('msg')} / {owner} 的{zh}無效", field)


def _coerce_debt(item: Any, index: int) -> Debt:
    owner = f"debt #{index + 1}"
    if isinstance(item, Debt):
        return item
    if not isinstance(item, Mapping):
        raise _invalid(f"{owner} must be an object / 第 {index + 1} 筆債務格式錯誤", "debts")
    try:
        return Debt.model_validate(dict(item))
    except ValidationError as e:
        raise _from_validation_error(e, owner) from e


def _coerce_options(options: Any) -> SimulationOptions:
    if isinstance(options, SimulationOptions):
        return options
    if not isinstance(options, Mapping):
        raise _invalid("Options must be an object / 模擬參數格式錯誤", "options")
    try:
        return SimulationOptions.model_validate(dict(options))
    except ValidationError as e:
        raise _from_validation_error(e, "options") from e


def validate(debts: Sequence[DebtLike], options: OptionsLike) -> ValidatedInputs:
    if debts is None or isinstance(debts, (str, bytes, Mapping)) or len(debts) == 0:
        raise _invalid("At least one debt is required / 至少需要一筆債務才能進行模擬", "debts")

    parsed: List[Debt] = [_coerce_debt(item, i) for i, item in enumerate(debts)]

    seen = set()
    for d in parsed:
        if not d.id.strip():
            raise _invalid("Every debt needs a non-empty id / 每筆債務都必須有識別碼", "id")
        if d.id in seen:
            raise _invalid(f"Duplicate debt id '{d.id}' / 債務識別碼「{d.id}」重複", "id")
        seen.add(d.id)
        if d.balance > 0 and d.minimum_payment <= 0:
            raise _invalid(
                f"Debt '{d.label}' needs a positive minimum payment / 債務「{d.label}」必須有正數最低還款額",
                "minimumPayment",
            )

    opts = _coerce_options(options)

    active = tuple((i, d) for i, d in enumerate(parsed) if d.balance > 0)
    skipped = len(parsed) - len(active)
    if skipped:
        logger.warning("Excluding %d zero-balance debt(s) from the simulation", skipped)

    validated = ValidatedInputs(debts=tuple(parsed), active=active, options=opts)
    required = validated.minimum_required
    if required > opts.monthly_budget:
        raise DebtError(
            ErrorKind.BUDGET_TOO_LOW,
            f"Monthly budget {money(opts.monthly_budget)} cannot cover minimum payments of {money(required)} / "
            f"月預算 {money(opts.monthly_budget)} 不足，最低需要 {money(required)}",
            field="monthlyBudget",
        )
    return validated


def parse_debts_json(text: str) -> List[Debt]:
    """Parse the HTTP layer's debt list (a JSON array of objects)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise _invalid(f"Invalid debts JSON: {e} / 債務資料格式錯誤", "debts") from e
    if not isinstance(data, list):
        raise _invalid("Debts JSON must be a list of objects / 債務資料必須是陣列", "debts")
    return [_coerce_debt(item, i) for i, item in enumerate(data)]
