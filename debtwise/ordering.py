# debtwise/ordering.py
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Tuple

from .errors import DebtError, ErrorKind
from .schemas import Strategy

if TYPE_CHECKING:
    from .optimization import DebtState


def _snowball_key(d: "DebtState") -> Tuple[float, int]:
    return (d.balance, d.index)


def _avalanche_key(d: "DebtState") -> Tuple[float, int]:
    return (-d.apr, d.index)


_KEYS: Dict[Strategy, Callable[["DebtState"], Tuple[float, int]]] = {
    Strategy.SNOWBALL: _snowball_key,
    Strategy.AVALANCHE: _avalanche_key,
}


def order_debts(states: Iterable["DebtState"], strategy: Strategy) -> List["DebtState"]:
    """
    Priority order for this month's extra payments.
     - snowball: smallest current balance first
     - avalanche: highest APR first
    Ties always fall back to input order. Returns a new list.
    """
    try:
        key = _KEYS[Strategy(strategy)]
    except (KeyError, ValueError) as e:
        raise DebtError(
            ErrorKind.INVALID_INPUT,
            "Strategy must be snowball or avalanche / 策略必須是 snowball（雪球法）或 avalanche（雪崩法）",
            field="strategy",
        ) from e
    return sorted(states, key=key)
