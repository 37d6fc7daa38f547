# debtwise/utils.py
from datetime import date


def money(x: float) -> str:
    try:
        return f"${x:,.2f}"
    except (TypeError, ValueError):
        return f"${x}"


def add_months(start: date, months: int) -> date:
    """First day of the month `months` after `start`'s month."""
    total = start.year * 12 + (start.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def month_label(start: date, months: int) -> str:
    return add_months(start, months).isoformat()
