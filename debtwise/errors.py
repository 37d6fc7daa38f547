# debtwise/errors.py
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    BUDGET_TOO_LOW = "BUDGET_TOO_LOW"
    NON_CONVERGENT = "NON_CONVERGENT"


_HTTP_STATUS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.BUDGET_TOO_LOW: 422,
    ErrorKind.NON_CONVERGENT: 500,
}


class DebtError(Exception):
    """
    Single error type raised by the simulator.
    `kind` tells callers how to translate it (4xx for bad input, 5xx for
    a run that never amortized).
    """

    def __init__(self, kind: ErrorKind, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.message = message
        self.field = field

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self.kind]

    def to_dict(self):
        d = {"code": self.code, "message": self.message}
        if self.field:
            d["field"] = self.field
        return d

    def __repr__(self) -> str:
        return f"DebtError({self.code}, {self.message!r})"
