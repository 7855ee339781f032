"""
models/result.py
----------------
Explicit outcome of a command flow. The router inspects it to decide
what, if anything, to tell the user.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Outcome(Enum):
    OK = "ok"
    NO_DATA = "no_data"
    TRANSPORT_ERROR = "transport_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class HandlerResult:
    """
    Attributes:
        outcome: What happened.
        reply: Text for the user; for errors this is the apology to attempt.
        error: The exception behind a failed outcome, kept for logging.
    """
    outcome: Outcome
    reply: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls) -> "HandlerResult":
        return cls(Outcome.OK)

    @classmethod
    def no_data(cls, reply: str) -> "HandlerResult":
        return cls(Outcome.NO_DATA, reply=reply)

    @classmethod
    def failed(cls, outcome: Outcome, reply: str, error: BaseException) -> "HandlerResult":
        return cls(outcome, reply=reply, error=error)
