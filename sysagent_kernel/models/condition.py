"""Condition — tri-state readiness flag with an operator-facing reason."""

from enum import Enum

from pydantic import BaseModel


class ConditionStatus(str, Enum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class Condition(BaseModel):
    """A named condition. Recomputed on every pass, never merged."""

    type: str
    status: ConditionStatus
    reason: str = ""
