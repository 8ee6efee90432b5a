"""
Human-readable event messages emitted by transitions.

Events carry no behavior; hosts decide how (and whether) to display them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Event:
    """Single notification produced by a state transition"""
    message: str
    severity: Severity = Severity.INFO

    def to_dict(self) -> Dict[str, str]:
        return {'message': self.message, 'severity': self.severity.value}


def success(message: str) -> Event:
    return Event(message, Severity.SUCCESS)


def error(message: str) -> Event:
    return Event(message, Severity.ERROR)


def info(message: str) -> Event:
    return Event(message, Severity.INFO)


def format_money(amount: float) -> str:
    """Plain USD rendering used inside event messages"""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
