"""Base formatter interface for Tempo Insight output rendering."""

from abc import ABC, abstractmethod
from typing import Any


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: Any) -> None:
        """Write the rendered result to stdout."""

    @abstractmethod
    def format(self, result: Any) -> str:
        """Return formatted string representation of the result."""


def format_duration(minutes: float) -> str:
    """Human duration: '<1m', '45m', '2h', '2h 15m'."""
    if minutes < 1:
        return "<1m"
    if minutes < 60:
        return f"{round(minutes)}m"
    hours = int(minutes // 60)
    mins = round(minutes % 60)
    if mins == 60:
        hours, mins = hours + 1, 0
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


def limit_sessions(sessions, limit):
    """Most recent ``limit`` sessions, all of them when limit is falsy."""
    if not limit:
        return list(sessions)
    return list(sessions)[-limit:]
