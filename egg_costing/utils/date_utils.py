"""
Date utility functions.
"""

from datetime import date, timedelta
from typing import Optional, Tuple


class DateUtils:
    """Utility functions for date operations."""

    @staticmethod
    def window_ending(end: date, days: int) -> Tuple[date, date]:
        """First and last day of an inclusive window of ``days`` days ending on ``end``."""
        if days < 1:
            raise ValueError("Window must span at least one day")
        return end - timedelta(days=days - 1), end

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """Whole days from ``start`` to ``end`` (negative when end is earlier)."""
        return (end - start).days

    @staticmethod
    def previous_day(day: date) -> date:
        return day - timedelta(days=1)

    @staticmethod
    def in_range(day: date, start: Optional[date], end: Optional[date]) -> bool:
        """Inclusive range check with open bounds."""
        if start is not None and day < start:
            return False
        if end is not None and day > end:
            return False
        return True
