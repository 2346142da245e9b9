"""Monday-start week windows and month calendars."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pandas as pd

DATE_FORMAT = "%Y-%m-%d"


def format_date(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def days_in_month(year: int, month: int) -> int:
    return pd.Timestamp(year=year, month=month, day=1).days_in_month


def month_dates(year: int, month: int) -> List[str]:
    """Every date of the month as YYYY-MM-DD, ascending."""
    first = pd.Timestamp(year=year, month=month, day=1)
    return [d.strftime(DATE_FORMAT) for d in pd.date_range(first, periods=first.days_in_month, freq="D")]


def week_start(date_str: str) -> str:
    """Monday of the week containing ``date_str`` (Sunday belongs to the preceding Monday)."""
    ts = pd.Timestamp(date_str)
    return (ts - pd.Timedelta(days=ts.weekday())).strftime(DATE_FORMAT)


def week_end(date_str: str) -> str:
    """Sunday of the week containing ``date_str``."""
    return (pd.Timestamp(week_start(date_str)) + pd.Timedelta(days=6)).strftime(DATE_FORMAT)


def day_gap(earlier: str, later: str) -> int:
    """Calendar days between two dates."""
    return (pd.Timestamp(later) - pd.Timestamp(earlier)).days


@dataclass(frozen=True)
class WeekWindow:
    """
    A natural Monday-Sunday week seen from inside one month.

    ``label_start``/``label_end`` are clamped to the month for display.
    ``contains`` counts only dates that fall inside the natural week *and*
    inside the month.
    """

    start: str
    end: str
    month_first: str
    month_last: str

    @property
    def label_start(self) -> str:
        return max(self.start, self.month_first)

    @property
    def label_end(self) -> str:
        return min(self.end, self.month_last)

    def contains(self, date_str: str) -> bool:
        return (
            self.start <= date_str <= self.end
            and self.month_first <= date_str <= self.month_last
        )


def weeks_in_month(year: int, month: int) -> List[WeekWindow]:
    """
    Distinct week windows touching the month, found by stepping seven days
    from the Monday on or before the first of the month through its last day.
    """
    first = format_date(year, month, 1)
    last = format_date(year, month, days_in_month(year, month))

    windows: List[WeekWindow] = []
    seen = set()
    current = pd.Timestamp(week_start(first))
    while current <= pd.Timestamp(last):
        start = week_start(current.strftime(DATE_FORMAT))
        if start not in seen:
            seen.add(start)
            windows.append(WeekWindow(start=start, end=week_end(start), month_first=first, month_last=last))
        current += pd.Timedelta(days=7)
    return windows
