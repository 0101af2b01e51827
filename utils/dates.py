# utils/dates.py
from calendar import monthrange
from datetime import date
from typing import Tuple


def month_bounds(year: int, month: int) -> Tuple[date, date]:
     """First and last day of a calendar month."""
     return date(year, month, 1), date(year, month, monthrange(year, month)[1])


def add_months(year: int, month: int, count: int) -> Tuple[int, int]:
     """Shift a (year, month) pair by count months."""
     index = year * 12 + (month - 1) + count
     return index // 12, index % 12 + 1


def clamped_due_date(year: int, month: int, due_day: int) -> date:
     """
     Due date for a day-of-month anchor.

     Anchors past the end of the month land on its last day
     (31 in April -> 30 April), never in the following month.
     """
     last_day = monthrange(year, month)[1]
     return date(year, month, max(1, min(due_day or 1, last_day)))


def in_month(day: date, year: int, month: int) -> bool:
     return day.year == year and day.month == month
