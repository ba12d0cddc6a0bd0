"""
Holiday Date Rules

Building blocks for national holiday calendars:
- Western (Gregorian) and Orthodox Easter
- nth / last weekday of a month
- Monday on or before a date (Victoria Day)
- Swedish/Finnish Midsummer and All Saints Saturdays

Weekday numbers follow `date.weekday()`: 0=Monday .. 6=Sunday.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta


MONDAY = 0
TUESDAY = 1
WEDNESDAY = 2
THURSDAY = 3
FRIDAY = 4
SATURDAY = 5
SUNDAY = 6


def calculate_easter(year: int) -> date:
    """
    Calculate Easter Sunday using the Anonymous Gregorian algorithm.

    This is the standard algorithm for calculating Easter in Western Christianity.
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def calculate_orthodox_easter(year: int) -> date:
    """
    Calculate Orthodox Easter Sunday (Meeus Julian algorithm).

    The Julian result is shifted by 13 days to the Gregorian calendar,
    which is correct for 1900-2099.
    """
    a = year % 4
    b = year % 7
    c = year % 19
    d = (19 * c + 15) % 30
    e = (2 * a + 4 * b - d + 34) % 7
    month = (d + e + 114) // 31
    day = ((d + e + 114) % 31) + 1
    return date(year, month, day) + timedelta(days=13)


def easter_offset(year: int, days: int, orthodox: bool = False) -> date:
    """Date `days` after (or before, if negative) Easter Sunday."""
    easter = calculate_orthodox_easter(year) if orthodox else calculate_easter(year)
    return easter + timedelta(days=days)


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """
    Get the nth occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday, 6=Sunday)
        n: Which occurrence (1=first, 2=second, ..., -1=last)

    Returns:
        The date of the nth weekday
    """
    if n == -1:
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        return last_day - timedelta(days=(last_day.weekday() - weekday) % 7)

    first_day = date(year, month, 1)
    days_until_weekday = (weekday - first_day.weekday()) % 7
    first_occurrence = first_day + timedelta(days=days_until_weekday)
    return first_occurrence + timedelta(weeks=n - 1)


def monday_on_or_before(year: int, month: int, day: int) -> date:
    """
    Get the Monday on or before a specific date.

    Used for Victoria Day (Monday on or before May 24).
    """
    target = date(year, month, day)
    return target - timedelta(days=target.weekday())


def first_weekday_in_window(start: date, span: int, weekday: int) -> date:
    """First `weekday` within [start, start + span), or `start` if none."""
    for offset in range(span):
        candidate = start + timedelta(days=offset)
        if candidate.weekday() == weekday:
            return candidate
    return start


def midsummer_day(year: int) -> date:
    """Midsummer Day: the Saturday between June 20 and June 26."""
    return first_weekday_in_window(date(year, 6, 20), 7, SATURDAY)


def all_saints_saturday(year: int) -> date:
    """All Saints' Day (Nordic): the Saturday between Oct 31 and Nov 6."""
    return first_weekday_in_window(date(year, 10, 31), 7, SATURDAY)
