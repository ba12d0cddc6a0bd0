"""
ETAPilot Calendar Base

Business day arithmetic over an excluded weekday set and a holiday set,
plus the parsing and formatting helpers shared by every component.

Two different day sets are in play at runtime:
- closed days gate whether the warehouse ships on a given day
- courier non-delivery days gate transit and lead-time walks

Both are handled by the same functions; callers pick the set.

All searches are bounded. A day set that excludes every weekday cannot
produce a correct answer, so the walk stops at its cap and returns the
date reached (or raises BusinessDayLimitExceeded in strict mode).
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Any, Iterable, Optional, Union

from ..exceptions import BusinessDayLimitExceeded, InvalidDaySetError
from ..models.enums import Weekday


logger = logging.getLogger(__name__)

MAX_BUSINESS_DAY_ATTEMPTS = 60
MAX_SHIPMENT_SCAN_DAYS = 14

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_DAY_NAMES = {
    Weekday.SUN: "sunday",
    Weekday.MON: "monday",
    Weekday.TUE: "tuesday",
    Weekday.WED: "wednesday",
    Weekday.THU: "thursday",
    Weekday.FRI: "friday",
    Weekday.SAT: "saturday",
}

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DaySetInput = Union[str, Iterable[Union[str, Weekday]], None]


# =============================================================================
# Parsing
# =============================================================================

def parse_weekday(token: Union[str, Weekday]) -> Weekday:
    """
    Parse a single weekday token.

    Accepts the three-letter key in any case, or any longer prefix of the
    full English day name ("Thurs", "saturday").

    Raises:
        InvalidDaySetError: If the token is not a weekday
    """
    if isinstance(token, Weekday):
        return token
    value = str(token).strip().lower()
    if len(value) >= 3:
        for day, full_name in _DAY_NAMES.items():
            if full_name.startswith(value):
                return day
    raise InvalidDaySetError(
        message=f"Unknown weekday: {token!r}",
        details={"token": token, "allowed": [d.value for d in Weekday]},
    )


def parse_day_set(value: DaySetInput) -> frozenset[Weekday]:
    """
    Normalize a day set to a frozenset of Weekday members.

    Accepts a comma-separated string, or any iterable of weekday keys or
    Weekday members. Blank tokens are ignored. None yields an empty set.

    Args:
        value: Raw day set

    Returns:
        Canonical day set

    Raises:
        InvalidDaySetError: If any token is not a weekday
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        tokens: Iterable[Any] = value.split(",")
    else:
        tokens = value
    days = set()
    for token in tokens:
        if not isinstance(token, Weekday) and not str(token).strip():
            continue
        days.add(parse_weekday(token))
    return frozenset(days)


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """
    Parse a 24-hour "HH:MM" string.

    Returns None for empty or malformed input.
    """
    if not value or not isinstance(value, str):
        return None
    m = _HHMM_RE.match(value.strip())
    if not m:
        return None
    return time(int(m.group(1)), int(m.group(2)))


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a "YYYY-MM-DD" string.

    Returns None for empty, malformed or impossible dates.
    """
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    if not _ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


# =============================================================================
# Formatting
# =============================================================================

def format_short_date(d: date) -> str:
    """Format as "Jan 5". Locale independent."""
    return f"{_MONTH_ABBR[d.month - 1]} {d.day}"


def format_iso(d: date) -> str:
    """Format as "YYYY-MM-DD"."""
    return d.isoformat()


def format_date_range(min_date: date, max_date: date) -> str:
    """
    Format a delivery window.

    - same day:   "Jan 16"
    - same month: "Jan 16-20"
    - otherwise:  "Jan 30-Feb 3"
    """
    if min_date == max_date:
        return format_short_date(min_date)
    if (min_date.year, min_date.month) == (max_date.year, max_date.month):
        return f"{format_short_date(min_date)}-{max_date.day}"
    return f"{format_short_date(min_date)}-{format_short_date(max_date)}"


# =============================================================================
# Business Day Arithmetic
# =============================================================================

def is_business_day(
    d: date,
    excluded: frozenset[Weekday],
    holidays: frozenset[date] = frozenset(),
) -> bool:
    """
    Check if a date is a business day.

    Args:
        d: Date to check
        excluded: Weekdays that are never business days
        holidays: Specific non-business dates

    Returns:
        False if the weekday is excluded or the date is a holiday
    """
    if Weekday.of(d) in excluded:
        return False
    return d not in holidays


def add_business_days(
    start: date,
    count: int,
    excluded: frozenset[Weekday],
    holidays: frozenset[date] = frozenset(),
    max_attempts: int = MAX_BUSINESS_DAY_ATTEMPTS,
    strict: bool = False,
) -> date:
    """
    Add business days to a date.

    Walks forward one calendar day at a time and counts only business
    days. The start date itself is never counted.

    Args:
        start: Starting date
        count: Number of business days to add (<= 0 returns start)
        excluded: Weekdays that are never business days
        holidays: Specific non-business dates
        max_attempts: Calendar-day cap on the walk
        strict: Raise instead of approximating when the cap is hit

    Returns:
        The resulting date, or the date reached when the cap was hit

    Raises:
        BusinessDayLimitExceeded: Cap hit and strict is True
    """
    current = start
    added = 0
    attempts = 0
    while added < count and attempts < max_attempts:
        current += timedelta(days=1)
        attempts += 1
        if is_business_day(current, excluded, holidays):
            added += 1

    if added < count:
        details = {
            "start": start.isoformat(),
            "count": count,
            "added": added,
            "max_attempts": max_attempts,
            "excluded": sorted(d.value for d in excluded),
        }
        if strict:
            raise BusinessDayLimitExceeded(
                message=f"Could not add {count} business days within {max_attempts} calendar days",
                details=details,
            )
        logger.warning(
            "Business day cap reached, returning approximate date %s", current,
            extra={"details": details},
        )
    return current


def next_business_day_on_or_after(
    d: date,
    excluded: frozenset[Weekday],
    holidays: frozenset[date] = frozenset(),
    max_attempts: int = MAX_SHIPMENT_SCAN_DAYS,
) -> date:
    """
    Get the first business day on or after a date.

    Checks at most `max_attempts` days; when none qualifies the day after
    the last one checked is returned.
    """
    current = d
    for _ in range(max_attempts):
        if is_business_day(current, excluded, holidays):
            return current
        current += timedelta(days=1)
    logger.warning("No business day within %d days of %s", max_attempts, d)
    return current


# =============================================================================
# Calendar Object
# =============================================================================

@dataclass(frozen=True)
class BusinessCalendar:
    """
    A fixed pair of excluded weekdays and holiday dates.

    Convenience wrapper over the module functions for callers that make
    several calculations against the same calendar.
    """

    excluded: frozenset[Weekday] = field(
        default_factory=lambda: frozenset({Weekday.SAT, Weekday.SUN})
    )
    holidays: frozenset[date] = field(default_factory=frozenset)
    strict: bool = False

    def is_holiday(self, d: date) -> bool:
        return d in self.holidays

    def is_business_day(self, d: date) -> bool:
        return is_business_day(d, self.excluded, self.holidays)

    def add_business_days(self, start: date, days: int) -> date:
        return add_business_days(
            start, days, self.excluded, self.holidays, strict=self.strict
        )

    def next_business_day(self, d: date) -> date:
        """The first business day on or after `d`."""
        return next_business_day_on_or_after(d, self.excluded, self.holidays)

    def get_holidays_in_range(self, start: date, end: date) -> list[date]:
        """Holidays within [start, end], sorted."""
        return sorted(h for h in self.holidays if start <= h <= end)
