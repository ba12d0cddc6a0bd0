"""
Holiday Provider

Resolves national holidays by country code and year.

The provider is a pure function of (country, year): no network access and
no mutable state beyond a memoization cache. Unknown country codes yield
an empty set rather than an error.

Custom (merchant) holidays are unioned in by the caller through
build_holiday_set(); the provider itself only knows national calendars.
"""
from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache
from typing import Iterable, Optional, Union

from ..models.settings import CustomHoliday
from .base import parse_iso_date
from .countries import HOLIDAY_DEFINITIONS, HolidayDefinition


logger = logging.getLogger(__name__)


def _normalize_code(country_code: Optional[str]) -> str:
    return (country_code or "").strip().upper()


def get_definition(country_code: Optional[str]) -> Optional[HolidayDefinition]:
    """Holiday definition for a country, or None if unsupported."""
    return HOLIDAY_DEFINITIONS.get(_normalize_code(country_code))


def list_countries() -> list[tuple[str, str]]:
    """Supported countries as (code, name) pairs, sorted by name."""
    return sorted(
        ((d.code, d.name) for d in HOLIDAY_DEFINITIONS.values()),
        key=lambda item: item[1],
    )


def get_holiday_names(country_code: Optional[str], year: int) -> list[tuple[date, str]]:
    """
    Get named holidays for a country and year.

    Args:
        country_code: ISO country code (case-insensitive)
        year: Year to get holidays for

    Returns:
        (date, name) pairs sorted by date; empty for unknown countries
    """
    definition = get_definition(country_code)
    if definition is None:
        return []
    return sorted(definition.holidays_for(year), key=lambda item: item[0])


@lru_cache(maxsize=256)
def _holidays_for_year(code: str, year: int) -> frozenset[date]:
    definition = HOLIDAY_DEFINITIONS.get(code)
    if definition is None:
        return frozenset()
    return frozenset(d for d, _ in definition.holidays_for(year))


def get_holidays_for_year(country_code: Optional[str], year: int) -> frozenset[date]:
    """
    Get national holidays for a country and year (cached).

    Args:
        country_code: ISO country code (case-insensitive)
        year: Year to get holidays for

    Returns:
        Frozenset of holiday dates; empty for unknown or blank codes
    """
    code = _normalize_code(country_code)
    if code and code not in HOLIDAY_DEFINITIONS:
        logger.debug("No holiday calendar for country %r", code)
    return _holidays_for_year(code, year)


def is_holiday(d: date, country_code: Optional[str]) -> bool:
    """Check if a date is a national holiday in a country."""
    return d in get_holidays_for_year(country_code, d.year)


def custom_holiday_dates(
    custom_holidays: Iterable[Union[CustomHoliday, str, dict]],
) -> frozenset[date]:
    """
    Parse merchant holidays into dates.

    Entries may be CustomHoliday objects, "YYYY-MM-DD" strings or
    {"date": ...} mappings. Unparseable entries are skipped.
    """
    dates = set()
    for entry in custom_holidays or ():
        if isinstance(entry, CustomHoliday):
            raw = entry.date
        elif isinstance(entry, dict):
            raw = entry.get("date")
        else:
            raw = entry
        parsed = parse_iso_date(raw)
        if parsed is None:
            logger.debug("Skipping malformed custom holiday %r", entry)
            continue
        dates.add(parsed)
    return frozenset(dates)


def build_holiday_set(
    country_code: Optional[str],
    custom_holidays: Iterable[Union[CustomHoliday, str, dict]],
    years: Iterable[int],
) -> frozenset[date]:
    """
    Union of national holidays for the given years and custom holidays.

    Args:
        country_code: ISO country code, or empty for none
        custom_holidays: Merchant-declared dates
        years: Years to resolve national holidays for

    Returns:
        Frozenset of non-working dates
    """
    holidays: set[date] = set()
    for year in years:
        holidays |= get_holidays_for_year(country_code, year)
    holidays |= custom_holiday_dates(custom_holidays)
    return frozenset(holidays)
