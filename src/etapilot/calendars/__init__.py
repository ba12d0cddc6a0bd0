"""
ETAPilot Calendars

Business day arithmetic and national holiday calendars.

Provides:
- Weekday-set parsing and business day walks with an iteration cap
- Date parsing/formatting helpers ("HH:MM", "YYYY-MM-DD", "Jan 16-20")
- Holiday rules (Easter, nth weekday, Midsummer)
- National holiday calendars for 26 countries

Usage:
    from etapilot.calendars import (
        add_business_days,
        build_holiday_set,
        get_holidays_for_year,
        parse_day_set,
    )

    holidays = build_holiday_set("GB", [], [2025, 2026])
    courier = parse_day_set("sat,sun")
    arrival = add_business_days(date(2025, 12, 23), 3, courier, holidays)
"""
from __future__ import annotations

from .base import (
    MAX_BUSINESS_DAY_ATTEMPTS,
    MAX_SHIPMENT_SCAN_DAYS,
    BusinessCalendar,
    add_business_days,
    format_date_range,
    format_iso,
    format_short_date,
    is_business_day,
    next_business_day_on_or_after,
    parse_day_set,
    parse_hhmm,
    parse_iso_date,
    parse_weekday,
)
from .countries import HOLIDAY_DEFINITIONS, HolidayDefinition
from .provider import (
    build_holiday_set,
    custom_holiday_dates,
    get_definition,
    get_holiday_names,
    get_holidays_for_year,
    is_holiday,
    list_countries,
)
from .rules import (
    all_saints_saturday,
    calculate_easter,
    calculate_orthodox_easter,
    midsummer_day,
    nth_weekday_of_month,
)

__all__ = [
    # Business days
    "MAX_BUSINESS_DAY_ATTEMPTS",
    "MAX_SHIPMENT_SCAN_DAYS",
    "BusinessCalendar",
    "add_business_days",
    "is_business_day",
    "next_business_day_on_or_after",
    # Parsing / formatting
    "parse_day_set",
    "parse_weekday",
    "parse_hhmm",
    "parse_iso_date",
    "format_short_date",
    "format_iso",
    "format_date_range",
    # Holidays
    "HOLIDAY_DEFINITIONS",
    "HolidayDefinition",
    "build_holiday_set",
    "custom_holiday_dates",
    "get_definition",
    "get_holiday_names",
    "get_holidays_for_year",
    "is_holiday",
    "list_countries",
    # Rules
    "calculate_easter",
    "calculate_orthodox_easter",
    "nth_weekday_of_month",
    "midsummer_day",
    "all_saints_saturday",
]
