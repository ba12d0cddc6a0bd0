"""
ETAPilot Holiday Provider Tests

Tests for holiday rules and national calendars.
"""
from __future__ import annotations

from datetime import date

import pytest

from etapilot.calendars import (
    HOLIDAY_DEFINITIONS,
    build_holiday_set,
    calculate_easter,
    calculate_orthodox_easter,
    custom_holiday_dates,
    get_holiday_names,
    get_holidays_for_year,
    is_holiday,
    list_countries,
    midsummer_day,
    nth_weekday_of_month,
)
from etapilot.calendars.rules import MONDAY, THURSDAY, monday_on_or_before
from etapilot.models import CustomHoliday


# =============================================================================
# Rule Tests
# =============================================================================

class TestHolidayRules:
    """Tests for computed holiday rules."""

    @pytest.mark.parametrize("year,expected", [
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2026, date(2026, 4, 5)),
        (2027, date(2027, 3, 28)),
    ])
    def test_western_easter(self, year: int, expected: date) -> None:
        """Test Easter Sunday against published dates."""
        assert calculate_easter(year) == expected

    @pytest.mark.parametrize("year,expected", [
        (2024, date(2024, 5, 5)),
        (2025, date(2025, 4, 20)),
        (2026, date(2026, 4, 12)),
    ])
    def test_orthodox_easter(self, year: int, expected: date) -> None:
        """Test Orthodox Easter in the Gregorian calendar."""
        assert calculate_orthodox_easter(year) == expected

    def test_nth_weekday(self) -> None:
        """Test first, third and fourth occurrences."""
        assert nth_weekday_of_month(2025, 1, MONDAY, 3) == date(2025, 1, 20)
        assert nth_weekday_of_month(2025, 9, MONDAY, 1) == date(2025, 9, 1)
        assert nth_weekday_of_month(2025, 11, THURSDAY, 4) == date(2025, 11, 27)

    def test_last_weekday(self) -> None:
        """Test n=-1 gives the last occurrence."""
        assert nth_weekday_of_month(2025, 5, MONDAY, -1) == date(2025, 5, 26)
        assert nth_weekday_of_month(2025, 8, MONDAY, -1) == date(2025, 8, 25)

    def test_monday_on_or_before(self) -> None:
        """Test Victoria Day style rule."""
        assert monday_on_or_before(2025, 5, 24) == date(2025, 5, 19)
        assert monday_on_or_before(2027, 5, 24) == date(2027, 5, 24)

    def test_midsummer(self) -> None:
        """Test Midsummer is the Saturday between June 20 and 26."""
        assert midsummer_day(2025) == date(2025, 6, 21)
        assert midsummer_day(2024) == date(2024, 6, 22)


# =============================================================================
# National Calendar Tests
# =============================================================================

class TestNationalCalendars:
    """Tests for country holiday sets."""

    def test_registry_has_all_countries(self) -> None:
        """Test every supported country is registered."""
        assert len(HOLIDAY_DEFINITIONS) == 26
        assert {"GB", "US", "DE", "FR", "AU", "NZ", "CA", "SE"} <= set(HOLIDAY_DEFINITIONS)

    def test_list_countries_sorted_by_name(self) -> None:
        """Test country listing order."""
        names = [name for _, name in list_countries()]
        assert names == sorted(names)

    def test_gb_2025(self) -> None:
        """Test the UK bank holidays for 2025."""
        holidays = get_holidays_for_year("GB", 2025)
        assert holidays == frozenset({
            date(2025, 1, 1),
            date(2025, 4, 18),
            date(2025, 4, 21),
            date(2025, 5, 5),
            date(2025, 5, 26),
            date(2025, 8, 25),
            date(2025, 12, 25),
            date(2025, 12, 26),
        })

    def test_gb_christmas_substitutes(self) -> None:
        """Test weekend Christmas and Boxing Day substitutes."""
        # 2021: Christmas on Saturday
        assert {date(2021, 12, 27), date(2021, 12, 28)} <= get_holidays_for_year("GB", 2021)
        # 2022: Christmas on Sunday
        assert date(2022, 12, 27) in get_holidays_for_year("GB", 2022)

    def test_us_observed_independence_day(self) -> None:
        """Test July 4 on a Saturday is observed on Friday."""
        assert date(2026, 7, 3) in get_holidays_for_year("US", 2026)
        assert date(2025, 7, 3) not in get_holidays_for_year("US", 2025)

    def test_us_thanksgiving(self) -> None:
        """Test the fourth Thursday of November."""
        assert is_holiday(date(2025, 11, 27), "US")

    def test_australia_day_moves_off_weekend(self) -> None:
        """Test Australia Day on a Sunday moves to Monday."""
        holidays = get_holidays_for_year("AU", 2025)
        assert date(2025, 1, 27) in holidays
        assert date(2025, 1, 26) not in holidays

    def test_new_zealand_matariki(self) -> None:
        """Test the published Matariki date."""
        assert is_holiday(date(2025, 6, 20), "NZ")

    def test_sweden_midsummer_eve(self) -> None:
        """Test Midsummer Eve is the Friday before Midsummer Day."""
        holidays = get_holidays_for_year("SE", 2025)
        assert {date(2025, 6, 20), date(2025, 6, 21)} <= holidays

    def test_case_insensitive_code(self) -> None:
        """Test lowercase and padded codes."""
        assert get_holidays_for_year("gb", 2025) == get_holidays_for_year(" GB ", 2025)

    @pytest.mark.parametrize("code", ["", None, "XX", "ZZZ"])
    def test_unknown_country_is_empty(self, code) -> None:
        """Test unknown codes give no holidays rather than an error."""
        assert get_holidays_for_year(code, 2025) == frozenset()
        assert get_holiday_names(code, 2025) == []

    def test_names_sorted_by_date(self) -> None:
        """Test named listing order."""
        names = get_holiday_names("DE", 2025)
        dates = [d for d, _ in names]
        assert dates == sorted(dates)
        assert (date(2025, 10, 3), "German Unity Day") in names

    @pytest.mark.parametrize("code", sorted(HOLIDAY_DEFINITIONS))
    def test_every_calendar_in_year(self, code: str) -> None:
        """Test every calendar produces dates inside the requested year."""
        holidays = get_holidays_for_year(code, 2025)
        assert holidays
        assert all(d.year == 2025 for d in holidays)


# =============================================================================
# Holiday Set Tests
# =============================================================================

class TestHolidaySet:
    """Tests for combining national and custom holidays."""

    def test_custom_holiday_forms(self) -> None:
        """Test objects, strings and mappings are accepted; bad entries skipped."""
        dates = custom_holiday_dates([
            CustomHoliday(date="2025-08-01", label="Stocktake"),
            "2025-08-04",
            {"date": "2025-08-05"},
            "not-a-date",
            {"label": "missing date"},
        ])
        assert dates == frozenset({date(2025, 8, 1), date(2025, 8, 4), date(2025, 8, 5)})

    def test_build_spans_years(self) -> None:
        """Test national holidays for several years plus custom dates."""
        holidays = build_holiday_set("GB", ["2025-08-01"], [2025, 2026])
        assert date(2025, 12, 25) in holidays
        assert date(2026, 1, 1) in holidays
        assert date(2025, 8, 1) in holidays

    def test_build_without_country(self) -> None:
        """Test custom holidays alone."""
        assert build_holiday_set("", ["2025-08-01"], [2025]) == frozenset({date(2025, 8, 1)})
