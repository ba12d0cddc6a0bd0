"""
National Holiday Definitions

Public holidays for the countries supported by the holiday provider.

Each country is a HolidayDefinition whose generator returns
(date, name) pairs for a year. Holiday types:
- Fixed: same date every year (e.g. Jan 1, Dec 25)
- Easter-based: offset from Western or Orthodox Easter Sunday
- Nth weekday: e.g. "first Monday of May"
- Substitute days: extra dates when a holiday falls on a weekend

Europe: AT BE CH CZ DE DK ES FI FR GB GR HU IE IT LU NL NO PL PT RO SE SK
North America: CA US
Oceania: AU NZ
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable

from .rules import (
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    all_saints_saturday,
    easter_offset,
    midsummer_day,
    monday_on_or_before,
    nth_weekday_of_month,
)


HolidayList = list[tuple[date, str]]


@dataclass(frozen=True)
class HolidayDefinition:
    """
    A country's holiday calendar.

    Attributes:
        code: ISO 3166-1 alpha-2 code
        name: Country name
        generator: Function returning (date, name) pairs for a year
    """
    code: str
    name: str
    generator: Callable[[int], HolidayList]

    def holidays_for(self, year: int) -> HolidayList:
        return self.generator(year)


def _fixed(year: int, *entries: tuple[int, int, str]) -> HolidayList:
    return [(date(year, month, day), name) for month, day, name in entries]


def _christmas_substitutes(year: int) -> HolidayList:
    """Weekday substitutes when Christmas falls on a weekend (IE, AU, NZ)."""
    christmas = date(year, 12, 25)
    if christmas.weekday() == SUNDAY:
        return [(date(year, 12, 27), "Christmas Day (Substitute)")]
    if christmas.weekday() == SATURDAY:
        return [
            (date(year, 12, 27), "Christmas Day (Substitute)"),
            (date(year, 12, 28), "Boxing Day (Substitute)"),
        ]
    return []


# =============================================================================
# Europe
# =============================================================================

def _austria(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 6, "Epiphany"),
        (5, 1, "Labour Day"),
        (8, 15, "Assumption"),
        (10, 26, "National Day"),
        (11, 1, "All Saints"),
        (12, 8, "Immaculate Conception"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
        (easter_offset(year, 60), "Corpus Christi"),
    ]


def _belgium(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (5, 1, "Labour Day"),
        (7, 21, "Belgian National Day"),
        (8, 15, "Assumption"),
        (11, 1, "All Saints"),
        (11, 11, "Armistice Day"),
        (12, 25, "Christmas Day"),
    ) + [
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _switzerland(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 2, "Berchtold's Day"),
        (8, 1, "Swiss National Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _czech_republic(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (5, 1, "Labour Day"),
        (5, 8, "Liberation Day"),
        (7, 5, "Saints Cyril and Methodius"),
        (7, 6, "Jan Hus Day"),
        (9, 28, "Czech Statehood Day"),
        (10, 28, "Independence Day"),
        (11, 17, "Struggle for Freedom Day"),
        (12, 24, "Christmas Eve"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
    ]


def _germany(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (5, 1, "Labour Day"),
        (10, 3, "German Unity Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _denmark(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (6, 5, "Constitution Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -3), "Maundy Thursday"),
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 26), "Great Prayer Day"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _spain(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 6, "Epiphany"),
        (5, 1, "Labour Day"),
        (8, 15, "Assumption"),
        (10, 12, "Hispanic Day"),
        (11, 1, "All Saints"),
        (12, 6, "Constitution Day"),
        (12, 8, "Immaculate Conception"),
        (12, 25, "Christmas Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
    ]


def _finland(year: int) -> HolidayList:
    midsummer = midsummer_day(year)
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 6, "Epiphany"),
        (5, 1, "May Day"),
        (12, 6, "Independence Day"),
        (12, 24, "Christmas Eve"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (midsummer - timedelta(days=1), "Midsummer Eve"),
        (midsummer, "Midsummer Day"),
        (all_saints_saturday(year), "All Saints"),
    ]


def _france(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (5, 1, "Labour Day"),
        (5, 8, "Victory in Europe Day"),
        (7, 14, "Bastille Day"),
        (8, 15, "Assumption"),
        (11, 1, "All Saints"),
        (11, 11, "Armistice Day"),
        (12, 25, "Christmas Day"),
    ) + [
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _united_kingdom(year: int) -> HolidayList:
    holidays = _fixed(
        year,
        (1, 1, "New Year's Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Boxing Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (nth_weekday_of_month(year, 5, MONDAY, 1), "Early May Bank Holiday"),
        (nth_weekday_of_month(year, 5, MONDAY, -1), "Spring Bank Holiday"),
        (nth_weekday_of_month(year, 8, MONDAY, -1), "Summer Bank Holiday"),
    ]

    christmas = date(year, 12, 25)
    boxing_day = date(year, 12, 26)
    if christmas.weekday() == SUNDAY:
        holidays.append((date(year, 12, 27), "Christmas Day (Substitute)"))
    elif christmas.weekday() == SATURDAY:
        holidays.append((date(year, 12, 27), "Christmas Day (Substitute)"))
        holidays.append((date(year, 12, 28), "Boxing Day (Substitute)"))
    if boxing_day.weekday() == SUNDAY:
        holidays.append((date(year, 12, 28), "Boxing Day (Substitute)"))
    return holidays


def _greece(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 6, "Epiphany"),
        (3, 25, "Independence Day"),
        (5, 1, "Labour Day"),
        (8, 15, "Assumption"),
        (10, 28, "Ochi Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -48, orthodox=True), "Clean Monday"),
        (easter_offset(year, -2, orthodox=True), "Good Friday"),
        (easter_offset(year, 0, orthodox=True), "Easter Sunday"),
        (easter_offset(year, 1, orthodox=True), "Easter Monday"),
        (easter_offset(year, 50, orthodox=True), "Whit Monday"),
    ]


def _hungary(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (3, 15, "National Day"),
        (5, 1, "Labour Day"),
        (8, 20, "St. Stephen's Day"),
        (10, 23, "Republic Day"),
        (11, 1, "All Saints"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 49), "Whit Sunday"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _ireland(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (3, 17, "St. Patrick's Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (nth_weekday_of_month(year, 2, MONDAY, 1), "St. Brigid's Day"),
        (easter_offset(year, 1), "Easter Monday"),
        (nth_weekday_of_month(year, 5, MONDAY, 1), "May Bank Holiday"),
        (nth_weekday_of_month(year, 6, MONDAY, 1), "June Bank Holiday"),
        (nth_weekday_of_month(year, 8, MONDAY, 1), "August Bank Holiday"),
        (nth_weekday_of_month(year, 10, MONDAY, -1), "October Bank Holiday"),
    ] + _christmas_substitutes(year)


def _italy(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 6, "Epiphany"),
        (4, 25, "Liberation Day"),
        (5, 1, "Labour Day"),
        (6, 2, "Republic Day"),
        (8, 15, "Assumption"),
        (11, 1, "All Saints"),
        (12, 8, "Immaculate Conception"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (easter_offset(year, 0), "Easter Sunday"),
        (easter_offset(year, 1), "Easter Monday"),
    ]


def _luxembourg(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (5, 1, "Labour Day"),
        (5, 9, "Europe Day"),
        (6, 23, "National Day"),
        (8, 15, "Assumption"),
        (11, 1, "All Saints"),
        (12, 25, "Christmas Day"),
        (12, 26, "St. Stephen's Day"),
    ) + [
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _netherlands(year: int) -> HolidayList:
    # King's Day moves to the 26th when the 27th is a Sunday
    kings_day = date(year, 4, 27)
    if kings_day.weekday() == SUNDAY:
        kings_day = date(year, 4, 26)
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (5, 5, "Liberation Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (kings_day, "King's Day"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _norway(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (5, 1, "Labour Day"),
        (5, 17, "Constitution Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -3), "Maundy Thursday"),
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (easter_offset(year, 50), "Whit Monday"),
    ]


def _poland(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 6, "Epiphany"),
        (5, 1, "Labour Day"),
        (5, 3, "Constitution Day"),
        (8, 15, "Assumption"),
        (11, 1, "All Saints"),
        (11, 11, "Independence Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, 0), "Easter Sunday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 49), "Whit Sunday"),
        (easter_offset(year, 60), "Corpus Christi"),
    ]


def _portugal(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (4, 25, "Freedom Day"),
        (5, 1, "Labour Day"),
        (6, 10, "Portugal Day"),
        (8, 15, "Assumption"),
        (10, 5, "Republic Day"),
        (11, 1, "All Saints"),
        (12, 1, "Restoration of Independence"),
        (12, 8, "Immaculate Conception"),
        (12, 25, "Christmas Day"),
    ) + [
        (easter_offset(year, -47), "Carnival"),
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 0), "Easter Sunday"),
        (easter_offset(year, 60), "Corpus Christi"),
    ]


def _romania(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 2, "Day after New Year"),
        (1, 24, "Unification Day"),
        (5, 1, "Labour Day"),
        (6, 1, "Children's Day"),
        (8, 15, "Assumption"),
        (11, 30, "St. Andrew's Day"),
        (12, 1, "National Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -2, orthodox=True), "Good Friday"),
        (easter_offset(year, 0, orthodox=True), "Easter Sunday"),
        (easter_offset(year, 1, orthodox=True), "Easter Monday"),
        (easter_offset(year, 49, orthodox=True), "Whit Sunday"),
        (easter_offset(year, 50, orthodox=True), "Whit Monday"),
    ]


def _sweden(year: int) -> HolidayList:
    midsummer = midsummer_day(year)
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 6, "Epiphany"),
        (5, 1, "Labour Day"),
        (6, 6, "National Day"),
        (12, 24, "Christmas Eve"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (easter_offset(year, 39), "Ascension Day"),
        (midsummer - timedelta(days=1), "Midsummer Eve"),
        (midsummer, "Midsummer Day"),
        (all_saints_saturday(year), "All Saints"),
    ]


def _slovakia(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "Republic Day"),
        (1, 6, "Epiphany"),
        (5, 1, "Labour Day"),
        (5, 8, "Victory Day"),
        (7, 5, "Saints Cyril and Methodius"),
        (8, 29, "Slovak National Uprising"),
        (9, 1, "Constitution Day"),
        (9, 15, "Our Lady of Sorrows"),
        (11, 1, "All Saints"),
        (11, 17, "Struggle for Freedom Day"),
        (12, 24, "Christmas Eve"),
        (12, 25, "Christmas Day"),
        (12, 26, "Second Christmas Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
    ]


# =============================================================================
# North America
# =============================================================================

def _canada(year: int) -> HolidayList:
    holidays = _fixed(
        year,
        (1, 1, "New Year's Day"),
        (7, 1, "Canada Day"),
        (11, 11, "Remembrance Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Boxing Day"),
    ) + [
        (nth_weekday_of_month(year, 2, MONDAY, 3), "Family Day"),
        (easter_offset(year, -2), "Good Friday"),
        (monday_on_or_before(year, 5, 24), "Victoria Day"),
        (nth_weekday_of_month(year, 8, MONDAY, 1), "Civic Holiday"),
        (nth_weekday_of_month(year, 9, MONDAY, 1), "Labour Day"),
        (nth_weekday_of_month(year, 10, MONDAY, 2), "Thanksgiving"),
    ]
    if date(year, 7, 1).weekday() == SUNDAY:
        holidays.append((date(year, 7, 2), "Canada Day (Observed)"))
    return holidays


def _united_states(year: int) -> HolidayList:
    holidays = _fixed(
        year,
        (1, 1, "New Year's Day"),
        (6, 19, "Juneteenth"),
        (7, 4, "Independence Day"),
        (11, 11, "Veterans Day"),
        (12, 25, "Christmas Day"),
    ) + [
        (nth_weekday_of_month(year, 1, MONDAY, 3), "Martin Luther King Jr. Day"),
        (nth_weekday_of_month(year, 2, MONDAY, 3), "Presidents' Day"),
        (nth_weekday_of_month(year, 5, MONDAY, -1), "Memorial Day"),
        (nth_weekday_of_month(year, 9, MONDAY, 1), "Labor Day"),
        (nth_weekday_of_month(year, 10, MONDAY, 2), "Columbus Day"),
        (nth_weekday_of_month(year, 11, THURSDAY, 4), "Thanksgiving Day"),
    ]
    july_4 = date(year, 7, 4)
    if july_4.weekday() == SATURDAY:
        holidays.append((date(year, 7, 3), "Independence Day (Observed)"))
    elif july_4.weekday() == SUNDAY:
        holidays.append((date(year, 7, 5), "Independence Day (Observed)"))
    return holidays


# =============================================================================
# Oceania
# =============================================================================

def _australia(year: int) -> HolidayList:
    # Australia Day moves to the following Monday when it falls on a weekend
    australia_day = date(year, 1, 26)
    if australia_day.weekday() == SUNDAY:
        australia_day = date(year, 1, 27)
    elif australia_day.weekday() == SATURDAY:
        australia_day = date(year, 1, 28)
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (4, 25, "ANZAC Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Boxing Day"),
    ) + [
        (australia_day, "Australia Day"),
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (nth_weekday_of_month(year, 6, MONDAY, 2), "King's Birthday"),
    ] + _christmas_substitutes(year)


# Matariki follows the lunar calendar; outside the published years the
# June 20 approximation is used.
MATARIKI_DATES = {
    2024: date(2024, 6, 28),
    2025: date(2025, 6, 20),
    2026: date(2026, 7, 10),
    2027: date(2027, 6, 25),
    2028: date(2028, 7, 14),
    2029: date(2029, 7, 6),
    2030: date(2030, 6, 21),
}


def _new_zealand(year: int) -> HolidayList:
    return _fixed(
        year,
        (1, 1, "New Year's Day"),
        (1, 2, "Day after New Year's Day"),
        (2, 6, "Waitangi Day"),
        (4, 25, "ANZAC Day"),
        (12, 25, "Christmas Day"),
        (12, 26, "Boxing Day"),
    ) + [
        (easter_offset(year, -2), "Good Friday"),
        (easter_offset(year, 1), "Easter Monday"),
        (nth_weekday_of_month(year, 6, MONDAY, 1), "King's Birthday"),
        (MATARIKI_DATES.get(year, date(year, 6, 20)), "Matariki"),
        (nth_weekday_of_month(year, 10, MONDAY, 4), "Labour Day"),
    ] + _christmas_substitutes(year)


# =============================================================================
# Registry
# =============================================================================

HOLIDAY_DEFINITIONS: dict[str, HolidayDefinition] = {
    d.code: d
    for d in (
        HolidayDefinition("AT", "Austria", _austria),
        HolidayDefinition("BE", "Belgium", _belgium),
        HolidayDefinition("CH", "Switzerland", _switzerland),
        HolidayDefinition("CZ", "Czech Republic", _czech_republic),
        HolidayDefinition("DE", "Germany", _germany),
        HolidayDefinition("DK", "Denmark", _denmark),
        HolidayDefinition("ES", "Spain", _spain),
        HolidayDefinition("FI", "Finland", _finland),
        HolidayDefinition("FR", "France", _france),
        HolidayDefinition("GB", "United Kingdom", _united_kingdom),
        HolidayDefinition("GR", "Greece", _greece),
        HolidayDefinition("HU", "Hungary", _hungary),
        HolidayDefinition("IE", "Ireland", _ireland),
        HolidayDefinition("IT", "Italy", _italy),
        HolidayDefinition("LU", "Luxembourg", _luxembourg),
        HolidayDefinition("NL", "Netherlands", _netherlands),
        HolidayDefinition("NO", "Norway", _norway),
        HolidayDefinition("PL", "Poland", _poland),
        HolidayDefinition("PT", "Portugal", _portugal),
        HolidayDefinition("RO", "Romania", _romania),
        HolidayDefinition("SE", "Sweden", _sweden),
        HolidayDefinition("SK", "Slovakia", _slovakia),
        HolidayDefinition("CA", "Canada", _canada),
        HolidayDefinition("US", "United States", _united_states),
        HolidayDefinition("AU", "Australia", _australia),
        HolidayDefinition("NZ", "New Zealand", _new_zealand),
    )
}
