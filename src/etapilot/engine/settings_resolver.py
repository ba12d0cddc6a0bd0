"""
ETAPilot Settings Resolver

Merges shop-wide defaults with a rule's overrides into the schedule that
applies at one instant.

Each override category is independent:
- cutoff times (weekday default, Saturday, Sunday)
- closed days
- courier non-delivery days
- lead time

A rule may override cutoff times while still inheriting closed days from
the global settings, and so on.
"""
from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ..calendars import build_holiday_set, parse_hhmm
from ..models import (
    DEFAULT_CUTOFF_TIME,
    WEEKEND,
    GlobalSettings,
    ResolvedSchedule,
    RuleSettings,
    Weekday,
)


_FALLBACK_CUTOFF = parse_hhmm(DEFAULT_CUTOFF_TIME)


def resolve_cutoff_time(
    rule_settings: Optional[RuleSettings],
    global_settings: GlobalSettings,
    weekday: Weekday,
) -> time:
    """
    Resolve the cutoff time for a given weekday.

    Order:
    1. rule.cutoff_time when cutoff overrides are on, else global.cutoff_time
    2. global.cutoff_time if (1) is empty or malformed
    3. 14:00
    On Saturday (Sunday) a well-formed Saturday (Sunday) value from the same
    source supersedes the result. Weekend values never affect other days.
    """
    override = rule_settings is not None and rule_settings.override_cutoff_times

    cutoff = None
    if override:
        cutoff = parse_hhmm(rule_settings.cutoff_time)
    if cutoff is None:
        cutoff = parse_hhmm(global_settings.cutoff_time) or _FALLBACK_CUTOFF

    if weekday == Weekday.SAT:
        weekend_value = rule_settings.cutoff_time_sat if override else global_settings.cutoff_time_sat
    elif weekday == Weekday.SUN:
        weekend_value = rule_settings.cutoff_time_sun if override else global_settings.cutoff_time_sun
    else:
        weekend_value = None

    return parse_hhmm(weekend_value) or cutoff


def resolve_day_set(
    override: bool,
    rule_days: Optional[frozenset[Weekday]],
    global_days: Optional[frozenset[Weekday]],
    empty_when_unset: bool = False,
) -> frozenset[Weekday]:
    """
    Resolve a closed-day or courier-day set.

    An enabled override always wins, including an explicit empty set
    ("no days"). An override with no value means no days when
    `empty_when_unset` is set (closed days), else falls back to global
    (courier days).
    """
    if override:
        if rule_days is not None:
            return frozenset(rule_days)
        if empty_when_unset:
            return frozenset()
    if global_days is None:
        return WEEKEND
    return frozenset(global_days)


def resolve_lead_time(
    rule_settings: Optional[RuleSettings],
    global_settings: GlobalSettings,
) -> int:
    """Lead time in business days, never negative."""
    lead_time = None
    if rule_settings is not None and rule_settings.override_lead_time:
        lead_time = rule_settings.lead_time
    if lead_time is None:
        lead_time = global_settings.lead_time
    return max(0, int(lead_time or 0))


def resolve_settings(
    rule_settings: Optional[RuleSettings],
    global_settings: GlobalSettings,
    now: datetime,
) -> ResolvedSchedule:
    """
    Resolve the effective schedule for a rule at an instant.

    Args:
        rule_settings: Matched rule's settings, or None for global only
        global_settings: Shop-wide settings
        now: Timezone-adjusted wall-clock time

    Returns:
        ResolvedSchedule for `now`
    """
    rs = rule_settings
    closed_days = resolve_day_set(
        rs is not None and rs.override_closed_days,
        rs.closed_days if rs is not None else None,
        global_settings.closed_days,
        empty_when_unset=True,
    )
    courier_days = resolve_day_set(
        rs is not None and rs.override_courier_no_delivery_days,
        rs.courier_no_delivery_days if rs is not None else None,
        global_settings.courier_no_delivery_days,
    )
    holidays = build_holiday_set(
        global_settings.bank_holiday_country,
        global_settings.custom_holidays,
        (now.year, now.year + 1),
    )
    return ResolvedSchedule(
        cutoff_time=resolve_cutoff_time(rs, global_settings, Weekday.of(now.date())),
        closed_days=closed_days,
        courier_no_delivery_days=courier_days,
        lead_time_days=resolve_lead_time(rs, global_settings),
        holidays=holidays,
    )
