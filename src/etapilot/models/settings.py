"""
ETAPilot Global Settings

Shop-wide defaults consulted whenever a rule does not override a value,
plus the holiday and free-delivery configuration that only exists at
shop level.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import WEEKEND, Weekday


DEFAULT_CUTOFF_TIME = "14:00"
DEFAULT_FD_THRESHOLD = 5000  # minor units
DEFAULT_CURRENCY = "USD"

DEFAULT_FD_MESSAGE_PROGRESS = "Spend {remaining} more for free delivery"
DEFAULT_FD_MESSAGE_UNLOCKED = "You've unlocked free delivery!"
DEFAULT_FD_MESSAGE_EXCLUDED = "Free delivery not available for some items in your cart"


@dataclass(frozen=True)
class CustomHoliday:
    """A merchant-declared non-working date ("YYYY-MM-DD")."""
    date: str
    label: str = ""


@dataclass
class GlobalSettings:
    """
    Shop-wide settings.

    Attributes:
        preview_timezone: IANA zone used to evaluate "now" (empty = as given)
        cutoff_time: Default order cutoff "HH:MM"
        cutoff_time_sat: Saturday cutoff, supersedes the default on Saturdays
        cutoff_time_sun: Sunday cutoff, supersedes the default on Sundays
        lead_time: Business days between order day and shipment
        closed_days: Weekdays the warehouse does not ship
        courier_no_delivery_days: Weekdays the courier does not move parcels
        bank_holiday_country: ISO country code for national holidays
        custom_holidays: Extra non-working dates
    """
    preview_timezone: str = ""
    cutoff_time: str = DEFAULT_CUTOFF_TIME
    cutoff_time_sat: str = ""
    cutoff_time_sun: str = ""
    lead_time: Optional[int] = 0
    closed_days: Optional[frozenset[Weekday]] = WEEKEND
    courier_no_delivery_days: Optional[frozenset[Weekday]] = WEEKEND
    bank_holiday_country: str = ""
    custom_holidays: list[CustomHoliday] = field(default_factory=list)

    # Free delivery
    fd_enabled: bool = False
    fd_threshold: int = DEFAULT_FD_THRESHOLD
    fd_exclude_tags: list[str] = field(default_factory=list)
    fd_exclude_handles: list[str] = field(default_factory=list)
    fd_message_progress: str = DEFAULT_FD_MESSAGE_PROGRESS
    fd_message_unlocked: str = DEFAULT_FD_MESSAGE_UNLOCKED
    fd_message_empty: str = ""
    fd_message_excluded: str = DEFAULT_FD_MESSAGE_EXCLUDED
    currency: str = DEFAULT_CURRENCY

    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.extra)
        result.update({
            "preview_timezone": self.preview_timezone,
            "cutoff_time": self.cutoff_time,
            "cutoff_time_sat": self.cutoff_time_sat,
            "cutoff_time_sun": self.cutoff_time_sun,
            "lead_time": self.lead_time,
            "closed_days": None if self.closed_days is None else [
                d.value for d in Weekday if d in self.closed_days
            ],
            "courier_no_delivery_days": None if self.courier_no_delivery_days is None else [
                d.value for d in Weekday if d in self.courier_no_delivery_days
            ],
            "bank_holiday_country": self.bank_holiday_country,
            "custom_holidays": [
                {"date": h.date, "label": h.label} for h in self.custom_holidays
            ],
            "fd_enabled": self.fd_enabled,
            "fd_threshold": self.fd_threshold,
            "fd_exclude_tags": list(self.fd_exclude_tags),
            "fd_exclude_handles": list(self.fd_exclude_handles),
            "fd_message_progress": self.fd_message_progress,
            "fd_message_unlocked": self.fd_message_unlocked,
            "fd_message_empty": self.fd_message_empty,
            "fd_message_excluded": self.fd_message_excluded,
            "currency": self.currency,
        })
        return result


def default_global_settings() -> GlobalSettings:
    """Settings used for a shop that has never saved any."""
    return GlobalSettings()
