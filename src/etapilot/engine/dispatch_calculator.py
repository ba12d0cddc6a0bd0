"""
ETAPilot Dispatch Calculator

Converts a resolved schedule and the current wall-clock time into a
shipment date, a delivery window and a cutoff countdown.

Key rules:
- Orders placed strictly before today's cutoff on an open day ship today;
  otherwise they ship on the next open day (closed days + holidays)
- Lead time is added on top of the base shipment day, counted on courier
  working days
- Delivery and express dates are counted on courier working days from
  the shipment date, never on closed days
- The countdown is re-derived on every call; nothing is cached
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..calendars import (
    BusinessCalendar,
    format_date_range,
    format_short_date,
)
from ..models import (
    DEFAULT_ETA_MAX_DAYS,
    DEFAULT_ETA_MIN_DAYS,
    Countdown,
    CountdownState,
    DeliveryEstimate,
    EtaTimeline,
    ResolvedSchedule,
    TimelineEntry,
    TimelineStage,
    Weekday,
)


logger = logging.getLogger(__name__)

DEFAULT_TIMELINE_LABELS = {
    TimelineStage.ORDERED: "Ordered",
    TimelineStage.SHIPPED: "Shipped",
    TimelineStage.DELIVERED: "Delivered",
}


# =============================================================================
# Shipment
# =============================================================================

def is_before_cutoff(now: datetime, schedule: ResolvedSchedule) -> bool:
    """True when `now` is strictly earlier than today's cutoff."""
    cutoff = datetime.combine(now.date(), schedule.cutoff_time, tzinfo=now.tzinfo)
    return now < cutoff


def compute_shipment_date(
    now: datetime,
    schedule: ResolvedSchedule,
    strict: bool = False,
) -> date:
    """
    Calculate the day an order placed at `now` leaves the warehouse.

    Args:
        now: Timezone-adjusted wall-clock time
        schedule: Resolved schedule
        strict: Raise BusinessDayLimitExceeded instead of approximating

    Returns:
        Shipment date including lead time
    """
    today = now.date()
    warehouse = BusinessCalendar(schedule.closed_days, schedule.holidays, strict)
    courier = BusinessCalendar(schedule.courier_no_delivery_days, schedule.holidays, strict)

    if is_before_cutoff(now, schedule) and warehouse.is_business_day(today):
        shipment = today
    else:
        shipment = warehouse.next_business_day(today + timedelta(days=1))

    if schedule.lead_time_days > 0:
        shipment = courier.add_business_days(shipment, schedule.lead_time_days)

    logger.debug(
        "Shipment date %s for order at %s (lead time %d)",
        shipment, now.isoformat(), schedule.lead_time_days,
    )
    return shipment


# =============================================================================
# Delivery Window
# =============================================================================

def compute_delivery_range(
    shipment_date: date,
    min_days: int,
    max_days: int,
    courier_no_delivery_days: frozenset[Weekday],
    holidays: frozenset[date] = frozenset(),
    strict: bool = False,
) -> tuple[date, date]:
    """
    Calculate the earliest and latest arrival dates.

    Both bounds are counted in courier working days from the shipment date.

    Returns:
        (min_date, max_date)
    """
    courier = BusinessCalendar(courier_no_delivery_days, holidays, strict)
    return (
        courier.add_business_days(shipment_date, min_days),
        courier.add_business_days(shipment_date, max_days),
    )


def compute_express_date(
    shipment_date: date,
    courier_no_delivery_days: frozenset[Weekday],
    holidays: frozenset[date] = frozenset(),
    strict: bool = False,
) -> date:
    """Arrival date for next-business-day service."""
    courier = BusinessCalendar(courier_no_delivery_days, holidays, strict)
    return courier.add_business_days(shipment_date, 1)


def estimate_delivery(
    now: datetime,
    schedule: ResolvedSchedule,
    min_days: int = DEFAULT_ETA_MIN_DAYS,
    max_days: int = DEFAULT_ETA_MAX_DAYS,
    strict: bool = False,
) -> DeliveryEstimate:
    """
    Full delivery estimate for an order placed at `now`.

    A window given upside down (min > max) is swapped.
    """
    min_days = max(0, min_days)
    max_days = max(0, max_days)
    if min_days > max_days:
        min_days, max_days = max_days, min_days

    shipment = compute_shipment_date(now, schedule, strict=strict)
    delivery_min, delivery_max = compute_delivery_range(
        shipment,
        min_days,
        max_days,
        schedule.courier_no_delivery_days,
        schedule.holidays,
        strict=strict,
    )
    express = compute_express_date(
        shipment, schedule.courier_no_delivery_days, schedule.holidays, strict=strict
    )
    return DeliveryEstimate(
        shipment_date=shipment,
        delivery_min=delivery_min,
        delivery_max=delivery_max,
        express_date=express,
        arrival_text=format_date_range(delivery_min, delivery_max),
        express_text=format_short_date(express),
    )


# =============================================================================
# Countdown
# =============================================================================

def compute_countdown(now: datetime, schedule: ResolvedSchedule) -> Countdown:
    """
    Time left until today's cutoff.

    A closed day takes precedence over a holiday, and both take precedence
    over the numeric countdown. Zero or negative remaining time is
    reported as cutoff_passed.
    """
    today = now.date()
    if Weekday.of(today) in schedule.closed_days:
        return Countdown(state=CountdownState.CLOSED_TODAY)
    if today in schedule.holidays:
        return Countdown(state=CountdownState.HOLIDAY_TODAY)

    cutoff = datetime.combine(today, schedule.cutoff_time, tzinfo=now.tzinfo)
    remaining = cutoff - now
    if remaining <= timedelta(0):
        return Countdown(state=CountdownState.CUTOFF_PASSED)

    total_minutes = int(remaining.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return Countdown(state=CountdownState.NORMAL, hours=hours, minutes=minutes)


# =============================================================================
# Timeline
# =============================================================================

def build_eta_timeline(
    order_date: date,
    estimate: DeliveryEstimate,
    labels: Optional[dict[TimelineStage, str]] = None,
) -> EtaTimeline:
    """Ordered / Shipped / Delivered stages with formatted dates."""
    names = dict(DEFAULT_TIMELINE_LABELS)
    if labels:
        names.update({stage: text for stage, text in labels.items() if text})
    return EtaTimeline(entries=(
        TimelineEntry(TimelineStage.ORDERED, names[TimelineStage.ORDERED],
                      format_short_date(order_date)),
        TimelineEntry(TimelineStage.SHIPPED, names[TimelineStage.SHIPPED],
                      format_short_date(estimate.shipment_date)),
        TimelineEntry(TimelineStage.DELIVERED, names[TimelineStage.DELIVERED],
                      estimate.arrival_text),
    ))


# =============================================================================
# Calculator
# =============================================================================

@dataclass
class DispatchCalculator:
    """
    Calculator bound to one resolved schedule.

    Usage:
        calculator = DispatchCalculator(schedule)
        estimate = calculator.estimate(now, min_days=3, max_days=5)
        countdown = calculator.countdown(now)
    """

    schedule: ResolvedSchedule

    # Raise instead of approximating when a business day walk is exhausted
    strict: bool = False

    def shipment_date(self, now: datetime) -> date:
        return compute_shipment_date(now, self.schedule, strict=self.strict)

    def estimate(
        self,
        now: datetime,
        min_days: int = DEFAULT_ETA_MIN_DAYS,
        max_days: int = DEFAULT_ETA_MAX_DAYS,
    ) -> DeliveryEstimate:
        return estimate_delivery(now, self.schedule, min_days, max_days, strict=self.strict)

    def countdown(self, now: datetime) -> Countdown:
        return compute_countdown(now, self.schedule)
