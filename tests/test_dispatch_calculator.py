"""
ETAPilot Dispatch Calculator Tests

Tests for shipment dates, delivery windows, countdowns and timelines.
"""
from __future__ import annotations

from datetime import date, time
from typing import Optional

import pytest

from etapilot.engine import (
    DispatchCalculator,
    build_eta_timeline,
    compute_countdown,
    compute_shipment_date,
    estimate_delivery,
    is_before_cutoff,
)
from etapilot.exceptions import BusinessDayLimitExceeded
from etapilot.models import (
    WEEKEND,
    CountdownState,
    ResolvedSchedule,
    TimelineStage,
    Weekday,
)
from tests.conftest import at, days


def make_schedule(
    cutoff: time = time(14, 0),
    closed_days: Optional[frozenset] = None,
    courier_days: Optional[frozenset] = None,
    lead_time: int = 0,
    holidays: tuple = (),
) -> ResolvedSchedule:
    """ResolvedSchedule with weekends closed by default."""
    return ResolvedSchedule(
        cutoff_time=cutoff,
        closed_days=WEEKEND if closed_days is None else closed_days,
        courier_no_delivery_days=WEEKEND if courier_days is None else courier_days,
        lead_time_days=lead_time,
        holidays=frozenset(holidays),
    )


# =============================================================================
# Shipment Date
# =============================================================================

class TestShipmentDate:
    """Tests for the day an order leaves the warehouse."""

    def test_before_cutoff_ships_today(self, monday_morning) -> None:
        """Test an open day before cutoff ships the same day."""
        assert compute_shipment_date(monday_morning, make_schedule()) == date(2025, 1, 13)

    def test_after_cutoff_ships_next_open_day(self) -> None:
        """Test orders after cutoff move to the next open day."""
        assert compute_shipment_date(at("2025-01-13 15:00"), make_schedule()) == date(2025, 1, 14)

    def test_exactly_at_cutoff_is_after(self) -> None:
        """Test the cutoff instant itself no longer ships today."""
        now = at("2025-01-13 14:00")
        assert not is_before_cutoff(now, make_schedule())
        assert compute_shipment_date(now, make_schedule()) == date(2025, 1, 14)

    def test_friday_after_cutoff_ships_monday(self) -> None:
        """Test the weekend is skipped."""
        assert compute_shipment_date(at("2025-01-17 15:00"), make_schedule()) == date(2025, 1, 20)

    def test_weekend_order_ships_monday(self, saturday_morning) -> None:
        """Test an order on a closed day ships on the next open day."""
        assert compute_shipment_date(saturday_morning, make_schedule()) == date(2025, 1, 13)

    def test_holiday_today_skipped(self, monday_morning) -> None:
        """Test a holiday is not an open day even before cutoff."""
        schedule = make_schedule(holidays=(date(2025, 1, 13),))
        assert compute_shipment_date(monday_morning, schedule) == date(2025, 1, 14)

    def test_lead_time_added(self, monday_morning) -> None:
        """Test lead time is added in courier working days."""
        schedule = make_schedule(lead_time=2)
        assert compute_shipment_date(monday_morning, schedule) == date(2025, 1, 15)

    def test_lead_time_skips_weekend(self) -> None:
        """Test lead time crosses the weekend."""
        schedule = make_schedule(lead_time=1)
        assert compute_shipment_date(at("2025-01-17 10:00"), schedule) == date(2025, 1, 20)

    def test_never_before_today(self) -> None:
        """Test shipment is never earlier than the order date."""
        schedule = make_schedule(closed_days=days("mon", "wed"), holidays=(date(2025, 1, 14),))
        for day in range(6, 20):
            now = at(f"2025-01-{day:02d} 16:00")
            assert compute_shipment_date(now, schedule) >= now.date()


# =============================================================================
# Delivery Estimate
# =============================================================================

class TestEstimateDelivery:
    """Tests for the full delivery estimate."""

    def test_monday_morning(self, monday_morning) -> None:
        """Test the reference Monday scenario."""
        estimate = estimate_delivery(monday_morning, make_schedule(), 3, 5)
        assert estimate.shipment_date == date(2025, 1, 13)
        assert estimate.delivery_min == date(2025, 1, 16)
        assert estimate.delivery_max == date(2025, 1, 20)
        assert estimate.express_date == date(2025, 1, 14)
        assert estimate.arrival_text == "Jan 16-20"
        assert estimate.express_text == "Jan 14"

    def test_saturday_matches_monday(self, saturday_morning) -> None:
        """Test a weekend order gives the same window as Monday morning."""
        estimate = estimate_delivery(saturday_morning, make_schedule(), 3, 5)
        assert estimate.shipment_date == date(2025, 1, 13)
        assert estimate.arrival_text == "Jan 16-20"
        assert estimate.express_text == "Jan 14"

    def test_holiday_in_window(self, monday_morning) -> None:
        """Test holidays push the delivery window out."""
        schedule = make_schedule(holidays=(date(2025, 1, 14),))
        estimate = estimate_delivery(monday_morning, schedule, 3, 5)
        assert estimate.express_date == date(2025, 1, 15)
        assert estimate.delivery_min == date(2025, 1, 17)
        assert estimate.delivery_max == date(2025, 1, 21)

    def test_delivery_uses_courier_days_not_closed_days(self) -> None:
        """Test a courier that works weekends delivers on Saturday."""
        schedule = make_schedule(courier_days=frozenset())
        estimate = estimate_delivery(at("2025-01-17 10:00"), schedule, 1, 2)
        assert estimate.shipment_date == date(2025, 1, 17)
        assert estimate.delivery_min == date(2025, 1, 18)
        assert estimate.delivery_max == date(2025, 1, 19)

    def test_upside_down_window_swapped(self, monday_morning) -> None:
        """Test min > max is treated as max..min."""
        swapped = estimate_delivery(monday_morning, make_schedule(), 5, 3)
        assert swapped.delivery_min == date(2025, 1, 16)
        assert swapped.delivery_max == date(2025, 1, 20)

    def test_min_never_after_max(self, monday_morning) -> None:
        """Test window ordering across a range of inputs."""
        schedule = make_schedule(holidays=(date(2025, 1, 15), date(2025, 1, 22)))
        for lo in range(0, 6):
            for hi in range(0, 6):
                estimate = estimate_delivery(monday_morning, schedule, lo, hi)
                assert estimate.shipment_date <= estimate.delivery_min <= estimate.delivery_max

    def test_single_day_window(self, monday_morning) -> None:
        """Test equal bounds give a single date."""
        estimate = estimate_delivery(monday_morning, make_schedule(), 2, 2)
        assert estimate.arrival_text == "Jan 15"

    def test_strict_mode_raises_when_courier_never_works(self, monday_morning) -> None:
        """Test strict mode surfaces an exhausted walk."""
        schedule = make_schedule(courier_days=frozenset(Weekday))
        with pytest.raises(BusinessDayLimitExceeded):
            estimate_delivery(monday_morning, schedule, 1, 2, strict=True)


# =============================================================================
# Countdown
# =============================================================================

class TestCountdown:
    """Tests for the cutoff countdown."""

    def test_normal(self) -> None:
        """Test hours and minutes remaining."""
        countdown = compute_countdown(at("2025-01-13 11:46"), make_schedule())
        assert countdown.state == CountdownState.NORMAL
        assert (countdown.hours, countdown.minutes) == (2, 14)
        assert countdown.formatted == "02h 14m"
        assert countdown.is_active

    def test_exactly_at_cutoff(self) -> None:
        """Test zero remaining is cutoff passed."""
        countdown = compute_countdown(at("2025-01-13 14:00"), make_schedule())
        assert countdown.state == CountdownState.CUTOFF_PASSED
        assert countdown.formatted == ""

    def test_after_cutoff(self) -> None:
        """Test negative remaining is cutoff passed."""
        countdown = compute_countdown(at("2025-01-13 18:30"), make_schedule())
        assert countdown.state == CountdownState.CUTOFF_PASSED

    def test_closed_today(self, saturday_morning) -> None:
        """Test a closed day reports closed_today."""
        countdown = compute_countdown(saturday_morning, make_schedule())
        assert countdown.state == CountdownState.CLOSED_TODAY
        assert not countdown.is_active

    def test_holiday_today(self, monday_morning) -> None:
        """Test a holiday on an open day reports holiday_today."""
        schedule = make_schedule(holidays=(date(2025, 1, 13),))
        assert compute_countdown(monday_morning, schedule).state == CountdownState.HOLIDAY_TODAY

    def test_closed_takes_precedence_over_holiday(self, saturday_morning) -> None:
        """Test a closed day that is also a holiday reports closed_today."""
        schedule = make_schedule(holidays=(date(2025, 1, 11),))
        assert compute_countdown(saturday_morning, schedule).state == CountdownState.CLOSED_TODAY


# =============================================================================
# Timeline and Calculator
# =============================================================================

class TestTimeline:
    """Tests for the ETA timeline."""

    def test_default_labels(self, monday_morning) -> None:
        """Test stage order, labels and dates."""
        estimate = estimate_delivery(monday_morning, make_schedule(), 3, 5)
        timeline = build_eta_timeline(monday_morning.date(), estimate)
        assert [e.stage for e in timeline.entries] == [
            TimelineStage.ORDERED,
            TimelineStage.SHIPPED,
            TimelineStage.DELIVERED,
        ]
        assert [e.label for e in timeline.entries] == ["Ordered", "Shipped", "Delivered"]
        assert [e.date_text for e in timeline.entries] == ["Jan 13", "Jan 13", "Jan 16-20"]

    def test_custom_labels(self, monday_morning) -> None:
        """Test blank custom labels keep the default."""
        estimate = estimate_delivery(monday_morning, make_schedule(), 3, 5)
        timeline = build_eta_timeline(
            monday_morning.date(),
            estimate,
            {TimelineStage.ORDERED: "Bought", TimelineStage.SHIPPED: ""},
        )
        assert timeline.get(TimelineStage.ORDERED).label == "Bought"
        assert timeline.get(TimelineStage.SHIPPED).label == "Shipped"


class TestDispatchCalculator:
    """Tests for the schedule-bound calculator."""

    def test_delegates(self, monday_morning) -> None:
        """Test the calculator matches the module functions."""
        calculator = DispatchCalculator(make_schedule())
        assert calculator.shipment_date(monday_morning) == date(2025, 1, 13)
        assert calculator.estimate(monday_morning, 3, 5).arrival_text == "Jan 16-20"
        assert calculator.countdown(monday_morning).formatted == "04h 00m"

    def test_recomputed_each_call(self) -> None:
        """Test the countdown follows the clock between calls."""
        calculator = DispatchCalculator(make_schedule())
        first = calculator.countdown(at("2025-01-13 10:00"))
        second = calculator.countdown(at("2025-01-13 13:30"))
        assert first.formatted == "04h 00m"
        assert second.formatted == "00h 30m"
