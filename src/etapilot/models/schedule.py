"""
ETAPilot Schedule Models

Inputs and outputs of the estimation engine.

Key components:
- ProductDescriptor: What the rule matcher knows about a product
- ResolvedSchedule: Effective dispatch parameters for one evaluation
- Countdown: Time left until today's cutoff
- DeliveryEstimate: Shipment date and delivery window
- EtaTimeline: Ordered / Shipped / Delivered stages
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional

from .enums import CountdownState, StockStatus, TimelineStage, Weekday


# =============================================================================
# Product
# =============================================================================

@dataclass(frozen=True)
class ProductDescriptor:
    """
    A product as seen by the rule matcher.

    `stock_status` is None when the storefront could not determine it;
    such a product only satisfies rules whose stock status is "any".
    """
    handle: str
    tags: frozenset[str] = frozenset()
    stock_status: Optional[StockStatus] = None


# =============================================================================
# Resolved Schedule
# =============================================================================

@dataclass(frozen=True)
class ResolvedSchedule:
    """
    Effective dispatch parameters for a single evaluation instant.

    Produced by settings resolution, consumed by the dispatch calculator.
    """
    cutoff_time: time
    closed_days: frozenset[Weekday]
    courier_no_delivery_days: frozenset[Weekday]
    lead_time_days: int
    holidays: frozenset[date] = frozenset()


# =============================================================================
# Countdown
# =============================================================================

@dataclass(frozen=True)
class Countdown:
    """Remaining time until today's cutoff, or the reason there is none."""
    state: CountdownState
    hours: int = 0
    minutes: int = 0

    @property
    def is_active(self) -> bool:
        return self.state == CountdownState.NORMAL

    @property
    def formatted(self) -> str:
        """Display form such as 02h 14m, empty when not counting down."""
        if not self.is_active:
            return ""
        return f"{self.hours:02d}h {self.minutes:02d}m"


# =============================================================================
# Delivery Estimate
# =============================================================================

@dataclass(frozen=True)
class DeliveryEstimate:
    """
    Result of a delivery calculation.

    Attributes:
        shipment_date: Day the parcel leaves the warehouse
        delivery_min: Earliest arrival date
        delivery_max: Latest arrival date
        express_date: Arrival date for next-business-day service
        arrival_text: Formatted window ("Jan 16-20")
        express_text: Formatted express date ("Jan 14")
    """
    shipment_date: date
    delivery_min: date
    delivery_max: date
    express_date: date
    arrival_text: str
    express_text: str


@dataclass(frozen=True)
class TimelineEntry:
    """One stage of the ETA timeline."""
    stage: TimelineStage
    label: str
    date_text: str


@dataclass(frozen=True)
class EtaTimeline:
    """Ordered, Shipped and Delivered stages for display."""
    entries: tuple[TimelineEntry, ...] = field(default_factory=tuple)

    def get(self, stage: TimelineStage) -> Optional[TimelineEntry]:
        for entry in self.entries:
            if entry.stage == stage:
                return entry
        return None
