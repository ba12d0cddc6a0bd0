"""
ETAPilot Enumerations

All enumeration types used throughout the ETAPilot engine.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from datetime import date
from enum import Enum


# =============================================================================
# Weekdays
# =============================================================================

class Weekday(str, Enum):
    """
    Three-letter weekday keys used in closed-day and courier day sets.

    Member order follows the storefront convention (Sunday first).
    """
    SUN = "sun"
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"

    @classmethod
    def of(cls, d: date) -> "Weekday":
        """Weekday key for a date."""
        # date.weekday(): Monday=0 .. Sunday=6
        return _BY_PY_WEEKDAY[d.weekday()]


_BY_PY_WEEKDAY = (
    Weekday.MON,
    Weekday.TUE,
    Weekday.WED,
    Weekday.THU,
    Weekday.FRI,
    Weekday.SAT,
    Weekday.SUN,
)

WEEKEND: frozenset[Weekday] = frozenset({Weekday.SAT, Weekday.SUN})


# =============================================================================
# Product / Rule Matching
# =============================================================================

class StockStatus(str, Enum):
    """Stock status constraint on a rule, and the observed status of a product."""
    ANY = "any"                    # No constraint (rules only)
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"
    PRE_ORDER = "pre_order"
    MIXED_STOCK = "mixed_stock"    # Some variants available


# =============================================================================
# Countdown
# =============================================================================

class CountdownState(str, Enum):
    """What the countdown should display right now."""
    NORMAL = "normal"                  # Counting down to today's cutoff
    CLOSED_TODAY = "closed_today"      # Today is a closed day
    HOLIDAY_TODAY = "holiday_today"    # Today is a holiday
    CUTOFF_PASSED = "cutoff_passed"    # Cutoff reached or passed


# =============================================================================
# Free Delivery
# =============================================================================

class FreeDeliveryState(str, Enum):
    """Progress of the cart towards the free delivery threshold."""
    EMPTY = "empty"
    PROGRESS = "progress"
    UNLOCKED = "unlocked"
    EXCLUDED = "excluded"


# =============================================================================
# Timeline
# =============================================================================

class TimelineStage(str, Enum):
    """Stages of the order-to-door timeline."""
    ORDERED = "ordered"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
