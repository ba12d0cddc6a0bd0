"""
ETAPilot Models

Domain models for the delivery estimation engine.

    from etapilot.models import (
        # Enums
        Weekday, StockStatus, CountdownState,
        # Configuration
        Config, Profile, Rule, Match, RuleSettings,
        # Settings
        GlobalSettings, CustomHoliday,
        # Engine inputs/outputs
        ProductDescriptor, ResolvedSchedule, Countdown, DeliveryEstimate,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    WEEKEND,
    CountdownState,
    FreeDeliveryState,
    StockStatus,
    TimelineStage,
    Weekday,
)

# =============================================================================
# Configuration
# =============================================================================
from .config import (
    CONFIG_VERSION_V1,
    CONFIG_VERSION_V2,
    DEFAULT_ETA_MAX_DAYS,
    DEFAULT_ETA_MIN_DAYS,
    Config,
    Match,
    Profile,
    Rule,
    RuleSettings,
)

# =============================================================================
# Settings
# =============================================================================
from .settings import (
    DEFAULT_CUTOFF_TIME,
    CustomHoliday,
    GlobalSettings,
    default_global_settings,
)

# =============================================================================
# Schedule
# =============================================================================
from .schedule import (
    Countdown,
    DeliveryEstimate,
    EtaTimeline,
    ProductDescriptor,
    ResolvedSchedule,
    TimelineEntry,
)

__all__ = [
    # Enums
    "WEEKEND",
    "CountdownState",
    "FreeDeliveryState",
    "StockStatus",
    "TimelineStage",
    "Weekday",
    # Configuration
    "CONFIG_VERSION_V1",
    "CONFIG_VERSION_V2",
    "DEFAULT_ETA_MAX_DAYS",
    "DEFAULT_ETA_MIN_DAYS",
    "Config",
    "Match",
    "Profile",
    "Rule",
    "RuleSettings",
    # Settings
    "DEFAULT_CUTOFF_TIME",
    "CustomHoliday",
    "GlobalSettings",
    "default_global_settings",
    # Schedule
    "Countdown",
    "DeliveryEstimate",
    "EtaTimeline",
    "ProductDescriptor",
    "ResolvedSchedule",
    "TimelineEntry",
]
