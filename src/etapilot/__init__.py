"""
ETAPilot - Delivery Date Estimation Engine

ETAPilot answers two questions for a storefront product page or cart:
which merchant rule applies to this product, and when will an order
placed now ship and arrive.

Key Features:
- Per-rule overrides of cutoff times, lead time, closed days and courier days
- Business day arithmetic with national holidays for 26 countries
- Countdown to today's cutoff
- First-match rule priority with fallback rules
- Versioned rule configs (flat rules -> profiles) with migration
- Message templates with {countdown}, {arrival}, {express}, {threshold}, {lb}

Quick Start:
    from etapilot import DeliveryEngine, ProductDescriptor
    from etapilot.config import active_rules, load_config, load_settings

    config = load_config("config.json")
    engine = DeliveryEngine(load_settings("settings.yaml"))

    preview = engine.preview(
        ProductDescriptor(handle="blue-shirt", tags=frozenset({"sale"})),
        active_rules(config),
        engine.now(),
    )
    if preview is not None:
        print(preview.estimate.arrival_text, preview.messages)

Version: 1.0.0
"""
from __future__ import annotations

__version__ = "1.0.0"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    CountdownState,
    FreeDeliveryState,
    StockStatus,
    TimelineStage,
    Weekday,
    # Configuration
    Config,
    Match,
    Profile,
    Rule,
    RuleSettings,
    # Settings
    CustomHoliday,
    GlobalSettings,
    # Engine inputs/outputs
    Countdown,
    DeliveryEstimate,
    EtaTimeline,
    ProductDescriptor,
    ResolvedSchedule,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    CartMessenger,
    DeliveryEngine,
    InMemoryTagCache,
    match_rule,
    resolve_settings,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    BusinessDayLimitExceeded,
    ConfigLoadError,
    ConfigValidationError,
    ConfigVersionError,
    ETAPilotError,
    InvalidDaySetError,
    LastProfileError,
    ProfileNotFoundError,
    RuleNotFoundError,
    SettingsValidationError,
    UndoExpiredError,
)

__all__ = [
    "__version__",
    # Enums
    "CountdownState",
    "FreeDeliveryState",
    "StockStatus",
    "TimelineStage",
    "Weekday",
    # Configuration
    "Config",
    "Match",
    "Profile",
    "Rule",
    "RuleSettings",
    # Settings
    "CustomHoliday",
    "GlobalSettings",
    # Engine inputs/outputs
    "Countdown",
    "DeliveryEstimate",
    "EtaTimeline",
    "ProductDescriptor",
    "ResolvedSchedule",
    # Engine
    "CartMessenger",
    "DeliveryEngine",
    "InMemoryTagCache",
    "match_rule",
    "resolve_settings",
    # Exceptions
    "ETAPilotError",
    "BusinessDayLimitExceeded",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigVersionError",
    "InvalidDaySetError",
    "LastProfileError",
    "ProfileNotFoundError",
    "RuleNotFoundError",
    "SettingsValidationError",
    "UndoExpiredError",
]
