"""
ETAPilot Engine

Core estimation components:
- settings_resolver: global defaults + rule overrides -> ResolvedSchedule
- dispatch_calculator: shipment date, delivery window, countdown
- rule_matcher: first-match rule resolution
- templates: placeholder substitution and markdown
- delivery_engine: orchestration used by every caller
- cart_messages: per-line cart messages with an injected tag cache
- free_delivery: progress towards the free delivery threshold
"""
from __future__ import annotations

from .cart_messages import (
    CartLine,
    CartLineMessage,
    CartMessenger,
    InMemoryTagCache,
    TagSource,
    has_cart_message,
)
from .clock import localize, utc_now
from .delivery_engine import DeliveryEngine, ProductPreview
from .dispatch_calculator import (
    DispatchCalculator,
    build_eta_timeline,
    compute_countdown,
    compute_delivery_range,
    compute_express_date,
    compute_shipment_date,
    estimate_delivery,
    is_before_cutoff,
)
from .free_delivery import FreeDeliveryProgress, compute_free_delivery
from .rule_matcher import match_rule, rule_has_match, rule_matches
from .settings_resolver import (
    resolve_cutoff_time,
    resolve_day_set,
    resolve_lead_time,
    resolve_settings,
)
from .templates import (
    format_money,
    normalize_url,
    render_markdown,
    split_lines,
    strip_bold,
    substitute_placeholders,
)

__all__ = [
    # Orchestration
    "DeliveryEngine",
    "ProductPreview",
    "localize",
    "utc_now",
    # Settings resolution
    "resolve_settings",
    "resolve_cutoff_time",
    "resolve_day_set",
    "resolve_lead_time",
    # Dispatch
    "DispatchCalculator",
    "compute_shipment_date",
    "compute_delivery_range",
    "compute_express_date",
    "compute_countdown",
    "estimate_delivery",
    "build_eta_timeline",
    "is_before_cutoff",
    # Matching
    "match_rule",
    "rule_matches",
    "rule_has_match",
    # Templates
    "substitute_placeholders",
    "split_lines",
    "render_markdown",
    "normalize_url",
    "strip_bold",
    "format_money",
    # Cart
    "CartLine",
    "CartLineMessage",
    "CartMessenger",
    "InMemoryTagCache",
    "TagSource",
    "has_cart_message",
    # Free delivery
    "FreeDeliveryProgress",
    "compute_free_delivery",
]
