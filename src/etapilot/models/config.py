"""
ETAPilot Configuration Models

Models for the merchant's rule configuration.

Key components:
- Match: Which products a rule targets
- RuleSettings: Message templates and dispatch overrides for a rule
- Rule: A named, ordered unit of configuration
- Profile: A named set of rules (v2 configs)
- Config: Versioned root object

Rule order inside a profile is the priority order: the first matching
rule wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import StockStatus, Weekday


CONFIG_VERSION_V1 = 1
CONFIG_VERSION_V2 = 2

DEFAULT_ETA_MIN_DAYS = 3
DEFAULT_ETA_MAX_DAYS = 5


def _day_list(days: Optional[frozenset[Weekday]]) -> Optional[list[str]]:
    """Serialize a day set in Sunday-first order."""
    if days is None:
        return None
    return [d.value for d in Weekday if d in days]


# =============================================================================
# Match
# =============================================================================

@dataclass
class Match:
    """
    Product targeting for a rule.

    Attributes:
        product_handles: Product handles the rule applies to
        tags: Product tags the rule applies to (any intersection)
        stock_status: Required stock status ("any" imposes nothing)
        is_fallback: Matches every product (subject to stock status)
    """
    product_handles: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    stock_status: StockStatus = StockStatus.ANY
    is_fallback: bool = False

    @property
    def has_targets(self) -> bool:
        """True when at least one non-blank handle or tag is listed."""
        return any(h.strip() for h in self.product_handles) or any(
            t.strip() for t in self.tags
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_handles": list(self.product_handles),
            "tags": list(self.tags),
            "stock_status": self.stock_status.value,
            "is_fallback": self.is_fallback,
        }


# =============================================================================
# Rule Settings
# =============================================================================

@dataclass
class RuleSettings:
    """
    Per-rule settings.

    Every override flag is independent: enabling one does not enable any
    other. A value is only consulted when its flag is set.

    Keys the engine does not interpret (styling, icons, layout) are kept in
    `extra` so a config survives a load/save round trip unchanged.
    """
    # Message templates
    message_line_1: str = ""
    message_line_2: str = ""
    message_line_3: str = ""
    cart_message: str = ""

    # Cutoff overrides
    override_cutoff_times: bool = False
    cutoff_time: Optional[str] = None
    cutoff_time_sat: Optional[str] = None
    cutoff_time_sun: Optional[str] = None

    # Lead time override
    override_lead_time: bool = False
    lead_time: Optional[int] = None

    # Day set overrides (None = not configured, empty set = no days)
    override_closed_days: bool = False
    closed_days: Optional[frozenset[Weekday]] = None
    override_courier_no_delivery_days: bool = False
    courier_no_delivery_days: Optional[frozenset[Weekday]] = None

    # Delivery window in business days after shipment
    eta_delivery_days_min: int = DEFAULT_ETA_MIN_DAYS
    eta_delivery_days_max: int = DEFAULT_ETA_MAX_DAYS

    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def message_lines(self) -> list[str]:
        return [self.message_line_1, self.message_line_2, self.message_line_3]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.extra)
        result.update({
            "message_line_1": self.message_line_1,
            "message_line_2": self.message_line_2,
            "message_line_3": self.message_line_3,
            "cart_message": self.cart_message,
            "override_cutoff_times": self.override_cutoff_times,
            "override_lead_time": self.override_lead_time,
            "override_closed_days": self.override_closed_days,
            "override_courier_no_delivery_days": self.override_courier_no_delivery_days,
            "eta_delivery_days_min": self.eta_delivery_days_min,
            "eta_delivery_days_max": self.eta_delivery_days_max,
        })
        optional = {
            "cutoff_time": self.cutoff_time,
            "cutoff_time_sat": self.cutoff_time_sat,
            "cutoff_time_sun": self.cutoff_time_sun,
            "lead_time": self.lead_time,
            "closed_days": _day_list(self.closed_days),
            "courier_no_delivery_days": _day_list(self.courier_no_delivery_days),
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        return result


# =============================================================================
# Rule / Profile / Config
# =============================================================================

@dataclass
class Rule:
    """
    A delivery messaging rule.

    Attributes:
        id: Opaque unique identifier
        name: Merchant-facing label
        match: Product targeting
        settings: Messages and dispatch overrides
    """
    id: str
    name: str
    match: Match = field(default_factory=Match)
    settings: RuleSettings = field(default_factory=RuleSettings)

    @property
    def is_fallback(self) -> bool:
        return self.match.is_fallback

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "match": self.match.to_dict(),
            "settings": self.settings.to_dict(),
        }


@dataclass
class Profile:
    """A named, ordered list of rules. The id survives renames."""
    id: str
    name: str
    rules: list[Rule] = field(default_factory=list)

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rules": [r.to_dict() for r in self.rules],
        }


@dataclass
class Config:
    """
    Root configuration object.

    Version 1 holds a flat `rules` list. Version 2 holds `profiles` plus
    the id of the active one.
    """
    version: int = CONFIG_VERSION_V2
    profiles: list[Profile] = field(default_factory=list)
    active_profile_id: Optional[str] = None
    rules: list[Rule] = field(default_factory=list)

    @property
    def is_v2(self) -> bool:
        return self.version == CONFIG_VERSION_V2

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None

    @property
    def active_profile(self) -> Optional[Profile]:
        """The active profile, or the first one when the id is dangling."""
        if not self.profiles:
            return None
        if self.active_profile_id:
            profile = self.get_profile(self.active_profile_id)
            if profile is not None:
                return profile
        return self.profiles[0]

    def to_dict(self) -> dict[str, Any]:
        if not self.is_v2:
            return {
                "version": self.version,
                "rules": [r.to_dict() for r in self.rules],
            }
        return {
            "version": self.version,
            "profiles": [p.to_dict() for p in self.profiles],
            "activeProfileId": self.active_profile_id,
        }
