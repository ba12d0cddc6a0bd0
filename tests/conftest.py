"""
Pytest configuration and fixtures for ETAPilot tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
import pytest
from datetime import datetime
from typing import Optional
from uuid import uuid4

from etapilot.models import (
    Config,
    CustomHoliday,
    GlobalSettings,
    Match,
    ProductDescriptor,
    Profile,
    Rule,
    RuleSettings,
    StockStatus,
    Weekday,
)


# =============================================================================
# Factory Helpers
# =============================================================================

def days(*keys: str) -> frozenset:
    """Day set from weekday keys: days("sat", "sun")."""
    return frozenset(Weekday(k) for k in keys)


def make_rule(
    name: str = "Rule",
    id: Optional[str] = None,
    handles: Optional[list] = None,
    tags: Optional[list] = None,
    stock_status: StockStatus = StockStatus.ANY,
    is_fallback: bool = False,
    **settings,
) -> Rule:
    """Create a Rule; keyword arguments go to RuleSettings."""
    return Rule(
        id=id or f"rule-{uuid4().hex[:8]}",
        name=name,
        match=Match(
            product_handles=list(handles or []),
            tags=list(tags or []),
            stock_status=stock_status,
            is_fallback=is_fallback,
        ),
        settings=RuleSettings(**settings),
    )


def make_settings(
    cutoff_time: str = "14:00",
    closed_days=None,
    courier_no_delivery_days=None,
    holidays: Optional[list] = None,
    **kwargs,
) -> GlobalSettings:
    """
    Create GlobalSettings with weekends closed and no holidays.

    `holidays` takes "YYYY-MM-DD" strings.
    """
    return GlobalSettings(
        cutoff_time=cutoff_time,
        closed_days=days("sat", "sun") if closed_days is None else closed_days,
        courier_no_delivery_days=(
            days("sat", "sun") if courier_no_delivery_days is None else courier_no_delivery_days
        ),
        custom_holidays=[CustomHoliday(date=h) for h in (holidays or [])],
        **kwargs,
    )


def make_product(
    handle: str = "blue-shirt",
    tags: Optional[list] = None,
    stock_status: Optional[StockStatus] = None,
) -> ProductDescriptor:
    """Create a ProductDescriptor."""
    return ProductDescriptor(
        handle=handle,
        tags=frozenset(tags or []),
        stock_status=stock_status,
    )


def make_config(*rules: Rule, profile_id: str = "p1", name: str = "Default") -> Config:
    """Create a v2 Config with one active profile."""
    return Config(
        version=2,
        profiles=[Profile(id=profile_id, name=name, rules=list(rules))],
        active_profile_id=profile_id,
    )


def make_rule_dict(id: str = "r1", name: str = "Rule", **settings) -> dict:
    """Raw rule as stored in JSON."""
    return {
        "id": id,
        "name": name,
        "match": {"product_handles": [], "tags": [], "stock_status": "any", "is_fallback": True},
        "settings": settings,
    }


def at(value: str) -> datetime:
    """Naive wall-clock datetime from "YYYY-MM-DD HH:MM"."""
    return datetime.strptime(value, "%Y-%m-%d %H:%M")


# =============================================================================
# Fixtures
# =============================================================================

# 2025-01-13 is a Monday
@pytest.fixture
def monday_morning():
    return at("2025-01-13 10:00")


@pytest.fixture
def saturday_morning():
    return at("2025-01-11 10:00")


@pytest.fixture
def default_settings():
    """Weekends closed for warehouse and courier, 14:00 cutoff, no holidays."""
    return make_settings()


@pytest.fixture
def v1_config_data():
    """Stored v1 config with a tagged rule and a fallback."""
    return {
        "version": 1,
        "rules": [
            {
                "id": "sale",
                "name": "Sale items",
                "match": {"tags": ["sale"], "stock_status": "any", "is_fallback": False},
                "settings": {
                    "message_line_1": "Order within {countdown}",
                    "message_line_2": "Arrives {arrival}",
                    "eta_delivery_days_min": 2,
                    "eta_delivery_days_max": 4,
                },
            },
            {
                "id": "fallback",
                "name": "Everything else",
                "match": {"is_fallback": True},
                "settings": {"message_line_1": "Arrives {arrival}"},
            },
        ],
    }


@pytest.fixture
def v2_config_data():
    """Stored v2 config with two profiles."""
    return {
        "version": 2,
        "activeProfileId": "summer",
        "profiles": [
            {
                "id": "winter",
                "name": "Winter",
                "rules": [make_rule_dict("w1", "Winter rule")],
            },
            {
                "id": "summer",
                "name": "Summer",
                "rules": [
                    make_rule_dict("s1", "Summer rule", message_line_1="Ships fast"),
                    make_rule_dict("s2", "Second"),
                ],
            },
        ],
    }
