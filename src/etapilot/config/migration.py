"""
ETAPilot Config Migration

Upgrades stored configurations to the current shape.

Two independent migrations:
- migrate_to_v2: flat v1 rule list -> v2 profiles (works on Config)
- migrate_message_fields: legacy label/message/countdown fields ->
  message_line_1..3 (works on raw settings dicts, before validation,
  because the legacy keys do not survive conversion to RuleSettings)

Both are idempotent on already-migrated input.
"""
from __future__ import annotations

import copy
import logging
import uuid
from typing import Any, Optional

from ..models import (
    CONFIG_VERSION_V1,
    CONFIG_VERSION_V2,
    Config,
    Match,
    Profile,
    RuleSettings,
)


logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "Default"
DEFAULT_COUNTDOWN_PREFIX = "Order within"

_LEGACY_CART_SELECTORS = ("none", "line1", "line2")
_LEGACY_COUNTDOWN_KEYS = (
    "show_countdown",
    "countdown_bold_time",
    "countdown_prefix",
    "countdown_suffix",
)


# =============================================================================
# IDs
# =============================================================================

def new_rule_id() -> str:
    return str(uuid.uuid4())


def new_profile_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# Version Migration
# =============================================================================

def migrate_to_v2(config: Config, profile_id: Optional[str] = None) -> Config:
    """
    Wrap a v1 config's rules into a single "Default" profile.

    A config already at version 2 is returned as is. Otherwise the new
    profile gets a fresh ID on every call unless `profile_id` pins it, so
    migrating the same unsaved v1 data twice yields different IDs.

    Args:
        config: Config at version 1 or 2
        profile_id: Optional fixed ID for the generated profile

    Returns:
        Version 2 config
    """
    if config.version == CONFIG_VERSION_V2:
        return config

    profile = Profile(
        id=profile_id or new_profile_id(),
        name=DEFAULT_PROFILE_NAME,
        rules=list(config.rules),
    )
    logger.info(
        "Migrated v%s config with %d rules to v2",
        config.version,
        len(profile.rules),
        extra={"profile_id": profile.id},
    )
    return Config(
        version=CONFIG_VERSION_V2,
        profiles=[profile],
        active_profile_id=profile.id,
    )


# =============================================================================
# Message Field Migration
# =============================================================================

def _labelled(label: Any, text: Any) -> str:
    line = ""
    if label:
        line += f"**{label}** "
    if text:
        line += str(text)
    return line.strip()


def migrate_message_fields(settings: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """
    Convert legacy message settings to message_line_1..3.

    Handles:
    - label/message and message_2_label/message_2 pairs (bold label, then text)
    - cart_message selector values ("custom" takes cart_message_custom;
      "none", "line1" and "line2" become empty)
    - countdown prefix/suffix, which become a "{countdown}" line inserted
      first, shifting the other lines down

    Args:
        settings: Raw rule settings dict (not modified)

    Returns:
        New settings dict, or the input unchanged when it is None
    """
    if settings is None:
        return None

    result = dict(settings)

    if "message_line_1" not in settings:
        result["message_line_1"] = _labelled(settings.get("label"), settings.get("message"))
        result["message_line_2"] = _labelled(
            settings.get("message_2_label"), settings.get("message_2")
        )

    cart_message = settings.get("cart_message")
    if cart_message == "custom" and settings.get("cart_message_custom"):
        result["cart_message"] = settings["cart_message_custom"]
    elif cart_message in _LEGACY_CART_SELECTORS:
        result["cart_message"] = ""
    result.pop("cart_message_custom", None)

    has_countdown_text = "countdown_prefix" in settings or "countdown_suffix" in settings
    if settings.get("show_countdown") and has_countdown_text:
        prefix = settings.get("countdown_prefix") or DEFAULT_COUNTDOWN_PREFIX
        suffix = settings.get("countdown_suffix") or ""
        line = f"{prefix} {{countdown}}{' ' + suffix if suffix else ''}".strip()
        if settings.get("countdown_bold_time") is not False:
            line = line.replace("{countdown}", "**{countdown}**", 1)

        result["message_line_3"] = result.get("message_line_2") or ""
        result["message_line_2"] = result.get("message_line_1") or ""
        result["message_line_1"] = line
        result["show_messages"] = True
        for key in _LEGACY_COUNTDOWN_KEYS:
            result.pop(key, None)

    result.setdefault("message_line_3", "")
    return result


def _migrate_rule_list(rules: Any) -> Any:
    if not isinstance(rules, list):
        return rules
    migrated = []
    for rule in rules:
        if isinstance(rule, dict) and isinstance(rule.get("settings"), dict):
            rule = dict(rule)
            rule["settings"] = migrate_message_fields(rule["settings"])
        migrated.append(rule)
    return migrated


def migrate_config_messages(data: Any) -> Any:
    """
    Apply migrate_message_fields to every rule of a raw config dict.

    Works on both v1 (`rules`) and v2 (`profiles[].rules`) layouts.
    Anything that is not a dict is returned untouched so that validation
    can report it.
    """
    if not isinstance(data, dict):
        return data
    result = dict(data)
    if "rules" in result:
        result["rules"] = _migrate_rule_list(result["rules"])
    if isinstance(result.get("profiles"), list):
        profiles = []
        for profile in result["profiles"]:
            if isinstance(profile, dict) and "rules" in profile:
                profile = dict(profile)
                profile["rules"] = _migrate_rule_list(profile["rules"])
            profiles.append(profile)
        result["profiles"] = profiles
    return result


# =============================================================================
# Default Backfilling
# =============================================================================

def backfill_rule_defaults(rule: dict[str, Any]) -> dict[str, Any]:
    """
    Fill missing match and settings keys of a raw rule with the values a
    new rule starts with. Keys already present are never overwritten.

    Args:
        rule: Raw rule dict (not modified)

    Returns:
        New rule dict
    """
    result = copy.deepcopy(rule)
    match = result.get("match") or {}
    settings = result.get("settings") or {}
    for key, value in Match().to_dict().items():
        match.setdefault(key, value)
    for key, value in RuleSettings().to_dict().items():
        settings.setdefault(key, value)
    result["match"] = match
    result["settings"] = settings
    return result


def is_legacy_config(data: Any) -> bool:
    """True for raw config data still at version 1."""
    return isinstance(data, dict) and data.get("version") == CONFIG_VERSION_V1
