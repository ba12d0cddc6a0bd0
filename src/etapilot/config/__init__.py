"""
ETAPilot Config

Loading, validation, migration and editing of rule configurations.

Usage:
    from etapilot.config import load_config, migrate_to_v2, active_rules

    config = migrate_to_v2(load_config("config.json"))
    rules = active_rules(config)
"""
from __future__ import annotations

from .editing import (
    PROFILE_UNDO_SECONDS,
    RULE_UNDO_SECONDS,
    DeletedProfile,
    DeletedRule,
    UndoBuffer,
    add_profile,
    add_rule,
    copy_profile,
    default_profile,
    default_rule,
    delete_profile,
    delete_rule,
    duplicate_rule,
    move_rule,
    rename_profile,
    set_active_profile,
    undo_delete_profile,
    undo_delete_rule,
    update_rule,
)
from .loader import (
    ConfigLoader,
    ConfigValidationResult,
    SettingsValidationResult,
    active_rules,
    config_has_rules,
    format_validation_error,
    load_config,
    load_config_from_string,
    load_settings,
    load_settings_from_string,
    parse_config,
    parse_settings,
    validate_config,
    validate_settings,
)
from .migration import (
    backfill_rule_defaults,
    migrate_config_messages,
    migrate_message_fields,
    migrate_to_v2,
    new_profile_id,
    new_rule_id,
)

__all__ = [
    # Loading / validation
    "ConfigLoader",
    "ConfigValidationResult",
    "SettingsValidationResult",
    "format_validation_error",
    "load_config",
    "load_config_from_string",
    "load_settings",
    "load_settings_from_string",
    "parse_config",
    "parse_settings",
    "validate_config",
    "validate_settings",
    "active_rules",
    "config_has_rules",
    # Migration
    "migrate_to_v2",
    "migrate_message_fields",
    "migrate_config_messages",
    "backfill_rule_defaults",
    "new_rule_id",
    "new_profile_id",
    # Editing
    "default_rule",
    "default_profile",
    "add_rule",
    "update_rule",
    "duplicate_rule",
    "move_rule",
    "delete_rule",
    "undo_delete_rule",
    "add_profile",
    "copy_profile",
    "rename_profile",
    "set_active_profile",
    "delete_profile",
    "undo_delete_profile",
    "DeletedRule",
    "DeletedProfile",
    "UndoBuffer",
    "RULE_UNDO_SECONDS",
    "PROFILE_UNDO_SECONDS",
]
