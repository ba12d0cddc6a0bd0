"""
ETAPilot Config Loader

Loads and validates rule configs and global settings from YAML or JSON.

Converts Pydantic schema models to ETAPilot domain models. Legacy
message fields are migrated before validation; the config version is
left as stored (see migration.migrate_to_v2).
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    ConfigVersionError,
    SettingsValidationError,
)
from ..models import (
    CONFIG_VERSION_V1,
    Config,
    CustomHoliday,
    GlobalSettings,
    Match,
    Profile,
    Rule,
    RuleSettings,
)
from .migration import migrate_config_messages
from .schema import (
    SUPPORTED_CONFIG_VERSIONS,
    ConfigSchema,
    ConfigV1Schema,
    GlobalSettingsSchema,
    MatchSchema,
    ProfileSchema,
    RuleSchema,
    RuleSettingsSchema,
    validate_config_data,
    validate_settings_data,
)


logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 3


# =============================================================================
# Error Formatting
# =============================================================================

def format_validation_error(error: ValidationError) -> str:
    """
    Summarize a pydantic error as "path: message" pairs.

    Only the first three problems are listed; the rest are counted.

    Example:
        "profiles.0.rules.1.name: Field required; version: Input should be 1 or 2"
    """
    errors = error.errors()
    parts = []
    for err in errors[:MAX_REPORTED_ERRORS]:
        path = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{path}: {err['msg']}" if path else err["msg"])
    message = "; ".join(parts)
    if len(errors) > MAX_REPORTED_ERRORS:
        message += f" ...and {len(errors) - MAX_REPORTED_ERRORS} more"
    return message


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_match(schema: MatchSchema) -> Match:
    """Convert MatchSchema to Match model."""
    return Match(
        product_handles=list(schema.product_handles),
        tags=list(schema.tags),
        stock_status=schema.stock_status,
        is_fallback=schema.is_fallback,
    )


def _convert_rule_settings(schema: RuleSettingsSchema) -> RuleSettings:
    """Convert RuleSettingsSchema to RuleSettings; unknown keys go to `extra`."""
    defaults = RuleSettings()
    return RuleSettings(
        message_line_1=schema.message_line_1 or "",
        message_line_2=schema.message_line_2 or "",
        message_line_3=schema.message_line_3 or "",
        cart_message=schema.cart_message or "",
        override_cutoff_times=schema.override_cutoff_times,
        cutoff_time=schema.cutoff_time,
        cutoff_time_sat=schema.cutoff_time_sat,
        cutoff_time_sun=schema.cutoff_time_sun,
        override_lead_time=schema.override_lead_time,
        lead_time=schema.lead_time,
        override_closed_days=schema.override_closed_days,
        closed_days=schema.closed_days,
        override_courier_no_delivery_days=schema.override_courier_no_delivery_days,
        courier_no_delivery_days=schema.courier_no_delivery_days,
        eta_delivery_days_min=(
            defaults.eta_delivery_days_min
            if schema.eta_delivery_days_min is None
            else schema.eta_delivery_days_min
        ),
        eta_delivery_days_max=(
            defaults.eta_delivery_days_max
            if schema.eta_delivery_days_max is None
            else schema.eta_delivery_days_max
        ),
        extra=dict(schema.model_extra or {}),
    )


def _convert_rule(schema: RuleSchema) -> Rule:
    return Rule(
        id=schema.id,
        name=schema.name,
        match=_convert_match(schema.match),
        settings=_convert_rule_settings(schema.settings),
    )


def _convert_profile(schema: ProfileSchema) -> Profile:
    return Profile(
        id=schema.id,
        name=schema.name,
        rules=[_convert_rule(r) for r in schema.rules],
    )


def _convert_config(schema: ConfigSchema) -> Config:
    """Convert a v1 or v2 config schema to a Config model."""
    if isinstance(schema, ConfigV1Schema):
        return Config(
            version=CONFIG_VERSION_V1,
            rules=[_convert_rule(r) for r in schema.rules],
        )
    return Config(
        version=schema.version,
        profiles=[_convert_profile(p) for p in schema.profiles],
        active_profile_id=schema.active_profile_id,
    )


def _convert_global_settings(schema: GlobalSettingsSchema) -> GlobalSettings:
    """Convert GlobalSettingsSchema to GlobalSettings; absent values keep defaults."""
    values: dict[str, Any] = {
        "preview_timezone": schema.preview_timezone,
        "cutoff_time": schema.cutoff_time,
        "cutoff_time_sat": schema.cutoff_time_sat,
        "cutoff_time_sun": schema.cutoff_time_sun,
        "lead_time": schema.lead_time,
        "closed_days": schema.closed_days,
        "courier_no_delivery_days": schema.courier_no_delivery_days,
        "bank_holiday_country": schema.bank_holiday_country,
        "fd_enabled": schema.fd_enabled,
        "fd_threshold": schema.fd_threshold,
        "fd_message_progress": schema.fd_message_progress,
        "fd_message_unlocked": schema.fd_message_unlocked,
        "fd_message_empty": schema.fd_message_empty,
        "fd_message_excluded": schema.fd_message_excluded,
        "currency": schema.currency,
    }
    kwargs = {k: v for k, v in values.items() if v is not None}
    return GlobalSettings(
        custom_holidays=[
            CustomHoliday(date=h.date, label=h.label or "")
            for h in schema.custom_holidays
        ],
        fd_exclude_tags=list(schema.fd_exclude_tags),
        fd_exclude_handles=list(schema.fd_exclude_handles),
        extra=dict(schema.model_extra or {}),
        **kwargs,
    )


# =============================================================================
# Parsing
# =============================================================================

def parse_config(data: Any) -> Config:
    """
    Validate raw config data and convert it to a Config.

    The input is not modified; legacy message fields are migrated on a copy.

    Args:
        data: Dictionary loaded from JSON/YAML

    Returns:
        Config at the version it was stored with

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        schema = validate_config_data(migrate_config_messages(data))
    except ValidationError as e:
        raise ConfigValidationError(
            message=format_validation_error(e),
            details={"error_count": e.error_count()},
        ) from e
    return _convert_config(schema)


def parse_settings(data: Any) -> GlobalSettings:
    """
    Validate raw global settings and convert them to GlobalSettings.

    None is treated as "never saved" and yields the defaults.

    Raises:
        SettingsValidationError: If validation fails
    """
    try:
        schema = validate_settings_data({} if data is None else data)
    except ValidationError as e:
        raise SettingsValidationError(
            message=format_validation_error(e),
            details={"error_count": e.error_count()},
        ) from e
    return _convert_global_settings(schema)


# =============================================================================
# Validation Results
# =============================================================================

@dataclass(frozen=True)
class ConfigValidationResult:
    """Outcome of validate_config(). Exactly one of config/error is set."""
    success: bool
    config: Optional[Config] = None
    error: Optional[ConfigValidationError] = None


@dataclass(frozen=True)
class SettingsValidationResult:
    """Outcome of validate_settings(). Exactly one of settings/error is set."""
    success: bool
    settings: Optional[GlobalSettings] = None
    error: Optional[SettingsValidationError] = None


def validate_config(data: Any) -> ConfigValidationResult:
    """
    Structurally validate a config without raising.

    Business rules (e.g. a closed-day set covering every weekday) are not
    checked here.
    """
    try:
        return ConfigValidationResult(success=True, config=parse_config(data))
    except ConfigValidationError as e:
        return ConfigValidationResult(success=False, error=e)


def validate_settings(data: Any) -> SettingsValidationResult:
    """Structurally validate global settings without raising."""
    try:
        return SettingsValidationResult(success=True, settings=parse_settings(data))
    except SettingsValidationError as e:
        return SettingsValidationResult(success=False, error=e)


# =============================================================================
# Config Queries
# =============================================================================

def active_rules(config: Config) -> list[Rule]:
    """
    Rules that are live on the storefront.

    v2: the active profile's rules (first profile if the ID is dangling).
    v1: the flat rule list.
    """
    if not config.is_v2:
        return list(config.rules)
    profile = config.active_profile
    return list(profile.rules) if profile else []


def config_has_rules(config: Config) -> bool:
    return bool(active_rules(config))


# =============================================================================
# Config Loader
# =============================================================================

class ConfigLoader:
    """
    Loads rule configs and global settings from YAML or JSON files.

    Usage:
        loader = ConfigLoader()
        config = loader.load_config("path/to/config.json")
        settings = loader.load_settings("path/to/settings.yaml")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject configs with an unknown version
                before schema validation
        """
        self.strict_version = strict_version

    def load_config(self, path: Union[str, Path]) -> Config:
        """
        Load a rule config from a file.

        Args:
            path: Path to YAML or JSON file

        Returns:
            Loaded Config model

        Raises:
            ConfigLoadError: If file cannot be read
            ConfigVersionError: If the version is not supported
            ConfigValidationError: If validation fails
        """
        path = Path(path)
        data = self._read(path)

        if self.strict_version and isinstance(data, dict):
            version = data.get("version")
            if version not in SUPPORTED_CONFIG_VERSIONS:
                raise ConfigVersionError(
                    message=f"Unsupported config version: {version!r}",
                    details={
                        "path": str(path),
                        "version": version,
                        "supported": list(SUPPORTED_CONFIG_VERSIONS),
                    },
                )

        try:
            config = parse_config(data)
        except ConfigValidationError as e:
            e.details["path"] = str(path)
            raise

        logger.debug("Loaded v%s config from %s", config.version, path)
        return config

    def load_settings(self, path: Union[str, Path]) -> GlobalSettings:
        """
        Load global settings from a file.

        Raises:
            ConfigLoadError: If file cannot be read
            SettingsValidationError: If validation fails
        """
        path = Path(path)
        data = self._read(path)
        try:
            settings = parse_settings(data)
        except SettingsValidationError as e:
            e.details["path"] = str(path)
            raise
        logger.debug("Loaded global settings from %s", path)
        return settings

    def _read(self, path: Path) -> Any:
        try:
            return self._load_file(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigLoadError(
                message=f"Failed to load {path.name}: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                return json.load(f)
            else:
                # Try YAML first, then JSON
                content = f.read()
                try:
                    return yaml.safe_load(content)
                except yaml.YAMLError:
                    return json.loads(content)


# =============================================================================
# Convenience Functions
# =============================================================================

def _parse_string(content: str, format: str) -> Any:
    try:
        if format.lower() == "json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigLoadError(
            message=f"Failed to parse {format}: {e}",
            details={"format": format, "error": str(e)},
        ) from e


def load_config(path: Union[str, Path]) -> Config:
    """
    Load a rule config from a file.

    Convenience function that creates a temporary loader.
    """
    return ConfigLoader().load_config(path)


def load_config_from_string(content: str, format: str = "yaml") -> Config:
    """
    Load a rule config from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"

    Returns:
        Loaded Config model
    """
    return parse_config(_parse_string(content, format))


def load_settings(path: Union[str, Path]) -> GlobalSettings:
    """Load global settings from a file."""
    return ConfigLoader().load_settings(path)


def load_settings_from_string(content: str, format: str = "yaml") -> GlobalSettings:
    """Load global settings from a YAML or JSON string."""
    return parse_settings(_parse_string(content, format))
