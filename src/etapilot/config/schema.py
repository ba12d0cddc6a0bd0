"""
ETAPilot Config Schemas

Pydantic models for validating rule configs and global settings as they
arrive from storage (JSON) or files (YAML/JSON).

Validation is structural only: shapes and types. Business constraints
(e.g. a closed-day set covering all seven days) are the editor's job.

Unknown keys are allowed and preserved: visual settings evolve faster
than the engine and must survive a round trip.

Day sets are normalized here, once, into frozensets of Weekday; lists
and comma-separated strings are both accepted.
"""
from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..calendars.base import parse_day_set
from ..exceptions import InvalidDaySetError
from ..models import StockStatus, Weekday


# =============================================================================
# Versions
# =============================================================================

SUPPORTED_CONFIG_VERSIONS = (1, 2)


# =============================================================================
# Shared Validators
# =============================================================================

def _normalize_day_set(value: Any) -> Optional[frozenset[Weekday]]:
    if value is None:
        return None
    try:
        return parse_day_set(value)
    except InvalidDaySetError as e:
        raise ValueError(e.message) from e


def _normalize_string_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


# =============================================================================
# Rule Schemas
# =============================================================================

class MatchSchema(BaseModel):
    """Schema for rule product targeting."""
    product_handles: list[str] = Field(default_factory=list, description="Product handles")
    tags: list[str] = Field(default_factory=list, description="Product tags")
    stock_status: StockStatus = Field(StockStatus.ANY, description="Required stock status")
    is_fallback: bool = Field(False, description="Match every product")

    @field_validator("product_handles", "tags", mode="before")
    @classmethod
    def split_lists(cls, v: Any) -> Any:
        return _normalize_string_list(v)

    @field_validator("stock_status", mode="before")
    @classmethod
    def blank_stock_status(cls, v: Any) -> Any:
        return v or StockStatus.ANY

    model_config = {"extra": "allow"}


class RuleSettingsSchema(BaseModel):
    """
    Schema for per-rule settings.

    Only dispatch and message fields are typed; everything else passes
    through untouched.
    """
    message_line_1: Optional[str] = None
    message_line_2: Optional[str] = None
    message_line_3: Optional[str] = None
    cart_message: Optional[str] = None

    override_cutoff_times: bool = False
    cutoff_time: Optional[str] = None
    cutoff_time_sat: Optional[str] = None
    cutoff_time_sun: Optional[str] = None

    override_lead_time: bool = False
    lead_time: Optional[int] = Field(None, ge=0, le=30)

    override_closed_days: bool = False
    closed_days: Optional[frozenset[Weekday]] = None
    override_courier_no_delivery_days: bool = False
    courier_no_delivery_days: Optional[frozenset[Weekday]] = None

    eta_delivery_days_min: Optional[int] = Field(None, ge=0)
    eta_delivery_days_max: Optional[int] = Field(None, ge=0)

    @field_validator("closed_days", "courier_no_delivery_days", mode="before")
    @classmethod
    def normalize_days(cls, v: Any) -> Optional[frozenset[Weekday]]:
        return _normalize_day_set(v)

    model_config = {"extra": "allow"}


class RuleSchema(BaseModel):
    """Schema for a single rule."""
    id: str = Field(..., description="Opaque rule ID")
    name: str = Field(..., description="Merchant-facing label")
    match: MatchSchema = Field(default_factory=MatchSchema)
    settings: RuleSettingsSchema = Field(default_factory=RuleSettingsSchema)

    @field_validator("match", "settings", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class ProfileSchema(BaseModel):
    """Schema for a named rule set."""
    id: str
    name: str
    rules: list[RuleSchema]


# =============================================================================
# Config Schemas
# =============================================================================

class ConfigEnvelopeSchema(BaseModel):
    """Just enough of a config to dispatch on its version."""
    version: Literal[1, 2]

    model_config = {"extra": "allow"}


class ConfigV1Schema(BaseModel):
    """Legacy config: a flat rule list."""
    version: Literal[1]
    rules: list[RuleSchema]


class ConfigV2Schema(BaseModel):
    """Current config: profiles plus the active profile's ID."""
    version: Literal[2]
    profiles: list[ProfileSchema] = Field(..., min_length=1)
    active_profile_id: str = Field(..., alias="activeProfileId")

    model_config = {"populate_by_name": True}


ConfigSchema = Union[ConfigV1Schema, ConfigV2Schema]


# =============================================================================
# Global Settings Schema
# =============================================================================

class CustomHolidaySchema(BaseModel):
    """Schema for a merchant-declared holiday."""
    date: str
    label: Optional[str] = None


class GlobalSettingsSchema(BaseModel):
    """Schema for shop-wide settings."""
    preview_timezone: Optional[str] = None
    cutoff_time: Optional[str] = None
    cutoff_time_sat: Optional[str] = None
    cutoff_time_sun: Optional[str] = None
    lead_time: Optional[int] = Field(None, ge=0, le=30)
    closed_days: Optional[frozenset[Weekday]] = None
    courier_no_delivery_days: Optional[frozenset[Weekday]] = None
    bank_holiday_country: Optional[str] = None
    custom_holidays: list[CustomHolidaySchema] = Field(default_factory=list)

    fd_enabled: Optional[bool] = None
    fd_threshold: Optional[int] = Field(None, ge=0)
    fd_exclude_tags: list[str] = Field(default_factory=list)
    fd_exclude_handles: list[str] = Field(default_factory=list)
    fd_message_progress: Optional[str] = None
    fd_message_unlocked: Optional[str] = None
    fd_message_empty: Optional[str] = None
    fd_message_excluded: Optional[str] = None
    currency: Optional[str] = None

    @field_validator("closed_days", "courier_no_delivery_days", mode="before")
    @classmethod
    def normalize_days(cls, v: Any) -> Optional[frozenset[Weekday]]:
        return _normalize_day_set(v)

    @field_validator("fd_exclude_tags", "fd_exclude_handles", mode="before")
    @classmethod
    def split_lists(cls, v: Any) -> Any:
        return _normalize_string_list(v)

    @field_validator("custom_holidays", mode="before")
    @classmethod
    def wrap_plain_dates(cls, v: Any) -> Any:
        # Older settings stored holidays as bare "YYYY-MM-DD" strings
        if v is None:
            return []
        if isinstance(v, list):
            return [{"date": item} if isinstance(item, str) else item for item in v]
        return v

    model_config = {"extra": "allow"}


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_config_data(data: Any) -> ConfigSchema:
    """
    Validate a config dictionary against the schema for its version.

    Args:
        data: Dictionary loaded from JSON/YAML

    Returns:
        Validated ConfigV1Schema or ConfigV2Schema

    Raises:
        pydantic.ValidationError: If validation fails
    """
    envelope = ConfigEnvelopeSchema.model_validate(data)
    if envelope.version == 1:
        return ConfigV1Schema.model_validate(data)
    return ConfigV2Schema.model_validate(data)


def validate_settings_data(data: Any) -> GlobalSettingsSchema:
    """
    Validate a global settings dictionary.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return GlobalSettingsSchema.model_validate(data)
