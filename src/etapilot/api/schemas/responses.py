"""Response schemas for the API."""

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    version: str
    settings_source: str


class HolidayEntry(BaseModel):
    """A single national holiday."""
    date: str
    name: str


class HolidaysResponse(BaseModel):
    """Holidays for a country and year."""
    country: str
    name: str
    year: int
    holidays: list[HolidayEntry]


class CountrySummary(BaseModel):
    code: str
    name: str


class ValidationResponse(BaseModel):
    """Config validation result."""
    valid: bool
    error: Optional[str] = None
    version: Optional[int] = None
    profile_count: int = 0
    rule_count: int = 0


class MigrateResponse(BaseModel):
    """Migrated config."""
    migrated: bool
    config: dict[str, Any]


class CountdownOut(BaseModel):
    state: str  # normal|closed_today|holiday_today|cutoff_passed
    hours: int
    minutes: int
    text: str


class EstimateOut(BaseModel):
    """Shipment and delivery dates (ISO) plus display text."""
    shipment_date: str
    delivery_min: str
    delivery_max: str
    express_date: str
    arrival: str
    express: str


class TimelineEntryOut(BaseModel):
    stage: str  # ordered|shipped|delivered
    label: str
    date_text: str


class FreeDeliveryOut(BaseModel):
    state: str  # empty|progress|unlocked|excluded
    cart_total: int
    threshold: int
    remaining: int
    percent: int
    message: str


class PreviewResponse(BaseModel):
    """Delivery messaging for a product."""
    matched: bool
    now: str
    rule_id: Optional[str] = None
    rule_name: Optional[str] = None
    estimate: Optional[EstimateOut] = None
    countdown: Optional[CountdownOut] = None
    messages: list[str] = []
    html_messages: list[str] = []
    timeline: list[TimelineEntryOut] = []
    free_delivery: Optional[FreeDeliveryOut] = None


class ErrorResponse(BaseModel):
    """Structured error response."""
    error: str
    code: str
    details: Optional[dict[str, Any]] = None
    request_id: str
