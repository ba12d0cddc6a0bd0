"""
ETAPilot Exception Hierarchy

Domain-specific exceptions for delivery estimation and rule configuration.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: ETA_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ETAPilotError(Exception):
    """
    Base exception for all ETAPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (ETA_*)
        details: Additional context about the error
        rule_id: Associated rule ID if applicable
    """
    message: str
    code: str = "ETA_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    rule_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.rule_id:
            parts.append(f"(rule: {self.rule_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.rule_id:
            result["rule_id"] = self.rule_id
        return result


# =============================================================================
# Config Errors
# =============================================================================

@dataclass
class ConfigLoadError(ETAPilotError):
    """Failed to read a config or settings file."""
    code: str = "ETA_CONFIG_LOAD_ERROR"


@dataclass
class ConfigValidationError(ETAPilotError):
    """Rule configuration failed structural validation."""
    code: str = "ETA_CONFIG_VALIDATION_ERROR"


@dataclass
class ConfigVersionError(ETAPilotError):
    """Config declares a version this engine does not understand."""
    code: str = "ETA_CONFIG_VERSION_ERROR"


@dataclass
class SettingsValidationError(ETAPilotError):
    """Global settings failed structural validation."""
    code: str = "ETA_SETTINGS_VALIDATION_ERROR"


# =============================================================================
# Editing Errors
# =============================================================================

@dataclass
class RuleNotFoundError(ETAPilotError):
    """Requested rule is not in the profile."""
    code: str = "ETA_RULE_NOT_FOUND"


@dataclass
class ProfileNotFoundError(ETAPilotError):
    """Requested profile is not in the config."""
    code: str = "ETA_PROFILE_NOT_FOUND"


@dataclass
class LastProfileError(ETAPilotError):
    """Attempt to delete the only remaining profile."""
    code: str = "ETA_LAST_PROFILE"


@dataclass
class UndoExpiredError(ETAPilotError):
    """Nothing to undo, or the undo window has closed."""
    code: str = "ETA_UNDO_EXPIRED"


# =============================================================================
# Calendar Errors
# =============================================================================

@dataclass
class InvalidDaySetError(ETAPilotError):
    """Day set contains a token outside the weekday vocabulary."""
    code: str = "ETA_INVALID_DAY_SET"


@dataclass
class BusinessDayLimitExceeded(ETAPilotError):
    """Business-day search hit its iteration cap (strict mode only)."""
    code: str = "ETA_BUSINESS_DAY_LIMIT"
