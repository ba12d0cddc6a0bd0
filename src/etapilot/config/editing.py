"""
ETAPilot Config Editing

Rule and profile editing operations for v2 configs.

Every operation returns a new Config and leaves its input untouched, so
the caller can keep the previous value for undo or dirty checking.
Rule operations act on the active profile.

Deletions return a DeletedRule/DeletedProfile record that can be handed
back to undo_delete_rule()/undo_delete_profile(). UndoBuffer keeps the
most recent one for a limited time.
"""
from __future__ import annotations

import copy
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Generic, Optional, TypeVar

from ..exceptions import (
    ConfigVersionError,
    LastProfileError,
    ProfileNotFoundError,
    RuleNotFoundError,
    UndoExpiredError,
)
from ..models import CONFIG_VERSION_V2, Config, Profile, Rule
from .migration import DEFAULT_PROFILE_NAME, new_profile_id, new_rule_id


DEFAULT_RULE_NAME = "Untitled rule"
MAX_RULE_NAME_LENGTH = 25
COPY_SUFFIX = " (copy)"

RULE_UNDO_SECONDS = 10.0
PROFILE_UNDO_SECONDS = 30.0


# =============================================================================
# Defaults
# =============================================================================

def default_rule() -> Rule:
    """A new rule: no targets, any stock status, 3-5 day window, no messages."""
    return Rule(id=new_rule_id(), name=DEFAULT_RULE_NAME)


def default_profile(name: str = DEFAULT_PROFILE_NAME) -> Profile:
    return Profile(id=new_profile_id(), name=name)


def copy_name(name: str) -> str:
    """Name for a duplicated rule, kept within the 25 character limit."""
    base = name[: MAX_RULE_NAME_LENGTH - len(COPY_SUFFIX)]
    return (base + COPY_SUFFIX)[:MAX_RULE_NAME_LENGTH]


# =============================================================================
# Helpers
# =============================================================================

def _require_v2(config: Config) -> None:
    if config.version != CONFIG_VERSION_V2:
        raise ConfigVersionError(
            message="Editing requires a version 2 config",
            details={"version": config.version},
        )


def _profile_index(config: Config, profile_id: Optional[str] = None) -> int:
    """Index of the given profile, or of the active one."""
    _require_v2(config)
    if profile_id is None:
        active = config.active_profile
        if active is None:
            raise ProfileNotFoundError(message="Config has no profiles")
        profile_id = active.id
    for i, profile in enumerate(config.profiles):
        if profile.id == profile_id:
            return i
    raise ProfileNotFoundError(
        message=f"Profile not found: {profile_id}",
        details={"profile_id": profile_id},
    )


def _rule_index(profile: Profile, rule_id: str) -> int:
    for i, rule in enumerate(profile.rules):
        if rule.id == rule_id:
            return i
    raise RuleNotFoundError(
        message=f"Rule not found in profile {profile.name!r}",
        rule_id=rule_id,
        details={"profile_id": profile.id},
    )


def _with_rules(config: Config, rules: list[Rule]) -> Config:
    """Copy of config with the active profile's rules replaced."""
    index = _profile_index(config)
    profiles = list(config.profiles)
    profiles[index] = replace(profiles[index], rules=rules)
    return replace(config, profiles=profiles, active_profile_id=profiles[index].id)


def _active_rules(config: Config) -> list[Rule]:
    return list(config.profiles[_profile_index(config)].rules)


# =============================================================================
# Rule Operations
# =============================================================================

def add_rule(config: Config, rule: Optional[Rule] = None) -> Config:
    """Append a rule (a default one when none is given) to the active profile."""
    rules = _active_rules(config)
    rules.append(rule if rule is not None else default_rule())
    return _with_rules(config, rules)


def update_rule(config: Config, rule: Rule) -> Config:
    """Replace the active profile's rule that has the same ID."""
    rules = _active_rules(config)
    profile = config.profiles[_profile_index(config)]
    rules[_rule_index(profile, rule.id)] = rule
    return _with_rules(config, rules)


def duplicate_rule(config: Config, rule_id: str) -> Config:
    """
    Insert a copy of a rule directly after it.

    The copy gets a new ID and a " (copy)" name.
    """
    profile = config.profiles[_profile_index(config)]
    index = _rule_index(profile, rule_id)
    source = profile.rules[index]
    duplicate = replace(
        copy.deepcopy(source),
        id=new_rule_id(),
        name=copy_name(source.name),
    )
    rules = list(profile.rules)
    rules.insert(index + 1, duplicate)
    return _with_rules(config, rules)


def move_rule(config: Config, from_index: int, to_index: int) -> Config:
    """
    Swap two rules of the active profile.

    Out-of-range indexes leave the config unchanged.
    """
    rules = _active_rules(config)
    if not (0 <= from_index < len(rules) and 0 <= to_index < len(rules)):
        return config
    rules[from_index], rules[to_index] = rules[to_index], rules[from_index]
    return _with_rules(config, rules)


@dataclass(frozen=True)
class DeletedRule:
    """A removed rule and the position it was removed from."""
    rule: Rule
    index: int
    profile_id: str


def delete_rule(config: Config, rule_id: str) -> tuple[Config, DeletedRule]:
    """
    Remove a rule from the active profile.

    Returns:
        (new config, record for undo_delete_rule)
    """
    profile = config.profiles[_profile_index(config)]
    index = _rule_index(profile, rule_id)
    rules = list(profile.rules)
    removed = rules.pop(index)
    return _with_rules(config, rules), DeletedRule(
        rule=removed, index=index, profile_id=profile.id
    )


def undo_delete_rule(config: Config, deleted: DeletedRule) -> Config:
    """Put a deleted rule back at its old position (clamped to the list)."""
    index = _profile_index(config, deleted.profile_id)
    profiles = list(config.profiles)
    rules = list(profiles[index].rules)
    insert_at = max(0, min(deleted.index, len(rules)))
    rules.insert(insert_at, deleted.rule)
    profiles[index] = replace(profiles[index], rules=rules)
    return replace(config, profiles=profiles)


# =============================================================================
# Profile Operations
# =============================================================================

def add_profile(config: Config, name: Optional[str] = None) -> Config:
    """Append an empty profile ("Profile N") and make it active."""
    _require_v2(config)
    profile = default_profile(name or f"Profile {len(config.profiles) + 1}")
    return replace(
        config,
        profiles=[*config.profiles, profile],
        active_profile_id=profile.id,
    )


def copy_profile(config: Config, profile_id: Optional[str] = None) -> Config:
    """
    Append a copy of a profile (the active one by default) and make it active.

    Copied rules get new IDs.
    """
    source = config.profiles[_profile_index(config, profile_id)]
    rules = [replace(copy.deepcopy(r), id=new_rule_id()) for r in source.rules]
    profile = Profile(id=new_profile_id(), name=source.name + COPY_SUFFIX, rules=rules)
    return replace(
        config,
        profiles=[*config.profiles, profile],
        active_profile_id=profile.id,
    )


def rename_profile(config: Config, name: str, profile_id: Optional[str] = None) -> Config:
    index = _profile_index(config, profile_id)
    profiles = list(config.profiles)
    profiles[index] = replace(profiles[index], name=name)
    return replace(config, profiles=profiles)


def set_active_profile(config: Config, profile_id: str) -> Config:
    """Make a profile live. Raises ProfileNotFoundError for unknown IDs."""
    _profile_index(config, profile_id)
    return replace(config, active_profile_id=profile_id)


@dataclass(frozen=True)
class DeletedProfile:
    """A removed profile and the position it was removed from."""
    profile: Profile
    index: int


def delete_profile(
    config: Config,
    profile_id: Optional[str] = None,
) -> tuple[Config, DeletedProfile]:
    """
    Remove a profile (the active one by default).

    The profile now at the removed position (or the last one) becomes
    active when the active profile is removed.

    Raises:
        LastProfileError: If it is the only profile
    """
    index = _profile_index(config, profile_id)
    if len(config.profiles) <= 1:
        raise LastProfileError(
            message="Cannot delete the last profile",
            details={"profile_id": config.profiles[index].id},
        )
    profiles = list(config.profiles)
    removed = profiles.pop(index)

    active_id = config.active_profile_id
    if config.active_profile is None or config.active_profile.id == removed.id:
        active_id = profiles[min(index, len(profiles) - 1)].id

    new_config = replace(config, profiles=profiles, active_profile_id=active_id)
    return new_config, DeletedProfile(profile=removed, index=index)


def undo_delete_profile(config: Config, deleted: DeletedProfile) -> Config:
    """Restore a deleted profile at its old position and make it active."""
    _require_v2(config)
    profiles = list(config.profiles)
    insert_at = max(0, min(deleted.index, len(profiles)))
    profiles.insert(insert_at, deleted.profile)
    return replace(config, profiles=profiles, active_profile_id=deleted.profile.id)


# =============================================================================
# Undo Buffer
# =============================================================================

T = TypeVar("T")


@dataclass
class UndoBuffer(Generic[T]):
    """
    Holds the most recent deletion for a limited time.

    A new push replaces the previous entry and restarts the window.

    Usage:
        undo = UndoBuffer(ttl_seconds=RULE_UNDO_SECONDS)
        config, deleted = delete_rule(config, rule_id)
        undo.push(deleted)
        ...
        config = undo_delete_rule(config, undo.pop())
    """

    ttl_seconds: float = RULE_UNDO_SECONDS
    clock: Callable[[], float] = time.monotonic
    _entry: Optional[T] = field(default=None, repr=False)
    _expires_at: float = field(default=0.0, repr=False)

    def push(self, entry: T) -> None:
        self._entry = entry
        self._expires_at = self.clock() + self.ttl_seconds

    def peek(self) -> Optional[T]:
        """The pending entry, or None when empty or expired."""
        if self._entry is not None and self.clock() >= self._expires_at:
            self._entry = None
        return self._entry

    @property
    def available(self) -> bool:
        return self.peek() is not None

    def pop(self) -> T:
        """
        Take the pending entry.

        Raises:
            UndoExpiredError: If there is nothing to undo or the window closed
        """
        entry = self.peek()
        if entry is None:
            raise UndoExpiredError(message="Nothing to undo")
        self._entry = None
        return entry

    def clear(self) -> None:
        self._entry = None
