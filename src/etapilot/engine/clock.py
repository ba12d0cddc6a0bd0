"""
Wall-clock conversion.

The engine always works on naive local date-times. Callers convert the
current instant into the shop's preview timezone here, before any engine
call; the engine never reads the system timezone.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


logger = logging.getLogger(__name__)


def get_zone(tz_name: Optional[str]) -> Optional[ZoneInfo]:
    """ZoneInfo for an IANA name, or None if blank or unknown."""
    if not tz_name or not tz_name.strip():
        return None
    try:
        return ZoneInfo(tz_name.strip())
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using time as given", tz_name)
        return None


def localize(now: datetime, tz_name: Optional[str]) -> datetime:
    """
    Convert an instant to naive wall-clock time in a timezone.

    Naive inputs are taken to be UTC when a zone is given. With a blank or
    unknown zone the input is returned unchanged (tzinfo stripped).

    Args:
        now: Current instant
        tz_name: IANA timezone name, e.g. "Europe/London"

    Returns:
        Naive local datetime
    """
    zone = get_zone(tz_name)
    if zone is None:
        return now.replace(tzinfo=None)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone).replace(tzinfo=None)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
