"""Delivery preview endpoint."""

import logging
import time
from dataclasses import replace
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Request

from ...calendars import format_iso
from ...config import active_rules, parse_config, parse_settings
from ...engine import DeliveryEngine, compute_free_delivery
from ...models import GlobalSettings, ProductDescriptor
from ..schemas.requests import PreviewRequest
from ..schemas.responses import (
    CountdownOut,
    EstimateOut,
    FreeDeliveryOut,
    PreviewResponse,
    TimelineEntryOut,
)

router = APIRouter(prefix="/preview", tags=["Preview"])

logger = logging.getLogger("etapilot.api")

# Shared defaults (set by main.py)
default_settings: GlobalSettings = GlobalSettings()
default_timezone: str = ""


def set_defaults(settings: GlobalSettings, timezone: str = "") -> None:
    global default_settings, default_timezone
    default_settings = settings
    default_timezone = timezone


def _resolve_settings(request: PreviewRequest) -> GlobalSettings:
    settings = default_settings if request.settings is None else parse_settings(request.settings)
    if not settings.preview_timezone and default_timezone:
        settings = replace(settings, preview_timezone=default_timezone)
    return settings


def _resolve_now(engine: DeliveryEngine, value: Optional[datetime]) -> datetime:
    if value is None:
        return engine.now()
    if value.tzinfo is None:
        return value
    return engine.now(value)


@router.post("", response_model=PreviewResponse)
async def preview(body: PreviewRequest, request: Request):
    """
    Match a product against the active rules and compute its delivery
    messaging at `now`.

    Answers `matched: false` when no rule applies; that is not an error.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    start_time = getattr(request.state, "start_time", time.time())

    config = parse_config(body.config)
    engine = DeliveryEngine(_resolve_settings(body))
    now = _resolve_now(engine, body.now)

    product = ProductDescriptor(
        handle=body.product.handle,
        tags=frozenset(body.product.tags),
        stock_status=body.product.stock_status,
    )

    free_delivery = None
    if body.cart_total is not None:
        progress = compute_free_delivery(body.cart_total, [product], engine.settings)
        if progress is not None:
            free_delivery = FreeDeliveryOut(
                state=progress.state.value,
                cart_total=progress.cart_total,
                threshold=progress.threshold,
                remaining=progress.remaining,
                percent=progress.percent,
                message=progress.message,
            )

    result = engine.preview(product, active_rules(config), now, body.cart_total)
    duration_ms = int((time.time() - start_time) * 1000)

    if result is None:
        logger.info(
            "No rule matched",
            extra={"request_id": request_id, "duration_ms": duration_ms},
        )
        return PreviewResponse(
            matched=False,
            now=now.isoformat(timespec="minutes"),
            free_delivery=free_delivery,
        )

    logger.info(
        "Preview computed",
        extra={
            "request_id": request_id,
            "rule_id": result.rule.id,
            "duration_ms": duration_ms,
        },
    )

    estimate = result.estimate
    countdown = result.countdown
    return PreviewResponse(
        matched=True,
        now=now.isoformat(timespec="minutes"),
        rule_id=result.rule.id,
        rule_name=result.rule.name,
        estimate=EstimateOut(
            shipment_date=format_iso(estimate.shipment_date),
            delivery_min=format_iso(estimate.delivery_min),
            delivery_max=format_iso(estimate.delivery_max),
            express_date=format_iso(estimate.express_date),
            arrival=estimate.arrival_text,
            express=estimate.express_text,
        ),
        countdown=CountdownOut(
            state=countdown.state.value,
            hours=countdown.hours,
            minutes=countdown.minutes,
            text=countdown.formatted,
        ),
        messages=result.messages,
        html_messages=result.html_messages,
        timeline=[
            TimelineEntryOut(stage=e.stage.value, label=e.label, date_text=e.date_text)
            for e in (result.timeline.entries if result.timeline else ())
        ],
        free_delivery=free_delivery,
    )
