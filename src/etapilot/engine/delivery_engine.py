"""
ETAPilot Delivery Engine

Single entry point used by every execution context (admin preview, cart
messaging, HTTP service, CLI) so that all of them agree on dates.

Flow:
    rules --match_rule--> rule
    rule.settings + global settings + now --resolve_settings--> schedule
    schedule + now --dispatch calculator--> estimate, countdown
    estimate + countdown --substitute_placeholders--> message lines

`now` is always a naive wall-clock value in the shop's timezone. Use
DeliveryEngine.now() or etapilot.engine.clock.localize() to obtain one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from ..models import (
    Countdown,
    DeliveryEstimate,
    EtaTimeline,
    GlobalSettings,
    ProductDescriptor,
    ResolvedSchedule,
    Rule,
    TimelineStage,
)
from .clock import localize, utc_now
from .dispatch_calculator import DispatchCalculator, build_eta_timeline
from .rule_matcher import match_rule
from .settings_resolver import resolve_settings
from .templates import (
    format_money,
    render_markdown,
    split_lines,
    substitute_placeholders,
)


logger = logging.getLogger(__name__)

_TIMELINE_LABEL_KEYS = {
    TimelineStage.ORDERED: "eta_label_order",
    TimelineStage.SHIPPED: "eta_label_shipping",
    TimelineStage.DELIVERED: "eta_label_delivery",
}


@dataclass(frozen=True)
class ProductPreview:
    """
    Everything the storefront shows for one product.

    Attributes:
        rule: The matched rule
        schedule: Resolved dispatch schedule
        estimate: Shipment and delivery dates
        countdown: Cutoff countdown
        messages: Message lines with placeholders substituted
        html_messages: The same lines rendered to HTML
        timeline: Ordered / Shipped / Delivered stages
    """
    rule: Rule
    schedule: ResolvedSchedule
    estimate: DeliveryEstimate
    countdown: Countdown
    messages: list[str] = field(default_factory=list)
    html_messages: list[str] = field(default_factory=list)
    timeline: Optional[EtaTimeline] = None


@dataclass
class DeliveryEngine:
    """
    Delivery estimation bound to a shop's global settings.

    Usage:
        engine = DeliveryEngine(settings)
        now = engine.now()
        preview = engine.preview(product, rules, now)
        if preview is not None:
            print(preview.estimate.arrival_text)
    """

    settings: GlobalSettings = field(default_factory=GlobalSettings)

    # Raise BusinessDayLimitExceeded instead of approximating
    strict: bool = False

    def now(self, instant: Optional[datetime] = None) -> datetime:
        """Wall-clock time in the shop's preview timezone."""
        return localize(instant or utc_now(), self.settings.preview_timezone)

    # -------------------------------------------------------------------------
    # Schedule / dates
    # -------------------------------------------------------------------------

    def schedule_for(self, rule: Optional[Rule], now: datetime) -> ResolvedSchedule:
        return resolve_settings(rule.settings if rule else None, self.settings, now)

    def calculator_for(self, rule: Optional[Rule], now: datetime) -> DispatchCalculator:
        return DispatchCalculator(self.schedule_for(rule, now), strict=self.strict)

    def estimate_for(self, rule: Optional[Rule], now: datetime) -> DeliveryEstimate:
        calculator = self.calculator_for(rule, now)
        if rule is None:
            return calculator.estimate(now)
        return calculator.estimate(
            now,
            rule.settings.eta_delivery_days_min,
            rule.settings.eta_delivery_days_max,
        )

    def countdown_for(self, rule: Optional[Rule], now: datetime) -> Countdown:
        return self.calculator_for(rule, now).countdown(now)

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def placeholder_context(
        self,
        rule: Optional[Rule],
        now: datetime,
        cart_total: Optional[int] = None,
    ) -> dict[str, Optional[str]]:
        """
        Replacement text for every placeholder at `now`.

        {countdown} is empty unless the countdown is running. Cart amounts
        are only provided when a cart total is known.
        """
        calculator = self.calculator_for(rule, now)
        if rule is None:
            estimate = calculator.estimate(now)
        else:
            estimate = calculator.estimate(
                now,
                rule.settings.eta_delivery_days_min,
                rule.settings.eta_delivery_days_max,
            )
        return self._context(estimate, calculator.countdown(now), cart_total)

    def _context(
        self,
        estimate: DeliveryEstimate,
        countdown: Countdown,
        cart_total: Optional[int] = None,
    ) -> dict[str, Optional[str]]:
        currency = self.settings.currency
        context: dict[str, Optional[str]] = {
            "countdown": countdown.formatted,
            "arrival": estimate.arrival_text,
            "express": estimate.express_text,
            "threshold": format_money(self.settings.fd_threshold, currency),
        }
        if cart_total is not None:
            remaining = max(0, self.settings.fd_threshold - cart_total)
            context["remaining"] = format_money(remaining, currency)
            context["cart_total"] = format_money(cart_total, currency)
            context["total"] = format_money(cart_total, currency)
        return context

    def render(
        self,
        template: str,
        rule: Optional[Rule],
        now: datetime,
        cart_total: Optional[int] = None,
    ) -> str:
        """Substitute every placeholder in a template."""
        return substitute_placeholders(
            template, self.placeholder_context(rule, now, cart_total)
        )

    def timeline_for(self, rule: Rule, now: datetime, estimate: DeliveryEstimate) -> EtaTimeline:
        labels = {
            stage: rule.settings.extra.get(key) or ""
            for stage, key in _TIMELINE_LABEL_KEYS.items()
        }
        return build_eta_timeline(now.date(), estimate, labels)

    # -------------------------------------------------------------------------
    # Product preview
    # -------------------------------------------------------------------------

    def preview(
        self,
        product: ProductDescriptor,
        rules: Iterable[Rule],
        now: datetime,
        cart_total: Optional[int] = None,
    ) -> Optional[ProductPreview]:
        """
        Match a product and compute everything shown for it.

        `cart_total` (minor units) fills the cart placeholders when given.

        Returns:
            ProductPreview, or None when no rule matches
        """
        rule = match_rule(product, rules)
        if rule is None:
            logger.debug("No rule matched product %r", product.handle)
            return None

        calculator = self.calculator_for(rule, now)
        estimate = calculator.estimate(
            now,
            rule.settings.eta_delivery_days_min,
            rule.settings.eta_delivery_days_max,
        )
        countdown = calculator.countdown(now)
        context = self._context(estimate, countdown, cart_total)

        messages = []
        for template in rule.settings.message_lines:
            if not template:
                continue
            messages.extend(split_lines(substitute_placeholders(template, context)))

        return ProductPreview(
            rule=rule,
            schedule=calculator.schedule,
            estimate=estimate,
            countdown=countdown,
            messages=messages,
            html_messages=[render_markdown(m) for m in messages],
            timeline=self.timeline_for(rule, now, estimate),
        )
