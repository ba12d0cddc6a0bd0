"""
Free delivery progress.

Tracks how far a cart is from the shop's free delivery threshold and
which message to show. Amounts are integers in minor units.

State precedence: excluded, empty, unlocked, progress.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import FreeDeliveryState, GlobalSettings, ProductDescriptor
from .templates import format_money, substitute_placeholders


@dataclass(frozen=True)
class FreeDeliveryProgress:
    """Cart position relative to the free delivery threshold."""
    state: FreeDeliveryState
    cart_total: int
    threshold: int
    remaining: int
    percent: int
    message: str = ""

    @property
    def unlocked(self) -> bool:
        return self.state == FreeDeliveryState.UNLOCKED


def is_excluded(product: ProductDescriptor, settings: GlobalSettings) -> bool:
    """True when a product's handle or tags are on the exclusion lists."""
    excluded_handles = {h.strip() for h in settings.fd_exclude_handles if h.strip()}
    excluded_tags = {t.strip().lower() for t in settings.fd_exclude_tags if t.strip()}
    if product.handle in excluded_handles:
        return True
    return any(t.strip().lower() in excluded_tags for t in product.tags)


def compute_free_delivery(
    cart_total: int,
    products: Iterable[ProductDescriptor],
    settings: GlobalSettings,
) -> Optional[FreeDeliveryProgress]:
    """
    Compute free delivery progress for a cart.

    Args:
        cart_total: Cart total in minor units
        products: Products in the cart
        settings: Shop settings (threshold, exclusions, messages)

    Returns:
        Progress, or None when free delivery is disabled
    """
    if not settings.fd_enabled:
        return None

    threshold = max(0, int(settings.fd_threshold))
    total = max(0, int(cart_total))
    products = list(products)
    remaining = max(0, threshold - total)
    percent = 100 if threshold == 0 else min(100, total * 100 // threshold)

    if any(is_excluded(p, settings) for p in products):
        state, template = FreeDeliveryState.EXCLUDED, settings.fd_message_excluded
    elif not products or total == 0:
        state, template = FreeDeliveryState.EMPTY, settings.fd_message_empty
    elif remaining == 0:
        state, template = FreeDeliveryState.UNLOCKED, settings.fd_message_unlocked
    else:
        state, template = FreeDeliveryState.PROGRESS, settings.fd_message_progress

    currency = settings.currency
    message = substitute_placeholders(template, {
        "remaining": format_money(remaining, currency),
        "threshold": format_money(threshold, currency),
        "cart_total": format_money(total, currency),
        "total": format_money(total, currency),
    })
    return FreeDeliveryProgress(
        state=state,
        cart_total=total,
        threshold=threshold,
        remaining=remaining,
        percent=percent,
        message=message,
    )
