"""
ETAPilot Cart Messages

Per-line delivery messages for the cart.

Only rules carrying a cart message take part in cart matching, so a
product can get its cart message from a lower-priority rule when the
rule matched on the product page has none.

Product tags are not part of a cart line; they are looked up through an
injected TagSource. The engine never owns that cache.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Optional, Protocol, runtime_checkable

from ..models import ProductDescriptor, Rule, StockStatus
from .delivery_engine import DeliveryEngine
from .rule_matcher import match_rule
from .templates import strip_bold


logger = logging.getLogger(__name__)

TagFetcher = Callable[[str], Iterable[str]]

# Legacy selector value meaning "no cart message"
_NO_CART_MESSAGE = "none"


@runtime_checkable
class TagSource(Protocol):
    """
    Get-or-fetch cache of product tags keyed by handle.

    Implementations decide storage and expiry; the engine only calls
    get_or_fetch().
    """

    def get_or_fetch(self, handle: str, fetch: TagFetcher) -> frozenset[str]:
        """
        Return cached tags for a handle, calling `fetch` on a miss.

        Args:
            handle: Product handle
            fetch: Loader for the product's tags

        Returns:
            The product's tags
        """
        ...


@dataclass
class InMemoryTagCache:
    """Process-local TagSource. Failed lookups are not cached."""

    _tags: dict[str, frozenset[str]] = field(default_factory=dict, repr=False)

    def get_or_fetch(self, handle: str, fetch: TagFetcher) -> frozenset[str]:
        cached = self._tags.get(handle)
        if cached is not None:
            return cached
        try:
            tags = frozenset(t for t in fetch(handle) if t)
        except (OSError, LookupError, ValueError) as e:
            logger.warning("Tag lookup failed for %r: %s", handle, e)
            return frozenset()
        self._tags[handle] = tags
        return tags

    def invalidate(self, handle: Optional[str] = None) -> None:
        """Forget one handle, or everything."""
        if handle is None:
            self._tags.clear()
        else:
            self._tags.pop(handle, None)

    def __len__(self) -> int:
        return len(self._tags)


@dataclass(frozen=True)
class CartLine:
    """A cart line as far as delivery messaging is concerned."""
    handle: str
    stock_status: Optional[StockStatus] = None


@dataclass(frozen=True)
class CartLineMessage:
    """Rendered message for one cart line."""
    handle: str
    rule_id: str
    message: str


def has_cart_message(rule: Rule) -> bool:
    message = rule.settings.cart_message
    return bool(message) and message != _NO_CART_MESSAGE


@dataclass
class CartMessenger:
    """
    Builds cart line messages.

    Usage:
        messenger = CartMessenger(engine, InMemoryTagCache(), fetch_tags)
        for msg in messenger.messages_for(lines, rules, now):
            print(msg.handle, msg.message)
    """

    engine: DeliveryEngine
    tag_source: TagSource
    fetch_tags: TagFetcher

    def message_for(
        self,
        line: CartLine,
        rules: list[Rule],
        now: datetime,
    ) -> Optional[CartLineMessage]:
        if not any(has_cart_message(r) for r in rules):
            return None
        tags = self.tag_source.get_or_fetch(line.handle, self.fetch_tags)
        product = ProductDescriptor(
            handle=line.handle, tags=tags, stock_status=line.stock_status
        )
        rule = match_rule(product, rules, predicate=has_cart_message)
        if rule is None:
            return None
        text = strip_bold(self.engine.render(rule.settings.cart_message, rule, now))
        if not text:
            return None
        return CartLineMessage(handle=line.handle, rule_id=rule.id, message=text)

    def messages_for(
        self,
        lines: Iterable[CartLine],
        rules: Iterable[Rule],
        now: datetime,
    ) -> list[CartLineMessage]:
        """Messages for every line that matches a rule with a cart message."""
        rules = list(rules)
        results = []
        for line in lines:
            message = self.message_for(line, rules, now)
            if message is not None:
                results.append(message)
        return results
