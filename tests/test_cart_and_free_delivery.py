"""
ETAPilot Cart Tests

Tests for cart line messages, the tag cache and free delivery progress.
"""
from __future__ import annotations

import pytest

from etapilot import CartMessenger, DeliveryEngine, InMemoryTagCache
from etapilot.engine import CartLine, TagSource, compute_free_delivery, has_cart_message
from etapilot.models import FreeDeliveryState, StockStatus
from tests.conftest import make_product, make_rule, make_settings


class RecordingFetcher:
    """Tag fetcher backed by a dict that counts calls."""

    def __init__(self, tags: dict) -> None:
        self.tags = tags
        self.calls = []

    def __call__(self, handle: str):
        self.calls.append(handle)
        return self.tags[handle]


@pytest.fixture
def fetcher():
    return RecordingFetcher({
        "blue-shirt": ["sale"],
        "red-shirt": [],
        "pre-hat": ["hats"],
    })


@pytest.fixture
def messenger(default_settings, fetcher):
    return CartMessenger(DeliveryEngine(default_settings), InMemoryTagCache(), fetcher)


# =============================================================================
# Tag Cache
# =============================================================================

class TestInMemoryTagCache:
    """Tests for the process-local tag cache."""

    def test_is_tag_source(self) -> None:
        """Test the cache satisfies the TagSource protocol."""
        assert isinstance(InMemoryTagCache(), TagSource)

    def test_fetches_once(self, fetcher) -> None:
        """Test hits do not call the fetcher again."""
        cache = InMemoryTagCache()
        assert cache.get_or_fetch("blue-shirt", fetcher) == frozenset({"sale"})
        assert cache.get_or_fetch("blue-shirt", fetcher) == frozenset({"sale"})
        assert fetcher.calls == ["blue-shirt"]
        assert len(cache) == 1

    def test_failures_not_cached(self, fetcher) -> None:
        """Test a failed lookup gives no tags and is retried next time."""
        cache = InMemoryTagCache()
        assert cache.get_or_fetch("missing", fetcher) == frozenset()
        assert cache.get_or_fetch("missing", fetcher) == frozenset()
        assert fetcher.calls == ["missing", "missing"]
        assert len(cache) == 0

    def test_invalidate(self, fetcher) -> None:
        """Test forgetting one handle or all of them."""
        cache = InMemoryTagCache()
        cache.get_or_fetch("blue-shirt", fetcher)
        cache.get_or_fetch("red-shirt", fetcher)
        cache.invalidate("blue-shirt")
        assert len(cache) == 1
        cache.invalidate()
        assert len(cache) == 0


# =============================================================================
# Cart Messages
# =============================================================================

class TestCartMessenger:
    """Tests for per-line cart messages."""

    def test_has_cart_message(self) -> None:
        """Test empty and "none" mean no cart message."""
        assert has_cart_message(make_rule(cart_message="Ships {express}"))
        assert not has_cart_message(make_rule(cart_message=""))
        assert not has_cart_message(make_rule(cart_message="none"))

    def test_rules_without_cart_message_skipped(self, messenger, monday_morning) -> None:
        """Test a higher-priority rule without a cart message is passed over."""
        rules = [
            make_rule("plain", id="plain", is_fallback=True),
            make_rule("sale", id="sale", tags=["sale"], cart_message="**Ships** {express}"),
        ]
        message = messenger.message_for(CartLine("blue-shirt"), rules, monday_morning)
        assert message.rule_id == "sale"
        assert message.message == "Ships Jan 14"

    def test_unmatched_line(self, messenger, monday_morning) -> None:
        """Test lines without a matching cart rule get nothing."""
        rules = [make_rule(tags=["sale"], cart_message="Arrives {arrival}")]
        assert messenger.message_for(CartLine("red-shirt"), rules, monday_morning) is None

    def test_no_cart_rules_skips_lookup(self, messenger, fetcher, monday_morning) -> None:
        """Test tags are not fetched when no rule has a cart message."""
        rules = [make_rule(is_fallback=True)]
        assert messenger.message_for(CartLine("blue-shirt"), rules, monday_morning) is None
        assert fetcher.calls == []

    def test_stock_status_from_line(self, messenger, monday_morning) -> None:
        """Test the cart line's stock status takes part in matching."""
        rules = [
            make_rule(id="pre", is_fallback=True, stock_status=StockStatus.PRE_ORDER,
                      cart_message="Pre-order"),
            make_rule(id="any", is_fallback=True, cart_message="Arrives {arrival}"),
        ]
        pre = messenger.message_for(CartLine("pre-hat", StockStatus.PRE_ORDER), rules, monday_morning)
        other = messenger.message_for(CartLine("pre-hat", StockStatus.IN_STOCK), rules, monday_morning)
        assert pre.rule_id == "pre"
        assert other.message == "Arrives Jan 16-20"

    def test_messages_for_cart(self, messenger, fetcher, monday_morning) -> None:
        """Test a whole cart, with shared tag lookups."""
        rules = [make_rule(id="sale", tags=["sale"], cart_message="Sale ships {express}")]
        lines = [CartLine("blue-shirt"), CartLine("red-shirt"), CartLine("blue-shirt")]
        messages = messenger.messages_for(lines, rules, monday_morning)
        assert [m.handle for m in messages] == ["blue-shirt", "blue-shirt"]
        assert fetcher.calls == ["blue-shirt", "red-shirt"]


# =============================================================================
# Free Delivery
# =============================================================================

def fd_settings(**kwargs):
    values = {"fd_enabled": True, "fd_threshold": 5000, "currency": "GBP"}
    values.update(kwargs)
    return make_settings(**values)


class TestFreeDelivery:
    """Tests for free delivery progress."""

    def test_disabled(self) -> None:
        """Test no progress when the feature is off."""
        assert compute_free_delivery(1000, [make_product()], make_settings()) is None

    def test_progress(self) -> None:
        """Test a cart below the threshold."""
        progress = compute_free_delivery(2000, [make_product()], fd_settings())
        assert progress.state == FreeDeliveryState.PROGRESS
        assert progress.remaining == 3000
        assert progress.percent == 40
        assert progress.message == "Spend £30.00 more for free delivery"
        assert not progress.unlocked

    def test_unlocked(self) -> None:
        """Test a cart at or above the threshold."""
        progress = compute_free_delivery(6000, [make_product()], fd_settings())
        assert progress.state == FreeDeliveryState.UNLOCKED
        assert progress.remaining == 0
        assert progress.percent == 100
        assert progress.message == "You've unlocked free delivery!"
        assert progress.unlocked

    def test_exactly_at_threshold(self) -> None:
        """Test the threshold itself unlocks."""
        assert compute_free_delivery(5000, [make_product()], fd_settings()).unlocked

    def test_empty_cart(self) -> None:
        """Test no products or a zero total."""
        assert compute_free_delivery(0, [], fd_settings()).state == FreeDeliveryState.EMPTY
        progress = compute_free_delivery(0, [make_product()], fd_settings(fd_message_empty="Free over {threshold}"))
        assert progress.state == FreeDeliveryState.EMPTY
        assert progress.message == "Free over £50.00"

    def test_excluded_takes_precedence(self) -> None:
        """Test an excluded product blocks free delivery even when unlocked."""
        settings = fd_settings(fd_exclude_tags=["Gift-Card"], fd_exclude_handles=["sample"])
        by_tag = compute_free_delivery(9000, [make_product(tags=["gift-card"])], settings)
        by_handle = compute_free_delivery(9000, [make_product("sample")], settings)
        assert by_tag.state == FreeDeliveryState.EXCLUDED
        assert by_handle.state == FreeDeliveryState.EXCLUDED
        assert by_tag.message == "Free delivery not available for some items in your cart"

    def test_zero_threshold(self) -> None:
        """Test a zero threshold is always unlocked."""
        progress = compute_free_delivery(100, [make_product()], fd_settings(fd_threshold=0))
        assert progress.percent == 100
        assert progress.unlocked
