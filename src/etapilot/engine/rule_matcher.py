"""
ETAPilot Rule Matcher

Selects the rule that applies to a product.

Rules are evaluated in list order and the first match wins; later rules
are never consulted, even if they are more specific. Rule order is
therefore the merchant's priority list, and fallback rules belong last
by convention (not enforced here).

A rule matches when:
    (is_fallback OR handle listed OR any tag shared)
    AND stock status satisfied ("any" imposes nothing)
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ..models import Match, ProductDescriptor, Rule, StockStatus


logger = logging.getLogger(__name__)


def _clean(values: Iterable[str]) -> set[str]:
    return {v.strip() for v in values if v and v.strip()}


def stock_status_matches(required: StockStatus, actual: Optional[StockStatus]) -> bool:
    """Check a rule's stock constraint against a product's status."""
    if required == StockStatus.ANY:
        return True
    return actual == required


def targets_product(match: Match, product: ProductDescriptor) -> bool:
    """Handle/tag/fallback part of a match, ignoring stock status."""
    if match.is_fallback:
        return True
    if product.handle and product.handle.strip() in _clean(match.product_handles):
        return True
    return bool(_clean(product.tags) & _clean(match.tags))


def rule_matches(rule: Rule, product: ProductDescriptor) -> bool:
    """Check whether a single rule applies to a product."""
    if not targets_product(rule.match, product):
        return False
    return stock_status_matches(rule.match.stock_status, product.stock_status)


def match_rule(
    product: ProductDescriptor,
    rules: Iterable[Rule],
    predicate: Optional[Callable[[Rule], bool]] = None,
) -> Optional[Rule]:
    """
    Find the first rule that applies to a product.

    Args:
        product: Product handle, tags and stock status
        rules: Rules in priority order
        predicate: Optional extra filter (e.g. "has a cart message");
            rules failing it are skipped as if absent

    Returns:
        The first matching rule, or None (no messaging for this product)
    """
    for rule in rules:
        if predicate is not None and not predicate(rule):
            continue
        if rule_matches(rule, product):
            logger.debug("Product %r matched rule %s", product.handle, rule.id)
            return rule
    return None


def rule_has_match(rule: Rule) -> bool:
    """
    Check that a rule can ever match.

    A non-fallback rule with no handles and no tags matches nothing; the
    editor uses this to warn before saving.
    """
    return rule.match.is_fallback or rule.match.has_targets
