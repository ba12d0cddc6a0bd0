"""
ETAPilot Message Templates

Placeholder substitution and the small markdown dialect used in
merchant-authored messages.

Placeholders (literal, every occurrence replaced):
    {countdown} {arrival} {express} {threshold} {remaining} {cart_total} {total}

{lb} is a line-break marker. It is never substituted here; renderers split
on it. Unknown placeholders pass through unchanged.

Markdown:
    **bold**        -> <strong>bold</strong>
    [text](url)     -> <a href="url" ...>text</a>  (url must be acceptable)
"""
from __future__ import annotations

import html
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional


LINE_BREAK = "{lb}"

PLACEHOLDERS = (
    "countdown",
    "arrival",
    "express",
    "threshold",
    "remaining",
    "cart_total",
    "total",
)

_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_ABSOLUTE_URL_RE = re.compile(r"^(https?://|/)", re.IGNORECASE)
_BARE_DOMAIN_RE = re.compile(r"^[a-z0-9][-a-z0-9]*\.", re.IGNORECASE)

_CURRENCY_SYMBOLS = {
    "GBP": "£",
    "EUR": "€",
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "JPY": "¥",
}


# =============================================================================
# Placeholders
# =============================================================================

def substitute_placeholders(template: str, context: Mapping[str, Optional[str]]) -> str:
    """
    Replace placeholders present in `context`.

    Only names in PLACEHOLDERS are considered; a name missing from the
    context (or mapped to None) is left in the text untouched.

    Args:
        template: Merchant message
        context: Placeholder name (without braces) to replacement text

    Returns:
        Message with placeholders replaced
    """
    if not template:
        return ""
    result = template
    for name in PLACEHOLDERS:
        value = context.get(name)
        if value is None:
            continue
        result = result.replace("{" + name + "}", value)
    return result


def has_placeholder(template: str, name: str) -> bool:
    return bool(template) and ("{" + name + "}") in template


def split_lines(text: str) -> list[str]:
    """Split a message on {lb} markers."""
    if not text:
        return []
    return text.split(LINE_BREAK)


# =============================================================================
# Money
# =============================================================================

def format_money(minor_units: int, currency: str = "USD") -> str:
    """
    Format an amount given in minor units (cents/pence).

    format_money(5000, "GBP") -> "£50.00"
    Unknown currencies are prefixed with their code: "SEK 50.00".
    """
    amount = (Decimal(int(minor_units)) / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    code = (currency or "").upper()
    symbol = _CURRENCY_SYMBOLS.get(code)
    sign = "-" if amount < 0 else ""
    body = f"{abs(amount):,.2f}"
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{code} {body}".strip()


# =============================================================================
# Markdown
# =============================================================================

def normalize_url(url: str) -> Optional[str]:
    """
    Validate a link target.

    Absolute http(s) URLs and site-relative paths are kept. A bare domain
    ("example.com/page") gets https:// prepended. Anything else returns None.
    """
    if _ABSOLUTE_URL_RE.match(url):
        return url
    if "." in url and _BARE_DOMAIN_RE.match(url):
        return "https://" + url
    return None


def _render_link(match: re.Match) -> str:
    link_text, url = match.group(1), match.group(2)
    final_url = normalize_url(url.replace("&amp;", "&"))
    if final_url is None:
        return match.group(0)
    return (
        f'<a href="{html.escape(final_url, quote=True)}" target="_blank" '
        f'rel="noopener">{link_text}</a>'
    )


def render_markdown(text: str) -> str:
    """
    Render a message to HTML.

    The text is escaped first, so merchant input can never inject markup.
    Bold markers alternate open/close; an unmatched trailing marker opens
    a final bold run.
    """
    if not text:
        return ""
    result = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if "**" in result:
        parts = result.split("**")
        result = "".join(
            f"<strong>{part}</strong>" if i % 2 == 1 else part
            for i, part in enumerate(parts)
        )
    if "[" in result:
        result = _LINK_RE.sub(_render_link, result)
    return result.replace(LINE_BREAK, "<br>")


def strip_bold(text: str) -> str:
    """Remove bold markers (plain-text contexts such as the cart)."""
    return (text or "").replace("**", "")
