"""Search query construction."""

from __future__ import annotations

from .models import EmptyQueryError

PRICING_KEYWORDS = ("price", "buy", "shop", "purchase")


def build_search_query(product_name: str) -> str:
    """Append a pricing keyword to ``product_name`` unless it already has one."""
    if not product_name or not product_name.strip():
        raise EmptyQueryError()

    lowered = product_name.lower()
    if any(keyword in lowered for keyword in PRICING_KEYWORDS):
        return product_name
    return f"{product_name} price"
