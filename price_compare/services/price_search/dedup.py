"""Retailer level deduplication of parsed prices."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .models import PriceInfo, SearchSource
from .utils import retailer_identity


def group_by_retailer(prices: Iterable[PriceInfo]) -> Dict[str, List[PriceInfo]]:
    """Group prices by retailer identity, keeping first-seen order."""
    groups: Dict[str, List[PriceInfo]] = {}
    for price in prices:
        groups.setdefault(retailer_identity(price.url), []).append(price)
    return groups


def deduplicate_by_retailer(
    prices: Iterable[PriceInfo],
    priority_source: SearchSource | str = SearchSource.GOOGLE,
) -> List[PriceInfo]:
    """Keep one price per retailer, preferring ``priority_source``.

    Without a priority-source entry the first listing seen wins, even when a
    later one is cheaper.
    """
    deduplicated: List[PriceInfo] = []
    for group in group_by_retailer(prices).values():
        chosen = next(
            (price for price in group if price.source == priority_source), group[0]
        )
        deduplicated.append(chosen)
    return deduplicated
