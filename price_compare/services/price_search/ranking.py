"""Sorting and filtering of parsed prices.

All functions return new lists; the ``normalized_price`` annotation is set
on copies so callers' objects are never modified.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import List, Mapping, Sequence

from .currency import CURRENCY_RATES, normalize_to_usd
from .models import PriceInfo


def with_normalized_prices(
    results: Sequence[PriceInfo],
    rates: Mapping[str, Decimal] = CURRENCY_RATES,
) -> List[PriceInfo]:
    """Return copies of ``results`` carrying their USD price."""
    return [
        replace(
            result,
            normalized_price=normalize_to_usd(result.current_price, result.currency, rates),
        )
        for result in results
    ]


def sort_by_price_ascending(
    results: Sequence[PriceInfo],
    rates: Mapping[str, Decimal] = CURRENCY_RATES,
) -> List[PriceInfo]:
    """Cheapest first; ties keep their input order."""
    if not results:
        return []
    return sorted(
        with_normalized_prices(results, rates),
        key=lambda result: result.normalized_price or Decimal(0),
    )


def sort_by_price(
    results: Sequence[PriceInfo],
    rates: Mapping[str, Decimal] = CURRENCY_RATES,
) -> List[PriceInfo]:
    """Most expensive first; ties keep their input order."""
    if not results:
        return []
    return sorted(
        with_normalized_prices(results, rates),
        key=lambda result: result.normalized_price or Decimal(0),
        reverse=True,
    )


def sort_by_discount(results: Sequence[PriceInfo]) -> List[PriceInfo]:
    """Biggest discount first, listings without a discount last."""
    if not results:
        return []
    return sorted(results, key=lambda result: result.discount or 0, reverse=True)


def filter_by_max_price(
    results: Sequence[PriceInfo],
    max_price_usd: Decimal | float | int,
    rates: Mapping[str, Decimal] = CURRENCY_RATES,
) -> List[PriceInfo]:
    """Keep listings whose USD price is at most ``max_price_usd``."""
    limit = Decimal(str(max_price_usd))
    return [
        result
        for result in results
        if normalize_to_usd(result.current_price, result.currency, rates) <= limit
    ]


def filter_by_min_discount(
    results: Sequence[PriceInfo], min_discount: int
) -> List[PriceInfo]:
    """Keep discounted listings with at least ``min_discount`` percent off."""
    return [
        result
        for result in results
        if result.discount is not None and result.discount >= min_discount
    ]
