"""Merge provider responses into one list of shopping-relevant results."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Set, Tuple

from .models import (
    NoSearchResultsError,
    ProviderResponse,
    SearchResult,
    SearchSource,
)
from .utils import normalize_url_for_dedup

logger = logging.getLogger("price_search.aggregator")

NON_ECOMMERCE_DOMAINS = (
    "youtube",
    "youtu.be",
    "reddit",
    "twitter",
    "facebook",
    "instagram",
    "tiktok",
    "pinterest",
)

ECOMMERCE_DOMAINS = (
    "amazon",
    "ebay",
    "walmart",
    "target",
    "bestbuy",
    "newegg",
    "costco",
    "homedepot",
    "lowes",
    "macys",
    "nordstrom",
    "zappos",
    "wayfair",
    "overstock",
    "etsy",
    "aliexpress",
    "alibaba",
)

ECOMMERCE_PATH_KEYWORDS = ("/shop/", "/store/", "/product", "/item")

TITLE_KEYWORDS = ("buy", "shop")


def merge_responses(
    responses: Sequence[ProviderResponse],
) -> Tuple[List[SearchResult], List[str]]:
    """Concatenate successful results in the given order and collect errors.

    Raises:
        NoSearchResultsError: when no provider returned a single result.
    """
    merged: List[SearchResult] = []
    errors: List[str] = []
    for response in responses:
        if response.error:
            errors.append(f"{SearchSource(response.source).value}: {response.error}")
            continue
        merged.extend(response.results)

    if errors:
        logger.warning(
            "Search completed with %d error(s): %s", len(errors), "; ".join(errors)
        )

    if not merged:
        message = "No search results found from any engine"
        if errors:
            message = f"{message} ({'; '.join(errors)})"
        raise NoSearchResultsError(message)

    return merged, errors


def deduplicate_results(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Drop results whose normalized URL was already seen."""
    seen: Set[str] = set()
    unique: List[SearchResult] = []
    for result in results:
        key = normalize_url_for_dedup(result.url)
        if key in seen:
            continue
        seen.add(key)
        unique.append(result)
    return unique


def is_ecommerce_result(result: SearchResult) -> bool:
    """Heuristic check that a result points at a shopping page."""
    url = result.url.lower()
    title = result.title.lower()

    if any(domain in url for domain in NON_ECOMMERCE_DOMAINS):
        return False
    if any(domain in url for domain in ECOMMERCE_DOMAINS):
        return True
    if any(keyword in url for keyword in ECOMMERCE_PATH_KEYWORDS):
        return True
    return any(keyword in title for keyword in TITLE_KEYWORDS)


def filter_ecommerce_results(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Keep only results that look like product or store pages."""
    return [result for result in results if is_ecommerce_result(result)]


def aggregate_results(
    responses: Sequence[ProviderResponse],
) -> Tuple[List[SearchResult], List[str]]:
    """Merge, deduplicate and filter provider responses.

    Returns:
        The e-commerce results in provider order and the provider errors that
        were tolerated along the way.
    """
    merged, errors = merge_responses(responses)
    unique = deduplicate_results(merged)
    ecommerce = filter_ecommerce_results(unique)
    logger.info(
        "Aggregated %d result(s): %d unique, %d e-commerce",
        len(merged),
        len(unique),
        len(ecommerce),
    )
    if not ecommerce:
        raise NoSearchResultsError("No e-commerce results found")
    return ecommerce, errors
