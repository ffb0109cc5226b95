"""Price, currency and discount extraction from search results.

Structured offer data is trusted first. Otherwise the title and snippets are
scanned with an ordered list of currency patterns; each candidate is checked
against a small window of surrounding text so that unit prices, shipping
thresholds, instalment plans and price-range filters are not mistaken for
the product price.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, List, Optional, Pattern, Tuple

from .models import PriceInfo, SearchResult, SearchSource
from .utils import (
    extract_retailer,
    is_reasonable_price,
    normalize_whitespace,
    parse_number,
    to_decimal,
)

logger = logging.getLogger("price_search.parser")

CONTEXT_WINDOW = 20

# US/UK amounts: 1,299.99 / 1299.99 / 499
_AMOUNT = r"\d{1,3}(?:,\d{3})+(?:\.\d{2})?|\d+(?:\.\d{2})?"
# European amounts may also use "." for thousands and "," for decimals.
_EUR_AMOUNT = r"\d{1,3}(?:[.,]\d{3})+(?:[.,]\d{2})?|\d+(?:[.,]\d{2})?"


@dataclass(frozen=True)
class PricePattern:
    """A price regex and the currency it implies (None: read from group 2)."""

    regex: Pattern[str]
    currency: Optional[str]


# Order matters: currency-prefixed dollars must win over the bare "$" pattern.
PRICE_PATTERNS: Tuple[PricePattern, ...] = (
    PricePattern(re.compile(rf"\bCAD\s?\$?\s?({_AMOUNT})", re.IGNORECASE), "CAD"),
    PricePattern(re.compile(rf"\bAUD\s?\$?\s?({_AMOUNT})", re.IGNORECASE), "AUD"),
    PricePattern(
        re.compile(rf"({_AMOUNT})\s?(USD|GBP|EUR|CAD|AUD)\b", re.IGNORECASE), None
    ),
    PricePattern(re.compile(rf"\$\s?({_AMOUNT})"), "USD"),
    PricePattern(re.compile(rf"£\s?({_AMOUNT})"), "GBP"),
    PricePattern(re.compile(rf"€\s?({_EUR_AMOUNT})"), "EUR"),
)

DISCOUNT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(\d{1,2})%\s*off", re.IGNORECASE),
    re.compile(r"save\s*(\d{1,2})%", re.IGNORECASE),
    re.compile(r"(\d{1,2})%\s*discount", re.IGNORECASE),
    re.compile(r"discount:\s*(\d{1,2})%", re.IGNORECASE),
)

WAS_PRICE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(rf"was\s*\$({_AMOUNT})", re.IGNORECASE),
    re.compile(rf"was\s*£({_AMOUNT})", re.IGNORECASE),
    re.compile(rf"was\s*€({_EUR_AMOUNT})", re.IGNORECASE),
    re.compile(rf"originally?\s*\$({_AMOUNT})", re.IGNORECASE),
    re.compile(rf"reg(?:ular)?\s*\$({_AMOUNT})", re.IGNORECASE),
)

RETAILER_SUFFIX = re.compile(
    r"\s*[-|]\s*(Amazon|eBay|Walmart|Best Buy|Target|Newegg).*$", re.IGNORECASE
)

_UNIT_PRICE = re.compile(
    r"\$?\d+\.?\d*\s*/\s*(oz|ml|fl\.?\s?oz|gram|kg|lb|each|count|ct)", re.IGNORECASE
)
_SHIPPING_THRESHOLD = re.compile(
    r"(free|flat rate)?\s*shipping\s*(on|over|above|at)?\s*\$?\d+", re.IGNORECASE
)
_INSTALLMENT = re.compile(
    r"(\d+\s*)?(payments?|installments?)\s*(of|@)\s*\$?\d+", re.IGNORECASE
)
# "from $25" is a price lead-in, not a filter.
_RANGE_FILTER = re.compile(r"\b(?:less than|under|over)\s+\$?\d+", re.IGNORECASE)
_PRICE_RANGE = re.compile(r"\$\d+\.?\d*\s*[-–]\s*\$\d+")


@dataclass(frozen=True)
class MatchContext:
    """A candidate price match with the text around it."""

    before: str
    match: str
    after: str

    @property
    def full(self) -> str:
        return self.before + self.match + self.after

    @classmethod
    def around(
        cls, text: str, start: int, end: int, window: int = CONTEXT_WINDOW
    ) -> "MatchContext":
        return cls(
            before=text[max(0, start - window) : start],
            match=text[start:end],
            after=text[end : end + window],
        )


def is_unit_price(context: MatchContext) -> bool:
    """``$0.25/oz`` style per-unit prices."""
    return bool(_UNIT_PRICE.search(context.full))


def is_shipping_threshold(context: MatchContext) -> bool:
    """``FREE Shipping on $35+`` style thresholds."""
    return bool(_SHIPPING_THRESHOLD.search(context.full))


def is_installment(context: MatchContext) -> bool:
    """``4 payments of $12.50`` style payment plans."""
    return bool(_INSTALLMENT.search(context.full))


def is_range_filter(context: MatchContext) -> bool:
    """``Under $10`` style search filters; only text up to the match counts."""
    return bool(_RANGE_FILTER.search(context.before + context.match))


def is_price_range(context: MatchContext) -> bool:
    """``$5-$10`` style ranges."""
    return bool(_PRICE_RANGE.search(context.full))


EXCLUSION_CHECKS: Tuple[Callable[[MatchContext], bool], ...] = (
    is_unit_price,
    is_shipping_threshold,
    is_installment,
    is_range_filter,
    is_price_range,
)


def is_excluded(context: MatchContext) -> bool:
    """Whether any exclusion rule rejects the candidate."""
    return any(check(context) for check in EXCLUSION_CHECKS)


def extract_price(text: str) -> Optional[Tuple[Decimal, str]]:
    """Return the first plausible ``(amount, currency)`` found in ``text``."""
    for pattern in PRICE_PATTERNS:
        for match in pattern.regex.finditer(text):
            context = MatchContext.around(text, match.start(), match.end())
            if is_excluded(context):
                logger.debug("Skipping price candidate %r in %r", context.match, context.full)
                continue

            if pattern.currency is None:
                currency = match.group(2).upper()
            else:
                currency = pattern.currency

            amount = parse_number(match.group(1), currency)
            if is_reasonable_price(amount):
                return amount, currency  # type: ignore[return-value]

    return None


def extract_discount(text: str) -> Optional[int]:
    """Return an explicit percentage discount between 1 and 99."""
    for pattern in DISCOUNT_PATTERNS:
        match = pattern.search(text)
        if match:
            percentage = int(match.group(1))
            if 0 < percentage <= 99:
                return percentage
    return None


def extract_original_price(text: str, currency: str) -> Optional[Decimal]:
    """Return the pre-discount ("was") price mentioned in ``text``."""
    for pattern in WAS_PRICE_PATTERNS:
        match = pattern.search(text)
        if match:
            amount = parse_number(match.group(1), currency)
            if amount is not None and amount > 0:
                return amount
    return None


def compute_discount(original_price: Decimal, current_price: Decimal) -> int:
    """Percentage saved, rounded half up to a whole number."""
    ratio = (original_price - current_price) / original_price * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def extract_product_name(title: str) -> str:
    """Strip prices, discounts and retailer suffixes from a listing title."""
    cleaned = title
    for pattern in PRICE_PATTERNS:
        cleaned = pattern.regex.sub("", cleaned)
    for discount in DISCOUNT_PATTERNS:
        cleaned = discount.sub("", cleaned)

    cleaned = RETAILER_SUFFIX.sub("", cleaned)
    cleaned = normalize_whitespace(cleaned)
    cleaned = re.sub(r"[\s:|-]+$", "", cleaned)

    return cleaned or title


def _parse_structured(result: SearchResult) -> Optional[PriceInfo]:
    """Read price fields published by providers with machine readable offers."""
    data = result.structured_data or {}

    candidates: List[Tuple[Optional[str], Optional[str]]] = []
    for metatag in data.get("metatags") or []:
        candidates.append(
            (metatag.get("product:price:amount"), metatag.get("product:price:currency"))
        )
    for offer in data.get("offers") or []:
        candidates.append((offer.get("price"), offer.get("pricecurrency")))

    for raw_amount, raw_currency in candidates:
        if not raw_amount:
            continue
        amount = to_decimal(str(raw_amount))
        if not is_reasonable_price(amount):
            continue

        return PriceInfo(
            retailer=extract_retailer(result.url),
            product_name=extract_product_name(result.title),
            current_price=amount,  # type: ignore[arg-type]
            currency=(raw_currency or "USD").upper(),
            url=result.url,
            source=result.source,
        )
    return None


def parse_price(result: SearchResult) -> Optional[PriceInfo]:
    """Extract a :class:`PriceInfo` from a search result, or None."""
    if result.source == SearchSource.GOOGLE and result.structured_data:
        structured = _parse_structured(result)
        if structured is not None:
            return structured

    text = f"{result.title} {result.snippet or ''} {result.description or ''}"

    price_match = extract_price(text)
    if price_match is None:
        return None
    amount, currency = price_match

    discount = extract_discount(text)
    original_price = extract_original_price(text, currency)
    if discount is None and original_price is not None and original_price > amount:
        discount = compute_discount(original_price, amount)

    return PriceInfo(
        retailer=extract_retailer(result.url),
        product_name=extract_product_name(result.title),
        current_price=amount,
        currency=currency,
        discount=discount,
        original_price=original_price,
        url=result.url,
        source=result.source,
    )


def parse_prices(results: Iterable[SearchResult]) -> List[PriceInfo]:
    """Parse many results, dropping the ones without a detectable price."""
    prices: List[PriceInfo] = []
    for result in results:
        price = parse_price(result)
        if price is not None:
            prices.append(price)
    logger.debug("Parsed %d price(s)", len(prices))
    return prices
