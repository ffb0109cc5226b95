"""Utilities shared by price search providers and the parsing pipeline."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional
from urllib.parse import urlsplit


DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}

MAX_REASONABLE_PRICE = Decimal("1000000")

_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def to_decimal(value: str | None) -> Optional[Decimal]:
    """Best effort conversion of a loose numeric string to Decimal.

    Everything but digits and dots is dropped, then the leading number is
    read, so ``"USD 1,299.00"`` becomes ``Decimal("1299.00")``.
    """
    if not value:
        return None

    cleaned = re.sub(r"[^\d.]", "", value)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    try:
        return Decimal(match.group(0))
    except (InvalidOperation, ValueError):
        return None


def parse_number(value: str, currency: str = "USD") -> Optional[Decimal]:
    """Parse a matched price string honouring the currency's separators."""
    if currency == "EUR" and "." in value and "," in value:
        # 1.299,50
        normalized = value.replace(".", "").replace(",", ".", 1)
    elif currency == "EUR" and "," in value:
        # 1299,50 or 99,50
        normalized = value.replace(",", ".", 1)
    else:
        normalized = value.replace(",", "")
    try:
        return Decimal(normalized)
    except (InvalidOperation, ValueError):
        return None


def is_reasonable_price(amount: Optional[Decimal]) -> bool:
    """Whether an amount looks like a real price rather than noise."""
    return amount is not None and 0 < amount < MAX_REASONABLE_PRICE


def normalize_whitespace(value: str) -> str:
    """Collapse repeated spaces and newlines."""
    return re.sub(r"\s+", " ", value).strip()


def _hostname(url: str) -> Optional[str]:
    """Return the lower-cased host of an absolute URL, or None when malformed."""
    if not url:
        return None
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not hostname:
        return None
    return hostname


def extract_retailer(url: str) -> str:
    """Return a display name for the retailer hosting ``url``.

    ``https://www.bestbuy.com/x`` gives ``"Bestbuy"``; malformed URLs give
    ``"Unknown"``.
    """
    hostname = _hostname(url)
    if hostname is None:
        return "Unknown"

    domain = re.sub(r"^www\.", "", hostname)
    parts = domain.split(".")
    if len(parts) >= 2:
        return parts[0][:1].upper() + parts[0][1:]
    return domain


def retailer_identity(url: str) -> str:
    """Key used to decide whether two listings come from the same retailer.

    ``amazon.com`` and ``www.amazon.co.uk`` both map to ``"amazon"``.
    """
    hostname = _hostname(url)
    if hostname is None:
        return url.lower()

    domain = re.sub(r"^www\.", "", hostname)
    parts = domain.split(".")
    if len(parts) >= 2:
        return parts[0]
    return domain


def normalize_url_for_dedup(url: str) -> str:
    """Canonical form of a URL: host without www plus path, no scheme or query."""
    hostname = _hostname(url)
    if hostname is None:
        return url.lower()

    path = urlsplit(url.strip()).path
    normalized = re.sub(r"^www\.", "", hostname) + path
    normalized = re.sub(r"/$", "", normalized)
    return normalized.lower()
