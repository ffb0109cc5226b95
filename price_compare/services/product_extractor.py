"""Guess a product name from a product page URL."""

from __future__ import annotations

import html
import logging
import re
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urlsplit

import requests
from bs4 import BeautifulSoup

from price_compare.services.price_search.models import ProductExtractionError, ProductInfo
from price_compare.services.price_search.utils import DEFAULT_HEADERS, normalize_whitespace

logger = logging.getLogger("price_search.product_extractor")

MAX_NAME_LENGTH = 150

_TEXT_PATTERNS = (
    re.compile(r"product[_\s-]?name[\"\s:]*([^<\"\n]+)", re.IGNORECASE),
    re.compile(r"title[\"\s:]*([^<\"\n]{10,100})", re.IGNORECASE),
)

_NAME_SUFFIX = re.compile(
    r"\s*[-|]\s*(Buy Now|Shop Now|Price|Review|Details).*$", re.IGNORECASE
)

_BOILERPLATE = (
    re.compile(
        r"^(home|about|contact|privacy|terms|search|menu|login|sign in|cart|checkout)",
        re.IGNORECASE,
    ),
    re.compile(r"cookie", re.IGNORECASE),
    re.compile(r"^©"),
    re.compile(r"all rights reserved", re.IGNORECASE),
    re.compile(r"^follow us", re.IGNORECASE),
    re.compile(r"^subscribe", re.IGNORECASE),
)

_GENERIC_PATH_SEGMENTS = {"product", "item", "dp", "p", "products", "items"}


def clean_product_name(name: str) -> str:
    """Strip markup, entities, extra whitespace and shop suffixes."""
    text = html.unescape(re.sub(r"<[^>]*>", " ", name))
    cleaned = normalize_whitespace(text)
    cleaned = _NAME_SUFFIX.sub("", cleaned)
    if len(cleaned) > MAX_NAME_LENGTH:
        cleaned = cleaned[:MAX_NAME_LENGTH].strip()
    return cleaned


def is_likely_product_name(line: str) -> bool:
    """Reject navigation, legal and cookie banner lines."""
    if len(line) < 10 or len(line) > 200:
        return False
    if any(pattern.search(line) for pattern in _BOILERPLATE):
        return False
    return bool(re.search(r"[a-z0-9]", line, re.IGNORECASE))


def product_name_from_url(url: str) -> Optional[str]:
    """Turn a descriptive URL slug such as ``dell-xps-15-laptop`` into a name."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return None

    segments = [segment for segment in path.split("/") if segment]
    for segment in reversed(segments):
        if segment.lower() in _GENERIC_PATH_SEGMENTS:
            continue
        if "-" in segment or "_" in segment:
            name = re.sub(r"[-_]", " ", segment)
            name = re.sub(r"\b\w", lambda match: match.group(0).upper(), name)
            if len(name) >= 10:
                return name
    return None


def _content_lines(soup: BeautifulSoup) -> List[str]:
    lines = (line.strip() for line in soup.get_text("\n").split("\n"))
    return [line for line in lines if len(line) > 10]


def extract_product_name_from_content(content: str, url: str) -> str:
    """Pick the most likely product name from page content.

    Tries, in order: the ``<title>`` and ``<h1>`` tags, ``og:title``,
    ``product name`` / ``title`` fields in text, the first plausible content
    line, the URL slug and finally the first substantial line.

    Raises:
        ProductExtractionError: when none of the strategies yields a name.
    """
    soup = BeautifulSoup(content, "html.parser")

    candidates: List[str] = []
    for tag_name in ("title", "h1"):
        tag = soup.find(tag_name)
        if tag is not None:
            candidates.append(tag.get_text(" ", strip=True))
    og_title = soup.find("meta", attrs={"property": "og:title"})
    if og_title is not None and og_title.get("content"):
        candidates.append(str(og_title["content"]))
    for pattern in _TEXT_PATTERNS:
        match = pattern.search(content)
        if match:
            candidates.append(match.group(1))

    for candidate in candidates:
        name = clean_product_name(candidate)
        if len(name) >= 3:
            return name

    lines = _content_lines(soup)
    for line in lines[:20]:
        if is_likely_product_name(line):
            name = clean_product_name(line)
            if len(name) >= 3:
                return name

    from_url = product_name_from_url(url)
    if from_url:
        return from_url

    substantial = next((line for line in lines if 10 <= len(line) <= 200), None)
    if substantial:
        return clean_product_name(substantial)

    raise ProductExtractionError("Could not extract product name from content")


class ProductExtractor:
    """Fetch a product page and extract a product name from it."""

    def __init__(self, timeout: float = 15) -> None:
        self.timeout = timeout

    def fetch_content(self, url: str) -> str:
        """Download the page behind ``url``."""
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=self.timeout)
        if response.status_code != 200:
            raise ProductExtractionError(f"HTTP {response.status_code} while fetching page")
        if not response.text or not response.text.strip():
            raise ProductExtractionError("No content extracted from URL")
        return response.text

    def extract(self, url: str) -> ProductInfo:
        """Return the product found at ``url``.

        Raises:
            ProductExtractionError: when the page cannot be fetched or parsed.
        """
        try:
            content = self.fetch_content(url)
            name = extract_product_name_from_content(content, url)
        except (ProductExtractionError, requests.exceptions.RequestException) as exc:
            logger.warning("Product extraction failed for %s: %s", url, exc)
            raise ProductExtractionError(
                f"Failed to extract product from URL: {exc}"
            ) from exc

        logger.info("Extracted product name '%s' from %s", name, url)
        return ProductInfo(
            name=name,
            original_url=url,
            extracted_at=datetime.now(timezone.utc),
        )
