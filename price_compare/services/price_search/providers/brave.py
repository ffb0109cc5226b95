"""Brave Web Search provider."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import requests

from ..models import PriceSearchError, SearchResult, SearchSource
from ..utils import normalize_whitespace
from .base import BaseSearchProvider

logger = logging.getLogger("price_search.brave")


class BraveSearchProvider(BaseSearchProvider):
    """Query the Brave Web Search API."""

    source = SearchSource.BRAVE
    _search_url = "https://api.search.brave.com/res/v1/web/search"
    MAX_RESULTS = 20

    def __init__(self, api_key: Optional[str], timeout: float = 15) -> None:
        super().__init__(timeout=timeout)
        self.api_key = api_key

    def _search_impl(
        self,
        query: str,
        max_results: int,
    ) -> Iterable[SearchResult]:
        if not self.api_key:
            raise PriceSearchError(self.source.value, "Brave API key not configured.")

        headers = {
            "Accept": "application/json",
            "X-Subscription-Token": self.api_key,
        }
        params = {"q": query, "count": min(max_results, self.MAX_RESULTS)}
        logger.info("Searching Brave for '%s'", query)
        try:
            response = requests.get(
                self._search_url, params=params, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as exc:
            raise PriceSearchError(self.source.value, f"Brave request failed: {exc}") from exc

        if response.status_code != 200:
            raise PriceSearchError(
                self.source.value,
                f"HTTP {response.status_code} from Brave Search.",
            )

        payload = response.json()
        items = (payload.get("web") or {}).get("results") or []
        count = 0
        for item in items:
            title = item.get("title")
            url = item.get("url")
            if not title or not url:
                continue

            description = item.get("description") or ""
            extra = " ".join(item.get("extra_snippets") or [])
            full_description = normalize_whitespace(f"{description} {extra}")
            yield SearchResult(
                title=normalize_whitespace(title),
                url=url,
                snippet=description or None,
                description=full_description or None,
                source=self.source,
            )
            count += 1

        if count == 0:
            logger.info("No Brave results for '%s'.", query)
