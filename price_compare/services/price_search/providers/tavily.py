"""Tavily search provider."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import requests

from ..models import PriceSearchError, SearchResult, SearchSource
from .base import BaseSearchProvider

logger = logging.getLogger("price_search.tavily")


class TavilySearchProvider(BaseSearchProvider):
    """Query the Tavily search API.

    Tavily returns page content rather than short snippets; the content is
    kept whole because prices often sit far from the top of the page.
    """

    source = SearchSource.TAVILY
    _search_url = "https://api.tavily.com/search"
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
            raise PriceSearchError(self.source.value, "Tavily API key not configured.")

        payload = {
            "query": query,
            "max_results": min(max_results, self.MAX_RESULTS),
            "search_depth": "basic",
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        logger.info("Searching Tavily for '%s'", query)
        try:
            response = requests.post(
                self._search_url, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as exc:
            raise PriceSearchError(self.source.value, f"Tavily request failed: {exc}") from exc

        if response.status_code != 200:
            raise PriceSearchError(
                self.source.value,
                f"HTTP {response.status_code} from Tavily.",
            )

        count = 0
        for item in response.json().get("results") or []:
            title = item.get("title")
            url = item.get("url")
            if not title or not url:
                continue

            content = item.get("content")
            yield SearchResult(
                title=title,
                url=url,
                snippet=content,
                description=content,
                source=self.source,
            )
            count += 1

        if count == 0:
            logger.info("No Tavily results for '%s'.", query)
