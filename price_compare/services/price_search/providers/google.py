"""Google Custom Search provider with structured shopping data."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from ..models import PriceSearchError, SearchResult, SearchSource
from .base import BaseSearchProvider

logger = logging.getLogger("price_search.google")


class GoogleShoppingProvider(BaseSearchProvider):
    """Query the Google Custom Search JSON API."""

    source = SearchSource.GOOGLE
    _search_url = "https://www.googleapis.com/customsearch/v1"
    MAX_RESULTS = 10

    def __init__(
        self,
        api_key: Optional[str],
        search_engine_id: Optional[str],
        timeout: float = 15,
    ) -> None:
        super().__init__(timeout=timeout)
        self.api_key = api_key
        self.search_engine_id = search_engine_id

    def _search_impl(
        self,
        query: str,
        max_results: int,
    ) -> Iterable[SearchResult]:
        if not self.api_key or not self.search_engine_id:
            raise PriceSearchError(
                self.source.value,
                "Google API key or search engine id not configured.",
            )

        params = {
            "key": self.api_key,
            "cx": self.search_engine_id,
            "q": f"{query} buy price",
            "num": str(min(max_results, self.MAX_RESULTS)),
        }
        logger.info("Searching Google for '%s'", query)
        try:
            response = requests.get(self._search_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise PriceSearchError(self.source.value, f"Google request failed: {exc}") from exc

        if response.status_code != 200:
            raise PriceSearchError(
                self.source.value,
                f"HTTP {response.status_code} from Google Custom Search.",
            )

        items = response.json().get("items") or []
        if not items:
            logger.info("No Google results for '%s'.", query)

        for item in items:
            yield SearchResult(
                title=item.get("title", ""),
                url=item.get("link", ""),
                snippet=item.get("snippet"),
                description=item.get("snippet"),
                source=self.source,
                structured_data=_structured_data(item.get("pagemap")),
            )


def _structured_data(
    pagemap: Optional[Dict[str, Any]],
) -> Optional[Dict[str, List[Dict[str, Any]]]]:
    """Keep the pagemap sections that carry price information."""
    if not pagemap:
        return None
    return {
        "offers": pagemap.get("offer") or [],
        "products": pagemap.get("product") or [],
        "metatags": pagemap.get("metatags") or [],
    }
