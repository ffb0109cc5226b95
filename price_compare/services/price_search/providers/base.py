"""Base classes for search providers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from ..models import PriceSearchError, ProviderResponse, SearchResult, SearchSource

logger = logging.getLogger("price_search.provider")


class BaseSearchProvider(ABC):
    """Common behaviour for search engines feeding the comparison."""

    source: SearchSource

    def __init__(self, timeout: float = 15) -> None:
        self.timeout = timeout

    def search(self, query: str, max_results: int = 10) -> ProviderResponse:
        """Public search entry point with error handling.

        Never raises: failures are reported through ``ProviderResponse.error``
        so that one engine going down does not abort the others.
        """
        try:
            results = list(self._search_impl(query, max_results))
            return ProviderResponse(source=self.source, results=results)
        except PriceSearchError as exc:
            logger.warning(
                "Provider %s failed: %s", exc.source, exc.message
            )
            return ProviderResponse(source=self.source, error=exc.message)
        except Exception:
            logger.exception("Unexpected error while searching %s", self.source.value)
            return ProviderResponse(
                source=self.source,
                error=f"Could not reach {self.source.value}.",
            )

    @abstractmethod
    def _search_impl(
        self,
        query: str,
        max_results: int,
    ) -> Iterable[SearchResult]:
        """Return raw results for the given query."""
        raise NotImplementedError
