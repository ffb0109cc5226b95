"""High-level service that orchestrates price comparisons."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence

from configs import Settings, get_settings
from price_compare.services.product_extractor import ProductExtractor
from price_compare.services.url_handler import is_url, normalize_url

from .aggregator import aggregate_results
from .currency import CURRENCY_RATES, format_price
from .dedup import deduplicate_by_retailer
from .models import (
    ComparisonResult,
    EmptyQueryError,
    PriceCompareError,
    ProviderResponse,
    SearchMode,
    SearchResult,
    SearchSource,
)
from .parser import parse_prices
from .providers import (
    BaseSearchProvider,
    BraveSearchProvider,
    GoogleShoppingProvider,
    TavilySearchProvider,
)
from .query import build_search_query
from .ranking import sort_by_price_ascending

logger = logging.getLogger("price_search.service")


class PriceComparisonService:
    """Coordinate searches, price extraction and ranking for one product."""

    DEFAULT_RESULTS_PER_PROVIDER = 10

    def __init__(
        self,
        providers: Sequence[BaseSearchProvider],
        product_extractor: Optional[ProductExtractor] = None,
        priority_source: SearchSource = SearchSource.GOOGLE,
        rates: Mapping[str, Decimal] = CURRENCY_RATES,
        results_per_provider: Optional[int] = None,
    ) -> None:
        self.providers: Dict[SearchSource, BaseSearchProvider] = {
            provider.source: provider for provider in providers
        }
        self.product_extractor = product_extractor or ProductExtractor()
        self.priority_source = priority_source
        self.rates = rates
        self.results_per_provider = (
            results_per_provider or self.DEFAULT_RESULTS_PER_PROVIDER
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PriceComparisonService":
        """Build the service with every provider configured in ``settings``."""
        timeout = settings.HTTP_TIMEOUT_SECONDS
        return cls(
            providers=(
                BraveSearchProvider(settings.BRAVE_API_KEY, timeout=timeout),
                TavilySearchProvider(settings.TAVILY_API_KEY, timeout=timeout),
                GoogleShoppingProvider(
                    settings.GOOGLE_API_KEY,
                    settings.GOOGLE_SEARCH_ENGINE_ID,
                    timeout=timeout,
                ),
            ),
            product_extractor=ProductExtractor(timeout=timeout),
            priority_source=SearchSource(settings.PRIORITY_SOURCE),
            results_per_provider=settings.SEARCH_RESULTS_PER_PROVIDER,
        )

    def search(
        self,
        query: str,
        mode: SearchMode = SearchMode.ALL,
        max_results: Optional[int] = None,
    ) -> List[ProviderResponse]:
        """Query the providers selected by ``mode`` concurrently.

        Responses come back in merge priority order whatever the completion
        order was.
        """
        limit = max_results or self.results_per_provider
        selected = [
            self.providers[source]
            for source in SearchMode(mode).sources()
            if source in self.providers
        ]
        if not selected:
            return []

        with ThreadPoolExecutor(max_workers=len(selected)) as executor:
            futures = [
                executor.submit(provider.search, query, limit) for provider in selected
            ]
            return [future.result() for future in futures]

    def search_product(
        self,
        product_name: str,
        mode: SearchMode = SearchMode.ALL,
        max_results: Optional[int] = None,
    ) -> tuple[List[SearchResult], List[str]]:
        """Search a product and return its e-commerce results plus warnings."""
        query = build_search_query(product_name)
        responses = self.search(query, mode, max_results)
        return aggregate_results(responses)

    def resolve_product_name(self, input_text: str) -> str:
        """Use ``input_text`` as is, or extract the product name behind a URL."""
        if not input_text or not input_text.strip():
            raise EmptyQueryError()
        if is_url(input_text):
            product = self.product_extractor.extract(normalize_url(input_text))
            return product.name
        return input_text.strip()

    def compare(
        self,
        input_text: str,
        mode: SearchMode | str = SearchMode.ALL,
    ) -> ComparisonResult:
        """Run the whole pipeline for a product name or URL.

        Never raises for expected failures; they are reported through
        ``success``/``error`` on the returned :class:`ComparisonResult`.
        """
        product_name = input_text
        try:
            search_mode = SearchMode(mode)
            product_name = self.resolve_product_name(input_text)
            results, warnings = self.search_product(product_name, search_mode)

            prices = parse_prices(results)
            if not prices:
                return ComparisonResult(
                    success=False,
                    product_name=product_name,
                    error="No prices found for this product",
                    warnings=warnings,
                )

            deduplicated = deduplicate_by_retailer(prices, self.priority_source)
            ranked = sort_by_price_ascending(deduplicated, self.rates)
            logger.info(
                "Compared '%s' (mode=%s): %d price(s), %d retailer(s)",
                product_name,
                search_mode.value,
                len(prices),
                len(ranked),
            )
            return ComparisonResult(
                success=True,
                product_name=product_name,
                results=ranked,
                warnings=warnings,
            )
        except (PriceCompareError, ValueError) as exc:
            logger.info("Comparison for '%s' failed: %s", input_text, exc)
            return ComparisonResult(success=False, product_name=product_name, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error comparing prices for '%s'", input_text)
            return ComparisonResult(
                success=False,
                product_name=product_name,
                error=str(exc) or "Unknown error occurred",
            )

    def render_summary(self, comparison: ComparisonResult) -> str:
        """Turn a comparison into a plain text message."""
        if not comparison.success:
            return f'No offers for "{comparison.product_name}": {comparison.error}'

        lines: List[str] = [f'Offers for "{comparison.product_name}" (cheapest first):', ""]
        for result in comparison.results:
            price = format_price(result.current_price, result.currency)
            line = f"- {result.retailer}: {price}"
            if result.discount:
                line += f" ({result.discount}% off"
                if result.original_price is not None:
                    line += f", was {format_price(result.original_price, result.currency)}"
                line += ")"
            lines.append(f"{line} - {result.url}")

        message = "\n".join(lines).strip()
        logger.debug("Generated price summary: %s", message)
        return message


def get_price_comparison_service() -> PriceComparisonService:
    """FastAPI dependency returning a service wired from the environment."""
    return PriceComparisonService.from_settings(get_settings())
