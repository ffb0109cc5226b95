"""Price extraction, normalization and ranking across search engines."""

from .models import (
    ComparisonResult,
    EmptyQueryError,
    NoSearchResultsError,
    PriceCompareError,
    PriceInfo,
    PriceSearchError,
    ProductExtractionError,
    ProductInfo,
    ProviderResponse,
    SearchMode,
    SearchResult,
    SearchSource,
)

__all__ = [
    "ComparisonResult",
    "EmptyQueryError",
    "NoSearchResultsError",
    "PriceCompareError",
    "PriceInfo",
    "PriceSearchError",
    "ProductExtractionError",
    "ProductInfo",
    "ProviderResponse",
    "SearchMode",
    "SearchResult",
    "SearchSource",
]
