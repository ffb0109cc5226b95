"""Domain models for price search and comparison results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


class SearchSource(str, Enum):
    """Search engines able to feed the comparison pipeline."""

    GOOGLE = "google"
    BRAVE = "brave"
    TAVILY = "tavily"


class SearchMode(str, Enum):
    """Which providers a comparison should query."""

    ALL = "all"
    GOOGLE = "google"
    BRAVE = "brave"
    TAVILY = "tavily"
    WEB = "web"  # brave + tavily, the text-only engines

    def sources(self) -> List[SearchSource]:
        """Return the sources queried by this mode, in merge priority order."""
        if self is SearchMode.ALL:
            return [SearchSource.BRAVE, SearchSource.TAVILY, SearchSource.GOOGLE]
        if self is SearchMode.WEB:
            return [SearchSource.BRAVE, SearchSource.TAVILY]
        return [SearchSource(self.value)]


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Single raw hit returned by a search provider."""

    title: str
    url: str
    source: SearchSource
    snippet: Optional[str] = None
    description: Optional[str] = None
    structured_data: Optional[Dict[str, List[Dict[str, Any]]]] = None


@dataclass(slots=True)
class PriceInfo:
    """Price detected for a single retailer listing."""

    retailer: str
    product_name: str
    current_price: Decimal
    currency: str
    url: str
    source: SearchSource
    discount: Optional[int] = None
    original_price: Optional[Decimal] = None
    normalized_price: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON friendly representation."""
        return {
            "retailer": self.retailer,
            "product_name": self.product_name,
            "current_price": float(self.current_price),
            "currency": self.currency,
            "discount": self.discount,
            "original_price": (
                float(self.original_price) if self.original_price is not None else None
            ),
            "url": self.url,
            "source": SearchSource(self.source).value,
            "normalized_price": (
                float(self.normalized_price)
                if self.normalized_price is not None
                else None
            ),
        }


@dataclass(slots=True)
class ProviderResponse:
    """Outcome of one provider call: results or an error, never both."""

    source: SearchSource
    results: List[SearchResult] = field(default_factory=list)
    error: Optional[str] = None


@dataclass(slots=True)
class ProductInfo:
    """Product name guessed from a product page."""

    name: str
    original_url: str
    extracted_at: datetime


@dataclass(slots=True)
class ComparisonResult:
    """Final answer of a comparison run."""

    success: bool
    product_name: str
    results: List[PriceInfo] = field(default_factory=list)
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


class PriceCompareError(RuntimeError):
    """Base class for pipeline level failures."""


class EmptyQueryError(PriceCompareError, ValueError):
    """Raised when the product name is blank."""

    def __init__(self, message: str = "Product name cannot be empty") -> None:
        super().__init__(message)


class NoSearchResultsError(PriceCompareError):
    """Raised when no provider produced a usable result."""


class ProductExtractionError(PriceCompareError):
    """Raised when a product name cannot be derived from a URL."""


class PriceSearchError(PriceCompareError):
    """Raised when a provider cannot complete the search."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source
        self.message = message
