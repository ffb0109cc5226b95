"""Request and response models for the price comparison endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from price_compare.services.price_search.models import (
    ComparisonResult,
    PriceInfo,
    SearchMode,
)


class SearchRequest(BaseModel):
    """Body of a price comparison request."""

    input: str = Field(..., description="Product name or product page URL.")
    mode: str = Field(
        SearchMode.ALL.value,
        description="Which search engines to query (all, google, brave, tavily, web).",
    )


class PriceInfoModel(BaseModel):
    """A single retailer offer."""

    retailer: str = Field(..., description="Retailer name derived from the URL host.")
    product_name: str = Field(..., description="Listing title without price noise.")
    current_price: float = Field(..., description="Price in the listing currency.")
    currency: str = Field(..., description="ISO currency code.")
    discount: Optional[int] = Field(default=None, description="Percentage off.")
    original_price: Optional[float] = Field(
        default=None, description="Price before the discount."
    )
    url: str
    source: str = Field(..., description="Search engine the listing came from.")
    normalized_price: Optional[float] = Field(
        default=None, description="Price converted to USD."
    )

    @classmethod
    def from_price(cls, price: PriceInfo) -> "PriceInfoModel":
        return cls(**price.to_dict())


class ComparisonResponse(BaseModel):
    """Data model for the response of the search endpoint."""

    success: bool
    productName: str = Field(..., description="Product that was searched for.")
    results: List[PriceInfoModel] = Field(default_factory=list)
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ComparisonResult) -> "ComparisonResponse":
        return cls(
            success=result.success,
            productName=result.product_name,
            results=[PriceInfoModel.from_price(price) for price in result.results],
            error=result.error,
            warnings=result.warnings,
        )


class HealthResponse(BaseModel):
    """Data model for the health check."""

    status: str
    timestamp: datetime
