"""Price comparison endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from price_compare.logger_config import get_logger
from price_compare.models.search_models import (
    ComparisonResponse,
    HealthResponse,
    SearchRequest,
)
from price_compare.services.price_search.models import SearchMode
from price_compare.services.price_search.service import (
    PriceComparisonService,
    get_price_comparison_service,
)

logger = get_logger("price_search.api")

search_router = APIRouter(prefix="/api", tags=["Search"])

VALID_MODES = [mode.value for mode in SearchMode]


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message},
    )


@search_router.get("/health", response_description="Api healthcheck")
async def health() -> HealthResponse:
    """Report that the API is up."""
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@search_router.post(
    "/search",
    response_model=ComparisonResponse,
    responses={
        200: {"model": ComparisonResponse, "description": "Prices found"},
        400: {"model": ComparisonResponse, "description": "Invalid input or no prices"},
    },
)
def search(
    data: SearchRequest,
    service: PriceComparisonService = Depends(get_price_comparison_service),
) -> ComparisonResponse | JSONResponse:
    """
    Compare prices for a product name or product page URL.

    Args:
        data (SearchRequest): The product to look for and the engines to use.

    Returns:
        ComparisonResponse with offers sorted from cheapest to most expensive.
    """
    if not data.input or not data.input.strip():
        return _bad_request("Input is required and must be a non-empty string")
    if data.mode not in VALID_MODES:
        return _bad_request(f"Invalid mode. Must be one of: {', '.join(VALID_MODES)}")

    logger.info("Searching for: %s (mode: %s)", data.input, data.mode)
    try:
        result = service.compare(data.input.strip(), SearchMode(data.mode))
    except Exception as e:
        logger.exception("Search error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        )

    response = ComparisonResponse.from_result(result)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=response.model_dump(mode="json"),
        )
    return response
