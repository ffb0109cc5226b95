"""Search engines that can feed the price comparison."""

from .base import BaseSearchProvider
from .brave import BraveSearchProvider
from .google import GoogleShoppingProvider
from .tavily import TavilySearchProvider

__all__ = [
    "BaseSearchProvider",
    "BraveSearchProvider",
    "GoogleShoppingProvider",
    "TavilySearchProvider",
]
