"""Static currency table and USD normalization."""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

# 1 unit of the currency expressed in USD.
CURRENCY_RATES: Mapping[str, Decimal] = MappingProxyType(
    {
        "USD": Decimal("1.0"),
        "GBP": Decimal("1.27"),
        "EUR": Decimal("1.09"),
        "CAD": Decimal("0.74"),
        "AUD": Decimal("0.66"),
    }
)

SUPPORTED_CURRENCIES = frozenset(CURRENCY_RATES)

CURRENCY_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {"USD": "$", "GBP": "£", "EUR": "€", "CAD": "CA$", "AUD": "A$"}
)


def normalize_to_usd(
    amount: Decimal,
    currency: str,
    rates: Mapping[str, Decimal] = CURRENCY_RATES,
) -> Decimal:
    """Convert ``amount`` to USD; unknown currencies are taken at par."""
    rate = rates.get(currency, Decimal("1.0"))
    return amount * rate


def format_price(value: Optional[Decimal], currency: str = "USD") -> Optional[str]:
    """Render an amount with its currency symbol, e.g. ``$1,299.99``."""
    if value is None:
        return None

    quantized = value.quantize(Decimal("0.01"))
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{quantized:,.2f} {currency}"
    return f"{symbol}{quantized:,.2f}"
