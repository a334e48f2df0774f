"""
Currency fractions, asset types, cross-asset conversion and currency symbols.

Conversion matrix (amounts in minor units of each side):

    from \\ to   Fiat                      Crypto           Stock
    Fiat        exchange-rate source      ÷ crypto price   ÷ stock price
    Crypto      × crypto price            —                —
    Stock       × stock price             —                —

Prices come from external lookups (see price_sources). This module only
defines the dispatch and the minor-unit scaling between fractions; pairs
marked "—" are unsupported and yield None.
"""

from __future__ import annotations

import math

from .constants import DEFAULT_CURRENCY_SYMBOL, MAX_CURRENCY_FRACTION
from .currency_tables import CurrencyTables, get_default_currency_tables
from .models import (
    AssetType,
    CurrencyDisplayLocation,
    CurrencyDisplaySymbol,
    CurrencyDisplayType,
    CurrencyPrependAndAppendText,
)
from .price_sources import CryptocurrencyPriceSource, ExchangeRateSource, StockPriceSource


# ─── Lookups ─────────────────────────────────────────────────────────


def get_currency_fraction(
    currency_code: str | None, tables: CurrencyTables | None = None
) -> int | None:
    """Minor-unit digits of a fiat or crypto currency, clamped to 8.

    Returns None for an empty or unknown code (stocks included).
    """
    if not currency_code:
        return None

    if tables is None:
        tables = get_default_currency_tables()

    currency_info = tables.get(currency_code)
    if currency_info is None:
        return None

    # Wider fractions (ETH: 18) would not fit an int64 amount
    return min(currency_info.fraction, MAX_CURRENCY_FRACTION)


def infer_asset_type_from_currency_code(
    currency_code: str | None, tables: CurrencyTables | None = None
) -> AssetType | None:
    """Crypto table → CRYPTO, fiat table → FIAT, anything else → STOCK."""
    if not currency_code:
        return None

    if tables is None:
        tables = get_default_currency_tables()

    if tables.is_crypto(currency_code):
        return AssetType.CRYPTO

    if tables.is_fiat(currency_code):
        return AssetType.FIAT

    return AssetType.STOCK


# ─── Conversion ──────────────────────────────────────────────────────


def get_exchanged_amount(
    amount: float,
    from_currency: str,
    to_currency: str,
    rate_source: ExchangeRateSource,
    crypto_price_source: CryptocurrencyPriceSource,
    stock_price_source: StockPriceSource,
    tables: CurrencyTables | None = None,
) -> float | None:
    """Convert *amount* (minor units of *from_currency*) into *to_currency*.

    Returns:
        The converted amount in minor units of *to_currency* (not rounded),
        or None when a price is unavailable or the pair is unsupported.
    """
    if from_currency == to_currency:
        return amount

    if tables is None:
        tables = get_default_currency_tables()

    from_type = infer_asset_type_from_currency_code(from_currency, tables)
    to_type = infer_asset_type_from_currency_code(to_currency, tables)

    if from_type is AssetType.FIAT and to_type is AssetType.FIAT:
        return rate_source.get_exchanged_amount(amount, from_currency, to_currency)

    if to_type is AssetType.FIAT:
        if from_type is AssetType.CRYPTO:
            price = crypto_price_source.get_cryptocurrency_price_in_fiat(from_currency, to_currency)
        elif from_type is AssetType.STOCK:
            price = stock_price_source.get_stock_price_in_fiat(from_currency, to_currency, rate_source)
        else:
            return None

        if price is None:
            return None

        result = amount * price * _fraction_scale(from_currency, to_currency, tables)
        return result if math.isfinite(result) else None

    if from_type is AssetType.FIAT:
        if to_type is AssetType.CRYPTO:
            price = crypto_price_source.get_cryptocurrency_price_in_fiat(to_currency, from_currency)
        else:
            price = stock_price_source.get_stock_price_in_fiat(to_currency, from_currency, rate_source)

        if price is None or price <= 0:
            return None

        result = (amount / price) * _fraction_scale(from_currency, to_currency, tables)
        return result if math.isfinite(result) else None

    return None


def _fraction_scale(from_currency: str, to_currency: str, tables: CurrencyTables) -> float:
    from_fraction = get_currency_fraction(from_currency, tables) or 0
    to_fraction = get_currency_fraction(to_currency, tables) or 0
    return 10.0 ** (to_fraction - from_fraction)


# ─── Currency Symbols ───────────────────────────────────────────────


def get_amount_prepend_and_append_currency_symbol(
    currency_display_type: CurrencyDisplayType | None,
    currency_code: str,
    currency_unit: str = "",
    currency_name: str = "",
    is_plural: bool = False,
    tables: CurrencyTables | None = None,
) -> CurrencyPrependAndAppendText | None:
    """Resolve the text to show before or after an amount.

    Returns None when no display type is given or the location suppresses it.
    """
    if currency_display_type is None:
        return None

    symbol = ""
    mode = currency_display_type.symbol

    if mode is CurrencyDisplaySymbol.SYMBOL:
        if tables is None:
            tables = get_default_currency_tables()

        currency_info = tables.get(currency_code)

        if currency_info is not None and currency_info.symbol is not None:
            symbol = currency_info.symbol.normal

            if is_plural and currency_info.symbol.plural:
                symbol = currency_info.symbol.plural

        if not symbol:
            symbol = DEFAULT_CURRENCY_SYMBOL
    elif mode is CurrencyDisplaySymbol.CODE:
        symbol = currency_code
    elif mode is CurrencyDisplaySymbol.UNIT:
        symbol = currency_unit
    elif mode is CurrencyDisplaySymbol.NAME:
        symbol = currency_name

    location = currency_display_type.location

    if location is CurrencyDisplayLocation.BEFORE_AMOUNT:
        return CurrencyPrependAndAppendText(prepend_text=symbol)

    if location is CurrencyDisplayLocation.AFTER_AMOUNT:
        return CurrencyPrependAndAppendText(append_text=symbol)

    return None


def append_currency_symbol(
    value: str,
    currency_display_type: CurrencyDisplayType | None,
    currency_code: str,
    currency_unit: str = "",
    currency_name: str = "",
    is_plural: bool = False,
    tables: CurrencyTables | None = None,
) -> str:
    """Attach the resolved currency text to an already formatted amount.

    Example: "1,234.50" + SYMBOL/BEFORE_AMOUNT for USD → "$1,234.50";
    CODE/AFTER_AMOUNT with separator " " → "1,234.50 USD".
    """
    symbol = get_amount_prepend_and_append_currency_symbol(
        currency_display_type, currency_code, currency_unit, currency_name, is_plural, tables
    )

    if symbol is None:
        return value

    assert currency_display_type is not None
    separator = currency_display_type.separator
    result = value

    if symbol.prepend_text:
        result = symbol.prepend_text + separator + result

    if symbol.append_text:
        result = result + separator + symbol.append_text

    return result
