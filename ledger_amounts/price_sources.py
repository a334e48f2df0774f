"""
Exchange-rate and price lookups consumed by currency conversion.

The three Protocols below are the whole contract the conversion code needs.
The *Table classes implement them over an already-fetched "latest" payload.
They do not fetch, refresh or persist anything: whoever owns the network
layer builds a new table when new data arrives.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .models import (
    LatestCryptocurrencyPriceResponse,
    LatestExchangeRateResponse,
    LatestStockPriceResponse,
)
from .numeral import get_exchanged_amount_by_rate, parse_rate

logger = logging.getLogger(__name__)

# Cryptocurrency prices are quoted in USDT; USD stands in when USDT has no rate
CRYPTOCURRENCY_QUOTE_CURRENCY = "USDT"
CRYPTOCURRENCY_QUOTE_FALLBACK_CURRENCY = "USD"


# ─── Protocols ───────────────────────────────────────────────────────


class ExchangeRateSource(Protocol):
    def get_exchanged_amount(
        self, amount: float, from_currency: str, to_currency: str
    ) -> float | None: ...


class CryptocurrencyPriceSource(Protocol):
    def get_cryptocurrency_price_in_fiat(self, symbol: str, fiat_currency: str) -> float | None: ...


class StockPriceSource(Protocol):
    def get_stock_price_in_fiat(
        self, symbol: str, fiat_currency: str, rate_source: ExchangeRateSource
    ) -> float | None: ...


# ─── Exchange Rates ─────────────────────────────────────────────────


class ExchangeRateTable:
    """Fiat exchange rates, all quoted against one base currency.

    Usage:
        table = ExchangeRateTable(latest_rates)
        table.get_exchanged_amount(10000, "EUR", "USD")
    """

    def __init__(self, latest: LatestExchangeRateResponse):
        self.base_currency = latest.base_currency
        self.update_time = latest.update_time
        rates = {rate.currency: rate.rate for rate in latest.exchange_rates}
        rates.setdefault(latest.base_currency, "1")
        self.rates: dict[str, str] = rates

    def get_exchange_rate(self, currency: str) -> str | None:
        return self.rates.get(currency)

    def get_exchanged_amount(
        self, amount: float, from_currency: str, to_currency: str
    ) -> float | None:
        if from_currency == to_currency:
            return amount

        from_rate = self.rates.get(from_currency)
        to_rate = self.rates.get(to_currency)

        if from_rate is None or to_rate is None:
            return None

        return get_exchanged_amount_by_rate(amount, from_rate, to_rate)


# ─── Cryptocurrency Prices ──────────────────────────────────────────


class CryptocurrencyPriceTable:
    """Latest cryptocurrency prices, quoted in the payload's base currency (USDT)."""

    def __init__(self, latest: LatestCryptocurrencyPriceResponse, rate_source: ExchangeRateSource):
        self.base_currency = latest.base_currency or CRYPTOCURRENCY_QUOTE_CURRENCY
        self.update_time = latest.update_time
        self.prices: dict[str, str] = {price.symbol: price.price for price in latest.prices}
        self._rate_source = rate_source

    def get_cryptocurrency_price_in_base(self, symbol: str) -> float | None:
        price = self.prices.get(symbol)
        if price is None:
            return None
        return parse_rate(price)

    def get_cryptocurrency_price_in_fiat(self, symbol: str, fiat_currency: str) -> float | None:
        """Price of one unit of *symbol* expressed in *fiat_currency*."""
        price = self.get_cryptocurrency_price_in_base(symbol)
        if price is None:
            return None

        exchanged = self._rate_source.get_exchanged_amount(price, self.base_currency, fiat_currency)
        if exchanged is not None:
            return exchanged

        if self.base_currency != CRYPTOCURRENCY_QUOTE_CURRENCY:
            return None

        logger.debug(
            "No %s exchange rate, treating it as %s for %s",
            self.base_currency,
            CRYPTOCURRENCY_QUOTE_FALLBACK_CURRENCY,
            symbol,
        )
        return self._rate_source.get_exchanged_amount(
            price, CRYPTOCURRENCY_QUOTE_FALLBACK_CURRENCY, fiat_currency
        )


# ─── Stock Prices ───────────────────────────────────────────────────


class StockPriceTable:
    """Latest stock prices, each quoted in its listing's own currency."""

    def __init__(self, latest: LatestStockPriceResponse):
        self.update_time = latest.update_time
        self.prices: dict[str, tuple[str, str]] = {
            price.symbol: (price.price, price.currency) for price in latest.prices
        }

    def get_stock_price(self, symbol: str) -> tuple[float, str] | None:
        """(price, quote currency) for *symbol*, or None if unknown."""
        entry = self.prices.get(symbol)
        if entry is None:
            return None

        price = parse_rate(entry[0])
        if price is None:
            return None

        return price, entry[1]

    def get_stock_price_in_fiat(
        self, symbol: str, fiat_currency: str, rate_source: ExchangeRateSource
    ) -> float | None:
        stock_price = self.get_stock_price(symbol)
        if stock_price is None:
            return None

        price, quote_currency = stock_price

        if quote_currency == fiat_currency:
            return price

        return rate_source.get_exchanged_amount(price, quote_currency, fiat_currency)
