"""
Pydantic models for amount handling — strict typing at every boundary.

Every model here is immutable value data. Options, currency records and
price payloads are validated once when built and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import DEFAULT_DECIMAL_NUMBER_COUNT, MAX_SUPPORTED_DECIMAL_NUMBER_COUNT
from .numeral_system import (
    DEFAULT_DECIMAL_SEPARATOR,
    DEFAULT_DIGIT_GROUPING_SYMBOL,
    DigitGrouping,
    NumeralSystem,
    check_separators_differ,
)


# ─── Number Format Options ──────────────────────────────────────────


class NumberFormatOptions(BaseModel):
    """Configuration consumed by every formatting and parsing operation."""

    model_config = ConfigDict(frozen=True)

    numeral_system: NumeralSystem = NumeralSystem.WESTERN_ARABIC
    decimal_separator: str = Field(default=DEFAULT_DECIMAL_SEPARATOR, min_length=1)
    digit_grouping_symbol: str = Field(default=DEFAULT_DIGIT_GROUPING_SYMBOL, min_length=1)
    digit_grouping: DigitGrouping = DigitGrouping.NONE
    decimal_number_count: Optional[int] = None  # None → DEFAULT_DECIMAL_NUMBER_COUNT
    trim_tail_zero: bool = False

    @model_validator(mode="after")
    def _separators_differ(self) -> NumberFormatOptions:
        check_separators_differ(self.decimal_separator, self.digit_grouping_symbol)
        return self

    @property
    def effective_decimal_number_count(self) -> int:
        """Decimal count actually used; out-of-range values fall back to the default."""
        count = self.decimal_number_count
        if count is None or count < 0 or count > MAX_SUPPORTED_DECIMAL_NUMBER_COUNT:
            return DEFAULT_DECIMAL_NUMBER_COUNT
        return count


# ─── Currency Records ───────────────────────────────────────────────


class AssetType(IntEnum):
    """Asset class of an account currency."""

    FIAT = 1
    CRYPTO = 2
    STOCK = 3


class CurrencySymbol(BaseModel):
    model_config = ConfigDict(frozen=True)

    normal: str
    plural: Optional[str] = None


class CurrencyInfo(BaseModel):
    """Static lookup record for one fiat currency or cryptocurrency."""

    model_config = ConfigDict(frozen=True)

    code: str
    fraction: int = Field(ge=0)
    symbol: Optional[CurrencySymbol] = None


# ─── Currency Display ───────────────────────────────────────────────


class CurrencyDisplaySymbol(str, Enum):
    """What to show next to an amount."""

    NONE = "none"
    SYMBOL = "symbol"  # $ / dollars
    CODE = "code"  # USD
    UNIT = "unit"  # caller-supplied unit text
    NAME = "name"  # caller-supplied display name


class CurrencyDisplayLocation(str, Enum):
    """Where the currency text goes relative to the amount."""

    NONE = "none"
    BEFORE_AMOUNT = "before_amount"
    AFTER_AMOUNT = "after_amount"


class CurrencyDisplayType(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: CurrencyDisplaySymbol = CurrencyDisplaySymbol.SYMBOL
    location: CurrencyDisplayLocation = CurrencyDisplayLocation.BEFORE_AMOUNT
    separator: str = ""


class CurrencyPrependAndAppendText(BaseModel):
    model_config = ConfigDict(frozen=True)

    prepend_text: Optional[str] = None
    append_text: Optional[str] = None


# ─── Latest Rate / Price Payloads ───────────────────────────────────
# Shapes of already-fetched "latest" responses. Rates and prices stay
# strings, exactly as the server sends them.


class ExchangeRate(BaseModel):
    model_config = ConfigDict(frozen=True)

    currency: str
    rate: str  # units of `currency` per one unit of the base currency


class LatestExchangeRateResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    data_source: str = ""
    reference_url: str = ""
    update_time: int = 0
    base_currency: str
    exchange_rates: list[ExchangeRate] = Field(default_factory=list)


class CryptocurrencyPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    price: str


class LatestCryptocurrencyPriceResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    data_source: str = ""
    reference_url: str = ""
    update_time: int = 0
    base_currency: str = "USDT"
    prices: list[CryptocurrencyPrice] = Field(default_factory=list)


class StockPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    price: str
    currency: str  # quote currency of the listing


class LatestStockPriceResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    data_source: str = ""
    reference_url: str = ""
    update_time: int = 0
    base_currency: str = ""
    prices: list[StockPrice] = Field(default_factory=list)


# ─── Amount Filter ──────────────────────────────────────────────────


class AmountFilterOperator(str, Enum):
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    EQUAL = "eq"
    NOT_EQUAL = "ne"
    BETWEEN = "bt"
    NOT_BETWEEN = "nb"


class AmountFilter(BaseModel):
    """A transaction amount condition such as ``gt:1000`` or ``bt:100:500``."""

    model_config = ConfigDict(frozen=True)

    operator: AmountFilterOperator
    amount1: int
    amount2: Optional[int] = None

    def matches(self, amount: int) -> bool:
        op = self.operator
        if op is AmountFilterOperator.GREATER_THAN:
            return amount > self.amount1
        if op is AmountFilterOperator.LESS_THAN:
            return amount < self.amount1
        if op is AmountFilterOperator.EQUAL:
            return amount == self.amount1
        if op is AmountFilterOperator.NOT_EQUAL:
            return amount != self.amount1

        assert self.amount2 is not None
        within = self.amount1 <= amount <= self.amount2
        return within if op is AmountFilterOperator.BETWEEN else not within
