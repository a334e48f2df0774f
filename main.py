#!/usr/bin/env python3
"""
Ledger Amounts — Entry Point
=============================

Walks a handful of quick-entry expressions, localized formats and currency
conversions through the amount handling core and prints a report.

Usage:
    python main.py
    LEDGER_AMOUNTS_NUMERAL_SYSTEM=eastern_arabic python main.py
"""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from ledger_amounts.config import Settings, load_settings
from ledger_amounts.currency import (
    append_currency_symbol,
    get_currency_fraction,
    get_exchanged_amount,
    infer_asset_type_from_currency_code,
)
from ledger_amounts.currency_tables import CurrencyTables, load_currency_tables
from ledger_amounts.evaluator import evaluate_expression_to_amount
from ledger_amounts.exceptions import AmountError
from ledger_amounts.models import (
    CryptocurrencyPrice,
    CurrencyDisplayType,
    ExchangeRate,
    LatestCryptocurrencyPriceResponse,
    LatestExchangeRateResponse,
    LatestStockPriceResponse,
    StockPrice,
)
from ledger_amounts.numeral import (
    format_amount,
    format_hidden_amount,
    format_percent,
    get_adaptive_display_amount_rate,
    parse_amount,
)
from ledger_amounts.price_sources import (
    CryptocurrencyPriceTable,
    ExchangeRateTable,
    StockPriceTable,
)

load_dotenv()


# ─── Sample Input — Typed Into Amount Fields ────────────────────────

SAMPLE_EXPRESSIONS = [
    "2+3*4",
    "(2+3)*4",
    "12.5*3 + (4-1)/2",
    "-5+2",
    "(1+2",
    "10/0",
    "99999999999999999",
]

SAMPLE_USER_TEXT = ["1,234.5", "-0.07", ".5", "1,000,000"]

SAMPLE_RATES = LatestExchangeRateResponse(
    data_source="Sample Bank",
    base_currency="EUR",
    exchange_rates=[
        ExchangeRate(currency="USD", rate="1.0842"),
        ExchangeRate(currency="JPY", rate="161.87"),
        ExchangeRate(currency="GBP", rate="0.8563"),
    ],
)

SAMPLE_CRYPTO_PRICES = LatestCryptocurrencyPriceResponse(
    prices=[
        CryptocurrencyPrice(symbol="BTC", price="64250.12"),
        CryptocurrencyPrice(symbol="ETH", price="3120.55"),
    ],
)

SAMPLE_STOCK_PRICES = LatestStockPriceResponse(
    prices=[StockPrice(symbol="AAPL", price="189.84", currency="USD")],
)

# (amount in minor units, from, to)
SAMPLE_CONVERSIONS = [
    (10000, "EUR", "USD"),
    (10000, "USD", "JPY"),
    (50000000, "BTC", "USD"),
    (100000, "USD", "ETH"),
    (3, "AAPL", "EUR"),
    (100, "BTC", "ETH"),
]


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Report Sections ────────────────────────────────────────────────


def _print_section(title: str) -> None:
    print(f"{'─' * _WIDTH}")
    print(f"  {_BOLD}{title}{_RESET}")


def _print_expressions(settings: Settings) -> None:
    _print_section("EXPRESSIONS")
    options = settings.to_format_options()

    for expr in SAMPLE_EXPRESSIONS:
        amount = evaluate_expression_to_amount(expr)
        if amount is None:
            print(f"    {expr:<22} {_DIM}→{_RESET} {_YELLOW}(left as typed){_RESET}")
        else:
            print(f"    {expr:<22} {_DIM}→{_RESET} {_GREEN}{format_amount(amount / 100, options)}{_RESET}")


def _print_formats(settings: Settings, tables: CurrencyTables) -> None:
    _print_section("FORMATTING")
    options = settings.to_format_options()
    trimmed = settings.to_format_options(trim_tail_zero=True)
    symbol_before = CurrencyDisplayType()

    print(f"    1234567.891            {_DIM}→{_RESET} {format_amount(1234567.891, options)}")
    print(f"    1234567.8 (trimmed)    {_DIM}→{_RESET} {format_amount(1234567.8, trimmed)}")
    print(f"    hidden                 {_DIM}→{_RESET} {format_hidden_amount(options=options)}")
    print(f"    12.345%                {_DIM}→{_RESET} {format_percent(12.345, 2, '<0.01', options)}")
    print(f"    0.00001%               {_DIM}→{_RESET} {format_percent(0.00001, 2, '<0.01', options)}")

    for code in ("USD", "JPY", "BTC"):
        fraction = get_currency_fraction(code, tables)
        text = format_amount(1234.5, settings.to_format_options(decimal_number_count=fraction))
        text = append_currency_symbol(text, symbol_before, code, tables=tables)
        print(f"    1234.5 {code:<15} {_DIM}→{_RESET} {text}")


def _print_parsing(settings: Settings) -> None:
    _print_section("PARSING")
    options = settings.to_format_options()

    for text in SAMPLE_USER_TEXT:
        try:
            amount = parse_amount(text, options)
        except AmountError as e:
            print(f"    {text!r:<22} {_DIM}→{_RESET} {_RED}[{e.code}]{_RESET}")
            continue
        print(f"    {text!r:<22} {_DIM}→{_RESET} {amount}")


def _print_conversions(tables: CurrencyTables) -> None:
    _print_section("CONVERSIONS")
    rate_source = ExchangeRateTable(SAMPLE_RATES)
    crypto_source = CryptocurrencyPriceTable(SAMPLE_CRYPTO_PRICES, rate_source)
    stock_source = StockPriceTable(SAMPLE_STOCK_PRICES)

    for amount, from_currency, to_currency in SAMPLE_CONVERSIONS:
        exchanged = get_exchanged_amount(
            amount, from_currency, to_currency, rate_source, crypto_source, stock_source, tables
        )
        from_type = infer_asset_type_from_currency_code(from_currency, tables)
        to_type = infer_asset_type_from_currency_code(to_currency, tables)
        label = f"{amount} {from_currency} → {to_currency}"
        kinds = f"{_DIM}({from_type.name.lower()} → {to_type.name.lower()}){_RESET}"

        if exchanged is None:
            print(f"    {label:<28} {_RED}unavailable{_RESET} {kinds}")
        else:
            print(f"    {label:<28} {exchanged:.4f} {kinds}")

    ratio = get_adaptive_display_amount_rate(10000, 10842)
    print(f"    EUR : USD                    {ratio}")


# ─── Main ────────────────────────────────────────────────────────────


def main():
    """Print the sample report; exits non-zero only if configuration is invalid."""
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"  {_RED}{_BOLD}Invalid configuration:{_RESET} {e}")
        sys.exit(1)

    logging.basicConfig(level=settings.log_level)
    tables = load_currency_tables(settings.currency_data_dir)

    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  LEDGER AMOUNTS REPORT{_RESET}")
    print(f"{'=' * _WIDTH}")
    print(f"  Numeral system:  {settings.numeral_system.value}")
    print(f"  Grouping:        {settings.digit_grouping.value} ({settings.digit_grouping_symbol!r})")
    print(f"  Decimal:         {settings.decimal_separator!r}")

    _print_expressions(settings)
    _print_formats(settings, tables)
    _print_parsing(settings)
    _print_conversions(tables)

    print(f"{'=' * _WIDTH}\n")
    sys.exit(0)


if __name__ == "__main__":
    main()
