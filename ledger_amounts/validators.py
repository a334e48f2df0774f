"""
Input validators for currency codes and amount filters.

These run PURE CODE checks on values coming from forms and query strings.
Each validator is a plain function returning a bool (or a parsed value),
independently testable and free of side effects.
"""

from __future__ import annotations

import re

from .constants import PARENT_ACCOUNT_CURRENCY_PLACEHOLDER
from .currency_tables import CurrencyTables, get_default_currency_tables
from .models import AmountFilter, AmountFilterOperator

# ─── Constants ───────────────────────────────────────────────────────

# Stock symbols: 1-10 ASCII letters or digits ("AAPL", "600519")
_STOCK_SYMBOL_PATTERN = re.compile(r"[A-Za-z0-9]{1,10}")

_INT64_PATTERN = re.compile(r"-?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_SINGLE_AMOUNT_OPERATORS: frozenset[AmountFilterOperator] = frozenset({
    AmountFilterOperator.GREATER_THAN,
    AmountFilterOperator.LESS_THAN,
    AmountFilterOperator.EQUAL,
    AmountFilterOperator.NOT_EQUAL,
})


# ─── Currency ────────────────────────────────────────────────────────


def is_valid_currency(value: object, tables: CurrencyTables | None = None) -> bool:
    """Whether *value* may be stored as an account currency.

    Accepts the parent-account placeholder, any known fiat or crypto code,
    and anything shaped like a stock symbol.
    """
    if not isinstance(value, str):
        return False

    if value == PARENT_ACCOUNT_CURRENCY_PLACEHOLDER:
        return True

    if tables is None:
        tables = get_default_currency_tables()

    if tables.is_fiat(value) or tables.is_crypto(value):
        return True

    return _STOCK_SYMBOL_PATTERN.fullmatch(value) is not None


# ─── Amount Filter ───────────────────────────────────────────────────


def parse_amount_filter(value: str) -> AmountFilter | None:
    """Parse ``op:amount`` or ``op:amount1:amount2``; None if malformed.

    Examples:
        "gt:1000"     → amount > 1000
        "bt:100:500"  → 100 <= amount <= 500
        "nb:100:500"  → outside [100, 500]
    """
    items = value.split(":")

    if len(items) < 2:
        return None

    try:
        operator = AmountFilterOperator(items[0])
    except ValueError:
        return None

    amount1 = _parse_int64(items[1])
    if amount1 is None:
        return None

    if operator in _SINGLE_AMOUNT_OPERATORS:
        if len(items) != 2:
            return None
        return AmountFilter(operator=operator, amount1=amount1)

    if len(items) != 3:
        return None

    amount2 = _parse_int64(items[2])
    if amount2 is None or amount2 < amount1:
        return None

    return AmountFilter(operator=operator, amount1=amount1, amount2=amount2)


def is_valid_amount_filter(value: object) -> bool:
    """An empty string means "no filter" and is valid."""
    if not isinstance(value, str):
        return False

    if value == "":
        return True

    return parse_amount_filter(value) is not None


def _parse_int64(text: str) -> int | None:
    if not _INT64_PATTERN.fullmatch(text):
        return None
    number = int(text)
    if number < _INT64_MIN or number > _INT64_MAX:
        return None
    return number
