"""
Numeric-range and display constants shared by the evaluator and numeral engine.
"""

from __future__ import annotations

# ─── Amount Range ────────────────────────────────────────────────────
# Largest integer a double can represent exactly (2^53 - 1). Leaves headroom
# under a signed 64-bit integer for fractions up to 8.

MAX_SAFE_INTEGER = 2**53 - 1

TRANSACTION_MIN_AMOUNT: int = -MAX_SAFE_INTEGER
TRANSACTION_MAX_AMOUNT: int = MAX_SAFE_INTEGER

# ─── Decimal Counts ──────────────────────────────────────────────────

DEFAULT_DECIMAL_NUMBER_COUNT = 2
MAX_SUPPORTED_DECIMAL_NUMBER_COUNT = 8

# Currencies with more minor digits than this are clamped (ETH has 18)
MAX_CURRENCY_FRACTION = 8

# ─── Display ─────────────────────────────────────────────────────────

# Shown instead of a real amount when balances are masked
DISPLAY_HIDDEN_AMOUNT = "***"

# Used when a currency has no symbol of its own
DEFAULT_CURRENCY_SYMBOL = "¤"

# Currency field value of a parent account that owns sub-accounts
PARENT_ACCOUNT_CURRENCY_PLACEHOLDER = "---"
