"""
Ledger Amounts — amount handling for a personal-finance client.

Architecture: Expression → Amount (minor units) → Numeral Engine ⇄ Currency Conversion
Philosophy:  Money is an integer. Text is only how we show it.
"""

__version__ = "1.0.0"
