"""
Custom exception hierarchy for amount handling.

Each exception type maps to a specific category of failure, so callers can
tell malformed input apart from a valid-but-unrepresentable amount.
"""

from __future__ import annotations


class AmountError(Exception):
    """Base exception for all amount handling failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ExpressionSyntaxError(AmountError):
    """The expression contains an unknown token or unbalanced parentheses."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("EXPRESSION_SYNTAX_INVALID", message, details)


class ExpressionEvaluationError(AmountError):
    """The postfix program cannot be evaluated (operands, division by zero)."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("EXPRESSION_EVALUATION_FAILED", message, details)


class NumericOverflowError(AmountError):
    """The result lies outside the representable transaction amount range."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("NUMERIC_OVERFLOW", message, details)


class InvalidTextualNumberError(AmountError):
    """Text handed to the numeral engine is not a well-formed number."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_TEXTUAL_NUMBER", message, details)


class CurrencyTableError(AmountError):
    """The static currency data could not be loaded."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("CURRENCY_TABLE_INVALID", message, details)
