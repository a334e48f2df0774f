"""
Numeral engine — amounts to localized text and back.

THIS IS THE DISPLAY BOUNDARY FOR MONEY.

Inside the application an amount is an integer of minor units (1234.50 USD is
123450). This module is the only place that turns such values into what a
user reads, and the only place that turns what a user typed back into them:

    format_amount(1234.5, NumberFormatOptions(digit_grouping=THOUSANDS_SEPARATOR))
        → "1,234.50"
    parse_amount("1,234.50", same_options)
        → 123450

All functions are pure. Localization (digit glyphs, separators, grouping)
comes entirely from NumberFormatOptions.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from .constants import DEFAULT_DECIMAL_NUMBER_COUNT, DISPLAY_HIDDEN_AMOUNT
from .exceptions import InvalidTextualNumberError
from .models import NumberFormatOptions
from .numeral_system import SYSTEM_DECIMAL_SEPARATOR, DigitGrouping, NumeralSystem

_DEFAULT_OPTIONS = NumberFormatOptions()


# ─── Grouping & Separators ──────────────────────────────────────────


def append_digit_grouping_symbol_and_decimal_separator(
    textual_number: str, options: NumberFormatOptions | None = None
) -> str:
    """Insert digit grouping and the localized decimal separator.

    Args:
        textual_number: A number already rendered in the target numeral
            system's digits, e.g. "-1234.5", or the hidden-amount sentinel.
        options: Format options; defaults are used when omitted.

    Returns:
        e.g. "-1,234.5" for thousands grouping.

    Raises:
        InvalidTextualNumberError: If a second non-digit appears after the
            source decimal separator.

    The first non-digit character is taken as the source decimal separator,
    whatever it is. The hidden-amount sentinel is padded with as many
    sentinel characters as there are decimal places, so masked balances have
    the same shape as real ones.
    """
    if not textual_number:
        return textual_number

    if options is None:
        options = _DEFAULT_OPTIONS

    numeral_system = options.numeral_system
    negative = textual_number[0] == "-"

    if negative:
        textual_number = textual_number[1:]

    integer_chars: list[str] = []
    decimal_chars: list[str] = []

    if textual_number == DISPLAY_HIDDEN_AMOUNT:
        integer_chars = list(textual_number)
        decimal_chars = [textual_number[0]] * options.effective_decimal_number_count
    else:
        source_decimal_separator = ""

        for ch in textual_number:
            if not source_decimal_separator:
                if numeral_system.is_digit(ch):
                    integer_chars.append(ch)
                else:
                    source_decimal_separator = ch
            elif numeral_system.is_digit(ch):
                decimal_chars.append(ch)
            else:
                raise InvalidTextualNumberError(
                    f"Number {textual_number!r} is not a valid textual number",
                    details={"text": textual_number, "unexpected": ch},
                )

    result = options.digit_grouping.format(integer_chars, options.digit_grouping_symbol)
    decimals = "".join(decimal_chars)

    if decimals:
        result = f"{result}{options.decimal_separator}{decimals}"

    if negative:
        result = f"-{result}"

    return result


# ─── Parsing ─────────────────────────────────────────────────────────


def parse_amount(text: object, options: NumberFormatOptions | None = None) -> int:
    """Parse user-entered text into an amount in minor units.

    Args:
        text: e.g. "-1,234.5" (localized digits and separators allowed).
        options: Format options; `decimal_number_count` sets the scale.

    Returns:
        -123450 for the example at two decimal places. Non-string or blank
        input returns 0, so an untouched optional field reads as zero.

    Raises:
        InvalidTextualNumberError: If non-blank text holds no parsable number.

    Extra decimal digits are truncated, never rounded.
    """
    if not isinstance(text, str) or not text:
        return 0

    negative = text[0] == "-"

    if negative:
        text = text[1:]

    if not text:
        return 0

    if options is None:
        options = _DEFAULT_OPTIONS

    sign = -1 if negative else 1
    numeral_system = options.numeral_system
    decimal_separator = options.decimal_separator
    decimal_number_count = options.effective_decimal_number_count
    multiplier = 10**decimal_number_count

    if options.digit_grouping_symbol in text:
        text = text.replace(options.digit_grouping_symbol, "")

    separator_pos = text.find(decimal_separator)

    if separator_pos < 0:
        return sign * _parse_unsigned(numeral_system, text) * multiplier

    if separator_pos == 0:
        text = numeral_system.digit_zero + text
        separator_pos += 1

    integer = text[:separator_pos]
    decimals = text[separator_pos + len(decimal_separator):]

    if len(decimals) < decimal_number_count:
        decimals = decimals.ljust(decimal_number_count, numeral_system.digit_zero)
    elif len(decimals) > decimal_number_count:
        decimals = decimals[:decimal_number_count]

    value = _parse_unsigned(numeral_system, integer) * multiplier

    if decimals:
        value += _parse_unsigned(numeral_system, decimals)

    return sign * value


def _parse_unsigned(numeral_system: NumeralSystem, digits: str) -> int:
    if digits.lstrip().startswith(("-", "+")):
        raise InvalidTextualNumberError(
            f"Unexpected sign inside number {digits!r}", details={"text": digits}
        )
    return numeral_system.parse_int(digits)


# ─── Amount Formatting ──────────────────────────────────────────────


def format_amount(value: object, options: NumberFormatOptions | None = None) -> str:
    """Format a display value (not minor units) with a fixed number of decimals.

    Args:
        value: e.g. 1234.5 — an int, float or Decimal.
        options: Format options.

    Returns:
        "1234.50" at two decimals; "" for non-numeric or non-finite input.

    Algorithm:
        1. Scale exactly to minor units (half-up) so float noise never shows.
        2. Render in the numeral system, then slice `decimal_number_count`
           characters from the right as the decimal part (left-padding with
           zero glyphs for short values).
        3. Optionally trim trailing zero glyphs; an all-zero decimal part
           disappears together with its separator.
        4. Group the integer part, re-attach the sign.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return ""

    if isinstance(value, float) and not math.isfinite(value):
        return ""

    if isinstance(value, Decimal) and not value.is_finite():
        return ""

    if options is None:
        options = _DEFAULT_OPTIONS

    numeral_system = options.numeral_system
    decimal_number_count = options.effective_decimal_number_count
    textual_number = numeral_system.format_number(_to_minor_units(value, decimal_number_count))

    negative = textual_number[0] == "-"

    if negative:
        textual_number = textual_number[1:]

    integer = numeral_system.digit_zero
    decimals = ""

    if len(textual_number) > decimal_number_count:
        split = len(textual_number) - decimal_number_count
        integer = textual_number[:split]
        decimals = textual_number[split:]
    else:
        decimals = textual_number.rjust(decimal_number_count, numeral_system.digit_zero)

    if options.trim_tail_zero:
        decimals = decimals.rstrip(numeral_system.digit_zero)

    if len(integer) > 1 and options.digit_grouping is not DigitGrouping.NONE:
        integer = options.digit_grouping.format(list(integer), options.digit_grouping_symbol)

    result = f"{integer}{options.decimal_separator}{decimals}" if decimals else integer

    if negative:
        result = f"-{result}"

    return result


def _to_minor_units(value: int | float | Decimal, decimal_number_count: int) -> int:
    exact = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    return int(exact.scaleb(decimal_number_count).to_integral_value(rounding=ROUND_HALF_UP))


def format_hidden_amount(
    value: str = DISPLAY_HIDDEN_AMOUNT, options: NumberFormatOptions | None = None
) -> str:
    """Render the masked-balance placeholder shaped like a real amount ("***.**")."""
    return append_digit_grouping_symbol_and_decimal_separator(value, options)


# ─── Plain Numbers & Percentages ────────────────────────────────────


def format_number(
    value: float, options: NumberFormatOptions | None = None, precision: Optional[int] = None
) -> str:
    """Format a plain number; with *precision*, truncate (not round) toward zero first."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return ""

    if not math.isfinite(value):
        return ""

    if options is None:
        options = _DEFAULT_OPTIONS

    numeral_system = options.numeral_system

    if precision is not None:
        ratio = 10**precision
        scaled = value * ratio

        if not math.isfinite(scaled):
            return ""

        normalized_value = math.trunc(scaled)
        textual_value = numeral_system.format_number(normalized_value / ratio)
    else:
        textual_value = numeral_system.format_number(value)

    return append_digit_grouping_symbol_and_decimal_separator(textual_value, options)


def format_percent(
    value: float,
    precision: int,
    low_precision_value: str | None,
    options: NumberFormatOptions | None = None,
) -> str:
    """Format *value* as a percentage, e.g. 12.345 at precision 2 → "12.34%".

    A tiny positive value that truncates to zero shows *low_precision_value*
    (such as "<0.01") instead of a misleading "0%". That fallback is written
    with Western digits and "."; both are localized here.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return ""

    scaled = value * 10**precision

    if not math.isfinite(scaled):
        return ""

    if options is None:
        options = _DEFAULT_OPTIONS

    normalized_value = math.trunc(scaled)

    if value > 0 and normalized_value < 1 and low_precision_value:
        localized = options.numeral_system.replace_western_arabic_digits_to_localized_digits(
            low_precision_value
        )

        if options.decimal_separator == SYSTEM_DECIMAL_SEPARATOR:
            return localized + "%"

        return localized.replace(SYSTEM_DECIMAL_SEPARATOR, options.decimal_separator) + "%"

    return format_number(value, options, precision) + "%"


# ─── Amount Helpers ─────────────────────────────────────────────────


def sum_amounts(amounts: Iterable[int]) -> int:
    total = 0
    for amount in amounts:
        total += amount
    return total


def get_amount_with_decimal_number_count(
    amount: int,
    decimal_number_count: int,
    source_decimal_number_count: int = DEFAULT_DECIMAL_NUMBER_COUNT,
) -> int:
    """Zero out the minor digits a currency with fewer decimals cannot show.

    Example (source scale 2): 12345 at 0 decimals → 12300, at 1 → 12340.
    Truncates toward zero, so -12345 at 0 decimals → -12300.
    """
    if decimal_number_count >= source_decimal_number_count:
        return amount

    factor = 10 ** (source_decimal_number_count - max(decimal_number_count, 0))
    truncated = abs(amount) // factor * factor
    return truncated if amount >= 0 else -truncated


# ─── Exchange Rates ─────────────────────────────────────────────────


def format_exchange_rate_amount(
    exchange_rate_amount: float, options: NumberFormatOptions | None = None
) -> str:
    """Format a rate, cutting long repeating decimals.

    Keeps at least 6 characters, at least 1 digit past the decimal point, and
    the first non-zero digit plus 3 more: 0.000123456 → "0.0001234".
    """
    if options is None:
        options = _DEFAULT_OPTIONS

    numeral_system = options.numeral_system
    rate_str = numeral_system.format_number(exchange_rate_amount)

    if SYSTEM_DECIMAL_SEPARATOR not in rate_str:
        return append_digit_grouping_symbol_and_decimal_separator(rate_str, options)

    first_non_zero_pos = 0

    for i, ch in enumerate(rate_str):
        if ch != SYSTEM_DECIMAL_SEPARATOR and ch != numeral_system.digit_zero:
            first_non_zero_pos = min(i + 4, len(rate_str))
            break

    keep = max(6, first_non_zero_pos, rate_str.index(SYSTEM_DECIMAL_SEPARATOR) + 2)
    return append_digit_grouping_symbol_and_decimal_separator(rate_str[:keep], options)


def get_adaptive_display_amount_rate(
    amount1: float,
    amount2: float,
    options: NumberFormatOptions | None = None,
    from_exchange_rate: str | None = None,
    to_exchange_rate: str | None = None,
) -> str | None:
    """Describe the ratio between two amounts as "X : 1" or "1 : X".

    The larger side is expressed over 1. When the amounts are zero or equal
    (nothing to learn from them), the two exchange-rate strings are compared
    instead; without them there is no ratio to show and None is returned.
    """
    if options is None:
        options = _DEFAULT_OPTIONS

    if not amount1 or not amount2 or amount1 == amount2:
        if not from_exchange_rate or not to_exchange_rate:
            return None

        amount1 = parse_rate(from_exchange_rate)
        amount2 = parse_rate(to_exchange_rate)

        if amount1 is None or amount2 is None:
            return None

    one = options.numeral_system.get_localized_digit(1)

    if amount1 > amount2:
        return f"{format_exchange_rate_amount(amount1 / amount2, options)} : {one}"

    return f"{one} : {format_exchange_rate_amount(amount2 / amount1, options)}"


def get_exchanged_amount_by_rate(amount: float, from_rate: str, to_rate: str) -> float | None:
    """Convert *amount* between two currencies quoted against a common base."""
    from_value = parse_rate(from_rate)
    to_value = parse_rate(to_rate)

    if from_value is None or to_value is None:
        return None

    result = amount * (to_value / from_value)
    return result if math.isfinite(result) else None


def parse_rate(rate: str) -> float | None:
    """Parse a positive, finite rate string; None otherwise."""
    try:
        value = float(Decimal(rate.strip()))
    except (InvalidOperation, AttributeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value
