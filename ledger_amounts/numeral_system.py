"""
Numeral systems, digit-grouping rules and separators.

Every variant here is a closed, process-wide constant. A numeral system maps
the ten Western Arabic digits 0-9 onto localized glyphs:

    NumeralSystem.EASTERN_ARABIC.format_number(1234.5)  → "١٢٣٤.٥"
    NumeralSystem.EASTERN_ARABIC.parse_int("١٢٣٤")       → 1234

The separator is left as "." by the numeral system itself; localizing the
decimal separator and inserting digit grouping is the numeral engine's job.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from decimal import Decimal
from enum import Enum

from .exceptions import InvalidTextualNumberError

_WESTERN_ARABIC_DIGITS = "0123456789"
_WESTERN_INTEGER_PATTERN = re.compile(r"-?[0-9]+")


# ─── Numeral Systems ─────────────────────────────────────────────────


class NumeralSystem(str, Enum):
    """Digit glyph table used when rendering and parsing numbers."""

    WESTERN_ARABIC = "western_arabic"
    EASTERN_ARABIC = "eastern_arabic"
    PERSIAN = "persian"
    DEVANAGARI = "devanagari"
    BENGALI = "bengali"
    BURMESE = "burmese"
    THAI = "thai"

    @property
    def digits(self) -> str:
        """The ten localized digit glyphs, indexed by their value."""
        return _DIGIT_TABLES[self]

    @property
    def digit_zero(self) -> str:
        return self.digits[0]

    def is_digit(self, ch: str) -> bool:
        return len(ch) == 1 and ch in self.digits

    def get_localized_digit(self, digit: int) -> str:
        if not 0 <= digit <= 9:
            raise ValueError(f"Digit must be within 0-9, got {digit}")
        return self.digits[digit]

    def replace_western_arabic_digits_to_localized_digits(self, text: str) -> str:
        if self is NumeralSystem.WESTERN_ARABIC or not text:
            return text
        return text.translate(_TO_LOCALIZED[self])

    def replace_localized_digits_to_western_arabic_digits(self, text: str) -> str:
        if self is NumeralSystem.WESTERN_ARABIC or not text:
            return text
        return text.translate(_TO_WESTERN[self])

    def parse_int(self, text: str) -> int:
        """Parse an optionally signed run of digits in this system (or Western Arabic).

        Raises:
            InvalidTextualNumberError: If the text is not an integer.
        """
        normalized = self.replace_localized_digits_to_western_arabic_digits(text.strip())
        if not _WESTERN_INTEGER_PATTERN.fullmatch(normalized):
            raise InvalidTextualNumberError(
                f"Number {text!r} is not a valid integer",
                details={"text": text, "numeral_system": self.value},
            )
        return int(normalized)

    def format_number(self, value: int | float | Decimal) -> str:
        """Render a number in plain positional notation with localized digits.

        Uses "." as the decimal point and never scientific notation. An
        integral float renders without a fractional part (2.0 → "2").
        """
        return self.replace_western_arabic_digits_to_localized_digits(_plain_number_text(value))


_DIGIT_TABLES: dict[NumeralSystem, str] = {
    NumeralSystem.WESTERN_ARABIC: _WESTERN_ARABIC_DIGITS,
    NumeralSystem.EASTERN_ARABIC: "٠١٢٣٤٥٦٧٨٩",
    NumeralSystem.PERSIAN: "۰۱۲۳۴۵۶۷۸۹",
    NumeralSystem.DEVANAGARI: "०१२३४५६७८९",
    NumeralSystem.BENGALI: "০১২৩৪৫৬৭৮৯",
    NumeralSystem.BURMESE: "၀၁၂၃၄၅၆၇၈၉",
    NumeralSystem.THAI: "๐๑๒๓๔๕๖๗๘๙",
}

_TO_LOCALIZED = {
    system: str.maketrans(_WESTERN_ARABIC_DIGITS, digits)
    for system, digits in _DIGIT_TABLES.items()
}
_TO_WESTERN = {
    system: str.maketrans(digits, _WESTERN_ARABIC_DIGITS)
    for system, digits in _DIGIT_TABLES.items()
}


def _plain_number_text(value: int | float | Decimal) -> str:
    if isinstance(value, bool):
        raise TypeError("Booleans are not numbers")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot format non-finite number {value!r}")
        if value.is_integer():
            return str(int(value))
        # repr() is the shortest text that round-trips the double
        return format(Decimal(repr(value)), "f")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Cannot format non-finite number {value!r}")
        if value == value.to_integral_value():
            return str(int(value))
        return format(value.normalize(), "f")
    raise TypeError(f"Unsupported number type: {type(value).__name__}")


# ─── Digit Grouping ──────────────────────────────────────────────────


class DigitGrouping(str, Enum):
    """How the integer part of a number is split into groups."""

    NONE = "none"
    THOUSANDS_SEPARATOR = "thousands_separator"  # 1,234,567
    INDIAN_NUMBER_GROUPING = "indian_number_grouping"  # 12,34,567

    def format(self, chars: Sequence[str], symbol: str) -> str:
        """Join integer-part characters, inserting *symbol* between groups."""
        if self is DigitGrouping.NONE:
            return "".join(chars)

        remaining = list(chars)
        groups: list[str] = []
        group_size = 3

        while len(remaining) > group_size:
            groups.append("".join(remaining[-group_size:]))
            del remaining[-group_size:]
            if self is DigitGrouping.INDIAN_NUMBER_GROUPING:
                group_size = 2

        if remaining:
            groups.append("".join(remaining))

        return symbol.join(reversed(groups))


# ─── Separators ──────────────────────────────────────────────────────


class DecimalSeparator(str, Enum):
    DOT = "."
    COMMA = ","


class DigitGroupingSymbol(str, Enum):
    DOT = "."
    COMMA = ","
    SPACE = " "
    APOSTROPHE = "'"


DEFAULT_DECIMAL_SEPARATOR = DecimalSeparator.DOT.value
DEFAULT_DIGIT_GROUPING_SYMBOL = DigitGroupingSymbol.COMMA.value

# Separator used by format_number() output and by pre-rendered fallback text
SYSTEM_DECIMAL_SEPARATOR = DecimalSeparator.DOT.value


def check_separators_differ(decimal_separator: str, digit_grouping_symbol: str) -> None:
    """Raise ValueError if the two symbols collide; parsing could not tell them apart."""
    if decimal_separator == digit_grouping_symbol:
        raise ValueError(
            f"decimal_separator and digit_grouping_symbol must differ, both are {decimal_separator!r}"
        )
