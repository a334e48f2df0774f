"""
Test suite for numeral systems and the numeral engine.

Formatting and parsing are pure functions of (value, NumberFormatOptions),
so every case below builds its options explicitly.

Run: pytest tests/ -v
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from ledger_amounts.exceptions import InvalidTextualNumberError
from ledger_amounts.models import NumberFormatOptions
from ledger_amounts.numeral import (
    append_digit_grouping_symbol_and_decimal_separator,
    format_amount,
    format_exchange_rate_amount,
    format_hidden_amount,
    format_number,
    format_percent,
    get_adaptive_display_amount_rate,
    get_amount_with_decimal_number_count,
    get_exchanged_amount_by_rate,
    parse_amount,
    parse_rate,
    sum_amounts,
)
from ledger_amounts.numeral_system import DigitGrouping, NumeralSystem

THOUSANDS = NumberFormatOptions(digit_grouping=DigitGrouping.THOUSANDS_SEPARATOR)
INDIAN = NumberFormatOptions(digit_grouping=DigitGrouping.INDIAN_NUMBER_GROUPING)
EUROPEAN = NumberFormatOptions(
    decimal_separator=",",
    digit_grouping_symbol=".",
    digit_grouping=DigitGrouping.THOUSANDS_SEPARATOR,
)
EASTERN_ARABIC = NumberFormatOptions(
    numeral_system=NumeralSystem.EASTERN_ARABIC,
    digit_grouping=DigitGrouping.THOUSANDS_SEPARATOR,
)


# ═══════════════════════════════════════════════════════════════════════
# NUMERAL SYSTEMS
# ═══════════════════════════════════════════════════════════════════════


class TestNumeralSystem:
    def test_every_system_has_ten_distinct_digits(self):
        for system in NumeralSystem:
            assert len(system.digits) == 10
            assert len(set(system.digits)) == 10

    def test_localize_and_back(self):
        system = NumeralSystem.DEVANAGARI
        localized = system.replace_western_arabic_digits_to_localized_digits("-1234.50")
        assert localized == "-१२३४.५०"
        assert system.replace_localized_digits_to_western_arabic_digits(localized) == "-1234.50"

    def test_western_arabic_is_identity(self):
        text = "12.5"
        assert NumeralSystem.WESTERN_ARABIC.replace_western_arabic_digits_to_localized_digits(text) == text

    def test_parse_int_accepts_localized_digits(self):
        assert NumeralSystem.PERSIAN.parse_int("۱۲۳") == 123
        assert NumeralSystem.THAI.parse_int("-๔๒") == -42

    def test_parse_int_rejects_garbage(self):
        with pytest.raises(InvalidTextualNumberError):
            NumeralSystem.WESTERN_ARABIC.parse_int("12a")

    def test_format_number_plain_notation(self):
        assert NumeralSystem.WESTERN_ARABIC.format_number(2.0) == "2"
        assert NumeralSystem.WESTERN_ARABIC.format_number(1e-7) == "0.0000001"
        assert NumeralSystem.WESTERN_ARABIC.format_number(Decimal("1.500")) == "1.5"
        assert NumeralSystem.BENGALI.format_number(10) == "১০"

    def test_format_number_rejects_non_finite(self):
        with pytest.raises(ValueError):
            NumeralSystem.WESTERN_ARABIC.format_number(float("inf"))

    def test_localized_digit(self):
        assert NumeralSystem.BURMESE.get_localized_digit(1) == "၁"
        with pytest.raises(ValueError):
            NumeralSystem.BURMESE.get_localized_digit(10)


class TestDigitGrouping:
    def test_thousands(self):
        assert DigitGrouping.THOUSANDS_SEPARATOR.format(list("1234567"), ",") == "1,234,567"

    def test_indian(self):
        assert DigitGrouping.INDIAN_NUMBER_GROUPING.format(list("1234567"), ",") == "12,34,567"

    def test_short_numbers_untouched(self):
        assert DigitGrouping.THOUSANDS_SEPARATOR.format(list("123"), ",") == "123"
        assert DigitGrouping.INDIAN_NUMBER_GROUPING.format(list("1234"), ",") == "1,234"

    def test_none(self):
        assert DigitGrouping.NONE.format(list("1234567"), ",") == "1234567"


# ═══════════════════════════════════════════════════════════════════════
# AMOUNT FORMATTING
# ═══════════════════════════════════════════════════════════════════════


class TestFormatAmount:
    def test_fixed_two_decimals(self):
        assert format_amount(1234.5, NumberFormatOptions(decimal_number_count=2)) == "1234.50"

    def test_thousands_grouping(self):
        assert format_amount(1234.5, THOUSANDS) == "1,234.50"

    def test_trim_tail_zero_drops_separator(self):
        options = NumberFormatOptions(trim_tail_zero=True)
        assert format_amount(1234.00, options) == "1234"
        assert format_amount(1234.50, options) == "1234.5"

    def test_small_values_padded(self):
        assert format_amount(0.07) == "0.07"
        assert format_amount(-0.07) == "-0.07"
        assert format_amount(0) == "0.00"

    def test_float_noise_never_shows(self):
        assert format_amount(0.1 + 0.2) == "0.30"
        assert format_amount(1.005, NumberFormatOptions(decimal_number_count=2)) == "1.01"

    def test_zero_decimals(self):
        assert format_amount(1234, NumberFormatOptions(decimal_number_count=0)) == "1234"

    def test_eight_decimals(self):
        options = NumberFormatOptions(decimal_number_count=8)
        assert format_amount(0.5, options) == "0.50000000"

    def test_out_of_range_count_falls_back_to_default(self):
        assert format_amount(1.5, NumberFormatOptions(decimal_number_count=18)) == "1.50"

    def test_indian_grouping(self):
        assert format_amount(1234567.89, INDIAN) == "12,34,567.89"

    def test_european_separators(self):
        assert format_amount(-1234567.8, EUROPEAN) == "-1.234.567,80"

    def test_equal_separators_rejected(self):
        with pytest.raises(ValidationError, match="must differ"):
            NumberFormatOptions(decimal_separator=",", digit_grouping=DigitGrouping.THOUSANDS_SEPARATOR)

    def test_localized_digits(self):
        assert format_amount(1234.5, EASTERN_ARABIC) == "١,٢٣٤.٥٠"

    @pytest.mark.parametrize("value", [None, "12", True, float("nan"), float("inf"), Decimal("NaN")])
    def test_invalid_input_is_empty(self, value):
        assert format_amount(value) == ""


class TestHiddenAmount:
    def test_default_shape(self):
        assert format_hidden_amount() == "***.**"

    def test_follows_decimal_count(self):
        assert format_hidden_amount(options=NumberFormatOptions(decimal_number_count=0)) == "***"
        assert format_hidden_amount(options=NumberFormatOptions(decimal_number_count=3)) == "***.***"

    def test_negative_and_localized_separator(self):
        assert format_hidden_amount("-***", EUROPEAN) == "-***,**"


class TestAppendGroupingAndSeparator:
    def test_grouping_and_separator(self):
        assert append_digit_grouping_symbol_and_decimal_separator("-1234567.5", EUROPEAN) == "-1.234.567,5"

    def test_empty_passthrough(self):
        assert append_digit_grouping_symbol_and_decimal_separator("") == ""

    def test_second_separator_rejected(self):
        with pytest.raises(InvalidTextualNumberError):
            append_digit_grouping_symbol_and_decimal_separator("1.2.3")


# ═══════════════════════════════════════════════════════════════════════
# PARSING
# ═══════════════════════════════════════════════════════════════════════


class TestParseAmount:
    def test_grouped_input(self):
        assert parse_amount("1,234.50", THOUSANDS) == 123450

    def test_negative(self):
        assert parse_amount("-0.07") == -7

    def test_short_decimals_padded(self):
        assert parse_amount("12.5") == 1250

    def test_extra_decimals_truncated(self):
        assert parse_amount("1.239") == 123

    def test_leading_separator(self):
        assert parse_amount(".5") == 50

    def test_no_separator(self):
        assert parse_amount("42") == 4200

    def test_european_separators(self):
        assert parse_amount("1.234.567,8", EUROPEAN) == 123456780

    def test_european_round_trip(self):
        text = format_amount(1234.5, EUROPEAN)
        assert text == "1.234,50"
        assert parse_amount(text, EUROPEAN) == 123450

    def test_localized_digits(self):
        assert parse_amount("١,٢٣٤.٥", EASTERN_ARABIC) == 123450

    def test_decimal_count(self):
        assert parse_amount("1.5", NumberFormatOptions(decimal_number_count=0)) == 1
        assert parse_amount("0.00000001", NumberFormatOptions(decimal_number_count=8)) == 1

    @pytest.mark.parametrize("text", ["", "-", None, 12])
    def test_blank_or_non_text_is_zero(self, text):
        assert parse_amount(text) == 0

    @pytest.mark.parametrize("text", ["abc", "1.2a", "--5", "1.-5"])
    def test_garbage_raises(self, text):
        with pytest.raises(InvalidTextualNumberError):
            parse_amount(text)

    @pytest.mark.parametrize("amount", [0, 1, -1, 7, -7, 100, 123450, -987654321, 9007199254740])
    @pytest.mark.parametrize("decimal_count", [0, 2, 4, 8])
    def test_parse_inverts_format(self, amount, decimal_count):
        options = NumberFormatOptions(decimal_number_count=decimal_count)
        text = format_amount(amount / 10**decimal_count, options)
        assert parse_amount(text, options) == amount


# ═══════════════════════════════════════════════════════════════════════
# NUMBERS & PERCENTAGES
# ═══════════════════════════════════════════════════════════════════════


class TestFormatNumber:
    def test_plain(self):
        assert format_number(1234.5678, THOUSANDS) == "1,234.5678"

    def test_precision_truncates(self):
        assert format_number(1234.5678, precision=2) == "1234.56"
        assert format_number(-1.239, precision=2) == "-1.23"

    def test_integral_result_has_no_separator(self):
        assert format_number(5.001, precision=2) == "5"

    def test_non_finite_is_empty(self):
        assert format_number(float("nan")) == ""

    def test_scaled_overflow_is_empty(self):
        assert format_number(1.7e308, precision=2) == ""


class TestFormatPercent:
    def test_truncates_to_precision(self):
        assert format_percent(33.3333, 2, "<0.01") == "33.33%"

    def test_low_precision_fallback(self):
        assert format_percent(0.00005, 2, "<0.01", NumberFormatOptions()) == "<0.01%"

    def test_low_precision_fallback_uses_configured_separator(self):
        assert format_percent(0.00005, 2, "<0.01", EUROPEAN) == "<0,01%"

    def test_low_precision_fallback_localized_digits(self):
        assert format_percent(0.00005, 2, "<0.01", EASTERN_ARABIC) == "<٠.٠١%"

    def test_zero_is_not_low_precision(self):
        assert format_percent(0, 2, "<0.01") == "0%"

    def test_negative_is_not_low_precision(self):
        assert format_percent(-0.00005, 2, "<0.01") == "0%"

    def test_no_fallback_text(self):
        assert format_percent(0.00005, 2, None) == "0%"

    def test_scaled_overflow_is_empty(self):
        assert format_percent(1.7e308, 2, "<0.01") == ""

    @pytest.mark.parametrize("value", [float("inf"), float("nan"), None, "12", True])
    def test_unformattable_value_is_empty(self, value):
        assert format_percent(value, 2, "<0.01") == ""


# ═══════════════════════════════════════════════════════════════════════
# AMOUNT HELPERS
# ═══════════════════════════════════════════════════════════════════════


class TestAmountHelpers:
    def test_sum(self):
        assert sum_amounts([100, -250, 1000]) == 850
        assert sum_amounts([]) == 0

    def test_reduce_decimal_count(self):
        assert get_amount_with_decimal_number_count(12345, 0) == 12300
        assert get_amount_with_decimal_number_count(12345, 1) == 12340

    def test_no_change_when_count_not_smaller(self):
        assert get_amount_with_decimal_number_count(12345, 2) == 12345
        assert get_amount_with_decimal_number_count(12345, 3) == 12345

    def test_truncates_toward_zero(self):
        assert get_amount_with_decimal_number_count(-12345, 0) == -12300

    def test_explicit_source_count(self):
        assert get_amount_with_decimal_number_count(123456789, 2, source_decimal_number_count=8) == 123000000


# ═══════════════════════════════════════════════════════════════════════
# EXCHANGE RATES
# ═══════════════════════════════════════════════════════════════════════


class TestExchangeRateDisplay:
    def test_cuts_long_decimals(self):
        assert format_exchange_rate_amount(1 / 3) == "0.3333"

    def test_keeps_first_significant_digits(self):
        assert format_exchange_rate_amount(0.000123456) == "0.0001234"

    def test_keeps_one_decimal_for_large_rates(self):
        assert format_exchange_rate_amount(12345.678, THOUSANDS) == "12,345.6"

    def test_integral_rate(self):
        assert format_exchange_rate_amount(2.0) == "2"

    def test_adaptive_ratio_larger_side_first(self):
        assert get_adaptive_display_amount_rate(20000, 10000) == "2 : 1"
        assert get_adaptive_display_amount_rate(10000, 10842) == "1 : 1.0842"

    def test_adaptive_ratio_falls_back_to_rates(self):
        assert get_adaptive_display_amount_rate(0, 100, None, "1", "1.0842") == "1 : 1.0842"
        assert get_adaptive_display_amount_rate(100, 100, None, "161.87", "1") == "161.87 : 1"

    def test_adaptive_ratio_without_rates(self):
        assert get_adaptive_display_amount_rate(100, 100) is None
        assert get_adaptive_display_amount_rate(0, 100, None, "1", "zero") is None

    def test_exchanged_amount_by_rate(self):
        assert get_exchanged_amount_by_rate(10000, "1.0842", "161.87") == pytest.approx(10000 * 161.87 / 1.0842)

    @pytest.mark.parametrize("bad_rate", ["0", "-1", "abc", "", "inf", "nan"])
    def test_exchanged_amount_rejects_bad_rates(self, bad_rate):
        assert get_exchanged_amount_by_rate(10000, bad_rate, "1") is None
        assert parse_rate(bad_rate) is None

    def test_parse_rate_strips_whitespace(self):
        assert parse_rate(" 1.5 ") == 1.5
