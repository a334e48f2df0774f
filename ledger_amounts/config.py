"""
Runtime configuration, read from environment variables.

Entry points load a `.env` file first (python-dotenv), then call
load_settings(). Library functions never read the environment themselves:
they receive NumberFormatOptions built from these settings.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import NumberFormatOptions
from .numeral_system import (
    DEFAULT_DECIMAL_SEPARATOR,
    DEFAULT_DIGIT_GROUPING_SYMBOL,
    DigitGrouping,
    NumeralSystem,
    check_separators_differ,
)

ENV_PREFIX = "LEDGER_AMOUNTS_"


class Settings(BaseModel):
    """Display defaults and data locations for one deployment."""

    model_config = ConfigDict(frozen=True)

    numeral_system: NumeralSystem = NumeralSystem.WESTERN_ARABIC
    decimal_separator: str = Field(default=DEFAULT_DECIMAL_SEPARATOR, min_length=1)
    digit_grouping_symbol: str = Field(default=DEFAULT_DIGIT_GROUPING_SYMBOL, min_length=1)
    digit_grouping: DigitGrouping = DigitGrouping.THOUSANDS_SEPARATOR
    currency_data_dir: Optional[Path] = None  # None → package data
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @model_validator(mode="after")
    def _separators_differ(self) -> Settings:
        check_separators_differ(self.decimal_separator, self.digit_grouping_symbol)
        return self

    def to_format_options(
        self, decimal_number_count: int | None = None, trim_tail_zero: bool = False
    ) -> NumberFormatOptions:
        return NumberFormatOptions(
            numeral_system=self.numeral_system,
            decimal_separator=self.decimal_separator,
            digit_grouping_symbol=self.digit_grouping_symbol,
            digit_grouping=self.digit_grouping,
            decimal_number_count=decimal_number_count,
            trim_tail_zero=trim_tail_zero,
        )


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from ``LEDGER_AMOUNTS_*`` variables.

    Args:
        environ: Defaults to os.environ.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    if environ is None:
        environ = os.environ

    values: dict[str, str] = {}

    for field_name in Settings.model_fields:
        raw = environ.get(ENV_PREFIX + field_name.upper())
        # Separators may legitimately be a single space, so only "" is unset
        if raw is not None and raw != "":
            values[field_name] = raw

    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()

    return Settings.model_validate(values)
