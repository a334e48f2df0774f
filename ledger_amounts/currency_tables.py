"""
Static currency reference data: fiat currencies and cryptocurrencies.

The two tables ship as JSON under `ledger_amounts/data/` and are loaded once
into an immutable CurrencyTables value. Every lookup function takes the
tables explicitly and falls back to the shared default instance.

A code found in neither table is not an error: it is treated as a stock
symbol by the currency module.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from .exceptions import CurrencyTableError
from .models import CurrencyInfo

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"
FIAT_CURRENCIES_FILE = "currencies.json"
CRYPTOCURRENCIES_FILE = "cryptocurrencies.json"


@dataclass(frozen=True)
class CurrencyTables:
    """Read-only fiat and crypto lookup tables, keyed by currency code."""

    fiat: Mapping[str, CurrencyInfo]
    crypto: Mapping[str, CurrencyInfo]

    def get(self, currency_code: str) -> CurrencyInfo | None:
        """Fiat first, then crypto."""
        return self.fiat.get(currency_code) or self.crypto.get(currency_code)

    def is_fiat(self, currency_code: str) -> bool:
        return currency_code in self.fiat

    def is_crypto(self, currency_code: str) -> bool:
        return currency_code in self.crypto


# ─── Loading ─────────────────────────────────────────────────────────


def load_currency_tables(data_dir: str | Path | None = None) -> CurrencyTables:
    """Load both currency tables from JSON files.

    Args:
        data_dir: Directory holding currencies.json and cryptocurrencies.json.
            Defaults to the package data directory.

    Raises:
        CurrencyTableError: If a file is missing or malformed, or a code
            appears in both tables.
    """
    resolved = DEFAULT_DATA_DIR if data_dir is None else Path(data_dir)

    fiat = _load_table(resolved / FIAT_CURRENCIES_FILE)
    crypto = _load_table(resolved / CRYPTOCURRENCIES_FILE)

    overlap = sorted(set(fiat) & set(crypto))
    if overlap:
        raise CurrencyTableError(
            f"Currency codes present in both tables: {', '.join(overlap)}",
            details={"codes": overlap},
        )

    logger.info(
        "Loaded %d fiat currencies and %d cryptocurrencies from %s",
        len(fiat),
        len(crypto),
        resolved,
    )

    return CurrencyTables(fiat=MappingProxyType(fiat), crypto=MappingProxyType(crypto))


def _load_table(path: Path) -> dict[str, CurrencyInfo]:
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CurrencyTableError(
            f"Cannot read currency table {path}: {e}", details={"path": str(path)}
        ) from e

    if not isinstance(raw, dict):
        raise CurrencyTableError(
            f"Currency table {path} must be a JSON object", details={"path": str(path)}
        )

    table: dict[str, CurrencyInfo] = {}

    for code, entry in raw.items():
        try:
            table[code] = CurrencyInfo.model_validate({"code": code, **entry})
        except (ValidationError, TypeError) as e:
            raise CurrencyTableError(
                f"Invalid entry {code!r} in {path}: {e}",
                details={"path": str(path), "code": code},
            ) from e

    return table


@lru_cache(maxsize=1)
def get_default_currency_tables() -> CurrencyTables:
    """The process-wide tables from the package data, loaded on first use."""
    return load_currency_tables()
