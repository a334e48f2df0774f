"""
Ledger Amounts — FastAPI Server
================================

RESTful facade over the amount handling core. Every endpoint is a thin
wrapper around a pure function in `ledger_amounts`.

Endpoints:
    POST /evaluate              Evaluate a quick-entry amount expression
    POST /format                Format an amount for display
    POST /parse                 Parse user-entered amount text
    POST /exchange              Convert an amount between currencies
    GET  /currencies/{code}     Currency fraction, asset type and symbol
    GET  /health                Health check / readiness

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ledger_amounts import __version__
from ledger_amounts.config import Settings, load_settings
from ledger_amounts.constants import MAX_SUPPORTED_DECIMAL_NUMBER_COUNT
from ledger_amounts.currency import (
    append_currency_symbol,
    get_currency_fraction,
    get_exchanged_amount,
    infer_asset_type_from_currency_code,
)
from ledger_amounts.currency_tables import CurrencyTables, load_currency_tables
from ledger_amounts.evaluator import evaluate_expression
from ledger_amounts.exceptions import (
    AmountError,
    InvalidTextualNumberError,
    NumericOverflowError,
)
from ledger_amounts.models import (
    AssetType,
    CurrencyDisplayType,
    CurrencySymbol,
    LatestCryptocurrencyPriceResponse,
    LatestExchangeRateResponse,
    LatestStockPriceResponse,
)
from ledger_amounts.numeral import format_amount, parse_amount
from ledger_amounts.price_sources import (
    CryptocurrencyPriceTable,
    ExchangeRateTable,
    StockPriceTable,
)

load_dotenv()

logger = logging.getLogger(__name__)


# ─── Application Lifespan (load settings & currency tables) ─────────

_settings: Settings | None = None
_tables: CurrencyTables | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load configuration and the static currency tables once on startup."""
    global _settings, _tables  # noqa: PLW0603
    _settings = load_settings()
    logging.basicConfig(level=_settings.log_level)
    _tables = load_currency_tables(_settings.currency_data_dir)
    yield
    _settings = None
    _tables = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Ledger Amounts API",
    description=(
        "Amount handling for a personal-finance client: quick-entry expression "
        "evaluation, localized numeral formatting and parsing, and cross-asset "
        "currency conversion."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class EvaluateRequest(BaseModel):
    """Request body for the /evaluate endpoint."""

    expression: str = Field(
        ...,
        max_length=1000,
        description="Arithmetic expression typed into an amount field.",
        json_schema_extra={"example": "12.5*3 + (4-1)/2"},
    )
    decimal_count: Optional[int] = Field(default=None, ge=0, le=MAX_SUPPORTED_DECIMAL_NUMBER_COUNT)


class EvaluateResponse(BaseModel):
    amount: Optional[int] = Field(description="Minor units; null if the expression is malformed")
    error_code: Optional[str] = None


class FormatRequest(BaseModel):
    value: float = Field(description="Display value, e.g. 1234.5")
    currency_code: Optional[str] = None
    decimal_number_count: Optional[int] = Field(default=None, ge=0)
    trim_tail_zero: bool = False
    display_type: Optional[CurrencyDisplayType] = None
    is_plural: bool = False


class FormatResponse(BaseModel):
    text: str


class ParseRequest(BaseModel):
    text: str
    currency_code: Optional[str] = None
    decimal_number_count: Optional[int] = Field(default=None, ge=0)


class ParseResponse(BaseModel):
    amount: int


class ExchangeRequest(BaseModel):
    amount: float = Field(description="Minor units of from_currency")
    from_currency: str
    to_currency: str
    exchange_rates: LatestExchangeRateResponse
    cryptocurrency_prices: LatestCryptocurrencyPriceResponse = Field(
        default_factory=LatestCryptocurrencyPriceResponse
    )
    stock_prices: LatestStockPriceResponse = Field(default_factory=LatestStockPriceResponse)


class ExchangeResponse(BaseModel):
    amount: Optional[float] = Field(description="Minor units of to_currency; null if unavailable")


class CurrencyResponse(BaseModel):
    code: str
    asset_type: AssetType
    fraction: Optional[int]
    symbol: Optional[CurrencySymbol] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    fiat_currencies_loaded: int
    cryptocurrencies_loaded: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_settings() -> Settings:
    if _settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialised")
    return _settings


def _get_tables() -> CurrencyTables:
    if _tables is None:
        raise HTTPException(status_code=503, detail="Currency tables not initialised")
    return _tables


def _resolve_decimal_count(currency_code: str | None, decimal_number_count: int | None) -> int | None:
    """An explicit count wins; otherwise the currency's own fraction."""
    if decimal_number_count is not None or not currency_code:
        return decimal_number_count
    return get_currency_fraction(currency_code, _get_tables())


def _error_detail(error: AmountError) -> dict:
    return {"code": error.code, "message": str(error), "details": error.details}


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/evaluate",
    summary="Evaluate a quick-entry amount expression",
    tags=["Amounts"],
    responses={422: {"description": "Result outside the representable amount range"}},
)
def evaluate(request: EvaluateRequest) -> EvaluateResponse:
    """Evaluate an arithmetic expression to an amount in minor units.

    A malformed expression is not an error: the response carries
    `amount: null` and the failure code, and the client keeps the input.
    """
    if not request.expression:
        return EvaluateResponse(amount=None)

    try:
        amount = evaluate_expression(request.expression, request.decimal_count)
    except NumericOverflowError as e:
        raise HTTPException(status_code=422, detail=_error_detail(e))
    except AmountError as e:
        logger.warning("[%s] %s", e.code, e)
        return EvaluateResponse(amount=None, error_code=e.code)

    return EvaluateResponse(amount=amount)


@app.post("/format", summary="Format an amount for display", tags=["Amounts"])
def format_endpoint(request: FormatRequest) -> FormatResponse:
    """Format a display value using the deployment's numeral settings."""
    settings = _get_settings()
    options = settings.to_format_options(
        decimal_number_count=_resolve_decimal_count(request.currency_code, request.decimal_number_count),
        trim_tail_zero=request.trim_tail_zero,
    )
    text = format_amount(request.value, options)

    if request.currency_code and request.display_type is not None:
        text = append_currency_symbol(
            text,
            request.display_type,
            request.currency_code,
            is_plural=request.is_plural,
            tables=_get_tables(),
        )

    return FormatResponse(text=text)


@app.post(
    "/parse",
    summary="Parse user-entered amount text",
    tags=["Amounts"],
    responses={422: {"description": "Text is not a number"}},
)
def parse_endpoint(request: ParseRequest) -> ParseResponse:
    settings = _get_settings()
    options = settings.to_format_options(
        decimal_number_count=_resolve_decimal_count(request.currency_code, request.decimal_number_count),
    )

    try:
        amount = parse_amount(request.text, options)
    except InvalidTextualNumberError as e:
        raise HTTPException(status_code=422, detail=_error_detail(e))

    return ParseResponse(amount=amount)


@app.post("/exchange", summary="Convert an amount between currencies", tags=["Currencies"])
def exchange(request: ExchangeRequest) -> ExchangeResponse:
    """Convert using the latest rate and price payloads sent by the client."""
    rate_source = ExchangeRateTable(request.exchange_rates)
    amount = get_exchanged_amount(
        request.amount,
        request.from_currency,
        request.to_currency,
        rate_source,
        CryptocurrencyPriceTable(request.cryptocurrency_prices, rate_source),
        StockPriceTable(request.stock_prices),
        _get_tables(),
    )
    return ExchangeResponse(amount=amount)


@app.get("/currencies/{code}", summary="Look up a currency", tags=["Currencies"])
def currency_info(code: str) -> CurrencyResponse:
    """Unknown codes are reported as stocks, with no fraction or symbol."""
    tables = _get_tables()
    info = tables.get(code)
    asset_type = infer_asset_type_from_currency_code(code, tables)
    assert asset_type is not None  # path parameters are never empty

    return CurrencyResponse(
        code=code,
        asset_type=asset_type,
        fraction=get_currency_fraction(code, tables),
        symbol=info.symbol if info is not None else None,
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Service not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    tables = _get_tables()
    return HealthResponse(
        status="healthy",
        version=__version__,
        fiat_currencies_loaded=len(tables.fiat),
        cryptocurrencies_loaded=len(tables.crypto),
    )
