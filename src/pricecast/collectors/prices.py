"""Price history collectors: Alpha Vantage (cached) and local CSV files.

Both sources return a chronological list of positive prices, trimmed to the
most recent ``max_points`` and rejected when shorter than ``min_points``.
"""

import logging

import numpy as np
import pandas as pd

from pricecast.analysis.sim_models import InsufficientDataError
from pricecast.api.alphavantage_client import (
    COMMODITY_MAPPING,
    AlphaVantageClient,
    PriceSourceError,
)
from pricecast.collectors.cache import PriceCache

logger = logging.getLogger(__name__)

MIN_HISTORY_POINTS = 30
MAX_HISTORY_POINTS = 100


def fetch_commodity_prices(
    symbol: str,
    client: AlphaVantageClient,
    cache: PriceCache | None = None,
    min_points: int = MIN_HISTORY_POINTS,
    max_points: int = MAX_HISTORY_POINTS,
    refresh: bool = False,
) -> list[float]:
    """Commodity price history, served from ``cache`` when fresh."""
    symbol = symbol.upper()
    if symbol not in COMMODITY_MAPPING:
        raise PriceSourceError(f"Unknown commodity: {symbol}")

    if cache is not None and not refresh:
        cached = cache.get(symbol)
        if cached is not None:
            return cached

    prices = _trim_history(client.get_commodity_prices(symbol), min_points, max_points)

    if cache is not None:
        cache.set(symbol, prices)
    return prices


def load_price_csv(
    path: str,
    column: str = "close",
    date_column: str = "date",
    min_points: int = MIN_HISTORY_POINTS,
    max_points: int = MAX_HISTORY_POINTS,
) -> list[float]:
    """Read a price column from a CSV file.

    Column names match case-insensitively. When ``date_column`` is present
    rows are sorted by it; otherwise file order is taken as chronological.
    Non-numeric and non-positive values are dropped.
    """
    df = pd.read_csv(path)
    columns = {c.strip().lower(): c for c in df.columns}

    price_col = columns.get(column.lower())
    if price_col is None:
        raise PriceSourceError(f"Column '{column}' not found in {path}")

    date_col = columns.get(date_column.lower())
    if date_col is not None:
        df = df.assign(_date=pd.to_datetime(df[date_col], errors="coerce"))
        df = df.dropna(subset=["_date"]).sort_values("_date", kind="stable")

    values = pd.to_numeric(df[price_col], errors="coerce")
    values = values[np.isfinite(values) & (values > 0)]
    logger.info("Loaded %d prices from %s", len(values), path)

    return _trim_history(values.astype(float).tolist(), min_points, max_points)


def _trim_history(prices: list[float], min_points: int, max_points: int) -> list[float]:
    if len(prices) < min_points:
        raise InsufficientDataError(
            f"Not enough historical data: {len(prices)} points (need {min_points})"
        )
    return prices[-max_points:]
