"""Simple-return model fitted from a price history."""

import logging

import numpy as np

from . import InsufficientDataError, ReturnModel

logger = logging.getLogger(__name__)


def compute_daily_returns(prices) -> np.ndarray:
    """Relative day-over-day changes ``(p[i] - p[i-1]) / p[i-1]``.

    Raises:
        InsufficientDataError: fewer than 2 points, or a non-finite /
            non-positive price that makes a return undefined.
    """
    arr = np.asarray(prices if prices is not None else [], dtype=float)
    if arr.ndim != 1 or len(arr) < 2:
        raise InsufficientDataError(
            f"Need at least 2 prices to derive returns, got {arr.size}"
        )
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0):
        raise InsufficientDataError("Price history must contain only positive finite values")

    return np.diff(arr) / arr[:-1]


def compute_return_model(prices) -> ReturnModel:
    """Fit mean and population volatility of simple daily returns.

    Args:
        prices: Prices in chronological order (oldest first).

    Returns:
        ReturnModel over the ``len(prices) - 1`` returns. Volatility uses
        the population estimator (``ddof=0``), not the sample-corrected one.
    """
    returns = compute_daily_returns(prices)
    mean_return = float(np.mean(returns))

    # Identical returns must give exactly zero spread, not rounding noise
    if np.all(returns == returns[0]):
        volatility = 0.0
    else:
        volatility = float(np.std(returns, ddof=0))

    logger.debug(
        "Return model: %d returns, mean=%.6f, vol=%.6f",
        len(returns), mean_return, volatility,
    )
    return ReturnModel(
        mean_return=mean_return,
        volatility=volatility,
        num_returns=len(returns),
    )
