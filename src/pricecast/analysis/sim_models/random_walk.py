"""Discrete-time multiplicative random walk with simple-return shocks."""

import logging
import math
from concurrent.futures import ProcessPoolExecutor

import numpy as np

from . import (
    InvalidParametersError,
    ReturnModel,
    SimulationParameters,
    SimulationResult,
)
from .normal import BoxMullerNormal

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 5000


def simulate_paths(
    model: ReturnModel,
    start_price: float,
    params: SimulationParameters,
    rng: np.random.Generator | None = None,
    price_floor: float | None = None,
    max_workers: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> SimulationResult:
    """Project ``start_price`` forward and collect one terminal price per path.

    Each step multiplies the price by ``1 + r`` with ``r`` drawn from
    N(mean_return, volatility) via Box-Muller. Returns compound simply, not
    continuously, so a draw below -100% turns a path non-positive. Prices
    are left unclamped unless ``price_floor`` is given.

    Paths are generated in chunks of ``chunk_size``, each with its own seed
    drawn from ``rng``. The multiset of terminal prices therefore depends on
    the seed and chunk size only, not on ``max_workers``.

    Args:
        model: Fitted return model.
        start_price: Price every path starts from.
        params: Horizon and path count.
        rng: Source of chunk seeds (default: fresh unseeded generator).
        price_floor: Optional lower clamp applied after every step.
        max_workers: Processes to spread chunks over (1 = in-process).
        chunk_size: Paths per chunk.

    Returns:
        SimulationResult with terminal prices sorted ascending.

    Raises:
        InvalidParametersError: bad horizon, path count, start price,
            worker count or chunk size.
    """
    params.validate()
    if not (isinstance(start_price, (int, float, np.number)) and math.isfinite(start_price) and start_price > 0):
        raise InvalidParametersError(f"start_price must be positive and finite, got {start_price!r}")
    if max_workers < 1:
        raise InvalidParametersError(f"max_workers must be >= 1, got {max_workers}")
    if chunk_size < 1:
        raise InvalidParametersError(f"chunk_size must be >= 1, got {chunk_size}")

    if rng is None:
        rng = np.random.default_rng()

    sizes = [chunk_size] * (params.path_count // chunk_size)
    if params.path_count % chunk_size:
        sizes.append(params.path_count % chunk_size)
    seeds = rng.integers(2**63, size=len(sizes))

    jobs = [
        (model.mean_return, model.volatility, float(start_price),
         params.horizon_days, n, int(seed), price_floor)
        for n, seed in zip(sizes, seeds)
    ]
    logger.debug(
        "Simulating %d paths x %d days in %d chunks (workers=%d)",
        params.path_count, params.horizon_days, len(jobs), max_workers,
    )

    if max_workers == 1 or len(jobs) == 1:
        parts = [_simulate_chunk(*job) for job in jobs]
    else:
        with ProcessPoolExecutor(max_workers=min(max_workers, len(jobs))) as executor:
            parts = list(executor.map(_simulate_chunk, *zip(*jobs)))

    terminal = np.sort(np.concatenate(parts))
    terminal.setflags(write=False)

    non_positive = int(np.count_nonzero(terminal <= 0))
    if non_positive:
        logger.warning("%d of %d paths ended at a non-positive price", non_positive, len(terminal))

    return SimulationResult(
        start_price=float(start_price),
        terminal_prices=terminal,
        return_model=model,
        params=params,
    )


def _simulate_chunk(
    mean_return: float,
    volatility: float,
    start_price: float,
    horizon_days: int,
    num_paths: int,
    seed: int,
    price_floor: float | None,
) -> np.ndarray:
    """Picklable worker: terminal prices for ``num_paths`` independent paths."""
    normal = BoxMullerNormal(np.random.default_rng(seed))
    prices = np.full(num_paths, start_price, dtype=float)
    for _ in range(horizon_days):
        prices *= 1.0 + normal.samples(mean_return, volatility, num_paths)
        if price_floor is not None:
            np.maximum(prices, price_floor, out=prices)
    return prices
