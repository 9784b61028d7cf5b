"""Monte Carlo simulation orchestrator.

Fits the return model on a price history and hands it to the random-walk
path simulator. Summaries and histograms are computed separately by
``pricecast.analysis.distribution``.
"""

import logging

import numpy as np

from pricecast.analysis.sim_models import (
    DegenerateDistributionError,
    SimulationParameters,
    SimulationResult,
)
from pricecast.analysis.sim_models.random_walk import DEFAULT_CHUNK_SIZE, simulate_paths
from pricecast.analysis.sim_models.returns import compute_return_model

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_HORIZON_DAYS = 30
DEFAULT_NUM_PATHS = 15000


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def simulate(
    prices,
    params: SimulationParameters | None = None,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    *,
    price_floor: float | None = None,
    max_workers: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    strict: bool = False,
) -> SimulationResult:
    """Run a Monte Carlo projection of a price history.

    The last history point is the start price of every path.

    Args:
        prices: Prices in chronological order (oldest first), at least 2.
        params: Horizon / path count (default: 30 days, 15000 paths).
        rng: Explicit generator; takes precedence over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is not given.
        price_floor: Optional per-step lower clamp on simulated prices.
        max_workers: Processes used for path generation.
        chunk_size: Paths per independently seeded chunk.
        strict: Raise DegenerateDistributionError on zero volatility
            instead of simulating identical paths.

    Returns:
        SimulationResult with ascending terminal prices.

    Raises:
        InsufficientDataError: history too short or unusable.
        InvalidParametersError: non-positive horizon or path count.
        DegenerateDistributionError: zero volatility with ``strict=True``.
    """
    if params is None:
        params = SimulationParameters(
            horizon_days=DEFAULT_HORIZON_DAYS,
            path_count=DEFAULT_NUM_PATHS,
        )
    params.validate()

    model = compute_return_model(prices)
    if model.volatility == 0.0:
        if strict:
            raise DegenerateDistributionError(
                "Zero volatility: all simulated paths would be identical"
            )
        logger.debug("Zero volatility, every path follows the mean return")

    if rng is None:
        rng = np.random.default_rng(seed)

    start_price = float(np.asarray(prices, dtype=float)[-1])
    return simulate_paths(
        model,
        start_price,
        params,
        rng=rng,
        price_floor=price_floor,
        max_workers=max_workers,
        chunk_size=chunk_size,
    )
