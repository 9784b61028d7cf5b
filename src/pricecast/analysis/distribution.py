"""Distribution statistics over simulated terminal prices.

Pure computation functions: expectation with nearest-rank percentile bands,
and equal-width histogram binning. Both operate on a SimulationResult and
never mutate it.
"""

import logging
import math

import numpy as np

from pricecast.analysis.sim_models import (
    DistributionSummary,
    HistogramBin,
    InsufficientDataError,
    InvalidParametersError,
    SimulationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_LOWER_PCT = 0.05
DEFAULT_UPPER_PCT = 0.95
DEFAULT_BIN_COUNT = 20


def summarize(
    result: SimulationResult,
    lower: float = DEFAULT_LOWER_PCT,
    upper: float = DEFAULT_UPPER_PCT,
) -> DistributionSummary:
    """Expected price plus pessimistic / optimistic percentile bounds.

    Bounds use nearest-rank indexing without interpolation:
    ``terminal[floor(fraction * P)]``.

    Args:
        result: Simulation output (terminal prices sorted ascending).
        lower: Lower percentile fraction in [0, 1).
        upper: Upper percentile fraction in [0, 1), ``>= lower``.

    Returns:
        DistributionSummary
    """
    for name, value in (("lower", lower), ("upper", upper)):
        if not (isinstance(value, (int, float)) and 0.0 <= value < 1.0):
            raise InvalidParametersError(f"{name} percentile must be in [0, 1), got {value!r}")
    if lower > upper:
        raise InvalidParametersError(f"lower percentile {lower} exceeds upper {upper}")

    terminal = _sorted_terminal(result)
    n = len(terminal)

    return DistributionSummary(
        expected_price=float(np.mean(terminal)),
        lower_bound=float(terminal[math.floor(lower * n)]),
        upper_bound=float(terminal[math.floor(upper * n)]),
        lower_pct=float(lower),
        upper_pct=float(upper),
    )


def histogram(
    result: SimulationResult,
    bin_count: int = DEFAULT_BIN_COUNT,
) -> list[HistogramBin]:
    """Partition terminal prices into ``bin_count`` equal-width buckets.

    Bins span exactly ``[min, max]``; the maximum price lands in the last
    bin. When every price is identical the width is zero and all prices
    are assigned to bin 0.
    """
    if isinstance(bin_count, bool) or not isinstance(bin_count, (int, np.integer)) or bin_count <= 0:
        raise InvalidParametersError(f"bin_count must be a positive integer, got {bin_count!r}")

    terminal = _sorted_terminal(result)
    n = len(terminal)
    min_price = float(terminal[0])
    max_price = float(terminal[-1])
    bin_width = (max_price - min_price) / bin_count

    if bin_width == 0.0:
        counts = np.zeros(bin_count, dtype=np.int64)
        counts[0] = n
    else:
        idx = np.floor((terminal - min_price) / bin_width).astype(np.int64)
        idx = np.clip(idx, 0, bin_count - 1)
        counts = np.bincount(idx, minlength=bin_count)

    bins: list[HistogramBin] = []
    for i, count in enumerate(counts):
        lo = min_price + i * bin_width
        hi = max_price if i == bin_count - 1 else min_price + (i + 1) * bin_width
        bins.append(HistogramBin(lower_bound=lo, upper_bound=hi, count=int(count), total=n))
    return bins


def _sorted_terminal(result: SimulationResult) -> np.ndarray:
    terminal = np.asarray(result.terminal_prices, dtype=float)
    if terminal.ndim != 1 or len(terminal) == 0:
        raise InsufficientDataError("Simulation result has no terminal prices")
    if np.any(terminal[1:] < terminal[:-1]):
        logger.warning("Terminal prices not sorted ascending, re-sorting a copy")
        terminal = np.sort(terminal)
    return terminal
