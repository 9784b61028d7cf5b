"""Monte Carlo simulation models package.

Shared value types and error taxonomy for the price simulation engine:
- ReturnModel: mean / population volatility of simple daily returns
- SimulationParameters: horizon and path count for one run
- SimulationResult: sorted terminal prices of one run
- DistributionSummary / HistogramBin: derived views of a result
"""

from dataclasses import dataclass

import numpy as np


class SimulationError(ValueError):
    """Base class for validation failures raised by the simulation core."""


class InsufficientDataError(SimulationError):
    """Price history too short (or unusable) to derive a return model."""


class InvalidParametersError(SimulationError):
    """Non-positive horizon / path count or out-of-range configuration."""


class DegenerateDistributionError(SimulationError):
    """Fitted volatility is zero, so every simulated path is identical."""


@dataclass(frozen=True)
class ReturnModel:
    mean_return: float
    volatility: float
    num_returns: int


@dataclass(frozen=True)
class SimulationParameters:
    horizon_days: int
    path_count: int

    def validate(self) -> None:
        for name in ("horizon_days", "path_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise InvalidParametersError(
                    f"{name} must be a positive integer, got {value!r}"
                )


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Terminal prices of one simulation run, sorted ascending and read-only."""

    start_price: float
    terminal_prices: np.ndarray
    return_model: ReturnModel | None = None
    params: SimulationParameters | None = None

    @property
    def path_count(self) -> int:
        return int(len(self.terminal_prices))


@dataclass(frozen=True)
class DistributionSummary:
    expected_price: float
    lower_bound: float
    upper_bound: float
    lower_pct: float
    upper_pct: float


@dataclass(frozen=True)
class HistogramBin:
    lower_bound: float
    upper_bound: float
    count: int
    total: int

    @property
    def share(self) -> float:
        """Fraction of all simulated paths that landed in this bin."""
        return self.count / self.total if self.total else 0.0


__all__ = [
    "SimulationError",
    "InsufficientDataError",
    "InvalidParametersError",
    "DegenerateDistributionError",
    "ReturnModel",
    "SimulationParameters",
    "SimulationResult",
    "DistributionSummary",
    "HistogramBin",
]
