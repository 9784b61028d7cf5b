from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pricecast.analysis.sim_models import SimulationParameters


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PC_",
    )

    # Monte Carlo simulation
    simulation_horizon_days: int = Field(30, gt=0)
    simulation_num_paths: int = Field(15000, gt=0)
    simulation_chunk_size: int = Field(5000, gt=0)
    simulation_seed: int | None = None
    simulation_price_floor: float | None = None  # None = unclamped

    # Parallelization
    simulation_max_workers: int = Field(1, ge=1)

    # Distribution summary
    summary_lower_pct: float = Field(0.05, ge=0.0, lt=1.0)
    summary_upper_pct: float = Field(0.95, ge=0.0, lt=1.0)
    histogram_bins: int = Field(20, gt=0)

    # Price history
    history_min_points: int = Field(30, ge=2)
    history_max_points: int = 100

    # Alpha Vantage API
    alphavantage_api_key: str = ""
    alphavantage_base_url: str = "https://www.alphavantage.co/query"
    alphavantage_request_delay: float = 1.0
    alphavantage_max_retries: int = 3
    alphavantage_retry_backoff: float = 2.0
    alphavantage_timeout: float = 30.0

    # Cache
    cache_dir: str = ".cache/pricecast"
    cache_ttl: int = 86400  # 24h, seconds

    def simulation_params(self) -> SimulationParameters:
        return SimulationParameters(
            horizon_days=self.simulation_horizon_days,
            path_count=self.simulation_num_paths,
        )
