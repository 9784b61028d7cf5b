import json
import logging
import sys

import click
import httpx

from pricecast.config import Settings
from pricecast.logging_config import setup_logging

logger = logging.getLogger(__name__)

BAR_WIDTH = 40


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """Pricecast - Monte Carlo commodity price forecasts"""
    setup_logging(console_level="DEBUG" if verbose else None)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.option("--commodity", "-c", type=str, default=None,
              help="Commodity symbol to fetch from Alpha Vantage (COPPER, WTI, ALUMINUM)")
@click.option("--csv", "csv_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="CSV file with a price column instead of fetching")
@click.option("--column", type=str, default="close", help="Price column name in --csv")
@click.option("--horizon", type=int, default=None, help="Days to simulate forward")
@click.option("--paths", type=int, default=None, help="Number of simulated paths")
@click.option("--bins", type=int, default=None, help="Histogram bin count")
@click.option("--lower", type=float, default=None, help="Worst-case percentile fraction")
@click.option("--upper", type=float, default=None, help="Best-case percentile fraction")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible runs")
@click.option("--workers", type=int, default=None, help="Processes used for path generation")
@click.option("--floor", "price_floor", type=float, default=None,
              help="Clamp simulated prices at this floor after every step")
@click.option("--json", "as_json", is_flag=True, help="Emit results as JSON")
def simulate(commodity: str | None, csv_path: str | None, column: str,
             horizon: int | None, paths: int | None, bins: int | None,
             lower: float | None, upper: float | None, seed: int | None,
             workers: int | None, price_floor: float | None, as_json: bool):
    """Simulate the price distribution at the end of the horizon."""
    from pricecast.analysis.distribution import histogram, summarize
    from pricecast.analysis.sim_models import SimulationError, SimulationParameters
    from pricecast.analysis.simulation import simulate as run_simulation
    from pricecast.api.alphavantage_client import PriceSourceError

    if (commodity is None) == (csv_path is None):
        raise click.UsageError("Pass exactly one of --commodity or --csv")

    settings = Settings()
    params = SimulationParameters(
        horizon_days=horizon if horizon is not None else settings.simulation_horizon_days,
        path_count=paths if paths is not None else settings.simulation_num_paths,
    )
    lower = lower if lower is not None else settings.summary_lower_pct
    upper = upper if upper is not None else settings.summary_upper_pct
    bin_count = bins if bins is not None else settings.histogram_bins

    try:
        prices = _load_prices(settings, commodity, csv_path, column)
        result = run_simulation(
            prices,
            params,
            seed=seed if seed is not None else settings.simulation_seed,
            price_floor=price_floor if price_floor is not None else settings.simulation_price_floor,
            max_workers=workers if workers is not None else settings.simulation_max_workers,
            chunk_size=settings.simulation_chunk_size,
        )
        summary = summarize(result, lower=lower, upper=upper)
        hist = histogram(result, bin_count=bin_count)
    except (SimulationError, PriceSourceError, httpx.HTTPError) as e:
        logger.error("Simulation failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    model = result.return_model
    if as_json:
        click.echo(json.dumps({
            "start_price": result.start_price,
            "mean_return": model.mean_return,
            "volatility": model.volatility,
            "horizon_days": params.horizon_days,
            "path_count": params.path_count,
            "expected_price": summary.expected_price,
            "lower_bound": summary.lower_bound,
            "upper_bound": summary.upper_bound,
            "lower_pct": summary.lower_pct,
            "upper_pct": summary.upper_pct,
            "histogram": [
                {"lower_bound": b.lower_bound, "upper_bound": b.upper_bound, "count": b.count}
                for b in hist
            ],
        }, indent=2))
        return

    click.echo(f"Current price:   ${result.start_price:.2f}")
    click.echo(f"Expected price:  ${summary.expected_price:.2f}")
    click.echo(f"Best case (p{summary.upper_pct * 100:g}):  ${summary.upper_bound:.2f}")
    click.echo(f"Worst case (p{summary.lower_pct * 100:g}):  ${summary.lower_bound:.2f}")
    click.echo(
        f"\nModel: mean return {model.mean_return:.4%}, volatility {model.volatility:.4%} "
        f"({params.path_count} paths x {params.horizon_days} days)\n"
    )

    max_count = max(b.count for b in hist)
    for b in hist:
        bar = "#" * round(b.count / max_count * BAR_WIDTH) if max_count else ""
        click.echo(
            f"{b.lower_bound:>12.2f} - {b.upper_bound:<12.2f} "
            f"{bar:<{BAR_WIDTH}} {b.count:>7d} ({b.share:.2%})"
        )


@cli.command()
@click.argument("symbol")
@click.option("--refresh", is_flag=True, help="Ignore cached data and refetch")
def fetch(symbol: str, refresh: bool):
    """Fetch (or read cached) price history for a commodity."""
    from pricecast.analysis.sim_models import SimulationError
    from pricecast.api.alphavantage_client import PriceSourceError

    settings = Settings()
    try:
        prices = _load_prices(settings, symbol, None, refresh=refresh)
    except (SimulationError, PriceSourceError, httpx.HTTPError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{symbol.upper()}: {len(prices)} points, latest {prices[-1]:.2f}")


def _load_prices(settings: Settings, commodity: str | None, csv_path: str | None,
                 column: str = "close", refresh: bool = False) -> list[float]:
    from pricecast.api.alphavantage_client import AlphaVantageClient
    from pricecast.collectors.cache import PriceCache
    from pricecast.collectors.prices import fetch_commodity_prices, load_price_csv

    if csv_path is not None:
        return load_price_csv(
            csv_path,
            column=column,
            min_points=settings.history_min_points,
            max_points=settings.history_max_points,
        )

    cache = PriceCache(settings.cache_dir, ttl=settings.cache_ttl)
    with AlphaVantageClient(
        api_key=settings.alphavantage_api_key,
        delay=settings.alphavantage_request_delay,
        max_retries=settings.alphavantage_max_retries,
        backoff=settings.alphavantage_retry_backoff,
        timeout=settings.alphavantage_timeout,
        base_url=settings.alphavantage_base_url,
    ) as client:
        return fetch_commodity_prices(
            commodity,
            client,
            cache=cache,
            min_points=settings.history_min_points,
            max_points=settings.history_max_points,
            refresh=refresh,
        )


if __name__ == "__main__":
    cli()
