import logging
import time

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://www.alphavantage.co/query"

# Commodity endpoint parameters per supported symbol
COMMODITY_MAPPING: dict[str, dict[str, str]] = {
    "COPPER": {"function": "COPPER", "interval": "monthly"},
    "WTI": {"function": "WTI", "interval": "monthly"},
    "ALUMINUM": {"function": "ALUMINUM", "interval": "monthly"},
}


class PriceSourceError(RuntimeError):
    """Price history could not be obtained from a source."""


class RateLimitError(PriceSourceError):
    """Alpha Vantage answered with its rate-limit note."""


class AlphaVantageClient:
    """Rate-limited, retry-enabled wrapper around the Alpha Vantage commodity API."""

    def __init__(
        self,
        api_key: str,
        delay: float = 1.0,
        max_retries: int = 3,
        backoff: float = 2.0,
        timeout: float = 30.0,
        base_url: str = BASE_URL,
        http_client: httpx.Client | None = None,
    ):
        self._api_key = api_key
        self._delay = delay
        self._max_retries = max_retries
        self._backoff = backoff
        self._base_url = base_url
        self._http = http_client or httpx.Client(timeout=timeout)
        self._last_request_time: float = 0.0

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "AlphaVantageClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _rate_limit(self):
        elapsed = time.monotonic() - self._last_request_time
        if elapsed < self._delay:
            time.sleep(self._delay - elapsed)
        self._last_request_time = time.monotonic()

    def _call(self, params: dict[str, str]) -> dict:
        @retry(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=self._backoff, min=self._backoff, max=60),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        def _inner():
            self._rate_limit()
            response = self._http.get(self._base_url, params=params)
            response.raise_for_status()
            return response.json()

        return _inner()

    def get_commodity_prices(self, symbol: str) -> list[float]:
        """Get the full commodity price series, oldest first."""
        mapping = COMMODITY_MAPPING.get(symbol.upper())
        if mapping is None:
            raise PriceSourceError(f"Unknown commodity: {symbol}")

        logger.info("Fetching new data for %s", symbol)
        data = self._call({**mapping, "apikey": self._api_key})

        if "Error Message" in data:
            raise PriceSourceError("Invalid symbol")
        if "Note" in data:
            raise RateLimitError("API rate limit reached. Please wait a minute.")
        if not data.get("data"):
            raise PriceSourceError("No data returned")

        return parse_price_rows(data["data"])


def parse_price_rows(rows: list[dict]) -> list[float]:
    """Sort ``{date, value}`` rows chronologically and parse the values.

    Alpha Vantage reports missing observations as ``"."``; those rows are
    dropped.
    """
    prices: list[float] = []
    for row in sorted(rows, key=lambda r: r.get("date", "")):
        try:
            prices.append(float(row["value"]))
        except (KeyError, TypeError, ValueError):
            logger.debug("Skipping unparseable row: %s", row)
    return prices
