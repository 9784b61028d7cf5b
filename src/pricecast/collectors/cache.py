"""On-disk price history cache with a time-to-live."""

import json
import logging
import os
import time
from typing import Callable

logger = logging.getLogger(__name__)


class PriceCache:
    """JSON file per commodity, ``{"timestamp": ..., "prices": [...]}``."""

    def __init__(
        self,
        cache_dir: str,
        ttl: int = 86400,
        clock: Callable[[], float] = time.time,
    ):
        self._dir = cache_dir
        self._ttl = ttl
        self._clock = clock

    def _path(self, symbol: str) -> str:
        return os.path.join(self._dir, f"commodity_{symbol.upper()}.json")

    def get(self, symbol: str) -> list[float] | None:
        """Cached prices for ``symbol``, or None when missing or expired."""
        path = self._path(symbol)
        if not os.path.exists(path):
            return None
        try:
            with open(path, encoding="utf-8") as f:
                entry = json.load(f)
            age = self._clock() - float(entry["timestamp"])
            prices = [float(p) for p in entry["prices"]]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Cache read error for {symbol}: {e}")
            return None

        if age >= self._ttl:
            logger.debug("Cache entry for %s expired (%.0fs old)", symbol, age)
            return None
        logger.info("Using cached data for %s", symbol)
        return prices

    def set(self, symbol: str, prices: list[float]) -> None:
        os.makedirs(self._dir, exist_ok=True)
        entry = {"timestamp": self._clock(), "prices": list(prices)}
        with open(self._path(symbol), "w", encoding="utf-8") as f:
            json.dump(entry, f)

    def delete(self, symbol: str) -> None:
        path = self._path(symbol)
        if os.path.exists(path):
            os.remove(path)
