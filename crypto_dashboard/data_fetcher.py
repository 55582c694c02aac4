"""Fetch market data from CoinGecko and cache it between polls.

This module handles everything between the dashboard and the network:
- Requesting the top coins by market cap with sparklines and every
  period change in one call
- Normalizing the response into AssetSnapshot records
- Caching results per key with a freshness window, coalescing concurrent
  fetches, and keeping the last good data when a refresh fails
"""

import argparse
import json
import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Any, Callable

import requests

from crypto_dashboard.config import (
    COINGECKO_API,
    LOG_DIR,
    MARKET_ORDER,
    MARKETS_QUERY_KEY,
    PER_PAGE,
    PRICE_CHANGE_PERIODS,
    REQUEST_TIMEOUT,
    STALE_TIME,
    VS_CURRENCY,
)
from crypto_dashboard.errors import FetchFailure
from crypto_dashboard.formatting import format_percentage, format_price
from crypto_dashboard.models import AssetSnapshot, TimePeriod
from crypto_dashboard.normalizer import normalize_batch
from crypto_dashboard.summary import percentage_change_for_period, period_label

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure logging to both console and file."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / "dashboard.log"

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Streamlit reruns the script; only install handlers once
    if not any(isinstance(h, logging.FileHandler) for h in root_logger.handlers):
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)


def market_params(per_page: int = PER_PAGE) -> dict[str, Any]:
    """Query parameters for the ``/coins/markets`` request."""
    return {
        "vs_currency": VS_CURRENCY,
        "order": MARKET_ORDER,
        "per_page": per_page,
        "page": 1,
        "sparkline": "true",
        "price_change_percentage": ",".join(PRICE_CHANGE_PERIODS),
    }


class MarketDataClient:
    """Thin client for the CoinGecko markets endpoint."""

    def __init__(
        self,
        base_url: str = COINGECKO_API,
        per_page: int = PER_PAGE,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_markets(self) -> list[dict[str, Any]]:
        """Fetch the current markets page.

        Returns:
            Raw market records, ordered by market cap descending.

        Raises:
            FetchFailure: On a network error, a non-success status or a
                body that is not a JSON array.
        """
        url = f"{self.base_url}/coins/markets"
        logger.info("Fetching top %d coins from CoinGecko...", self.per_page)

        try:
            response = self.session.get(
                url, params=market_params(self.per_page), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("Failed to fetch crypto data: %s", e)
            raise FetchFailure(f"Failed to fetch crypto data: {e}") from e

        if not response.ok:
            logger.error("Failed to fetch crypto data: %s %s",
                         response.status_code, response.reason)
            raise FetchFailure(
                "Failed to fetch crypto data", status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchFailure("Failed to fetch crypto data: invalid JSON") from e

        if not isinstance(data, list):
            raise FetchFailure("Failed to fetch crypto data: unexpected payload")

        logger.info("Crypto data fetched successfully: %d coins", len(data))
        return data


def fetch_snapshots(client: MarketDataClient | None = None) -> list[AssetSnapshot]:
    """Fetch and normalize one batch of market data.

    Args:
        client: Client to use (a default one is created if None).

    Returns:
        Normalized snapshots in market-cap order.
    """
    client = client or MarketDataClient()
    return normalize_batch(client.fetch_markets())


@dataclass(frozen=True)
class QueryState:
    """Latest known result for one cache key.

    Attributes:
        data: Last successfully fetched snapshots, kept across failures.
        error: Error from the most recent fetch, cleared on success.
        updated_at: Clock time of the last successful fetch.
        fetch_count: Number of completed fetches for this key.
        invalidated: Set by invalidate(); forces the next fetch.
    """

    data: list[AssetSnapshot] | None = None
    error: FetchFailure | None = None
    updated_at: float | None = None
    fetch_count: int = 0
    invalidated: bool = False

    @property
    def status(self) -> str:
        """``"error"``, ``"success"`` or ``"pending"``."""
        if self.error is not None:
            return "error"
        if self.data is not None:
            return "success"
        return "pending"

    def is_fresh(self, now: float, stale_time: float) -> bool:
        if self.invalidated or self.error is not None or self.updated_at is None:
            return False
        return now - self.updated_at < stale_time


class QueryCache:
    """In-memory query cache with request coalescing.

    At most one fetch per key is in flight. A caller arriving while a
    fetch is running waits for it and receives its result instead of
    issuing another request. Failed fetches keep the previous data and
    record the error (stale-while-revalidate).
    """

    def __init__(
        self,
        query_fn: Callable[[str], list[AssetSnapshot]],
        stale_time: float = STALE_TIME,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.query_fn = query_fn
        self.stale_time = stale_time
        self.clock = clock
        self._states: dict[str, QueryState] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._in_flight: set[str] = set()
        self._guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    def get_latest(self, key: str) -> QueryState:
        """Current state for ``key`` without fetching."""
        with self._guard:
            return self._states.get(key, QueryState())

    def is_fetching(self, key: str) -> bool:
        with self._guard:
            return key in self._in_flight

    def invalidate(self, key: str) -> None:
        """Mark ``key`` stale so the next fetch() goes to the network."""
        with self._guard:
            state = self._states.get(key, QueryState())
            self._states[key] = replace(state, invalidated=True)
        logger.debug("Invalidated query %s", key)

    def fetch(self, key: str, force: bool = False) -> QueryState:
        """Return fresh data for ``key``, fetching if needed.

        Args:
            key: Cache key passed through to the query function.
            force: Fetch even if the cached data is still fresh.

        Returns:
            The resulting state. Fetch failures are recorded on the state,
            not raised.
        """
        state = self.get_latest(key)
        if not force and state.is_fresh(self.clock(), self.stale_time):
            return state
        seen = state.fetch_count

        with self._lock_for(key):
            current = self.get_latest(key)
            if current.fetch_count > seen:
                # Another caller fetched while we waited for the lock
                return current

            with self._guard:
                self._in_flight.add(key)
            try:
                data = self.query_fn(key)
            except FetchFailure as e:
                logger.warning("Fetch for %s failed, keeping previous data: %s",
                               key, e)
                new_state = replace(
                    current, error=e, fetch_count=current.fetch_count + 1,
                    invalidated=False,
                )
            else:
                new_state = QueryState(
                    data=data, updated_at=self.clock(),
                    fetch_count=current.fetch_count + 1,
                )
            finally:
                with self._guard:
                    self._in_flight.discard(key)

            with self._guard:
                self._states[key] = new_state
            return new_state


def main(period: str = "7d", as_json: bool = False) -> None:
    """Fetch once and print the coins with their change over ``period``.

    Args:
        period: Reporting period to show (1d, 7d, 14d, 30d, 90d, 365d).
        as_json: Print normalized records as JSON instead of a table.
    """
    setup_logging()

    cache = QueryCache(lambda _key: fetch_snapshots())
    state = cache.fetch(MARKETS_QUERY_KEY)
    if state.status == "error":
        logger.error("Giving up: %s", state.error)
        raise SystemExit(1)

    snapshots = state.data or []
    if as_json:
        print(json.dumps([s.to_dict() for s in snapshots], indent=2))
        return

    print(f"\nTop {len(snapshots)} coins by market cap "
          f"({period_label(period)} change):")
    for rank, snapshot in enumerate(snapshots, start=1):
        change = percentage_change_for_period(snapshot, period)
        print(f"  {rank:>3d}. {snapshot.symbol:>8s}  "
              f"{format_percentage(change):>9s}  {format_price(snapshot.current_price)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch current crypto market data")
    parser.add_argument("--period", choices=[p.value for p in TimePeriod],
                        default="7d", help="Period for the change column")
    parser.add_argument("--json", action="store_true",
                        help="Print normalized records as JSON")
    args = parser.parse_args()
    main(period=args.period, as_json=args.json)
