"""Test fixtures for crypto dashboard tests."""

from typing import Any, Callable

import pytest

from crypto_dashboard.models import AssetSnapshot
from crypto_dashboard.normalizer import normalize_batch


@pytest.fixture
def sample_market_response() -> list[dict[str, Any]]:
    """Sample CoinGecko /coins/markets response."""
    return [
        {
            "id": "bitcoin",
            "symbol": "btc",
            "name": "Bitcoin",
            "image": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
            "current_price": 105.0,
            "market_cap": 2_000_000_000_000,
            "market_cap_rank": 1,
            "total_volume": 40_000_000_000,
            "price_change_percentage_24h": 1.25,
            "price_change_percentage_1d_in_currency": 1.3,
            "price_change_percentage_7d_in_currency": 5.0,
            "price_change_percentage_14d_in_currency": -2.0,
            "price_change_percentage_30d_in_currency": 12.5,
            "price_change_percentage_90d_in_currency": 30.0,
            "price_change_percentage_365d_in_currency": 80.0,
            "sparkline_in_7d": {"price": [100.0, 110.0, 90.0, 95.0, 105.0]},
        },
        {
            "id": "ethereum",
            "symbol": "eth",
            "name": "Ethereum",
            "image": "https://assets.coingecko.com/coins/images/279/large/ethereum.png",
            "current_price": 180.0,
            "market_cap": 400_000_000_000,
            "market_cap_rank": 2,
            "total_volume": 20_000_000_000,
            "price_change_percentage_24h": -0.5,
            "price_change_percentage_1d_in_currency": -0.4,
            "price_change_percentage_7d_in_currency": -10.0,
            "price_change_percentage_30d_in_currency": 4.0,
            "sparkline_in_7d": {"price": [200.0, 220.0, 180.0]},
        },
        {
            "id": "tether",
            "symbol": "usdt",
            "name": "Tether",
            "image": "https://assets.coingecko.com/coins/images/325/large/Tether.png",
            "current_price": 1.0,
            "market_cap": 150_000_000_000,
            "market_cap_rank": 3,
            "total_volume": 60_000_000_000,
            "price_change_percentage_24h": 0.01,
            "sparkline_in_7d": {"price": []},
        },
        {
            "id": "zero-start",
            "symbol": "x",
            "name": "Zero Start",
            "image": "",
            "current_price": 60.0,
            "market_cap": 1_000_000,
            "market_cap_rank": 4,
            "total_volume": 10_000,
            "price_change_percentage_24h": 3.0,
            "price_change_percentage_7d_in_currency": 20.0,
            "sparkline_in_7d": {"price": [0, 50.0, 60.0]},
        },
    ]


@pytest.fixture
def sample_snapshots(sample_market_response: list[dict[str, Any]]) -> list[AssetSnapshot]:
    """Normalized snapshots for the sample response."""
    return normalize_batch(sample_market_response)


@pytest.fixture
def make_snapshot() -> Callable[..., AssetSnapshot]:
    """Factory for snapshots with only the fields a test cares about."""

    def _make(asset_id: str, sparkline: list[float] | None = None,
              symbol: str | None = None, **fields: Any) -> AssetSnapshot:
        defaults = {
            "id": asset_id,
            "symbol": symbol if symbol is not None else asset_id.upper(),
            "name": asset_id.title(),
            "current_price": 1.0,
            "market_cap": 1_000_000.0,
            "total_volume": 100_000.0,
            "price_change_percentage_24h": 0.0,
            "sparkline": tuple(sparkline or ()),
        }
        defaults.update(fields)
        return AssetSnapshot(**defaults)

    return _make
