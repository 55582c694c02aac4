"""Map raw CoinGecko market records onto AssetSnapshot.

Records are never rejected: a missing field becomes None (or the
documented default) so one malformed coin cannot fail a whole batch.
Values are not range-checked either; whatever the feed sends is kept.
"""

import logging
from typing import Any, Iterable

from crypto_dashboard.models import AssetSnapshot

logger = logging.getLogger(__name__)

# Periods passed through as None when the feed omits them.
# 7d is handled separately because it always gets a numeric fallback.
OPTIONAL_PERIODS = ("1d", "14d", "30d", "90d", "365d")


def _in_currency(raw: dict[str, Any], period: str) -> Any:
    return raw.get(f"price_change_percentage_{period}_in_currency")


def _sparkline(raw: dict[str, Any]) -> tuple[float, ...]:
    sparkline = raw.get("sparkline_in_7d") or {}
    prices = sparkline.get("price") if isinstance(sparkline, dict) else None
    return tuple(prices or ())


def normalize_record(raw: dict[str, Any]) -> AssetSnapshot:
    """Convert one provider record into an AssetSnapshot.

    Args:
        raw: One element of the ``/coins/markets`` response.

    Returns:
        The normalized snapshot. ``symbol`` is upper-cased, the 7d change
        defaults to 0 and the other optional period changes stay None
        when absent.
    """
    change_7d = _in_currency(raw, "7d")
    optional = {
        f"price_change_percentage_{period}": _in_currency(raw, period)
        for period in OPTIONAL_PERIODS
    }

    return AssetSnapshot(
        id=raw.get("id") or "",
        symbol=(raw.get("symbol") or "").upper(),
        name=raw.get("name") or "",
        current_price=raw.get("current_price"),
        market_cap=raw.get("market_cap"),
        total_volume=raw.get("total_volume"),
        price_change_percentage_24h=raw.get("price_change_percentage_24h"),
        price_change_percentage_7d=change_7d if change_7d is not None else 0,
        sparkline=_sparkline(raw),
        image=raw.get("image") or "",
        **optional,
    )


def normalize_batch(records: Iterable[dict[str, Any]]) -> list[AssetSnapshot]:
    """Normalize a fetched batch, preserving provider order.

    Args:
        records: Raw provider records.

    Returns:
        List of snapshots in the same order.
    """
    snapshots = [normalize_record(raw) for raw in records]
    missing_sparkline = sum(1 for s in snapshots if not s.has_sparkline)
    if missing_sparkline:
        logger.debug("%d of %d coins have no sparkline data",
                     missing_sparkline, len(snapshots))
    logger.info("Normalized %d coins", len(snapshots))
    return snapshots
