"""Data models for market snapshots and the comparison table."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TimePeriod(str, Enum):
    """Reporting window for percentage-change figures."""

    ONE_DAY = "1d"
    SEVEN_DAYS = "7d"
    FOURTEEN_DAYS = "14d"
    THIRTY_DAYS = "30d"
    NINETY_DAYS = "90d"
    ONE_YEAR = "365d"

    @property
    def field_name(self) -> str:
        """AssetSnapshot attribute holding this period's change."""
        return f"price_change_percentage_{self.value}"

    @property
    def label(self) -> str:
        """Label used in summary captions, e.g. "7-day"."""
        return _SUMMARY_LABELS[self]

    @property
    def selector_label(self) -> str:
        """Label used on the period selector, e.g. "7 Days"."""
        return _SELECTOR_LABELS[self]


_SUMMARY_LABELS = {
    TimePeriod.ONE_DAY: "24-hour",
    TimePeriod.SEVEN_DAYS: "7-day",
    TimePeriod.FOURTEEN_DAYS: "14-day",
    TimePeriod.THIRTY_DAYS: "30-day",
    TimePeriod.NINETY_DAYS: "90-day",
    TimePeriod.ONE_YEAR: "1-year",
}

_SELECTOR_LABELS = {
    TimePeriod.ONE_DAY: "24 Hours",
    TimePeriod.SEVEN_DAYS: "7 Days",
    TimePeriod.FOURTEEN_DAYS: "14 Days",
    TimePeriod.THIRTY_DAYS: "30 Days",
    TimePeriod.NINETY_DAYS: "90 Days",
    TimePeriod.ONE_YEAR: "1 Year",
}


@dataclass(frozen=True)
class AssetSnapshot:
    """One asset's point-in-time market data plus its trailing price history.

    Attributes:
        id: Provider identifier, unique within a snapshot collection.
        symbol: Upper-cased display ticker. Not unique; never a lookup key.
        name: Display name.
        current_price: Latest price in the quote currency.
        market_cap: Market capitalisation.
        total_volume: 24h traded volume.
        price_change_percentage_24h: Signed 24h change.
        price_change_percentage_7d: Signed 7d change, 0 when the feed omits it.
        price_change_percentage_1d: Signed 1d change, or None.
        price_change_percentage_14d: Signed 14d change, or None.
        price_change_percentage_30d: Signed 30d change, or None.
        price_change_percentage_90d: Signed 90d change, or None.
        price_change_percentage_365d: Signed 365d change, or None.
        sparkline: Prices sampled at a fixed cadence, oldest first.
        image: Logo URL, passed through untouched.
    """

    id: str
    symbol: str
    name: str
    current_price: float | None
    market_cap: float | None
    total_volume: float | None
    price_change_percentage_24h: float | None
    price_change_percentage_7d: float = 0
    price_change_percentage_1d: float | None = None
    price_change_percentage_14d: float | None = None
    price_change_percentage_30d: float | None = None
    price_change_percentage_90d: float | None = None
    price_change_percentage_365d: float | None = None
    sparkline: tuple[float, ...] = ()
    image: str = ""

    @property
    def has_sparkline(self) -> bool:
        return len(self.sparkline) > 0

    def to_dict(self) -> dict[str, Any]:
        """Plain dict form, used for tables and JSON output."""
        return {
            "id": self.id,
            "symbol": self.symbol,
            "name": self.name,
            "current_price": self.current_price,
            "market_cap": self.market_cap,
            "total_volume": self.total_volume,
            "price_change_percentage_24h": self.price_change_percentage_24h,
            "price_change_percentage_1d": self.price_change_percentage_1d,
            "price_change_percentage_7d": self.price_change_percentage_7d,
            "price_change_percentage_14d": self.price_change_percentage_14d,
            "price_change_percentage_30d": self.price_change_percentage_30d,
            "price_change_percentage_90d": self.price_change_percentage_90d,
            "price_change_percentage_365d": self.price_change_percentage_365d,
            "sparkline": list(self.sparkline),
            "image": self.image,
        }


@dataclass(frozen=True)
class AlignedPoint:
    """One row of the comparison table.

    Attributes:
        time: Sample index into the sparklines.
        values: Percentage change from each asset's own first sample, keyed
            by asset id. Assets without a usable sample here are absent.
    """

    time: int
    values: dict[str, float] = field(default_factory=dict)

    def labelled(self, labels: dict[str, str]) -> dict[str, Any]:
        """Presentation row: ``{"time": i, label: value, ...}``."""
        row: dict[str, Any] = {"time": self.time}
        for asset_id, value in self.values.items():
            row[labels.get(asset_id, asset_id)] = value
        return row
