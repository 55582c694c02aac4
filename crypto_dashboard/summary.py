"""Period-scoped performance summary for the selected coins."""

import math
from dataclasses import dataclass
from typing import Container, Sequence

import pandas as pd

from crypto_dashboard.models import AssetSnapshot, TimePeriod

SUMMARY_COLUMNS = ["id", "symbol", "color", "change", "is_positive"]


@dataclass(frozen=True)
class SummaryEntry:
    """One selected coin's change over the chosen period."""

    id: str
    symbol: str
    color: str
    change: float

    @property
    def is_positive(self) -> bool:
        return self.change >= 0


def percentage_change_for_period(
    snapshot: AssetSnapshot, period: TimePeriod | str,
) -> float:
    """Signed percentage change of ``snapshot`` over ``period``.

    Missing values (None or NaN) resolve to 0 for all six periods.

    Args:
        snapshot: The coin to read.
        period: One of the TimePeriod values.

    Returns:
        The change as a float.
    """
    value = getattr(snapshot, TimePeriod(period).field_name)
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return 0.0
    return float(value)


def period_label(period: TimePeriod | str) -> str:
    """Human label for a period, e.g. "1-year" for 365d."""
    return TimePeriod(period).label


def summarize(
    snapshots: Sequence[AssetSnapshot],
    selection: Container[str],
    period: TimePeriod | str,
    colors: dict[str, str],
) -> list[SummaryEntry]:
    """Build summary entries for the selected coins.

    Args:
        snapshots: Full snapshot collection.
        selection: Selected ids.
        period: Reporting period.
        colors: Series color by id (see colors.color_map).

    Returns:
        One entry per selected coin, in collection order.
    """
    return [
        SummaryEntry(
            id=s.id,
            symbol=s.symbol,
            color=colors[s.id],
            change=percentage_change_for_period(s, period),
        )
        for s in snapshots
        if s.id in selection
    ]


def summary_frame(entries: Sequence[SummaryEntry]) -> pd.DataFrame:
    """Summary entries as a DataFrame, one row per coin.

    Columns are id, symbol, color, change and is_positive.
    """
    return pd.DataFrame(
        [{"id": e.id, "symbol": e.symbol, "color": e.color, "change": e.change,
          "is_positive": e.is_positive}
         for e in entries],
        columns=SUMMARY_COLUMNS,
    )
