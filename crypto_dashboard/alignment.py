"""Align per-asset sparklines into a single normalized comparison table.

Each asset's prices are converted to percentage change from that asset's
own first sample, so curves are comparable in percentage space rather
than absolute price. Rows are indexed by sample position and keyed by
asset id; symbols are only used for labels.
"""

import logging
import math
from collections import Counter
from typing import Any, Container, Sequence

import pandas as pd

from crypto_dashboard.models import AlignedPoint, AssetSnapshot

logger = logging.getLogger(__name__)


def is_usable_sample(value: float | None) -> bool:
    """Return True if a price can take part in normalization.

    None and NaN mean "no data". A literal 0 is also rejected: as a
    baseline it would divide by zero, and as a sample it is treated as a
    gap.
    """
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return value != 0


def percentage_change(baseline: float, price: float) -> float:
    """Percentage change of ``price`` relative to ``baseline``."""
    return (price - baseline) / baseline * 100


def max_sparkline_length(snapshots: Sequence[AssetSnapshot]) -> int:
    """Longest sparkline in the collection, selected or not (0 if none)."""
    return max((len(s.sparkline) for s in snapshots if s.has_sparkline), default=0)


def align_series(
    snapshots: Sequence[AssetSnapshot],
    selection: Container[str],
) -> list[AlignedPoint]:
    """Build the aligned, normalized comparison table.

    Args:
        snapshots: Full snapshot collection, in display order.
        selection: Ids currently included in the comparison.

    Returns:
        One AlignedPoint per sample index up to the longest sparkline.
        Series that are shorter, unselected or lack a usable baseline are
        absent from the affected rows, never zero-filled.
    """
    max_length = max_sparkline_length(snapshots)
    if max_length == 0:
        return []

    plotted = []
    for snapshot in snapshots:
        if snapshot.id not in selection or not snapshot.has_sparkline:
            continue
        if not is_usable_sample(snapshot.sparkline[0]):
            logger.debug("Excluding %s: first sparkline sample is %r",
                         snapshot.id, snapshot.sparkline[0])
            continue
        plotted.append(snapshot)

    points = []
    for i in range(max_length):
        values: dict[str, float] = {}
        for snapshot in plotted:
            prices = snapshot.sparkline
            if i < len(prices) and is_usable_sample(prices[i]):
                values[snapshot.id] = percentage_change(prices[0], prices[i])
        points.append(AlignedPoint(time=i, values=values))

    return points


def series_labels(snapshots: Sequence[AssetSnapshot]) -> dict[str, str]:
    """Map each asset id to its chart label.

    The symbol is used as-is unless another asset in the collection shares
    it, in which case the id is appended so the two series stay distinct.
    """
    counts = Counter(s.symbol for s in snapshots)
    return {
        s.id: s.symbol if counts[s.symbol] == 1 else f"{s.symbol} ({s.id})"
        for s in snapshots
    }


def to_records(
    points: Sequence[AlignedPoint],
    snapshots: Sequence[AssetSnapshot],
) -> list[dict[str, Any]]:
    """Symbol-labelled rows, e.g. ``[{"time": 0, "BTC": 0.0}, ...]``."""
    labels = series_labels(snapshots)
    return [point.labelled(labels) for point in points]


def to_frame(
    points: Sequence[AlignedPoint],
    snapshots: Sequence[AssetSnapshot],
) -> pd.DataFrame:
    """Aligned table as a DataFrame.

    Args:
        points: Output of align_series().
        snapshots: The collection the points were built from.

    Returns:
        DataFrame indexed by ``time`` with one column per plotted asset
        label, in collection order. Gaps are NaN.
    """
    labels = series_labels(snapshots)
    plotted_ids = {asset_id for point in points for asset_id in point.values}
    columns = [labels[s.id] for s in snapshots if s.id in plotted_ids]

    df = pd.DataFrame(
        [point.labelled(labels) for point in points],
        columns=["time", *columns],
    )
    df.set_index("time", inplace=True)
    return df
