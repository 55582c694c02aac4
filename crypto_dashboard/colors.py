"""Stable color assignment for comparison series."""

import logging
from typing import Sequence

from crypto_dashboard.models import AssetSnapshot

logger = logging.getLogger(__name__)

# Muted palette, one entry per coin on the default page size
PALETTE = (
    "hsl(142, 35%, 45%)",  # green
    "hsl(220, 25%, 50%)",  # blue
    "hsl(260, 25%, 50%)",  # purple
    "hsl(340, 30%, 50%)",  # pink
    "hsl(25, 40%, 50%)",   # orange
    "hsl(45, 40%, 50%)",   # yellow
    "hsl(175, 30%, 45%)",  # cyan
    "hsl(0, 50%, 55%)",    # red
    "hsl(280, 35%, 55%)",  # violet
    "hsl(145, 30%, 45%)",  # emerald
    "hsl(200, 30%, 50%)",  # sky
    "hsl(40, 35%, 50%)",   # amber
)

POSITIVE_COLOR = "hsl(142, 35%, 45%)"
NEGATIVE_COLOR = "hsl(0, 50%, 55%)"


def color_for(
    asset_id: str,
    snapshots: Sequence[AssetSnapshot],
    palette: Sequence[str] = PALETTE,
) -> str:
    """Color for an asset, from its position in the full collection.

    The index is always taken from the unfiltered collection so that
    toggling other assets never changes this one's color. Collections
    larger than the palette wrap around and share colors.

    Args:
        asset_id: Id of the asset to color.
        snapshots: Full, unfiltered snapshot collection.
        palette: Ordered colors to draw from.

    Returns:
        A palette entry.

    Raises:
        KeyError: If ``asset_id`` is not in the collection.
    """
    for index, snapshot in enumerate(snapshots):
        if snapshot.id == asset_id:
            return palette[index % len(palette)]
    raise KeyError(asset_id)


def color_map(
    snapshots: Sequence[AssetSnapshot],
    palette: Sequence[str] = PALETTE,
) -> dict[str, str]:
    """Colors for every asset of a collection, keyed by id."""
    return {
        snapshot.id: palette[index % len(palette)]
        for index, snapshot in enumerate(snapshots)
    }


class StickyColorAssigner:
    """Remembers the first color handed to each id.

    Upstream market-cap rank changes reorder the collection between polls;
    with index-based coloring that reshuffles colors. This table assigns
    a color the first time an id is seen and keeps it afterwards. New ids
    take the next palette slot in order of first appearance.
    """

    def __init__(self, palette: Sequence[str] = PALETTE) -> None:
        self.palette = tuple(palette)
        self._assigned: dict[str, str] = {}

    def assign(self, snapshots: Sequence[AssetSnapshot]) -> dict[str, str]:
        """Colors for the collection, assigning any unseen ids."""
        for snapshot in snapshots:
            if snapshot.id not in self._assigned:
                color = self.palette[len(self._assigned) % len(self.palette)]
                self._assigned[snapshot.id] = color
                logger.debug("Assigned %s to %s", color, snapshot.id)
        return {s.id: self._assigned[s.id] for s in snapshots}

    def __len__(self) -> int:
        return len(self._assigned)
