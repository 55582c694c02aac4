"""Which assets are included in the comparison view."""

import logging
from typing import Iterable, Iterator, Sequence

from crypto_dashboard.models import AssetSnapshot

logger = logging.getLogger(__name__)


class SelectionState:
    """Set of selected asset ids.

    Starts with every id of the latest collection selected. The only
    user-driven mutation is toggle(); nothing is persisted.
    """

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._selected: set[str] = set(ids)
        self._known: frozenset[str] = frozenset(self._selected)

    def initialize(self, ids: Iterable[str]) -> None:
        """Replace the selection wholesale, selecting every id given."""
        self._selected = set(ids)
        self._known = frozenset(self._selected)

    def toggle(self, asset_id: str) -> None:
        """Remove ``asset_id`` if selected, otherwise add it."""
        if asset_id in self._selected:
            self._selected.remove(asset_id)
        else:
            self._selected.add(asset_id)

    def is_selected(self, asset_id: str) -> bool:
        return asset_id in self._selected

    def sync(self, snapshots: Sequence[AssetSnapshot]) -> bool:
        """Reset to "all selected" when the collection's membership changes.

        A refresh that returns the same ids keeps the user's selection.

        Returns:
            True if the selection was re-initialized.
        """
        ids = frozenset(s.id for s in snapshots)
        if ids == self._known:
            return False
        logger.info("Coin set changed (%d coins), selecting all", len(ids))
        self.initialize(ids)
        return True

    def selected(self, snapshots: Sequence[AssetSnapshot]) -> list[AssetSnapshot]:
        """Selected snapshots, in collection order."""
        return [s for s in snapshots if s.id in self._selected]

    @property
    def ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._selected

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._selected))

    def __len__(self) -> int:
        return len(self._selected)

    def __repr__(self) -> str:
        return f"SelectionState({sorted(self._selected)!r})"
