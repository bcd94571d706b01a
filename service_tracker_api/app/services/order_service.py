"""
Persistence of the user-defined ordering of service records.

The record list is stored in one key and its display order in a
separate index (``[{"id": ..., "order": n}, ...]``).  The index is
rebuilt wholesale whenever the list is saved or reordered.  Entries
for deleted records are ignored on lookup, and records missing from
the index sort after all indexed ones, keeping their relative order.

Drag-and-drop usually happens on a filtered view.  ``reorder_visible``
moves one item inside the visible subset and merges the result back
into the full list: every record of the visible subset is placed, in
its new order, ahead of the records that were not visible.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, TypeVar

from ..core.config import settings
from ..core.store import ORDER_KEY, KeyValueStore
from ..schemas.service import ServiceRecord


logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrderService:
    """Read and write the order index for service records."""

    def __init__(self, store: KeyValueStore, unindexed_order: Optional[int] = None) -> None:
        self.store = store
        self.unindexed_order = settings.unindexed_order if unindexed_order is None else unindexed_order

    def save_order(self, records: Sequence[ServiceRecord]) -> bool:
        """Persist the 0-based position of every record in ``records``."""
        entries = [{"id": record.id, "order": position} for position, record in enumerate(records)]
        saved = self.store.save_json(ORDER_KEY, entries)
        if not saved:
            logger.error("Failed to save service order (%d entries)", len(entries))
        return saved

    def load_order_index(self) -> Dict[str, int]:
        """Return ``{id: order}``; empty when nothing usable is stored."""
        entries = self.store.load_json(ORDER_KEY, default=[])
        if not isinstance(entries, list):
            logger.error("Stored service order is not a list; ignoring it")
            return {}
        index: Dict[str, int] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            record_id = entry.get("id")
            order = entry.get("order")
            if record_id is None or isinstance(order, bool) or not isinstance(order, (int, float)):
                continue
            index[str(record_id)] = int(order)
        return index

    def apply_order(
        self,
        records: Sequence[ServiceRecord],
        index: Optional[Dict[str, int]] = None,
    ) -> List[ServiceRecord]:
        """Stable-sort ``records`` by the order index.

        Each returned record carries its index value in ``order``
        (``None`` when it has no entry).
        """
        if index is None:
            index = self.load_order_index()
        if not index:
            return list(records)
        ordered = sorted(records, key=lambda record: index.get(record.id, self.unindexed_order))
        return [record.model_copy(update={"order": index.get(record.id)}) for record in ordered]


def move_item(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """Return a copy of ``items`` with one element moved.

    Raises:
        IndexError: If either index is outside the sequence.
    """
    if not 0 <= from_index < len(items) or not 0 <= to_index < len(items):
        raise IndexError(f"Cannot move item {from_index} to {to_index} in a list of {len(items)}")
    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


def merge_reordered(
    full: Sequence[ServiceRecord],
    visible_reordered: Sequence[ServiceRecord],
) -> List[ServiceRecord]:
    """Merge a reordered visible subset back into the full record list.

    Visible records come first, in their new order and with ``order``
    set to their new position; the remaining records follow in their
    previous relative order.
    """
    known_ids = {record.id for record in full}
    kept = [record for record in visible_reordered if record.id in known_ids]
    touched = {record.id: record.model_copy(update={"order": position}) for position, record in enumerate(kept)}
    untouched = [record for record in full if record.id not in touched]
    return list(touched.values()) + untouched


def reorder_visible(
    full: Sequence[ServiceRecord],
    visible: Sequence[ServiceRecord],
    from_index: int,
    to_index: int,
) -> List[ServiceRecord]:
    """Move ``visible[from_index]`` to ``to_index`` and merge into ``full``."""
    if from_index == to_index:
        return list(full)
    return merge_reordered(full, move_item(visible, from_index, to_index))
