"""Insertion placement, cloning and deletion of sequence items."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from domain.models import LockType, PositionedItem, new_item_id

from .errors import OrderingError
from .executors import normalize
from .groups import bounds_at, group_bounds
from .sequence import ItemSequence

logger = logging.getLogger(__name__)


def first_last_locked_index(sequence: ItemSequence, start: int = 0) -> Optional[int]:
    """Return the index of the first last-locked item at or after ``start``."""

    for index in range(start, len(sequence)):
        item = sequence[index]
        if item.locked and item.lock_type is LockType.LAST:
            return index
    return None


def insertion_index(sequence: ItemSequence, source: PositionedItem | None = None) -> int:
    """Return where a new item should land.

    Clones go directly after their source's group. Nothing is ever placed
    past a last-locked item: the new item lands in front of that item's group
    instead. With no last-locked item ahead, a clone still lands right after
    its source group, never at the end of the sequence. Fresh items go before
    the first last-locked group, or at the end.
    """

    if source is None:
        scan_from = 0
        candidate = len(sequence)
    else:
        start, stop = group_bounds(sequence, source)
        scan_from = start
        candidate = stop
    last_locked = first_last_locked_index(sequence, scan_from)
    if last_locked is not None:
        wall, _ = bounds_at(sequence, last_locked)
        candidate = min(candidate, wall)
    return candidate


def insert_item(
    sequence: ItemSequence,
    item: PositionedItem,
    source: PositionedItem | None = None,
) -> int:
    """Insert a fresh, unlocked and unlinked ``item``; return its index."""

    item.reset_position_flags()
    index = insertion_index(sequence, source)
    sequence.insert(index, item)
    normalize(sequence)
    logger.debug("Inserted %s at %d in %s", item.id, index, sequence.scope)
    return index


def clone_item(sequence: ItemSequence, source: PositionedItem, **overrides: Any) -> PositionedItem:
    """Copy ``source`` with a fresh id and insert the copy after its group."""

    sequence.index_of(source)
    update = {"id": new_item_id(), **overrides}
    clone = source.model_copy(update=update, deep=True)
    # entries of a cloned pattern keep their flags but need their own ids
    for entry in getattr(clone, "entries", ()):
        entry.id = new_item_id()
    insert_item(sequence, clone, source=source)
    return clone


def delete_item(
    sequence: ItemSequence,
    item: PositionedItem,
    default_factory: Callable[[], PositionedItem] | None = None,
) -> PositionedItem | None:
    """Remove ``item`` keeping at least one member in the sequence.

    When ``item`` is the only member, ``default_factory`` must supply the
    replacement, which is inserted before the deletion happens. The
    replacement is returned.
    """

    sequence.index_of(item)
    replacement: PositionedItem | None = None
    if len(sequence) <= 1:
        if default_factory is None:
            raise OrderingError(
                f"Deleting {item.id!r} would empty sequence {sequence.scope!r}; a default item is required"
            )
        replacement = default_factory()
        insert_item(sequence, replacement)
    index = sequence.remove(item)
    normalize(sequence)
    logger.debug("Deleted %s from %d in %s", item.id, index, sequence.scope)
    return replacement
