"""Mutation executors and the post-mutation invariant repair pass."""
from __future__ import annotations

import logging
from typing import List, Sequence

from domain.models import LockType, PositionedItem

from .errors import OrderingError
from .groups import group_bounds
from .lock_cycle import LockPhase
from .search import Direction, find_swap_target
from .sequence import ItemSequence
from .validator import can_move_to_position, swapped_order

logger = logging.getLogger(__name__)


def swap_elements(sequence: ItemSequence, a: PositionedItem, b: PositionedItem) -> None:
    """Exchange the groups of ``a`` and ``b`` as contiguous blocks."""

    first = group_bounds(sequence, a)
    second = group_bounds(sequence, b)
    if first == second:
        raise OrderingError(f"Items {a.id!r} and {b.id!r} belong to the same group")
    sequence.replace_order(swapped_order(list(sequence), first, second))
    logger.debug("Swapped groups %s and %s in %s", first, second, sequence.scope)


def move_group(
    sequence: ItemSequence,
    group: Sequence[PositionedItem],
    anchor: PositionedItem,
    direction: Direction | str,
) -> None:
    """Relocate ``group`` before (``up``) or after (``down``) ``anchor``'s group."""

    direction = Direction(direction)
    if not group:
        raise OrderingError("Cannot move an empty group")
    start, stop = group_bounds(sequence, group[0])
    if [item.id for item in sequence.items[start:stop]] != [item.id for item in group]:
        raise OrderingError("Group does not match a linked run of the sequence")
    a_start, a_stop = group_bounds(sequence, anchor)
    if start <= a_start < stop:
        raise OrderingError(f"Anchor {anchor.id!r} lies inside the group being moved")

    if direction is Direction.UP:
        target = a_start if a_start < start else a_start - 1
    else:
        target = a_stop - 1 if a_stop > stop else a_stop
    if not can_move_to_position(sequence, group[0], target):
        raise OrderingError(
            f"Moving group at {start} {direction.value} past {anchor.id!r} would displace a pinned item"
        )

    moving = {member.id for member in group}
    remaining = [item for item in sequence if item.id not in moving]
    anchor_index = next(index for index, item in enumerate(remaining) if item.id == sequence[a_start].id)
    if direction is Direction.UP:
        insert_at = anchor_index
    else:
        insert_at = anchor_index + (a_stop - a_start)
    sequence.replace_order(remaining[:insert_at] + list(group) + remaining[insert_at:])
    logger.debug(
        "Moved group of %d from %d %s %s in %s",
        len(group),
        start,
        direction.value,
        anchor.id,
        sequence.scope,
    )


def repair_last_locks(sequence: ItemSequence) -> List[str]:
    """Demote every last-locked item that is no longer last to a position lock."""

    demoted: List[str] = []
    final_index = len(sequence) - 1
    for index, item in enumerate(sequence):
        if item.locked and item.lock_type is LockType.LAST and index != final_index:
            item.lock_type = LockType.POSITION
            item.lock_cycle = int(LockPhase.LOCKED_POSITION)
            demoted.append(item.id)
            logger.debug("Demoted last lock of %s at %d in %s", item.id, index, sequence.scope)
    return demoted


def normalize(sequence: ItemSequence) -> List[str]:
    """Restore lock/link invariants after any insertion, deletion, or move.

    Returns the ids of items whose last lock was demoted.
    """

    if len(sequence) and sequence[0].linked_with_previous:
        sequence[0].linked_with_previous = False
    return repair_last_locks(sequence)


def move_item(sequence: ItemSequence, item: PositionedItem, direction: Direction | str) -> bool:
    """Move ``item``'s group one slot in ``direction``; return whether it moved."""

    target = find_swap_target(sequence, item, direction)
    if target is None:
        return False
    swap_elements(sequence, item, target)
    normalize(sequence)
    return True

