"""Lock-aware legality checks for reordering.

Locked groups act as walls: unlocked groups may permute freely inside the
open interval between two walls but never cross one.
"""
from __future__ import annotations

from typing import List, Sequence

from domain.models import LockType, PositionedItem

from .groups import bounds_at, group_bounds, is_group_locked
from .sequence import ItemSequence


def can_move(sequence: ItemSequence, item: PositionedItem) -> bool:
    """Return ``True`` when no member of ``item``'s group is locked."""

    start, stop = group_bounds(sequence, item)
    return not is_group_locked(sequence.items[start:stop])


def swapped_order(
    items: Sequence[PositionedItem],
    first: tuple[int, int],
    second: tuple[int, int],
) -> List[PositionedItem]:
    """Return ``items`` with the two non-overlapping slices exchanged as blocks."""

    (a_start, a_stop), (b_start, b_stop) = sorted([first, second])
    return (
        list(items[:a_start])
        + list(items[b_start:b_stop])
        + list(items[a_stop:b_start])
        + list(items[a_start:a_stop])
        + list(items[b_stop:])
    )


def is_swap_valid(sequence: ItemSequence, a: PositionedItem, b: PositionedItem) -> bool:
    """Check whether the groups of ``a`` and ``b`` may exchange places."""

    first = group_bounds(sequence, a)
    second = group_bounds(sequence, b)
    if first == second:
        return False
    if is_group_locked(sequence.items[first[0]:first[1]]):
        return False
    if is_group_locked(sequence.items[second[0]:second[1]]):
        return False
    before = list(sequence)
    after = swapped_order(before, first, second)
    return _pins_hold(before, after) and _links_hold(before, after)


def can_move_to_position(sequence: ItemSequence, item: PositionedItem, target_index: int) -> bool:
    """Return ``True`` when ``item``'s group can travel to ``target_index`` without
    displacing any locked group on the way."""

    if target_index < 0 or target_index >= len(sequence):
        return False
    if not can_move(sequence, item):
        return False
    start, stop = group_bounds(sequence, item)
    if start <= target_index < stop:
        return True
    if target_index < start:
        path = range(target_index, start)
    else:
        path = range(stop, target_index + 1)
    for index in path:
        g_start, g_stop = bounds_at(sequence, index)
        if is_group_locked(sequence.items[g_start:g_stop]):
            return False
    return True


def _pins_hold(before: Sequence[PositionedItem], after: Sequence[PositionedItem]) -> bool:
    last_index = len(after) - 1
    for index, item in enumerate(before):
        if not item.locked:
            continue
        new_index = _position(after, item)
        if item.lock_type is LockType.LAST and new_index != last_index:
            return False
        if item.lock_type is LockType.POSITION and new_index != index:
            return False
    return True


def _links_hold(before: Sequence[PositionedItem], after: Sequence[PositionedItem]) -> bool:
    for index, item in enumerate(before):
        if not item.linked_with_previous:
            continue
        new_index = _position(after, item)
        if index == 0:
            # a stale flag on the first item would latch onto a new predecessor
            if new_index != 0:
                return False
            continue
        if new_index == 0 or after[new_index - 1].id != before[index - 1].id:
            return False
    return True


def _position(items: Sequence[PositionedItem], item: PositionedItem) -> int:
    for index, candidate in enumerate(items):
        if candidate.id == item.id:
            return index
    raise ValueError(f"Item {item.id!r} vanished from the simulated order")
