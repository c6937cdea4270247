"""Sibling and linked-group resolution over an :class:`ItemSequence`."""
from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Sequence, Tuple

from domain.models import LockType, PositionedItem

from .sequence import ItemSequence


class GroupLock(str, Enum):
    """Lock carried by a linked group as a whole."""

    NONE = "none"
    POSITION = "position"
    LAST = "last"


def siblings_of(sequence: ItemSequence, item: PositionedItem) -> List[PositionedItem]:
    """Return every item sharing ``item``'s scope in display order."""

    sequence.index_of(item)
    return list(sequence)


def bounds_at(sequence: ItemSequence, index: int) -> Tuple[int, int]:
    """Return ``(start, stop)`` slice bounds of the group covering ``index``."""

    if index < 0 or index >= len(sequence):
        raise IndexError(f"Index {index} out of range for {len(sequence)} items")
    start = index
    while start > 0 and sequence[start].linked_with_previous:
        start -= 1
    stop = index + 1
    while stop < len(sequence) and sequence[stop].linked_with_previous:
        stop += 1
    return start, stop


def group_bounds(sequence: ItemSequence, item: PositionedItem) -> Tuple[int, int]:
    """Return the slice bounds of the group ``item`` belongs to."""

    return bounds_at(sequence, sequence.index_of(item))


def group_of(sequence: ItemSequence, item: PositionedItem) -> List[PositionedItem]:
    """Return the contiguous linked run containing ``item``."""

    start, stop = group_bounds(sequence, item)
    return list(sequence.items[start:stop])


def iter_groups(sequence: ItemSequence) -> Iterator[List[PositionedItem]]:
    """Yield every group of the sequence in order."""

    index = 0
    while index < len(sequence):
        _, stop = bounds_at(sequence, index)
        yield list(sequence.items[index:stop])
        index = stop


def is_last(sequence: ItemSequence, item: PositionedItem) -> bool:
    return sequence.index_of(item) == len(sequence) - 1


def is_group_locked(group: Sequence[PositionedItem]) -> bool:
    return any(member.locked for member in group)


def group_lock_type(group: Sequence[PositionedItem]) -> GroupLock:
    """Return ``LAST`` if any member is last-locked, else ``POSITION`` if any is locked."""

    locked = [member for member in group if member.locked]
    if not locked:
        return GroupLock.NONE
    if any(member.lock_type is LockType.LAST for member in locked):
        return GroupLock.LAST
    return GroupLock.POSITION
