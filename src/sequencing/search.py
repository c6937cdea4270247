"""Swap-target search behind the move up / move down buttons."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from domain.models import PositionedItem

from .groups import bounds_at, group_bounds
from .sequence import ItemSequence
from .validator import can_move, is_swap_valid


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


def find_swap_target(
    sequence: ItemSequence,
    item: PositionedItem,
    direction: Direction | str,
) -> Optional[PositionedItem]:
    """Return the anchor of the group ``item``'s group would swap with, if any.

    The neighbour directly beyond the group decides: no neighbour (the group
    already sits at the edge) or a locked neighbouring group both yield
    ``None``. Otherwise the neighbouring group as a whole is the target and
    its first member is returned as the representative for the executor.
    """

    direction = Direction(direction)
    if not can_move(sequence, item):
        return None
    start, stop = group_bounds(sequence, item)
    boundary = start - 1 if direction is Direction.UP else stop
    if boundary < 0 or boundary >= len(sequence):
        return None
    b_start, _ = bounds_at(sequence, boundary)
    target = sequence[b_start]
    if not is_swap_valid(sequence, item, target):
        return None
    return target


def can_group_move_in_direction(
    sequence: ItemSequence,
    item: PositionedItem,
    direction: Direction | str,
) -> bool:
    """Return whether a move in ``direction`` is currently possible."""

    return find_swap_target(sequence, item, direction) is not None
