"""Per-item UI state derived from a sequence after every mutation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .groups import GroupLock, group_lock_type, iter_groups
from .links import can_link
from .lock_cycle import LockPhase, can_toggle_lock, current_phase
from .search import Direction, can_group_move_in_direction
from .sequence import ItemSequence


@dataclass(frozen=True)
class ItemState:
    """What the rendering layer needs to draw one item's toolbar."""

    item_id: str
    position: int
    is_last: bool
    can_move_up: bool
    can_move_down: bool
    group_anchor_id: str
    group_lock: GroupLock
    linked: bool
    can_link: bool
    can_lock: bool
    lock_phase: LockPhase


def recompute_derived_state(sequence: ItemSequence) -> List[ItemState]:
    """Return fresh button and styling state for every item in display order.

    The result depends on the whole sequence: unlocking one item can open a
    movement window for distant items, so callers rebuild it after any change.
    """

    states: List[ItemState] = []
    final_index = len(sequence) - 1
    index = 0
    for group in iter_groups(sequence):
        anchor = group[0]
        lock = group_lock_type(group)
        can_up = lock is GroupLock.NONE and can_group_move_in_direction(sequence, anchor, Direction.UP)
        can_down = lock is GroupLock.NONE and can_group_move_in_direction(sequence, anchor, Direction.DOWN)
        for member in group:
            states.append(
                ItemState(
                    item_id=member.id,
                    position=index + 1,
                    is_last=index == final_index,
                    can_move_up=can_up,
                    can_move_down=can_down,
                    group_anchor_id=anchor.id,
                    group_lock=lock,
                    linked=index > 0 and member.linked_with_previous,
                    can_link=can_link(sequence, member),
                    can_lock=can_toggle_lock(sequence, member),
                    lock_phase=current_phase(member),
                )
            )
            index += 1
    return states


def states_by_id(states: List[ItemState]) -> Dict[str, ItemState]:
    return {state.item_id: state for state in states}
