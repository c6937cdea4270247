"""Randomised play order that honours locks and links.

Used when a workout is set to shuffle patterns or entries. The sequence is
not modified; callers receive a new list of the same items.
"""
from __future__ import annotations

import random
from typing import List, Optional

from domain.models import PositionedItem

from .groups import is_group_locked, iter_groups
from .sequence import ItemSequence


def arrange(sequence: ItemSequence, rng: Optional[random.Random] = None) -> List[PositionedItem]:
    """Return a shuffled order of ``sequence``'s items.

    Locked groups (position or last) keep the indices they occupy now.
    Linked groups stay contiguous and keep their relative order; they are
    placed first so they find room. Single free items are shuffled into the
    remaining slots.
    """

    rng = rng or random.Random()
    slots: List[Optional[PositionedItem]] = [None] * len(sequence)
    linked_groups: List[List[PositionedItem]] = []
    singles: List[List[PositionedItem]] = []

    index = 0
    for group in iter_groups(sequence):
        if is_group_locked(group):
            for offset, member in enumerate(group):
                slots[index + offset] = member
        elif len(group) > 1:
            linked_groups.append(group)
        else:
            singles.append(group)
        index += len(group)

    rng.shuffle(singles)
    for group in linked_groups + singles:
        start = _first_fit(slots, len(group))
        if start is None:
            # no contiguous room left; keep every item even if the run splits
            for member in group:
                slots[slots.index(None)] = member
            continue
        for offset, member in enumerate(group):
            slots[start + offset] = member
    return [item for item in slots if item is not None]


def _first_fit(slots: List[Optional[PositionedItem]], size: int) -> Optional[int]:
    run = 0
    for index, slot in enumerate(slots):
        run = run + 1 if slot is None else 0
        if run == size:
            return index - size + 1
    return None
