"""Finite-state machine behind the position-lock button.

An item that is not last toggles between unlocked and position-locked. The
final item of a sequence may be pinned either to its index or to the last
slot, so its button walks a four-phase cycle::

    UNLOCKED -> LOCKED_POSITION -> UNLOCKED_LAST -> LOCKED_LAST -> UNLOCKED
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List

from domain.models import LockType, PositionedItem

from .errors import OrderingError
from .groups import GroupLock, group_lock_type, group_of, is_last
from .sequence import ItemSequence


class LockPhase(IntEnum):
    UNLOCKED = 0
    LOCKED_POSITION = 1
    UNLOCKED_LAST = 2
    LOCKED_LAST = 3

    @property
    def locked(self) -> bool:
        return self in (LockPhase.LOCKED_POSITION, LockPhase.LOCKED_LAST)

    @property
    def lock_type(self) -> LockType:
        return LockType.LAST if self is LockPhase.LOCKED_LAST else LockType.POSITION


@dataclass(frozen=True)
class LockToggle:
    """Outcome of a lock toggle: the new phase and the group whose styling changed."""

    item_id: str
    phase: LockPhase
    group: List[PositionedItem]
    group_lock: GroupLock


def current_phase(item: PositionedItem) -> LockPhase:
    """Derive the phase from the item's flags, using ``lock_cycle`` only when unlocked."""

    if item.locked:
        if item.lock_type is LockType.LAST:
            return LockPhase.LOCKED_LAST
        return LockPhase.LOCKED_POSITION
    if item.lock_cycle == LockPhase.UNLOCKED_LAST:
        return LockPhase.UNLOCKED_LAST
    return LockPhase.UNLOCKED


def next_phase(phase: LockPhase, *, is_last: bool) -> LockPhase:
    """Advance exactly one phase."""

    if is_last:
        return LockPhase((phase + 1) % len(LockPhase))
    if phase.locked:
        return LockPhase.UNLOCKED
    return LockPhase.LOCKED_POSITION


def apply_phase(item: PositionedItem, phase: LockPhase) -> None:
    item.locked = phase.locked
    item.lock_type = phase.lock_type
    item.lock_cycle = int(phase)


def lock_holder(sequence: ItemSequence, item: PositionedItem) -> PositionedItem | None:
    """Return the other member of ``item``'s group that already holds a lock."""

    for member in group_of(sequence, item):
        if member.id != item.id and member.locked:
            return member
    return None


def can_toggle_lock(sequence: ItemSequence, item: PositionedItem) -> bool:
    phase = next_phase(current_phase(item), is_last=is_last(sequence, item))
    return not phase.locked or lock_holder(sequence, item) is None


def toggle_position_lock(sequence: ItemSequence, item: PositionedItem) -> LockToggle:
    """Advance ``item``'s lock button one phase and report the affected group.

    A group is locked through a single member. Locking a second member is
    refused with :class:`OrderingError`; unlocking is always allowed.
    """

    phase = next_phase(current_phase(item), is_last=is_last(sequence, item))
    if phase.locked:
        holder = lock_holder(sequence, item)
        if holder is not None:
            raise OrderingError(
                f"Group of {item.id!r} is already locked through {holder.id!r} in {sequence.scope!r}"
            )
    apply_phase(item, phase)
    group = group_of(sequence, item)
    return LockToggle(
        item_id=item.id,
        phase=phase,
        group=group,
        group_lock=group_lock_type(group),
    )
