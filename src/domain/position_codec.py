"""Translate item position flags to and from the saved ``positionType`` field.

Saved workouts describe each pattern or entry with one string:

* ``"normal"``: free to reorder
* ``"linked"``: must follow its predecessor
* ``"last"``: pinned to the final slot
* ``"<N>"``: pinned to the 1-based position ``N``
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from .models import LockType, PositionedItem

NORMAL = "normal"
LINKED = "linked"
LAST = "last"

LOCKED_POSITION_PHASE = 1
LOCKED_LAST_PHASE = 3

_PINNED_POSITION = re.compile(r"0*[1-9][0-9]*")


def position_type_of(item: PositionedItem, index: int) -> str:
    """Return the ``positionType`` for ``item`` sitting at zero-based ``index``.

    A link takes precedence over a lock on the same item.
    """

    if item.linked_with_previous:
        return LINKED
    if item.locked:
        if item.lock_type is LockType.LAST:
            return LAST
        return str(index + 1)
    return NORMAL


def pinned_position(position_type: str | int | None) -> Optional[int]:
    """Return the 1-based pin encoded by ``position_type``, or ``None``."""

    if position_type is None:
        return None
    value = str(position_type).strip()
    if _PINNED_POSITION.fullmatch(value) is None:
        return None
    return int(value)


def apply_position_type(item: PositionedItem, position_type: str | int | None) -> Optional[int]:
    """Set ``item``'s flags from a saved ``positionType``.

    Unknown values fall back to ``normal``. Numeric positions only carry the
    lock; the caller keeps items in saved order so the pin lands at ``N - 1``.
    Returns the pinned position, if any.
    """

    item.reset_position_flags()
    value = str(position_type).strip().lower() if position_type is not None else NORMAL
    if value == LINKED:
        item.linked_with_previous = True
    elif value == LAST:
        item.locked = True
        item.lock_type = LockType.LAST
        item.lock_cycle = LOCKED_LAST_PHASE
    else:
        position = pinned_position(value)
        if position is not None:
            item.locked = True
            item.lock_type = LockType.POSITION
            item.lock_cycle = LOCKED_POSITION_PHASE
        return position
    return None


def export_position_types(items: Sequence[PositionedItem]) -> List[str]:
    """Return the ``positionType`` of every item in display order."""

    return [position_type_of(item, index) for index, item in enumerate(items)]


def restore_position_types(
    items: Sequence[PositionedItem],
    values: Iterable[str | int | None],
) -> List[PositionedItem]:
    """Apply saved ``positionType`` values to ``items`` pairwise.

    Returns the items in load order with every numerically pinned item moved
    to index ``N - 1`` (clamped to the end), the other items keeping their
    relative order and last-pinned items closing the list.
    """

    values = list(values)
    if len(values) != len(items):
        raise ValueError(
            f"Expected {len(items)} positionType values, received {len(values)}"
        )
    pinned: List[tuple[int, PositionedItem]] = []
    free: List[PositionedItem] = []
    tail: List[PositionedItem] = []
    for item, value in zip(items, values):
        position = apply_position_type(item, value)
        if position is not None:
            pinned.append((position - 1, item))
        elif item.locked:
            tail.append(item)
        else:
            free.append(item)
    ordered = list(free)
    for target, item in sorted(pinned, key=lambda entry: entry[0]):
        ordered.insert(min(target, len(ordered)), item)
    return ordered + tail
