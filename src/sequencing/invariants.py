"""Checks for the lock and link invariants of a sequence."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from domain.models import LockType

from .errors import InvariantViolation
from .sequence import ItemSequence


@dataclass(frozen=True)
class ConstraintSnapshot:
    """Pinned indices and link partners captured before a reorder."""

    pins: Dict[str, int] = field(default_factory=dict)
    links: Dict[str, str] = field(default_factory=dict)


def snapshot_constraints(sequence: ItemSequence) -> ConstraintSnapshot:
    pins: Dict[str, int] = {}
    links: Dict[str, str] = {}
    for index, item in enumerate(sequence):
        if item.locked and item.lock_type is LockType.POSITION:
            pins[item.id] = index
        if index > 0 and item.linked_with_previous:
            links[item.id] = sequence[index - 1].id
    return ConstraintSnapshot(pins=pins, links=links)


def check_invariants(sequence: ItemSequence, expected: ConstraintSnapshot | None = None) -> None:
    """Raise :class:`InvariantViolation` when the sequence is inconsistent.

    Structural rules are always checked: unique ids, a clean first item and
    last locks only on the final item. With ``expected`` the position pins
    and link partners recorded before a reorder must also still hold.
    """

    ids = sequence.ids()
    if len(ids) != len(set(ids)):
        raise InvariantViolation(f"Duplicate items in sequence {sequence.scope!r}")
    if ids and sequence[0].linked_with_previous:
        raise InvariantViolation(f"First item {ids[0]!r} is linked to a missing predecessor")

    final_index = len(ids) - 1
    for index, item in enumerate(sequence):
        if item.locked and item.lock_type is LockType.LAST and index != final_index:
            raise InvariantViolation(
                f"Item {item.id!r} is locked last but sits at {index} of {len(ids)}"
            )

    if expected is None:
        return
    positions = {item_id: index for index, item_id in enumerate(ids)}
    for item_id, index in expected.pins.items():
        if item_id in positions and positions[item_id] != index:
            raise InvariantViolation(
                f"Pinned item {item_id!r} moved from {index} to {positions[item_id]}"
            )
    for item_id, predecessor_id in expected.links.items():
        index = positions.get(item_id)
        if index is None or predecessor_id not in positions:
            continue
        if index == 0 or ids[index - 1] != predecessor_id:
            raise InvariantViolation(
                f"Linked item {item_id!r} no longer follows {predecessor_id!r}"
            )
