"""Link-with-previous toggling."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from domain.models import PositionedItem

from .errors import OrderingError
from .groups import group_bounds, group_of, is_group_locked
from .sequence import ItemSequence


@dataclass(frozen=True)
class LinkToggle:
    """Groups to restyle after a link flip.

    ``group`` is the group now containing the toggled item and
    ``previous_group`` the group now containing its predecessor; both are the
    same list after linking and differ after unlinking.
    """

    item_id: str
    linked: bool
    group: List[PositionedItem]
    previous_group: List[PositionedItem]


def _joins_two_locks(sequence: ItemSequence, index: int) -> bool:
    start, stop = group_bounds(sequence, sequence[index])
    prev_start, prev_stop = group_bounds(sequence, sequence[index - 1])
    return is_group_locked(sequence.items[start:stop]) and is_group_locked(
        sequence.items[prev_start:prev_stop]
    )


def can_link(sequence: ItemSequence, item: PositionedItem) -> bool:
    """Only items with a predecessor can be linked, and never so that one
    group ends up locked through two members. Unlinking is always possible."""

    index = sequence.index_of(item)
    if index == 0:
        return False
    return item.linked_with_previous or not _joins_two_locks(sequence, index)


def toggle_link(sequence: ItemSequence, item: PositionedItem) -> LinkToggle:
    index = sequence.index_of(item)
    if index == 0:
        raise OrderingError(f"Item {item.id!r} has no predecessor to link with")
    if not item.linked_with_previous and _joins_two_locks(sequence, index):
        raise OrderingError(
            f"Linking {item.id!r} would join two locked groups in {sequence.scope!r}"
        )
    item.linked_with_previous = not item.linked_with_previous
    return LinkToggle(
        item_id=item.id,
        linked=item.linked_with_previous,
        group=group_of(sequence, item),
        previous_group=group_of(sequence, sequence[index - 1]),
    )
