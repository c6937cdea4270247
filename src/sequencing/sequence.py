"""Ordered sibling list for one scope of a workout."""
from __future__ import annotations

from typing import Iterator, List, MutableSequence, Sequence

from domain.models import PATTERN_SCOPE, Message, Pattern, PositionedItem, Shot, Workout

from .errors import DuplicateItemError, ItemNotFoundError, ScopeMismatchError


class ItemSequence:
    """Arena of items sharing one parent scope.

    The sequence wraps the list owned by the model (``Workout.patterns`` or
    ``Pattern.entries``) so every reorder is visible on the model itself.
    Items are addressed by their stable ``id``; indices are derived fresh on
    every lookup and never cached across calls.
    """

    def __init__(self, scope: str, items: MutableSequence[PositionedItem]) -> None:
        self._scope = scope
        self._items = items
        for item in items:
            self._check_kind(item)
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            duplicates = sorted({item_id for item_id in ids if ids.count(item_id) > 1})
            raise DuplicateItemError(f"Items {duplicates!r} occur more than once in {scope!r}")

    @classmethod
    def for_pattern(cls, pattern: Pattern) -> ItemSequence:
        """Return the entries of ``pattern`` as a sequence sharing its list."""

        return cls(pattern.scope, pattern.entries)

    @classmethod
    def for_workout(cls, workout: Workout) -> ItemSequence:
        """Return the patterns of ``workout`` as a sequence sharing its list."""

        return cls(PATTERN_SCOPE, workout.patterns)

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def items(self) -> MutableSequence[PositionedItem]:
        """Return the live backing list."""

        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PositionedItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> PositionedItem:
        return self._items[index]

    def ids(self) -> List[str]:
        """Return the item ids in display order."""

        return [item.id for item in self._items]

    def index_of(self, item: PositionedItem | str) -> int:
        """Return the current index of ``item`` (an item or its id)."""

        item_id = item if isinstance(item, str) else item.id
        for index, candidate in enumerate(self._items):
            if candidate.id == item_id:
                return index
        if not isinstance(item, str):
            self._check_kind(item)
        raise ItemNotFoundError(f"Item {item_id!r} is not part of sequence {self._scope!r}")

    def contains(self, item: PositionedItem) -> bool:
        return any(candidate.id == item.id for candidate in self._items)

    def get(self, item_id: str) -> PositionedItem:
        """Return the member with ``item_id``."""

        return self._items[self.index_of(item_id)]

    def insert(self, index: int, item: PositionedItem) -> None:
        """Place ``item`` at ``index`` after checking scope and uniqueness."""

        self._check_kind(item)
        if self.contains(item):
            raise DuplicateItemError(f"Item {item.id!r} already occupies sequence {self._scope!r}")
        if index < 0 or index > len(self._items):
            raise IndexError(f"Insertion index {index} out of range for {len(self._items)} items")
        self._items.insert(index, item)

    def remove(self, item: PositionedItem) -> int:
        """Drop ``item`` and return the index it occupied."""

        index = self.index_of(item)
        del self._items[index]
        return index

    def replace_order(self, ordered: Sequence[PositionedItem]) -> None:
        """Rewrite the backing list in place with ``ordered``."""

        self._items[:] = list(ordered)

    def _check_kind(self, item: PositionedItem) -> None:
        if self._scope == PATTERN_SCOPE:
            allowed = isinstance(item, Pattern)
        else:
            allowed = isinstance(item, (Shot, Message))
        if not allowed:
            raise ScopeMismatchError(
                f"{type(item).__name__} {item.id!r} cannot be ordered within scope {self._scope!r}"
            )

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ItemSequence(scope={self._scope!r}, ids={self.ids()!r})"

