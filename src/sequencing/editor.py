"""Editing facade that records reorder mutations for undo/redo."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Tuple

from domain.models import LockType, PositionedItem

from .derived_state import ItemState, recompute_derived_state
from .errors import InvariantViolation
from .executors import move_group, move_item, normalize
from .groups import group_of
from .invariants import ConstraintSnapshot, check_invariants, snapshot_constraints
from .links import LinkToggle, toggle_link
from .lock_cycle import LockToggle, toggle_position_lock
from .placement import clone_item, delete_item, insert_item
from .search import Direction
from .sequence import ItemSequence

logger = logging.getLogger(__name__)

Flags = Tuple[bool, LockType, int, bool]


@dataclass
class EditorConfig:
    """Behaviour switches for :class:`SequenceEditor`."""

    history_limit: int = 100
    verify_invariants: bool = True


@dataclass(frozen=True)
class OrderSnapshot:
    """Order and position flags of a sequence at one moment."""

    items: Tuple[PositionedItem, ...]
    flags: Tuple[Flags, ...]

    @classmethod
    def capture(cls, sequence: ItemSequence) -> OrderSnapshot:
        items = tuple(sequence)
        return cls(items=items, flags=tuple(item.position_flags() for item in items))

    @property
    def ids(self) -> List[str]:
        return [item.id for item in self.items]

    def restore(self, sequence: ItemSequence) -> None:
        sequence.replace_order(self.items)
        for item, flags in zip(self.items, self.flags):
            item.restore_position_flags(flags)


@dataclass(frozen=True)
class OrderMutation:
    """Record describing one editor action for auditing or undo."""

    mutation_id: str
    label: str
    previous: OrderSnapshot
    updated: OrderSnapshot


@dataclass
class MutationBatch:
    """Group of mutations that should undo/redo as a single unit."""

    batch_id: str
    label: str | None = None
    mutations: List[OrderMutation] = field(default_factory=list)

    def append(self, mutation: OrderMutation) -> None:
        self.mutations.append(mutation)

    def __bool__(self) -> bool:  # pragma: no cover - trivial container hook
        return bool(self.mutations)


class SequenceEditor:
    """Apply reorder, lock, link, and insertion actions to one sequence."""

    def __init__(self, sequence: ItemSequence, *, config: EditorConfig | None = None) -> None:
        self._sequence = sequence
        self._config = config or EditorConfig()
        if self._config.history_limit < 0:
            raise ValueError("history_limit must be non-negative")
        self._history: List[OrderMutation] = []
        self._undo_stack: List[OrderMutation | MutationBatch] = []
        self._redo_stack: List[OrderMutation | MutationBatch] = []
        self._mutation_counter = 0
        self._batch_counter = 0
        self._active_batch: MutationBatch | None = None
        normalize(sequence)

    @property
    def sequence(self) -> ItemSequence:
        return self._sequence

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def history(self) -> List[OrderMutation]:
        """Return the recorded mutations in order of execution."""

        return list(self._history)

    @property
    def undo_stack(self) -> List[OrderMutation | MutationBatch]:
        return list(self._undo_stack)

    @property
    def redo_stack(self) -> List[OrderMutation | MutationBatch]:
        return list(self._redo_stack)

    def derived_state(self) -> List[ItemState]:
        return recompute_derived_state(self._sequence)

    def move(self, item: PositionedItem, direction: Direction | str) -> bool:
        """Move ``item``'s group one slot; return ``False`` when blocked."""

        direction = Direction(direction)
        before = OrderSnapshot.capture(self._sequence)
        expected = snapshot_constraints(self._sequence)
        if not move_item(self._sequence, item, direction):
            return False
        self._commit(f"move {direction.value}", before, expected)
        return True

    def relocate(
        self,
        item: PositionedItem,
        anchor: PositionedItem,
        direction: Direction | str,
    ) -> None:
        """Move ``item``'s group next to ``anchor``'s group in one step."""

        before = OrderSnapshot.capture(self._sequence)
        expected = snapshot_constraints(self._sequence)
        move_group(self._sequence, group_of(self._sequence, item), anchor, direction)
        normalize(self._sequence)
        self._commit("relocate", before, expected)

    def toggle_lock(self, item: PositionedItem) -> LockToggle:
        before = OrderSnapshot.capture(self._sequence)
        result = toggle_position_lock(self._sequence, item)
        self._commit("toggle lock", before)
        return result

    def toggle_link(self, item: PositionedItem) -> LinkToggle:
        before = OrderSnapshot.capture(self._sequence)
        result = toggle_link(self._sequence, item)
        self._commit("toggle link", before)
        return result

    def add(self, item: PositionedItem) -> int:
        before = OrderSnapshot.capture(self._sequence)
        index = insert_item(self._sequence, item)
        self._commit("add", before)
        return index

    def clone(self, source: PositionedItem, **overrides: Any) -> PositionedItem:
        before = OrderSnapshot.capture(self._sequence)
        copy = clone_item(self._sequence, source, **overrides)
        self._commit("clone", before)
        return copy

    def delete(
        self,
        item: PositionedItem,
        default_factory: Callable[[], PositionedItem] | None = None,
    ) -> PositionedItem | None:
        before = OrderSnapshot.capture(self._sequence)
        replacement = delete_item(self._sequence, item, default_factory)
        self._commit("delete", before)
        return replacement

    def undo(self, steps: int = 1) -> List[OrderMutation]:
        """Revert the most recent mutations, returning the applied records."""

        undone: List[OrderMutation] = []
        for _ in range(min(max(steps, 0), len(self._undo_stack))):
            entry = self._undo_stack.pop()
            mutations = entry.mutations if isinstance(entry, MutationBatch) else [entry]
            for mutation in reversed(mutations):
                mutation.previous.restore(self._sequence)
                undone.append(mutation)
            self._redo_stack.append(entry)
        if undone:
            logger.debug("Undid %d mutation(s) in %s", len(undone), self._sequence.scope)
        return undone

    def redo(self, steps: int = 1) -> List[OrderMutation]:
        """Reapply the most recently undone mutations in order."""

        replayed: List[OrderMutation] = []
        for _ in range(min(max(steps, 0), len(self._redo_stack))):
            entry = self._redo_stack.pop()
            mutations = entry.mutations if isinstance(entry, MutationBatch) else [entry]
            for mutation in mutations:
                mutation.updated.restore(self._sequence)
                replayed.append(mutation)
            self._undo_stack.append(entry)
        if replayed:
            logger.debug("Redid %d mutation(s) in %s", len(replayed), self._sequence.scope)
        return replayed

    @contextmanager
    def batch(self, label: str | None = None) -> Iterator[MutationBatch]:
        """Group multiple actions so they undo/redo as a single frame."""

        if self._active_batch is not None:
            raise RuntimeError("Cannot nest SequenceEditor batches")
        self._batch_counter += 1
        batch = MutationBatch(batch_id=f"batch_{self._batch_counter}", label=label)
        self._active_batch = batch
        try:
            yield batch
        finally:
            active = self._active_batch
            self._active_batch = None
            if active and active.mutations:
                self._push_undo(active)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _next_mutation_id(self) -> str:
        self._mutation_counter += 1
        return f"mutation_{self._mutation_counter}"

    def _commit(
        self,
        label: str,
        before: OrderSnapshot,
        expected: ConstraintSnapshot | None = None,
    ) -> None:
        if self._config.verify_invariants:
            try:
                check_invariants(self._sequence, expected)
            except InvariantViolation:
                before.restore(self._sequence)
                logger.debug("Rolled back %s in %s", label, self._sequence.scope)
                raise
        after = OrderSnapshot.capture(self._sequence)
        if after == before:
            return
        mutation = OrderMutation(
            mutation_id=self._next_mutation_id(),
            label=label,
            previous=before,
            updated=after,
        )
        self._history.append(mutation)
        logger.debug("Recorded %s (%s) in %s: %s", mutation.mutation_id, label, self._sequence.scope, after.ids)
        if self._active_batch is not None:
            if not self._active_batch.mutations:
                self._redo_stack.clear()
            self._active_batch.append(mutation)
        else:
            self._push_undo(mutation)

    def _push_undo(self, entry: OrderMutation | MutationBatch) -> None:
        self._undo_stack.append(entry)
        self._redo_stack.clear()
        overflow = len(self._undo_stack) - self._config.history_limit
        if overflow > 0:
            del self._undo_stack[:overflow]

