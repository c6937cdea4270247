"""Position-constraint and reordering engine for workout sequences."""

from .arrangement import arrange
from .derived_state import ItemState, recompute_derived_state, states_by_id
from .editor import EditorConfig, MutationBatch, OrderMutation, OrderSnapshot, SequenceEditor
from .errors import (
    DuplicateItemError,
    InvariantViolation,
    ItemNotFoundError,
    OrderingError,
    ScopeMismatchError,
)
from .executors import move_group, move_item, normalize, repair_last_locks, swap_elements
from .groups import (
    GroupLock,
    group_bounds,
    group_lock_type,
    group_of,
    is_last,
    iter_groups,
    siblings_of,
)
from .invariants import ConstraintSnapshot, check_invariants, snapshot_constraints
from .links import LinkToggle, can_link, toggle_link
from .lock_cycle import (
    LockPhase,
    LockToggle,
    can_toggle_lock,
    current_phase,
    lock_holder,
    next_phase,
    toggle_position_lock,
)
from .placement import clone_item, delete_item, insert_item, insertion_index
from .search import Direction, can_group_move_in_direction, find_swap_target
from .sequence import ItemSequence
from .validator import can_move, can_move_to_position, is_swap_valid

__all__ = [
    "arrange",
    "ItemState",
    "recompute_derived_state",
    "states_by_id",
    "EditorConfig",
    "MutationBatch",
    "OrderMutation",
    "OrderSnapshot",
    "SequenceEditor",
    "InvariantViolation",
    "ItemNotFoundError",
    "OrderingError",
    "ScopeMismatchError",
    "DuplicateItemError",
    "move_group",
    "move_item",
    "normalize",
    "repair_last_locks",
    "swap_elements",
    "GroupLock",
    "group_bounds",
    "group_lock_type",
    "group_of",
    "is_last",
    "iter_groups",
    "siblings_of",
    "ConstraintSnapshot",
    "check_invariants",
    "snapshot_constraints",
    "LinkToggle",
    "can_link",
    "toggle_link",
    "LockPhase",
    "LockToggle",
    "can_toggle_lock",
    "current_phase",
    "lock_holder",
    "next_phase",
    "toggle_position_lock",
    "clone_item",
    "delete_item",
    "insert_item",
    "insertion_index",
    "Direction",
    "can_group_move_in_direction",
    "find_swap_target",
    "ItemSequence",
    "can_move",
    "can_move_to_position",
    "is_swap_valid",
]
