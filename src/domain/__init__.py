"""Domain package exposing workout models and the positionType codec."""
from .models import (
    PATTERN_SCOPE,
    LockType,
    Message,
    Pattern,
    PositionedItem,
    Shot,
    Workout,
    new_item_id,
)
from .position_codec import (
    apply_position_type,
    export_position_types,
    pinned_position,
    position_type_of,
    restore_position_types,
)

__all__ = [
    "PATTERN_SCOPE",
    "LockType",
    "Message",
    "Pattern",
    "PositionedItem",
    "Shot",
    "Workout",
    "new_item_id",
    "apply_position_type",
    "export_position_types",
    "pinned_position",
    "position_type_of",
    "restore_position_types",
]
