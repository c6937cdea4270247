"""Pydantic-powered domain models for ghosting workouts.

A workout is an ordered list of patterns and every pattern owns an ordered
list of shots and spoken messages. Each of those items carries the same
position flags (lock, lock type, lock cycle and link to predecessor) which
the :mod:`sequencing` package reads and rewrites when items are reordered.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


PATTERN_SCOPE = "patterns"


def new_item_id() -> str:
    """Return a fresh identifier for a workout item."""

    return uuid4().hex


class LockType(str, Enum):
    """Meaning of an item's position pin."""

    POSITION = "position"
    LAST = "last"


class PositionedItem(BaseModel):
    """Flags shared by every orderable workout item."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_item_id)
    name: str = ""
    locked: bool = Field(False, description="Whether the item's position is pinned")
    lock_type: LockType = Field(LockType.POSITION, description="Meaning of the pin")
    lock_cycle: int = Field(
        0, ge=0, le=3, description="Phase of the lock button cycle for the final item"
    )
    linked_with_previous: bool = Field(
        False, description="Item must always directly follow its predecessor"
    )

    def reset_position_flags(self) -> None:
        """Return the item to the unlocked, unlinked state of a fresh item."""

        self.locked = False
        self.lock_type = LockType.POSITION
        self.lock_cycle = 0
        self.linked_with_previous = False

    def position_flags(self) -> tuple[bool, LockType, int, bool]:
        """Snapshot of the flags the ordering engine mutates."""

        return (self.locked, self.lock_type, self.lock_cycle, self.linked_with_previous)

    def restore_position_flags(self, flags: tuple[bool, LockType, int, bool]) -> None:
        self.locked, self.lock_type, self.lock_cycle, self.linked_with_previous = flags


class Shot(PositionedItem):
    """Single ghosting movement called out to the player."""

    kind: Literal["shot"] = "shot"
    name: str = "New shot"


class Message(PositionedItem):
    """Spoken message interleaved between shots."""

    kind: Literal["message"] = "message"
    name: str = "New message"
    text: str = ""


Entry = Annotated[Union[Shot, Message], Field(discriminator="kind")]


class Pattern(PositionedItem):
    """Ordered collection of shots and messages."""

    kind: Literal["pattern"] = "pattern"
    name: str = "New pattern"
    entries: List[Entry] = Field(default_factory=list)

    @property
    def scope(self) -> str:
        return f"pattern:{self.id}"


class Workout(BaseModel):
    """Top-level container storing the ordered patterns of a session."""

    id: str = Field(default_factory=new_item_id)
    name: str = "Workout"
    patterns: List[Pattern] = Field(default_factory=list)

    def find_pattern(self, pattern_id: str) -> Pattern:
        """Return the pattern with ``pattern_id``, raising if it is unknown."""

        for pattern in self.patterns:
            if pattern.id == pattern_id:
                return pattern
        raise KeyError(f"Pattern {pattern_id!r} not found")
