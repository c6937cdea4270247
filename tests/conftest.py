import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from domain.models import LockType, Pattern, Shot, Workout  # noqa: E402
from sequencing.sequence import ItemSequence  # noqa: E402

SequenceFactory = Callable[..., ItemSequence]


def build_sequence(
    names: Iterable[str],
    *,
    locked: Iterable[str] = (),
    last: Optional[str] = None,
    linked: Iterable[str] = (),
) -> ItemSequence:
    pattern = Pattern(id="pat", name="Drills", entries=[Shot(id=name, name=name) for name in names])
    sequence = ItemSequence.for_pattern(pattern)
    for name in locked:
        item = sequence.get(name)
        item.locked = True
        item.lock_type = LockType.POSITION
        item.lock_cycle = 1
    if last is not None:
        item = sequence.get(last)
        item.locked = True
        item.lock_type = LockType.LAST
        item.lock_cycle = 3
    for name in linked:
        sequence.get(name).linked_with_previous = True
    return sequence


@pytest.fixture()
def make_sequence() -> SequenceFactory:
    return build_sequence


@pytest.fixture()
def example_workout() -> Workout:
    patterns = [
        Pattern(id=f"pat-{index}", name=f"Pattern {index}", entries=[Shot(id=f"shot-{index}")])
        for index in range(3)
    ]
    return Workout(id="workout", name="Ghosting", patterns=patterns)