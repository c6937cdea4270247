import pytest

from domain.models import LockType, Shot
from sequencing.editor import EditorConfig, MutationBatch, SequenceEditor
from sequencing.errors import InvariantViolation, OrderingError
from sequencing.lock_cycle import LockPhase


def test_move_records_history_and_undo_redo(make_sequence):
    sequence = make_sequence("ABC")
    editor = SequenceEditor(sequence)

    assert editor.move(sequence.get("C"), "up")
    assert sequence.ids() == ["A", "C", "B"]
    assert len(editor.history) == 1
    mutation = editor.history[0]
    assert mutation.mutation_id == "mutation_1"
    assert mutation.label == "move up"
    assert mutation.previous.ids == ["A", "B", "C"]
    assert mutation.updated.ids == ["A", "C", "B"]

    editor.undo()
    assert sequence.ids() == ["A", "B", "C"]
    assert len(editor.redo_stack) == 1

    editor.redo()
    assert sequence.ids() == ["A", "C", "B"]
    assert not editor.redo_stack


def test_blocked_move_records_nothing(make_sequence):
    sequence = make_sequence("ABC", locked="B")
    editor = SequenceEditor(sequence)

    assert not editor.move(sequence.get("C"), "up")
    assert editor.history == []
    assert editor.undo_stack == []


def test_undo_restores_lock_flags(make_sequence):
    sequence = make_sequence("AB")
    editor = SequenceEditor(sequence)
    item = sequence.get("B")

    result = editor.toggle_lock(item)
    assert result.phase is LockPhase.LOCKED_POSITION

    editor.undo()
    assert item.locked is False
    assert item.lock_cycle == 0


def test_delete_and_undo_brings_item_back(make_sequence):
    sequence = make_sequence("ABC", linked="C")
    editor = SequenceEditor(sequence)

    editor.delete(sequence.get("B"))
    assert sequence.ids() == ["A", "C"]

    editor.undo()
    assert sequence.ids() == ["A", "B", "C"]
    assert sequence.get("C").linked_with_previous is True


def test_add_and_clone_respect_last_lock(make_sequence):
    sequence = make_sequence("ABC", last="C")
    editor = SequenceEditor(sequence)

    index = editor.add(Shot(id="X"))
    clone = editor.clone(sequence.get("A"))

    assert index == 2
    assert sequence.ids() == ["A", clone.id, "B", "X", "C"]
    assert sequence.get("C").lock_type is LockType.LAST
    assert [mutation.label for mutation in editor.history] == ["add", "clone"]


def test_batch_groups_actions_for_undo(make_sequence):
    sequence = make_sequence("ABCD")
    editor = SequenceEditor(sequence)

    with editor.batch("reshuffle"):
        editor.move(sequence.get("D"), "up")
        editor.move(sequence.get("D"), "up")
        editor.toggle_link(sequence.get("B"))

    assert len(editor.history) == 3
    assert len(editor.undo_stack) == 1
    entry = editor.undo_stack[-1]
    assert isinstance(entry, MutationBatch)
    assert entry.label == "reshuffle"

    undone = editor.undo()
    assert [mutation.label for mutation in undone] == ["toggle link", "move up", "move up"]
    assert sequence.ids() == ["A", "B", "C", "D"]
    assert sequence.get("B").linked_with_previous is False


def test_batches_do_not_nest(make_sequence):
    editor = SequenceEditor(make_sequence("AB"))

    with pytest.raises(RuntimeError):
        with editor.batch():
            with editor.batch():
                pass


def test_history_limit_trims_oldest_entries(make_sequence):
    sequence = make_sequence("ABCD")
    editor = SequenceEditor(sequence, config=EditorConfig(history_limit=2))

    for _ in range(3):
        editor.move(sequence.get("A"), "down")

    assert len(editor.history) == 3
    assert len(editor.undo_stack) == 2
    assert [mutation.mutation_id for mutation in editor.undo_stack] == ["mutation_2", "mutation_3"]


def test_relocate_moves_group_in_one_step(make_sequence):
    sequence = make_sequence("ABCD", linked="D")
    editor = SequenceEditor(sequence)

    editor.relocate(sequence.get("D"), sequence.get("A"), "up")

    assert sequence.ids() == ["C", "D", "A", "B"]
    assert editor.history[-1].label == "relocate"


def test_relocate_across_pin_fails_without_recording(make_sequence):
    sequence = make_sequence("ABCD", locked="B")
    editor = SequenceEditor(sequence)

    with pytest.raises(OrderingError):
        editor.relocate(sequence.get("D"), sequence.get("A"), "up")
    assert sequence.ids() == ["A", "B", "C", "D"]
    assert editor.history == []


def test_editor_normalizes_loaded_sequence(make_sequence):
    sequence = make_sequence("ABC", linked="A", last="B")

    SequenceEditor(sequence)

    assert sequence.get("A").linked_with_previous is False
    assert sequence.get("B").lock_type is LockType.POSITION


def test_negative_history_limit_is_rejected(make_sequence):
    with pytest.raises(ValueError):
        SequenceEditor(make_sequence("A"), config=EditorConfig(history_limit=-1))


def test_failed_invariant_check_rolls_the_edit_back(make_sequence):
    sequence = make_sequence("ABC")
    editor = SequenceEditor(sequence)
    first = sequence.get("A")
    sequence.items.append(first)
    before = list(sequence)

    with pytest.raises(InvariantViolation):
        editor.move(sequence.get("B"), "down")

    assert all(current is original for current, original in zip(sequence, before))
    assert sequence.ids() == ["A", "B", "C", "A"]
    assert editor.history == []
    assert editor.undo_stack == []
