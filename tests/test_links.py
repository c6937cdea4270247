import pytest

from sequencing.errors import OrderingError
from sequencing.links import can_link, toggle_link


def test_first_item_cannot_link(make_sequence):
    sequence = make_sequence("AB")

    assert not can_link(sequence, sequence.get("A"))
    assert can_link(sequence, sequence.get("B"))
    with pytest.raises(OrderingError):
        toggle_link(sequence, sequence.get("A"))


def test_link_merges_and_unlink_splits_groups(make_sequence):
    sequence = make_sequence("ABC")

    linked = toggle_link(sequence, sequence.get("C"))
    assert linked.linked is True
    assert [item.id for item in linked.group] == ["B", "C"]
    assert [item.id for item in linked.previous_group] == ["B", "C"]

    unlinked = toggle_link(sequence, sequence.get("C"))
    assert unlinked.linked is False
    assert [item.id for item in unlinked.group] == ["C"]
    assert [item.id for item in unlinked.previous_group] == ["B"]


def test_linking_onto_an_existing_chain(make_sequence):
    sequence = make_sequence("ABCD", linked="B")

    result = toggle_link(sequence, sequence.get("C"))

    assert [item.id for item in result.group] == ["A", "B", "C"]


def test_linking_two_locked_groups_is_refused(make_sequence):
    sequence = make_sequence("ABCD", locked="BC")
    item = sequence.get("C")

    assert not can_link(sequence, item)
    with pytest.raises(OrderingError):
        toggle_link(sequence, item)
    assert item.linked_with_previous is False
    assert can_link(sequence, sequence.get("D"))


def test_unlinking_locked_members_is_allowed(make_sequence):
    sequence = make_sequence("ABC", locked="BC", linked="C")

    assert can_link(sequence, sequence.get("C"))
    assert toggle_link(sequence, sequence.get("C")).linked is False
