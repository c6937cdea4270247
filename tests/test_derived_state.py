from sequencing.derived_state import recompute_derived_state, states_by_id
from sequencing.groups import GroupLock
from sequencing.lock_cycle import LockPhase


def test_walls_disable_neighbouring_moves(make_sequence):
    sequence = make_sequence("ABCD", locked="B")

    states = states_by_id(recompute_derived_state(sequence))

    assert [states[name].position for name in "ABCD"] == [1, 2, 3, 4]
    assert (states["A"].can_move_up, states["A"].can_move_down) == (False, False)
    assert (states["B"].can_move_up, states["B"].can_move_down) == (False, False)
    assert (states["C"].can_move_up, states["C"].can_move_down) == (False, True)
    assert (states["D"].can_move_up, states["D"].can_move_down) == (True, False)
    assert states["B"].group_lock is GroupLock.POSITION
    assert states["B"].lock_phase is LockPhase.LOCKED_POSITION
    assert states["D"].is_last
    assert not states["A"].can_link
    assert states["B"].can_link


def test_linked_members_share_group_state(make_sequence):
    sequence = make_sequence("ABC", linked="C")

    states = states_by_id(recompute_derived_state(sequence))

    for name in "BC":
        assert states[name].group_anchor_id == "B"
        assert states[name].can_move_up is True
        assert states[name].can_move_down is False
    assert states["C"].linked
    assert not states["B"].linked


def test_unlocking_reopens_distant_moves(make_sequence):
    sequence = make_sequence("ABC", locked="B")
    before = states_by_id(recompute_derived_state(sequence))

    sequence.get("B").locked = False
    after = states_by_id(recompute_derived_state(sequence))

    assert not before["A"].can_move_down
    assert after["A"].can_move_down
    assert after["C"].can_move_up


def test_last_lock_styles_whole_group(make_sequence):
    sequence = make_sequence("ABC", last="C", linked="C")

    states = states_by_id(recompute_derived_state(sequence))

    assert states["B"].group_lock is GroupLock.LAST
    assert states["C"].lock_phase is LockPhase.LOCKED_LAST
    assert states["A"].can_move_down is False


def test_lock_and_link_buttons_follow_single_lock_rule(make_sequence):
    sequence = make_sequence("ABCD", locked="B", linked="C")
    sequence.get("D").locked = True

    states = states_by_id(recompute_derived_state(sequence))

    assert not states["C"].can_lock
    assert states["B"].can_lock
    assert not states["D"].can_link
    assert states["C"].can_link
