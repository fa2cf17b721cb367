import pytest

from hashi.core import (
    Bridge, InvalidBridge, InvalidWeight, Solution,
    add_bridge, ensure_one_bridge, ensure_two_bridges, toggle_bridge
)


def test_ensure_one_bridge_adds_only_once():
    solution = Solution()
    assert ensure_one_bridge(solution, 3, 1)
    assert solution.bridges == [Bridge(1, 3, 1)]
    assert not ensure_one_bridge(solution, 1, 3)
    assert solution.bridges == [Bridge(1, 3, 1)]


def test_ensure_one_bridge_keeps_a_double():
    solution = Solution([Bridge(0, 1, 2)])
    assert not ensure_one_bridge(solution, 0, 1)
    assert solution.weight_between(0, 1) == 2


def test_ensure_two_bridges_adds_or_strengthens():
    solution = Solution([Bridge(0, 1, 1)])
    assert ensure_two_bridges(solution, 1, 0)
    assert ensure_two_bridges(solution, 2, 0)
    assert solution.bridges == [Bridge(0, 1, 2), Bridge(0, 2, 2)]
    assert not ensure_two_bridges(solution, 0, 2)


def test_strengthening_keeps_list_position():
    solution = Solution([Bridge(0, 1, 1), Bridge(1, 2, 1)])
    add_bridge(solution, 0, 1)
    assert solution.bridges == [Bridge(0, 1, 2), Bridge(1, 2, 1)]


def test_add_bridge_rejects_a_third_unit():
    solution = Solution()
    add_bridge(solution, 0, 1)
    add_bridge(solution, 0, 1)
    assert solution.weight_between(0, 1) == 2
    with pytest.raises(InvalidWeight):
        add_bridge(solution, 0, 1)


def test_toggle_cycles_none_single_double_none():
    solution = Solution()
    toggle_bridge(solution, 2, 5)
    assert solution.weight_between(2, 5) == 1
    toggle_bridge(solution, 2, 5)
    assert solution.weight_between(2, 5) == 2
    toggle_bridge(solution, 5, 2)
    assert solution.bridges == []


def test_self_bridge_is_invalid():
    with pytest.raises(InvalidBridge):
        add_bridge(Solution(), 4, 4)


def test_edits_do_not_touch_the_original():
    original = Solution([Bridge(0, 1, 1)])
    copy = original.clone()
    add_bridge(copy, 0, 1)
    assert original.bridges == [Bridge(0, 1, 1)]
    assert copy.bridges == [Bridge(0, 1, 2)]


def test_emphasis_marks_new_doubles():
    solution = Solution()
    ensure_two_bridges(solution, 0, 1)
    assert solution.bridges[0].emphasis == 2
    ensure_one_bridge(solution, 1, 2)
    assert solution.bridges[1].emphasis == 1
