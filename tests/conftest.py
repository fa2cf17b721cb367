import pytest

from hashi.core import Bridge, Puzzle, Solution
from hashi.solvers import TACTICS_BY_NAME, TacticQuery, analyze


GOLDEN_ROWS = [
    ".................",
    "..2....4....3....",
    "...............1.",
    "............2....",
    ".......3.......3.",
    ".................",
]

GOLDEN_EMPTY = """\
·················
··2····4····3····
···············1·
············2····
·······3·······3·
·················
"""

GOLDEN_SOLVED = """\
·················
··2════4────3····
·······│····║··1·
·······│····2··│·
·······3═══════3·
·················
"""

GOLDEN_BRIDGES = [
    Bridge(0, 1, 2),
    Bridge(3, 6, 1),
    Bridge(2, 4, 2),
    Bridge(1, 2, 1),
    Bridge(1, 5, 1),
    Bridge(5, 6, 2),
]


@pytest.fixture
def golden_puzzle():
    return Puzzle.decode("".join(GOLDEN_ROWS), 17, 6)


@pytest.fixture
def golden_solution():
    return Solution(GOLDEN_BRIDGES)


@pytest.fixture
def square_puzzle():
    # 1 . 1
    # . . .
    # 2 . 2
    return Puzzle.decode("1.1 ... 2.2", 3, 3)


def apply_tactic(name, puzzle, solution, index):
    """Run one tactic on one island the way the solver does, return the new solution"""
    context = analyze(puzzle, solution)
    query = TacticQuery(puzzle, solution.clone(), context, index, context.metas[index])
    tactic = TACTICS_BY_NAME[name]
    assert tactic.is_applicable(query), f"{name} should apply to island {index}"
    assert tactic.apply(query), f"{name} should make progress on island {index}"
    return query.solution
