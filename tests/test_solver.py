import pytest

from hashi.core import Bridge, Puzzle, Solution, UnknownIsland, UnnormalizedBridge
from hashi.solvers import (
    DeductiveSolver, SolverConfig, get_solver, iter_steps, solve, solve_from, solve_step
)

from conftest import GOLDEN_BRIDGES, GOLDEN_SOLVED


LIBRARY_PUZZLE = """
    2.4.3.1.2..1.
    .........3..1
    ....2.3.2....
    2.3..2...3.1.
    ....2.5.3.4..
    1.5..2.1...2.
    ......2.2.4.2
    ..4.4..3...3.
    .............
    2.2.3...3.2.3
    .....2.4.4.3.
    ..1.2........
    3....3.1.2..2
"""


def test_golden_solve(golden_puzzle):
    solution = solve(golden_puzzle)
    assert solution.is_correct(golden_puzzle)
    assert solution.bridges == GOLDEN_BRIDGES
    assert solution.render(golden_puzzle) == GOLDEN_SOLVED


def test_golden_step_sequence(golden_puzzle):
    steps = list(iter_steps(golden_puzzle, Solution()))
    assert len(steps) == 6
    assert all(step.tactic.name == 'forced_completion' for step in steps)
    assert [step.index for step in steps] == [0, 3, 4, 2, 1, 5]
    assert steps[-1].solution.bridges == GOLDEN_BRIDGES
    assert steps[0].label == "Add remaining bridges for a node with one active neighbour"


def test_steps_only_add_weight(golden_puzzle):
    previous = Solution()
    for step in iter_steps(golden_puzzle, Solution()):
        assert step.solution.total_weight() > previous.total_weight()
        for bridge in previous.bridges:
            assert step.solution.weight_between(*bridge.pair) >= bridge.count
        assert step.solution.is_legal(golden_puzzle)
        previous = step.solution


def test_solve_step_does_not_modify_its_input(golden_puzzle):
    solution = Solution([Bridge(0, 1, 2)])
    step = solve_step(golden_puzzle, solution)
    assert step is not None
    assert solution.bridges == [Bridge(0, 1, 2)]
    assert step.solution.bridges == [Bridge(0, 1, 2), Bridge(3, 6, 1)]


def test_solve_step_at_fixpoint(golden_puzzle, golden_solution):
    assert solve_step(golden_puzzle, golden_solution) is None


def test_solve_from_is_idempotent(golden_puzzle):
    once = solve_from(golden_puzzle, Solution([Bridge(0, 1, 2)]))
    assert solve_from(golden_puzzle, once) == once


def test_solve_from_partial(golden_puzzle):
    partial = Solution(GOLDEN_BRIDGES[:2])
    assert solve_from(golden_puzzle, partial).bridges == GOLDEN_BRIDGES


def test_malformed_solution_raises(golden_puzzle):
    with pytest.raises(UnknownIsland):
        solve_from(golden_puzzle, Solution([Bridge(0, 12, 1)]))


def test_max_steps(golden_puzzle):
    solution = solve(golden_puzzle, SolverConfig(max_steps=2))
    assert solution.bridges == [Bridge(0, 1, 2), Bridge(3, 6, 1)]
    assert solution.is_legal(golden_puzzle)
    assert not solution.is_correct(golden_puzzle)


def test_library_puzzle_stays_legal():
    puzzle = Puzzle.decode(LIBRARY_PUZZLE, 13, 13)
    solution = solve(puzzle)
    assert solution.is_legal(puzzle)
    assert solution.total_weight() > 0
    assert solve_from(puzzle, solution) == solution
    weights = solution.island_weights(puzzle)
    assert all(w <= island.required_bridges for w, island in zip(weights, puzzle.islands))


def test_stall_returns_partial_solution():
    # Singles all round are forced, the doubles can go either way
    puzzle = Puzzle.decode("3.3 ... 3.3", 3, 3)
    solution = solve(puzzle)
    assert set(solution.bridges) == {Bridge(0, 1, 1), Bridge(0, 2, 1), Bridge(1, 3, 1), Bridge(2, 3, 1)}
    assert solution.is_legal(puzzle)
    assert not solution.is_correct(puzzle)
    assert solve_step(puzzle, solution) is None


def test_deductive_solver_result(golden_puzzle):
    result = DeductiveSolver().solve(golden_puzzle)
    assert result.success
    assert result.solution.is_correct(golden_puzzle)
    assert result.iterations == 6
    assert len(result.steps) == 6
    assert result.stats['rules_used'] == {'forced_completion': 6}
    assert result.message == "Puzzle solved successfully"


def test_deductive_solver_callbacks(golden_puzzle):
    seen = []
    solver = DeductiveSolver(SolverConfig(verbose=True))
    solver.add_progress_callback(lambda i, solution, stats: seen.append((i, stats['tactic'])))
    solver.solve(golden_puzzle)
    assert [i for i, _ in seen] == [1, 2, 3, 4, 5, 6]
    assert {tactic for _, tactic in seen} == {'forced_completion'}


def test_deductive_solver_stall():
    result = get_solver('deductive').solve(Puzzle.decode("3.3 ... 3.3", 3, 3))
    assert not result.success
    assert result.solution.total_weight() == 4
    assert result.stats['rules_used'] == {'exact_coverage_3_2': 3}
    assert result.message == "Stalled after 3 steps: no tactic applies"


def test_deductive_solver_contradiction():
    result = DeductiveSolver().solve(Puzzle.decode("2.1", 3, 1))
    assert not result.success
    assert result.message.startswith("Stopped at a contradiction")


def test_deductive_solver_rejects_empty_puzzle():
    result = DeductiveSolver().solve(Puzzle(3, 3))
    assert not result.success
    assert "no islands" in result.message


def test_deductive_solver_continues_from_partial(golden_puzzle):
    result = DeductiveSolver().solve(golden_puzzle, Solution(GOLDEN_BRIDGES[:4]))
    assert result.success
    assert result.iterations == 2


def test_unknown_solver():
    with pytest.raises(ValueError):
        get_solver('ilp')


def test_unvalidated_run_still_rejects_unnormalized_input(golden_puzzle):
    with pytest.raises(UnnormalizedBridge):
        solve_from(golden_puzzle, Solution([Bridge(1, 0, 2)]), SolverConfig(validate_steps=False))


def test_deductive_solver_reports_step_limit(golden_puzzle):
    result = DeductiveSolver(SolverConfig(max_steps=2)).solve(golden_puzzle)
    assert not result.success
    assert result.iterations == 2
    assert result.message == "Step limit of 2 reached"
