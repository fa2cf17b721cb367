"""
Deductive solver: applies the tactic catalog until nothing more follows.

There is no guessing. When the tactics run out the solver stops and hands
back the partial solution, so harder puzzles may stay unsolved.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from ..core.errors import Contradiction
from ..core.puzzle import Puzzle
from ..core.solution import Solution
from .analyzer import SolutionContext, analyze
from .base_solver import BaseSolver, SolverConfig, SolverResult
from .tactics import TACTICS, Tactic, TacticQuery

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """One successful tactic application"""
    solution: Solution
    tactic: Tactic
    index: int  # island the tactic was applied to

    @property
    def label(self) -> str:
        return self.tactic.label


def run_tactics(puzzle: Puzzle, solution: Solution, context: SolutionContext,
                validate: bool = True) -> Optional[StepResult]:
    """
    Try every tactic on every island, in catalog order then island order.

    Returns the first application that changed the solution, or None at a
    fixpoint. The input solution is never modified.
    """
    for tactic in TACTICS:
        for meta in context.metas:
            query = TacticQuery(puzzle, solution, context, meta.index, meta)
            if not tactic.is_applicable(query):
                continue
            query = replace(query, solution=solution.clone())
            if not tactic.apply(query):
                continue
            if validate:
                _verify(puzzle, query.solution, tactic)
            return StepResult(query.solution, tactic, meta.index)
    return None


def _verify(puzzle: Puzzle, solution: Solution, tactic: Tactic):
    """Fail fast when a tactic produced an illegal or overfilled solution"""
    solution.check(puzzle)
    weights = solution.island_weights(puzzle)
    for index, island in enumerate(puzzle.islands):
        if weights[index] > island.required_bridges:
            raise Contradiction(
                f"Tactic {tactic.name} overfilled island {index}: "
                f"{weights[index]} > {island.required_bridges}"
            )


def solve_step(puzzle: Puzzle, solution: Solution,
               config: Optional[SolverConfig] = None) -> Optional[StepResult]:
    """
    Run the tactic engine once.

    Raises:
        HashiError: If the solution is not legal
        Contradiction: If the solution can no longer be completed
    """
    config = config or SolverConfig()
    context = analyze(puzzle, solution)

    stranded = context.stranded()
    if stranded:
        raise Contradiction(f"Islands {stranded} need more bridges but have no open neighbours")

    step = run_tactics(puzzle, solution, context, validate=config.validate_steps)
    if step is not None:
        logger.debug(f"Island {step.index}: {step.label}")
    return step


def iter_steps(puzzle: Puzzle, solution: Solution,
               config: Optional[SolverConfig] = None) -> Iterator[StepResult]:
    """Yield successive solving steps until a fixpoint (or ``max_steps``)"""
    config = config or SolverConfig()
    current = solution
    taken = 0
    while config.max_steps is None or taken < config.max_steps:
        step = solve_step(puzzle, current, config)
        if step is None:
            return
        yield step
        current = step.solution
        taken += 1


def solve_from(puzzle: Puzzle, solution: Solution,
               config: Optional[SolverConfig] = None) -> Solution:
    """Solve as far as deduction goes, starting from a partial solution"""
    current = solution
    try:
        for step in iter_steps(puzzle, solution, config):
            current = step.solution
    except Contradiction as e:
        logger.warning(f"Stopped at a contradiction: {e}")
    return current


def solve(puzzle: Puzzle, config: Optional[SolverConfig] = None) -> Solution:
    """Solve as far as deduction goes, starting from the empty solution"""
    return solve_from(puzzle, Solution(), config)


class DeductiveSolver(BaseSolver):
    """Rule-based solver object with progress reporting and tactic statistics"""

    def _solve(self, puzzle: Puzzle, solution: Solution) -> SolverResult:
        current = solution
        steps = []
        rules_used = defaultdict(int)
        message = ""

        try:
            for step in iter_steps(puzzle, solution, self.config):
                self._increment_iteration()
                current = step.solution
                steps.append(step)
                rules_used[step.tactic.name] += 1
                self.logger.debug(f"Step {len(steps)}: island {step.index}: {step.label}")
                self._call_progress_callbacks(current, {
                    'phase': 'solving',
                    'tactic': step.tactic.name,
                    'rules_used': dict(rules_used)
                })
        except Contradiction as e:
            message = f"Stopped at a contradiction: {e}"

        success = current.is_correct(puzzle)
        if not message:
            if success:
                message = "Puzzle solved successfully"
            elif self.config.max_steps is not None and len(steps) >= self.config.max_steps:
                message = f"Step limit of {self.config.max_steps} reached"
            else:
                message = f"Stalled after {len(steps)} steps: no tactic applies"

        return SolverResult(
            success=success,
            solution=current,
            steps=steps,
            message=message,
            stats={'rules_used': dict(rules_used), 'total_steps': len(steps)}
        )
