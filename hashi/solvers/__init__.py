"""
Solvers for Hashiwokakero puzzles.
"""

from .base_solver import BaseSolver, SolverConfig, SolverResult
from .analyzer import IslandMeta, DragonMeta, SolutionContext, analyze
from .tactics import Tactic, TacticQuery, TACTICS, TACTICS_BY_NAME
from .deductive_solver import (
    DeductiveSolver, StepResult, run_tactics,
    solve, solve_from, solve_step, iter_steps
)

__all__ = [
    # Base classes
    'BaseSolver',
    'SolverConfig',
    'SolverResult',

    # Analysis
    'IslandMeta',
    'DragonMeta',
    'SolutionContext',
    'analyze',

    # Tactics
    'Tactic',
    'TacticQuery',
    'TACTICS',
    'TACTICS_BY_NAME',

    # Deductive solving
    'DeductiveSolver',
    'StepResult',
    'run_tactics',
    'solve',
    'solve_from',
    'solve_step',
    'iter_steps',
]


# Solver registry for easy access
SOLVER_REGISTRY = {
    'deductive': DeductiveSolver,
}


def get_solver(name: str, config: SolverConfig = None) -> BaseSolver:
    """
    Get a solver by name.

    Args:
        name: Solver name (deductive)
        config: Optional solver configuration

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name is not recognized
    """
    solver_class = SOLVER_REGISTRY.get(name.lower())
    if not solver_class:
        raise ValueError(f"Unknown solver: {name}. Available: {list(SOLVER_REGISTRY.keys())}")
    return solver_class(config)
