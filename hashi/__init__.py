"""
Deductive solver for Hashiwokakero (Bridges) puzzles.
"""

from .core import (
    Puzzle, Island, Solution, Bridge,
    add_bridge, ensure_one_bridge, ensure_two_bridges, toggle_bridge,
    HashiError, OutOfBounds, DuplicatePosition, UnknownIsland,
    UnnormalizedBridge, InvalidWeight, InvalidBridge, CrossingError,
    Contradiction
)
from .solvers import (
    SolverConfig, SolverResult, DeductiveSolver, StepResult,
    analyze, solve, solve_from, solve_step, iter_steps, get_solver
)

__version__ = "0.1.0"

__all__ = [
    'Puzzle', 'Island', 'Solution', 'Bridge',
    'add_bridge', 'ensure_one_bridge', 'ensure_two_bridges', 'toggle_bridge',
    'HashiError', 'OutOfBounds', 'DuplicatePosition', 'UnknownIsland',
    'UnnormalizedBridge', 'InvalidWeight', 'InvalidBridge', 'CrossingError',
    'Contradiction',
    'SolverConfig', 'SolverResult', 'DeductiveSolver', 'StepResult',
    'analyze', 'solve', 'solve_from', 'solve_step', 'iter_steps', 'get_solver',
]
