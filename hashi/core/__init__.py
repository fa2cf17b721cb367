# hashi/core/__init__.py
"""
Core data structures and utilities for Hashiwokakero solver.
"""

from .errors import (
    HashiError, OutOfBounds, DuplicatePosition, UnknownIsland,
    UnnormalizedBridge, InvalidWeight, InvalidBridge, CrossingError,
    Contradiction
)
from .puzzle import Puzzle, Island
from .solution import Solution, Bridge, BridgeGlyph, SolutionMatrix, EMPTY_CELL
from .editor import add_bridge, ensure_one_bridge, ensure_two_bridges, toggle_bridge
from .validator import PuzzleValidator, ValidationResult
from .utils import (
    setup_logger, timer, memory_usage,
    PuzzleConverter, calculate_solution_stats
)

__all__ = [
    # Data structures
    'Puzzle', 'Island', 'Solution', 'Bridge', 'BridgeGlyph',
    'SolutionMatrix', 'EMPTY_CELL',

    # Errors
    'HashiError', 'OutOfBounds', 'DuplicatePosition', 'UnknownIsland',
    'UnnormalizedBridge', 'InvalidWeight', 'InvalidBridge', 'CrossingError',
    'Contradiction',

    # Editing
    'add_bridge', 'ensure_one_bridge', 'ensure_two_bridges', 'toggle_bridge',

    # Validation
    'PuzzleValidator', 'ValidationResult',

    # Utilities
    'setup_logger', 'timer', 'memory_usage',
    'PuzzleConverter', 'calculate_solution_stats'
]
