"""
Base solver class for Hashiwokakero puzzles.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import time

from ..config import MAX_STEPS, VALIDATE_STEPS
from ..core.errors import HashiError
from ..core.puzzle import Puzzle
from ..core.solution import Solution
from ..core.utils import memory_usage, setup_logger
from ..core.validator import PuzzleValidator


@dataclass
class SolverConfig:
    """Configuration for puzzle solvers"""
    verbose: bool = False
    log_file: Optional[Path] = None
    validate_steps: bool = VALIDATE_STEPS  # re-check the solution after every tactic
    max_steps: Optional[int] = MAX_STEPS


@dataclass
class SolverResult:
    """Result from puzzle solver"""
    success: bool
    solution: Optional[Solution] = None
    solve_time: float = 0.0
    iterations: int = 0
    memory_used: float = 0.0  # MB
    message: str = ""

    # Additional information
    steps: List[Any] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self):
        status = "Success" if self.success else "Failed"
        return f"SolverResult({status}, time={self.solve_time:.2f}s, iterations={self.iterations})"


class BaseSolver(ABC):
    """Abstract base class for Hashiwokakero solvers"""

    def __init__(self, config: Optional[SolverConfig] = None):
        """Initialize solver with configuration."""
        self.config = config or SolverConfig()
        self.logger = setup_logger(
            self.__class__.__name__,
            self.config.log_file,
            "DEBUG" if self.config.verbose else "INFO"
        )

        # Callbacks for monitoring progress
        self._progress_callbacks: List[Callable] = []

        # Statistics tracking
        self._start_time: Optional[float] = None
        self._iterations: int = 0

    def add_progress_callback(self, callback: Callable):
        """Add a callback function to monitor solving progress."""
        self._progress_callbacks.append(callback)

    def solve(self, puzzle: Puzzle, solution: Optional[Solution] = None) -> SolverResult:
        """Solve the puzzle, optionally continuing from a partial solution."""
        self.logger.info(f"Starting {self.__class__.__name__} solver")
        self.logger.info(f"Puzzle: {puzzle!r}")

        # Validate input puzzle
        validation = PuzzleValidator.validate_puzzle_structure(puzzle)
        if not validation:
            return SolverResult(
                success=False,
                message=f"Invalid puzzle: {'; '.join(validation.errors)}"
            )
        for warning in validation.warnings:
            self.logger.warning(warning)

        self._start_time = time.time()
        self._iterations = 0
        initial_memory = memory_usage()

        try:
            result = self._solve(puzzle, solution if solution is not None else Solution())
        except HashiError as e:
            self.logger.error(f"Error during solving: {e}", exc_info=True)
            return SolverResult(
                success=False,
                message=f"Solver error: {e}",
                solve_time=time.time() - self._start_time,
                iterations=self._iterations
            )

        # Validate solution if found
        if result.success and result.solution is not None:
            validation = PuzzleValidator.validate_solution(puzzle, result.solution)
            if not validation:
                result.success = False
                result.message = f"Invalid solution: {'; '.join(validation.errors)}"

        result.solve_time = time.time() - self._start_time
        result.memory_used = memory_usage() - initial_memory
        result.iterations = self._iterations

        if result.success:
            self.logger.info(f"Solved in {result.solve_time:.2f}s with {result.iterations} iterations")
        else:
            self.logger.warning(f"Failed to solve: {result.message}")

        return result

    @abstractmethod
    def _solve(self, puzzle: Puzzle, solution: Solution) -> SolverResult:
        """Implement the specific solving algorithm."""

    def _increment_iteration(self):
        self._iterations += 1

    def _call_progress_callbacks(self, current_solution: Optional[Solution] = None,
                                 stats: Optional[Dict[str, Any]] = None):
        """Call all registered progress callbacks"""
        for callback in self._progress_callbacks:
            callback(self._iterations, current_solution, stats or {})
