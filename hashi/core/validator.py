"""
Validator for Hashiwokakero puzzle constraints.

Unlike ``Solution.validate``, which stops at the first violation, the checks
here collect every problem into a ``ValidationResult`` for reporting.
"""

from typing import List

import networkx as nx

from ..config import MAX_ISLAND_VALUE
from .puzzle import Puzzle
from .solution import Solution


class ValidationResult:
    """Result of puzzle validation"""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def extend(self, other: 'ValidationResult'):
        for error in other.errors:
            self.add_error(error)
        self.warnings.extend(other.warnings)

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        status = "Valid" if self.is_valid else "Invalid"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


class PuzzleValidator:
    """Validates Hashiwokakero puzzle constraints"""

    @staticmethod
    def validate_puzzle_structure(puzzle: Puzzle) -> ValidationResult:
        """Validate basic puzzle structure"""
        result = ValidationResult()

        # Check dimensions
        if puzzle.width <= 0 or puzzle.height <= 0:
            result.add_error("Invalid puzzle dimensions")

        # Check if puzzle has islands
        if not puzzle.islands:
            result.add_error("Puzzle has no islands")

        for index, island in enumerate(puzzle.islands):
            if not (1 <= island.required_bridges <= MAX_ISLAND_VALUE):
                result.add_error(
                    f"Island {index} at ({island.row}, {island.col}) has invalid "
                    f"bridge requirement: {island.required_bridges}"
                )

        # Handshaking lemma: every bridge adds to two islands
        if puzzle.total_required % 2 != 0:
            result.add_warning(
                f"Total bridge requirements ({puzzle.total_required}) is odd - impossible to solve"
            )

        return result

    @staticmethod
    def validate_partial_solution(puzzle: Puzzle, solution: Solution) -> ValidationResult:
        """Validate a partial solution (for intermediate states)"""
        result = ValidationResult()

        ok, reason = solution.validate(puzzle)
        if not ok:
            result.add_error(reason)
            return result

        weights = solution.island_weights(puzzle)
        for index, island in enumerate(puzzle.islands):
            if weights[index] > island.required_bridges:
                result.add_error(
                    f"Island {index} exceeds bridge requirement: "
                    f"{weights[index]} > {island.required_bridges}"
                )
            elif weights[index] < island.required_bridges:
                result.add_warning(
                    f"Island {index} is incomplete: {weights[index]} < {island.required_bridges}"
                )

        return result

    @staticmethod
    def validate_solution(puzzle: Puzzle, solution: Solution) -> ValidationResult:
        """Validate if a solution is complete and correct"""
        result = PuzzleValidator.validate_puzzle_structure(puzzle)

        ok, reason = solution.validate(puzzle)
        if not ok:
            result.add_error(reason)
            return result

        # Check if all islands have correct number of bridges
        weights = solution.island_weights(puzzle)
        for index, island in enumerate(puzzle.islands):
            if weights[index] != island.required_bridges:
                result.add_error(
                    f"Island {index} has {weights[index]} bridges, requires {island.required_bridges}"
                )

        # Check connectivity
        if puzzle.islands:
            components = nx.number_connected_components(solution.to_graph(puzzle))
            if components != 1:
                result.add_error(f"Not all islands are connected ({components} components)")

        return result

    @staticmethod
    def get_puzzle_statistics(puzzle: Puzzle) -> dict:
        """Get various statistics about the puzzle"""
        islands = puzzle.islands
        stats = {
            'width': puzzle.width,
            'height': puzzle.height,
            'num_islands': len(islands),
            'total_bridge_requirements': puzzle.total_required,
            'avg_bridges_per_island': puzzle.total_required / len(islands) if islands else 0,
            'density': len(islands) / (puzzle.width * puzzle.height),
        }

        # Island degree distribution
        degree_dist = {}
        for island in islands:
            deg = island.required_bridges
            degree_dist[deg] = degree_dist.get(deg, 0) + 1
        stats['degree_distribution'] = degree_dist

        return stats
