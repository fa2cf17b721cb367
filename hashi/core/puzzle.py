"""
Core data structure for Hashiwokakero puzzles.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .errors import DuplicatePosition, OutOfBounds


@dataclass(frozen=True)
class Island:
    """Represents an island in the puzzle"""
    row: int
    col: int
    required_bridges: int

    def __repr__(self):
        return f"Island({self.row}, {self.col}, bridges={self.required_bridges})"


class Puzzle:
    """Static Hashiwokakero board: dimensions plus the island list.

    Islands are identified by their index in ``islands``. A puzzle is never
    modified after construction; solutions are kept separately.
    """

    def __init__(self, width: int, height: int, islands: Optional[Iterable[Island]] = None):
        """
        Initialize a Hashiwokakero puzzle.

        Args:
            width: Width of the puzzle grid
            height: Height of the puzzle grid
            islands: Islands of the puzzle, in index order

        Raises:
            OutOfBounds: If an island lies outside the grid
            DuplicatePosition: If two islands share a cell
        """
        self._width = width
        self._height = height
        self._islands: Tuple[Island, ...] = tuple(islands or ())
        self._island_map: Dict[Tuple[int, int], int] = {}

        for index, island in enumerate(self._islands):
            if not (0 <= island.row < height and 0 <= island.col < width):
                raise OutOfBounds(
                    f"Island {index} at ({island.row}, {island.col}) is outside "
                    f"the {width}x{height} grid"
                )
            pos = (island.row, island.col)
            if pos in self._island_map:
                raise DuplicatePosition(
                    f"Islands {self._island_map[pos]} and {index} share position {pos}"
                )
            self._island_map[pos] = index

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def islands(self) -> Tuple[Island, ...]:
        return self._islands

    def island_at(self, row: int, col: int) -> Optional[int]:
        """Index of the island at a cell, or None"""
        return self._island_map.get((row, col))

    @classmethod
    def decode(cls, text: str, width: int, height: int) -> 'Puzzle':
        """
        Build a puzzle from its compact text form.

        All whitespace is dropped, then the remaining characters are read in
        row-major order. Digits 1-8 are islands of that value, any other
        character is an empty cell.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Puzzle dimensions must be positive, got {width}x{height}")
        data = "".join(text.split())
        islands: List[Island] = []
        for i, char in enumerate(data):
            if '1' <= char <= '8':
                islands.append(Island(i // width, i % width, int(char)))
        return cls(width, height, islands)

    def as_matrix(self) -> np.ndarray:
        """Grid of island indices, -1 where a cell holds no island"""
        matrix = np.full((self.height, self.width), -1, dtype=int)
        for index, island in enumerate(self.islands):
            matrix[island.row, island.col] = index
        return matrix

    def render_empty(self) -> str:
        """Text grid of the islands without any bridges"""
        from .solution import Solution
        return Solution().render(self)

    @property
    def total_required(self) -> int:
        return sum(island.required_bridges for island in self.islands)

    def to_dict(self) -> dict:
        """Convert puzzle to dictionary for serialization"""
        return {
            'width': self.width,
            'height': self.height,
            'islands': [
                {
                    'row': i.row,
                    'col': i.col,
                    'required_bridges': i.required_bridges
                }
                for i in self.islands
            ]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Puzzle':
        """Create puzzle from dictionary"""
        islands = [
            Island(d['row'], d['col'], d['required_bridges'])
            for d in data['islands']
        ]
        return cls(data['width'], data['height'], islands)

    def __eq__(self, other):
        if isinstance(other, Puzzle):
            return (self.width, self.height, self.islands) == (other.width, other.height, other.islands)
        return NotImplemented

    def __hash__(self):
        return hash((self.width, self.height, self.islands))

    def __str__(self):
        return self.render_empty()

    def __repr__(self):
        return f"Puzzle({self.width}x{self.height}, {len(self.islands)} islands)"
