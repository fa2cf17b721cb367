"""
Solutions (bridge sets) for Hashiwokakero puzzles and their grid projection.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

import networkx as nx
import numpy as np

from ..config import MAX_BRIDGE_COUNT
from .errors import (
    CrossingError, HashiError, InvalidBridge, InvalidWeight,
    UnknownIsland, UnnormalizedBridge
)
from .puzzle import Island, Puzzle


EMPTY_CELL = "·"


class BridgeGlyph(Enum):
    """Cell symbols used when a bridge is projected onto the grid"""
    SINGLE_HORIZONTAL = "─"
    DOUBLE_HORIZONTAL = "═"
    SINGLE_VERTICAL = "│"
    DOUBLE_VERTICAL = "║"

    @classmethod
    def for_bridge(cls, horizontal: bool, count: int) -> 'BridgeGlyph':
        if count not in (1, 2):
            raise InvalidWeight(f"Bridge count must be 1 or 2, got {count}")
        if horizontal:
            return (cls.SINGLE_HORIZONTAL, cls.DOUBLE_HORIZONTAL)[count - 1]
        return (cls.SINGLE_VERTICAL, cls.DOUBLE_VERTICAL)[count - 1]

    @property
    def horizontal(self) -> bool:
        return self in (BridgeGlyph.SINGLE_HORIZONTAL, BridgeGlyph.DOUBLE_HORIZONTAL)


HORIZONTAL_GLYPHS = frozenset(g.value for g in BridgeGlyph if g.horizontal)
VERTICAL_GLYPHS = frozenset(g.value for g in BridgeGlyph if not g.horizontal)


@dataclass(frozen=True)
class Bridge:
    """Represents a bridge between two islands"""
    island1_id: int
    island2_id: int
    count: int = 1  # 1 or 2 bridges
    # UI decoration only
    emphasis: int = field(default=0, compare=False)

    @classmethod
    def between(cls, a: int, b: int, count: int = 1, emphasis: int = 0) -> 'Bridge':
        """Bridge with normalized endpoints"""
        if a == b:
            raise InvalidBridge(f"Bridge from island {a} to itself")
        return cls(min(a, b), max(a, b), count, emphasis)

    @property
    def pair(self) -> Tuple[int, int]:
        return (self.island1_id, self.island2_id)

    def __repr__(self):
        return f"Bridge({self.island1_id}<->{self.island2_id}, count={self.count})"


@dataclass
class SolutionMatrix:
    """Projection of a puzzle plus solution onto the grid.

    ``index[row, col]`` is the island index or -1; ``glyph[row, col]`` is the
    bridge symbol or an empty string.
    """
    index: np.ndarray
    glyph: np.ndarray

    @property
    def height(self) -> int:
        return self.index.shape[0]

    @property
    def width(self) -> int:
        return self.index.shape[1]

    def island(self, row: int, col: int) -> Optional[int]:
        value = int(self.index[row, col])
        return value if value >= 0 else None

    def is_vertical_bridge(self, row: int, col: int) -> bool:
        return self.glyph[row, col] in VERTICAL_GLYPHS

    def is_horizontal_bridge(self, row: int, col: int) -> bool:
        return self.glyph[row, col] in HORIZONTAL_GLYPHS


def _cells_between(a: Island, b: Island) -> Iterator[Tuple[int, int]]:
    """Cells strictly between two aligned islands"""
    if a.row == b.row:
        for col in range(min(a.col, b.col) + 1, max(a.col, b.col)):
            yield a.row, col
    else:
        for row in range(min(a.row, b.row) + 1, max(a.row, b.row)):
            yield row, a.col


@dataclass
class Solution:
    """An ordered set of bridges for a puzzle.

    A solution may be partial. It is legal when every bridge is well formed
    and the set projects onto the grid without overlaps, and correct when it
    is legal, satisfies every island and connects all islands. The empty
    solution is legal.

    Solutions are treated as values: code that wants to change one works on
    ``clone()``.
    """
    bridges: List[Bridge] = field(default_factory=list)

    def __post_init__(self):
        self.bridges = list(self.bridges)

    def clone(self) -> 'Solution':
        return Solution(self.bridges)

    def find(self, a: int, b: int) -> Optional[int]:
        """Position of the bridge between two islands in ``bridges``"""
        pair = (min(a, b), max(a, b))
        for i, bridge in enumerate(self.bridges):
            if bridge.pair == pair:
                return i
        return None

    def bridge_between(self, a: int, b: int) -> Optional[Bridge]:
        i = self.find(a, b)
        return None if i is None else self.bridges[i]

    def weight_between(self, a: int, b: int) -> int:
        bridge = self.bridge_between(a, b)
        return bridge.count if bridge else 0

    def total_weight(self) -> int:
        return sum(bridge.count for bridge in self.bridges)

    def island_weights(self, puzzle: Puzzle) -> List[int]:
        """Incident bridge weight of every island"""
        weights = [0] * len(puzzle.islands)
        for bridge in self.bridges:
            weights[bridge.island1_id] += bridge.count
            weights[bridge.island2_id] += bridge.count
        return weights

    def validate(self, puzzle: Puzzle) -> Tuple[bool, str]:
        """Check legality; returns (ok, reason of the first violation)"""
        error = self._first_violation(puzzle)
        if error is None:
            return True, ""
        return False, str(error)

    def check(self, puzzle: Puzzle):
        """Raise the first legality violation, if any"""
        error = self._first_violation(puzzle)
        if error is not None:
            raise error

    def is_legal(self, puzzle: Puzzle) -> bool:
        return self._first_violation(puzzle) is None

    def _first_violation(self, puzzle: Puzzle) -> Optional[HashiError]:
        islands = puzzle.islands
        for bridge in self.bridges:
            for island_id in bridge.pair:
                if not 0 <= island_id < len(islands):
                    return UnknownIsland(f"{bridge} references no such island: {island_id}")
            if bridge.island2_id <= bridge.island1_id:
                return UnnormalizedBridge(f"{bridge} is not normalized")
            if bridge.count not in (1, MAX_BRIDGE_COUNT):
                return InvalidWeight(f"{bridge} has invalid count: {bridge.count}")
            a, b = islands[bridge.island1_id], islands[bridge.island2_id]
            if (a.row == b.row) == (a.col == b.col):
                return InvalidBridge(f"{bridge} is not horizontal or vertical")

        # Crossings and duplicates only show up in the projection
        try:
            self.to_matrix(puzzle)
        except HashiError as e:
            return e
        return None

    def to_matrix(self, puzzle: Puzzle) -> SolutionMatrix:
        """
        Project islands and bridges onto the grid.

        Raises:
            UnknownIsland: If a bridge references a missing island
            UnnormalizedBridge: If a bridge does not satisfy island1_id < island2_id
            InvalidBridge: If a bridge is not orthogonal or repeats a pair
            InvalidWeight: If a bridge count is not 1 or 2
            CrossingError: If a bridge runs over an island or another bridge
        """
        index = puzzle.as_matrix()
        glyph = np.full(index.shape, '', dtype='<U1')
        seen = set()

        for bridge in self.bridges:
            for island_id in bridge.pair:
                if not 0 <= island_id < len(puzzle.islands):
                    raise UnknownIsland(f"{bridge} references no such island: {island_id}")
            if bridge.island2_id <= bridge.island1_id:
                raise UnnormalizedBridge(f"{bridge} is not normalized")
            a = puzzle.islands[bridge.island1_id]
            b = puzzle.islands[bridge.island2_id]

            horizontal = a.row == b.row
            vertical = a.col == b.col
            if horizontal and vertical:
                raise InvalidBridge(f"{bridge} starts and ends on the same cell")
            if not horizontal and not vertical:
                raise InvalidBridge(f"{bridge} is diagonal")
            if bridge.pair in seen:
                raise InvalidBridge(f"{bridge} duplicates an existing bridge")
            seen.add(bridge.pair)

            symbol = BridgeGlyph.for_bridge(horizontal, bridge.count).value
            for row, col in _cells_between(a, b):
                if index[row, col] >= 0 or glyph[row, col]:
                    raise CrossingError(row, col)
                glyph[row, col] = symbol

        return SolutionMatrix(index, glyph)

    def render(self, puzzle: Puzzle) -> str:
        """Text grid: island digits, bridge glyphs and placeholder dots"""
        matrix = self.to_matrix(puzzle)
        lines = []
        for row in range(puzzle.height):
            chars = []
            for col in range(puzzle.width):
                island = matrix.island(row, col)
                if island is not None:
                    chars.append(str(puzzle.islands[island].required_bridges))
                elif matrix.glyph[row, col]:
                    chars.append(str(matrix.glyph[row, col]))
                else:
                    chars.append(EMPTY_CELL)
            lines.append("".join(chars) + "\n")
        return "".join(lines)

    def to_graph(self, puzzle: Puzzle) -> nx.Graph:
        """Bridge graph over all islands, edges weighted by bridge count"""
        graph = nx.Graph()
        graph.add_nodes_from(range(len(puzzle.islands)))
        for bridge in self.bridges:
            graph.add_edge(bridge.island1_id, bridge.island2_id, count=bridge.count)
        return graph

    def is_complete(self, puzzle: Puzzle) -> bool:
        """Check if all islands have the required number of bridges"""
        weights = self.island_weights(puzzle)
        return all(w == island.required_bridges for w, island in zip(weights, puzzle.islands))

    def is_connected(self, puzzle: Puzzle) -> bool:
        """Check if all islands are connected (single connected component)"""
        if not puzzle.islands:
            return True
        return nx.is_connected(self.to_graph(puzzle))

    def is_correct(self, puzzle: Puzzle) -> bool:
        return (self.is_legal(puzzle)
                and self.is_complete(puzzle)
                and self.is_connected(puzzle))

    def to_dict(self) -> dict:
        return {
            'bridges': [
                {
                    'island1_id': b.island1_id,
                    'island2_id': b.island2_id,
                    'count': b.count
                }
                for b in self.bridges
            ]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Solution':
        return cls([
            Bridge(d['island1_id'], d['island2_id'], d['count'])
            for d in data.get('bridges', [])
        ])

    def __repr__(self):
        return f"Solution({len(self.bridges)} bridges, weight={self.total_weight()})"
