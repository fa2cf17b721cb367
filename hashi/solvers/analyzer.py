"""
Analyzer for partial solutions.

Reads a puzzle together with a (possibly partial) solution and derives the
per-island and per-component data the tactics work from. Everything here is
rebuilt from scratch on every call.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from ..core.puzzle import Puzzle
from ..core.solution import Solution, SolutionMatrix
from ..core.utils import timer


NeighbourPair = Tuple[int, int]


@dataclass
class IslandMeta:
    """Derived state of one island under the current solution"""
    index: int
    desired_value: int
    current_value: int = 0
    neighbours: List[int] = field(default_factory=list)  # islands in line of sight
    active_neighbours: List[int] = field(default_factory=list)  # could take one more bridge now
    bridges: List[Tuple[int, int]] = field(default_factory=list)  # (to, count)
    dragon: int = -1

    @property
    def remaining_value(self) -> int:
        return self.desired_value - self.current_value

    @property
    def satisfied(self) -> bool:
        return self.current_value == self.desired_value

    def weight_to(self, other: int) -> int:
        for to, count in self.bridges:
            if to == other:
                return count
        return 0

    def __repr__(self):
        return (f"IslandMeta({self.index}, val={self.desired_value}, "
                f"curr={self.current_value}, active={self.active_neighbours})")


@dataclass
class DragonMeta:
    """A connected component of islands joined by existing bridges"""
    id: int
    members: List[int]
    heads: int  # members still missing bridges

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def closed(self) -> bool:
        return self.heads == 0


@dataclass
class SolutionContext:
    metas: List[IslandMeta]
    dragons: List[DragonMeta]

    def dragon_of(self, index: int) -> DragonMeta:
        return self.dragons[self.metas[index].dragon]

    def stranded(self) -> List[int]:
        """Unsatisfied islands that can no longer receive any bridge"""
        return [m.index for m in self.metas
                if m.remaining_value > 0 and not m.active_neighbours]

    @property
    def open_dragons(self) -> List[DragonMeta]:
        return [d for d in self.dragons if not d.closed]


@timer
def analyze(puzzle: Puzzle, solution: Solution) -> SolutionContext:
    """
    Collect island metadata and dragons for a solution.

    Raises:
        HashiError: If the solution cannot be projected onto the grid
    """
    matrix = solution.to_matrix(puzzle)

    metas = [
        IslandMeta(index=index, desired_value=island.required_bridges)
        for index, island in enumerate(puzzle.islands)
    ]

    _save_bridges(solution, metas)
    _save_neighbours(determine_neighbours(matrix), metas)
    dragons = _find_dragons(metas)

    return SolutionContext(metas=metas, dragons=dragons)


def determine_neighbours(matrix: SolutionMatrix) -> List[NeighbourPair]:
    """
    Pairs of islands in direct line of sight.

    Rows are scanned left to right and columns top to bottom. A vertical
    bridge cuts a row and a horizontal bridge cuts a column, so the pairs
    change as the solution grows.
    """
    pairs: List[NeighbourPair] = []

    for row in range(matrix.height):
        prev = None
        for col in range(matrix.width):
            current = matrix.island(row, col)
            if current is not None:
                if prev is not None:
                    pairs.append((prev, current))
                prev = current
            elif matrix.is_vertical_bridge(row, col):
                prev = None

    for col in range(matrix.width):
        prev = None
        for row in range(matrix.height):
            current = matrix.island(row, col)
            if current is not None:
                if prev is not None:
                    pairs.append((prev, current))
                prev = current
            elif matrix.is_horizontal_bridge(row, col):
                prev = None

    return pairs


def _save_bridges(solution: Solution, metas: List[IslandMeta]):
    for bridge in solution.bridges:
        a, b = metas[bridge.island1_id], metas[bridge.island2_id]
        a.bridges.append((b.index, bridge.count))
        a.current_value += bridge.count
        b.bridges.append((a.index, bridge.count))
        b.current_value += bridge.count


def _save_neighbours(pairs: List[NeighbourPair], metas: List[IslandMeta]):
    for a, b in pairs:
        metas[a].neighbours.append(b)
        metas[b].neighbours.append(a)

    for meta in metas:
        for other in meta.neighbours:
            if metas[other].satisfied or meta.weight_to(other) >= 2:
                continue
            meta.active_neighbours.append(other)


def _find_dragons(metas: List[IslandMeta]) -> List[DragonMeta]:
    """Connected components over existing bridges (iterative DFS)"""
    dragons: List[DragonMeta] = []

    for start in metas:
        if start.dragon >= 0:
            continue
        dragon_id = len(dragons)
        members = []
        stack = [start.index]
        start.dragon = dragon_id

        while stack:
            current = metas[stack.pop()]
            members.append(current.index)
            for to, _ in current.bridges:
                if metas[to].dragon < 0:
                    metas[to].dragon = dragon_id
                    stack.append(to)

        members.sort()
        heads = sum(1 for i in members if not metas[i].satisfied)
        dragons.append(DragonMeta(id=dragon_id, members=members, heads=heads))

    return dragons
